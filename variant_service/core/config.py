"""
Core configuration and settings for the Variant Service
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service information
    service_name: str = Field(default="variant-service")
    service_version: str = Field(default="1.0.0")
    environment: str = Field(default="development")

    # Logging configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="console or json")
    log_to_file: bool = Field(default=False)
    log_to_console: bool = Field(default=True)
    log_file_path: str = Field(default="logs/variant-service.log")

    # Combination generation
    sku_separator: str = Field(default="-", min_length=1)
    display_name_separator: str = Field(default=" - ")
    combination_preview_limit: int = Field(default=10, ge=1)
    combination_warning_threshold: int = Field(
        default=500,
        ge=1,
        description="Log a warning when a regeneration yields more combinations than this",
    )

    # Destructive actions
    require_delete_confirmation: bool = Field(default=True)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Global config instance
config = Config()
