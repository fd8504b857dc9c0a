"""
Core utilities package.

- config: environment-driven settings
- logger: structured logging with correlation IDs
- errors: exception classes raised at the mutation boundary
"""

from .config import Config, config
from .errors import ErrorResponse, ValidationError, ConfirmationRequired
from .logger import logger, StructuredLogger

__all__ = [
    "Config",
    "config",
    "ErrorResponse",
    "ValidationError",
    "ConfirmationRequired",
    "logger",
    "StructuredLogger",
]
