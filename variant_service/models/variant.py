"""
Variant Configuration Models

Variant groups (e.g. Size, Color) hold ordered options, each carrying a price
modifier, a stock count and a SKU fragment. Combinations are derived from the
groups and never edited directly.
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from variant_service.validators.variant_validators import (
    VariantGroupValidatorMixin,
    VariantOptionValidatorMixin,
)


class VariantGroupKind(str, Enum):
    """Descriptive group kind; selects the quick-entry presets offered."""
    SIZE = "size"
    COLOR = "color"
    CUSTOM = "custom"


class VariantOption(BaseModel):
    """One concrete value within a group (e.g. 'M' in Size)."""
    id: str = Field(..., description="Option ID, unique within its group")
    name: str = Field(..., description="Display name")
    value: str = Field("", description="Free-form value, usually equal to name")
    color_hex: Optional[str] = Field(None, description="Swatch color for color options")
    price_modifier: Decimal = Field(Decimal("0"), description="Added to the base price when selected")
    stock: int = Field(0, ge=0, description="Units available for this option alone")
    sku: str = Field(..., description="SKU fragment used to build combination SKUs")


class VariantGroup(BaseModel):
    """A named axis of customization for a product."""
    id: str = Field(..., description="Group ID")
    name: str = Field(..., description="Display name")
    kind: VariantGroupKind = Field(VariantGroupKind.CUSTOM)
    is_required: bool = Field(True, description="Descriptive only, not enforced by generation")
    options: List[VariantOption] = Field(default_factory=list)

    def get_option(self, option_id: str) -> Optional[VariantOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


class AddGroupRequest(VariantGroupValidatorMixin, BaseModel):
    """Request to add a variant group."""
    name: str
    kind: VariantGroupKind = VariantGroupKind.CUSTOM
    is_required: bool = True


class AddOptionRequest(VariantOptionValidatorMixin, BaseModel):
    """Request to add an option to a group."""
    name: str
    sku: str
    value: Optional[str] = None
    color_hex: Optional[str] = None
    price_modifier: Decimal = Decimal("0")
    stock: int = Field(0, ge=0)


class OptionSelection(BaseModel):
    """The option chosen for one group inside a combination."""
    model_config = ConfigDict(frozen=True)

    group_id: str
    option_id: str


class VariantCombination(BaseModel):
    """A fully specified, sellable variant: one option per populated group."""
    model_config = ConfigDict(frozen=True)

    selection: Tuple[OptionSelection, ...] = Field(..., description="Chosen options in group order")
    final_price: Decimal = Field(..., description="Base price plus every selected price modifier")
    total_stock: int = Field(..., description="Stock of the scarcest selected option")
    combination_sku: str = Field(..., description="Selected option SKUs joined in group order")
    display_name: str = Field("", description="Selected option names, e.g. 'XL - White'")

    @computed_field
    @property
    def key(self) -> str:
        """Order-independent identity of the selection."""
        return "|".join(sorted(f"{s.group_id}:{s.option_id}" for s in self.selection))

    def references_group(self, group_id: str) -> bool:
        return any(s.group_id == group_id for s in self.selection)

    def references_option(self, option_id: str) -> bool:
        return any(s.option_id == option_id for s in self.selection)


class VariantsSnapshot(BaseModel):
    """Groups and their derived combinations, as handed to listeners."""
    base_price: Decimal
    groups: List[VariantGroup] = Field(default_factory=list)
    combinations: List[VariantCombination] = Field(default_factory=list)


class CombinationPreview(BaseModel):
    """The first combinations of a list, for display."""
    combinations: List[VariantCombination] = Field(default_factory=list)
    total_count: int = 0
    limit: int

    @computed_field
    @property
    def hidden_count(self) -> int:
        return max(self.total_count - len(self.combinations), 0)


class OptionDisplay(BaseModel):
    """Names used to render a selected option."""
    group_name: str
    option_name: str
    color_hex: Optional[str] = None
