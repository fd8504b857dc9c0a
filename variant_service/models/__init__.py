"""
Variant models package.

Exports all variant-related Pydantic models.
"""

from .variant import (
    VariantGroupKind,
    VariantOption,
    VariantGroup,
    AddGroupRequest,
    AddOptionRequest,
    OptionSelection,
    VariantCombination,
    VariantsSnapshot,
    CombinationPreview,
    OptionDisplay,
)

__all__ = [
    "VariantGroupKind",
    "VariantOption",
    "VariantGroup",
    "AddGroupRequest",
    "AddOptionRequest",
    "OptionSelection",
    "VariantCombination",
    "VariantsSnapshot",
    "CombinationPreview",
    "OptionDisplay",
]
