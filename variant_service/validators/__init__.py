"""
Validators package
"""

from .variant_validators import (
    VariantGroupValidatorMixin,
    VariantOptionValidatorMixin,
    build_validated,
    parse_base_price,
)

__all__ = [
    "VariantGroupValidatorMixin",
    "VariantOptionValidatorMixin",
    "build_validated",
    "parse_base_price",
]
