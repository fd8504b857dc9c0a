"""
Quick-entry presets for size and color groups.

Presets only pre-fill option fields; the result still goes through the
regular option validation.
"""

from decimal import Decimal
from typing import Dict, List, Optional, Union

from variant_service.core.errors import ValidationError
from variant_service.models.variant import VariantGroupKind

SIZE_PRESETS = ("XS", "S", "M", "L", "XL", "XXL", "2XL", "3XL")

COLOR_PRESETS: Dict[str, str] = {
    "Black": "#000000",
    "White": "#FFFFFF",
    "Red": "#DC2626",
    "Blue": "#2563EB",
    "Green": "#16A34A",
    "Yellow": "#EAB308",
    "Pink": "#EC4899",
    "Purple": "#9333EA",
    "Orange": "#EA580C",
    "Gray": "#6B7280",
}


def presets_for(kind: VariantGroupKind) -> List[str]:
    """Preset names offered for a group kind; custom groups get none."""
    if kind == VariantGroupKind.SIZE:
        return list(SIZE_PRESETS)
    if kind == VariantGroupKind.COLOR:
        return list(COLOR_PRESETS)
    return []


def _match(preset: str, choices) -> Optional[str]:
    wanted = (preset or "").strip().lower()
    for choice in choices:
        if choice.lower() == wanted:
            return choice
    return None


def build_preset_option(
    kind: VariantGroupKind,
    preset: str,
    price_modifier: Union[Decimal, int, str] = Decimal("0"),
    stock: int = 0,
) -> Dict:
    """
    Option fields for a preset.

    Sizes fill name and value with the size and use it lowercased as SKU.
    Colors fill name and value with the color name, set the swatch and use
    the lowercased name as SKU.

    Raises:
        ValidationError: If the kind has no presets or the preset is unknown
    """
    if kind == VariantGroupKind.SIZE:
        size = _match(preset, SIZE_PRESETS)
        if size is not None:
            return {
                "name": size,
                "value": size,
                "sku": size.lower(),
                "price_modifier": price_modifier,
                "stock": stock,
            }
    elif kind == VariantGroupKind.COLOR:
        color = _match(preset, COLOR_PRESETS)
        if color is not None:
            return {
                "name": color,
                "value": color,
                "color_hex": COLOR_PRESETS[color],
                "sku": color.lower(),
                "price_modifier": price_modifier,
                "stock": stock,
            }
    else:
        raise ValidationError(
            f"Groups of kind '{kind.value}' have no presets",
            errors=[{"field": "preset", "message": "No presets for this group kind"}],
        )

    raise ValidationError(
        f"Unknown {kind.value} preset '{preset}'",
        errors=[{"field": "preset", "message": f"Choose one of: {', '.join(presets_for(kind))}"}],
    )
