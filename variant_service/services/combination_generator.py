"""
Combination Generator

Builds the cartesian product of the populated variant groups, right to left:
the last group seeds the partial combinations and every preceding group is
crossed in front of them. The first group's options therefore vary slowest
and the last group's options vary fastest, like nested loops in group order.
"""

from decimal import Decimal, InvalidOperation
from typing import List, NamedTuple, Sequence, Tuple, Union

from variant_service.models.variant import (
    OptionSelection,
    VariantCombination,
    VariantGroup,
    VariantOption,
)

Number = Union[Decimal, int, float, str]

DEFAULT_SKU_SEPARATOR = "-"
DEFAULT_NAME_SEPARATOR = " - "


class _Partial(NamedTuple):
    selection: Tuple[OptionSelection, ...]
    price_sum: Decimal
    stock_min: int
    sku: str
    name: str


def to_decimal(value: Number) -> Decimal:
    """Convert a price to Decimal; floats go through str to keep their printed value."""
    if isinstance(value, float):
        value = str(value)
    try:
        result = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")
    # Combinations only carry finite prices
    return result if result.is_finite() else Decimal("0")


def _option_price(option: VariantOption) -> Decimal:
    modifier = getattr(option, "price_modifier", None)
    return to_decimal(modifier) if modifier is not None else Decimal("0")


def _option_stock(option: VariantOption) -> int:
    return getattr(option, "stock", None) or 0


def _option_sku(option: VariantOption) -> str:
    # Malformed options degrade to an empty SKU segment
    return getattr(option, "sku", None) or ""


def _option_name(option: VariantOption) -> str:
    return getattr(option, "name", None) or ""


def populated_groups(groups: Sequence[VariantGroup]) -> List[VariantGroup]:
    """Groups that have at least one option; empty groups are skipped entirely."""
    return [group for group in groups if group.options]


def count_combinations(groups: Sequence[VariantGroup]) -> int:
    """Number of combinations ``generate_combinations`` would return."""
    populated = populated_groups(groups)
    if not populated:
        return 0
    count = 1
    for group in populated:
        count *= len(group.options)
    return count


def generate_combinations(
    groups: Sequence[VariantGroup],
    base_price: Number,
    sku_separator: str = DEFAULT_SKU_SEPARATOR,
    name_separator: str = DEFAULT_NAME_SEPARATOR,
) -> List[VariantCombination]:
    """
    Derive every sellable combination of the given groups.

    Args:
        groups: Variant groups in display order
        base_price: Product price before option modifiers
        sku_separator: Joins option SKUs into the combination SKU
        name_separator: Joins option names into the display name

    Returns:
        One combination per choice of a single option from each populated
        group, first group varying slowest. Empty if no group has options.
    """
    populated = populated_groups(groups)
    if not populated:
        return []

    last = populated[-1]
    partials = [
        _Partial(
            selection=(OptionSelection(group_id=last.id, option_id=option.id),),
            price_sum=_option_price(option),
            stock_min=_option_stock(option),
            sku=_option_sku(option),
            name=_option_name(option),
        )
        for option in last.options
    ]

    for group in reversed(populated[:-1]):
        partials = [
            _Partial(
                selection=(OptionSelection(group_id=group.id, option_id=option.id),) + partial.selection,
                price_sum=_option_price(option) + partial.price_sum,
                stock_min=min(_option_stock(option), partial.stock_min),
                sku=f"{_option_sku(option)}{sku_separator}{partial.sku}",
                name=f"{_option_name(option)}{name_separator}{partial.name}",
            )
            for option in group.options
            for partial in partials
        ]

    base = to_decimal(base_price)
    return [
        VariantCombination(
            selection=partial.selection,
            final_price=base + partial.price_sum,
            total_stock=partial.stock_min,
            combination_sku=partial.sku,
            display_name=partial.name,
        )
        for partial in partials
    ]
