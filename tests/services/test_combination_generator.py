"""
Unit tests for the Combination Generator
"""

from decimal import Decimal

import pytest

from variant_service.models.variant import VariantGroup, VariantOption
from variant_service.services.combination_generator import (
    count_combinations,
    generate_combinations,
    to_decimal,
)


def selected_ids(combination):
    return [(s.group_id, s.option_id) for s in combination.selection]


class TestGenerateCombinations:
    """Test generate_combinations"""

    def test_size_and_color_example(self, size_group, color_group):
        """Test the Size x Color example yields six combinations"""
        combinations = generate_combinations([size_group, color_group], Decimal("10.00"))

        assert len(combinations) == 6
        large_blue = next(
            c for c in combinations
            if selected_ids(c) == [("size", "l"), ("color", "blue")]
        )
        assert large_blue.final_price == Decimal("13.00")
        assert large_blue.total_stock == 5
        assert large_blue.combination_sku == "l-blue"
        assert large_blue.display_name == "L - Blue"

    def test_empty_group_skipped(self, size_group, color_group, finish_group):
        """Test a group without options neither blocks nor multiplies"""
        combinations = generate_combinations(
            [size_group, finish_group, color_group], Decimal("10.00")
        )

        assert len(combinations) == 6
        assert not any(c.references_group("finish") for c in combinations)

    def test_no_groups(self):
        """Test no groups yields nothing"""
        assert generate_combinations([], Decimal("10")) == []

    def test_only_empty_groups(self, finish_group):
        """Test groups without options yield nothing"""
        assert generate_combinations([finish_group, VariantGroup(id="g2", name="Other")], 10) == []

    def test_single_group(self, size_group):
        """Test one group yields one combination per option"""
        combinations = generate_combinations([size_group], Decimal("10.00"))

        assert [c.combination_sku for c in combinations] == ["s", "m", "l"]
        assert [c.final_price for c in combinations] == [
            Decimal("10.00"), Decimal("10.00"), Decimal("12.00")
        ]
        assert [c.total_stock for c in combinations] == [20, 15, 10]

    def test_first_group_varies_slowest(self, size_group, color_group):
        """Test ordering matches nested loops in group order"""
        combinations = generate_combinations([size_group, color_group], 0)

        assert [c.combination_sku for c in combinations] == [
            "s-red", "s-blue", "m-red", "m-blue", "l-red", "l-blue",
        ]

    def test_three_groups(self, size_group, color_group, make_option):
        """Test SKU, price and stock with more than two groups"""
        material = VariantGroup(
            id="material",
            name="Material",
            options=[
                make_option("cotton", "cot", "0.50", 8),
                make_option("silk", "slk", "4.25", 3),
            ],
        )
        combinations = generate_combinations(
            [size_group, color_group, material], Decimal("10.00")
        )

        assert len(combinations) == 12
        assert combinations[0].combination_sku == "s-red-cot"
        assert combinations[-1].combination_sku == "l-blue-slk"
        assert combinations[-1].final_price == Decimal("17.25")
        assert combinations[-1].total_stock == 3
        assert selected_ids(combinations[-1]) == [
            ("size", "l"), ("color", "blue"), ("material", "silk")
        ]

    def test_properties_hold_for_every_combination(self, size_group, color_group):
        """Test price additivity, stock bottleneck and SKU composition"""
        groups = [size_group, color_group]
        options = {
            (group.id, option.id): option for group in groups for option in group.options
        }
        base = Decimal("19.99")

        for combination in generate_combinations(groups, base):
            chosen = [options[pair] for pair in selected_ids(combination)]
            assert combination.final_price == base + sum(o.price_modifier for o in chosen)
            assert combination.total_stock == min(o.stock for o in chosen)
            assert combination.combination_sku == "-".join(o.sku for o in chosen)

    def test_cardinality_is_product_of_option_counts(self, make_option):
        """Test count equals the product of option counts"""
        groups = [
            VariantGroup(
                id=f"g{g}",
                name=f"Group {g}",
                options=[make_option(f"g{g}o{o}", f"g{g}o{o}") for o in range(n)],
            )
            for g, n in enumerate([3, 0, 4, 2, 1])
        ]

        combinations = generate_combinations(groups, 0)

        assert len(combinations) == 3 * 4 * 2 * 1
        assert count_combinations(groups) == len(combinations)
        assert len({c.key for c in combinations}) == len(combinations)

    def test_negative_modifier(self, make_option):
        """Test discounts reduce the final price"""
        group = VariantGroup(id="g", name="Edition", options=[make_option("o", "basic", "-2.50", 4)])
        assert generate_combinations([group], Decimal("10"))[0].final_price == Decimal("7.50")

    def test_idempotent(self, size_group, color_group):
        """Test identical input yields identical output"""
        first = generate_combinations([size_group, color_group], Decimal("10.00"))
        second = generate_combinations([size_group, color_group], Decimal("10.00"))
        assert first == second

    def test_custom_separators(self, size_group, color_group):
        """Test separators are configurable"""
        combinations = generate_combinations(
            [size_group, color_group], 0, sku_separator="_", name_separator="/"
        )
        assert combinations[0].combination_sku == "s_red"
        assert combinations[0].display_name == "S/Red"

    def test_missing_sku_degrades_to_empty_segment(self, color_group):
        """Test a malformed option does not raise"""
        broken = VariantOption.model_construct(
            id="x", name="X", value="X", color_hex=None,
            price_modifier=None, stock=None, sku=None,
        )
        group = VariantGroup.model_construct(
            id="broken", name="Broken", kind="custom", is_required=True, options=[broken]
        )

        combinations = generate_combinations([group, color_group], Decimal("10"))

        assert [c.combination_sku for c in combinations] == ["-red", "-blue"]
        assert combinations[1].final_price == Decimal("11")
        assert combinations[1].total_stock == 0


class TestCountCombinations:
    """Test count_combinations"""

    def test_empty(self, finish_group):
        """Test no populated groups counts zero"""
        assert count_combinations([]) == 0
        assert count_combinations([finish_group]) == 0

    def test_example(self, size_group, color_group, finish_group):
        """Test the Size x Color example"""
        assert count_combinations([size_group, finish_group, color_group]) == 6


class TestToDecimal:
    """Test price conversion"""

    @pytest.mark.parametrize("value,expected", [
        (Decimal("1.10"), Decimal("1.10")),
        (10, Decimal("10")),
        (0.1, Decimal("0.1")),
        ("2.50", Decimal("2.50")),
    ])
    def test_conversion(self, value, expected):
        """Test supported input types"""
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", ["abc", None, "NaN", float("nan"), "Infinity"])
    def test_unusable_values_are_zero(self, value):
        """Test values without a finite price fall back to zero"""
        assert to_decimal(value) == Decimal("0")

    def test_nan_modifier_keeps_generation_total(self, size_group, make_option):
        """Test a NaN price modifier does not stop generation"""
        color = VariantGroup(id="color", name="Color", options=[
            make_option("red", "red").model_copy(update={"price_modifier": Decimal("NaN")}),
        ])

        combinations = generate_combinations([size_group, color], Decimal("10"))

        assert len(combinations) == 3
        assert all(c.final_price.is_finite() for c in combinations)
