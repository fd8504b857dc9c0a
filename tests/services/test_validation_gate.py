"""
Unit tests for the Validation/Confirmation Gate
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from variant_service.core.errors import ConfirmationRequired, ValidationError
from variant_service.models.variant import VariantGroup, VariantGroupKind, VariantOption
from variant_service.services.validation_gate import VariantMutationGate


class TestValidateGroup:
    """Test group validation"""

    def test_valid_group(self):
        """Test a valid group request"""
        request = VariantMutationGate().validate_group(" Size ", "size", False)
        assert request.name == "Size"
        assert request.kind == VariantGroupKind.SIZE
        assert request.is_required is False

    def test_empty_name(self):
        """Test empty names are rejected with a corrective message"""
        with pytest.raises(ValidationError) as exc_info:
            VariantMutationGate().validate_group("   ")

        assert exc_info.value.message == "Group name is required"


class TestValidateOption:
    """Test option validation"""

    def test_valid_option(self):
        """Test a valid option request"""
        request = VariantMutationGate().validate_option("Blue", "blue", "1.00", 5, "#2563EB")
        assert request.price_modifier == Decimal("1.00")
        assert request.value == "Blue"

    @pytest.mark.parametrize("name,sku,message", [
        ("", "m", "Option name is required"),
        ("M", "", "Option SKU is required"),
    ])
    def test_required_fields(self, name, sku, message):
        """Test name and SKU are required"""
        with pytest.raises(ValidationError) as exc_info:
            VariantMutationGate().validate_option(name, sku)

        assert exc_info.value.message == message


class TestValidateLoadedGroups:
    """Test validation of persisted groups"""

    def test_valid_groups_normalized(self):
        """Test names are stripped and blank values default to the name"""
        group = VariantGroup(
            id="g",
            name=" Size ",
            options=[VariantOption(id="o", name="M", value="", sku=" m ")],
        )

        validated = VariantMutationGate().validate_loaded_groups([group])

        assert validated[0].id == "g"
        assert validated[0].name == "Size"
        assert validated[0].options[0].id == "o"
        assert validated[0].options[0].value == "M"
        assert validated[0].options[0].sku == "m"

    def test_invalid_option_reports_group(self):
        """Test the failing group is identified"""
        groups = [
            VariantGroup(id="ok", name="Size"),
            VariantGroup(id="bad", name="Color", options=[VariantOption(id="o", name="Red", sku="")]),
        ]

        with pytest.raises(ValidationError) as exc_info:
            VariantMutationGate().validate_loaded_groups(groups)

        assert exc_info.value.details["group_index"] == 1
        assert exc_info.value.details["group_id"] == "bad"


class TestValidateBasePrice:
    """Test base price validation"""

    def test_valid_price(self):
        """Test a numeric string is accepted"""
        assert VariantMutationGate().validate_base_price("12.50") == Decimal("12.50")

    def test_nan_rejected(self):
        """Test NaN never reaches the store"""
        with pytest.raises(ValidationError):
            VariantMutationGate().validate_base_price(float("nan"))


class TestConfirmDeletion:
    """Test confirmation policy"""

    def test_explicit_confirmation(self):
        """Test confirmed=True proceeds without asking"""
        prompt = Mock(return_value=False)
        VariantMutationGate(confirm=prompt).confirm_deletion("Delete?", confirmed=True)
        prompt.assert_not_called()

    def test_explicit_refusal(self):
        """Test confirmed=False is not overridden by the prompt"""
        prompt = Mock(return_value=True)
        with pytest.raises(ConfirmationRequired):
            VariantMutationGate(confirm=prompt).confirm_deletion("Delete?", confirmed=False)
        prompt.assert_not_called()

    def test_prompt_accepts(self):
        """Test the prompt is asked with the message"""
        prompt = Mock(return_value=True)
        VariantMutationGate(confirm=prompt).confirm_deletion("Delete group?")
        prompt.assert_called_once_with("Delete group?")

    def test_prompt_declines(self):
        """Test a declined prompt blocks the action"""
        with pytest.raises(ConfirmationRequired) as exc_info:
            VariantMutationGate(confirm=lambda message: False).confirm_deletion("Delete group?")

        assert exc_info.value.message == "Delete group?"

    def test_no_prompt_no_confirmation(self):
        """Test absence of any confirmation blocks the action"""
        with pytest.raises(ConfirmationRequired):
            VariantMutationGate().confirm_deletion("Delete?")

    def test_confirmation_disabled(self):
        """Test deletes proceed when confirmation is not required"""
        VariantMutationGate(require_confirmation=False).confirm_deletion("Delete?")
