"""
Validation/Confirmation Gate

Every mutation passes through here before it reaches the stores: add requests
are validated, destructive deletes need an affirmative confirmation.
"""

from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Union

from variant_service.core.errors import ConfirmationRequired, ValidationError
from variant_service.models.variant import (
    AddGroupRequest,
    AddOptionRequest,
    VariantGroup,
    VariantGroupKind,
)
from variant_service.validators.variant_validators import build_validated, parse_base_price

ConfirmPrompt = Callable[[str], bool]


class VariantMutationGate:
    """
    Args:
        confirm: Prompt asked before destructive actions; returns True to proceed
        require_confirmation: When False, deletes proceed without asking
    """

    def __init__(self, confirm: Optional[ConfirmPrompt] = None, require_confirmation: bool = True):
        self.confirm = confirm
        self.require_confirmation = require_confirmation

    def validate_group(
        self,
        name: str,
        kind: Union[VariantGroupKind, str] = VariantGroupKind.CUSTOM,
        is_required: bool = True,
    ) -> AddGroupRequest:
        return build_validated(AddGroupRequest, name=name, kind=kind, is_required=is_required)

    def validate_base_price(self, base_price: Union[Decimal, int, float, str]) -> Decimal:
        return parse_base_price(base_price)

    def validate_option(
        self,
        name: str,
        sku: str,
        price_modifier: Union[Decimal, int, float, str] = Decimal("0"),
        stock: int = 0,
        color_hex: Optional[str] = None,
        value: Optional[str] = None,
    ) -> AddOptionRequest:
        return build_validated(
            AddOptionRequest,
            name=name,
            sku=sku,
            value=value,
            color_hex=color_hex,
            price_modifier=price_modifier,
            stock=stock,
        )

    def validate_loaded_groups(self, groups: Iterable[VariantGroup]) -> List[VariantGroup]:
        """Apply the add-time rules to persisted groups before they are loaded."""
        validated = []
        for group_index, group in enumerate(groups):
            try:
                request = self.validate_group(group.name, group.kind, group.is_required)
                options = []
                for option in group.options:
                    option_request = self.validate_option(
                        option.name,
                        option.sku,
                        option.price_modifier,
                        option.stock,
                        option.color_hex,
                        option.value,
                    )
                    options.append(option.model_copy(update=option_request.model_dump()))
            except ValidationError as e:
                e.details["group_index"] = group_index
                e.details["group_id"] = group.id
                raise
            validated.append(group.model_copy(update={"name": request.name, "options": options}))
        return validated

    def confirm_deletion(self, message: str, confirmed: Optional[bool] = None) -> None:
        """
        Require an affirmative answer before a destructive action.

        An explicit ``confirmed`` wins over the prompt; with neither, the
        action is not confirmed.

        Raises:
            ConfirmationRequired: If the action was not confirmed
        """
        if not self.require_confirmation:
            return
        if confirmed is None and self.confirm is not None:
            confirmed = bool(self.confirm(message))
        if not confirmed:
            raise ConfirmationRequired(message)
