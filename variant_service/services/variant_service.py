"""
Variant Configuration Service

Entry point for editing a product's variant groups and options. Each mutation
runs gate -> store -> regenerate -> notify, synchronously, before returning.
The service is single-writer: callers that share an instance across threads
must serialize mutations.

Logging uses the shared ``logger`` from ``variant_service.core.logger``; the
service settings do not reconfigure it. Call ``logger.configure(settings)``
to apply them process-wide.
"""

from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Union

from variant_service.core.config import Config, config
from variant_service.core.errors import ConfirmationRequired, ValidationError
from variant_service.core.logger import logger
from variant_service.messaging.variant_change_notifier import (
    ChangeCallback,
    VariantChangeListener,
    VariantChangeNotifier,
)
from variant_service.models.variant import (
    CombinationPreview,
    OptionDisplay,
    VariantCombination,
    VariantGroup,
    VariantGroupKind,
    VariantOption,
    VariantsSnapshot,
)
from variant_service.repositories.variant_group_repository import (
    VariantGroupRepository,
    default_id_factory,
)
from variant_service.services.combination_generator import Number
from variant_service.services.preset_service import build_preset_option
from variant_service.services.validation_gate import ConfirmPrompt, VariantMutationGate


class VariantConfigurationService:
    """Service for managing a product's variant groups and their combinations."""

    def __init__(
        self,
        base_price: Number,
        confirm: Optional[ConfirmPrompt] = None,
        listeners: Optional[Sequence[Union[VariantChangeListener, ChangeCallback]]] = None,
        settings: Optional[Config] = None,
        id_factory: Callable[[], str] = default_id_factory,
    ):
        self.settings = settings or config
        self.gate = VariantMutationGate(
            confirm=confirm,
            require_confirmation=self.settings.require_delete_confirmation,
        )
        self.base_price = self.gate.validate_base_price(base_price)
        self.repository = VariantGroupRepository(id_factory)
        self.notifier = VariantChangeNotifier(listeners, self.settings)
        self._snapshot = VariantsSnapshot(base_price=self.base_price)

    # ===== Listeners =====

    def subscribe(self, listener: Union[VariantChangeListener, ChangeCallback]) -> VariantChangeListener:
        return self.notifier.subscribe(listener)

    def unsubscribe(self, listener: Union[VariantChangeListener, ChangeCallback]) -> bool:
        return self.notifier.unsubscribe(listener)

    # ===== Groups =====

    def add_group(
        self,
        name: str,
        kind: Union[VariantGroupKind, str] = VariantGroupKind.CUSTOM,
        is_required: bool = True,
        correlation_id: Optional[str] = None,
    ) -> VariantGroup:
        """
        Add an empty variant group at the end of the group list.

        Raises:
            ValidationError: If the name is empty
        """
        try:
            request = self.gate.validate_group(name, kind, is_required)
        except ValidationError as e:
            self._log_rejected("add_group", e, correlation_id)
            raise

        group = self.repository.add_group(request)

        logger.info(
            f"Variant group created: {group.name}",
            correlation_id=correlation_id,
            metadata={"group_id": group.id, "kind": group.kind.value, "is_required": group.is_required},
        )

        self._publish("add_group", correlation_id)
        return group

    def delete_group(
        self,
        group_id: str,
        confirmed: Optional[bool] = None,
        correlation_id: Optional[str] = None,
    ) -> bool:
        """
        Delete a group and all its options.

        Returns:
            True if the group was deleted; False for an unknown ID or when the
            deletion was not confirmed
        """
        group = self.repository.get_group(group_id)
        if group is None:
            logger.debug(
                f"Delete ignored, unknown group {group_id}",
                correlation_id=correlation_id,
            )
            return False

        if not self._confirmed(
            f"Delete variant group '{group.name}' and its {len(group.options)} options? "
            "This cannot be undone.",
            confirmed,
            correlation_id,
        ):
            return False

        self.repository.delete_group(group_id)

        logger.info(
            f"Variant group deleted: {group.name}",
            correlation_id=correlation_id,
            metadata={"group_id": group_id, "options_removed": len(group.options)},
        )

        self._publish("delete_group", correlation_id)
        return True

    # ===== Options =====

    def add_option(
        self,
        group_id: str,
        name: str,
        sku: str,
        price_modifier: Union[Decimal, int, float, str] = Decimal("0"),
        stock: int = 0,
        color_hex: Optional[str] = None,
        value: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> VariantOption:
        """
        Append an option to a group.

        Raises:
            ValidationError: If name or SKU is empty, stock is negative, or the
                group does not exist
        """
        try:
            request = self.gate.validate_option(name, sku, price_modifier, stock, color_hex, value)
            option = self.repository.add_option(group_id, request)
        except ValidationError as e:
            self._log_rejected("add_option", e, correlation_id, {"group_id": group_id})
            raise

        logger.info(
            f"Variant option created: {option.name}",
            correlation_id=correlation_id,
            metadata={
                "group_id": group_id,
                "option_id": option.id,
                "sku": option.sku,
                "price_modifier": str(option.price_modifier),
                "stock": option.stock,
            },
        )

        self._publish("add_option", correlation_id)
        return option

    def add_preset_option(
        self,
        group_id: str,
        preset: str,
        price_modifier: Union[Decimal, int, str] = Decimal("0"),
        stock: int = 0,
        correlation_id: Optional[str] = None,
    ) -> VariantOption:
        """
        Add a predefined size or color to a group of that kind.

        Raises:
            ValidationError: If the group is unknown, has no presets or the
                preset does not exist
        """
        group = self.repository.get_group(group_id)
        if group is None:
            error = ValidationError(
                f"Variant group {group_id} not found",
                errors=[{"field": "group_id", "message": "Unknown variant group"}],
            )
            self._log_rejected("add_preset_option", error, correlation_id, {"group_id": group_id})
            raise error

        try:
            fields = build_preset_option(group.kind, preset, price_modifier, stock)
        except ValidationError as e:
            self._log_rejected("add_preset_option", e, correlation_id, {"group_id": group_id})
            raise

        return self.add_option(group_id, correlation_id=correlation_id, **fields)

    def delete_option(
        self,
        group_id: str,
        option_id: str,
        confirmed: Optional[bool] = None,
        correlation_id: Optional[str] = None,
    ) -> bool:
        """
        Delete an option from its group.

        Returns:
            True if the option was deleted; False for an unknown ID or when the
            deletion was not confirmed
        """
        option = self.repository.get_option(group_id, option_id)
        if option is None:
            logger.debug(
                f"Delete ignored, unknown option {option_id}",
                correlation_id=correlation_id,
                metadata={"group_id": group_id},
            )
            return False

        if not self._confirmed(
            f"Delete option '{option.name}'? This cannot be undone.",
            confirmed,
            correlation_id,
        ):
            return False

        self.repository.delete_option(group_id, option_id)

        logger.info(
            f"Variant option deleted: {option.name}",
            correlation_id=correlation_id,
            metadata={"group_id": group_id, "option_id": option_id, "sku": option.sku},
        )

        self._publish("delete_option", correlation_id)
        return True

    # ===== Product context =====

    def update_base_price(self, base_price: Number, correlation_id: Optional[str] = None) -> VariantsSnapshot:
        """
        Re-derive combination prices after the product's base price changed.

        Raises:
            ValidationError: If the price is missing, not numeric or not finite;
                the current base price is then kept
        """
        try:
            price = self.gate.validate_base_price(base_price)
        except ValidationError as e:
            self._log_rejected("update_base_price", e, correlation_id)
            raise

        self.base_price = price

        logger.info(
            "Base price updated",
            correlation_id=correlation_id,
            metadata={"base_price": str(self.base_price)},
        )

        return self._publish("update_base_price", correlation_id)

    def load_groups(self, groups: List[VariantGroup], correlation_id: Optional[str] = None) -> VariantsSnapshot:
        """
        Replace the current groups with previously persisted ones.

        Raises:
            ValidationError: If any group or option breaks the add-time rules
                or IDs are duplicated; the current groups are then kept
        """
        try:
            validated = self.gate.validate_loaded_groups(groups)
            self.repository.load(validated)
        except ValidationError as e:
            self._log_rejected("load_groups", e, correlation_id)
            raise

        logger.info(
            f"Loaded {len(validated)} variant groups",
            correlation_id=correlation_id,
            metadata={"groups": [group.id for group in validated]},
        )

        return self._publish("load_groups", correlation_id)

    # ===== Queries =====

    def regenerate(self, correlation_id: Optional[str] = None) -> VariantsSnapshot:
        """Recompute combinations for the current state without notifying."""
        self._snapshot = self.notifier.regenerate(
            self.repository.list_groups(), self.base_price, correlation_id
        )
        return self._snapshot

    def snapshot(self) -> VariantsSnapshot:
        return self._snapshot.model_copy(deep=True)

    @property
    def groups(self) -> List[VariantGroup]:
        return self.repository.list_groups()

    @property
    def combinations(self) -> List[VariantCombination]:
        return list(self._snapshot.combinations)

    def preview(self, limit: Optional[int] = None) -> CombinationPreview:
        """
        First ``limit`` combinations in generation order, with the total count.

        Raises:
            ValidationError: If the limit is negative
        """
        if limit is None:
            limit = self.settings.combination_preview_limit
        if limit < 0:
            raise ValidationError(
                "Preview limit cannot be negative",
                errors=[{"field": "limit", "message": "Use 0 or a positive number"}],
            )
        combinations = self._snapshot.combinations
        return CombinationPreview(
            combinations=combinations[:limit],
            total_count=len(combinations),
            limit=limit,
        )

    def describe_option(self, group_id: str, option_id: str) -> OptionDisplay:
        group = self.repository.get_group(group_id)
        option = group.get_option(option_id) if group else None
        return OptionDisplay(
            group_name=group.name if group else "Unknown group",
            option_name=option.name if option else "Unknown option",
            color_hex=option.color_hex if option else None,
        )

    # ===== Private Helper Methods =====

    def _confirmed(self, message: str, confirmed: Optional[bool], correlation_id: Optional[str]) -> bool:
        try:
            self.gate.confirm_deletion(message, confirmed)
        except ConfirmationRequired:
            logger.info(
                "Deletion not confirmed",
                correlation_id=correlation_id,
                metadata={"prompt": message},
            )
            return False
        return True

    def _publish(self, mutation: str, correlation_id: Optional[str]) -> VariantsSnapshot:
        self._snapshot = self.notifier.publish(
            self.repository.list_groups(), self.base_price, mutation, correlation_id
        )
        return self._snapshot

    def _log_rejected(self, operation: str, error: ValidationError,
                      correlation_id: Optional[str], metadata: Optional[dict] = None):
        logger.warning(
            f"{operation} rejected: {error.message}",
            correlation_id=correlation_id,
            metadata={**(metadata or {}), **error.details},
        )
