"""
Variant Change Notifier

After every applied mutation the notifier regenerates the combinations and
hands the fresh (groups, combinations) pair to each subscribed listener.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Union

from variant_service.core.config import Config, config
from variant_service.core.logger import logger
from variant_service.models.variant import VariantCombination, VariantGroup, VariantsSnapshot
from variant_service.services.combination_generator import Number, generate_combinations, to_decimal

ChangeCallback = Callable[[List[VariantGroup], List[VariantCombination]], None]


class VariantChangeListener(ABC):
    """Receives the recomputed variant state after each mutation"""

    @abstractmethod
    def on_variants_change(
        self,
        groups: List[VariantGroup],
        combinations: List[VariantCombination],
    ) -> None:
        """
        Handle refreshed variant state

        Args:
            groups: Current groups in order, with their options
            combinations: Combinations derived from those groups
        """
        pass


class CallbackVariantChangeListener(VariantChangeListener):
    """Adapts a plain callable to the listener interface"""

    def __init__(self, callback: ChangeCallback):
        self.callback = callback

    def on_variants_change(self, groups, combinations) -> None:
        self.callback(groups, combinations)

    def __eq__(self, other):
        if isinstance(other, CallbackVariantChangeListener):
            return self.callback == other.callback
        return NotImplemented

    def __hash__(self):
        return hash(self.callback)


class VariantChangeNotifier:
    """Regenerates combinations and delivers them to listeners, synchronously."""

    def __init__(
        self,
        listeners: Optional[Sequence[Union[VariantChangeListener, ChangeCallback]]] = None,
        settings: Optional[Config] = None,
    ):
        self.settings = settings or config
        self._listeners: List[VariantChangeListener] = []
        for listener in listeners or []:
            self.subscribe(listener)

    @property
    def listeners(self) -> List[VariantChangeListener]:
        return list(self._listeners)

    def subscribe(self, listener: Union[VariantChangeListener, ChangeCallback]) -> VariantChangeListener:
        if not isinstance(listener, VariantChangeListener):
            listener = CallbackVariantChangeListener(listener)
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Union[VariantChangeListener, ChangeCallback]) -> bool:
        if not isinstance(listener, VariantChangeListener):
            listener = CallbackVariantChangeListener(listener)
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def regenerate(self, groups: List[VariantGroup], base_price: Number,
                   correlation_id: Optional[str] = None) -> VariantsSnapshot:
        """Recompute the full combination list for the given groups."""
        start = time.perf_counter()
        combinations = generate_combinations(
            groups,
            base_price,
            sku_separator=self.settings.sku_separator,
            name_separator=self.settings.display_name_separator,
        )
        duration_ms = round((time.perf_counter() - start) * 1000, 3)

        logger.performance(
            "generate_combinations",
            duration_ms,
            metadata={"groups": len(groups), "combinations": len(combinations)},
            correlation_id=correlation_id,
        )

        threshold = self.settings.combination_warning_threshold
        if len(combinations) > threshold:
            logger.warning(
                f"Variant configuration yields {len(combinations)} combinations",
                correlation_id=correlation_id,
                metadata={"combinations": len(combinations), "threshold": threshold},
            )

        return VariantsSnapshot(
            base_price=to_decimal(base_price),
            groups=groups,
            combinations=combinations,
        )

    def publish(self, groups: List[VariantGroup], base_price: Number,
                mutation: str, correlation_id: Optional[str] = None) -> VariantsSnapshot:
        """
        Regenerate and call every listener once with the new state.

        Listener failures are logged and not retried; the mutation that
        triggered them has already been applied.
        """
        snapshot = self.regenerate(groups, base_price, correlation_id)

        for listener in list(self._listeners):
            try:
                listener.on_variants_change(
                    [group.model_copy(deep=True) for group in snapshot.groups],
                    list(snapshot.combinations),
                )
            except Exception as e:
                logger.error(
                    f"Variant change listener failed after {mutation}",
                    correlation_id=correlation_id,
                    error=e,
                    metadata={"listener": type(listener).__name__, "mutation": mutation},
                )

        return snapshot
