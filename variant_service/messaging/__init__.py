"""Variant change notification."""

from .variant_change_notifier import (
    VariantChangeListener,
    CallbackVariantChangeListener,
    VariantChangeNotifier,
)

__all__ = [
    "VariantChangeListener",
    "CallbackVariantChangeListener",
    "VariantChangeNotifier",
]
