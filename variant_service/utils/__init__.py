"""
Shared utilities package
"""

from .correlation_id import (
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "get_correlation_id",
    "set_correlation_id",
]
