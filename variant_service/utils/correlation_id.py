"""
Correlation ID utilities for tracing a mutation through the logs
"""

from contextvars import ContextVar
from typing import Optional

# Context variable to store correlation ID across nested calls
correlation_id_context: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context

    Returns:
        The correlation ID set for this context, or None
    """
    return correlation_id_context.get("") or None


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID in context

    Args:
        correlation_id: The correlation ID to set
    """
    correlation_id_context.set(correlation_id)

