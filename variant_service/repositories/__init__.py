"""
Repository layer for variant data.

Holds groups and options in memory; persistence belongs to whoever listens
for variant changes.
"""

from variant_service.repositories.variant_group_repository import (
    VariantGroupRepository,
    VariantOptionRepository,
)

__all__ = ["VariantGroupRepository", "VariantOptionRepository"]
