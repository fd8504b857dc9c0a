"""
In-memory stores for variant groups and their options.

Groups are kept in an insertion-ordered arena keyed by ID; each group owns an
option store with its own insertion-ordered arena. Insertion order drives
combination order and SKU composition, so it is never re-sorted.
"""

import uuid
from typing import Callable, Dict, Iterable, List, Optional

from variant_service.core.errors import ValidationError
from variant_service.core.logger import logger
from variant_service.models.variant import (
    AddGroupRequest,
    AddOptionRequest,
    VariantGroup,
    VariantGroupKind,
    VariantOption,
)


def default_id_factory() -> str:
    return uuid.uuid4().hex


class VariantOptionRepository:
    """Options belonging to one group."""

    def __init__(self, group_id: str, id_factory: Callable[[], str] = default_id_factory):
        self.group_id = group_id
        self._id_factory = id_factory
        self._options: Dict[str, VariantOption] = {}

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, option_id: str) -> bool:
        return option_id in self._options

    def add(self, request: AddOptionRequest) -> VariantOption:
        option = VariantOption(
            id=self._new_id(),
            name=request.name,
            value=request.value,
            color_hex=request.color_hex,
            price_modifier=request.price_modifier,
            stock=request.stock,
            sku=request.sku,
        )
        self._options[option.id] = option
        return option.model_copy()

    def insert(self, option: VariantOption) -> None:
        """Insert an option that already has an ID (used when loading)."""
        if option.id in self._options:
            raise ValidationError(
                f"Duplicate option ID {option.id} in group {self.group_id}",
                errors=[{"field": "options.id", "message": "Option IDs must be unique within a group"}],
            )
        self._options[option.id] = option.model_copy()

    def get(self, option_id: str) -> Optional[VariantOption]:
        option = self._options.get(option_id)
        return option.model_copy() if option else None

    def delete(self, option_id: str) -> bool:
        return self._options.pop(option_id, None) is not None

    def list_options(self) -> List[VariantOption]:
        return [option.model_copy() for option in self._options.values()]

    def _new_id(self) -> str:
        option_id = self._id_factory()
        while option_id in self._options:
            option_id = self._id_factory()
        return option_id


class _GroupRecord:
    __slots__ = ("id", "name", "kind", "is_required", "options")

    def __init__(self, group_id: str, name: str, kind: VariantGroupKind,
                 is_required: bool, options: VariantOptionRepository):
        self.id = group_id
        self.name = name
        self.kind = kind
        self.is_required = is_required
        self.options = options

    def to_model(self) -> VariantGroup:
        return VariantGroup(
            id=self.id,
            name=self.name,
            kind=self.kind,
            is_required=self.is_required,
            options=self.options.list_options(),
        )


class VariantGroupRepository:
    """
    Ordered collection of variant groups.

    Usage:
        repo = VariantGroupRepository()
        size = repo.add_group(AddGroupRequest(name="Size", kind="size"))
        repo.add_option(size.id, AddOptionRequest(name="M", sku="m"))
    """

    def __init__(self, id_factory: Callable[[], str] = default_id_factory):
        self._id_factory = id_factory
        self._groups: Dict[str, _GroupRecord] = {}

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, group_id: str) -> bool:
        return group_id in self._groups

    def add_group(self, request: AddGroupRequest) -> VariantGroup:
        """Append an empty group and return it."""
        group_id = self._id_factory()
        while group_id in self._groups:
            group_id = self._id_factory()

        record = _GroupRecord(
            group_id,
            request.name,
            request.kind,
            request.is_required,
            VariantOptionRepository(group_id, self._id_factory),
        )
        self._groups[group_id] = record

        logger.debug(
            f"Group stored: {request.name}",
            metadata={"group_id": group_id, "kind": request.kind.value},
        )
        return record.to_model()

    def delete_group(self, group_id: str) -> bool:
        """Remove a group with all its options. Unknown IDs are ignored."""
        return self._groups.pop(group_id, None) is not None

    def add_option(self, group_id: str, request: AddOptionRequest) -> VariantOption:
        record = self._groups.get(group_id)
        if record is None:
            raise ValidationError(
                f"Variant group {group_id} not found",
                errors=[{"field": "group_id", "message": "Unknown variant group"}],
            )
        option = record.options.add(request)

        logger.debug(
            f"Option stored: {option.name}",
            metadata={"group_id": group_id, "option_id": option.id, "sku": option.sku},
        )
        return option

    def delete_option(self, group_id: str, option_id: str) -> bool:
        """Remove an option from its group. Unknown IDs are ignored."""
        record = self._groups.get(group_id)
        if record is None:
            return False
        return record.options.delete(option_id)

    def get_group(self, group_id: str) -> Optional[VariantGroup]:
        record = self._groups.get(group_id)
        return record.to_model() if record else None

    def get_option(self, group_id: str, option_id: str) -> Optional[VariantOption]:
        record = self._groups.get(group_id)
        return record.options.get(option_id) if record else None

    def list_groups(self) -> List[VariantGroup]:
        """Groups in insertion order, each with its options in insertion order."""
        return [record.to_model() for record in self._groups.values()]

    def load(self, groups: Iterable[VariantGroup]) -> None:
        """
        Replace the store contents with previously persisted groups.

        IDs and order are kept as given. Nothing is replaced if any group or
        option ID is duplicated.
        """
        loaded: Dict[str, _GroupRecord] = {}
        for group in groups:
            if group.id in loaded:
                raise ValidationError(
                    f"Duplicate group ID {group.id}",
                    errors=[{"field": "groups.id", "message": "Group IDs must be unique"}],
                )
            options = VariantOptionRepository(group.id, self._id_factory)
            for option in group.options:
                options.insert(option)
            loaded[group.id] = _GroupRecord(
                group.id, group.name, group.kind, group.is_required, options
            )
        self._groups = loaded
