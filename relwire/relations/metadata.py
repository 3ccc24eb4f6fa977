"""
Relation metadata consumed by the compiler.

The compiler never looks at models directly. It asks a provider which
payload keys are relations, which fields uniquely address a record and
what the identifier is called.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Protocol

DEFAULT_IDENTIFIER = "id"


@dataclass(frozen=True)
class FieldRef:
    name: str
    related_type: str


@dataclass(frozen=True)
class RelationDescriptor:
    """Singular (to-one) and list (to-many) relation fields of one type."""

    singular: tuple[FieldRef, ...] = field(default_factory=tuple)
    list: tuple[FieldRef, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RelationDescriptor":
        """
        Build a descriptor from plain data.

        Accepts ``{"singular": [...], "list": [...]}`` where each entry is a
        ``FieldRef``, a ``(name, type)`` pair or a mapping with ``name`` and
        ``related_type`` (or ``type``).
        """
        if not data:
            return cls()
        return cls(
            singular=tuple(_to_field_ref(item) for item in data.get("singular") or ()),
            list=tuple(_to_field_ref(item) for item in data.get("list") or ()),
        )

    def __bool__(self) -> bool:
        return bool(self.singular or self.list)


def _to_field_ref(item: Any) -> FieldRef:
    if isinstance(item, FieldRef):
        return item
    if isinstance(item, Mapping):
        related_type = item.get("related_type", item.get("type"))
        return FieldRef(name=item["name"], related_type=related_type)
    name, related_type = item
    return FieldRef(name=name, related_type=related_type)


class RelationMetadataProvider(Protocol):
    def get_relation_descriptor(self, type_name: str) -> Optional[RelationDescriptor]:
        ...

    def get_unique_fields(self, type_name: str) -> list[str]:
        ...

    def get_identifier_field(self, type_name: str) -> str:
        ...


class StaticRelationMetadata:
    """In-memory provider built from plain dictionaries."""

    def __init__(
        self,
        relations: Optional[Mapping[str, Any]] = None,
        unique_fields: Optional[Mapping[str, Iterable[str]]] = None,
        identifiers: Optional[Mapping[str, str]] = None,
    ):
        self._relations = {
            type_name: RelationDescriptor.from_dict(descriptor)
            if not isinstance(descriptor, RelationDescriptor)
            else descriptor
            for type_name, descriptor in (relations or {}).items()
        }
        self._unique_fields = {
            type_name: list(fields) for type_name, fields in (unique_fields or {}).items()
        }
        self._identifiers = dict(identifiers or {})

    def get_relation_descriptor(self, type_name: str) -> Optional[RelationDescriptor]:
        return self._relations.get(type_name)

    def get_unique_fields(self, type_name: str) -> list[str]:
        return list(self._unique_fields.get(type_name, []))

    def get_identifier_field(self, type_name: str) -> str:
        return self._identifiers.get(type_name, DEFAULT_IDENTIFIER)
