"""
Mutation operations produced for relation fields.

Classification returns one of these tagged dataclasses; the compiler then
renders them into the nested ``create``/``connect``/``update``/... dialect
expected by the data-access layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union

MUTATION_KEYWORDS = frozenset(
    {
        "create",
        "connect",
        "update",
        "delete",
        "disconnect",
        "deleteMany",
        "connectOrCreate",
        "upsert",
        "set",
    }
)


def is_mutation_format(value: Any) -> bool:
    """Return True if ``value`` is already written in the mutation dialect."""
    if not isinstance(value, dict):
        return False
    return not MUTATION_KEYWORDS.isdisjoint(value.keys())


@dataclass(frozen=True)
class Create:
    data: Any


@dataclass(frozen=True)
class Connect:
    where: Dict[str, Any]


@dataclass(frozen=True)
class Update:
    where: Dict[str, Any]
    data: Dict[str, Any]


@dataclass(frozen=True)
class Delete:
    reference: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Disconnect:
    reference: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Omit:
    """Marker for values whose hint is listed in ``ignore_actions``."""

    hint: str


MutationOperation = Union[Create, Connect, Update, Delete, Disconnect, Omit]


def operation_kind(operation: MutationOperation) -> str:
    """Short name of an operation, used in log records."""
    return type(operation).__name__.lower()
