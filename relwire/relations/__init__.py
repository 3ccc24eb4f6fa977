"""
Relation input compilation.

This package compiles client-supplied nested payloads into the nested
mutation dialect of the data-access layer (create / connect / update /
disconnect / deleteMany).

Usage:
    from relwire.relations import compile_relations

    compile_relations(
        {"name": "John", "profile": {"id": "123"}},
        {"singular": [{"name": "profile", "type": "Profile"}]},
    )
    # {"name": "John", "profile": {"connect": {"id": "123"}}}
"""

from .classifier import can_connect, classify_relation_value
from .compiler import RelationCompiler, compile_relations
from .exceptions import (
    MisplacedApiActionError,
    MissingReferenceError,
    NestedDepthError,
    RelationInputError,
    RelationListSizeError,
    RelationNodeLimitError,
    UnknownApiActionError,
)
from .hints import HINT_KEY, RECOGNIZED_ACTIONS, strip_hints
from .limits import RelationLimits
from .metadata import FieldRef, RelationDescriptor, StaticRelationMetadata
from .operations import (
    Connect,
    Create,
    Delete,
    Disconnect,
    MUTATION_KEYWORDS,
    MutationOperation,
    Omit,
    Update,
    is_mutation_format,
)

__all__ = [
    "HINT_KEY",
    "MUTATION_KEYWORDS",
    "RECOGNIZED_ACTIONS",
    "Connect",
    "Create",
    "Delete",
    "Disconnect",
    "FieldRef",
    "MisplacedApiActionError",
    "MissingReferenceError",
    "MutationOperation",
    "NestedDepthError",
    "Omit",
    "RelationCompiler",
    "RelationDescriptor",
    "RelationInputError",
    "RelationLimits",
    "RelationListSizeError",
    "RelationNodeLimitError",
    "StaticRelationMetadata",
    "UnknownApiActionError",
    "Update",
    "can_connect",
    "classify_relation_value",
    "compile_relations",
    "is_mutation_format",
    "strip_hints",
]
