"""
Relation input compiler.

Turns a client payload such as::

    {"title": "Hello", "category": {"id": 3}, "tags": [{"name": "new"}]}

into the nested mutation dialect understood by the data-access layer::

    {"title": "Hello", "category": {"connect": {"id": 3}},
     "tags": {"create": [{"name": "new"}]}}

Singular (to-one) fields compile to exactly one operation. List (to-many)
fields are partitioned into ``create``/``connect``/``update``/``disconnect``
buckets plus a single ``deleteMany`` aggregate. Values already written in
the mutation dialect are passed through untouched, and nested relations
inside freshly produced ``create``/``update`` data are compiled recursively
with the related type's own descriptor.

The compiler is pure: the input is never mutated and no state survives a
call, so one instance can be shared between requests.
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Iterable, Mapping, Optional, Union

from .classifier import classify_relation_value
from .exceptions import MisplacedApiActionError, MissingReferenceError
from .hints import HINT_KEY, get_hint, strip_hints
from .limits import LimitTracker, RelationLimits
from .metadata import RelationDescriptor, RelationMetadataProvider, StaticRelationMetadata
from .operations import (
    Connect,
    Create,
    Delete,
    Disconnect,
    Omit,
    Update,
    is_mutation_format,
    operation_kind,
)

logger = logging.getLogger(__name__)

LIST_BUCKETS = ("create", "connect", "update", "disconnect")

DescriptorLike = Union[RelationDescriptor, Mapping[str, Any], None]


def _join_path(path: Optional[str], segment: str) -> str:
    if segment.startswith("["):
        return f"{path}{segment}" if path else segment
    return f"{path}.{segment}" if path else segment


def _as_descriptor(descriptor: DescriptorLike) -> RelationDescriptor:
    if isinstance(descriptor, RelationDescriptor):
        return descriptor
    return RelationDescriptor.from_dict(descriptor)


class RelationCompiler:
    """Compiles nested relation payloads into mutation operations."""

    def __init__(
        self,
        metadata: Optional[RelationMetadataProvider] = None,
        ignore_actions: Iterable[str] = (),
        limits: Optional[RelationLimits] = None,
        reject_root_hint: bool = True,
    ):
        self.metadata = metadata if metadata is not None else StaticRelationMetadata()
        self.ignore_actions = tuple(ignore_actions or ())
        self.limits = limits if limits is not None else RelationLimits()
        self.reject_root_hint = reject_root_hint

    @classmethod
    def from_settings(
        cls,
        schema_name: str = "default",
        metadata: Optional[RelationMetadataProvider] = None,
    ) -> "RelationCompiler":
        """Build a compiler configured from ``RelationCompilerSettings``."""
        from ..core.services import get_relation_metadata
        from ..core.settings import RelationCompilerSettings

        settings = RelationCompilerSettings.from_schema(schema_name)
        return cls(
            metadata=metadata if metadata is not None else get_relation_metadata(),
            ignore_actions=settings.ignore_actions,
            limits=RelationLimits.from_settings(settings),
            reject_root_hint=settings.reject_root_hint,
        )

    def compile(
        self,
        body: Optional[dict[str, Any]],
        descriptor: DescriptorLike,
        ignore_actions: Optional[Iterable[str]] = None,
    ) -> dict[str, Any]:
        """
        Compile the relation fields of ``body`` described by ``descriptor``.

        Args:
            body: Payload for one entity, as sent by the client.
            descriptor: Relation fields of the entity's type.
            ignore_actions: Extra hint tokens to treat as "drop this value",
                on top of the ones the compiler was built with.

        Returns:
            A new payload with every relation field in the mutation dialect
            and no ``apiAction`` key left anywhere.

        Raises:
            RelationInputError: on the first invalid hint, unaddressable
                reference or exceeded limit. No partial result is returned.
        """
        if not body:
            return {}
        if not isinstance(body, dict):
            raise TypeError(
                f"Relation input must be a dict, got {type(body).__name__}"
            )

        if HINT_KEY in body:
            if self.reject_root_hint:
                raise MisplacedApiActionError()
            logger.warning(
                "Stripping apiAction sent on the root of a relation payload"
            )

        ignore = self.ignore_actions + tuple(ignore_actions or ())
        tracker = LimitTracker(self.limits)
        compiled = self._compile_body(
            body, _as_descriptor(descriptor), ignore, tracker, depth=0, path=None
        )
        return strip_hints(compiled)

    def compile_type(
        self,
        body: Optional[dict[str, Any]],
        type_name: str,
        ignore_actions: Optional[Iterable[str]] = None,
    ) -> dict[str, Any]:
        """Compile ``body`` using the descriptor registered for ``type_name``."""
        descriptor = self.metadata.get_relation_descriptor(type_name)
        return self.compile(body, descriptor, ignore_actions)

    def _compile_body(
        self,
        body: dict[str, Any],
        descriptor: RelationDescriptor,
        ignore: Collection[str],
        tracker: LimitTracker,
        depth: int,
        path: Optional[str],
    ) -> dict[str, Any]:
        result = dict(body)

        for ref in descriptor.singular:
            if ref.name not in body:
                continue
            field_path = _join_path(path, ref.name)
            compiled = self._compile_singular(
                ref.related_type, body[ref.name], ignore, tracker, depth, field_path
            )
            if isinstance(compiled, Omit):
                logger.debug("Dropped relation field %s (apiAction=%s)", field_path, compiled.hint)
                del result[ref.name]
            else:
                result[ref.name] = compiled

        for ref in descriptor.list:
            if ref.name not in body:
                continue
            value = body[ref.name]
            if is_mutation_format(value):
                continue
            field_path = _join_path(path, ref.name)
            compiled = self._compile_list(
                ref.related_type, value, ignore, tracker, depth, field_path
            )
            if isinstance(compiled, Omit):
                logger.debug("Dropped relation field %s (apiAction=%s)", field_path, compiled.hint)
                del result[ref.name]
            else:
                result[ref.name] = compiled

        return result

    def _compile_nested(
        self,
        related_type: str,
        data: Any,
        ignore: Collection[str],
        tracker: LimitTracker,
        depth: int,
        path: Optional[str],
    ) -> Any:
        tracker.check_depth(depth, path)
        if not isinstance(data, dict):
            return data
        descriptor = self.metadata.get_relation_descriptor(related_type)
        if not descriptor:
            return data
        return self._compile_body(data, descriptor, ignore, tracker, depth, path)

    def _compile_singular(
        self,
        related_type: str,
        value: Any,
        ignore: Collection[str],
        tracker: LimitTracker,
        depth: int,
        path: str,
    ) -> Any:
        if value is None or is_mutation_format(value):
            return value
        # Scalars and lists on a to-one field are left to the data layer.
        if not isinstance(value, dict):
            return value

        tracker.count_node(path)
        operation = classify_relation_value(
            related_type, value, self.metadata, ignore, path=path
        )
        logger.debug(
            "Compiled relation field %s (%s) as %s",
            path,
            related_type,
            operation_kind(operation),
        )

        if isinstance(operation, Omit):
            return operation
        if isinstance(operation, Create):
            return {
                "create": self._compile_nested(
                    related_type, operation.data, ignore, tracker, depth + 1, path
                )
            }
        if isinstance(operation, Connect):
            return {"connect": operation.where}
        if isinstance(operation, Update):
            return {
                "update": {
                    "where": operation.where,
                    "data": self._compile_nested(
                        related_type, operation.data, ignore, tracker, depth + 1, path
                    ),
                }
            }
        if isinstance(operation, Delete):
            return {"delete": True}
        if isinstance(operation, Disconnect):
            return {"disconnect": True}
        raise TypeError(f"Unhandled relation operation: {operation!r}")

    def _compile_list(
        self,
        related_type: str,
        value: Any,
        ignore: Collection[str],
        tracker: LimitTracker,
        depth: int,
        path: str,
    ) -> Any:
        if not isinstance(value, list):
            hint = get_hint(value)
            if hint is not None and hint in ignore:
                return Omit(hint)
            return value
        if not value:
            return {}

        tracker.check_list(len(value), path)
        identifier = self.metadata.get_identifier_field(related_type)
        buckets: dict[str, list[Any]] = {name: [] for name in LIST_BUCKETS}
        delete_ids: list[Any] = []

        for index, item in enumerate(value):
            item_path = _join_path(path, f"[{index}]")
            if item is None:
                continue
            tracker.count_node(item_path)
            # A bare scalar is a reference to an existing record.
            if not isinstance(item, dict):
                buckets["connect"].append({identifier: item})
                continue

            operation = classify_relation_value(
                related_type, item, self.metadata, ignore, path=item_path
            )

            if isinstance(operation, Omit):
                continue
            if isinstance(operation, Create):
                buckets["create"].append(
                    self._compile_nested(
                        related_type, operation.data, ignore, tracker, depth + 1, item_path
                    )
                )
            elif isinstance(operation, Connect):
                buckets["connect"].append(operation.where)
            elif isinstance(operation, Update):
                buckets["update"].append(
                    {
                        "where": operation.where,
                        "data": self._compile_nested(
                            related_type, operation.data, ignore, tracker, depth + 1, item_path
                        ),
                    }
                )
            elif isinstance(operation, Disconnect):
                if not operation.reference:
                    raise MissingReferenceError(related_type, "disconnect", field=item_path)
                buckets["disconnect"].append(operation.reference)
            elif isinstance(operation, Delete):
                if identifier not in operation.reference:
                    raise MissingReferenceError(related_type, "delete", field=item_path)
                delete_ids.append(operation.reference[identifier])
            else:
                raise TypeError(f"Unhandled relation operation: {operation!r}")

        compiled: dict[str, Any] = {
            name: items for name, items in buckets.items() if items
        }
        if delete_ids:
            compiled["deleteMany"] = {identifier: {"in": delete_ids}}

        logger.debug(
            "Compiled list relation field %s (%s) into %s",
            path,
            related_type,
            ", ".join(compiled) or "no operations",
        )
        return compiled


def compile_relations(
    body: Optional[dict[str, Any]],
    descriptor: DescriptorLike,
    ignore_actions: Iterable[str] = (),
    metadata: Optional[RelationMetadataProvider] = None,
    limits: Optional[RelationLimits] = None,
) -> dict[str, Any]:
    """Compile ``body`` with a one-off ``RelationCompiler``."""
    compiler = RelationCompiler(metadata=metadata, limits=limits)
    return compiler.compile(body, descriptor, ignore_actions)
