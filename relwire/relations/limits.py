"""
Work limits for compiling untrusted relation input.
"""

from dataclasses import dataclass
from typing import Optional

from .exceptions import NestedDepthError, RelationListSizeError, RelationNodeLimitError

DEFAULT_MAX_NESTED_DEPTH = 10


@dataclass(frozen=True)
class RelationLimits:
    max_depth: Optional[int] = DEFAULT_MAX_NESTED_DEPTH
    max_list_items: Optional[int] = None
    max_total_nodes: Optional[int] = None

    @classmethod
    def from_settings(cls, settings) -> "RelationLimits":
        def _get_int_or_default(attr, default):
            value = getattr(settings, attr, None)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
            return default

        return cls(
            max_depth=_get_int_or_default("max_nested_depth", DEFAULT_MAX_NESTED_DEPTH),
            max_list_items=_get_int_or_default("max_list_items", None),
            max_total_nodes=_get_int_or_default("max_total_nodes", None),
        )


UNLIMITED = RelationLimits(max_depth=None)


class LimitTracker:
    """Per-call counters checked against a ``RelationLimits``."""

    def __init__(self, limits: RelationLimits):
        self.limits = limits
        self.nodes = 0

    def check_depth(self, depth: int, path: Optional[str]) -> None:
        max_depth = self.limits.max_depth
        if max_depth is not None and depth > max_depth:
            raise NestedDepthError(max_depth, depth, field=path)

    def check_list(self, size: int, path: Optional[str]) -> None:
        max_items = self.limits.max_list_items
        if max_items is not None and size > max_items:
            raise RelationListSizeError(max_items, size, field=path)

    def count_node(self, path: Optional[str]) -> None:
        self.nodes += 1
        max_nodes = self.limits.max_total_nodes
        if max_nodes is not None and self.nodes > max_nodes:
            raise RelationNodeLimitError(max_nodes, field=path)
