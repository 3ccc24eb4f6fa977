"""
Exceptions raised while compiling nested relation input.

Every error carries the dotted path of the offending value inside the
payload (``posts[0].category``) so callers can point the client at it.
"""

from typing import Iterable, Optional


class RelationInputError(Exception):
    """Base exception for relation input compilation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.code = code

    def __str__(self) -> str:
        return self.message


class UnknownApiActionError(RelationInputError):
    """Raised when a relation value carries an unrecognised ``apiAction``."""

    def __init__(
        self,
        action: str,
        allowed: Iterable[str],
        field: Optional[str] = None,
    ):
        allowed = list(allowed)
        super().__init__(
            f'Unknown value "{action}" for apiAction field, '
            f"available values are {', '.join(allowed)}.",
            field=field,
            code="UNKNOWN_API_ACTION",
        )
        self.action = action
        self.allowed = allowed


class MissingReferenceError(RelationInputError):
    """Raised when an update/disconnect/delete cannot address a record."""

    def __init__(self, type_name: str, action: str, field: Optional[str] = None):
        super().__init__(
            f"Cannot {action} {type_name}: no identifier or unique field "
            f"to use in the where clause.",
            field=field,
            code="MISSING_REFERENCE",
        )
        self.type_name = type_name
        self.action = action


class MisplacedApiActionError(RelationInputError):
    """Raised when ``apiAction`` is sent on the root body."""

    def __init__(self):
        super().__init__(
            "Invalid usage of apiAction field, it must only be used on "
            "relation fields whether single or multiple.",
            code="MISPLACED_API_ACTION",
        )


class NestedDepthError(RelationInputError):
    """Raised when relation nesting exceeds the maximum depth."""

    def __init__(self, max_depth: int, current_depth: int, field: Optional[str] = None):
        super().__init__(
            f"Nested relation input exceeds maximum depth of {max_depth}. "
            f"Current depth: {current_depth}",
            field=field,
            code="DEPTH_EXCEEDED",
        )
        self.max_depth = max_depth
        self.current_depth = current_depth


class RelationListSizeError(RelationInputError):
    """Raised when a list relation holds too many items."""

    def __init__(self, max_items: int, actual: int, field: Optional[str] = None):
        super().__init__(
            f"List relation exceeds maximum length of {max_items} items. "
            f"Received: {actual}",
            field=field,
            code="LIST_SIZE_EXCEEDED",
        )
        self.max_items = max_items
        self.actual = actual


class RelationNodeLimitError(RelationInputError):
    """Raised when a payload holds too many relation values overall."""

    def __init__(self, max_nodes: int, field: Optional[str] = None):
        super().__init__(
            f"Nested relation input exceeds maximum size of {max_nodes} items.",
            field=field,
            code="NODE_LIMIT_EXCEEDED",
        )
        self.max_nodes = max_nodes
