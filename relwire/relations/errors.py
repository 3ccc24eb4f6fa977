"""
Mapping of relation input errors to client-facing error objects.
"""

from typing import Optional

import graphene
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError

from .exceptions import RelationInputError


class MutationError(graphene.ObjectType):
    """
    Structured error type for GraphQL mutations.

    Attributes:
        field: Dotted path of the payload value that caused the error
        message: The error message describing what went wrong
        code: Machine-readable error code
    """

    field = graphene.String(description="Path of the field where the error occurred")
    message = graphene.String(
        required=False,
        description="Message describing what went wrong",
    )
    code = graphene.String(description="Machine-readable error code")


def _normalize_field_path(field: Optional[str]) -> Optional[str]:
    """
    Convert ``posts[0].category`` style paths to the dot-separated form the
    frontend expects (``posts.0.category``).
    """
    if field is None:
        return None
    segment = str(field).replace("[", ".").replace("]", "")
    segment = segment.replace("..", ".").strip(".")
    return segment or None


def build_relation_errors(error: RelationInputError) -> list[MutationError]:
    """Convert a relation input error into a list of MutationError objects."""
    return [
        MutationError(
            field=_normalize_field_path(error.field),
            message=error.message,
            code=error.code,
        )
    ]


def to_validation_error(error: RelationInputError) -> ValidationError:
    """Wrap a relation input error in a Django ValidationError keyed by field."""
    key = _normalize_field_path(error.field) or NON_FIELD_ERRORS
    return ValidationError({key: [ValidationError(error.message, code=error.code)]})
