import pytest
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError

from relwire.relations.errors import (
    MutationError,
    build_relation_errors,
    to_validation_error,
)
from relwire.relations.exceptions import (
    MisplacedApiActionError,
    NestedDepthError,
    RelationInputError,
    UnknownApiActionError,
)
from relwire.relations.hints import RECOGNIZED_ACTIONS

pytestmark = pytest.mark.unit


def test_errors_share_a_common_base():
    error = UnknownApiActionError("nope", RECOGNIZED_ACTIONS, field="tags[1]")

    assert isinstance(error, RelationInputError)
    assert error.allowed == list(RECOGNIZED_ACTIONS)
    assert str(error) == (
        'Unknown value "nope" for apiAction field, available values are '
        "create, connect, update, delete, disconnect."
    )


def test_build_relation_errors_normalizes_paths():
    error = UnknownApiActionError("nope", RECOGNIZED_ACTIONS, field="posts[0].tags[1]")

    errors = build_relation_errors(error)

    assert len(errors) == 1
    assert isinstance(errors[0], MutationError)
    assert errors[0].field == "posts.0.tags.1"
    assert errors[0].code == "UNKNOWN_API_ACTION"
    assert errors[0].message == error.message


def test_build_relation_errors_without_field():
    errors = build_relation_errors(MisplacedApiActionError())
    assert errors[0].field is None
    assert errors[0].code == "MISPLACED_API_ACTION"


def test_to_validation_error_keys_by_field():
    error = NestedDepthError(max_depth=2, current_depth=3, field="parent.parent[0]")

    validation_error = to_validation_error(error)

    assert isinstance(validation_error, ValidationError)
    assert validation_error.message_dict == {"parent.parent.0": [error.message]}
    assert validation_error.error_dict["parent.parent.0"][0].code == "DEPTH_EXCEEDED"


def test_to_validation_error_uses_non_field_errors_for_root():
    validation_error = to_validation_error(MisplacedApiActionError())
    assert list(validation_error.message_dict) == [NON_FIELD_ERRORS]
