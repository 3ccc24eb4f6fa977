"""
Unit tests for relation value classification.
"""

import pytest

from relwire.relations.classifier import (
    can_connect,
    classify_relation_value,
    find_reference,
)
from relwire.relations.exceptions import MissingReferenceError, UnknownApiActionError
from relwire.relations.metadata import StaticRelationMetadata
from relwire.relations.operations import (
    MUTATION_KEYWORDS,
    Connect,
    Create,
    Delete,
    Disconnect,
    Omit,
    Update,
    is_mutation_format,
)

pytestmark = pytest.mark.unit


class TestIsMutationFormat:
    @pytest.mark.parametrize("keyword", sorted(MUTATION_KEYWORDS))
    def test_any_operation_keyword_is_recognised(self, keyword):
        assert is_mutation_format({keyword: {"id": "1"}}) is True

    def test_keyword_with_falsy_value_still_counts(self):
        assert is_mutation_format({"set": []}) is True

    def test_plain_data_objects_are_not_formatted(self):
        assert is_mutation_format({"name": "Technology"}) is False
        assert is_mutation_format({}) is False

    def test_arrays_and_scalars_are_not_formatted(self):
        assert is_mutation_format([{"connect": {"id": "1"}}]) is False
        assert is_mutation_format("connect") is False
        assert is_mutation_format(None) is False


class TestCanConnect:
    def test_true_for_identifier_only(self, blog_metadata):
        assert can_connect("Profile", {"id": "123"}, blog_metadata) is True

    def test_true_for_single_unique_field(self, blog_metadata):
        assert can_connect("Category", {"name": "Technology"}, blog_metadata) is True
        assert can_connect("User", {"username": "johndoe"}, blog_metadata) is True

    def test_true_for_explicit_connect_hint(self, blog_metadata):
        candidate = {"title": "anything", "apiAction": "connect"}
        assert can_connect("Post", candidate, blog_metadata) is True

    def test_false_for_several_fields(self, blog_metadata):
        assert can_connect("User", {"email": "a@b.c", "name": "A"}, blog_metadata) is False
        assert can_connect("Profile", {"id": "1", "bio": "x"}, blog_metadata) is False

    def test_false_for_single_non_unique_field(self, blog_metadata):
        assert can_connect("Category", {"description": "x"}, blog_metadata) is False

    def test_false_for_other_hints(self, blog_metadata):
        assert can_connect("Profile", {"id": "1", "apiAction": "create"}, blog_metadata) is False
        assert can_connect("Profile", {"id": "1", "apiAction": "delete"}, blog_metadata) is False

    def test_false_for_missing_candidates(self, blog_metadata):
        assert can_connect("Profile", None, blog_metadata) is False
        assert can_connect("Profile", "123", blog_metadata) is False

    def test_uses_provider_identifier(self):
        metadata = StaticRelationMetadata(identifiers={"Document": "code"})
        assert can_connect("Document", {"code": "A-1"}, metadata) is True
        assert can_connect("Document", {"id": "1"}, metadata) is False


class TestFindReference:
    def test_identifier_takes_precedence(self, blog_metadata):
        value = {"email": "a@b.c", "id": "7"}
        assert find_reference("User", value, blog_metadata) == {"id": "7"}

    def test_falls_back_to_first_declared_unique_field(self, blog_metadata):
        value = {"username": "jd", "email": "a@b.c"}
        assert find_reference("User", value, blog_metadata) == {"email": "a@b.c"}

    def test_none_when_nothing_addresses_the_record(self, blog_metadata):
        assert find_reference("User", {"name": "J"}, blog_metadata) is None


class TestClassifyRelationValue:
    def test_plain_data_is_created(self, blog_metadata):
        operation = classify_relation_value("Profile", {"bio": "SE"}, blog_metadata)
        assert operation == Create({"bio": "SE"})

    def test_identifier_only_is_connected(self, blog_metadata):
        operation = classify_relation_value("Profile", {"id": "123"}, blog_metadata)
        assert operation == Connect({"id": "123"})

    def test_identifier_with_data_is_updated(self, blog_metadata):
        operation = classify_relation_value(
            "Profile", {"id": "123", "bio": "Updated"}, blog_metadata
        )
        assert operation == Update(where={"id": "123"}, data={"bio": "Updated"})

    def test_unique_field_with_data_is_created(self, blog_metadata):
        operation = classify_relation_value(
            "User", {"email": "a@b.c", "name": "A"}, blog_metadata
        )
        assert operation == Create({"email": "a@b.c", "name": "A"})

    def test_explicit_create_wins_over_identifier(self, blog_metadata):
        operation = classify_relation_value(
            "Profile", {"id": "9", "apiAction": "create"}, blog_metadata
        )
        assert operation == Create({"id": "9"})

    def test_explicit_create_with_identifier_and_data_is_updated(self, blog_metadata):
        operation = classify_relation_value(
            "Profile", {"id": "5", "bio": "x", "apiAction": "create"}, blog_metadata
        )
        assert operation == Update(where={"id": "5"}, data={"bio": "x"})

    def test_explicit_connect_strips_hint(self, blog_metadata):
        operation = classify_relation_value(
            "Post", {"title": "x", "apiAction": "connect"}, blog_metadata
        )
        assert operation == Connect({"title": "x"})

    def test_explicit_update_by_identifier(self, blog_metadata):
        operation = classify_relation_value(
            "Profile", {"id": "1", "apiAction": "update"}, blog_metadata
        )
        assert operation == Update(where={"id": "1"}, data={})

    def test_explicit_update_by_unique_field(self, blog_metadata):
        operation = classify_relation_value(
            "User",
            {"email": "a@b.c", "name": "New", "apiAction": "update"},
            blog_metadata,
        )
        assert operation == Update(where={"email": "a@b.c"}, data={"name": "New"})

    def test_explicit_update_without_reference_raises(self, blog_metadata):
        with pytest.raises(MissingReferenceError) as exc_info:
            classify_relation_value(
                "User", {"name": "New", "apiAction": "update"}, blog_metadata, path="author"
            )
        assert exc_info.value.code == "MISSING_REFERENCE"
        assert exc_info.value.field == "author"

    def test_delete_and_disconnect_keep_reference(self, blog_metadata):
        assert classify_relation_value(
            "Tag", {"id": "3", "apiAction": "delete"}, blog_metadata
        ) == Delete({"id": "3"})
        assert classify_relation_value(
            "Tag", {"id": "4", "apiAction": "disconnect"}, blog_metadata
        ) == Disconnect({"id": "4"})

    def test_delete_without_reference_has_empty_reference(self, blog_metadata):
        operation = classify_relation_value("Profile", {"apiAction": "delete"}, blog_metadata)
        assert operation == Delete({})

    def test_ignored_hint_is_omitted_before_anything_else(self, blog_metadata):
        operation = classify_relation_value(
            "Profile", {"id": "1", "apiAction": "skip-this"}, blog_metadata, ["skip-this"]
        )
        assert operation == Omit("skip-this")

    def test_unknown_hint_raises(self, blog_metadata):
        with pytest.raises(UnknownApiActionError) as exc_info:
            classify_relation_value(
                "Tag", {"id": "1", "apiAction": "unknown-action"}, blog_metadata, path="tags[0]"
            )
        error = exc_info.value
        assert error.action == "unknown-action"
        assert error.field == "tags[0]"
        assert error.code == "UNKNOWN_API_ACTION"
        assert "unknown-action" in str(error)

    def test_does_not_mutate_input(self, blog_metadata):
        value = {"id": "1", "bio": "x", "apiAction": "update"}
        classify_relation_value("Profile", value, blog_metadata)
        assert value == {"id": "1", "bio": "x", "apiAction": "update"}
