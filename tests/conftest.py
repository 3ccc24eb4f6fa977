import pytest

from relwire.relations.metadata import StaticRelationMetadata


@pytest.fixture
def blog_metadata():
    """Relation metadata for a small blog schema."""
    return StaticRelationMetadata(
        relations={
            "Post": {
                "singular": [{"name": "category", "type": "Category"}],
                "list": [
                    {"name": "tags", "type": "Tag"},
                    {"name": "comments", "type": "Comment"},
                ],
            },
            "User": {
                "singular": [{"name": "profile", "type": "Profile"}],
                "list": [{"name": "posts", "type": "Post"}],
            },
            "Comment": {
                "singular": [{"name": "author", "type": "User"}],
            },
        },
        unique_fields={
            "Category": ["name"],
            "Tag": ["name"],
            "User": ["email", "username"],
        },
    )
