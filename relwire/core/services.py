"""
Service hooks for pluggable runtime components.

Lightweight dependency injection point for the relation metadata provider
used by ``compile_model_payload`` and ``RelationCompiler.from_settings``.
"""

from __future__ import annotations

from typing import Callable, Optional

from relwire.relations.metadata import RelationMetadataProvider

RelationMetadataFactory = Callable[[], RelationMetadataProvider]

_relation_metadata_factory: Optional[RelationMetadataFactory] = None
_default_relation_metadata: Optional[RelationMetadataProvider] = None


def set_relation_metadata_factory(factory: Optional[RelationMetadataFactory]) -> None:
    global _relation_metadata_factory
    _relation_metadata_factory = factory


def get_relation_metadata() -> RelationMetadataProvider:
    if _relation_metadata_factory is not None:
        return _relation_metadata_factory()
    global _default_relation_metadata
    if _default_relation_metadata is None:
        from relwire.relations.django_metadata import DjangoRelationMetadata

        _default_relation_metadata = DjangoRelationMetadata()
    return _default_relation_metadata


def reset_relation_metadata() -> None:
    """Drop the cached default provider (e.g. after models change in tests)."""
    global _default_relation_metadata
    _default_relation_metadata = None
