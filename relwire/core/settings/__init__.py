"""
Settings package for relwire.
"""

from .relation_settings import RelationCompilerSettings

__all__ = [
    "RelationCompilerSettings",
]
