"""
RelationCompilerSettings implementation.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from .base import _get_global_settings, _get_library_defaults, _merge_settings_dicts


@dataclass
class RelationCompilerSettings:
    """Settings for compiling nested relation input."""
    ignore_actions: List[str] = field(default_factory=list)
    max_nested_depth: int = 10
    max_list_items: Optional[int] = None
    max_total_nodes: Optional[int] = None
    reject_root_hint: bool = True

    @classmethod
    def from_schema(cls, schema_name: str = "default") -> "RelationCompilerSettings":
        defaults = _get_library_defaults().get("relation_settings", {})
        global_settings = _get_global_settings(schema_name).get("relation_settings", {})
        merged = _merge_settings_dicts(defaults, global_settings)
        valid_fields = set(cls.__dataclass_fields__.keys())
        settings = cls(**{k: v for k, v in merged.items() if k in valid_fields})
        settings.ignore_actions = list(settings.ignore_actions or [])
        return settings
