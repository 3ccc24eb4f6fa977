"""
Internal utility functions for settings loading.
"""

from typing import Any

from django.conf import settings as django_settings

KNOWN_SECTION_KEYS = {"relation_settings"}


def _merge_settings_dicts(*dicts: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple settings dictionaries with later ones taking precedence."""
    result = {}
    for d in dicts:
        if d: result.update(d)
    return result


def _get_global_settings(schema_name: str) -> dict[str, Any]:
    """Get settings from Django's ``RELWIRE`` setting for a specific schema."""
    relwire_settings = getattr(django_settings, "RELWIRE", {}) or {}
    if schema_name in relwire_settings and schema_name not in KNOWN_SECTION_KEYS:
        return relwire_settings.get(schema_name) or {}
    if any(k in relwire_settings for k in KNOWN_SECTION_KEYS): return relwire_settings
    return {}


def _get_environment_name() -> str:
    env = getattr(django_settings, "ENVIRONMENT", None)
    if not env: env = "production" if not getattr(django_settings, "DEBUG", False) else "development"
    return env


def _get_library_defaults() -> dict[str, Any]:
    """Get library default settings merged with the current environment's overrides."""
    from ...defaults import get_default_settings, get_environment_defaults, merge_settings
    return merge_settings(get_default_settings(), get_environment_defaults(_get_environment_name()))
