"""
Default configuration for the relwire library.

Single source of truth for every setting the library consumes. Each section
mirrors one of the dataclasses in ``relwire.core.settings``.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "relwire"


# --------------------------------------------------------------------------- #
# Library-wide defaults (grouped by feature area)
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "relation_settings": {
        "ignore_actions": [],
        "max_nested_depth": 10,
        "max_list_items": None,
        "max_total_nodes": None,
        "reject_root_hint": True,
    },
}


# --------------------------------------------------------------------------- #
# Environment overrides
# --------------------------------------------------------------------------- #
ENVIRONMENT_DEFAULTS: dict[str, dict[str, Any]] = {
    "development": {},
    "testing": {},
    "production": {
        "relation_settings": {
            "max_list_items": 1000,
            "max_total_nodes": 10000,
        }
    },
}


# --------------------------------------------------------------------------- #
# Helper functions
# --------------------------------------------------------------------------- #
def get_default_settings() -> dict[str, Any]:
    """Return a deep-enough copy of the library defaults."""
    return {section: dict(values) for section, values in LIBRARY_DEFAULTS.items()}


def get_environment_defaults(environment: str) -> dict[str, Any]:
    """Return environment-specific overrides."""
    return ENVIRONMENT_DEFAULTS.get(environment, {}).copy()


def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple settings dictionaries with deep merging for nested dicts.
    Later dictionaries override earlier ones.
    """
    result: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        for key, value in settings_dict.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_settings(result[key], value)
            else:
                result[key] = value
    return result


def validate_settings(settings: dict[str, Any]) -> list[str]:
    """
    Validate a settings dictionary and return a list of validation errors.
    """
    from .relations.hints import RECOGNIZED_ACTIONS

    errors: list[str] = []
    relation_settings = settings.get("relation_settings", {}) or {}

    for key in ("max_nested_depth", "max_list_items", "max_total_nodes"):
        value = relation_settings.get(key)
        if value is None:
            continue
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            errors.append(f"relation_settings.{key} must be a positive integer or None")

    ignore_actions = relation_settings.get("ignore_actions") or []
    if isinstance(ignore_actions, str) or not isinstance(ignore_actions, (list, tuple)):
        errors.append("relation_settings.ignore_actions must be a list of strings")
    else:
        for action in ignore_actions:
            if action in RECOGNIZED_ACTIONS:
                errors.append(
                    f"relation_settings.ignore_actions cannot contain "
                    f"the built-in action '{action}'"
                )

    return errors
