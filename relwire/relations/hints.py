"""
The ``apiAction`` hint clients put on relation values.
"""

from typing import Any

HINT_KEY = "apiAction"

RECOGNIZED_ACTIONS = ("create", "connect", "update", "delete", "disconnect")


def get_hint(value: Any) -> Any:
    """Return the hint carried by ``value``, or None."""
    if isinstance(value, dict):
        return value.get(HINT_KEY)
    return None


def without_hint(value: dict) -> dict:
    """Return a shallow copy of ``value`` without its hint."""
    return {key: item for key, item in value.items() if key != HINT_KEY}


def strip_hints(value: Any) -> Any:
    """
    Return a copy of ``value`` with every ``apiAction`` key removed.

    Lists are mapped element-wise and dicts are rebuilt recursively; any
    other value is returned as-is.
    """
    if isinstance(value, list):
        return [strip_hints(item) for item in value]
    if isinstance(value, dict):
        return {
            key: strip_hints(item) for key, item in value.items() if key != HINT_KEY
        }
    return value
