"""
Django app configuration for the relwire library.
"""

import logging

from django.apps import AppConfig as BaseAppConfig
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for relwire."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "relwire"
    verbose_name = "Relwire"
    label = "relwire"

    def ready(self):
        """Validate library settings once Django has loaded."""
        problems = self._validate_configuration()
        if problems:
            for problem in problems:
                logger.error("Invalid relwire setting: %s", problem)
            if self._is_debug_mode():
                raise ImproperlyConfigured("; ".join(problems))
        else:
            logger.info("relwire initialized")

    def _validate_configuration(self) -> list[str]:
        from django.conf import settings as django_settings

        from .defaults import merge_settings, validate_settings
        from .core.settings.base import KNOWN_SECTION_KEYS, _get_library_defaults

        configured = getattr(django_settings, "RELWIRE", {}) or {}
        if any(k in configured for k in KNOWN_SECTION_KEYS):
            sections = {"default": configured}
        else:
            sections = configured

        problems: list[str] = []
        for schema_name, schema_settings in sections.items():
            merged = merge_settings(_get_library_defaults(), schema_settings or {})
            problems.extend(
                f"[{schema_name}] {problem}" for problem in validate_settings(merged)
            )
        return problems

    def _is_debug_mode(self):
        from django.conf import settings as django_settings

        return getattr(django_settings, "DEBUG", False)
