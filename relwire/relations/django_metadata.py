"""
Relation metadata read from installed Django models.

Type names are model labels (``"blog.Post"``). A bare model name
(``"Post"``) is accepted as long as only one installed app defines it.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional, Union

from django.apps import apps
from django.db import models

from .metadata import DEFAULT_IDENTIFIER, FieldRef, RelationDescriptor

logger = logging.getLogger(__name__)

ModelRef = Union[str, type[models.Model]]


def model_type_name(model: type[models.Model]) -> str:
    return model._meta.label


class DjangoRelationMetadata:
    """``RelationMetadataProvider`` backed by Django model introspection."""

    def __init__(self):
        self._descriptors: dict[str, RelationDescriptor] = {}
        self._unique_fields: dict[str, list[str]] = {}
        self._lock = threading.Lock()

    def clear_cache(self) -> None:
        with self._lock:
            self._descriptors.clear()
            self._unique_fields.clear()

    def resolve_model(self, ref: ModelRef) -> Optional[type[models.Model]]:
        """Return the model class for a label, bare name or model class."""
        if isinstance(ref, type) and issubclass(ref, models.Model):
            return ref
        if not isinstance(ref, str) or not ref:
            return None
        if "." in ref:
            try:
                return apps.get_model(ref)
            except (LookupError, ValueError):
                return None

        matches = [
            model
            for model in apps.get_models(include_auto_created=False)
            if model._meta.object_name.lower() == ref.lower()
        ]
        if len(matches) > 1:
            logger.warning(
                "Model name %s is ambiguous (%s); use an app label",
                ref,
                ", ".join(model_type_name(model) for model in matches),
            )
            return None
        return matches[0] if matches else None

    def get_relation_descriptor(self, type_name: ModelRef) -> Optional[RelationDescriptor]:
        model = self.resolve_model(type_name)
        if model is None:
            return None
        key = model_type_name(model)
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            descriptor = self._build_descriptor(model)
            with self._lock:
                self._descriptors[key] = descriptor
        return descriptor

    def get_unique_fields(self, type_name: ModelRef) -> list[str]:
        model = self.resolve_model(type_name)
        if model is None:
            return []
        key = model_type_name(model)
        fields = self._unique_fields.get(key)
        if fields is None:
            fields = self._collect_unique_fields(model)
            with self._lock:
                self._unique_fields[key] = fields
        return list(fields)

    def get_identifier_field(self, type_name: ModelRef) -> str:
        model = self.resolve_model(type_name)
        if model is None or model._meta.pk is None:
            return DEFAULT_IDENTIFIER
        return model._meta.pk.name

    def _build_descriptor(self, model: type[models.Model]) -> RelationDescriptor:
        singular: list[FieldRef] = []
        many: list[FieldRef] = []

        for field in model._meta.get_fields(include_hidden=False):
            if not getattr(field, "is_relation", False):
                continue
            related_model = getattr(field, "related_model", None)
            # Generic foreign keys have no single related model.
            if related_model is None or isinstance(related_model, str):
                continue
            name = self._relation_field_name(field)
            if not name:
                continue
            ref = FieldRef(name=name, related_type=model_type_name(related_model))
            if field.many_to_many or field.one_to_many:
                many.append(ref)
            elif field.many_to_one or field.one_to_one:
                singular.append(ref)

        logger.debug(
            "Introspected %s: %s singular, %s list relations",
            model_type_name(model),
            len(singular),
            len(many),
        )
        return RelationDescriptor(singular=tuple(singular), list=tuple(many))

    def _relation_field_name(self, field: Any) -> Optional[str]:
        if field.auto_created and not field.concrete:
            # Reverse relation: payload key is the accessor name.
            return field.get_accessor_name()
        return field.name

    def _collect_unique_fields(self, model: type[models.Model]) -> list[str]:
        opts = model._meta
        pk_name = opts.pk.name if opts.pk is not None else None
        names: list[str] = []

        def _add(name: str) -> None:
            if name != pk_name and name not in names:
                names.append(name)

        for field in opts.concrete_fields:
            if getattr(field, "unique", False):
                _add(field.name)

        for constraint in getattr(opts, "constraints", []):
            if not isinstance(constraint, models.UniqueConstraint):
                continue
            fields = getattr(constraint, "fields", ()) or ()
            if len(fields) == 1 and getattr(constraint, "condition", None) is None:
                _add(fields[0])

        for group in opts.unique_together or ():
            if len(group) == 1:
                _add(group[0])

        return names
