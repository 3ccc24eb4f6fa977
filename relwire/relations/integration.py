"""
Entry point used by request handlers before a create/update call.
"""

import logging
from typing import Any, Iterable, Optional, Union

from django.db import models

from ..core.services import get_relation_metadata
from .compiler import RelationCompiler
from .exceptions import RelationInputError

logger = logging.getLogger(__name__)


def compile_model_payload(
    model: Union[str, type[models.Model]],
    body: Optional[dict[str, Any]],
    *,
    ignore_actions: Optional[Iterable[str]] = None,
    schema_name: str = "default",
) -> dict[str, Any]:
    """
    Compile the relation fields of ``body`` for ``model``.

    ``model`` may be a model class, an ``"app_label.Model"`` label or any
    type name known to the configured metadata provider. Configured
    ``ignore_actions`` are merged with the ones passed here.
    """
    metadata = get_relation_metadata()
    compiler = RelationCompiler.from_settings(schema_name, metadata=metadata)

    type_name = model._meta.label if isinstance(model, type) else model
    descriptor = metadata.get_relation_descriptor(type_name)
    if descriptor is None:
        logger.debug("No relation metadata for %s; compiling without relations", type_name)

    try:
        return compiler.compile(body, descriptor, ignore_actions)
    except RelationInputError as exc:
        logger.info(
            "Rejected relation input for %s at %s: %s",
            type_name,
            exc.field or "<root>",
            exc.code,
        )
        raise
