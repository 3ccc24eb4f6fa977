"""
Classification of a single relation value into a mutation operation.

Rules, first match wins:

- hint listed in ``ignore_actions``            -> Omit
- ``delete`` / ``disconnect`` / ``connect``     -> Delete / Disconnect / Connect
- any other unrecognised hint                  -> UnknownApiActionError
- ``update``                                   -> Update (by id or unique field)
- no hint, addressable by a single unique key  -> Connect
- no hint or ``create``, identifier plus data  -> Update
- anything else                                -> Create

Classification only looks at the value itself, never at its siblings, and
does not recurse: nested relations inside Create/Update data are compiled
by the caller.
"""

from typing import Any, Collection, Optional

from .exceptions import MissingReferenceError, UnknownApiActionError
from .hints import HINT_KEY, RECOGNIZED_ACTIONS, without_hint
from .metadata import RelationMetadataProvider
from .operations import (
    Connect,
    Create,
    Delete,
    Disconnect,
    MutationOperation,
    Omit,
    Update,
)


def can_connect(
    related_type: str,
    candidate: Any,
    metadata: RelationMetadataProvider,
) -> bool:
    """
    Check whether ``candidate`` can be resolved purely by reference.

    That is the case when it carries ``apiAction: "connect"`` or when, hint
    aside, it holds exactly one key which is the identifier or a unique
    field of ``related_type``.
    """
    if not isinstance(candidate, dict):
        return False

    hint = candidate.get(HINT_KEY)
    if hint is not None and hint != "connect":
        return False
    if hint == "connect":
        return True

    keys = [key for key in candidate if key != HINT_KEY]
    if len(keys) != 1:
        return False

    key = keys[0]
    if key == metadata.get_identifier_field(related_type):
        return True
    return key in (metadata.get_unique_fields(related_type) or [])


def find_reference(
    related_type: str,
    value: dict,
    metadata: RelationMetadataProvider,
) -> Optional[dict]:
    """Return a ``{field: value}`` where clause for ``value``, or None."""
    identifier = metadata.get_identifier_field(related_type)
    if identifier in value:
        return {identifier: value[identifier]}
    for name in metadata.get_unique_fields(related_type) or []:
        if name in value:
            return {name: value[name]}
    return None


def classify_relation_value(
    related_type: str,
    value: dict,
    metadata: RelationMetadataProvider,
    ignore_actions: Collection[str] = (),
    path: Optional[str] = None,
) -> MutationOperation:
    """Classify one relation value (a dict) into a ``MutationOperation``."""
    hint = value.get(HINT_KEY)

    if hint is not None and hint in ignore_actions:
        return Omit(hint)

    if hint in ("delete", "disconnect"):
        # Singular delete/disconnect need no where clause; the list compiler
        # rejects an empty reference itself.
        reference = find_reference(related_type, value, metadata) or {}
        return Delete(reference) if hint == "delete" else Disconnect(reference)
    if hint == "connect":
        return Connect(without_hint(value))
    if hint is not None and hint not in RECOGNIZED_ACTIONS:
        raise UnknownApiActionError(hint, RECOGNIZED_ACTIONS, field=path)

    data = without_hint(value)

    if hint == "update":
        where = find_reference(related_type, data, metadata)
        if where is None:
            raise MissingReferenceError(related_type, "update", field=path)
        return Update(where=where, data=_without_keys(data, where))

    # An explicit create is never connectable, but an identifier plus data
    # still makes it an update.
    if can_connect(related_type, value, metadata):
        return Connect(data)

    identifier = metadata.get_identifier_field(related_type)
    if identifier in data and len(data) > 1:
        where = {identifier: data[identifier]}
        return Update(where=where, data=_without_keys(data, where))

    return Create(data)


def _without_keys(data: dict, where: dict) -> dict:
    return {key: item for key, item in data.items() if key not in where}
