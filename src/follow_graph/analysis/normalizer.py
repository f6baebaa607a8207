from __future__ import annotations

import warnings
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional

from pydantic import ValidationError

from follow_graph.errors import EmptyInputWarning, MalformedInputError
from follow_graph.logging import get_logger
from follow_graph.models.entity import CollectionName, RelationshipEntity

LOGGER = get_logger(__name__)

DEFAULT_LIST_KEY = "relationships_following"
HISTORY_KEY = "string_list_data"


def _entry_list(document: Any, list_key: Optional[str]) -> Sequence[Any]:
    if list_key is not None:
        if not isinstance(document, Mapping):
            raise MalformedInputError(f"expected an object holding {list_key!r}")
        if list_key not in document:
            raise MalformedInputError(f"missing top-level key {list_key!r}")
        entries = document[list_key]
    elif isinstance(document, Mapping) and DEFAULT_LIST_KEY in document:
        entries = document[DEFAULT_LIST_KEY]
    else:
        entries = document

    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise MalformedInputError("expected a list of relationship entries")
    return entries


def _entity_from_entry(entry: Any, index: int) -> RelationshipEntity:
    if not isinstance(entry, Mapping):
        raise MalformedInputError("entry is not an object", index=index)

    history = entry.get(HISTORY_KEY)
    if isinstance(history, (str, bytes)) or not isinstance(history, Sequence) or not history:
        raise MalformedInputError(f"{HISTORY_KEY!r} must be a non-empty list", index=index)

    record = history[0]
    if not isinstance(record, Mapping) or "value" not in record or "timestamp" not in record:
        raise MalformedInputError("history record lacks 'value'/'timestamp'", index=index)

    try:
        return RelationshipEntity(identifier=record["value"], event_time=record["timestamp"])
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise MalformedInputError(f"invalid {fields}", index=index) from exc


def normalize(document: Any, list_key: Optional[str] = None) -> List[RelationshipEntity]:
    """Convert a parsed export document into relationship entities.

    With ``list_key`` the entries are read from ``document[list_key]``;
    otherwise ``relationships_following`` is tried before treating the
    document itself as the entry list. Only the first value/timestamp pair
    of each entry's history is used.

    A single malformed entry rejects the whole document with
    :class:`MalformedInputError`; nothing is skipped or coerced.
    """
    entries = _entry_list(document, list_key)
    entities = [_entity_from_entry(entry, index) for index, entry in enumerate(entries)]

    if not entities:
        LOGGER.warning("Export contained no relationship entries (key=%s)", list_key or DEFAULT_LIST_KEY)
        warnings.warn("export contained no relationship entries", EmptyInputWarning, stacklevel=2)
    else:
        LOGGER.debug("Normalized %d relationship entries", len(entities))
    return entities


def normalize_collection(name: CollectionName, document: Any) -> List[RelationshipEntity]:
    return normalize(document, name.list_key)


__all__ = ["DEFAULT_LIST_KEY", "normalize", "normalize_collection"]
