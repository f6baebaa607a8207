from __future__ import annotations

import locale
from typing import Callable, Iterable, List, Tuple, Union

from follow_graph.models.entity import RelationshipEntity, SortKey, SortOrder


def _name_key(entity: RelationshipEntity) -> Tuple[str, str, int]:
    return (locale.strxfrm(entity.identifier.casefold()), entity.identifier, entity.event_time)


def _timestamp_key(entity: RelationshipEntity) -> Tuple[int, str]:
    return (entity.event_time, entity.identifier)


_KEYS: dict = {
    SortKey.NAME: _name_key,
    SortKey.TIMESTAMP: _timestamp_key,
}


def sort_key(key: Union[SortKey, str]) -> Callable[[RelationshipEntity], tuple]:
    return _KEYS[SortKey(key)]


def sort_entities(
    entities: Iterable[RelationshipEntity],
    key: Union[SortKey, str] = SortKey.TIMESTAMP,
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> List[RelationshipEntity]:
    """Return a sorted copy of ``entities``.

    Ties on the chosen key are not kept in input order: timestamp ties are
    broken by identifier and name ties by event time. Only entities with
    identical identifier and event time stay tied, so descending order is
    always the exact reverse of ascending order.
    """
    return sorted(entities, key=sort_key(key), reverse=SortOrder(order) is SortOrder.DESC)


__all__ = ["sort_entities", "sort_key"]
