from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Dict, List, Mapping, Optional, Sequence

from follow_graph.logging import get_logger
from follow_graph.models.entity import CollectionName, MonthlyAggregateRow, RelationshipEntity

LOGGER = get_logger(__name__)


def period_of(event_time: int, tz: Optional[tzinfo] = None) -> str:
    """Return the ``YYYY-MM`` calendar month of an epoch timestamp.

    ``tz=None`` uses the host's local time zone.
    """
    moment = datetime.fromtimestamp(event_time, tz)
    return f"{moment.year:04d}-{moment.month:02d}"


def aggregate(
    collections: Mapping[CollectionName, Sequence[RelationshipEntity]],
    tz: Optional[tzinfo] = None,
) -> List[MonthlyAggregateRow]:
    """Count events per calendar month for each named collection.

    Only months with at least one event get a row. Rows are ordered by
    period, which is chronological for the fixed ``YYYY-MM`` format.
    """
    counts: Dict[str, Dict[CollectionName, int]] = {}
    for name, entities in collections.items():
        name = CollectionName(name)
        for entity in entities:
            period = period_of(entity.event_time, tz)
            row = counts.get(period)
            if row is None:
                row = counts[period] = {member: 0 for member in CollectionName}
            row[name] += 1

    rows = [
        MonthlyAggregateRow(period=period, **{name.value: value for name, value in row.items()})
        for period, row in sorted(counts.items())
    ]
    LOGGER.debug("Aggregated events into %d monthly rows", len(rows))
    return rows


__all__ = ["aggregate", "period_of"]
