from follow_graph.models.entity import (
    CollectionName,
    DisplayMode,
    MonthlyAggregateRow,
    RelationshipEntity,
    SortKey,
    SortOrder,
    ViewMode,
)

__all__ = [
    "CollectionName",
    "DisplayMode",
    "MonthlyAggregateRow",
    "RelationshipEntity",
    "SortKey",
    "SortOrder",
    "ViewMode",
]
