from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CollectionName(str, Enum):
    FOLLOWERS = "followers"
    FOLLOWING = "following"
    RECEIVED_REQUESTS = "received_requests"
    SENT_REQUESTS = "sent_requests"

    @property
    def list_key(self) -> Optional[str]:
        """Top-level key holding the entry list in the export file."""
        return _LIST_KEYS[self]


_LIST_KEYS = {
    CollectionName.FOLLOWERS: None,
    CollectionName.FOLLOWING: None,
    CollectionName.RECEIVED_REQUESTS: "relationships_follow_requests_received",
    CollectionName.SENT_REQUESTS: "relationships_follow_requests_sent",
}


class ViewMode(str, Enum):
    NOT_FOLLOWING_BACK = "not_following_back"
    NOT_FOLLOWED_BACK = "not_followed_back"
    RECEIVED_REQUESTS = "received_requests"
    SENT_REQUESTS = "sent_requests"
    FOLLOWERS = "followers"
    FOLLOWING = "following"


class SortKey(str, Enum):
    TIMESTAMP = "timestamp"
    NAME = "name"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class DisplayMode(str, Enum):
    GRID = "grid"
    TABLE = "table"


# 9999-12-30T23:59:59Z: every UTC offset still lands inside datetime's year range
MAX_EVENT_TIME = 253402214399


class RelationshipEntity(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, pattern=r"^[^\x00-\x1f\x7f]+$", strict=True)
    event_time: int = Field(..., ge=0, le=MAX_EVENT_TIME, strict=True)


class MonthlyAggregateRow(BaseModel):
    period: str
    followers: int = 0
    following: int = 0
    received_requests: int = 0
    sent_requests: int = 0

    def count_for(self, name: CollectionName) -> int:
        return getattr(self, name.value)


__all__ = [
    "CollectionName",
    "DisplayMode",
    "MAX_EVENT_TIME",
    "MonthlyAggregateRow",
    "RelationshipEntity",
    "SortKey",
    "SortOrder",
    "ViewMode",
]
