from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

from follow_graph.models.entity import SortKey, SortOrder, ViewMode

CAPTIONS = {
    ViewMode.NOT_FOLLOWING_BACK: "Followed on",
    ViewMode.NOT_FOLLOWED_BACK: "Followed you on",
    ViewMode.RECEIVED_REQUESTS: "Request received on",
    ViewMode.SENT_REQUESTS: "Request sent on",
    ViewMode.FOLLOWERS: "Follower since",
    ViewMode.FOLLOWING: "Following since",
}

TITLES = {
    ViewMode.NOT_FOLLOWING_BACK: "Not Following Back",
    ViewMode.NOT_FOLLOWED_BACK: "Not Followed Back",
    ViewMode.RECEIVED_REQUESTS: "Received Requests",
    ViewMode.SENT_REQUESTS: "Sent Requests",
    ViewMode.FOLLOWERS: "Followers",
    ViewMode.FOLLOWING: "Following",
}


def caption(mode: ViewMode) -> str:
    return CAPTIONS[ViewMode(mode)]


def title(mode: ViewMode) -> str:
    return TITLES[ViewMode(mode)]


def format_event_date(event_time: int, tz: Optional[tzinfo] = None) -> str:
    """Render an epoch timestamp as e.g. ``November 14, 2023``."""
    moment = datetime.fromtimestamp(event_time, tz)
    return f"{moment:%B} {moment.day}, {moment.year}"


def sort_indicator(active: SortKey, order: SortOrder, key: SortKey) -> str:
    if SortKey(key) is not SortKey(active):
        return ""
    return "▲" if SortOrder(order) is SortOrder.ASC else "▼"


__all__ = ["caption", "format_event_date", "sort_indicator", "title"]
