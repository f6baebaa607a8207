"""Session state for the analyzer.

The four uploaded collections are the only durable data. Every user action
goes through a reducer that returns a new :class:`AnalyzerState`; derived
values are pure functions of the collections, cached on the tuples they
read.
"""

from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from follow_graph.analysis.aggregator import aggregate
from follow_graph.analysis.normalizer import normalize_collection
from follow_graph.analysis.reconciler import ReconciliationResult, reconcile
from follow_graph.analysis.sorter import sort_entities
from follow_graph.config import Settings
from follow_graph.logging import get_logger
from follow_graph.models.entity import (
    CollectionName,
    DisplayMode,
    MonthlyAggregateRow,
    RelationshipEntity,
    SortKey,
    SortOrder,
    ViewMode,
)

LOGGER = get_logger(__name__)

Entities = Tuple[RelationshipEntity, ...]


class AnalyzerState(BaseModel):
    model_config = ConfigDict(frozen=True)

    followers: Entities = ()
    following: Entities = ()
    received_requests: Entities = ()
    sent_requests: Entities = ()
    view_mode: ViewMode = ViewMode.NOT_FOLLOWING_BACK
    sort_by: SortKey = SortKey.TIMESTAMP
    sort_order: SortOrder = SortOrder.DESC
    display_mode: DisplayMode = DisplayMode.GRID

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalyzerState":
        return cls(
            view_mode=settings.default_view,
            sort_by=settings.default_sort_by,
            sort_order=settings.default_sort_order,
            display_mode=settings.default_display,
        )

    def collection(self, name: CollectionName) -> Entities:
        return getattr(self, CollectionName(name).value)

    def collections(self) -> Dict[CollectionName, Entities]:
        return {name: self.collection(name) for name in CollectionName}


# reducers


def load_collection(state: AnalyzerState, name: CollectionName, document: Any) -> AnalyzerState:
    """Replace one collection with the normalized contents of ``document``.

    Raises :class:`~follow_graph.errors.MalformedInputError` without
    producing a new state, so the caller keeps the previous one.
    """
    name = CollectionName(name)
    entities = tuple(normalize_collection(name, document))
    LOGGER.debug("Loaded %d %s", len(entities), name.value.replace("_", " "))
    return state.model_copy(update={name.value: entities})


def select_view(state: AnalyzerState, mode: ViewMode) -> AnalyzerState:
    return state.model_copy(update={"view_mode": ViewMode(mode)})


def toggle_sort(state: AnalyzerState, key: SortKey) -> AnalyzerState:
    """Flip the order when ``key`` is already active, otherwise sort ascending by ``key``."""
    key = SortKey(key)
    if key is state.sort_by:
        return state.model_copy(update={"sort_order": state.sort_order.flipped()})
    return state.model_copy(update={"sort_by": key, "sort_order": SortOrder.ASC})


def set_sort(state: AnalyzerState, key: SortKey, order: SortOrder) -> AnalyzerState:
    return state.model_copy(update={"sort_by": SortKey(key), "sort_order": SortOrder(order)})


def toggle_display(state: AnalyzerState) -> AnalyzerState:
    mode = DisplayMode.TABLE if state.display_mode is DisplayMode.GRID else DisplayMode.GRID
    return state.model_copy(update={"display_mode": mode})


def clear_collections(state: AnalyzerState) -> AnalyzerState:
    return state.model_copy(update={name.value: () for name in CollectionName})


# derived values


@lru_cache(maxsize=16)
def _reconcile_cached(followers: Entities, following: Entities) -> ReconciliationResult:
    return reconcile(followers, following)


@lru_cache(maxsize=16)
def _aggregate_cached(
    followers: Entities,
    following: Entities,
    received_requests: Entities,
    sent_requests: Entities,
    tz: Optional[tzinfo],
) -> Tuple[MonthlyAggregateRow, ...]:
    collections = {
        CollectionName.FOLLOWERS: followers,
        CollectionName.FOLLOWING: following,
        CollectionName.RECEIVED_REQUESTS: received_requests,
        CollectionName.SENT_REQUESTS: sent_requests,
    }
    return tuple(aggregate(collections, tz))


@lru_cache(maxsize=32)
def _sorted_cached(entities: Entities, key: SortKey, order: SortOrder) -> Entities:
    return tuple(sort_entities(entities, key, order))


def reconciliation(state: AnalyzerState) -> ReconciliationResult:
    return _reconcile_cached(state.followers, state.following)


def monthly_report(state: AnalyzerState, tz: Optional[tzinfo] = None) -> List[MonthlyAggregateRow]:
    return list(
        _aggregate_cached(
            state.followers,
            state.following,
            state.received_requests,
            state.sent_requests,
            tz,
        )
    )


def view_entities(state: AnalyzerState, mode: Optional[ViewMode] = None) -> Entities:
    mode = ViewMode(mode or state.view_mode)
    if mode is ViewMode.NOT_FOLLOWING_BACK:
        return reconciliation(state).not_following_back
    if mode is ViewMode.NOT_FOLLOWED_BACK:
        return reconciliation(state).not_followed_back
    return state.collection(CollectionName(mode.value))


def current_view(state: AnalyzerState) -> List[RelationshipEntity]:
    return list(_sorted_cached(view_entities(state), state.sort_by, state.sort_order))


def view_counts(state: AnalyzerState) -> Dict[ViewMode, int]:
    return {mode: len(view_entities(state, mode)) for mode in ViewMode}


def has_data(state: AnalyzerState) -> bool:
    return any(state.collection(name) for name in CollectionName)


__all__ = [
    "AnalyzerState",
    "clear_collections",
    "current_view",
    "has_data",
    "load_collection",
    "monthly_report",
    "reconciliation",
    "select_view",
    "set_sort",
    "toggle_display",
    "toggle_sort",
    "view_counts",
    "view_entities",
]
