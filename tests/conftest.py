from __future__ import annotations

import json
from pathlib import Path
from typing import List, Tuple

import pytest

from follow_graph.config import get_settings
from follow_graph.models.entity import RelationshipEntity


def export_entries(pairs: List[Tuple[str, int]]) -> list:
    return [
        {
            "title": "",
            "media_list_data": [],
            "string_list_data": [
                {"href": f"https://www.instagram.com/{name}", "value": name, "timestamp": ts}
            ],
        }
        for name, ts in pairs
    ]


def entities(*pairs: Tuple[str, int]) -> List[RelationshipEntity]:
    return [RelationshipEntity(identifier=name, event_time=ts) for name, ts in pairs]


@pytest.fixture
def write_json(tmp_path: Path):
    def _write(name: str, payload) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for var in (
        "FOLLOW_GRAPH_DEFAULT_VIEW",
        "FOLLOW_GRAPH_DEFAULT_SORT_BY",
        "FOLLOW_GRAPH_DEFAULT_SORT_ORDER",
        "FOLLOW_GRAPH_DEFAULT_DISPLAY",
        "FOLLOW_GRAPH_TIMEZONE",
        "FOLLOW_GRAPH_OWNER_LABEL",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
