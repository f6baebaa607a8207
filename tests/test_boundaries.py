"""Tests for file reading, display helpers and settings."""

from datetime import timezone

import pytest
from pydantic import ValidationError

from follow_graph.config import Settings
from follow_graph.errors import MalformedInputError
from follow_graph.models.entity import SortKey, SortOrder, ViewMode
from follow_graph.storage.export_reader import read_export
from follow_graph.views import caption, format_event_date, sort_indicator, title


class TestReadExport:

    def test_reads_json(self, write_json):
        path = write_json("followers.json", [{"string_list_data": []}])
        assert read_export(path) == [{"string_list_data": []}]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MalformedInputError) as excinfo:
            read_export(path)
        assert excinfo.value.source == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(MalformedInputError):
            read_export(tmp_path / "absent.json")


class TestViews:

    def test_format_event_date(self):
        assert format_event_date(1700000000, timezone.utc) == "November 14, 2023"

    def test_captions(self):
        assert caption(ViewMode.NOT_FOLLOWING_BACK) == "Followed on"
        assert caption(ViewMode.NOT_FOLLOWED_BACK) == "Followed you on"
        assert caption(ViewMode.RECEIVED_REQUESTS) == "Request received on"
        assert caption(ViewMode.SENT_REQUESTS) == "Request sent on"
        assert all(title(mode) for mode in ViewMode)

    def test_sort_indicator(self):
        assert sort_indicator(SortKey.NAME, SortOrder.ASC, SortKey.NAME) == "▲"
        assert sort_indicator(SortKey.NAME, SortOrder.DESC, SortKey.NAME) == "▼"
        assert sort_indicator(SortKey.NAME, SortOrder.DESC, SortKey.TIMESTAMP) == ""


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.default_view is ViewMode.NOT_FOLLOWING_BACK
        assert settings.default_sort_by is SortKey.TIMESTAMP
        assert settings.default_sort_order is SortOrder.DESC
        assert settings.tzinfo() is None

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FOLLOW_GRAPH_DEFAULT_SORT_BY", "name")
        monkeypatch.setenv("FOLLOW_GRAPH_OWNER_LABEL", "someone")
        settings = Settings()
        assert settings.default_sort_by is SortKey.NAME
        assert settings.owner_label == "someone"

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError):
            Settings(timezone="Not/AZone")

    def test_blank_timezone_means_local(self):
        assert Settings(timezone="  ").timezone is None
