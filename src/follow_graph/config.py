from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from follow_graph.models.entity import DisplayMode, SortKey, SortOrder, ViewMode


PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"


def load_environment() -> None:
    """Load environment variables from the project .env file if it exists."""
    load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FOLLOW_GRAPH_")

    default_view: ViewMode = ViewMode.NOT_FOLLOWING_BACK
    default_sort_by: SortKey = SortKey.TIMESTAMP
    default_sort_order: SortOrder = SortOrder.DESC
    default_display: DisplayMode = DisplayMode.GRID
    timezone: Optional[str] = Field(None, description="IANA zone for calendar maths; host-local when unset.")
    owner_label: str = Field("me", min_length=1)

    @field_validator("timezone")
    def known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone {value!r}") from exc
        return value

    def tzinfo(self) -> Optional[tzinfo]:
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_environment()
    return Settings()


__all__ = ["Settings", "get_settings", "load_environment", "PROJECT_ROOT"]
