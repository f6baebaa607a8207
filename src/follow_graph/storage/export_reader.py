from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from follow_graph.errors import MalformedInputError
from follow_graph.logging import get_logger

LOGGER = get_logger(__name__)


def read_export(path: Path) -> Any:
    """Read one exported JSON file and return the parsed document."""
    path = path.expanduser()
    try:
        with path.open("r", encoding="utf-8") as fp:
            payload = json.load(fp)
    except OSError as exc:
        raise MalformedInputError(f"could not read file: {exc.strerror or exc}", source=str(path)) from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedInputError(f"invalid JSON: {exc}", source=str(path)) from exc
    LOGGER.debug("Parsed export %s", path)
    return payload


__all__ = ["read_export"]
