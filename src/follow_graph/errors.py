from __future__ import annotations

from typing import Optional


class FollowGraphError(Exception):
    """Base class for errors raised by follow_graph."""


class MalformedInputError(FollowGraphError, ValueError):
    """An uploaded export does not have the expected nested shape."""

    def __init__(self, reason: str, *, index: Optional[int] = None, source: Optional[str] = None) -> None:
        self.reason = reason
        self.index = index
        self.source = source
        super().__init__(self._render())

    def _render(self) -> str:
        location = f"entry {self.index}: " if self.index is not None else ""
        origin = f" ({self.source})" if self.source else ""
        return f"{location}{self.reason}{origin}"


class EmptyInputWarning(UserWarning):
    """An export parsed cleanly but contained no entries."""


__all__ = ["EmptyInputWarning", "FollowGraphError", "MalformedInputError"]
