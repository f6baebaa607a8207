from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set, Tuple

from follow_graph.logging import get_logger
from follow_graph.models.entity import RelationshipEntity

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ReconciliationResult:
    not_following_back: Tuple[RelationshipEntity, ...]
    not_followed_back: Tuple[RelationshipEntity, ...]
    mutual: frozenset

    @property
    def mutual_count(self) -> int:
        return len(self.mutual)


def identifiers(entities: Iterable[RelationshipEntity]) -> Set[str]:
    return {entity.identifier for entity in entities}


def _missing_from(source: Sequence[RelationshipEntity], present: Set[str]) -> List[RelationshipEntity]:
    return [entity for entity in source if entity.identifier not in present]


def reconcile(
    followers: Sequence[RelationshipEntity],
    following: Sequence[RelationshipEntity],
) -> ReconciliationResult:
    """Split followers/following into the two non-reciprocal sets.

    Identity is the identifier alone; event times are ignored. Each result
    keeps the order of the collection it was filtered from.
    """
    follower_ids = identifiers(followers)
    following_ids = identifiers(following)

    result = ReconciliationResult(
        not_following_back=tuple(_missing_from(following, follower_ids)),
        not_followed_back=tuple(_missing_from(followers, following_ids)),
        mutual=frozenset(follower_ids & following_ids),
    )
    LOGGER.debug(
        "Reconciled %d followers against %d following (%d not following back, %d not followed back)",
        len(followers),
        len(following),
        len(result.not_following_back),
        len(result.not_followed_back),
    )
    return result


__all__ = ["ReconciliationResult", "identifiers", "reconcile"]
