from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

import networkx as nx

from follow_graph.analysis.reconciler import reconcile
from follow_graph.logging import get_logger
from follow_graph.models.entity import CollectionName, RelationshipEntity

LOGGER = get_logger(__name__)

# (relation_type, owner is the edge source); duplicate entries become parallel edges
_RELATIONS = {
    CollectionName.FOLLOWERS: ("follower", False),
    CollectionName.FOLLOWING: ("following", True),
    CollectionName.RECEIVED_REQUESTS: ("follow_request_received", False),
    CollectionName.SENT_REQUESTS: ("follow_request_sent", True),
}


def build_ego_graph(
    collections: Mapping[CollectionName, Sequence[RelationshipEntity]],
    *,
    owner: str = "me",
) -> nx.MultiDiGraph:
    """Build the account owner's relationship graph.

    Each counterpart becomes a node flagged ``mutual`` when it both follows
    and is followed by the owner. Edges carry the relation type and the
    event time of the export record.
    """
    followers = collections.get(CollectionName.FOLLOWERS, ())
    following = collections.get(CollectionName.FOLLOWING, ())
    mutual = reconcile(followers, following).mutual

    graph = nx.MultiDiGraph()
    graph.add_node(owner, label=owner, owner=True, mutual=False)

    for name, (relation, outbound) in _RELATIONS.items():
        for entity in collections.get(name, ()):
            if entity.identifier == owner:
                LOGGER.debug("Skipping self-reference %s in %s", owner, name.value)
                continue
            if entity.identifier not in graph:
                graph.add_node(
                    entity.identifier,
                    label=entity.identifier,
                    owner=False,
                    mutual=entity.identifier in mutual,
                )
            source, target = (owner, entity.identifier) if outbound else (entity.identifier, owner)
            graph.add_edge(source, target, relation_type=relation, event_time=entity.event_time)

    LOGGER.info(
        "Graph contains %d nodes and %d edges (%d mutual)",
        graph.number_of_nodes(),
        graph.number_of_edges(),
        len(mutual),
    )
    return graph


def export_graphml(graph: nx.MultiDiGraph, path: Path) -> None:
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    nx.write_graphml(graph, path)
    LOGGER.info("Graph written to %s", path)


__all__ = ["build_ego_graph", "export_graphml"]
