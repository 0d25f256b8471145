"""Centrality Analyzer — weighted degrees and a betweenness proxy per node.

Invariants:
    - in_degree == sum(embedding_of(node).values()) for every node
    - total_volume == in_degree + out_degree
    - A node absent from the store has all-zero centrality

Design Decisions:
    - Betweenness is a proxy, not shortest-path betweenness: a pair (i, j) of other
      nodes counts when i -> node and node -> j are both direct connections. Pairs are
      taken in enumeration order (i before j), so only that direction is checked.
      Undercounts in dense or cyclic graphs; O(n^2) per node, fine for <= 20 nodes.
"""

from dataclasses import asdict, dataclass

from collective_embedding.core.domain_types import ParticipantId
from collective_embedding.core.graph_store import GraphStore


@dataclass(frozen=True)
class Centrality:
    in_degree: int = 0
    out_degree: int = 0
    betweenness: int = 0
    total_volume: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def betweenness_proxy(store: GraphStore, node_id: ParticipantId) -> int:
    """Count pairs of other nodes bridged by a direct in-link and out-link."""
    middle = store.nodes.get(node_id)
    if middle is None:
        return 0
    others = [nid for nid in store.node_ids() if nid != node_id]
    count = 0
    for i, start_id in enumerate(others):
        if not store.nodes[start_id].connects_to(node_id):
            continue
        for end_id in others[i + 1:]:
            if middle.connects_to(end_id):
                count += 1
    return count


def centrality_of(store: GraphStore, node_id: ParticipantId) -> Centrality:
    node = store.nodes.get(node_id)
    if node is None:
        return Centrality()
    in_degree = sum(store.incoming_weight(node_id).values())
    out_degree = node.out_weight
    return Centrality(
        in_degree=in_degree,
        out_degree=out_degree,
        betweenness=betweenness_proxy(store, node_id),
        total_volume=in_degree + out_degree,
    )
