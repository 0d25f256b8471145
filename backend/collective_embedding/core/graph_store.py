"""Graph Store — participant nodes and directed, channel-tagged weighted edges.

Invariants:
    - edges[(source, target, channel)].weight == nodes[source].outgoing[target][channel]
    - Weights are positive integers; an entry that drops to zero is removed from both
      the adjacency map and the edge index
    - Nodes are never removed individually (only clear()); targets of departed
      participants keep their history
    - Self-loops are not rejected here: callers avoid them

Design Decisions:
    - Adjacency map is the source of truth; the edge index is a flat materialized view
      kept for enumeration (rendering lists every edge without walking every node)
    - Dict insertion order is the enumeration order (positional labels depend on it)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from collective_embedding.core.channels import resolve_channel
from collective_embedding.core.domain_types import Channel, ParticipantId


EdgeKey = tuple[ParticipantId, ParticipantId, Channel]


@dataclass
class Node:
    """One participant's position in the graph."""
    id: ParticipantId
    outgoing: dict[ParticipantId, dict[Channel, int]] = field(default_factory=dict)

    @property
    def out_weight(self) -> int:
        return sum(
            weight
            for channel_weights in self.outgoing.values()
            for weight in channel_weights.values()
        )

    def connects_to(self, target: ParticipantId) -> bool:
        return bool(self.outgoing.get(target))


@dataclass
class Edge:
    """Flat record of how many times source nominated target on a channel."""
    source: ParticipantId
    target: ParticipantId
    channel: Channel
    weight: int
    updated_at: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


class GraphStore:
    """Owns nodes and edges for a single session."""

    def __init__(self) -> None:
        self.nodes: dict[ParticipantId, Node] = {}
        self.edges: dict[EdgeKey, Edge] = {}

    # --- Nodes -----------------------------------------------------------------

    def add_node(self, node_id: ParticipantId) -> Node:
        """Return the node for node_id, creating an empty one if needed."""
        node = self.nodes.get(node_id)
        if node is None:
            node = Node(id=node_id)
            self.nodes[node_id] = node
        return node

    def has_node(self, node_id: ParticipantId) -> bool:
        return node_id in self.nodes

    def node_ids(self) -> list[ParticipantId]:
        return list(self.nodes)

    def position_of(self, node_id: ParticipantId) -> int | None:
        """Zero-based position in enumeration order, None when absent."""
        for index, existing in enumerate(self.nodes):
            if existing == node_id:
                return index
        return None

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    # --- Edges -----------------------------------------------------------------

    def upsert_edge(
        self,
        source: ParticipantId,
        target: ParticipantId,
        channel: str | Channel,
        now: datetime | None = None,
    ) -> Edge:
        """Add one unit of weight to (source, target, channel)."""
        channel = resolve_channel(channel)
        timestamp = now or _now()
        channel_weights = self.add_node(source).outgoing.setdefault(target, {})
        weight = channel_weights.get(channel, 0) + 1
        channel_weights[channel] = weight

        key = (source, target, channel)
        edge = self.edges.get(key)
        if edge is None:
            edge = Edge(source, target, channel, weight, timestamp)
            self.edges[key] = edge
        else:
            edge.weight = weight
            edge.updated_at = timestamp
        return edge

    def retract_edge(
        self,
        source: ParticipantId,
        target: ParticipantId,
        channel: str | Channel,
        now: datetime | None = None,
    ) -> Edge | None:
        """Remove one unit of weight. Returns the surviving edge, None if it vanished."""
        channel = resolve_channel(channel)
        node = self.nodes.get(source)
        channel_weights = node.outgoing.get(target) if node else None
        if not channel_weights or channel not in channel_weights:
            return None

        key = (source, target, channel)
        weight = channel_weights[channel] - 1
        if weight <= 0:
            del channel_weights[channel]
            if not channel_weights:
                del node.outgoing[target]
            self.edges.pop(key, None)
            return None

        channel_weights[channel] = weight
        edge = self.edges[key]
        edge.weight = weight
        edge.updated_at = now or _now()
        return edge

    def incoming_weight(self, target: ParticipantId) -> dict[Channel, int]:
        """Sum of every source's weight toward target, per channel."""
        totals = {channel: 0 for channel in Channel}
        for node in self.nodes.values():
            for channel, weight in node.outgoing.get(target, {}).items():
                totals[channel] += weight
        return totals

    def iter_edges(self) -> list[Edge]:
        return list(self.edges.values())

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
