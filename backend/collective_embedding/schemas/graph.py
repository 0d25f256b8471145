"""Graph Schemas — Pydantic models for graph snapshot and node profile responses.

Invariants:
    - Node embedding is the percentage form (0-100 per channel)
    - Edge timestamp is the ISO-8601 time of the edge's last weight change

Design Decisions:
    - NodeProfile extends GraphNode: a profile is a node view plus its outgoing connections
"""

from pydantic import BaseModel

from collective_embedding.core.domain_types import Channel, NodeRole


class EmbeddingShares(BaseModel):
    cognitive: int = 0
    creative: int = 0
    technical: int = 0
    social: int = 0


class CentralityData(BaseModel):
    in_degree: int = 0
    out_degree: int = 0
    betweenness: int = 0
    total_volume: int = 0


class GraphNode(BaseModel):
    """A participant node, ready for the 3D renderer."""
    id: str
    label: str
    embedding: EmbeddingShares
    color: str
    size: int
    centrality: CentralityData
    role: NodeRole
    is_anonymous: bool
    description: str


class GraphEdge(BaseModel):
    source: str
    target: str
    channel: Channel
    color: str
    weight: int
    thickness: int
    timestamp: str


class ChannelLegend(BaseModel):
    id: Channel
    color: str
    name: str


class GraphData(BaseModel):
    """Complete graph snapshot."""
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    channels: list[ChannelLegend] = []


class ChannelWeight(BaseModel):
    channel: Channel
    weight: int
    color: str


class NodeConnection(BaseModel):
    target_id: str
    target_label: str
    channels: list[ChannelWeight] = []


class NodeProfile(GraphNode):
    connections: list[NodeConnection] = []
