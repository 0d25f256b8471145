"""Role Classifier — structural role and a one-paragraph description per node.

Invariants:
    - classify_role is a pure function of the centrality numbers
    - Rules are checked in fixed priority order; the first match wins:
      Bridge > Initiator > Amplifier > Connector > Stabilizer
    - describe_node returns "" while a node has no interaction volume
    - The description names the last of equally weighted channels; the color blend
      keeps the first (core.color_blend)
"""

from collective_embedding.core.centrality import Centrality
from collective_embedding.core.channels import CHANNELS
from collective_embedding.core.domain_types import NodeRole
from collective_embedding.core.embedding import Embedding, latest_dominant_channel


BRIDGE_BETWEENNESS: int = 2
DEGREE_RATIO: float = 1.5
CONNECTOR_MIN_DEGREE: int = 3
HIGH_VOLUME: int = 10
MODERATE_VOLUME: int = 5

_ROLE_CLAUSES: dict[NodeRole, str] = {
    NodeRole.BRIDGE: "Functions as a structural bridge, linking distinct network clusters.",
    NodeRole.AMPLIFIER: "Amplifies incoming signals across multiple channels.",
    NodeRole.INITIATOR: "Initiates connections and generates outward influence patterns.",
    NodeRole.CONNECTOR: "Maintains high bidirectional connectivity across channels.",
    NodeRole.STABILIZER: (
        "Provides network stabilization through consistent interaction patterns."
    ),
}


def classify_role(centrality: Centrality) -> NodeRole:
    in_degree, out_degree = centrality.in_degree, centrality.out_degree
    if centrality.betweenness > BRIDGE_BETWEENNESS:
        return NodeRole.BRIDGE
    if out_degree > in_degree * DEGREE_RATIO:
        return NodeRole.INITIATOR
    if in_degree > out_degree * DEGREE_RATIO:
        return NodeRole.AMPLIFIER
    if in_degree > CONNECTOR_MIN_DEGREE and out_degree > CONNECTOR_MIN_DEGREE:
        return NodeRole.CONNECTOR
    return NodeRole.STABILIZER


def _volume_clause(total_volume: int) -> str:
    if total_volume > HIGH_VOLUME:
        return "Demonstrates high interaction volume."
    if total_volume > MODERATE_VOLUME:
        return "Shows moderate interaction engagement."
    return "Maintains selective interaction patterns."


def describe_node(embedding: Embedding, centrality: Centrality) -> str:
    """Dominant-channel sentence + role clause + volume-tier clause."""
    if centrality.total_volume == 0:
        return ""
    dominant = latest_dominant_channel(embedding)
    if dominant is None:
        opening = "This node has not yet been nominated on any channel."
    else:
        opening = (
            f"This node exhibits primary {CHANNELS[dominant].name.lower()} patterns."
        )
    role = classify_role(centrality)
    return " ".join((opening, _ROLE_CLAUSES[role], _volume_clause(centrality.total_volume)))
