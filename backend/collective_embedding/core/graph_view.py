"""Graph View — presentation-ready reads over a Session. Never mutates.

Invariants:
    - Every read recomputes embedding, centrality, role, and color from the live GraphStore
    - Node embedding in views is the percentage form; color uses the raw weights
    - node_profile raises ResourceNotFoundError for an id that is not a graph node

Design Decisions:
    - Pure functions returning dicts, not methods on Session: Session is state,
      views are presentation (schemas/ wraps these dicts at the HTTP boundary)
"""

from collective_embedding.core.centrality import centrality_of
from collective_embedding.core.channels import channel_color, channel_legend
from collective_embedding.core.color_blend import blend_color
from collective_embedding.core.domain_types import ParticipantId
from collective_embedding.core.embedding import embedding_of, embedding_to_percentages
from collective_embedding.core.errors import ErrorContext, ResourceNotFoundError
from collective_embedding.core.graph_store import Edge
from collective_embedding.core.roles import classify_role, describe_node
from collective_embedding.core.session_state import Session


MIN_NODE_SIZE: int = 10
NODE_BASE_SIZE: int = 15
NODE_SIZE_PER_VOLUME: int = 3
MIN_EDGE_THICKNESS: int = 2
MAX_EDGE_THICKNESS: int = 10
EDGE_THICKNESS_PER_WEIGHT: int = 3


def node_size(total_volume: int) -> int:
    return max(MIN_NODE_SIZE, total_volume * NODE_SIZE_PER_VOLUME + NODE_BASE_SIZE)


def edge_thickness(weight: int) -> int:
    return max(MIN_EDGE_THICKNESS, min(weight * EDGE_THICKNESS_PER_WEIGHT, MAX_EDGE_THICKNESS))


def session_status(session: Session) -> dict:
    if session.id is None:
        return {"active": False}
    return {
        "active": session.active,
        "session_id": session.id,
        "paused": session.paused,
        "completed": session.completed,
        "participant_count": session.participant_count,
        "current_question_index": session.question_index,
        "total_questions": session.total_questions,
        "epoch_count": session.epoch,
        "identity_deleted": session.identity_suppressed,
    }


def node_view(session: Session, node_id: ParticipantId) -> dict:
    graph = session.graph
    embedding = embedding_of(graph, node_id)
    centrality = centrality_of(graph, node_id)
    percentages = embedding_to_percentages(embedding)
    return {
        "id": node_id,
        "label": session.identity.label_for(node_id, graph),
        "embedding": {channel.value: pct for channel, pct in percentages.items()},
        "color": blend_color(embedding),
        "size": node_size(centrality.total_volume),
        "centrality": centrality.to_dict(),
        "role": classify_role(centrality).value,
        "is_anonymous": session.identity_suppressed,
        "description": describe_node(embedding, centrality),
    }


def edge_view(edge: Edge) -> dict:
    return {
        "source": edge.source,
        "target": edge.target,
        "channel": edge.channel.value,
        "color": channel_color(edge.channel),
        "weight": edge.weight,
        "thickness": edge_thickness(edge.weight),
        "timestamp": edge.updated_at.isoformat(),
    }


def graph_snapshot(session: Session) -> dict:
    return {
        "nodes": [node_view(session, node_id) for node_id in session.graph.node_ids()],
        "edges": [edge_view(edge) for edge in session.graph.iter_edges()],
        "channels": channel_legend(),
    }


def node_profile(session: Session, node_id: ParticipantId) -> dict:
    """Node view plus every outgoing connection with per-channel weights."""
    graph = session.graph
    node = graph.nodes.get(node_id)
    if node is None:
        raise ResourceNotFoundError(
            "Node", node_id, ErrorContext(session_id=session.id),
        )
    profile = node_view(session, node_id)
    profile["connections"] = [
        {
            "target_id": target_id,
            "target_label": session.identity.label_for(target_id, graph),
            "channels": [
                {
                    "channel": channel.value,
                    "weight": weight,
                    "color": channel_color(channel),
                }
                for channel, weight in channel_weights.items()
            ],
        }
        for target_id, channel_weights in node.outgoing.items()
    ]
    return profile
