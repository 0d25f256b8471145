"""Embedding Calculator — per-node vector of incoming weight per channel.

Invariants:
    - embedding_of returns one entry per Channel (zero vector for an unnominated node)
    - Raw weights are never normalized in place; percentages are a presentation copy
    - Percentages are rounded independently (half-up) and may not sum to exactly 100

Design Decisions:
    - Raw weights feed color blending and role descriptions; percentages only feed the UI
    - Two tie rules: dominant_channel (first of equal maxima) drives color blending,
      latest_dominant_channel (last of equal maxima) drives node descriptions
"""

import math

from collective_embedding.core.domain_types import Channel, ParticipantId
from collective_embedding.core.graph_store import GraphStore


Embedding = dict[Channel, int]


def embedding_of(store: GraphStore, node_id: ParticipantId) -> Embedding:
    """Raw accumulated incoming weight per channel."""
    return store.incoming_weight(node_id)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def embedding_to_percentages(embedding: Embedding) -> dict[Channel, int]:
    """Share of total incoming weight per channel, as whole percentages."""
    total = sum(embedding.values())
    if total == 0:
        return {channel: 0 for channel in Channel}
    return {
        channel: round_half_up(embedding.get(channel, 0) / total * 100)
        for channel in Channel
    }


def dominant_channel(embedding: Embedding) -> Channel | None:
    """Channel with the strictly greatest weight; first seen wins ties. None if all zero."""
    best: Channel | None = None
    best_weight = 0
    for channel in Channel:
        weight = embedding.get(channel, 0)
        if weight > best_weight:
            best, best_weight = channel, weight
    return best


def latest_dominant_channel(embedding: Embedding) -> Channel | None:
    """Channel with the greatest weight; the last of equal maxima wins. None if all zero."""
    best: Channel | None = None
    best_weight = 0
    for channel in Channel:
        weight = embedding.get(channel, 0)
        if weight > 0 and weight >= best_weight:
            best, best_weight = channel, weight
    return best
