"""Embedding & Centrality — tests for derived per-node metrics.

Tests cover:
    - Raw embedding per channel, zero vector for unnominated nodes
    - Percentage rounding (independent, half-up, may not sum to 100)
    - Dominant channel tie rule
    - in_degree equals the embedding total for every node
    - Betweenness proxy counting and its directional limitation
"""

from collective_embedding.core.centrality import Centrality, betweenness_proxy, centrality_of
from collective_embedding.core.domain_types import Channel
from collective_embedding.core.embedding import (
    dominant_channel, embedding_of, embedding_to_percentages, latest_dominant_channel,
)
from collective_embedding.core.graph_store import GraphStore


def _store(*edges) -> GraphStore:
    store = GraphStore()
    for source, target, channel in edges:
        store.add_node(source)
        store.add_node(target)
        store.upsert_edge(source, target, channel)
    return store


# ─── embedding_of ────────────────────────────────────────────────

def test_embedding_is_zero_vector_without_incoming_edges():
    store = _store(("a", "b", Channel.TECHNICAL))
    assert embedding_of(store, "a") == {channel: 0 for channel in Channel}


def test_embedding_counts_raw_weights():
    store = _store(
        ("a", "c", Channel.TECHNICAL), ("b", "c", Channel.TECHNICAL),
        ("a", "c", Channel.SOCIAL),
    )
    embedding = embedding_of(store, "c")
    assert embedding[Channel.TECHNICAL] == 2
    assert embedding[Channel.SOCIAL] == 1


# ─── percentages ─────────────────────────────────────────────────

def test_percentages_all_zero_for_zero_total():
    zero = {channel: 0 for channel in Channel}
    assert embedding_to_percentages(zero) == zero


def test_percentages_rounding_error_not_redistributed():
    embedding = {
        Channel.COGNITIVE: 1, Channel.CREATIVE: 1,
        Channel.TECHNICAL: 1, Channel.SOCIAL: 0,
    }
    percentages = embedding_to_percentages(embedding)
    assert percentages[Channel.COGNITIVE] == 33
    assert sum(percentages.values()) == 99


def test_percentages_round_half_up():
    embedding = {
        Channel.COGNITIVE: 1, Channel.CREATIVE: 7,
        Channel.TECHNICAL: 0, Channel.SOCIAL: 0,
    }
    percentages = embedding_to_percentages(embedding)
    assert percentages[Channel.COGNITIVE] == 13
    assert percentages[Channel.CREATIVE] == 88
    assert sum(percentages.values()) == 101


# ─── dominant_channel ────────────────────────────────────────────

def test_dominant_channel_none_when_empty():
    assert dominant_channel({channel: 0 for channel in Channel}) is None


def test_dominant_channel_first_seen_wins_ties():
    embedding = {
        Channel.COGNITIVE: 0, Channel.CREATIVE: 2,
        Channel.TECHNICAL: 2, Channel.SOCIAL: 1,
    }
    assert dominant_channel(embedding) == Channel.CREATIVE


# ─── centrality ──────────────────────────────────────────────────

def test_centrality_of_missing_node_is_zero():
    assert centrality_of(GraphStore(), "ghost") == Centrality()


def test_degrees_are_weighted():
    store = _store(
        ("a", "b", Channel.TECHNICAL), ("a", "b", Channel.TECHNICAL),
        ("a", "b", Channel.SOCIAL), ("b", "a", Channel.CREATIVE),
    )
    centrality = centrality_of(store, "a")
    assert centrality.out_degree == 3
    assert centrality.in_degree == 1
    assert centrality.total_volume == 4


def test_in_degree_equals_embedding_total_for_every_node():
    store = _store(
        ("a", "b", Channel.TECHNICAL), ("b", "c", Channel.SOCIAL),
        ("c", "a", Channel.COGNITIVE), ("a", "c", Channel.CREATIVE),
        ("b", "a", Channel.TECHNICAL), ("b", "a", Channel.TECHNICAL),
    )
    for node_id in store.node_ids():
        assert centrality_of(store, node_id).in_degree == sum(
            embedding_of(store, node_id).values()
        )


def test_betweenness_counts_bridged_pair():
    store = _store(("a", "b", Channel.TECHNICAL), ("b", "c", Channel.TECHNICAL))
    assert betweenness_proxy(store, "b") == 1
    assert betweenness_proxy(store, "a") == 0


def test_betweenness_only_checks_enumeration_direction():
    # Nodes enumerate a, b, c; the path c -> b -> a runs against that order
    store = GraphStore()
    for node_id in ("a", "b", "c"):
        store.add_node(node_id)
    store.upsert_edge("c", "b", Channel.SOCIAL)
    store.upsert_edge("b", "a", Channel.SOCIAL)
    assert betweenness_proxy(store, "b") == 0


def test_betweenness_hub_counts_every_in_out_pair():
    store = GraphStore()
    for node_id in ("a", "b", "m", "c", "d"):
        store.add_node(node_id)
    for source, target in [("a", "m"), ("b", "m"), ("m", "c"), ("m", "d")]:
        store.upsert_edge(source, target, Channel.COGNITIVE)
    assert betweenness_proxy(store, "m") == 4


def test_latest_dominant_channel_prefers_last_of_equal_maxima():
    embedding = {Channel.COGNITIVE: 1, Channel.CREATIVE: 1, Channel.TECHNICAL: 0, Channel.SOCIAL: 0}
    assert latest_dominant_channel(embedding) == Channel.CREATIVE
    assert dominant_channel(embedding) == Channel.COGNITIVE
    assert latest_dominant_channel({c: 0 for c in Channel}) is None
