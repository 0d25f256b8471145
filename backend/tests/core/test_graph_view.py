"""Graph View — tests for presentation reads over a live Session."""

from datetime import datetime, timezone

import pytest

from collective_embedding.core.domain_types import Channel
from collective_embedding.core.errors import ResourceNotFoundError
from collective_embedding.core.graph_view import (
    edge_thickness, graph_snapshot, node_profile, node_size, session_status,
)
from collective_embedding.core.session_state import Session

_T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def session():
    s = Session(id="s1", active=True)
    for node_id in ("a", "b", "c"):
        s.graph.add_node(node_id)
        s.identity.record(node_id, node_id.upper())
    s.graph.upsert_edge("a", "b", Channel.TECHNICAL, _T0)
    s.graph.upsert_edge("c", "b", Channel.TECHNICAL, _T0)
    s.graph.upsert_edge("a", "c", Channel.SOCIAL, _T0)
    return s


def test_node_size_and_edge_thickness_bounds():
    assert node_size(0) == 15
    assert node_size(3) == 24
    assert edge_thickness(0) == 2
    assert edge_thickness(1) == 3
    assert edge_thickness(4) == 10


def test_status_without_session():
    assert session_status(Session()) == {"active": False}


def test_status_reports_cursor_and_counts(session):
    status = session_status(session)
    assert status["session_id"] == "s1"
    assert status["current_question_index"] == -1
    assert status["identity_deleted"] is False


def test_snapshot_nodes_use_percentages_and_blend(session):
    snapshot = graph_snapshot(session)
    nodes = {n["id"]: n for n in snapshot["nodes"]}

    b = nodes["b"]
    assert b["embedding"] == {"cognitive": 0, "creative": 0, "technical": 100, "social": 0}
    assert b["color"] == "rgb(27, 158, 75)"
    assert b["role"] == "Amplifier"
    assert b["size"] == node_size(2)
    assert b["centrality"]["in_degree"] == 2

    assert nodes["a"]["color"] == "#888888"
    assert nodes["a"]["description"].startswith("This node has not yet been nominated")


def test_snapshot_edges_and_legend(session):
    snapshot = graph_snapshot(session)
    assert len(snapshot["edges"]) == 3
    edge = snapshot["edges"][0]
    assert edge["color"] == "#22C55E"
    assert edge["thickness"] == 3
    assert edge["timestamp"] == _T0.isoformat()
    assert [c["id"] for c in snapshot["channels"]] == [
        "cognitive", "creative", "technical", "social",
    ]


def test_labels_switch_after_suppression(session):
    before = {n["id"]: n["label"] for n in graph_snapshot(session)["nodes"]}
    session.identity.suppress()
    after = {n["id"]: n["label"] for n in graph_snapshot(session)["nodes"]}
    assert before["a"] != "A"
    assert after == {"a": "Node-01", "b": "Node-02", "c": "Node-03"}


def test_node_profile_lists_outgoing_connections(session):
    profile = node_profile(session, "a")
    targets = {c["target_id"]: c for c in profile["connections"]}
    assert set(targets) == {"b", "c"}
    assert targets["c"]["channels"] == [
        {"channel": "social", "weight": 1, "color": "#F59E0B"},
    ]


def test_node_profile_unknown_node(session):
    with pytest.raises(ResourceNotFoundError):
        node_profile(session, "zzz")


def test_node_profile_error_carries_session_context(session):
    with pytest.raises(ResourceNotFoundError) as excinfo:
        node_profile(session, "zzz")
    error = excinfo.value.to_response()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["category"] == "resource_not_found"
    assert error["context"] == {"session_id": "s1"}
