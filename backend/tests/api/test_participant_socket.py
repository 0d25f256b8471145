"""Participant Socket — verifies join, respond, and frame validation over /ws.

Invariants:
    - A join is answered with "joined" before the participant-joined broadcast
    - Malformed frames and responses before joining get an "invalid-frame" reply

Design Decisions:
    - Starlette TestClient as a context manager: runs the lifespan, so the real
      ConnectionManager and AsyncioScheduler are exercised
"""

import pytest
from fastapi.testclient import TestClient

from collective_embedding.main import app


@pytest.fixture
def live_client():
    with TestClient(app) as c:
        yield c


def _create_session(client) -> str:
    res = client.post("/api/session/create", json={"questions": [
        {"text": "Who builds?", "channel": "technical"},
        {"text": "Who fixes?", "channel": "technical"},
    ]})
    return res.json()["session_id"]


def _join(ws, session_id: str, name: str) -> dict:
    ws.send_json({"type": "join-session", "data": {"session_id": session_id, "name": name}})
    reply = ws.receive_json()
    assert reply["type"] == "joined"
    return reply["data"]


def test_join_replies_then_broadcasts(live_client):
    session_id = _create_session(live_client)
    with live_client.websocket_connect("/ws") as ws:
        joined = _join(ws, session_id, "Ada")
        assert joined["participant_count"] == 1
        broadcast = ws.receive_json()
        assert broadcast == {"type": "participant-joined", "data": {"participant_count": 1}}


def test_join_with_wrong_session_gets_join_error(live_client):
    _create_session(live_client)
    with live_client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join-session", "data": {"session_id": "nope", "name": "Ada"}})
        reply = ws.receive_json()
        assert reply["type"] == "join-error"
        assert reply["data"]["reason"] == "INVALID_SESSION"


def test_malformed_frame_gets_invalid_frame(live_client):
    with live_client.websocket_connect("/ws") as ws:
        ws.send_text("not json")
        assert ws.receive_json()["type"] == "invalid-frame"
        ws.send_json({"type": "dance", "data": {}})
        assert ws.receive_json()["type"] == "invalid-frame"


def test_response_before_join_is_rejected(live_client):
    _create_session(live_client)
    with live_client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "submit-response", "data": {"question_index": 0}})
        reply = ws.receive_json()
        assert reply["type"] == "invalid-frame"
        assert "Join" in reply["data"]["message"]


def test_two_participants_answer_a_question(live_client):
    session_id = _create_session(live_client)
    with live_client.websocket_connect("/ws") as ws_a:
        a = _join(ws_a, session_id, "Ada")["participant_id"]
        assert ws_a.receive_json()["type"] == "participant-joined"

        with live_client.websocket_connect("/ws") as ws_b:
            _join(ws_b, session_id, "Grace")
            assert ws_b.receive_json()["data"]["participant_count"] == 2
            assert ws_a.receive_json()["data"]["participant_count"] == 2

            live_client.post("/api/session/start-questions")
            question = ws_b.receive_json()
            assert question["type"] == "new-question"
            assert question["data"]["question_index"] == 0
            assert {p["name"] for p in question["data"]["participants"]} == {"Ada", "Grace"}
            assert ws_a.receive_json()["type"] == "new-question"

            ws_b.send_json({"type": "submit-response", "data": {
                "question_index": 0, "target_participant_id": a,
            }})
            assert ws_b.receive_json() == {
                "type": "response-submitted", "data": {"question_index": 0},
            }
            count = ws_b.receive_json()
            assert count["type"] == "response-count-update"
            assert count["data"]["response_count"] == 1

    graph = live_client.get("/api/session/graph").json()
    assert len(graph["edges"]) == 1
    assert graph["edges"][0]["target"] == a


def test_binary_frame_gets_invalid_frame_and_socket_stays_open(live_client):
    session_id = _create_session(live_client)
    with live_client.websocket_connect("/ws") as ws:
        ws.send_bytes(b"\x00\x01")
        reply = ws.receive_json()
        assert reply["type"] == "invalid-frame"
        assert "text" in reply["data"]["message"]

        joined = _join(ws, session_id, "Ada")
        assert joined["participant_count"] == 1

