"""
Tests for the FastAPI surface (TestClient; engine swapped for a KB-less one).
Run with: python -m pytest tests/test_router.py -v
"""

import json
import random

import pytest
from fastapi.testclient import TestClient

from blox_coach import facts, router_fastapi
from blox_coach.__about__ import __version__
from blox_coach.config import Settings
from blox_coach.engine import CoachEngine
from blox_coach.session_state import Topic, get_state, reset_state


@pytest.fixture
def client():
    engine = CoachEngine(settings=Settings(chunk_delay_ms=0, long_reply_chars=40, chunk_max_chars=60), rng=random.Random(0))
    router_fastapi.set_engine(engine)
    yield TestClient(router_fastapi.app)
    router_fastapi.set_engine(None)


def _chat(client, text, sid, stream=False):
    return client.post(
        "/v1/chat/completions",
        headers={"x-session-id": sid},
        json={"messages": [{"role": "user", "content": text}], "stream": stream},
    )


def _content(resp):
    return resp.json()["choices"][0]["message"]["content"]


class TestRoutes:

    def test_healthz(self, client):
        body = client.get("/healthz").json()
        assert body["ok"] is True
        assert body["version"] == __version__
        assert body["kb_loaded"] is False

    def test_models(self, client):
        ids = [m["id"] for m in client.get("/v1/models").json()["data"]]
        assert ids == ["blox-coach"]

    def test_counter_then_elaborate_same_session(self, client):
        sid = "router-test-1"
        reset_state(sid)
        first = _chat(client, "counter dough", sid)
        assert _content(first).startswith(facts.COUNTERS["dough"])
        assert get_state(sid).last_topic == Topic.COUNTERS

        second = _chat(client, "elaborate", sid)
        assert facts.COUNTER_DEEP_NOTES in _content(second)
        reset_state(sid)

    def test_sessions_are_isolated(self, client):
        reset_state("router-a")
        reset_state("router-b")
        _chat(client, "deep mode on", "router-a")
        assert get_state("router-a").deep_mode is True
        assert get_state("router-b").deep_mode is False
        reset_state("router-a")
        reset_state("router-b")

    def test_session_from_body(self, client):
        resp = client.post(
            "/v1/chat/completions",
            json={"session_id": "router-body", "messages": [{"role": "user", "content": "ken trick"}]},
        )
        assert _content(resp).startswith(facts.KENTRICK_SHORT)
        assert get_state("router-body").last_topic == Topic.KENTRICK
        reset_state("router-body")

    def test_reset(self, client):
        _chat(client, "deep mode on", "router-reset")
        assert client.post("/v1/sessions/router-reset/reset").json()["ok"] is True
        assert get_state("router-reset").deep_mode is False
        reset_state("router-reset")

    def test_reset_drops_session_lock(self, client):
        _chat(client, "hello", "router-lock")
        assert "router-lock" in router_fastapi._SESSION_LOCKS
        client.post("/v1/sessions/router-lock/reset")
        assert "router-lock" not in router_fastapi._SESSION_LOCKS

    def test_no_user_message(self, client):
        resp = client.post("/v1/chat/completions", json={"messages": [{"role": "system", "content": "x"}]})
        assert "no user message" in _content(resp)

    def test_bad_messages(self, client):
        resp = client.post("/v1/chat/completions", json={"messages": "nope"})
        assert "messages must be a list" in _content(resp)

    def test_stream_segments(self, client):
        sid = "router-stream"
        reset_state(sid)
        _chat(client, "ken trick", sid)
        resp = _chat(client, "elaborate", sid, stream=True)
        events = [line[len("data: "):] for line in resp.text.splitlines() if line.startswith("data: ")]
        assert events[-1] == "[DONE]"
        deltas = [json.loads(e)["choices"][0]["delta"].get("content", "") for e in events[:-1]]
        assert len([d for d in deltas if d]) > 1
        assert "".join(deltas).replace("\n\n", "") == facts.KENTRICK_LONG.replace("\n\n", "")
        reset_state(sid)
