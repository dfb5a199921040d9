"""Tests for the HTTP surface: recording events, reading notifications and
editing settings. Uses FastAPI's TestClient with a mocked generation backend.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from social_llm.generation.client import GenerationClient
from social_llm.main import build_state, create_app

SUCCESS_BODY = b'{"response":"\\"Bob smiles warmly.\\"","done":true}'

INTERACTION = {
    "text": "Alice complimented Bob.",
    "initiator": {"name": "Alice", "traits": ["Kind"], "opinions": {"Bob": 15}},
    "recipient": {"name": "Bob", "traits": ["Grumpy"]},
}


def make_app(requests: list):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=SUCCESS_BODY)

    app = create_app()
    build_state(app, client=GenerationClient(transport=httpx.MockTransport(handler)))
    return app


def wait_for_notifications(client: TestClient, count: int, timeout: float = 5.0) -> list[dict]:
    deadline = time.monotonic() + timeout
    while True:
        items = client.get("/notifications").json()
        if len(items) >= count or time.monotonic() > deadline:
            return items
        time.sleep(0.02)


def test_health():
    with TestClient(make_app([])) as client:
        resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_recorded_interaction_produces_notification():
    requests: list = []
    with TestClient(make_app(requests)) as client:
        resp = client.post("/events", json=INTERACTION)
        assert resp.status_code == 201
        event = resp.json()
        assert event["kind"] == "interaction"
        assert event["initiator"]["name"] == "Alice"

        notifications = wait_for_notifications(client, 1)
        assert [n["text"] for n in notifications] == ["Alice: Bob smiles warmly."]
        assert notifications[0]["severity"] == "neutral"
        assert notifications[0]["source_event_id"] == event["id"]

        assert client.get(f"/events/{event['id']}").json()["text"] == "Alice complimented Bob."
        assert len(client.get("/events").json()) == 1

    assert len(requests) == 1


def test_other_entry_kinds_are_recorded_only():
    requests: list = []
    with TestClient(make_app(requests)) as client:
        resp = client.post("/events", json={"text": "A raid!", "kind": "raid"})
        assert resp.status_code == 201
        assert client.get("/notifications").json() == []
    assert requests == []


def test_unknown_event_is_404():
    with TestClient(make_app([])) as client:
        assert client.get("/events/nope").status_code == 404


def test_settings_read_and_update():
    requests: list = []
    with TestClient(make_app(requests)) as client:
        current = client.get("/settings").json()
        assert set(current) == {"model", "endpoint", "enabled", "temperature", "system_prompt"}

        resp = client.patch("/settings", json={"temperature": 1.2, "model": "mistral"})
        assert resp.status_code == 200
        assert resp.json()["temperature"] == 1.2
        assert resp.json()["model"] == "mistral"

        assert client.patch("/settings", json={"temperature": 3.5}).status_code == 422
        assert client.get("/settings").json()["temperature"] == 1.2


def test_disabling_stops_generation():
    requests: list = []
    with TestClient(make_app(requests)) as client:
        client.patch("/settings", json={"enabled": False})
        client.post("/events", json=INTERACTION)
        time.sleep(0.1)
        assert client.get("/notifications").json() == []
    assert requests == []
