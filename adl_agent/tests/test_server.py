"""
Tests for the webhook server

Runs the FastAPI app in-process with no ADL-MCP server configured.
"""

import json
from unittest.mock import patch

import pytest


@pytest.fixture
def make_client():
    from fastapi.testclient import TestClient
    from adl_agent.capture import server
    from adl_agent.common.config import ADLConfig

    patches = []

    def build(cfg=None):
        p = patch("adl_agent.capture.server.load_config", return_value=cfg or ADLConfig())
        p.start()
        patches.append(p)
        return TestClient(server.app)

    yield build

    for p in patches:
        p.stop()


class TestHealth:

    def test_health(self, make_client):
        with make_client() as client:
            response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["initialized"] is True
        assert body["adl_connected"] is False


class TestBotFrameworkEndpoint:

    def test_message_turn(self, make_client):
        activity = {
            "type": "message",
            "text": "<at>ADL</at> [Use Kafka for events]",
            "from": {"id": "user-1"},
            "conversation": {"id": "conv-1"},
        }
        with make_client() as client:
            response = client.post("/api/messages", json=activity)

        assert response.status_code == 200
        replies = response.json()["replies"]
        assert replies[0] == '📝 Processing decision: "Use Kafka for events"'
        assert "not connected" in replies[1]

    def test_plain_message_echo(self, make_client):
        activity = {
            "type": "message",
            "text": "good morning",
            "from": {"id": "user-1"},
            "conversation": {"id": "conv-1"},
        }
        with make_client() as client:
            replies = client.post("/api/messages", json=activity).json()["replies"]

        assert replies[0].startswith('Message received: "good morning"')

    def test_welcome_on_members_added(self, make_client):
        activity = {
            "type": "conversationUpdate",
            "recipient": {"id": "bot-1"},
            "conversation": {"id": "conv-1"},
            "membersAdded": [{"id": "user-2"}],
        }
        with make_client() as client:
            replies = client.post("/api/messages", json=activity).json()["replies"]

        assert len(replies) == 1
        assert "@ADL [Your decision here]" in replies[0]

    def test_ignored_activity(self, make_client):
        with make_client() as client:
            response = client.post("/api/messages", json={"type": "typing"})

        assert response.json() == {"replies": []}

    def test_invalid_json(self, make_client):
        with make_client() as client:
            response = client.post(
                "/api/messages",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 400

    @pytest.mark.parametrize("payload", [["x"], "text", 42])
    def test_non_object_body(self, make_client, payload):
        with make_client() as client:
            response = client.post("/api/messages", json=payload)

        assert response.status_code == 400


class TestSlackEndpoint:

    def test_url_verification(self, make_client):
        with make_client() as client:
            response = client.post("/slack/events", json={"type": "url_verification", "challenge": "xyz"})

        assert response.json() == {"challenge": "xyz"}

    def test_event_callback(self, make_client):
        payload = {
            "type": "event_callback",
            "event": {"type": "message", "channel": "C1", "user": "U1", "text": "hello there"},
        }
        with make_client() as client:
            body = client.post("/slack/events", content=json.dumps(payload)).json()

        assert body["ok"] is True
        assert body["replies"][0].startswith('Message received: "hello there"')

    @pytest.mark.parametrize("body", [b'["x"]', b'{"text": "\xff"}'])
    def test_bad_body(self, make_client, body):
        with make_client() as client:
            response = client.post("/slack/events", content=body)

        assert response.status_code == 400

    def test_rejects_unsigned_request(self, make_client):
        from adl_agent.common.config import ADLConfig

        cfg = ADLConfig()
        cfg.agent.slack_signing_secret = "shhh"
        with make_client(cfg) as client:
            response = client.post("/slack/events", json={"type": "url_verification", "challenge": "xyz"})

        assert response.status_code == 401
