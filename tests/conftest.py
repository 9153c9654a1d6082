"""
Shared fixtures for ai-engine tests.
"""

import json

import pytest

from ai_engine import Session, TransportError


class FakeTransport:
    """In-memory transport that records calls and replays queued responses.

    Queue responses per ``(method, path-prefix)`` with :meth:`queue`; an
    ``Exception`` instance in the queue is raised instead of returned.
    Unqueued calls return ``{}``.
    """

    def __init__(self):
        self.calls: list[tuple[str, str, dict | None]] = []
        self._responses: list[tuple[str, str, object]] = []

    def queue(self, method: str, path_prefix: str, response):
        self._responses.append((method, path_prefix, response))

    async def request(self, method, path, payload=None):
        self.calls.append((method, path, payload))
        for i, (m, prefix, response) in enumerate(self._responses):
            if m == method and path.startswith(prefix):
                del self._responses[i]
                if isinstance(response, Exception):
                    raise response
                return response
        return {}

    def calls_to(self, method: str) -> list[tuple[str, str, dict | None]]:
        return [c for c in self.calls if c[0] == method]


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def message_ids():
    """Deterministic outgoing message ids: msg-1, msg-2, ..."""
    counter = {"n": 0}

    def _next():
        counter["n"] += 1
        return f"msg-{counter['n']}"

    return _next


@pytest.fixture
def session(fake_transport, message_ids):
    return Session(
        transport=fake_transport,
        session_id="sess-1",
        function_group="fg-1",
        id_factory=message_ids,
    )


@pytest.fixture
def raw_message():
    """Build a raw agent message dict.

    Usage:
        raw_message("m1", "agent_message", agent_message="Hi")
    """
    def _make(message_id: str, msg_type: str, timestamp: str = "2024-03-01T10:00:00", **fields):
        msg = {
            "session_id": "sess-1",
            "message_id": message_id,
            "timestamp": timestamp,
            "score": 0.0,
            "referral_id": None,
            "type": msg_type,
        }
        msg.update(fields)
        return msg
    return _make


@pytest.fixture
def task_list_message(raw_message):
    def _make(message_id: str, options: list[tuple[int, str]], text: str = "Pick a task"):
        return raw_message(
            message_id,
            "agent_json",
            agent_json={
                "type": "task_list",
                "text": text,
                "options": [{"key": k, "value": v} for k, v in options],
                "context_json": None,
            },
        )
    return _make


@pytest.fixture
def agent_response():
    """Wrap raw messages the way the new-messages endpoint does."""
    def _wrap(*messages):
        return {"agent_response": [json.dumps(m) for m in messages]}
    return _wrap


@pytest.fixture
def http_500():
    return TransportError(500, "/v1beta1/engine/chat/sessions/sess-1/new-messages", "boom")
