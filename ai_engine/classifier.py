"""Classification of raw agent messages into domain messages."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import ValidationError as ContractValidationError

from contracts.v1.schemas import (
    ApiAgentInfoMessage,
    ApiAgentJsonMessage,
    ApiAgentMessageMessage,
    ApiContextJson,
    ApiMessage,
    ApiStopMessage,
    ApiTaskList,
    parse_api_message,
)

from .errors import ClassificationError, TimestampParseError
from .messages import (
    AgentMessage,
    AiEngineMessage,
    ConfirmationMessage,
    Message,
    StopMessage,
    TaskOption,
    TaskSelectionMessage,
    UnclassifiedMessage,
)

# fromisoformat on 3.10 only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"(?<=\d{2}:\d{2}:\d{2})\.(\d+)")


def parse_timestamp(value: Any, message_id: str | None = None) -> datetime:
    """Parse an ISO 8601 wire timestamp; a trailing ``Z`` means UTC."""
    if not isinstance(value, str) or not value.strip():
        raise TimestampParseError(message_id, value)
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise TimestampParseError(message_id, value) from e


def raw_message_id(raw: Any) -> str | None:
    """Return the ``message_id`` of a decoded raw message, if it has one."""
    if not isinstance(raw, dict):
        return None
    message_id = raw.get("message_id")
    if isinstance(message_id, str) and message_id:
        return message_id
    return None


def to_domain_message(api_message: ApiMessage) -> Message:
    """Map a validated wire message to its domain message."""
    message_id = api_message.message_id
    timestamp = parse_timestamp(api_message.timestamp, message_id)

    if isinstance(api_message, ApiAgentJsonMessage):
        body = api_message.agent_json
        if isinstance(body, ApiTaskList):
            return TaskSelectionMessage(
                id=message_id,
                timestamp=timestamp,
                text=body.text,
                options=tuple(TaskOption(key=o.key, title=o.value) for o in body.options),
            )
        if isinstance(body, ApiContextJson):
            return ConfirmationMessage(
                id=message_id,
                timestamp=timestamp,
                text=body.text,
                model=body.context_json.digest,
                payload=dict(body.context_json.args),
            )
        raise ClassificationError(message_id, f"unknown agent_json type {body.type!r}")
    if isinstance(api_message, ApiAgentInfoMessage):
        return AiEngineMessage(id=message_id, timestamp=timestamp, text=api_message.agent_info)
    if isinstance(api_message, ApiAgentMessageMessage):
        return AgentMessage(id=message_id, timestamp=timestamp, text=api_message.agent_message)
    if isinstance(api_message, ApiStopMessage):
        return StopMessage(id=message_id, timestamp=timestamp)
    raise ClassificationError(message_id, f"unknown message type {api_message.type!r}")


def _describe_contract_error(raw: Any, exc: ContractValidationError) -> str:
    outer = raw.get("type") if isinstance(raw, dict) else None
    inner = None
    if outer == "agent_json" and isinstance(raw.get("agent_json"), dict):
        inner = raw["agent_json"].get("type")
    for err in exc.errors():
        if err.get("type") in ("union_tag_invalid", "union_tag_not_found"):
            # A non-empty loc means the inner agent_json union rejected the tag.
            if err.get("loc"):
                return f"unknown agent_json type {inner!r}"
            return f"unknown message type {outer!r}"
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"malformed {outer or 'message'}: {loc} {first.get('msg', '')}".strip()


def classify_message(raw: Any) -> Message | UnclassifiedMessage:
    """Classify one decoded raw message.

    Never raises: unknown discriminants, malformed shapes and bad timestamps
    all come back as an ``UnclassifiedMessage`` carrying the error.
    """
    message_id = raw_message_id(raw)
    try:
        api_message = parse_api_message(raw)
    except ContractValidationError as e:
        error = ClassificationError(message_id, _describe_contract_error(raw, e))
        return UnclassifiedMessage(message_id=message_id, raw=raw, error=error)

    try:
        return to_domain_message(api_message)
    except ClassificationError as e:
        return UnclassifiedMessage(message_id=message_id, raw=raw, error=e)
