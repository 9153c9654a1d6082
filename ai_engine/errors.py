"""Exceptions raised by the AI Engine SDK."""

from __future__ import annotations

from typing import Any


class EngineError(Exception):
    """Base exception for AI Engine SDK failures."""


class TransportError(EngineError):
    """Raised when an HTTP call to the AI Engine fails.

    ``status_code`` is ``None`` when no HTTP response was received
    (connection refused, timeout) or the body could not be decoded.
    """

    def __init__(self, status_code: int | None, endpoint: str, detail: str = ""):
        if status_code is None:
            message = f"Request to {endpoint} failed: {detail}"
        else:
            message = f"Request failed with status {status_code} to {endpoint}"
            if detail:
                message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint
        self.detail = detail


class ClassificationError(EngineError):
    """Raised when a raw agent message has a shape the SDK does not recognise."""

    def __init__(self, message_id: str | None, reason: str):
        super().__init__(f"Cannot classify message {message_id or '<no id>'}: {reason}")
        self.message_id = message_id
        self.reason = reason


class TimestampParseError(ClassificationError):
    """Raised when a message timestamp is not a valid ISO 8601 string."""

    def __init__(self, message_id: str | None, value: Any):
        super().__init__(message_id, f"invalid timestamp {value!r}")
        self.value = value


class ValidationError(EngineError, ValueError):
    """Raised when caller-supplied arguments violate a precondition."""


class PreconditionError(EngineError, RuntimeError):
    """Raised when an operation is invoked in the wrong session phase."""
