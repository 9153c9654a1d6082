"""
Domain messages surfaced to callers by ``Session.poll()``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Optional, Union

from .errors import ClassificationError


@dataclass(frozen=True)
class TaskOption:
    """One selectable task offered by the engine."""
    key: int
    title: str


@dataclass(frozen=True)
class TaskSelectionMessage:
    """The engine asks the user to pick one or more tasks."""
    type: ClassVar[str] = "task_selection"

    id: str
    timestamp: datetime
    text: str
    options: tuple[TaskOption, ...]

    def __post_init__(self):
        if not self.options:
            raise ValueError("TaskSelectionMessage requires at least one option")


@dataclass(frozen=True)
class AgentMessage:
    """An agent question; reply with ``Session.submit_response``."""
    type: ClassVar[str] = "agent"

    id: str
    timestamp: datetime
    text: str


@dataclass(frozen=True)
class AiEngineMessage:
    """Informational text from the engine; no reply expected."""
    type: ClassVar[str] = "ai-engine"

    id: str
    timestamp: datetime
    text: str


@dataclass(frozen=True)
class ConfirmationMessage:
    """An action awaiting confirmation.

    ``model`` is the opaque digest of the function to run and ``payload`` its
    server-defined arguments.
    """
    type: ClassVar[str] = "confirmation"

    id: str
    timestamp: datetime
    text: str
    model: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StopMessage:
    """The conversation has concluded server-side."""
    type: ClassVar[str] = "stop"

    id: str
    timestamp: datetime


Message = Union[
    TaskSelectionMessage,
    AgentMessage,
    AiEngineMessage,
    ConfirmationMessage,
    StopMessage,
]


@dataclass(frozen=True)
class UnclassifiedMessage:
    """A raw message the classifier could not map to a ``Message``."""
    message_id: Optional[str]
    raw: Any
    error: ClassificationError
