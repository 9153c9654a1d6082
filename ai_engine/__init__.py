"""Client SDK for multi-turn conversations with the AI Engine."""

__version__ = "0.1.0"

from .classifier import classify_message, parse_timestamp
from .client import AiEngine, CreditBalance, FunctionGroup, Model
from .config import AVAILABLE_MODELS, DEFAULT_MODEL, DEFAULT_MODEL_IDS, CustomModel
from .errors import (
    ClassificationError,
    EngineError,
    PreconditionError,
    TimestampParseError,
    TransportError,
    ValidationError,
)
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
from .session import Session
from .transport import EngineTransport, Transport

__all__ = [
    "__version__",
    "AiEngine",
    "Session",
    "Transport",
    "EngineTransport",
    "CreditBalance",
    "FunctionGroup",
    "Model",
    "CustomModel",
    "AVAILABLE_MODELS",
    "DEFAULT_MODEL",
    "DEFAULT_MODEL_IDS",
    "Message",
    "TaskOption",
    "TaskSelectionMessage",
    "AgentMessage",
    "AiEngineMessage",
    "ConfirmationMessage",
    "StopMessage",
    "UnclassifiedMessage",
    "classify_message",
    "parse_timestamp",
    "EngineError",
    "TransportError",
    "ClassificationError",
    "TimestampParseError",
    "ValidationError",
    "PreconditionError",
]
