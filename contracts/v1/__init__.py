"""v1 contract schemas for the AI Engine chat API."""

__version__ = "1.0.0"

from .schemas import (
    ApiAgentInfoMessage,
    ApiAgentJsonMessage,
    ApiAgentMessageMessage,
    ApiContextJson,
    ApiContextJsonBody,
    ApiMessage,
    ApiOption,
    ApiStopMessage,
    ApiTaskList,
    CreditInfoResponse,
    ExecuteFunctionsPayload,
    FunctionGroupContract,
    NewMessagesResponse,
    NewSessionRequest,
    NewSessionResponse,
    RemainingTokensResponse,
    SelectedTasks,
    StartPayload,
    SubmitMessageRequest,
    UserJsonPayload,
    UserMessagePayload,
    parse_api_message,
)

__all__ = [
    "__version__",
    "ApiAgentInfoMessage",
    "ApiAgentJsonMessage",
    "ApiAgentMessageMessage",
    "ApiContextJson",
    "ApiContextJsonBody",
    "ApiMessage",
    "ApiOption",
    "ApiStopMessage",
    "ApiTaskList",
    "CreditInfoResponse",
    "ExecuteFunctionsPayload",
    "FunctionGroupContract",
    "NewMessagesResponse",
    "NewSessionRequest",
    "NewSessionResponse",
    "RemainingTokensResponse",
    "SelectedTasks",
    "StartPayload",
    "SubmitMessageRequest",
    "UserJsonPayload",
    "UserMessagePayload",
    "parse_api_message",
]
