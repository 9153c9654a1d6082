"""Pydantic contracts for the v1beta1 AI Engine chat API."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class _WireModel(BaseModel):
    """Base model for server-owned shapes; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# Session creation
# ---------------------------------------------------------------------------


class NewSessionRequest(_StrictModel):
    email: str = ""
    function_group: str | None = Field(alias="functionGroup")
    preferences_enabled: bool = Field(default=False, alias="preferencesEnabled")
    request_model: str = Field(alias="requestModel")


class NewSessionResponse(_WireModel):
    session_id: str = Field(min_length=1)
    user: str | None = None
    num_messages: int = 0
    last_message_timestamp: str | None = None
    function_group: str | None = None
    model: str | None = None
    remaining_tokens: int | None = None
    status: str | None = None
    preferences_enabled: bool = False


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


class StartPayload(_StrictModel):
    type: Literal["start"] = "start"
    session_id: str
    bucket_id: str
    message_id: str
    objective: str
    context: str = ""


class SelectedTasks(_StrictModel):
    type: Literal["task_list"] = "task_list"
    selection: list[int] = Field(min_length=1)


class UserJsonPayload(_StrictModel):
    type: Literal["user_json"] = "user_json"
    session_id: str
    message_id: str
    referral_id: str
    user_json: SelectedTasks


class UserMessagePayload(_StrictModel):
    type: Literal["user_message"] = "user_message"
    session_id: str
    message_id: str
    referral_id: str
    user_message: str


class ExecuteFunctionsPayload(_StrictModel):
    type: Literal["execute_functions"] = "execute_functions"
    functions: list[str] = Field(min_length=1)
    objective: str
    context: str = ""


SubmitPayload = Annotated[
    Union[StartPayload, UserJsonPayload, UserMessagePayload, ExecuteFunctionsPayload],
    Field(discriminator="type"),
]


class SubmitMessageRequest(_StrictModel):
    payload: SubmitPayload


# ---------------------------------------------------------------------------
# Account reads
# ---------------------------------------------------------------------------


class CreditInfoResponse(_WireModel):
    total_credit: int = 0
    used_credit: int = 0
    available_credit: int = 0


class RemainingTokensResponse(_WireModel):
    model_tokens: dict[str, int] = Field(default_factory=dict)


class FunctionGroupContract(_WireModel):
    uuid: str
    name: str
    is_private: bool = Field(default=False, alias="isPrivate")


# ---------------------------------------------------------------------------
# Agent messages (polling)
# ---------------------------------------------------------------------------


class NewMessagesResponse(_WireModel):
    # Each element is itself a JSON-encoded message object.
    agent_response: list[str] = Field(default_factory=list)


class ApiOption(_WireModel):
    key: int
    value: str


class ApiTaskList(_WireModel):
    type: Literal["task_list"]
    text: str = ""
    options: list[ApiOption] = Field(min_length=1)
    context_json: Any | None = None


class ApiContextJsonBody(_WireModel):
    digest: str
    args: dict[str, Any] = Field(default_factory=dict)


class ApiContextJson(_WireModel):
    type: Literal["context_json"]
    text: str = ""
    options: Any | None = None
    context_json: ApiContextJsonBody


ApiAgentJson = Annotated[
    Union[ApiTaskList, ApiContextJson],
    Field(discriminator="type"),
]


class _ApiMessageBase(_WireModel):
    session_id: str | None = None
    message_id: str = Field(min_length=1)
    timestamp: str
    score: float | None = None
    referral_id: str | None = None


class ApiAgentJsonMessage(_ApiMessageBase):
    type: Literal["agent_json"]
    agent_json: ApiAgentJson


class ApiAgentInfoMessage(_ApiMessageBase):
    type: Literal["agent_info"]
    agent_info: str


class ApiAgentMessageMessage(_ApiMessageBase):
    type: Literal["agent_message"]
    agent_message: str


class ApiStopMessage(_ApiMessageBase):
    type: Literal["stop"]


ApiMessage = Annotated[
    Union[ApiAgentJsonMessage, ApiAgentInfoMessage, ApiAgentMessageMessage, ApiStopMessage],
    Field(discriminator="type"),
]

_API_MESSAGE_ADAPTER = TypeAdapter(ApiMessage)


def parse_api_message(raw: Any) -> ApiMessage:
    """Validate one decoded agent message against the wire union.

    Raises ``pydantic.ValidationError`` for unknown discriminants (outer or
    ``agent_json`` inner) and for missing fields.
    """
    return _API_MESSAGE_ADAPTER.validate_python(raw)
