"""
One AI Engine conversation: polling, de-duplication and reply submission.

A session keeps the raw messages it has received in arrival order and the
set of their ids. ``poll()`` only ever appends to both, and only after the
transport call has succeeded; submissions never touch them (their effect
shows up in a later poll).
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any, Callable, Optional, Sequence, Union
from urllib.parse import urlencode

from contracts.v1.schemas import (
    ExecuteFunctionsPayload,
    NewMessagesResponse,
    SelectedTasks,
    StartPayload,
    SubmitMessageRequest,
    UserJsonPayload,
    UserMessagePayload,
)

from .classifier import classify_message, raw_message_id
from .config import CONFIRMATION_TOKEN, SESSIONS_PATH
from .errors import ClassificationError, EngineError, PreconditionError, TransportError, ValidationError
from .messages import (
    AgentMessage,
    ConfirmationMessage,
    Message,
    TaskOption,
    TaskSelectionMessage,
    UnclassifiedMessage,
)
from .transport import Transport

logger = logging.getLogger(__name__)

UnclassifiedHook = Callable[[UnclassifiedMessage], None]


def new_message_id() -> str:
    """Return a fresh lowercase UUID4 string for an outgoing payload."""
    return str(uuid.uuid4()).lower()


class Session:
    """A conversation bound to one server-side session and function group."""

    def __init__(
        self,
        *,
        transport: Transport,
        session_id: str,
        function_group: str,
        id_factory: Callable[[], str] = new_message_id,
        on_unclassified: Optional[UnclassifiedHook] = None,
    ):
        self._transport = transport
        self._id_factory = id_factory
        self._on_unclassified = on_unclassified
        self._messages: list[dict[str, Any]] = []
        self._message_ids: set[str] = set()
        self._poll_lock = asyncio.Lock()
        self._started = False
        self._exchanged = False
        self._deleted = False
        self.session_id = session_id
        self.function_group = function_group

    def __repr__(self) -> str:
        return f"Session(session_id={self.session_id!r}, function_group={self.function_group!r})"

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._deleted:
            return
        if exc_type is None:
            await self.delete()
            return
        # keep the caller's exception as the one that propagates
        try:
            await self.delete()
        except EngineError as e:
            logger.warning("Could not delete session %s: %s", self.session_id, e)

    # ------------------------------------------------------------------
    # State views
    # ------------------------------------------------------------------

    @property
    def messages(self) -> list[dict[str, Any]]:
        """Raw messages received so far, in arrival order (a copy)."""
        return list(self._messages)

    @property
    def seen_message_ids(self) -> frozenset[str]:
        return frozenset(self._message_ids)

    @property
    def last_message_id(self) -> Optional[str]:
        """Cursor for the next poll, or None before any message arrived."""
        if not self._messages:
            return None
        return self._messages[-1]["message_id"]

    @property
    def started(self) -> bool:
        return self._started

    @property
    def deleted(self) -> bool:
        return self._deleted

    @property
    def _base_path(self) -> str:
        return f"{SESSIONS_PATH}/{self.session_id}"

    def _ensure_active(self, operation: str) -> None:
        if self._deleted:
            raise PreconditionError(f"Cannot {operation}: session {self.session_id} has been deleted")

    def _ensure_first(self, operation: str) -> None:
        if self._started:
            raise PreconditionError(f"Session {self.session_id} has already been started")
        if self._exchanged:
            raise PreconditionError(
                f"Cannot {operation}: session {self.session_id} has already polled or replied"
            )

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def poll(self) -> list[Message]:
        """Fetch messages newer than the cursor and return the unseen ones.

        Messages the server redelivers are skipped. Messages that cannot be
        classified are recorded as seen but not returned; they are logged and
        passed to ``on_unclassified``.

        Raises:
            TransportError: the request failed; session state is unchanged.
        """
        self._ensure_active("poll")
        async with self._poll_lock:
            path = f"{self._base_path}/new-messages"
            cursor = self.last_message_id
            if cursor is not None:
                path = f"{path}?{urlencode({'last_message_id': cursor})}"

            data = await self._transport.request("GET", path)
            self._exchanged = True
            try:
                response = NewMessagesResponse.model_validate(data or {})
            except ValueError as e:
                raise TransportError(None, path, f"unexpected new-messages response: {e}") from e

            new_messages: list[Message] = []
            unclassified: list[UnclassifiedMessage] = []
            batch: list[dict[str, Any]] = []
            batch_ids: set[str] = set()
            for item in response.agent_response:
                raw = self._decode_item(item)
                message_id = raw_message_id(raw)
                if message_id is None:
                    unclassified.append(UnclassifiedMessage(
                        message_id=None,
                        raw=raw,
                        error=ClassificationError(None, "missing message_id"),
                    ))
                    continue

                # the server may deliver the same message more than once
                if message_id in self._message_ids or message_id in batch_ids:
                    continue

                result = classify_message(raw)
                if isinstance(result, UnclassifiedMessage):
                    unclassified.append(result)
                else:
                    new_messages.append(result)

                batch.append(raw)
                batch_ids.add(message_id)

            self._messages.extend(batch)
            self._message_ids.update(batch_ids)
            for dropped in unclassified:
                self._report(dropped)

            return new_messages

    @staticmethod
    def _decode_item(item: str) -> Any:
        try:
            return json.loads(item)
        except (TypeError, json.JSONDecodeError):
            return item

    def _report(self, unclassified: UnclassifiedMessage) -> None:
        logger.warning("Dropping agent message: %s", unclassified.error)
        if self._on_unclassified is None:
            return
        try:
            self._on_unclassified(unclassified)
        except Exception:
            # the batch is already recorded; its messages must still be returned
            logger.exception("on_unclassified hook failed for message %s", unclassified.message_id)

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    async def _submit_message(self, payload: Any) -> None:
        body = SubmitMessageRequest(payload=payload).model_dump(by_alias=True)
        await self._transport.request("POST", f"{self._base_path}/submit", body)
        self._exchanged = True

    async def start(self, objective: str, context: Optional[str] = None) -> None:
        """Begin the conversation with the user's objective.

        Only valid as the first operation on a session: once it has been
        started, polled or replied to, this raises ``PreconditionError``.
        """
        self._ensure_active("start")
        self._ensure_first("start")
        await self._submit_message(StartPayload(
            session_id=self.session_id,
            bucket_id=self.function_group,
            message_id=self._id_factory(),
            objective=objective,
            context=context or "",
        ))
        self._started = True

    async def execute_functions(
        self,
        function_ids: Sequence[str],
        objective: str,
        context: str = "",
    ) -> None:
        """Run specific functions directly; an alternative to ``start``."""
        self._ensure_active("execute functions")
        self._ensure_first("execute functions")
        if not function_ids:
            raise ValidationError("At least one function id is required")
        await self._submit_message(ExecuteFunctionsPayload(
            functions=list(function_ids),
            objective=objective,
            context=context,
        ))
        self._started = True

    async def submit_task_selection(
        self,
        selection: TaskSelectionMessage,
        options: Sequence[Union[TaskOption, int]],
    ) -> None:
        """Answer a task selection with the chosen options.

        ``options`` may hold ``TaskOption`` instances from ``selection.options``
        or integer indexes into it.

        Raises:
            ValidationError: empty selection, index out of range, or an option
                the message did not offer. Nothing is sent.
        """
        self._ensure_active("submit a task selection")
        keys = _selected_keys(selection, options)
        await self._submit_message(UserJsonPayload(
            session_id=self.session_id,
            message_id=self._id_factory(),
            referral_id=selection.id,
            user_json=SelectedTasks(selection=keys),
        ))

    async def submit_response(self, query: AgentMessage, response: str) -> None:
        """Reply to an agent question. Empty text is sent as-is."""
        self._ensure_active("submit a response")
        await self._submit_user_message(query.id, response)

    async def submit_confirmation(self, confirmation: ConfirmationMessage) -> None:
        """Accept the action proposed by a confirmation message."""
        self._ensure_active("submit a confirmation")
        await self._submit_user_message(confirmation.id, CONFIRMATION_TOKEN)

    async def reject_confirmation(self, confirmation: ConfirmationMessage, reason: str) -> None:
        """Reject a confirmation, explaining what is wrong.

        The counterpart of ``submit_confirmation``.
        """
        self._ensure_active("reject a confirmation")
        await self._submit_user_message(confirmation.id, reason)

    async def _submit_user_message(self, referral_id: str, text: str) -> None:
        await self._submit_message(UserMessagePayload(
            session_id=self.session_id,
            message_id=self._id_factory(),
            referral_id=referral_id,
            user_message=text,
        ))

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    async def delete(self) -> None:
        """Tell the server the session is over. Call at most once."""
        self._ensure_active("delete")
        await self._transport.request("DELETE", self._base_path)
        self._deleted = True


def _selected_keys(
    selection: TaskSelectionMessage,
    options: Sequence[Union[TaskOption, int]],
) -> list[int]:
    if not options:
        raise ValidationError("At least one task option must be selected")

    offered = selection.options
    offered_keys = {o.key for o in offered}
    keys: list[int] = []
    for option in options:
        if isinstance(option, TaskOption):
            if option.key not in offered_keys:
                raise ValidationError(
                    f"Task option {option.key} was not offered by message {selection.id}"
                )
            keys.append(option.key)
        elif isinstance(option, int) and not isinstance(option, bool):
            if option < 0 or option >= len(offered):
                raise ValidationError(
                    f"Task index {option} out of range (message {selection.id} "
                    f"offers {len(offered)} option(s))"
                )
            keys.append(offered[option].key)
        else:
            raise ValidationError(f"Unsupported task option {option!r}")
    return keys
