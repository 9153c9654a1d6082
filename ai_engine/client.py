"""Engine client: session factory and account-level reads."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union
from urllib.parse import urlencode

from contracts.v1.schemas import (
    CreditInfoResponse,
    FunctionGroupContract,
    NewSessionRequest,
    NewSessionResponse,
    RemainingTokensResponse,
)

from .config import (
    CREDIT_INFO_PATH,
    DEFAULT_MODEL,
    DEFAULT_MODEL_IDS,
    PRIVATE_FUNCTION_GROUPS_PATH,
    PUBLIC_FUNCTION_GROUPS_PATH,
    REMAINING_TOKENS_PATH,
    SESSIONS_PATH,
    CustomModel,
    get_model_id,
    get_model_name,
    resolve_api_key,
)
from .errors import TransportError
from .session import Session, UnclassifiedHook, new_message_id
from .transport import EngineTransport, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreditBalance:
    total_credits: int
    used_credits: int
    available_credits: int


@dataclass(frozen=True)
class Model:
    id: str
    name: str
    credits: int = 0


@dataclass(frozen=True)
class FunctionGroup:
    uuid: str
    name: str
    is_private: bool = False


class AiEngine:
    """Entry point to the AI Engine: creates sessions and reads account data."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_base_url: Optional[str] = None,
        transport: Optional[Transport] = None,
        id_factory: Callable[[], str] = new_message_id,
    ):
        if transport is None:
            transport = EngineTransport(api_key=resolve_api_key(api_key), base_url=api_base_url)
        self.transport = transport
        self.id_factory = id_factory

    async def get_function_groups(self) -> list[FunctionGroup]:
        """Return private then public function groups."""
        private_groups, public_groups = await asyncio.gather(
            self._get_function_groups(PRIVATE_FUNCTION_GROUPS_PATH),
            self._get_function_groups(PUBLIC_FUNCTION_GROUPS_PATH),
        )
        return private_groups + public_groups

    async def _get_function_groups(self, path: str) -> list[FunctionGroup]:
        data = await self.transport.request("GET", path)
        if not isinstance(data, list):
            raise TransportError(None, path, "expected a list of function groups")
        groups = [FunctionGroupContract.model_validate(item) for item in data]
        return [FunctionGroup(uuid=g.uuid, name=g.name, is_private=g.is_private) for g in groups]

    async def get_credits(self) -> CreditBalance:
        data = await self.transport.request("GET", CREDIT_INFO_PATH)
        info = CreditInfoResponse.model_validate(data)
        return CreditBalance(
            total_credits=info.total_credit,
            used_credits=info.used_credit,
            available_credits=info.available_credit,
        )

    async def get_models(self) -> list[Model]:
        """Return the default models with their remaining credits."""
        credits = await asyncio.gather(
            *(self.get_model_credits(model_id) for model_id in DEFAULT_MODEL_IDS)
        )
        return [
            Model(id=model_id, name=get_model_name(model_id), credits=credit)
            for model_id, credit in zip(DEFAULT_MODEL_IDS, credits)
        ]

    async def get_model_credits(self, model: Union[str, CustomModel]) -> int:
        """Return remaining tokens for one model (0 when the server omits it)."""
        model_id = get_model_id(model)
        path = f"{REMAINING_TOKENS_PATH}?{urlencode({'models': model_id})}"
        data = await self.transport.request("GET", path)
        return RemainingTokensResponse.model_validate(data).model_tokens.get(model_id, 0)

    async def create_session(
        self,
        function_group: str,
        *,
        email: Optional[str] = None,
        model: Union[str, CustomModel, None] = None,
        on_unclassified: Optional[UnclassifiedHook] = None,
    ) -> Session:
        """Create a server-side session bound to ``function_group``."""
        req = NewSessionRequest(
            email=email or "",
            function_group=function_group,
            preferences_enabled=False,
            request_model=get_model_id(model) if model is not None else DEFAULT_MODEL,
        )
        data = await self.transport.request("POST", SESSIONS_PATH, req.model_dump(by_alias=True))
        response = NewSessionResponse.model_validate(data)
        logger.info("Created session %s in function group %s", response.session_id, function_group)
        return Session(
            transport=self.transport,
            session_id=response.session_id,
            function_group=function_group,
            id_factory=self.id_factory,
            on_unclassified=on_unclassified,
        )
