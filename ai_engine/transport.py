"""HTTP transport for the AI Engine API with bearer auth and error mapping."""

from __future__ import annotations

import asyncio
import http.client
import json
import logging
from typing import Any, Protocol
from urllib import error, request

from .config import resolve_base_url, resolve_timeout_seconds
from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Port for issuing authenticated JSON requests against the AI Engine."""

    async def request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        ...


class EngineTransport:
    """urllib-backed transport; blocking I/O runs in a worker thread."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ):
        self.api_key = api_key
        self.base_url = resolve_base_url(base_url)
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else resolve_timeout_seconds()

    async def request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send a JSON request and return the decoded response body."""
        return await asyncio.to_thread(self._request_json, method, path, payload)

    def _request_json(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, path)
        req = request.Request(url, data=data, headers=headers, method=method)
        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
                if not raw:
                    return {}
                return json.loads(raw)
        except error.HTTPError as e:
            raise TransportError(e.code, path, self._read_http_error_detail(e)) from e
        except (error.URLError, http.client.HTTPException, OSError) as e:
            # timeouts and connections dropped while the body is read land here
            raise TransportError(None, path, str(e) or type(e).__name__) from e
        except json.JSONDecodeError as e:
            raise TransportError(None, path, f"invalid JSON response: {e}") from e
        except UnicodeDecodeError as e:
            raise TransportError(None, path, f"response is not valid UTF-8: {e}") from e

    @staticmethod
    def _read_http_error_detail(exc: error.HTTPError) -> str:
        try:
            if exc.fp is None:
                return str(exc.reason or "HTTP error")
            body = exc.read().decode("utf-8")
            if not body:
                return str(exc.reason or "HTTP error")
            try:
                payload = json.loads(body)
                if isinstance(payload, dict) and "detail" in payload:
                    return str(payload["detail"])
            except json.JSONDecodeError:
                pass
            return body
        except Exception:
            return str(exc.reason or "HTTP error")
