"""Request execution with retries for the Langame API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp
import orjson

from .errors import ResponseDecodeError
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

MIN_ATTEMPTS = 1
MAX_ATTEMPTS = 6
INITIAL_BACKOFF_SECONDS = 0.5
MAX_BACKOFF_SECONDS = 4.0

TRANSIENT_ERROR_TYPES = (
    aiohttp.ClientConnectionError,
    aiohttp.ClientPayloadError,
    asyncio.TimeoutError,
)

SleepFunc = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class ApiRequest:
    """One HTTP request; built fresh for every attempt."""

    method: str
    path: str
    params: Optional[Dict[str, str]] = None
    json_body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def request_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if self.params is not None:
            kwargs["params"] = self.params
        headers = dict(self.headers)
        if self.json_body is not None:
            kwargs["data"] = orjson.dumps(self.json_body)
            headers["Content-Type"] = "application/json; charset=utf-8"
        if headers:
            kwargs["headers"] = headers
        return kwargs


RequestBuilder = Callable[[], ApiRequest]


def clamp_attempts(max_attempts: int) -> int:
    return max(MIN_ATTEMPTS, min(MAX_ATTEMPTS, int(max_attempts)))


def compute_retry_delay(attempt: int) -> float:
    """Delay after failed attempt ``attempt`` (1-based): 0.5s doubling up to 4s."""
    if attempt < 1:
        raise TypeError("Retry attempt must be at least 1")
    return min(INITIAL_BACKOFF_SECONDS * (2 ** (attempt - 1)), MAX_BACKOFF_SECONDS)


class RequestExecutor:
    """Execute HTTP requests with retries on transient failures."""

    def __init__(
        self,
        session_manager: SessionManager,
        max_attempts: int,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self._session_manager = session_manager
        self._max_attempts = clamp_attempts(max_attempts)
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def send(self, build_request: RequestBuilder) -> str:
        """
        Send the request built by ``build_request`` and return the body text.

        Transient failures (connection errors, truncated payloads, client
        timeouts) are retried while attempts remain. Non-2xx statuses raise
        ``aiohttp.ClientResponseError`` immediately. Cancellation of the
        calling task propagates without retry.
        """
        await self._session_manager.initialize()
        session = self._session_manager.get_session()

        for attempt in range(1, self._max_attempts + 1):
            request = build_request()
            try:
                return await self._send_once(session, request)
            except TRANSIENT_ERROR_TYPES as exc:
                if attempt >= self._max_attempts:
                    logger.error(
                        "Langame %s %s failed after %d attempt(s): %s",
                        request.method,
                        request.path,
                        attempt,
                        _describe(exc),
                    )
                    raise
                delay = compute_retry_delay(attempt)
                logger.warning(
                    "Langame %s %s failed (%d/%d): %s; retrying in %.1fs",
                    request.method,
                    request.path,
                    attempt,
                    self._max_attempts,
                    _describe(exc),
                    delay,
                )
                await self._sleep(delay)

        raise RuntimeError("Langame request loop exited without a result")

    async def _send_once(self, session: aiohttp.ClientSession, request: ApiRequest) -> str:
        url = self._session_manager.build_url(request.path)
        async with session.request(request.method, url, **request.request_kwargs()) as response:
            response.raise_for_status()
            try:
                return await response.text()
            except UnicodeDecodeError as exc:
                raise ResponseDecodeError(f"{request.method} {request.path}: {exc.reason}") from exc


def _describe(exc: BaseException) -> str:
    message = str(exc)
    return message if message else exc.__class__.__name__
