"""HTTP session management for the Langame API client."""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional

import aiohttp

from ..http_utils import is_aiohttp_session_open

logger = logging.getLogger(__name__)

MAX_CONNECTIONS_PER_HOST = 10
DNS_CACHE_TTL_SECONDS = 300


class SessionManager:
    """Owns one pooled ``aiohttp.ClientSession`` shared by every request."""

    def __init__(self, base_url: str, timeout_seconds: float, headers: Mapping[str, str]) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._headers = dict(headers)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Ensure the HTTP session is ready."""
        async with self._session_lock:
            if is_aiohttp_session_open(self._session):
                return

            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout_seconds),
                headers=self._headers,
                connector=aiohttp.TCPConnector(
                    limit=MAX_CONNECTIONS_PER_HOST,
                    limit_per_host=MAX_CONNECTIONS_PER_HOST,
                    ttl_dns_cache=DNS_CACHE_TTL_SECONDS,
                ),
            )
            logger.debug("Langame HTTP session created for %s", self._base_url)

    async def close(self) -> None:
        """Close the HTTP session if one exists."""
        async with self._session_lock:
            if self._session is not None:
                await self._session.close()
                self._session = None

    def get_session(self) -> aiohttp.ClientSession:
        """Get the current session, raising if not initialized."""
        if self._session is None:
            raise RuntimeError("HTTP session not initialized")
        return self._session

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        return self._session

    def set_session(self, value: Optional[aiohttp.ClientSession]) -> None:
        """Override the managed session (tests inject fakes here)."""
        self._session = value
