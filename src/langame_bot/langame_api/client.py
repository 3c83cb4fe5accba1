"""Langame public API client - slim coordinator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .models import DeviceDirectory, ManageRequest, ManageResponse
from .request_executor import ApiRequest, RequestExecutor, SleepFunc
from .response_parser import parse_linked_pc_list, parse_manage_response
from .session_manager import SessionManager

__all__ = ["LangameApiClient", "LangameConfig"]

logger = logging.getLogger(__name__)

MANAGE_PATH = "/public_api/pc/manage"
LINKED_PC_LIST_PATH = "/public_api/global/linking_pc_by_type/list"

DEFAULT_LANGAME_REQUEST_TIMEOUT_SECONDS = 30
DEFAULT_LANGAME_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class LangameConfig:
    """Configuration for the Langame API client."""

    base_url: str
    api_key: str
    request_timeout_seconds: int = DEFAULT_LANGAME_REQUEST_TIMEOUT_SECONDS
    max_attempts: int = DEFAULT_LANGAME_MAX_ATTEMPTS


class LangameApiClient:
    """Client for the Langame management endpoints used by the bot."""

    def __init__(
        self,
        config: LangameConfig,
        *,
        session_manager: Optional[SessionManager] = None,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self._config = config
        self._session_manager = session_manager or SessionManager(
            config.base_url,
            config.request_timeout_seconds,
            headers={"Accept": "*/*", "X-API-KEY": config.api_key},
        )
        executor_kwargs = {} if sleep is None else {"sleep": sleep}
        self._executor = RequestExecutor(self._session_manager, config.max_attempts, **executor_kwargs)

    @property
    def config(self) -> LangameConfig:
        return self._config

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    async def start(self) -> None:
        await self._session_manager.initialize()

    async def close(self) -> None:
        await self._session_manager.close()

    async def __aenter__(self) -> "LangameApiClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def reboot(self, club_id: int, pc_type: str) -> ManageResponse:
        """Send the reboot command for every PC of ``pc_type`` in ``club_id``."""
        payload = ManageRequest(club_id=club_id, pc_type=pc_type).to_payload()

        def build_request() -> ApiRequest:
            return ApiRequest(method="POST", path=MANAGE_PATH, json_body=payload)

        body = await self._executor.send(build_request)
        response = parse_manage_response(body)
        logger.info(
            "Reboot request for club %s type %s returned status=%s devices=%d",
            club_id,
            pc_type,
            response.status,
            len(response.data),
        )
        return response

    async def get_pc_name_lookup(self, club_id: int, pc_type: str) -> DeviceDirectory:
        """Fetch the linked-PC listing and index it by UUID."""
        params = {"club_id": str(club_id), "type": pc_type}

        def build_request() -> ApiRequest:
            return ApiRequest(method="GET", path=LINKED_PC_LIST_PATH, params=params)

        body = await self._executor.send(build_request)
        directory = DeviceDirectory.from_linked_pcs(parse_linked_pc_list(body))
        logger.debug("Loaded %d PC names for club %s", len(directory), club_id)
        return directory
