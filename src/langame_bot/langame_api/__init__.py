"""Langame public API client with retries."""

from .client import LINKED_PC_LIST_PATH, MANAGE_PATH, LangameApiClient, LangameConfig
from .errors import LangameApiError, LinkedPcListParseError, ManageResponseParseError, ResponseDecodeError
from .models import DeviceDirectory, LinkedPc, ManageRequest, ManageResponse
from .request_executor import ApiRequest, RequestExecutor, compute_retry_delay

__all__ = [
    "ApiRequest",
    "DeviceDirectory",
    "LINKED_PC_LIST_PATH",
    "LangameApiClient",
    "LangameApiError",
    "LangameConfig",
    "LinkedPc",
    "LinkedPcListParseError",
    "MANAGE_PATH",
    "ManageRequest",
    "ManageResponse",
    "ManageResponseParseError",
    "RequestExecutor",
    "ResponseDecodeError",
    "compute_retry_delay",
]
