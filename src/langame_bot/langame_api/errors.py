"""Shared error types for the Langame API client."""

from typing import Any


class LangameErrorBase(RuntimeError):
    """Base error that attaches provided keyword fields as attributes."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class LangameApiError(LangameErrorBase):
    """Raised when a Langame response cannot be interpreted."""


class ManageResponseParseError(LangameApiError):
    """Manage endpoint returned a body that is not a manage response."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to parse manage response: {detail}", detail=detail)


class LinkedPcListParseError(LangameApiError):
    """Directory endpoint returned a body that is not a list of PCs."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to parse list of PCs: {detail}", detail=detail)


class ResponseDecodeError(LangameApiError):
    """Response body could not be decoded as text."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to decode response body: {detail}", detail=detail)
