"""Exceptions raised by the sorter clients."""

from __future__ import annotations

from typing import Optional


class VibesortError(RuntimeError):
    """Base class for every failure of a sort call."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(VibesortError):
    """The request never got an HTTP response (connection, DNS, TLS, timeout)."""


class ApiError(VibesortError):
    """The service answered with an error status or an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ParseError(VibesortError):
    """The model's reply could not be decoded into a list of the expected type."""

    def __init__(self, content: str, reason: str) -> None:
        super().__init__(
            f"Failed to parse LLM response as sorted array: {reason}\nLLM returned: {content}"
        )
        self.content = content
        self.reason = reason


__all__ = ["ApiError", "ParseError", "TransportError", "VibesortError"]
