"""OpenAI chat completions transports (blocking and asyncio)."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, cast

import httpx
import openai
from openai import APIConnectionError, APIError, APIStatusError

from vibesort.config import SorterSettings
from vibesort.errors import ApiError, TransportError
from vibesort.interfaces import Message

logger = logging.getLogger(__name__)


def _payload(settings: SorterSettings, messages: Iterable[Message]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": settings.model,
        "messages": [dict(message) for message in messages],
    }
    if settings.temperature is not None:
        payload["temperature"] = settings.temperature
    return payload


def _first_content(response: Any) -> str:
    choices = getattr(response, "choices", None)
    if not isinstance(choices, list) or not choices:
        raise ApiError("LLM API returned a malformed response: no choices")
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        raise ApiError("LLM API returned a malformed response: first choice has no content")
    return content


def _translate(exc: APIError) -> Exception:
    """Map an SDK exception onto the sorter's error taxonomy."""
    if isinstance(exc, APIConnectionError):
        return TransportError(f"HTTP request failed: {exc}")
    if isinstance(exc, APIStatusError):
        body = exc.response.text
        return ApiError(
            f"API returned status {exc.status_code}\nServer response: {body}",
            status_code=exc.status_code,
            body=body,
        )
    return ApiError(f"LLM API error: {exc}")


class OpenAIChatClient:
    """Thin wrapper around the OpenAI chat completions API."""

    def __init__(
        self, settings: SorterSettings, http_client: Optional[httpx.Client] = None
    ) -> None:
        self._settings = settings
        self._client = openai.OpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url.rstrip("/"),
            timeout=httpx.Timeout(settings.timeout_seconds),
            max_retries=0,
            http_client=http_client,
        )

    @property
    def model(self) -> str:
        return self._settings.model

    def complete(self, messages: Iterable[Message]) -> str:
        client = cast(Any, self._client.chat.completions)
        payload = _payload(self._settings, messages)
        logger.debug("POST %s/chat/completions model=%s", self._settings.base_url, self.model)
        try:
            response = client.create(**payload)
        except APIError as exc:
            raise _translate(exc) from exc
        except ValueError as exc:
            # success status with a body that is not JSON
            raise ApiError(f"LLM API returned a malformed response: {exc}") from exc
        return _first_content(response)

    def close(self) -> None:
        self._client.close()


class AsyncOpenAIChatClient:
    """Asyncio variant of :class:`OpenAIChatClient`."""

    def __init__(
        self, settings: SorterSettings, http_client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self._settings = settings
        self._client = openai.AsyncOpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url.rstrip("/"),
            timeout=httpx.Timeout(settings.timeout_seconds),
            max_retries=0,
            http_client=http_client,
        )

    @property
    def model(self) -> str:
        return self._settings.model

    async def complete(self, messages: Iterable[Message]) -> str:
        client = cast(Any, self._client.chat.completions)
        payload = _payload(self._settings, messages)
        logger.debug("POST %s/chat/completions model=%s", self._settings.base_url, self.model)
        try:
            response = await client.create(**payload)
        except APIError as exc:
            raise _translate(exc) from exc
        except ValueError as exc:
            # success status with a body that is not JSON
            raise ApiError(f"LLM API returned a malformed response: {exc}") from exc
        return _first_content(response)

    async def aclose(self) -> None:
        await self._client.close()


def create_client(
    settings: SorterSettings, http_client: Optional[httpx.Client] = None
) -> OpenAIChatClient:
    return OpenAIChatClient(settings, http_client)


def create_async_client(
    settings: SorterSettings, http_client: Optional[httpx.AsyncClient] = None
) -> AsyncOpenAIChatClient:
    return AsyncOpenAIChatClient(settings, http_client)


__all__ = [
    "AsyncOpenAIChatClient",
    "OpenAIChatClient",
    "create_async_client",
    "create_client",
]
