"""Sorter clients that delegate ordering to a chat-completion model."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Type

import httpx

from vibesort.config import DEFAULT_TEMPERATURE, DEFAULT_TIMEOUT_SECONDS, SorterSettings
from vibesort.interfaces import AsyncChatClient, ChatClient
from vibesort.prompt import T, build_messages, decode_items, encode_items
from vibesort.provider_openai import create_async_client, create_client

logger = logging.getLogger(__name__)


class _SorterBase:
    """Settings holder shared by the blocking and asyncio clients."""

    def __init__(self, settings: SorterSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> SorterSettings:
        return self._settings

    @property
    def api_key(self) -> str:
        return self._settings.api_key

    @property
    def model(self) -> str:
        return self._settings.model

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r}, base_url={self.base_url!r})"


class Vibesort(_SorterBase):
    """Sort lists by asking an OpenAI-compatible chat completion endpoint.

    Usage:
        sorter = Vibesort("sk-...", "gpt-3.5-turbo", "https://api.openai.com/v1")
        sorter.sort([3, 1, 4, 1, 5, 9, 2, 6])       # [1, 1, 2, 3, 4, 5, 6, 9]
        sorter.sort_strings(["banana", "apple"])    # ["apple", "banana"]

    Each call is a single request with no retry. Ordering is whatever the
    model answers: the result is neither checked for being sorted nor for
    being a permutation of the input.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        temperature: Optional[float] = DEFAULT_TEMPERATURE,
        http_client: Optional[httpx.Client] = None,
        chat_client: Optional[ChatClient] = None,
    ) -> None:
        settings = SorterSettings(
            api_key=api_key,
            model=model,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            temperature=temperature,
        )
        super().__init__(settings)
        if chat_client is None:
            chat_client = create_client(settings, http_client)
        self._chat: ChatClient = chat_client

    @classmethod
    def from_settings(
        cls,
        settings: SorterSettings,
        http_client: Optional[httpx.Client] = None,
        chat_client: Optional[ChatClient] = None,
    ) -> "Vibesort":
        return cls(
            settings.api_key,
            settings.model,
            settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            temperature=settings.temperature,
            http_client=http_client,
            chat_client=chat_client,
        )

    @classmethod
    def from_env(cls, http_client: Optional[httpx.Client] = None) -> "Vibesort":
        return cls.from_settings(SorterSettings.from_env(), http_client=http_client)

    def close(self) -> None:
        """Release the HTTP connection pool, including an injected ``http_client``."""
        close = getattr(self._chat, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "Vibesort":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def sort(self, items: Sequence[int]) -> List[int]:
        """Sort integers.

        Raises:
            TypeError: If an item is not an ``int``
            TransportError: If the endpoint could not be reached
            ApiError: If the endpoint returned an error status or a malformed body
            ParseError: If the model's reply is not a JSON array of integers
        """
        return self._sort(items, int)

    def sort_strings(self, items: Sequence[str]) -> List[str]:
        """Sort strings. Raises the same errors as :meth:`sort`."""
        return self._sort(items, str)

    def _sort(self, items: Sequence[T], element_type: Type[T]) -> List[T]:
        serialized = encode_items(items, element_type)
        if len(items) <= 1:
            logger.debug("Skipping LLM call for %d item(s)", len(items))
            return list(items)
        content = self._chat.complete(build_messages(serialized))
        logger.debug("LLM replied with %d characters", len(content))
        return decode_items(content, element_type)


class AsyncVibesort(_SorterBase):
    """Asyncio counterpart of :class:`Vibesort`.

    Cancelling a pending ``sort`` aborts the underlying HTTP request.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        temperature: Optional[float] = DEFAULT_TEMPERATURE,
        http_client: Optional[httpx.AsyncClient] = None,
        chat_client: Optional[AsyncChatClient] = None,
    ) -> None:
        settings = SorterSettings(
            api_key=api_key,
            model=model,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            temperature=temperature,
        )
        super().__init__(settings)
        if chat_client is None:
            chat_client = create_async_client(settings, http_client)
        self._chat: AsyncChatClient = chat_client

    @classmethod
    def from_settings(
        cls,
        settings: SorterSettings,
        http_client: Optional[httpx.AsyncClient] = None,
        chat_client: Optional[AsyncChatClient] = None,
    ) -> "AsyncVibesort":
        return cls(
            settings.api_key,
            settings.model,
            settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            temperature=settings.temperature,
            http_client=http_client,
            chat_client=chat_client,
        )

    @classmethod
    def from_env(cls, http_client: Optional[httpx.AsyncClient] = None) -> "AsyncVibesort":
        return cls.from_settings(SorterSettings.from_env(), http_client=http_client)

    async def aclose(self) -> None:
        aclose = getattr(self._chat, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "AsyncVibesort":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def sort(self, items: Sequence[int]) -> List[int]:
        return await self._sort(items, int)

    async def sort_strings(self, items: Sequence[str]) -> List[str]:
        return await self._sort(items, str)

    async def _sort(self, items: Sequence[T], element_type: Type[T]) -> List[T]:
        serialized = encode_items(items, element_type)
        if len(items) <= 1:
            logger.debug("Skipping LLM call for %d item(s)", len(items))
            return list(items)
        content = await self._chat.complete(build_messages(serialized))
        logger.debug("LLM replied with %d characters", len(content))
        return decode_items(content, element_type)


__all__ = ["AsyncVibesort", "Vibesort"]
