"""Core interfaces for dependency inversion."""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol

Message = Mapping[str, str]


class ChatClient(Protocol):
    """Protocol for the chat-completion transports used by the sorter.

    A transport sends one chat completion request and hands back the text of
    the first choice. The sorter never talks to the HTTP layer directly, so a
    provider other than the ``openai`` SDK can be plugged in.
    """

    @property
    def model(self) -> str:
        """Return the model identifier (e.g., 'gpt-3.5-turbo')."""
        ...

    def complete(self, messages: Iterable[Message]) -> str:
        """Execute a chat completion request and return the assistant content.

        Args:
            messages: Iterable of message mappings with 'role' and 'content' keys

        Returns:
            The content string of the first choice

        Raises:
            TransportError: If no HTTP response was received
            ApiError: If the service returned an error status or a malformed body
        """
        ...


class AsyncChatClient(Protocol):
    """Awaitable counterpart of :class:`ChatClient`."""

    @property
    def model(self) -> str:
        ...

    async def complete(self, messages: Iterable[Message]) -> str:
        ...


__all__ = ["AsyncChatClient", "ChatClient", "Message"]
