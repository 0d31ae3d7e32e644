"""Prompt construction and reply decoding for LLM sorting."""

from __future__ import annotations

import json
from typing import List, Sequence, Type, TypeVar

from vibesort.errors import ParseError
from vibesort.interfaces import Message

T = TypeVar("T", int, str)

SYSTEM_PROMPT = (
    "You are a sorting function. Sort the following JSON array in ascending order "
    "and return ONLY the sorted JSON array, nothing else. Do not add commentary, "
    "do not wrap the array in code fences, keep every element exactly as given."
)


def _matches(value: object, element_type: Type[T]) -> bool:
    # bool is a subclass of int but serializes as true/false
    if isinstance(value, bool):
        return False
    return isinstance(value, element_type)


def encode_items(items: Sequence[T], element_type: Type[T]) -> str:
    """Serialize the input as a compact JSON array literal."""
    for index, item in enumerate(items):
        if not _matches(item, element_type):
            raise TypeError(
                f"Item {index} must be {element_type.__name__}, got {type(item).__name__}"
            )
    return json.dumps(list(items), ensure_ascii=False, separators=(",", ":"))


def build_messages(serialized: str) -> List[Message]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": serialized},
    ]


def decode_items(content: str, element_type: Type[T]) -> List[T]:
    """Decode the assistant reply into a list of ``element_type``.

    Only surrounding whitespace is tolerated. Anything that is not a JSON
    array of the requested type raises :class:`ParseError` with the raw text.
    """
    text = content.strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(text, f"not valid JSON ({exc})") from exc
    if not isinstance(parsed, list):
        raise ParseError(text, f"expected a JSON array, got {type(parsed).__name__}")
    for index, value in enumerate(parsed):
        if not _matches(value, element_type):
            raise ParseError(
                text,
                f"element {index} is {type(value).__name__}, expected {element_type.__name__}",
            )
    return parsed


__all__ = ["SYSTEM_PROMPT", "build_messages", "decode_items", "encode_items"]
