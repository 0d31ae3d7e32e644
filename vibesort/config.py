"""Configuration helpers for the LLM sorter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_TEMPERATURE = 0.0


@dataclass(frozen=True)
class SorterSettings:
    """Immutable connection settings shared by every call of a sorter client."""

    api_key: str
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    temperature: Optional[float] = DEFAULT_TEMPERATURE

    @classmethod
    def from_env(cls) -> "SorterSettings":
        load_dotenv()
        api_key = os.getenv("VIBESORT_API_KEY") or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise RuntimeError(
                "VIBESORT_API_KEY is not configured. Set it in the environment or .env file."
            )
        model = os.getenv("VIBESORT_MODEL", DEFAULT_MODEL)
        base_url = os.getenv("VIBESORT_BASE_URL", DEFAULT_BASE_URL)
        timeout_seconds = _get_float("VIBESORT_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        temperature = _get_optional_float("VIBESORT_TEMPERATURE", DEFAULT_TEMPERATURE)
        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            temperature=temperature,
        )

    def __repr__(self) -> str:
        return (
            f"SorterSettings(api_key='***', model={self.model!r}, "
            f"base_url={self.base_url!r}, timeout_seconds={self.timeout_seconds!r}, "
            f"temperature={self.temperature!r})"
        )


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float, got: {raw}") from exc


def _get_optional_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None:
        return default
    if not raw:
        # Set but empty: leave the field out of the request.
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float, got: {raw}") from exc


__all__ = ["SorterSettings"]
