"""Shared value types: usage counts, cache control, errors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class CacheControlType(str, Enum):
    """How a content block may be cached."""

    EPHEMERAL = "ephemeral"
    PERSISTENT = "persistent"

    def __str__(self) -> str:
        return self.value


class ReasoningEffort(str, Enum):
    """Effort level for extended thinking."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value

    def is_valid(self) -> bool:
        return self in (ReasoningEffort.LOW, ReasoningEffort.MEDIUM, ReasoningEffort.HIGH)


@dataclass
class ImageSource:
    """An inline image source."""

    type: str
    media_type: str
    data: str


@dataclass
class Thinking:
    """Extended thinking settings for a request."""

    type: str = "enabled"
    budget_tokens: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "budget_tokens": self.budget_tokens}


@dataclass
class Usage:
    """Token usage of a response."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0

    def copy(self) -> Usage:
        return Usage(
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            cache_creation_input_tokens=self.cache_creation_input_tokens,
            cache_read_input_tokens=self.cache_read_input_tokens,
        )

    def add(self, other: Usage) -> None:
        """Add another usage's counts to this one in place."""
        if other is None:
            raise TypeError("cannot add None to usage")
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens
        self.cache_creation_input_tokens += other.cache_creation_input_tokens
        self.cache_read_input_tokens += other.cache_read_input_tokens

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
        }
        if self.cache_creation_input_tokens:
            out["cache_creation_input_tokens"] = self.cache_creation_input_tokens
        if self.cache_read_input_tokens:
            out["cache_read_input_tokens"] = self.cache_read_input_tokens
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Usage:
        data = data or {}
        return cls(
            input_tokens=int(data.get("input_tokens") or 0),
            output_tokens=int(data.get("output_tokens") or 0),
            cache_creation_input_tokens=int(data.get("cache_creation_input_tokens") or 0),
            cache_read_input_tokens=int(data.get("cache_read_input_tokens") or 0),
        )


_RETRYABLE_STATUS_CODES = frozenset({429, 500, 503, 504, 520})


def should_retry(status_code: int) -> bool:
    """Report whether an HTTP status code warrants a retry."""
    return status_code in _RETRYABLE_STATUS_CODES


class ClientError(Exception):
    """An error response from the API."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(status_code, body)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return f"provider api error (status {self.status_code}): {self.body}"

    def is_recoverable(self) -> bool:
        return should_retry(self.status_code)