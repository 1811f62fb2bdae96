"""Messages exchanged with the model, and helpers to build them."""

from __future__ import annotations

import base64
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .content import (
    Content,
    ContentSource,
    ContentSourceType,
    DocumentContent,
    ImageContent,
    TextContent,
    ThinkingContent,
    ToolResultContent,
)
from .server_content import unmarshal_content


class Role(str, Enum):
    """The role of a message in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value


def _role(value: Any) -> Role | str:
    value = value or ""
    try:
        return Role(value)
    except ValueError:
        return str(value)


@dataclass
class Message:
    """A message passed to or from the model."""

    role: Role | str = ""
    content: list[Content] = field(default_factory=list)
    id: str = ""

    def last_text(self) -> str:
        """Return the text of the last text block, or an empty string."""
        return next(
            (block.text for block in reversed(self.content) if isinstance(block, TextContent)),
            "",
        )

    def text(self) -> str:
        """Return all text blocks joined by blank lines."""
        return "\n\n".join(
            block.text for block in self.content if isinstance(block, TextContent)
        )

    def with_text(self, *args: str) -> Message:
        """Append one text block per argument."""
        self.content.extend(TextContent(text=text) for text in args)
        return self

    def with_content(self, *args: Content) -> Message:
        """Append the given blocks."""
        self.content.extend(args)
        return self

    def image_content(self) -> ImageContent | None:
        """Return the first image block, if any."""
        return next((b for b in self.content if isinstance(b, ImageContent)), None)

    def thinking_content(self) -> ThinkingContent | None:
        """Return the first thinking block, if any."""
        return next((b for b in self.content if isinstance(b, ThinkingContent)), None)

    def decode(self) -> Any:
        """Parse the last text block as JSON."""
        for block in reversed(self.content):
            if isinstance(block, TextContent):
                return json.loads(block.text)
        raise ValueError("no text content found")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.id:
            out["id"] = self.id
        out["role"] = str(self.role)
        out["content"] = [block.to_dict() for block in self.content]
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Message:
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError("message must be a JSON object")
        return cls(
            role=_role(data.get("role")),
            content=[unmarshal_content(block) for block in data.get("content") or []],
            id=data.get("id") or "",
        )


def new_message(role: Role | str, content: Iterable[Content]) -> Message:
    """Create a message with the given role and blocks."""
    return Message(role=role, content=list(content))


def new_user_message(*args: Content) -> Message:
    """Create a user message from blocks."""
    return Message(role=Role.USER, content=list(args))


def new_user_text_message(text: str) -> Message:
    """Create a user message holding one text block."""
    return Message(role=Role.USER, content=[TextContent(text=text)])


def new_text_content(text: str) -> TextContent:
    """Create a text block."""
    return TextContent(text=text)


def new_assistant_message(*args: Content) -> Message:
    """Create an assistant message from blocks."""
    return Message(role=Role.ASSISTANT, content=list(args))


def new_assistant_text_message(text: str) -> Message:
    """Create an assistant message holding one text block."""
    return Message(role=Role.ASSISTANT, content=[TextContent(text=text)])


def new_tool_result_message(*args: ToolResultContent) -> Message:
    """Create a user message carrying tool results back to the model."""
    return Message(
        role=Role.USER,
        content=[
            ToolResultContent(tool_use_id=output.tool_use_id, content=output.content)
            for output in args
        ],
    )


def new_document_content(source: ContentSource) -> DocumentContent:
    """Create a document block from a source."""
    return DocumentContent(source=source)


def encoded_data(media_type: str, base64_data: str) -> ContentSource:
    """Create a source from already base64-encoded data."""
    return ContentSource(
        type=ContentSourceType.BASE64, media_type=media_type, data=base64_data
    )


def raw_data(media_type: str, data: bytes) -> ContentSource:
    """Create a source from raw bytes, encoding them as base64."""
    return ContentSource(
        type=ContentSourceType.BASE64,
        media_type=media_type,
        data=base64.b64encode(bytes(data)).decode("ascii"),
    )


def content_url(url: str) -> ContentSource:
    """Create a source that points at a URL."""
    return ContentSource(type=ContentSourceType.URL, url=url)


def file_id(identifier: str) -> ContentSource:
    """Create a source that refers to an uploaded file."""
    return ContentSource(type=ContentSourceType.FILE, file_id=identifier)