"""Complete responses returned by the messages API."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .content import Content, ToolUseContent
from .message import Message, Role
from .server_content import unmarshal_content
from .types import Usage


def _role(value: Any) -> Role | str:
    value = value or ""
    try:
        return Role(value)
    except ValueError:
        return str(value)


@dataclass
class Response:
    """A generated response, in the shape the messages API returns it."""

    id: str = ""
    model: str = ""
    role: Role | str = ""
    content: list[Content] = field(default_factory=list)
    stop_reason: str = ""
    stop_sequence: str | None = None
    type: str = ""
    usage: Usage = field(default_factory=Usage)

    def message(self) -> Message:
        """Return the response as a message."""
        return Message(id=self.id, role=self.role, content=self.content)

    def tool_calls(self) -> list[ToolUseContent]:
        """Return copies of all tool use blocks in the response."""
        return [
            ToolUseContent(id=block.id, name=block.name, input=block.input)
            for block in self.content
            if isinstance(block, ToolUseContent)
        ]

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "model": self.model,
            "role": str(self.role),
            "content": [block.to_dict() for block in self.content],
            "stop_reason": self.stop_reason,
        }
        if self.stop_sequence is not None:
            out["stop_sequence"] = self.stop_sequence
        out["type"] = self.type
        out["usage"] = self.usage.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Response:
        """Build a response from a JSON object given as a dict, str or bytes."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError("response must be a JSON object")
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            role=_role(data.get("role")),
            content=[unmarshal_content(block) for block in data.get("content") or []],
            stop_reason=data.get("stop_reason") or "",
            stop_sequence=data.get("stop_sequence"),
            type=data.get("type") or "",
            usage=Usage.from_dict(data.get("usage")),
        )