"""Streaming events and the accumulation of a response from them."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .content import (
    Content,
    ContentType,
    RedactedThinkingContent,
    TextContent,
    ThinkingContent,
    ToolUseContent,
)
from .response import Response
from .types import Usage


class EventType(str, Enum):
    """The type of a streaming event."""

    PING = "ping"
    MESSAGE_START = "message_start"
    MESSAGE_DELTA = "message_delta"
    MESSAGE_STOP = "message_stop"
    CONTENT_BLOCK_START = "content_block_start"
    CONTENT_BLOCK_DELTA = "content_block_delta"
    CONTENT_BLOCK_STOP = "content_block_stop"

    def __str__(self) -> str:
        return self.value


class EventDeltaType(str, Enum):
    """The type of a delta in a streaming event."""

    TEXT = "text_delta"
    INPUT_JSON = "input_json_delta"
    THINKING = "thinking_delta"
    SIGNATURE = "signature_delta"
    CITATIONS = "citations_delta"

    def __str__(self) -> str:
        return self.value


def _coerce(enum_cls: type[Enum], value: Any) -> Any:
    value = value or ""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _load(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("event must be a JSON object")
    return data


@dataclass
class EventContentBlock:
    """The start of a content block. ``input`` is raw JSON text."""

    type: ContentType | str = ""
    text: str = ""
    id: str = ""
    name: str = ""
    input: str = ""
    thinking: str = ""
    signature: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> EventContentBlock:
        obj = _load(data)
        return cls(
            type=_coerce(ContentType, obj.get("type")),
            text=obj.get("text") or "",
            id=obj.get("id") or "",
            name=obj.get("name") or "",
            input=json.dumps(obj["input"]) if obj.get("input") is not None else "",
            thinking=obj.get("thinking") or "",
            signature=obj.get("signature") or "",
        )


@dataclass
class EventDelta:
    """A portion of a response carried by an event."""

    type: EventDeltaType | str = ""
    text: str = ""
    index: int = 0
    stop_reason: str = ""
    stop_sequence: str = ""
    partial_json: str = ""
    thinking: str = ""
    signature: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> EventDelta:
        obj = _load(data)
        return cls(
            type=_coerce(EventDeltaType, obj.get("type")),
            text=obj.get("text") or "",
            index=int(obj.get("index") or 0),
            stop_reason=obj.get("stop_reason") or "",
            stop_sequence=obj.get("stop_sequence") or "",
            partial_json=obj.get("partial_json") or "",
            thinking=obj.get("thinking") or "",
            signature=obj.get("signature") or "",
        )


@dataclass
class Event:
    """A single streaming event."""

    type: EventType | str = ""
    index: int | None = None
    message: Response | None = None
    content_block: EventContentBlock | None = None
    delta: EventDelta | None = None
    usage: Usage | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Event:
        obj = _load(data)
        index = obj.get("index")
        message = obj.get("message")
        block = obj.get("content_block")
        delta = obj.get("delta")
        usage = obj.get("usage")
        return cls(
            type=_coerce(EventType, obj.get("type")),
            index=None if index is None else int(index),
            message=None if message is None else Response.from_dict(message),
            content_block=None if block is None else EventContentBlock.from_dict(block),
            delta=None if delta is None else EventDelta.from_dict(delta),
            usage=None if usage is None else Usage.from_dict(usage),
        )


def _new_block(block: EventContentBlock) -> Content | None:
    if block.type == ContentType.TEXT:
        return TextContent(text=block.text)
    if block.type == ContentType.TOOL_USE:
        return ToolUseContent(id=block.id, name=block.name)
    if block.type == ContentType.THINKING:
        return ThinkingContent(thinking=block.thinking, signature=block.signature)
    if block.type == ContentType.REDACTED_THINKING:
        return RedactedThinkingContent()
    return None


class ResponseAccumulator:
    """Builds a complete response from a stream of events."""

    def __init__(self) -> None:
        self._response: Response | None = None
        self._blocks: dict[int, Content | None] = {}
        self._complete = False

    def add_event(self, event: Event) -> None:
        """Apply one event; raises ValueError if it does not fit the stream."""
        kind = event.type
        if kind == EventType.MESSAGE_START:
            if event.message is None:
                raise ValueError("invalid message start event")
            self._response = event.message
            return

        if kind == EventType.CONTENT_BLOCK_START:
            if self._response is None:
                raise ValueError("no message start event found")
            if event.content_block is None:
                raise ValueError("no content block found in event")
            index = event.index if event.index is not None else len(self._blocks)
            self._blocks[index] = _new_block(event.content_block)

        elif kind == EventType.CONTENT_BLOCK_DELTA:
            if self._response is None or event.delta is None or event.index is None:
                raise ValueError("invalid content block delta event")
            if event.index not in self._blocks:
                raise ValueError("content block not found for index")
            self._apply_delta(self._blocks[event.index], event.delta)

        elif kind == EventType.MESSAGE_DELTA:
            if self._response is None or event.delta is None:
                raise ValueError("invalid message delta event")
            if event.delta.stop_reason:
                self._response.stop_reason = event.delta.stop_reason
            if event.delta.stop_sequence:
                self._response.stop_sequence = event.delta.stop_sequence

        elif kind == EventType.MESSAGE_STOP:
            self._complete = True
            self._finalize()

        if event.usage is not None:
            if self._response is None:
                raise ValueError("no message start event found")
            self._response.usage.add(event.usage)

    @staticmethod
    def _apply_delta(block: Content | None, delta: EventDelta) -> None:
        if delta.type == EventDeltaType.TEXT:
            if not isinstance(block, TextContent):
                raise ValueError("in-progress block is not a text content")
            block.text += delta.text
        elif delta.type == EventDeltaType.INPUT_JSON:
            if not isinstance(block, ToolUseContent):
                raise ValueError("in-progress block is not a tool use content")
            block.input = (block.input or "") + delta.partial_json
        elif delta.type in (EventDeltaType.THINKING, EventDeltaType.SIGNATURE):
            if not isinstance(block, ThinkingContent):
                raise ValueError("in-progress block is not a thinking content")
            block.thinking += delta.thinking
            block.signature += delta.signature

    def _finalize(self) -> None:
        if self._response is None or not self._blocks:
            return
        # Blocks of kinds the accumulator does not build are left out.
        self._response.content = [
            block
            for _, block in sorted(self._blocks.items())
            if block is not None
        ]

    def is_complete(self) -> bool:
        return self._complete

    def response(self) -> Response | None:
        """Return the response built so far, or None before message start."""
        if self._response is not None and self._blocks and not self._response.content:
            self._finalize()
        return self._response

    def usage(self) -> Usage:
        if self._response is None:
            raise ValueError("no message start event found")
        return self._response.usage