"""Content blocks that make up a message."""

from __future__ import annotations

import base64
import io
import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from PIL import Image

from .citations import Citation, CitationSettings, unmarshal_citations
from .types import CacheControlType


class ContentType(str, Enum):
    """The kind of a content block."""

    TEXT = "text"
    IMAGE = "image"
    DOCUMENT = "document"
    FILE = "file"
    TOOL_USE = "tool_use"
    TOOL_RESULT = "tool_result"
    THINKING = "thinking"
    REDACTED_THINKING = "redacted_thinking"
    SERVER_TOOL_USE = "server_tool_use"
    WEB_SEARCH_TOOL_RESULT = "web_search_tool_result"
    MCP_TOOL_USE = "mcp_tool_use"
    MCP_TOOL_RESULT = "mcp_tool_result"
    MCP_LIST_TOOLS = "mcp_list_tools"
    MCP_APPROVAL_REQUEST = "mcp_approval_request"
    MCP_APPROVAL_RESPONSE = "mcp_approval_response"
    CODE_EXECUTION_TOOL_RESULT = "code_execution_tool_result"
    REFUSAL = "refusal"

    def __str__(self) -> str:
        return self.value


class ContentSourceType(str, Enum):
    """Where the media of a content source lives."""

    BASE64 = "base64"
    URL = "url"
    TEXT = "text"
    FILE = "file"

    def __str__(self) -> str:
        return self.value


def _coerce(enum_cls: type[Enum], value: Any) -> Any:
    value = value or ""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _load_object(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("content must be a JSON object")
    return data


@dataclass
class CacheControl:
    """Caching instructions for a content block."""

    type: CacheControlType | str = CacheControlType.EPHEMERAL

    def to_dict(self) -> dict[str, Any]:
        return {"type": str(self.type)}


def _cache_control_from(value: Any) -> CacheControl | None:
    if value is None:
        return None
    return CacheControl(type=_coerce(CacheControlType, _load_object(value).get("type")))


@dataclass
class ContentChunk:
    """A chunk of content inside a chunked document source."""

    type: str = "text"
    text: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.text:
            out["text"] = self.text
        return out


def _chunk_from(value: Mapping[str, Any]) -> ContentChunk:
    return ContentChunk(type=value.get("type") or "", text=value.get("text") or "")


@dataclass
class ContentSource:
    """Describes where the media of an image or document comes from."""

    type: ContentSourceType | str
    media_type: str = ""
    data: str = ""
    url: str = ""
    file_id: str = ""
    content: list[ContentChunk] = field(default_factory=list)
    generation_id: str = ""
    generation_status: str = ""

    def decoded_data(self) -> bytes:
        """Return the decoded bytes of a base64 source."""
        if self.type != ContentSourceType.BASE64:
            raise ValueError(f"cannot decode data content source type: {self.type}")
        return base64.b64decode(self.data, validate=True)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": str(self.type)}
        for key in ("media_type", "data", "url", "file_id"):
            value = getattr(self, key)
            if value:
                out[key] = value
        if self.content:
            out["content"] = [chunk.to_dict() for chunk in self.content]
        if self.generation_id:
            out["generation_id"] = self.generation_id
        if self.generation_status:
            out["generation_status"] = self.generation_status
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ContentSource:
        obj = _load_object(data)
        return cls(
            type=_coerce(ContentSourceType, obj.get("type")),
            media_type=obj.get("media_type") or "",
            data=obj.get("data") or "",
            url=obj.get("url") or "",
            file_id=obj.get("file_id") or "",
            content=[_chunk_from(chunk) for chunk in obj.get("content") or []],
            generation_id=obj.get("generation_id") or "",
            generation_status=obj.get("generation_status") or "",
        )


def _source_from(value: Any) -> ContentSource | None:
    return None if value is None else ContentSource.from_dict(value)


def _dump_value(value: Any) -> Any:
    if isinstance(value, Content):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_dump_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _dump_value(item) for key, item in value.items()}
    return value


_REGISTRY: dict[str, type[Content]] = {}


class Content(ABC):
    """A single block of content in a message.

    Each concrete block names its kind in the class attribute ``type``;
    ``Content.from_dict`` picks the block class from the ``type`` field.
    """

    type: ClassVar[ContentType]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        kind = cls.__dict__.get("type")
        if isinstance(kind, ContentType):
            _REGISTRY[kind.value] = cls

    @abstractmethod
    def _payload(self) -> dict[str, Any]:
        """Return the block's fields other than ``type``."""

    @classmethod
    @abstractmethod
    def _parse(cls, obj: Mapping[str, Any]) -> Content:
        """Build the block from its JSON object."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, **self._payload()}

    @classmethod
    def from_dict(cls, data: Any) -> Content:
        """Build a block from a JSON object given as a dict, str or bytes."""
        obj = _load_object(data)
        if cls is Content:
            kind = obj.get("type") or ""
            target = _REGISTRY.get(str(kind))
            if target is None:
                raise ValueError(f"unsupported content type: {kind}")
        else:
            target = cls
        return target._parse(obj)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


@dataclass
class TextContent(Content):
    """Plain text, optionally with citations."""

    type: ClassVar[ContentType] = ContentType.TEXT

    text: str = ""
    cache_control: CacheControl | None = None
    citations: list[Citation] = field(default_factory=list)

    def set_cache_control(self, cache_control: CacheControl | None) -> None:
        self.cache_control = cache_control

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"text": self.text}
        if self.cache_control is not None:
            out["cache_control"] = self.cache_control.to_dict()
        if self.citations:
            out["citations"] = [citation.to_dict() for citation in self.citations]
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> TextContent:
        return cls(
            text=obj.get("text") or "",
            cache_control=_cache_control_from(obj.get("cache_control")),
            citations=unmarshal_citations(obj["citations"]) if "citations" in obj else [],
        )


@dataclass
class RefusalContent(Content):
    """A refusal issued by the model."""

    type: ClassVar[ContentType] = ContentType.REFUSAL

    text: str = ""
    cache_control: CacheControl | None = None

    def set_cache_control(self, cache_control: CacheControl | None) -> None:
        self.cache_control = cache_control

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"text": self.text}
        if self.cache_control is not None:
            out["cache_control"] = self.cache_control.to_dict()
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> RefusalContent:
        return cls(
            text=obj.get("text") or "",
            cache_control=_cache_control_from(obj.get("cache_control")),
        )


@dataclass
class ImageContent(Content):
    """An image given by base64 data, URL or file id."""

    type: ClassVar[ContentType] = ContentType.IMAGE

    source: ContentSource | None = None
    cache_control: CacheControl | None = None

    def set_cache_control(self, cache_control: CacheControl | None) -> None:
        self.cache_control = cache_control

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "source": self.source.to_dict() if self.source is not None else None
        }
        if self.cache_control is not None:
            out["cache_control"] = self.cache_control.to_dict()
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> ImageContent:
        return cls(
            source=_source_from(obj.get("source")),
            cache_control=_cache_control_from(obj.get("cache_control")),
        )

    def image(self) -> Image.Image:
        """Decode base64 image data into a Pillow image."""
        if self.source is None:
            raise ValueError("image content has no source")
        if self.source.type != ContentSourceType.BASE64:
            raise ValueError(
                f"image content source type is not base64: {self.source.type}"
            )
        img = Image.open(io.BytesIO(self.source.decoded_data()))
        img.load()
        return img


@dataclass
class DocumentContent(Content):
    """A document such as a PDF or plain text."""

    type: ClassVar[ContentType] = ContentType.DOCUMENT

    source: ContentSource | None = None
    title: str = ""
    context: str = ""
    citations: CitationSettings | None = None
    cache_control: CacheControl | None = None

    def set_cache_control(self, cache_control: CacheControl | None) -> None:
        self.cache_control = cache_control

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "source": self.source.to_dict() if self.source is not None else None
        }
        if self.title:
            out["title"] = self.title
        if self.context:
            out["context"] = self.context
        if self.citations is not None:
            out["citations"] = self.citations.to_dict()
        if self.cache_control is not None:
            out["cache_control"] = self.cache_control.to_dict()
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> DocumentContent:
        citations = obj.get("citations")
        return cls(
            source=_source_from(obj.get("source")),
            title=obj.get("title") or "",
            context=obj.get("context") or "",
            citations=None
            if citations is None
            else CitationSettings(enabled=bool(_load_object(citations).get("enabled"))),
            cache_control=_cache_control_from(obj.get("cache_control")),
        )


@dataclass
class ToolUseContent(Content):
    """A request from the model to call a tool.

    ``input`` holds the raw JSON text of the arguments; a dict is also
    accepted and written as is.
    """

    type: ClassVar[ContentType] = ContentType.TOOL_USE

    id: str = ""
    name: str = ""
    input: Any = ""

    def _payload(self) -> dict[str, Any]:
        raw = self.input
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        if isinstance(raw, str):
            value = json.loads(raw) if raw.strip() else None
        else:
            value = raw
        return {"id": self.id, "name": self.name, "input": value}

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> ToolUseContent:
        return cls(
            id=obj.get("id") or "",
            name=obj.get("name") or "",
            input=json.dumps(obj["input"]) if "input" in obj else "",
        )


@dataclass
class ToolResultContent(Content):
    """The result of a tool call, passed back to the model."""

    type: ClassVar[ContentType] = ContentType.TOOL_RESULT

    tool_use_id: str = ""
    content: Any = None
    is_error: bool = False
    cache_control: CacheControl | None = None

    def set_cache_control(self, cache_control: CacheControl | None) -> None:
        self.cache_control = cache_control

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "tool_use_id": self.tool_use_id,
            "content": _dump_value(self.content),
        }
        if self.is_error:
            out["is_error"] = True
        if self.cache_control is not None:
            out["cache_control"] = self.cache_control.to_dict()
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> ToolResultContent:
        return cls(
            tool_use_id=obj.get("tool_use_id") or "",
            content=obj.get("content"),
            is_error=bool(obj.get("is_error")),
            cache_control=_cache_control_from(obj.get("cache_control")),
        )


@dataclass
class ThinkingContent(Content):
    """The model's visible reasoning, with a verification signature."""

    type: ClassVar[ContentType] = ContentType.THINKING

    thinking: str = ""
    signature: str = ""
    id: str = ""

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.id:
            out["id"] = self.id
        out["thinking"] = self.thinking
        if self.signature:
            out["signature"] = self.signature
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> ThinkingContent:
        return cls(
            thinking=obj.get("thinking") or "",
            signature=obj.get("signature") or "",
            id=obj.get("id") or "",
        )


@dataclass
class RedactedThinkingContent(Content):
    """Encrypted reasoning that is passed back to the model unchanged."""

    type: ClassVar[ContentType] = ContentType.REDACTED_THINKING

    data: str = ""

    def _payload(self) -> dict[str, Any]:
        return {"data": self.data}

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> RedactedThinkingContent:
        return cls(data=obj.get("data") or "")