"""Tool descriptions, tool results and tool choice settings."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from .schema import Schema

T = TypeVar("T")


@runtime_checkable
class ToolInterface(Protocol):
    """A tool that the model can be told about."""

    def name(self) -> str:
        """Name of the tool."""
        ...

    def description(self) -> str:
        """Description of the tool."""
        ...

    def schema(self) -> Schema | None:
        """Schema of the parameters used to call the tool."""
        ...


@runtime_checkable
class _ToolConfiguration(Protocol):
    def tool_configuration(self, provider_name: str) -> dict[str, Any] | None: ...


class _TypedTool(Protocol[T]):
    def name(self) -> str: ...

    def description(self) -> str: ...

    def schema(self) -> Schema | None: ...

    def annotations(self) -> ToolAnnotations | None: ...

    def call(self, input: T) -> ToolResult: ...


@dataclass
class Tool:
    """A tool definition as sent to the API."""

    name: str
    description: str = ""
    input_schema: Schema = field(default_factory=Schema)


_HINTS = (
    ("readOnlyHint", "read_only_hint"),
    ("destructiveHint", "destructive_hint"),
    ("idempotentHint", "idempotent_hint"),
    ("openWorldHint", "open_world_hint"),
)


@dataclass
class ToolAnnotations:
    """Optional properties that describe how a tool behaves."""

    title: str = ""
    read_only_hint: bool = False
    destructive_hint: bool = False
    idempotent_hint: bool = False
    open_world_hint: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"title": self.title}
        for key, attr in _HINTS:
            out[key] = getattr(self, attr)
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ToolAnnotations:
        """Build annotations from a JSON object; unknown keys go to ``extra``."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError("tool annotations must be a JSON object")
        raw = dict(data)
        result = cls()
        title = raw.pop("title", None)
        if isinstance(title, str):
            result.title = title
        for key, attr in _HINTS:
            if key in raw:
                value = raw.pop(key)
                if isinstance(value, bool):
                    setattr(result, attr, value)
        result.extra = raw
        return result


class ToolResultContentType(str):
    """The kind of one item in a tool result."""

    TEXT: ClassVar[ToolResultContentType]
    IMAGE: ClassVar[ToolResultContentType]
    AUDIO: ClassVar[ToolResultContentType]

    def __repr__(self) -> str:
        return f"ToolResultContentType({str.__repr__(self)})"


ToolResultContentType.TEXT = ToolResultContentType("text")
ToolResultContentType.IMAGE = ToolResultContentType("image")
ToolResultContentType.AUDIO = ToolResultContentType("audio")


@dataclass
class ToolResultContents:
    """One item of output from a tool call."""

    type: ToolResultContentType | str = ToolResultContentType.TEXT
    text: str = ""
    data: str = ""
    mime_type: str = ""
    annotations: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": str(self.type)}
        if self.text:
            out["text"] = self.text
        if self.data:
            out["data"] = self.data
        if self.mime_type:
            out["mimeType"] = self.mime_type
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        return out


@dataclass
class ToolResult:
    """The output of a tool call."""

    content: list[ToolResultContents] = field(default_factory=list)
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"content": [item.to_dict() for item in self.content]}
        if self.is_error:
            out["isError"] = True
        return out


def new_tool_result_error(text: str) -> ToolResult:
    """Create a result that reports an error message."""
    return ToolResult(
        content=[ToolResultContents(type=ToolResultContentType.TEXT, text=text)],
        is_error=True,
    )


def new_tool_result(*args: ToolResultContents) -> ToolResult:
    """Create a result from the given items."""
    return ToolResult(content=list(args))


def new_tool_result_text(text: str) -> ToolResult:
    """Create a result holding one text item."""
    return new_tool_result(ToolResultContents(type=ToolResultContentType.TEXT, text=text))


def _convert(value: Any, target: type) -> Any:
    if isinstance(value, target):
        return value
    if target is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    from_dict = getattr(target, "from_dict", None)
    if callable(from_dict):
        return from_dict(value)
    if dataclasses.is_dataclass(target) and isinstance(value, Mapping):
        return target(**value)
    raise TypeError(f"cannot convert {type(value).__name__} to {target.__name__}")


class TypedToolAdapter(Generic[T]):
    """Lets a tool that takes a specific input type accept any input.

    Input that is not already of ``input_type`` is read as JSON (bytes are
    taken as raw JSON text) and converted to ``input_type``.
    """

    def __init__(self, tool: _TypedTool[T], input_type: type = object) -> None:
        self._tool = tool
        self._input_type = input_type

    def name(self) -> str:
        return self._tool.name()

    def description(self) -> str:
        return self._tool.description()

    def schema(self) -> Schema | None:
        return self._tool.schema()

    def annotations(self) -> ToolAnnotations | None:
        return self._tool.annotations()

    def call(self, input: Any) -> ToolResult:
        """Call the tool; undecodable input gives an error result."""
        if isinstance(input, self._input_type):
            return self._tool.call(input)
        try:
            if isinstance(input, (bytes, bytearray)):
                parsed = json.loads(bytes(input))
            else:
                parsed = json.loads(json.dumps(input))
            typed = _convert(parsed, self._input_type)
        except (ValueError, TypeError) as exc:
            return new_tool_result_error(f"invalid json for tool {self.name()}: {exc}")
        return self._tool.call(typed)

    def unwrap(self) -> _TypedTool[T]:
        """Return the wrapped tool."""
        return self._tool

    def tool_configuration(self, provider_name: str) -> dict[str, Any] | None:
        """Return the wrapped tool's explicit configuration, if it has one."""
        if isinstance(self._tool, _ToolConfiguration):
            return self._tool.tool_configuration(provider_name)
        return None


def tool_adapter(tool: _TypedTool[T], input_type: type = object) -> TypedToolAdapter[T]:
    """Wrap a typed tool so it accepts any input."""
    return TypedToolAdapter(tool, input_type)


@dataclass
class ToolUseResult:
    """The result of one tool call."""

    tool_use_id: str = ""
    output: str = ""
    error: BaseException | None = None


@dataclass
class ToolCallResult:
    """A tool call that has been made during an interaction."""

    id: str = ""
    name: str = ""
    input: Any = None
    result: ToolUseResult | None = None
    error: BaseException | None = None


class ToolChoiceType(str):
    """How the model should choose which tool to use."""

    AUTO: ClassVar[ToolChoiceType]
    ANY: ClassVar[ToolChoiceType]
    TOOL: ClassVar[ToolChoiceType]
    NONE: ClassVar[ToolChoiceType]

    def __repr__(self) -> str:
        return f"ToolChoiceType({str.__repr__(self)})"

    def is_valid(self) -> bool:
        """Report whether this is one of the known choice types."""
        return str(self) in _VALID_TOOL_CHOICES


_VALID_TOOL_CHOICES = frozenset({"auto", "any", "tool", "none"})
ToolChoiceType.AUTO = ToolChoiceType("auto")
ToolChoiceType.ANY = ToolChoiceType("any")
ToolChoiceType.TOOL = ToolChoiceType("tool")
ToolChoiceType.NONE = ToolChoiceType("none")


@dataclass
class ToolChoice:
    """Influences how the model chooses which tool to use."""

    type: ToolChoiceType | str
    name: str = ""
    disable_parallel_tool_use: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": str(self.type)}
        if self.name:
            out["name"] = self.name
        if self.disable_parallel_tool_use:
            out["disable_parallel_tool_use"] = True
        return out


TOOL_CHOICE_AUTO = ToolChoice(type=ToolChoiceType.AUTO)
TOOL_CHOICE_ANY = ToolChoice(type=ToolChoiceType.ANY)
TOOL_CHOICE_NONE = ToolChoice(type=ToolChoiceType.NONE)


class ToolDefinition:
    """Describes a tool for the model, without a way to call it."""

    def __init__(
        self, name: str = "", description: str = "", schema: Schema | None = None
    ) -> None:
        self._name = name
        self._description = description
        self._schema = schema

    def name(self) -> str:
        return self._name

    def description(self) -> str:
        return self._description

    def schema(self) -> Schema | None:
        return self._schema

    def with_name(self, name: str) -> ToolDefinition:
        self._name = name
        return self

    def with_description(self, description: str) -> ToolDefinition:
        self._description = description
        return self

    def with_schema(self, schema: Schema | None) -> ToolDefinition:
        self._schema = schema
        return self