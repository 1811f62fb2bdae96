"""Content blocks produced by server-side tools and MCP servers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .content import Content, ContentChunk, ContentType


def _raw_json_value(raw: Any) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        return json.loads(raw) if raw.strip() else None
    return raw


def _chunk_from(value: Mapping[str, Any]) -> ContentChunk:
    return ContentChunk(type=value.get("type") or "", text=value.get("text") or "")


@dataclass
class ServerToolUseContent(Content):
    """A call the model made to a tool run by the API server."""

    type: ClassVar[ContentType] = ContentType.SERVER_TOOL_USE

    id: str = ""
    name: str = ""
    input: dict[str, Any] | None = None

    def _payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "input": None if self.input is None else dict(self.input),
        }

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> ServerToolUseContent:
        value = obj.get("input")
        return cls(
            id=obj.get("id") or "",
            name=obj.get("name") or "",
            input=None if value is None else dict(value),
        )


@dataclass
class WebSearchResult:
    """One page found by the web search tool."""

    type: str = "web_search_result"
    url: str = ""
    title: str = ""
    encrypted_content: str = ""
    page_age: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "url": self.url,
            "title": self.title,
            "encrypted_content": self.encrypted_content,
            "page_age": self.page_age,
        }


def _web_search_result_from(value: Mapping[str, Any]) -> WebSearchResult:
    return WebSearchResult(
        type=value.get("type") or "",
        url=value.get("url") or "",
        title=value.get("title") or "",
        encrypted_content=value.get("encrypted_content") or "",
        page_age=value.get("page_age") or "",
    )


@dataclass
class WebSearchToolResultContent(Content):
    """The results of a web search, or the error code it failed with."""

    type: ClassVar[ContentType] = ContentType.WEB_SEARCH_TOOL_RESULT

    tool_use_id: str = ""
    content: list[WebSearchResult] = field(default_factory=list)
    error_code: str = ""

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "tool_use_id": self.tool_use_id,
            "content": [result.to_dict() for result in self.content],
        }
        if self.error_code:
            out["error_code"] = self.error_code
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> WebSearchToolResultContent:
        raw = obj.get("content")
        error_code = obj.get("error_code") or ""
        results: list[WebSearchResult] = []
        if isinstance(raw, Mapping):
            error_code = raw.get("error_code") or error_code
        elif raw is not None:
            results = [_web_search_result_from(item) for item in raw]
        return cls(
            tool_use_id=obj.get("tool_use_id") or "",
            content=results,
            error_code=error_code,
        )


@dataclass
class MCPToolUseContent(Content):
    """A call the model made to a tool of an MCP server.

    ``input`` holds the raw JSON text of the arguments.
    """

    type: ClassVar[ContentType] = ContentType.MCP_TOOL_USE

    id: str = ""
    name: str = ""
    server_name: str = ""
    input: Any = ""

    def _payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "server_name": self.server_name,
            "input": _raw_json_value(self.input),
        }

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> MCPToolUseContent:
        return cls(
            id=obj.get("id") or "",
            name=obj.get("name") or "",
            server_name=obj.get("server_name") or "",
            input=json.dumps(obj["input"]) if "input" in obj else "",
        )


@dataclass
class MCPToolResultContent(Content):
    """The result of an MCP tool call."""

    type: ClassVar[ContentType] = ContentType.MCP_TOOL_RESULT

    tool_use_id: str = ""
    is_error: bool = False
    content: list[ContentChunk] = field(default_factory=list)

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"tool_use_id": self.tool_use_id}
        if self.is_error:
            out["is_error"] = True
        if self.content:
            out["content"] = [chunk.to_dict() for chunk in self.content]
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> MCPToolResultContent:
        return cls(
            tool_use_id=obj.get("tool_use_id") or "",
            is_error=bool(obj.get("is_error")),
            content=[_chunk_from(chunk) for chunk in obj.get("content") or []],
        )


@dataclass
class MCPToolDefinition:
    """A tool offered by an MCP server."""

    name: str = ""
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.description:
            out["description"] = self.description
        if self.input_schema:
            out["input_schema"] = dict(self.input_schema)
        return out


def _tool_definition_from(value: Mapping[str, Any]) -> MCPToolDefinition:
    return MCPToolDefinition(
        name=value.get("name") or "",
        description=value.get("description") or "",
        input_schema=dict(value.get("input_schema") or {}),
    )


@dataclass
class MCPListToolsContent(Content):
    """The tools listed by an MCP server."""

    type: ClassVar[ContentType] = ContentType.MCP_LIST_TOOLS

    server_label: str = ""
    tools: list[MCPToolDefinition] = field(default_factory=list)

    def _payload(self) -> dict[str, Any]:
        return {
            "server_label": self.server_label,
            "tools": [tool.to_dict() for tool in self.tools],
        }

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> MCPListToolsContent:
        return cls(
            server_label=obj.get("server_label") or "",
            tools=[_tool_definition_from(tool) for tool in obj.get("tools") or []],
        )


@dataclass
class MCPApprovalRequestContent(Content):
    """A request to approve an MCP tool call before it runs."""

    type: ClassVar[ContentType] = ContentType.MCP_APPROVAL_REQUEST

    id: str = ""
    arguments: str = ""
    name: str = ""
    server_label: str = ""

    def _payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "arguments": self.arguments,
            "name": self.name,
            "server_label": self.server_label,
        }

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> MCPApprovalRequestContent:
        return cls(
            id=obj.get("id") or "",
            arguments=obj.get("arguments") or "",
            name=obj.get("name") or "",
            server_label=obj.get("server_label") or "",
        )


@dataclass
class MCPApprovalResponseContent(Content):
    """An answer to an MCP approval request."""

    type: ClassVar[ContentType] = ContentType.MCP_APPROVAL_RESPONSE

    approval_request_id: str = ""
    approve: bool = False
    reason: str = ""

    def _payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "approval_request_id": self.approval_request_id,
            "approve": self.approve,
        }
        if self.reason:
            out["reason"] = self.reason
        return out

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> MCPApprovalResponseContent:
        return cls(
            approval_request_id=obj.get("approval_request_id") or "",
            approve=bool(obj.get("approve")),
            reason=obj.get("reason") or "",
        )


@dataclass
class CodeExecutionResult:
    """Output of code run by the code execution tool."""

    type: str = "code_execution_result"
    stdout: str = ""
    stderr: str = ""
    return_code: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "return_code": self.return_code,
        }


@dataclass
class CodeExecutionToolResultContent(Content):
    """The result of a code execution tool call."""

    type: ClassVar[ContentType] = ContentType.CODE_EXECUTION_TOOL_RESULT

    tool_use_id: str = ""
    content: CodeExecutionResult = field(default_factory=CodeExecutionResult)

    def _payload(self) -> dict[str, Any]:
        return {"tool_use_id": self.tool_use_id, "content": self.content.to_dict()}

    @classmethod
    def _parse(cls, obj: Mapping[str, Any]) -> CodeExecutionToolResultContent:
        raw = obj.get("content") or {}
        return cls(
            tool_use_id=obj.get("tool_use_id") or "",
            content=CodeExecutionResult(
                type=raw.get("type") or "",
                stdout=raw.get("stdout") or "",
                stderr=raw.get("stderr") or "",
                return_code=int(raw.get("return_code") or 0),
            ),
        )


def unmarshal_content(data: Any) -> Content:
    """Build the concrete content block for one JSON object (dict, str or bytes)."""
    return Content.from_dict(data)