"""Configuration of remote MCP servers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MCPToolConfiguration:
    """Which tools of an MCP server are enabled."""

    enabled: bool = False
    allowed_tools: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"enabled": self.enabled}
        if self.allowed_tools:
            out["allowed_tools"] = list(self.allowed_tools)
        return out


@dataclass
class MCPToolApprovalFilter:
    """Names of tools whose calls always or never need approval."""

    always: list[str] = field(default_factory=list)
    never: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.always:
            out["always"] = list(self.always)
        if self.never:
            out["never"] = list(self.never)
        return out


@dataclass
class MCPServerConfig:
    """Connection settings for one MCP server."""

    type: str
    url: str
    name: str = ""
    authorization_token: str = ""
    tool_configuration: MCPToolConfiguration | None = None
    headers: dict[str, str] = field(default_factory=dict)
    tool_approval: str = ""
    tool_approval_filter: MCPToolApprovalFilter | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "url": self.url}
        if self.name:
            out["name"] = self.name
        if self.authorization_token:
            out["authorization_token"] = self.authorization_token
        if self.tool_configuration is not None:
            out["tool_configuration"] = self.tool_configuration.to_dict()
        if self.headers:
            out["headers"] = dict(self.headers)
        if self.tool_approval:
            out["tool_approval"] = self.tool_approval
        if self.tool_approval_filter is not None:
            out["tool_approval_filter"] = self.tool_approval_filter.to_dict()
        return out