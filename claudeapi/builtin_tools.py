"""Server-side tools run by the API: web search and code execution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .schema import Schema
from .tool import ToolAnnotations, ToolResult

_SERVER_SIDE_MESSAGE = "server-side tool does not implement local calls"


@dataclass
class UserLocation:
    """The user's approximate location, given to the web search tool."""

    type: str = "approximate"
    city: str = ""
    region: str = ""
    country: str = ""
    timezone: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "city": self.city,
            "region": self.region,
            "country": self.country,
            "timezone": self.timezone,
        }


class WebSearchTool:
    """Lets the model search the web; the search runs on the API server."""

    def __init__(
        self,
        type: str = "",
        max_uses: int = 0,
        allowed_domains: list[str] | None = None,
        blocked_domains: list[str] | None = None,
        user_location: UserLocation | None = None,
    ) -> None:
        self._type = type or "web_search_20250305"
        self._name = "web_search"
        self._max_uses = max_uses if max_uses > 0 else 5
        self._allowed_domains = allowed_domains
        self._blocked_domains = blocked_domains
        self._user_location = user_location

    def name(self) -> str:
        return "web_search"

    def description(self) -> str:
        return (
            "Uses Anthropic's web search feature to give Claude direct access "
            "to real-time web content."
        )

    def schema(self) -> Schema | None:
        return None

    def tool_configuration(self, provider_name: str) -> dict[str, Any]:
        """Return the JSON tool definition sent with requests."""
        config: dict[str, Any] = {
            "type": self._type,
            "name": self._name,
            "max_uses": self._max_uses,
        }
        if self._allowed_domains is not None:
            config["allowed_domains"] = list(self._allowed_domains)
        if self._blocked_domains is not None:
            config["blocked_domains"] = list(self._blocked_domains)
        if self._user_location is not None:
            config["user_location"] = self._user_location.to_dict()
        return config

    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(
            title="Web Search",
            read_only_hint=True,
            destructive_hint=False,
            idempotent_hint=False,
            open_world_hint=True,
        )

    def call(self, input: Any) -> ToolResult:
        raise RuntimeError(_SERVER_SIDE_MESSAGE)


class CodeExecutionTool:
    """Lets the model run code in a sandbox on the API server."""

    def __init__(self, type: str = "") -> None:
        self._type = type or "code_execution_20250522"
        self._name = "code_execution"

    def name(self) -> str:
        return "code_execution"

    def description(self) -> str:
        return (
            "The code execution tool allows Claude to execute Python code in a "
            "secure, sandboxed environment. Claude can analyze data, create "
            "visualizations, perform complex calculations, and process uploaded "
            "files directly within the API conversation."
        )

    def schema(self) -> Schema | None:
        return None

    def tool_configuration(self, provider_name: str) -> dict[str, Any]:
        """Return the JSON tool definition sent with requests."""
        return {"type": self._type, "name": self._name}

    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(
            title="Code Execution",
            read_only_hint=True,
            destructive_hint=False,
            idempotent_hint=False,
            open_world_hint=False,
        )

    def call(self, input: Any) -> ToolResult:
        raise RuntimeError(_SERVER_SIDE_MESSAGE)