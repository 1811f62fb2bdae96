"""Citations attached to text content."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class CitationType(str, Enum):
    """The kind of a citation."""

    CHAR_LOCATION = "char_location"
    WEB_SEARCH_RESULT_LOCATION = "web_search_result_location"
    URL_CITATION = "url_citation"

    def __str__(self) -> str:
        return self.value


@dataclass
class CitationSettings:
    """Settings for citations in a document block."""

    enabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled}


@dataclass
class CharLocation:
    """A citation of a character range in a document."""

    type: str = CitationType.CHAR_LOCATION.value
    cited_text: str = ""
    document_index: int = 0
    document_title: str = ""
    start_char_index: int = 0
    end_char_index: int = 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": str(self.type)}
        for key in (
            "cited_text",
            "document_index",
            "document_title",
            "start_char_index",
            "end_char_index",
        ):
            value = getattr(self, key)
            if value:
                out[key] = value
        return out


@dataclass
class WebSearchResultLocation:
    """A citation of part of a web page found by web search."""

    url: str = ""
    title: str = ""
    encrypted_index: str = ""
    cited_text: str = ""
    type: str = CitationType.WEB_SEARCH_RESULT_LOCATION.value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": str(self.type), "url": self.url, "title": self.title}
        if self.encrypted_index:
            out["encrypted_index"] = self.encrypted_index
        if self.cited_text:
            out["cited_text"] = self.cited_text
        return out


Citation = Union[CharLocation, WebSearchResultLocation]


def _load(data: Any) -> Any:
    if isinstance(data, (str, bytes, bytearray)):
        return json.loads(data)
    return data


def unmarshal_citation(data: Any) -> Citation:
    """Build the concrete citation for one JSON object (dict, str or bytes)."""
    obj = _load(data)
    if not isinstance(obj, Mapping):
        raise ValueError("citation must be a JSON object")
    kind = obj.get("type") or ""
    if kind == CitationType.CHAR_LOCATION:
        return CharLocation(
            type=kind,
            cited_text=obj.get("cited_text") or "",
            document_index=int(obj.get("document_index") or 0),
            document_title=obj.get("document_title") or "",
            start_char_index=int(obj.get("start_char_index") or 0),
            end_char_index=int(obj.get("end_char_index") or 0),
        )
    if kind == CitationType.WEB_SEARCH_RESULT_LOCATION:
        return WebSearchResultLocation(
            type=kind,
            url=obj.get("url") or "",
            title=obj.get("title") or "",
            encrypted_index=obj.get("encrypted_index") or "",
            cited_text=obj.get("cited_text") or "",
        )
    raise ValueError(f"unknown citation type: {kind}")


def unmarshal_citations(data: Any) -> list[Citation]:
    """Build citations from a JSON array (list, str or bytes)."""
    items = _load(data)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError("citations must be a JSON array")
    return [unmarshal_citation(item) for item in items]