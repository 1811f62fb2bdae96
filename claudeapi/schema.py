"""JSON schema descriptions and response format settings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SchemaType(str, Enum):
    """The type of a JSON schema value."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NULL = "null"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


def _schema_type(value: Any) -> SchemaType | str:
    if not value:
        return ""
    try:
        return SchemaType(value)
    except ValueError:
        return str(value)


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


_OPTIONAL_PROPERTY_FIELDS = (
    ("additionalProperties", "additional_properties"),
    ("nullable", "nullable"),
    ("pattern", "pattern"),
    ("format", "format"),
    ("minItems", "min_items"),
    ("maxItems", "max_items"),
    ("minLength", "min_length"),
    ("maxLength", "max_length"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
)


@dataclass
class Property:
    """A property within a schema."""

    type: SchemaType | str = ""
    description: str = ""
    enum: list[str] = field(default_factory=list)
    items: Property | None = None
    required: list[str] = field(default_factory=list)
    properties: dict[str, Property] = field(default_factory=dict)
    additional_properties: bool | None = None
    nullable: bool | None = None
    pattern: str | None = None
    format: str | None = None
    min_items: int | None = None
    max_items: int | None = None
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | None = None
    maximum: float | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = str(self.type)
        if self.description:
            out["description"] = self.description
        if self.enum:
            out["enum"] = list(self.enum)
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.required:
            out["required"] = list(self.required)
        if self.properties:
            out["properties"] = {
                name: prop.to_dict() if prop is not None else None
                for name, prop in self.properties.items()
            }
        for key, attr in _OPTIONAL_PROPERTY_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Property:
        data = _require_mapping(data)
        items = data.get("items")
        properties = data.get("properties") or {}
        optional = {attr: data.get(key) for key, attr in _OPTIONAL_PROPERTY_FIELDS}
        return cls(
            type=_schema_type(data.get("type")),
            description=data.get("description") or "",
            enum=list(data.get("enum") or []),
            items=cls.from_dict(items) if items is not None else None,
            required=list(data.get("required") or []),
            properties={
                name: cls.from_dict(value) for name, value in properties.items()
            },
            **optional,
        )


@dataclass
class Schema:
    """Describes the structure of a JSON object."""

    type: SchemaType | str = ""
    properties: dict[str, Property] | None = None
    required: list[str] = field(default_factory=list)
    additional_properties: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": str(self.type),
            "properties": None
            if self.properties is None
            else {
                name: prop.to_dict() if prop is not None else None
                for name, prop in self.properties.items()
            },
        }
        if self.required:
            out["required"] = list(self.required)
        if self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Schema:
        data = _require_mapping(data)
        properties = data.get("properties")
        return cls(
            type=_schema_type(data.get("type")),
            properties=None
            if properties is None
            else {name: Property.from_dict(value) for name, value in properties.items()},
            required=list(data.get("required") or []),
            additional_properties=data.get("additionalProperties"),
        )

    def as_map(self) -> dict[str, Any]:
        """Return the schema as a plain, independent JSON-compatible dict."""
        return json.loads(json.dumps(self.to_dict()))


class ResponseFormatType(str, Enum):
    """The kind of output a response format asks for."""

    TEXT = "text"
    JSON = "json_object"
    JSON_SCHEMA = "json_schema"

    def __str__(self) -> str:
        return self.value


@dataclass
class ResponseFormat:
    """Guides the format of a model's response."""

    type: ResponseFormatType | str
    schema: Schema | None = None
    name: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": str(self.type)}
        if self.schema is not None:
            out["schema"] = self.schema.to_dict()
        if self.name:
            out["name"] = self.name
        if self.description:
            out["description"] = self.description
        return out