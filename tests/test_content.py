import base64
import json

import pytest

from claudeapi.citations import CitationSettings, WebSearchResultLocation
from claudeapi.content import (
    CacheControl,
    Content,
    ContentChunk,
    ContentSource,
    ContentSourceType,
    ContentType,
    DocumentContent,
    ImageContent,
    RedactedThinkingContent,
    RefusalContent,
    TextContent,
    ThinkingContent,
    ToolResultContent,
    ToolUseContent,
)
from claudeapi.types import CacheControlType

PNG_1X1 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def test_image_base64_wire_format():
    block = ImageContent(
        source=ContentSource(
            type=ContentSourceType.BASE64, media_type="image/jpeg", data="base64data"
        )
    )
    assert block.to_dict() == {
        "type": "image",
        "source": {"type": "base64", "media_type": "image/jpeg", "data": "base64data"},
    }


def test_image_url_wire_format():
    block = ImageContent(
        source=ContentSource(type=ContentSourceType.URL, url="https://example.com/image.jpg")
    )
    assert block.to_dict()["source"] == {
        "type": "url",
        "url": "https://example.com/image.jpg",
    }


def test_tool_use_wire_format():
    block = ToolUseContent(
        id="toolu_01A09q90qw90lq917835lq9",
        name="get_weather",
        input='{"location": "San Francisco, CA", "unit": "celsius"}',
    )
    assert block.to_dict() == {
        "type": "tool_use",
        "id": "toolu_01A09q90qw90lq917835lq9",
        "name": "get_weather",
        "input": {"location": "San Francisco, CA", "unit": "celsius"},
    }


def test_tool_use_without_input_writes_null():
    assert ToolUseContent(id="t", name="n").to_dict()["input"] is None


def test_tool_result_wire_format():
    block = ToolResultContent(
        tool_use_id="toolu_01A09q90qw90lq917835lq9", content="15 degrees"
    )
    assert block.to_dict() == {
        "type": "tool_result",
        "tool_use_id": "toolu_01A09q90qw90lq917835lq9",
        "content": "15 degrees",
    }


def test_tool_result_nested_content_blocks():
    block = ToolResultContent(
        tool_use_id="x", content=[TextContent(text="15 degrees")], is_error=True
    )
    out = block.to_dict()
    assert out["content"] == [{"type": "text", "text": "15 degrees"}]
    assert out["is_error"] is True


def test_text_with_web_search_citation_round_trip():
    data = {
        "type": "text",
        "text": "Claude Shannon was born on [date-of-birth], in Petoskey, Michigan",
        "citations": [
            {
                "type": "web_search_result_location",
                "url": "https://en.wikipedia.org/wiki/Claude_Shannon",
                "title": "Claude Shannon - Wikipedia",
                "encrypted_index": "Eo8BCioIAhgBIiQyYjQ0OWJmZi1lNm..",
                "cited_text": "Claude Elwood Shannon (April 30, 1916 – ...",
            }
        ],
    }
    block = Content.from_dict(data)
    assert isinstance(block, TextContent)
    assert isinstance(block.citations[0], WebSearchResultLocation)
    assert block.to_dict() == data


def test_text_null_citations_parse_to_empty():
    block = Content.from_dict({"type": "text", "text": "hi", "citations": None})
    assert block.citations == []


@pytest.mark.parametrize(
    "block",
    [
        TextContent(text="hello", cache_control=CacheControl(CacheControlType.EPHEMERAL)),
        RefusalContent(text="no"),
        ImageContent(source=ContentSource(type=ContentSourceType.FILE, file_id="file_abc123")),
        DocumentContent(
            source=ContentSource(
                type=ContentSourceType.TEXT,
                media_type="text/plain",
                data="The grass is green. The sky is blue.",
            ),
            title="My Document",
            context="This is a trustworthy document.",
            citations=CitationSettings(enabled=True),
        ),
        ToolUseContent(id="tool1", name="test_tool", input='{"a": 1}'),
        ToolResultContent(tool_use_id="tool1", content="ok"),
        ThinkingContent(thinking="Let me analyze this step by step...", signature="sig"),
        RedactedThinkingContent(data="opaque"),
    ],
)
def test_round_trip_through_registry(block):
    restored = Content.from_dict(block.to_dict())
    assert restored == block
    assert restored.type is block.type


def test_from_dict_accepts_json_text():
    block = Content.from_dict(b'{"type": "redacted_thinking", "data": "abc"}')
    assert block == RedactedThinkingContent(data="abc")


def test_subclass_from_dict_parses_directly():
    block = ThinkingContent.from_dict({"thinking": "hmm"})
    assert block == ThinkingContent(thinking="hmm")


def test_unsupported_type_raises():
    with pytest.raises(ValueError, match="unsupported content type: bogus"):
        Content.from_dict({"type": "bogus"})


def test_non_object_raises():
    with pytest.raises(ValueError):
        Content.from_dict("[1, 2]")


def test_thinking_omits_empty_id_and_signature():
    assert ThinkingContent(thinking="x").to_dict() == {"type": "thinking", "thinking": "x"}


def test_set_cache_control_is_written():
    block = TextContent(text="cache me")
    block.set_cache_control(CacheControl(CacheControlType.EPHEMERAL))
    assert block.to_dict()["cache_control"] == {"type": "ephemeral"}


def test_to_json_matches_to_dict():
    block = ToolResultContent(tool_use_id="a", content="b")
    assert json.loads(block.to_json()) == block.to_dict()
    assert block.to_json().startswith('{"type":"tool_result"')


def test_content_source_chunks_round_trip():
    source = ContentSource(
        type="content",
        content=[ContentChunk(text="First chunk"), ContentChunk(text="Second chunk")],
    )
    restored = ContentSource.from_dict(source.to_dict())
    assert restored == source
    assert restored.type == "content"


def test_decoded_data_round_trip():
    raw = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])
    source = ContentSource(
        type=ContentSourceType.BASE64, data=base64.b64encode(raw).decode("ascii")
    )
    assert source.decoded_data() == raw


def test_decoded_data_rejects_url_source():
    source = ContentSource(type=ContentSourceType.URL, url="https://example.com/a.png")
    with pytest.raises(ValueError, match="cannot decode data content source type: url"):
        source.decoded_data()


def test_image_decodes_png():
    block = ImageContent(
        source=ContentSource(type=ContentSourceType.BASE64, media_type="image/png", data=PNG_1X1)
    )
    assert block.image().size == (1, 1)


def test_image_requires_base64_source():
    block = ImageContent(
        source=ContentSource(type=ContentSourceType.URL, url="https://example.com/a.png")
    )
    with pytest.raises(ValueError, match="not base64"):
        block.image()


def test_tool_use_from_dict_keeps_raw_json_input():
    block = Content.from_dict(
        {"type": "tool_use", "id": "t", "name": "n", "input": {"location": "Paris"}}
    )
    assert json.loads(block.input) == {"location": "Paris"}


def test_content_type_values():
    assert ContentType("code_execution_tool_result") is ContentType.CODE_EXECUTION_TOOL_RESULT
    assert str(ContentSourceType.FILE) == "file"