import json

import pytest

from claudeapi.content import TextContent, ToolUseContent
from claudeapi.message import Role
from claudeapi.response import Response
from claudeapi.types import Usage

RESPONSE_JSON = """{
    "id": "msg_018gCsTGsXkYJVqYPxTgDHBU",
    "type": "message",
    "role": "assistant",
    "content": [
        {
            "type": "text",
            "text": "Sure, I'd be happy to provide..."
        }
    ],
    "stop_reason": "end_turn",
    "stop_sequence": null,
    "usage": {
        "input_tokens": 30,
        "output_tokens": 309
    }
}"""


def test_api_response_structure():
    response = Response.from_dict(RESPONSE_JSON)
    assert response.id == "msg_018gCsTGsXkYJVqYPxTgDHBU"
    assert response.role == Role.ASSISTANT
    assert response.stop_reason == "end_turn"
    assert response.stop_sequence is None
    assert len(response.content) == 1
    assert isinstance(response.content[0], TextContent)
    assert response.content[0].text == "Sure, I'd be happy to provide..."
    assert response.usage.input_tokens == 30
    assert response.usage.output_tokens == 309


def test_from_dict_accepts_bytes_and_dicts():
    from_bytes = Response.from_dict(RESPONSE_JSON.encode())
    from_dict = Response.from_dict(json.loads(RESPONSE_JSON))
    assert from_bytes == from_dict


def test_message_carries_id_role_and_content():
    response = Response.from_dict(RESPONSE_JSON)
    message = response.message()
    assert message.id == response.id
    assert message.role == Role.ASSISTANT
    assert message.content is response.content


def test_tool_calls_returns_copies_of_tool_use_blocks():
    tool = ToolUseContent(id="toolu_1", name="get_weather", input='{"location": "Paris"}')
    response = Response(content=[TextContent(text="hi"), tool])
    calls = response.tool_calls()
    assert calls == [tool]
    assert calls[0] is not tool


def test_tool_calls_empty_without_tool_use():
    response = Response(content=[TextContent(text="hi")])
    assert response.tool_calls() == []


def test_round_trip():
    response = Response(
        id="msg_1",
        model="claude-3-5-haiku-latest",
        role=Role.ASSISTANT,
        content=[TextContent(text="hello"), ToolUseContent(id="t", name="n", input='{"a": 1}')],
        stop_reason="tool_use",
        stop_sequence="END",
        type="message",
        usage=Usage(input_tokens=3, output_tokens=4),
    )
    again = Response.from_dict(json.dumps(response.to_dict()))
    assert again.to_dict() == response.to_dict()
    assert again.stop_sequence == "END"


def test_to_dict_omits_missing_stop_sequence():
    assert "stop_sequence" not in Response().to_dict()


def test_null_content_gives_empty_list():
    response = Response.from_dict({"id": "x", "content": None})
    assert response.content == []


def test_unsupported_content_type_raises():
    with pytest.raises(ValueError, match="unsupported content type"):
        Response.from_dict({"content": [{"type": "bogus"}]})


def test_non_object_raises():
    with pytest.raises(ValueError):
        Response.from_dict("[1, 2]")