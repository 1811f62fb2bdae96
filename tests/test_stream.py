import pytest

from claudeapi.content import ContentType, TextContent, ThinkingContent, ToolUseContent
from claudeapi.message import Role
from claudeapi.response import Response
from claudeapi.stream import (
    Event,
    EventContentBlock,
    EventDelta,
    EventDeltaType,
    EventType,
    ResponseAccumulator,
)
from claudeapi.types import Usage


@pytest.mark.parametrize(
    "event_type, expected",
    [
        (EventType.PING, "ping"),
        (EventType.MESSAGE_START, "message_start"),
        (EventType.MESSAGE_DELTA, "message_delta"),
        (EventType.MESSAGE_STOP, "message_stop"),
        (EventType.CONTENT_BLOCK_START, "content_block_start"),
        (EventType.CONTENT_BLOCK_DELTA, "content_block_delta"),
        (EventType.CONTENT_BLOCK_STOP, "content_block_stop"),
    ],
)
def test_event_type_string(event_type, expected):
    assert str(event_type) == expected


@pytest.mark.parametrize(
    "delta_type, expected",
    [
        (EventDeltaType.TEXT, "text_delta"),
        (EventDeltaType.INPUT_JSON, "input_json_delta"),
        (EventDeltaType.THINKING, "thinking_delta"),
        (EventDeltaType.SIGNATURE, "signature_delta"),
        (EventDeltaType.CITATIONS, "citations_delta"),
    ],
)
def test_event_delta_type_string(delta_type, expected):
    assert str(delta_type) == expected


def test_new_response_accumulator():
    accumulator = ResponseAccumulator()
    assert accumulator.is_complete() is False
    assert accumulator.response() is None


def test_usage_before_message_start_raises():
    with pytest.raises(ValueError):
        ResponseAccumulator().usage()


def _started(content=None):
    accumulator = ResponseAccumulator()
    accumulator.add_event(
        Event(
            type=EventType.MESSAGE_START,
            message=Response(id="msg_123", role=Role.ASSISTANT, content=content or []),
        )
    )
    return accumulator


def test_add_event_message_start():
    accumulator = _started([TextContent(text="")])
    response = accumulator.response()
    assert response.id == "msg_123"
    assert response.role == Role.ASSISTANT


def test_add_event_content_block_start():
    accumulator = _started()
    accumulator.add_event(
        Event(
            type=EventType.CONTENT_BLOCK_START,
            index=0,
            content_block=EventContentBlock(type=ContentType.TEXT, text=""),
        )
    )
    assert len(accumulator.response().content) == 1


def test_add_event_message_stop():
    accumulator = _started()
    accumulator.add_event(Event(type=EventType.MESSAGE_STOP))
    assert accumulator.is_complete() is True


def test_full_stream_builds_blocks_in_index_order():
    accumulator = _started()
    accumulator.add_event(
        Event(
            type=EventType.CONTENT_BLOCK_START,
            index=1,
            content_block=EventContentBlock(type=ContentType.TOOL_USE, id="toolu_1", name="get_weather"),
        )
    )
    accumulator.add_event(
        Event(
            type=EventType.CONTENT_BLOCK_START,
            index=0,
            content_block=EventContentBlock(type=ContentType.TEXT, text="Hel"),
        )
    )
    accumulator.add_event(
        Event(type=EventType.CONTENT_BLOCK_DELTA, index=0, delta=EventDelta(type=EventDeltaType.TEXT, text="lo"))
    )
    for part in ('{"location":', ' "Paris"}'):
        accumulator.add_event(
            Event(
                type=EventType.CONTENT_BLOCK_DELTA,
                index=1,
                delta=EventDelta(type=EventDeltaType.INPUT_JSON, partial_json=part),
            )
        )
    accumulator.add_event(
        Event(type=EventType.MESSAGE_DELTA, delta=EventDelta(stop_reason="tool_use", stop_sequence="STOP"))
    )
    accumulator.add_event(Event(type=EventType.MESSAGE_STOP))

    response = accumulator.response()
    assert accumulator.is_complete()
    assert response.content == [
        TextContent(text="Hello"),
        ToolUseContent(id="toolu_1", name="get_weather", input='{"location": "Paris"}'),
    ]
    assert response.stop_reason == "tool_use"
    assert response.stop_sequence == "STOP"
    assert response.tool_calls()[0].to_dict()["input"] == {"location": "Paris"}


def test_thinking_and_signature_deltas():
    accumulator = _started()
    accumulator.add_event(
        Event(
            type=EventType.CONTENT_BLOCK_START,
            index=0,
            content_block=EventContentBlock(type=ContentType.THINKING, thinking="a"),
        )
    )
    accumulator.add_event(
        Event(type=EventType.CONTENT_BLOCK_DELTA, index=0, delta=EventDelta(type=EventDeltaType.THINKING, thinking="b"))
    )
    accumulator.add_event(
        Event(type=EventType.CONTENT_BLOCK_DELTA, index=0, delta=EventDelta(type=EventDeltaType.SIGNATURE, signature="sig"))
    )
    block = accumulator.response().content[0]
    assert block == ThinkingContent(thinking="ab", signature="sig")


def test_missing_index_uses_next_position():
    accumulator = _started()
    for text in ("first", "second"):
        accumulator.add_event(
            Event(type=EventType.CONTENT_BLOCK_START, content_block=EventContentBlock(type=ContentType.TEXT, text=text))
        )
    assert [block.text for block in accumulator.response().content] == ["first", "second"]


def test_usage_is_added():
    accumulator = _started()
    accumulator.response().usage = Usage(input_tokens=25, output_tokens=1)
    accumulator.add_event(
        Event(type=EventType.MESSAGE_DELTA, delta=EventDelta(), usage=Usage(output_tokens=15))
    )
    assert accumulator.usage() == Usage(input_tokens=25, output_tokens=16)


def test_content_block_start_before_message_start_raises():
    with pytest.raises(ValueError, match="no message start event found"):
        ResponseAccumulator().add_event(
            Event(type=EventType.CONTENT_BLOCK_START, content_block=EventContentBlock(type=ContentType.TEXT))
        )


def test_message_start_without_message_raises():
    with pytest.raises(ValueError, match="invalid message start event"):
        ResponseAccumulator().add_event(Event(type=EventType.MESSAGE_START))


def test_delta_for_unknown_index_raises():
    accumulator = _started()
    with pytest.raises(ValueError, match="content block not found for index"):
        accumulator.add_event(
            Event(type=EventType.CONTENT_BLOCK_DELTA, index=3, delta=EventDelta(type=EventDeltaType.TEXT))
        )


def test_delta_of_wrong_kind_raises():
    accumulator = _started()
    accumulator.add_event(
        Event(type=EventType.CONTENT_BLOCK_START, index=0, content_block=EventContentBlock(type=ContentType.TEXT))
    )
    with pytest.raises(ValueError, match="not a tool use content"):
        accumulator.add_event(
            Event(type=EventType.CONTENT_BLOCK_DELTA, index=0, delta=EventDelta(type=EventDeltaType.INPUT_JSON))
        )


def test_message_delta_without_delta_raises():
    accumulator = _started()
    with pytest.raises(ValueError, match="invalid message delta event"):
        accumulator.add_event(Event(type=EventType.MESSAGE_DELTA))


def test_streaming_api_structure():
    event = Event.from_dict(
        """{
        "type": "message_start",
        "message": {
            "id": "msg_1nZdL29xx5MUA1yADyHTEsnR8uuvGzszyY",
            "type": "message",
            "role": "assistant",
            "content": [],
            "model": "claude-3-5-haiku-latest",
            "stop_reason": null,
            "stop_sequence": null,
            "usage": {"input_tokens": 25, "output_tokens": 1}
        }
    }"""
    )
    assert event.type == EventType.MESSAGE_START
    assert event.message.id == "msg_1nZdL29xx5MUA1yADyHTEsnR8uuvGzszyY"

    event = Event.from_dict('{"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}')
    assert event.type == EventType.CONTENT_BLOCK_START
    assert event.index == 0
    assert event.content_block.type == ContentType.TEXT

    event = Event.from_dict('{"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hello"}}')
    assert event.type == EventType.CONTENT_BLOCK_DELTA
    assert event.delta.type == EventDeltaType.TEXT
    assert event.delta.text == "Hello"