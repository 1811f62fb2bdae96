# claudeapi

Data types for the Claude Messages API: typed content blocks, messages,
responses, streaming events, tool descriptions and server-side tool
configuration, together with a small retry helper with exponential backoff.
Everything converts to and from the JSON the API uses (`to_dict` /
`from_dict`).

## Installation

```
pip install claudeapi
```

Running the tests:

```
pip install "claudeapi[test]"
pytest
```

## Messages and content

```python
from claudeapi.message import new_user_message, new_user_text_message, raw_data
from claudeapi.content import ImageContent, TextContent

question = new_user_text_message("What color is the sky?")
print(question.to_dict())
# {'role': 'user', 'content': [{'type': 'text', 'text': 'What color is the sky?'}]}

with open("photo.png", "rb") as fh:
    image = ImageContent(source=raw_data("image/png", fh.read()))
msg = new_user_message(image, TextContent(text="What is in this image?"))
```

`Message` offers `text()`, `last_text()`, `image_content()`,
`thinking_content()` and `decode()` (parses the last text block as JSON).
`ImageContent.image()` decodes base64 image data into a Pillow image.

`Content.from_dict` (or `claudeapi.server_content.unmarshal_content`) picks the
right block class from the `type` field, covering text, images, documents,
tool use and results, thinking, refusals, web search results, code execution
results and MCP blocks.

## Responses

```python
from claudeapi.response import Response

response = Response.from_dict(json_text_or_dict)
print(response.message().text())
for call in response.tool_calls():
    print(call.name, call.input)
print(response.usage.input_tokens, response.usage.output_tokens)
```

## Streaming events

`Event.from_dict` parses one streaming event; `ResponseAccumulator` builds the
complete `Response` from a sequence of them:

```python
from claudeapi.stream import Event, ResponseAccumulator

events = [
    {"type": "message_start",
     "message": {"id": "msg_1", "role": "assistant", "content": []}},
    {"type": "content_block_start", "index": 0,
     "content_block": {"type": "text", "text": ""}},
    {"type": "content_block_delta", "index": 0,
     "delta": {"type": "text_delta", "text": "Hello"}},
    {"type": "message_delta", "delta": {"stop_reason": "end_turn"},
     "usage": {"output_tokens": 5}},
    {"type": "message_stop"},
]
accumulator = ResponseAccumulator()
for raw in events:
    accumulator.add_event(Event.from_dict(raw))

assert accumulator.is_complete()
print(accumulator.response().message().text())  # Hello
```

An event that does not fit the stream raises `ValueError`.

## Tools

```python
from claudeapi.builtin_tools import CodeExecutionTool, WebSearchTool
from claudeapi.tool import ToolDefinition, new_tool_result_text

weather = (
    ToolDefinition()
    .with_name("get_weather")
    .with_description("Get the current weather in a given location")
)
search = WebSearchTool(max_uses=3, allowed_domains=["example.com"])
print(search.tool_configuration("anthropic"))
# {'type': 'web_search_20250305', 'name': 'web_search', 'max_uses': 3,
#  'allowed_domains': ['example.com']}
```

`tool_adapter(tool, input_type)` wraps a tool whose `call` takes a specific
input type so that it accepts raw JSON or plain values; input that cannot be
converted gives an error `ToolResult` instead of raising. Tool results are sent
back with `claudeapi.message.new_tool_result_message`.

## Errors and retries

`claudeapi.types.ClientError(status_code, body)` represents an error reply;
`is_recoverable()` is true for status codes 429, 500, 503, 504 and 520.

`claudeapi.retry.do(func, max_retries=3, base_wait=2.0, cancel=None)` calls
`func`, retrying errors that are recoverable (such as `ClientError` with those
codes, or anything wrapped in `RecoverableError`) with exponential backoff and
jitter. Other errors are raised at once; after the last attempt the last error
is raised. Setting the `threading.Event` passed as `cancel` during a wait
raises `concurrent.futures.CancelledError`.

## What this package does not do

It has no HTTP client: it does not send requests to the API, read API keys,
or read server-sent event streams from a connection. Build the request body
from `to_dict()` output, send it with the HTTP library of your choice, and
feed the replies to `Response.from_dict` or `Event.from_dict`.