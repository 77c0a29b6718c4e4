# oaiclient

Request and response models for an OpenAI-style REST API, with the pieces
needed to talk to it: a JSON request builder, a multipart form builder, a
reader for server-sent event streams and helpers for rate-limit headers.
Only the standard library is used.

Each endpoint function returns an `ApiRequest` (method, URL path, headers,
body) for that endpoint, and each response model has a `from_dict`
class method that turns decoded JSON into a dataclass. Sending the request
is left to whatever HTTP client you already use.

## Installation

```
pip install oaiclient
```

To run the tests:

```
pip install "oaiclient[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `oaiclient.api_request` | `ApiRequest`, `RequestBuilder`, `json_marshal`, `json_unmarshal`, `query_suffix` |
| `oaiclient.form_builder` | `FormBuilder` for `multipart/form-data` bodies |
| `oaiclient.accumulator` | `ErrorAccumulator`, `ErrorAccumulatorWriteError` |
| `oaiclient.stream_reader` | `StreamReader`, `StreamAPIError`, `TooManyEmptyStreamMessagesError` |
| `oaiclient.jsonschema` | `Definition` and `DataType` for function-call schemas |
| `oaiclient.ratelimit` | `rate_limit_headers`, `RateLimitHeaders`, `ResetTime`, `parse_duration` |
| `oaiclient.models` | `list_models`, `get_model`, `delete_fine_tune_model` and their response models |
| `oaiclient.fine_tuning` | create, cancel and retrieve fine-tuning jobs; list their events |
| `oaiclient.image` | `create_image`, `create_edit_image`, `create_vari_image` |
| `oaiclient.moderation` | `moderations` and its request and result models |
| `oaiclient.speech` | `create_speech` and its enums |
| `oaiclient.thread` | create, retrieve, modify and delete threads |
| `oaiclient.messages` | messages in a thread and their attached files |
| `oaiclient.run` | runs, run steps, tool outputs and `Pagination` |

## Building requests

```python
from oaiclient.run import Pagination, list_runs

request = list_runs("thread_abc123", Pagination(limit=20, order="desc"))
request.method   # "GET"
request.url      # "/threads/thread_abc123/runs?limit=20&order=desc"
request.headers  # {"OpenAI-Beta": "assistants=v1"}
```

URLs are paths relative to the API's base URL. Query parameters that are
`None` are left out and the rest are sorted by name. Request bodies are
dataclasses turned into compact JSON bytes by `json_marshal`; empty
optional fields are omitted.

Decoding a response:

```python
from oaiclient.api_request import json_unmarshal
from oaiclient.run import Run

run = Run.from_dict(json_unmarshal(response_body))
```

Status and type fields become enum members where the value is known and
stay plain strings otherwise.

### Images

`create_edit_image` and `create_vari_image` write a multipart body with
`FormBuilder` and return it as a readable `BytesIO`, with the matching
`Content-Type` header set:

```python
from oaiclient.image import ImageEditRequest, ImageSize, create_edit_image

with open("image.png", "rb") as image:
    request = create_edit_image(
        ImageEditRequest(image=image, prompt="There is a turtle in the pool",
                         n=1, size=ImageSize.SIZE_1024X1024)
    )
```

The file's own `name` is used as the part's filename. A different form
builder can be passed as the second argument.

### Validation before sending

```python
from oaiclient.moderation import ModerationModelError, ModerationRequest, moderations

try:
    moderations(ModerationRequest(input="some text", model="gpt-3.5-turbo"))
except ModerationModelError as exc:
    print(exc)
```

Only `text-moderation-stable`, `text-moderation-latest` or an empty model
are accepted. `create_speech` raises `InvalidSpeechModelError` or
`InvalidVoiceError` for a model or voice outside `SpeechModel` and
`SpeechVoice`.

## Function schemas

```python
from oaiclient.jsonschema import DataType, Definition

schema = Definition(
    type=DataType.OBJECT,
    properties={
        "location": Definition(type=DataType.STRING,
                               description="The city and state, e.g. San Francisco, CA"),
        "unit": Definition(type=DataType.STRING, enum=["celsius", "fahrenheit"]),
    },
    required=["location"],
)
print(schema.to_json())
```

A definition always carries a `properties` object, so
`Definition().to_dict()` is `{"properties": {}}`.

## Reading a stream

`StreamReader` wraps a binary stream of server-sent events. `recv()`
returns the next `data:` payload decoded from JSON (passed through
`decode` if one is given) and raises `EOFError` at `data: [DONE]` or when
the stream ends. Iterating yields payloads until then.

```python
from oaiclient.stream_reader import StreamReader

with StreamReader(response_stream) as reader:
    for chunk in reader:
        handle(chunk)
```

Lines that are not data events are collected by an `ErrorAccumulator`. If
they form an error object, it is raised as `StreamAPIError` with `message`,
`type`, `param` and `code`. More than `empty_messages_limit` (default 300)
such lines in a row raise `TooManyEmptyStreamMessagesError`.

## Rate limits

```python
from oaiclient.ratelimit import rate_limit_headers

limits = rate_limit_headers(response_headers)
print(limits.remaining_requests, limits.reset_requests.time())
```

Header names are matched case-insensitively. Missing or malformed counts
become `0`. `ResetTime.time()` adds the parsed interval (such as `"6m0s"`)
to the current time, or returns the current time when it cannot be parsed.

## What this package does not do

It opens no network connections, keeps no client configuration and adds
no base URL or authentication headers: those belong to the HTTP client
you send the requests with. It covers the endpoints listed above only.