# uwsgikit

Small, dependency-free building blocks for HTTP/1.1 and WebSocket servers.

## Installation

```
pip install uwsgikit
```

To run the test suite:

```
pip install "uwsgikit[test]"
pytest
```

## What is inside

- `uwsgikit.utilities`: `u32_to_hex(value)` and `u64_to_decimal(value)` format
  unsigned integers as lowercase hex and as decimal. They are used for chunk
  sizes and `Content-Length`. Values out of range raise `ValueError`, and
  values that are not integers raise `TypeError`.
- `uwsgikit.message_parser`: `get_headers(data)` parses an RFC 822 header
  block, as used by HTTP and multipart. It returns `(headers, consumed)`,
  where `headers` is a list of `(key, value)` byte pairs with lower-cased keys
  and `consumed` counts the bytes up to and including the empty line. It
  returns `None` when the block is incomplete or malformed, or when it holds
  more than `MAX_HEADERS` (10) headers.
- `uwsgikit.permessage_deflate`: the `CompressOptions` flags, plus
  `DeflationStream` and `InflationStream` for the WebSocket permessage-deflate
  extension. `deflate(raw, reset)` strips the sync-flush tail.
  `inflate(compressed, max_payload_length, reset)` raises `ValueError` when
  the data is invalid or inflates beyond the limit.
- `uwsgikit.websocket_settings`:
  - `idle_timeout_components(idle_timeout, send_pings_automatically)` splits
    an idle timeout into an idle part and a ping margin of 4, 8 or 16 seconds.
  - `WebSocketData` holds the per-connection state and creates dedicated
    deflate and inflate streams when the options call for them.
  - `CompressionStatus` and `TopicMessage` are also defined here.
- `uwsgikit.response_state`: `ResponseFlag` and `ResponseState` track the
  progress, the handlers and the write offset of an HTTP response.
- `uwsgikit.http_response`: `HttpResponse` writes an HTTP/1.1 response into
  an in-memory `output` buffer. It handles:
  - the status line, headers and the `Date` header, plus an optional mark
    header;
  - `Content-Length` bodies through `end`, `end_without_body` and `try_end`;
  - chunked transfer encoding through `write`;
  - corking through `cork`;
  - `Connection: close`, `pause`/`resume` and `close`, which calls the
    `on_aborted` handler while the response is still pending.
- `uwsgikit.optparse_lite`: `OptParser` is a getopt-style parser with
  `getopt(optstring)`, `getopt_long(longopts)` and `arg()`. It also provides
  `LongOption` and `ArgType`. Unknown options and missing or unexpected
  arguments raise `OptionError`.
- `uwsgikit.middleware`: `has_ext(file, ext)`, and `serve_file(res, url)`,
  which writes a 200 status and sets `Content-Type: image/svg+xml` for `.svg`
  URLs.
- `uwsgikit.file_streamer`:
  - `AsyncFileReader` reads a file through a single cached window.
  - `FileStreamer` maps every file below a root directory to a URL, with
    `index.html` served as `/`.
  - `FileStreamer.stream_file(res, url)` streams the file into an
    `HttpResponse` and raises `FileNotFoundError` for unknown URLs.

## Examples

```python
from uwsgikit.http_response import HttpResponse

res = HttpResponse(date="Thu, 01 Jan 1970 00:00:00 GMT", mark=False)
res.write_status("200 OK").write_header("Content-Type", "text/plain")
res.end(b"Hello world!", False)
assert res.has_responded()
print(bytes(res.output))
```

```python
from uwsgikit.message_parser import get_headers

headers, consumed = get_headers(b"Host: example.com\r\nAccept: */*\r\n\r\n")
```

## What it does not do

There is no network server, event loop, router or WebSocket frame handling
in this package. `HttpResponse` writes to an in-memory buffer, not to a
socket. Reads in `AsyncFileReader` are synchronous, and the callback is
called before `request` returns. There is no command-line program.