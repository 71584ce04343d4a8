"""The channel on which an HTTP/1.1 response is written back to a client."""

from __future__ import annotations

from typing import Callable, Optional, Union

from .response_state import ResponseFlag, ResponseState
from .utilities import u32_to_hex, u64_to_decimal

HTTP_200_OK = "200 OK"
HTTP_TIMEOUT_S = 10
MARK_HEADER = ("uWebSockets", "20")
DEFAULT_DATE = "Thu, 01 Jan 1970 00:00:00 GMT"
_DATE_LENGTH = 29

Data = Union[bytes, bytearray, memoryview, str]


def _to_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected str or bytes, got {type(data).__name__}")


class HttpResponse:
    """An HTTP response writing to an in-memory socket.

    Everything sent on the wire is collected in ``output``. While corked,
    writes are held back and sent together when the cork is released.
    ``timeout`` holds the armed timeout in seconds, 0 meaning none.
    """

    def __init__(self, date: str = DEFAULT_DATE, mark: bool = True) -> None:
        if len(date) != _DATE_LENGTH:
            raise ValueError(f"date must be {_DATE_LENGTH} characters long, got {len(date)}")
        self.date = date
        self.mark = mark
        self.state = ResponseState()
        self.output = bytearray()
        self.timeout = 0
        self.closed = False
        self.shut_down = False
        self.paused = False
        self._corked = False
        self._cork_buffer = bytearray()

    # Socket level

    def _send(self, data: bytes) -> tuple[int, bool]:
        """Write raw bytes; returns (written, failed)."""
        if self.closed:
            return 0, True
        if self._corked:
            self._cork_buffer += data
        else:
            self.output += data
        return len(data), False

    def _buffered_amount(self) -> int:
        return len(self.state.backpressure)

    def _uncork(self) -> tuple[int, bool]:
        self._corked = False
        pending = bytes(self._cork_buffer)
        self._cork_buffer.clear()
        if not pending:
            return 0, False
        return self._send(pending)

    def _shutdown(self) -> None:
        self.shut_down = True

    def _close_if_finished(self) -> None:
        if self._corked:
            return
        flags = self.state.state
        if (
            flags & ResponseFlag.HTTP_CONNECTION_CLOSE
            and not flags & ResponseFlag.HTTP_RESPONSE_PENDING
            and self._buffered_amount() == 0
        ):
            self._shutdown()
            self.close()

    # Response level

    def _write_mark(self) -> None:
        self.write_header("Date", self.date)
        if self.mark:
            self.write_header(*MARK_HEADER)

    def _internal_end(
        self,
        data: bytes,
        total_size: int,
        optional: bool,
        allow_content_length: bool = True,
        close_connection: bool = False,
    ) -> bool:
        self.write_status(HTTP_200_OK)

        if not total_size:
            total_size = len(data)

        state = self.state
        if close_connection:
            if not state.state & ResponseFlag.HTTP_CONNECTION_CLOSE:
                self.write_header("Connection", "close")
            state.state |= ResponseFlag.HTTP_CONNECTION_CLOSE

        if state.state & ResponseFlag.HTTP_WRITE_CALLED:
            if data:
                self._send(b"\r\n" + u32_to_hex(len(data)).encode("ascii") + b"\r\n")
                self._send(data)
            self._send(b"\r\n0\r\n\r\n")
            state.mark_done()

            if not self._corked and state.state & ResponseFlag.HTTP_CONNECTION_CLOSE:
                self._close_if_finished()
                if self.closed:
                    return True

            self.timeout = HTTP_TIMEOUT_S
            return True

        if not state.state & ResponseFlag.HTTP_END_CALLED:
            self._write_mark()
            if allow_content_length:
                self._send(b"Content-Length: " + u64_to_decimal(total_size).encode("ascii") + b"\r\n\r\n")
            else:
                self._send(b"\r\n")
            state.state |= ResponseFlag.HTTP_END_CALLED

        written, failed = self._send(data) if data else (0, False)
        state.offset += written
        success = written == len(data) and not failed

        if not success or state.offset == total_size:
            self.timeout = HTTP_TIMEOUT_S

        if state.offset == total_size:
            state.mark_done()
            self._close_if_finished()

        return success

    def pause(self) -> HttpResponse:
        """Throttle reads and writes and disarm the timeout."""
        self.paused = True
        self.timeout = 0
        return self

    def resume(self) -> HttpResponse:
        """Resume reads and writes and rearm the timeout."""
        self.paused = False
        self.timeout = HTTP_TIMEOUT_S
        return self

    def close(self) -> None:
        """Immediately terminate the connection, calling the abort handler if still pending."""
        if self.closed:
            return
        self.closed = True
        self._corked = False
        self._cork_buffer.clear()
        if self.state.is_pending() and self.state.on_aborted is not None:
            handler = self.state.on_aborted
            self.state.on_aborted = None
            handler()

    def write_continue(self) -> HttpResponse:
        """Write a 100 Continue; may be done any number of times."""
        self._send(b"HTTP/1.1 100 Continue\r\n\r\n")
        return self

    def write_status(self, status: Data) -> HttpResponse:
        """Write the status line; only the first call has any effect."""
        if self.state.state & ResponseFlag.HTTP_STATUS_CALLED:
            return self
        self.state.state |= ResponseFlag.HTTP_STATUS_CALLED
        self._send(b"HTTP/1.1 " + _to_bytes(status) + b"\r\n")
        return self

    def write_header(self, key: Data, value: Union[Data, int]) -> HttpResponse:
        """Write a header with a string, bytes or unsigned integer value."""
        self.write_status(HTTP_200_OK)
        if isinstance(value, int) and not isinstance(value, bool):
            encoded = u64_to_decimal(value).encode("ascii")
        else:
            encoded = _to_bytes(value)
        self._send(_to_bytes(key) + b": " + encoded + b"\r\n")
        return self

    def end_without_body(
        self, reported_content_length: Optional[int] = None, close_connection: bool = False
    ) -> None:
        """End without a body, optionally reporting a content length."""
        if reported_content_length is not None:
            self._internal_end(b"", reported_content_length, False, True, close_connection)
        else:
            self._internal_end(b"", 0, False, False, close_connection)

    def end(self, data: Data = b"", close_connection: bool = False) -> None:
        """End the response with an optional last chunk of data."""
        payload = _to_bytes(data)
        self._internal_end(payload, len(payload), False, True, close_connection)

    def try_end(
        self, data: Data, total_size: int = 0, close_connection: bool = False
    ) -> tuple[bool, bool]:
        """Send part of a response of known total size; returns (ok, has_responded)."""
        ok = self._internal_end(_to_bytes(data), total_size, True, True, close_connection)
        return ok, self.has_responded()

    def write(self, data: Data) -> bool:
        """Write a chunk in chunked transfer encoding; returns False on failure."""
        self.write_status(HTTP_200_OK)
        payload = _to_bytes(data)
        if not payload:
            return True

        state = self.state
        if not state.state & ResponseFlag.HTTP_WRITE_CALLED:
            self._write_mark()
            self.write_header("Transfer-Encoding", "chunked")
            state.state |= ResponseFlag.HTTP_WRITE_CALLED

        self._send(b"\r\n" + u32_to_hex(len(payload)).encode("ascii") + b"\r\n")
        _, failed = self._send(payload)
        if failed:
            self.timeout = HTTP_TIMEOUT_S
        return not failed

    @property
    def write_offset(self) -> int:
        """Number of body bytes written so far."""
        return self.state.offset

    @write_offset.setter
    def write_offset(self, offset: int) -> None:
        self.state.offset = offset

    def has_responded(self) -> bool:
        """Return True once the response is complete."""
        return not self.state.is_pending()

    def cork(self, handler: Callable[[], None]) -> HttpResponse:
        """Run handler with writes held back, then send them all at once."""
        if self._corked or self.closed:
            handler()
            return self

        self._corked = True
        handler()
        if not self._corked:
            return self

        _, failed = self._uncork()
        if failed:
            self.timeout = HTTP_TIMEOUT_S
        self._close_if_finished()
        return self

    def on_writable(self, handler: Callable[[int], bool]) -> HttpResponse:
        """Attach a handler called when the socket becomes writable."""
        self.state.on_writable = handler
        return self

    def on_aborted(self, handler: Callable[[], None]) -> HttpResponse:
        """Attach a handler called if the request is aborted."""
        self.state.on_aborted = handler
        return self

    def on_data(self, handler: Callable[[bytes, bool], None]) -> None:
        """Attach a handler for request body chunks."""
        self.state.on_data = handler
        self.state.received_bytes_per_timeout = 0