"""Bookkeeping kept for each HTTP response while it is being written."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Optional


class ResponseFlag(IntFlag):
    """Progress flags of an HTTP response."""

    NONE = 0
    HTTP_STATUS_CALLED = 1
    HTTP_WRITE_CALLED = 2
    HTTP_END_CALLED = 4
    HTTP_RESPONSE_PENDING = 8
    HTTP_CONNECTION_CLOSE = 16


@dataclass
class ResponseState:
    """Per-response state: flags, handlers, write offset and buffered output.

    A new response is pending until mark_done() is called.
    """

    state: ResponseFlag = ResponseFlag.HTTP_RESPONSE_PENDING
    on_aborted: Optional[Callable[[], None]] = None
    on_data: Optional[Callable[[bytes, bool], None]] = None
    on_writable: Optional[Callable[[int], bool]] = None
    header_offset: int = 0
    offset: int = 0
    received_bytes_per_timeout: int = 0
    backpressure: bytearray = field(default_factory=bytearray)

    def mark_done(self) -> None:
        """Mark the response as fully written and drop its abort and writable handlers."""
        self.on_aborted = None
        self.on_writable = None
        self.state &= ~ResponseFlag.HTTP_RESPONSE_PENDING

    def is_pending(self) -> bool:
        """Return True while the response has not been fully written."""
        return bool(self.state & ResponseFlag.HTTP_RESPONSE_PENDING)