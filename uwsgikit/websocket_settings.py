"""Per-context WebSocket settings and per-connection WebSocket state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .permessage_deflate import (
    COMPRESSOR_MASK,
    DECOMPRESSOR_MASK,
    CompressOptions,
    DeflationStream,
    InflationStream,
)

_U16_MAX = 0xFFFF
_MIN_MARGIN = 4
_MAX_MARGIN = 16


def idle_timeout_components(idle_timeout: int, send_pings_automatically: bool) -> tuple[int, int]:
    """Split an idle timeout into (idle part, ping margin).

    The margin is 4, 8 or 16 seconds depending on the idle timeout. When pings
    are sent automatically the idle part is shortened by the margin, since the
    ping timeout extends it again; the margin also serves as the end() timeout.
    """
    if isinstance(idle_timeout, bool) or not isinstance(idle_timeout, int):
        raise TypeError(f"expected an int, got {type(idle_timeout).__name__}")
    if not 0 <= idle_timeout <= _U16_MAX:
        raise ValueError(f"idle timeout {idle_timeout} does not fit in an unsigned 16-bit integer")

    margin = _MIN_MARGIN
    while idle_timeout - margin * 2 >= margin * 2 and margin < _MAX_MARGIN:
        margin <<= 1

    idle = idle_timeout - margin if send_pings_automatically else idle_timeout
    if idle < 0:
        raise ValueError(
            f"idle timeout {idle_timeout} is shorter than the ping margin of {margin} seconds"
        )
    return idle, margin


class CompressionStatus(Enum):
    """Compression state of a WebSocket connection."""

    DISABLED = 0
    ENABLED = 1
    COMPRESSED_FRAME = 2


@dataclass
class TopicMessage:
    """A message queued up for delivery when publishing to a topic."""

    message: bytes
    op_code: int
    compress: bool


class WebSocketData:
    """State kept for every open WebSocket connection."""

    def __init__(
        self,
        per_message_deflate: bool,
        compress_options: int,
        backpressure: bytes | bytearray = b"",
    ) -> None:
        self.backpressure = bytearray(backpressure)
        self.fragment_buffer = bytearray()
        self.control_tip_length = 0
        self.is_shutting_down = False
        self.has_timed_out = False
        self.compression_status = (
            CompressionStatus.ENABLED if per_message_deflate else CompressionStatus.DISABLED
        )
        self.deflation_stream: DeflationStream | None = None
        self.inflation_stream: InflationStream | None = None
        self.subscriber: Any = None

        if per_message_deflate:
            options = int(compress_options)
            if options & COMPRESSOR_MASK != CompressOptions.SHARED_COMPRESSOR:
                self.deflation_stream = DeflationStream(options)
            if options & DECOMPRESSOR_MASK != CompressOptions.SHARED_DECOMPRESSOR:
                self.inflation_stream = InflationStream(options)