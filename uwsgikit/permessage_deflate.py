"""Deflate and inflate streams for the WebSocket permessage-deflate extension."""

from __future__ import annotations

import zlib
from enum import IntFlag

COMPRESSOR_MASK = 0x00FF
DECOMPRESSOR_MASK = 0x0F00

# Every sync flush ends with an empty stored block; the extension leaves it off the wire.
_SYNC_TAIL = b"\x00\x00\xff\xff"


def _compressor(window_bits: int, mem_level: int) -> int:
    return window_bits << 4 | mem_level


def _decompressor(window_bits: int) -> int:
    return window_bits << 8


class CompressOptions(IntFlag):
    """Compression settings packed into 16 bits.

    Bits 0-3 hold the compressor memLevel and bits 4-7 its windowBits;
    bits 8-11 hold the decompressor windowBits. A value of 1 in either
    part selects the shared instance, and 0 turns everything off.
    """

    DISABLED = 0
    SHARED_COMPRESSOR = 1
    SHARED_DECOMPRESSOR = _decompressor(1)

    DEDICATED_COMPRESSOR_3KB = _compressor(9, 1)
    DEDICATED_COMPRESSOR_4KB = _compressor(9, 2)
    DEDICATED_COMPRESSOR_8KB = _compressor(10, 3)
    DEDICATED_COMPRESSOR_16KB = _compressor(11, 4)
    DEDICATED_COMPRESSOR_32KB = _compressor(12, 5)
    DEDICATED_COMPRESSOR_64KB = _compressor(13, 6)
    DEDICATED_COMPRESSOR_128KB = _compressor(14, 7)
    DEDICATED_COMPRESSOR_256KB = _compressor(15, 8)
    DEDICATED_COMPRESSOR = DEDICATED_COMPRESSOR_256KB

    DEDICATED_DECOMPRESSOR_512B = _decompressor(9)
    DEDICATED_DECOMPRESSOR_1KB = _decompressor(10)
    DEDICATED_DECOMPRESSOR_2KB = _decompressor(11)
    DEDICATED_DECOMPRESSOR_4KB = _decompressor(12)
    DEDICATED_DECOMPRESSOR_8KB = _decompressor(13)
    DEDICATED_DECOMPRESSOR_16KB = _decompressor(14)
    DEDICATED_DECOMPRESSOR_32KB = _decompressor(15)
    DEDICATED_DECOMPRESSOR = DEDICATED_DECOMPRESSOR_32KB


class DeflationStream:
    """A dedicated raw deflate stream whose sliding window survives between messages."""

    def __init__(self, options: int) -> None:
        options = int(options)
        self.window_bits = (options & COMPRESSOR_MASK) >> 4
        self.mem_level = options & 0xF
        if not 9 <= self.window_bits <= 15 or not 1 <= self.mem_level <= 9:
            raise ValueError(f"options {options:#06x} do not describe a dedicated compressor")
        self._stream = self._fresh()

    def _fresh(self):
        return zlib.compressobj(
            zlib.Z_DEFAULT_COMPRESSION,
            zlib.DEFLATED,
            -self.window_bits,
            self.mem_level,
            zlib.Z_DEFAULT_STRATEGY,
        )

    def deflate(self, raw: bytes, reset: bool) -> bytes:
        """Compress one message and strip the trailing sync-flush marker."""
        if not raw:
            raise ValueError("cannot deflate an empty message")
        flushed = self._stream.compress(bytes(raw)) + self._stream.flush(zlib.Z_SYNC_FLUSH)
        if reset:
            self._stream = self._fresh()
        return flushed[: -len(_SYNC_TAIL)]


class InflationStream:
    """A dedicated raw inflate stream whose sliding window survives between messages."""

    def __init__(self, options: int) -> None:
        self.window_bits = int(options) >> 8
        if not 8 <= self.window_bits <= 15:
            raise ValueError(f"options {int(options):#06x} do not describe a dedicated decompressor")
        self._stream = zlib.decompressobj(-self.window_bits)

    def inflate(self, compressed: bytes, max_payload_length: int, reset: bool) -> bytes:
        """Decompress one message.

        Raises ValueError if the data is invalid or inflates to more than
        max_payload_length bytes.
        """
        framed = bytes(compressed) + _SYNC_TAIL
        try:
            try:
                result = self._stream.decompress(framed, max_payload_length + 1)
            except zlib.error as exc:
                raise ValueError(f"invalid compressed message: {exc}") from exc
            if self._stream.eof:
                raise ValueError("invalid compressed message: unexpected end of stream")
            if len(result) > max_payload_length:
                raise ValueError("inflated message exceeds the maximum payload length")
            return result
        finally:
            if reset:
                self._stream = zlib.decompressobj(-self.window_bits)