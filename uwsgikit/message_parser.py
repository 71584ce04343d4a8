"""Parser for RFC 822 style header blocks shared by HTTP and multipart."""

from __future__ import annotations

MAX_HEADERS = 10

_CR = 0x0D
_LF = 0x0A
_COLON = 0x3A


def _lower_key(key: bytes) -> bytes:
    return bytes(byte | 0x20 for byte in key)


def get_headers(data: bytes) -> tuple[list[tuple[bytes, bytes]], int] | None:
    """Parse a header block terminated by an empty line.

    Returns the list of (lowercased key, value) pairs and the number of bytes
    consumed including the terminating CRLF, or None when the block is
    incomplete, malformed or holds too many headers.
    """
    buffer = bytes(data)
    size = len(buffer)
    headers: list[tuple[bytes, bytes]] = []
    pos = 0

    for _ in range(MAX_HEADERS):
        key_start = pos
        while pos < size and buffer[pos] != _COLON and buffer[pos] > 32:
            pos += 1
        if pos >= size:
            return None

        if buffer[pos] == _CR:
            if pos + 1 < size and buffer[pos + 1] == _LF:
                return headers, pos + 2
            return None

        key = _lower_key(buffer[key_start:pos])
        pos += 1
        while pos < size and (buffer[pos] == _COLON or buffer[pos] < 33) and buffer[pos] != _CR:
            pos += 1
        value_start = pos

        line_end = buffer.find(b"\r", value_start)
        if line_end == -1 or line_end + 1 >= size or buffer[line_end + 1] != _LF:
            return None
        headers.append((key, buffer[value_start:line_end]))
        pos = line_end + 2

    return None