"""Serve files from a directory, streaming them through a read cache."""

from __future__ import annotations

import logging
import os
from typing import Callable

from .http_response import HttpResponse

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 1024 * 1024


class AsyncFileReader:
    """Reads a file through a single cached window of ``cache_size`` bytes."""

    def __init__(self, file_name: str, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        if cache_size <= 0:
            raise ValueError("cache size must be positive")
        self.file_name = file_name
        self.cache_size = cache_size
        self.file_size = os.path.getsize(file_name)
        self._cache = self._read(0)
        self._cache_offset = 0
        self._has_cache = True

    def _read(self, offset: int) -> bytes:
        with open(self.file_name, "rb") as handle:
            handle.seek(offset)
            return handle.read(self.cache_size)

    def peek(self, offset: int) -> bytes:
        """Return the cached data at ``offset``, or empty bytes on a cache miss."""
        if self._has_cache and 0 <= offset - self._cache_offset < len(self._cache):
            start = offset - self._cache_offset
            return self._cache[start : start + max(0, self.file_size - offset)]
        return b""

    def request(self, offset: int, callback: Callable[[bytes], None]) -> None:
        """Load the window starting at ``offset`` and pass its data to ``callback``.

        Only one request may be pending at a time.
        """
        if not self._has_cache:
            raise RuntimeError("a chunk is already being requested")
        self._has_cache = False
        try:
            self._cache = self._read(offset)
            self._cache_offset = offset
        finally:
            self._has_cache = True
        chunk_size = max(0, min(self.cache_size, self.file_size - offset))
        callback(self._cache[:chunk_size])


class FileStreamer:
    """Maps URLs below ``root`` to file readers and streams them to responses."""

    def __init__(self, root: str) -> None:
        self.root = root
        self.readers: dict[str, AsyncFileReader] = {}
        self.update_root_cache()

    def update_root_cache(self) -> None:
        """Create a reader for every file below the root directory."""
        for directory, _, files in os.walk(self.root):
            for name in files:
                path = os.path.join(directory, name)
                url = "/" + os.path.relpath(path, self.root).replace(os.sep, "/")
                if url == "/index.html":
                    url = "/"
                self.readers[url] = AsyncFileReader(path)

    def stream_file(self, res: HttpResponse, url: str) -> None:
        """Stream the file served at ``url``; raises FileNotFoundError if unknown."""
        reader = self.readers.get(url)
        if reader is None:
            raise FileNotFoundError(f"did not find file: {url}")
        self._stream(res, reader)

    @classmethod
    def _stream(cls, res: HttpResponse, reader: AsyncFileReader) -> None:
        chunk = reader.peek(res.write_offset)
        remaining = reader.file_size - res.write_offset
        if not chunk or res.try_end(chunk, reader.file_size)[0]:
            if len(chunk) < remaining:
                def on_chunk(data: bytes) -> None:
                    if not data:
                        res.close()
                    else:
                        cls._stream(res, reader)

                reader.request(res.write_offset, on_chunk)
        else:
            def on_writable(_offset: int) -> bool:
                cls._stream(res, reader)
                return False

            res.on_writable(on_writable).on_aborted(
                lambda: logger.info("file stream aborted: %s", reader.file_name)
            )