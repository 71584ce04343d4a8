"""Helpers that fill out common response headers for served files."""

from __future__ import annotations

from typing import Union

from .http_response import HTTP_200_OK, HttpResponse

Text = Union[str, bytes]


def has_ext(file: Text, ext: Text) -> bool:
    """Return True if ``file`` ends with the extension ``ext``."""
    if len(ext) > len(file):
        return False
    return file.endswith(ext)


def serve_file(res: HttpResponse, url: Text) -> HttpResponse:
    """Write a 200 status and, for SVG files, the matching content type."""
    res.write_status(HTTP_200_OK)
    svg = b".svg" if isinstance(url, bytes) else ".svg"
    if has_ext(url, svg):
        res.write_header("Content-Type", "image/svg+xml")
    return res