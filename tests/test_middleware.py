from uwsgikit.http_response import HttpResponse
from uwsgikit.middleware import has_ext, serve_file


def test_has_ext_matches_suffix():
    assert has_ext("icon.svg", ".svg") is True
    assert has_ext(b"icon.svg", b".svg") is True
    assert has_ext("icon.png", ".svg") is False


def test_has_ext_with_extension_longer_than_file():
    assert has_ext("a", ".svg") is False


def test_serve_file_svg_sets_content_type():
    res = HttpResponse()
    returned = serve_file(res, "/images/icon.svg")
    assert returned is res
    assert bytes(res.output).startswith(b"HTTP/1.1 200 OK\r\n")
    assert b"Content-Type: image/svg+xml\r\n" in res.output


def test_serve_file_other_has_no_content_type():
    res = HttpResponse()
    serve_file(res, "/index.html")
    assert bytes(res.output) == b"HTTP/1.1 200 OK\r\n"