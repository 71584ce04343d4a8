import pytest

from uwsgikit.message_parser import MAX_HEADERS, get_headers


def test_two_headers():
    data = b"Host: example.com\r\nAccept: */*\r\n\r\n"
    result = get_headers(data)
    assert result is not None
    headers, length = result
    assert headers == [(b"Host".lower(), b"example.com"), (b"Accept".lower(), b"*/*")]
    assert length == len(data)


def test_empty_block():
    assert get_headers(b"\r\n") == ([], 2)


def test_body_is_not_consumed():
    block = b"Content-Type: text/plain\r\n\r\n"
    headers, length = get_headers(block + b"body bytes")
    assert length == len(block)
    assert headers[0][1] == b"text/plain"


def test_keys_are_lowercased_values_are_not():
    headers, _ = get_headers(b"X-MiXeD: VaLuE\r\n\r\n")
    assert headers == [(b"X-MiXeD".lower(), b"VaLuE")]


def test_leading_colons_and_spaces_skipped():
    headers, _ = get_headers(b"Key:::  \tvalue\r\n\r\n")
    assert headers == [(b"key", b"value")]


def test_empty_value():
    headers, length = get_headers(b"Empty:\r\n\r\n")
    assert headers == [(b"empty", b"")]
    assert length == len(b"Empty:\r\n\r\n")


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"Host: example.com",
        b"Host: example.com\r\n",
        b"Host: example.com\r\n\r",
        b"Host: example.com\rX",
        b"Host",
    ],
)
def test_incomplete_or_malformed(data):
    assert get_headers(data) is None


def test_limit_of_headers():
    allowed = b"".join(b"H%d: v\r\n" % n for n in range(MAX_HEADERS - 1)) + b"\r\n"
    headers, length = get_headers(allowed)
    assert len(headers) == MAX_HEADERS - 1
    assert length == len(allowed)

    too_many = b"".join(b"H%d: v\r\n" % n for n in range(MAX_HEADERS)) + b"\r\n"
    assert get_headers(too_many) is None


def test_accepts_bytearray():
    data = bytearray(b"A: b\r\n\r\n")
    headers, length = get_headers(data)
    assert headers == [(b"a", b"b")]
    assert length == len(data)