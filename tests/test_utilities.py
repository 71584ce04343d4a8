import pytest

from uwsgikit.utilities import u32_to_hex, u64_to_decimal


def test_hex_zero():
    assert u32_to_hex(0) == "0"


def test_hex_max_value():
    assert u32_to_hex(0xFFFFFFFF) == "ffffffff"


@pytest.mark.parametrize("value", [1, 9, 10, 15, 16, 255, 4096, 0x1234ABCD, 0xFFFFFFFF])
def test_hex_round_trip(value):
    text = u32_to_hex(value)
    assert int(text, 16) == value
    assert set(text) <= set("0123456789abcdef")
    assert not text.startswith("0")


@pytest.mark.parametrize("value", [-1, 0x100000000])
def test_hex_out_of_range(value):
    with pytest.raises(ValueError):
        u32_to_hex(value)


def test_hex_rejects_non_int():
    with pytest.raises(TypeError):
        u32_to_hex("10")


def test_decimal_max_value():
    assert u64_to_decimal(2**64 - 1) == "18446744073709551615"


@pytest.mark.parametrize("value", [0, 1, 9, 10, 99, 100, 123456789, 2**32, 2**63])
def test_decimal_round_trip(value):
    text = u64_to_decimal(value)
    assert int(text) == value
    assert text.isdigit()
    assert text == "0" or not text.startswith("0")


@pytest.mark.parametrize("value", [-5, 2**64])
def test_decimal_out_of_range(value):
    with pytest.raises(ValueError):
        u64_to_decimal(value)