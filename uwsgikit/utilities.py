"""Small number formatting helpers used when writing HTTP output."""

_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF
_HEX_DIGITS = "0123456789abcdef"


def _check_range(value: int, limit: int, kind: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"expected an int, got {type(value).__name__}")
    if value < 0 or value > limit:
        raise ValueError(f"{value} does not fit in an unsigned {kind}-bit integer")


def u32_to_hex(value: int) -> str:
    """Return an unsigned 32-bit integer as lowercase hex without leading zeros."""
    _check_range(value, _U32_MAX, "32")
    digits = []
    while True:
        digits.append(_HEX_DIGITS[value & 15])
        value >>= 4
        if not value:
            break
    return "".join(reversed(digits))


def u64_to_decimal(value: int) -> str:
    """Return an unsigned 64-bit integer as decimal digits."""
    _check_range(value, _U64_MAX, "64")
    digits = []
    while True:
        value, remainder = divmod(value, 10)
        digits.append(chr(remainder + ord("0")))
        if not value:
            break
    return "".join(reversed(digits))