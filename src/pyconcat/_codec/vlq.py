"""Base64 variable-length quantities.

Each integer is written as 5-bit groups, least significant group first.
Bit 6 of every base64 digit (value 32) flags that another group follows,
and the lowest bit of the first group carries the sign.
"""

from __future__ import annotations

_BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES: dict[str, int] = {ch: i for i, ch in enumerate(_BASE64_ALPHABET)}

_VLQ_SHIFT = 5
_VLQ_CONTINUATION = 1 << _VLQ_SHIFT
_VLQ_MASK = _VLQ_CONTINUATION - 1


def encode_vlq(value: int) -> str:
    """Encode one signed integer.

    Parameters
    ----------
    value : int
        The integer to encode.

    Returns
    -------
    str
        One or more base64 digits.
    """
    vlq = (value << 1) if value >= 0 else ((-value) << 1) | 1

    digits: list[str] = []
    while True:
        digit = vlq & _VLQ_MASK
        vlq >>= _VLQ_SHIFT
        if vlq:
            digit |= _VLQ_CONTINUATION
        digits.append(_BASE64_ALPHABET[digit])
        if not vlq:
            return "".join(digits)


def encode_values(values: list[int]) -> str:
    return "".join(encode_vlq(v) for v in values)


def decode_vlq(encoded: str) -> list[int]:
    """Decode every integer packed into *encoded*.

    Raises :class:`ValueError` for characters outside the base64 alphabet
    and for a trailing group whose continuation bit is still set.
    """
    values: list[int] = []
    shift = 0
    accumulator = 0

    for ch in encoded:
        digit = _BASE64_VALUES.get(ch)
        if digit is None:
            raise ValueError(f"invalid base64 VLQ character {ch!r} in {encoded!r}")
        accumulator += (digit & _VLQ_MASK) << shift
        if digit & _VLQ_CONTINUATION:
            shift += _VLQ_SHIFT
            continue
        negative = accumulator & 1
        accumulator >>= 1
        values.append(-accumulator if negative else accumulator)
        shift = 0
        accumulator = 0

    if shift:
        raise ValueError(f"truncated base64 VLQ sequence {encoded!r}")
    return values
