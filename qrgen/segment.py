"""Segments of QR Code data and the bit-level helpers that build them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Sequence

VERSION_MIN = 1
VERSION_MAX = 40

#: Largest bit length a segment (or a sum of segments) may have.
MAX_BIT_LENGTH = 32767

#: Characters allowed in alphanumeric mode; each maps to its index here.
ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"


class DataTooLongError(ValueError):
    """Raised when data cannot fit the length limits of a QR Code."""


class Mode(enum.IntEnum):
    """How a segment's data bits are interpreted; the value is the mode indicator."""

    NUMERIC = 0x1
    ALPHANUMERIC = 0x2
    BYTE = 0x4
    KANJI = 0x8
    ECI = 0x7


_CHAR_COUNT_BITS = {
    Mode.NUMERIC: (10, 12, 14),
    Mode.ALPHANUMERIC: (9, 11, 13),
    Mode.BYTE: (8, 16, 16),
    Mode.KANJI: (8, 10, 12),
    Mode.ECI: (0, 0, 0),
}


@dataclass(frozen=True)
class Segment:
    """A run of character, binary or control data.

    ``num_chars`` counts characters for numeric, alphanumeric and kanji
    mode, bytes for byte mode, and is 0 for ECI mode. ``data`` holds the
    segment's bits, each 0 or 1, most significant first.
    """

    mode: Mode
    num_chars: int
    data: tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        if self.num_chars < 0:
            raise ValueError("character count must not be negative")
        if self.num_chars > MAX_BIT_LENGTH:
            raise DataTooLongError("character count too large")
        bits = tuple(self.data)
        if any(bit not in (0, 1) for bit in bits):
            raise ValueError("segment data must contain only 0 and 1 bits")
        if len(bits) > MAX_BIT_LENGTH:
            raise DataTooLongError("segment data too long")
        object.__setattr__(self, "data", bits)

    @property
    def bit_length(self) -> int:
        """Number of data bits in this segment."""
        return len(self.data)


def append_bits(bits: list[int], val: int, num_bits: int) -> None:
    """Append the low ``num_bits`` bits of ``val`` to ``bits``, most significant first."""
    if not 0 <= num_bits <= 16 or val < 0 or val >> num_bits != 0:
        raise ValueError(f"value {val} does not fit in {num_bits} bits")
    bits.extend((val >> i) & 1 for i in reversed(range(num_bits)))


def is_numeric(text: str) -> bool:
    """Tell whether every character of ``text`` is an ASCII digit."""
    return all("0" <= c <= "9" for c in text)


def is_alphanumeric(text: str) -> bool:
    """Tell whether ``text`` can be encoded in alphanumeric mode."""
    return all(c in ALPHANUMERIC_CHARSET for c in text)


def calc_segment_bit_length(mode: Mode, num_chars: int) -> int:
    """Number of data bits a segment of ``num_chars`` characters needs in ``mode``.

    For ECI mode ``num_chars`` must be 0 and the worst case is returned.
    Raises DataTooLongError when the result would exceed 32767 bits.
    """
    if num_chars < 0:
        raise ValueError("character count must not be negative")
    if num_chars > MAX_BIT_LENGTH:
        raise DataTooLongError("character count too large")
    mode = Mode(mode)
    if mode is Mode.NUMERIC:
        result = (num_chars * 10 + 2) // 3
    elif mode is Mode.ALPHANUMERIC:
        result = (num_chars * 11 + 1) // 2
    elif mode is Mode.BYTE:
        result = num_chars * 8
    elif mode is Mode.KANJI:
        result = num_chars * 13
    else:
        if num_chars != 0:
            raise ValueError("an ECI segment has no characters")
        result = 3 * 8
    if result > MAX_BIT_LENGTH:
        raise DataTooLongError("segment would need too many bits")
    return result


def calc_segment_buffer_size(mode: Mode, num_chars: int) -> int:
    """Number of bytes needed to hold the data of such a segment."""
    return (calc_segment_bit_length(mode, num_chars) + 7) // 8


def make_bytes(data: bytes) -> Segment:
    """Segment holding ``data`` in byte mode."""
    data = bytes(data)
    calc_segment_bit_length(Mode.BYTE, len(data))
    bits: list[int] = []
    for byte in data:
        append_bits(bits, byte, 8)
    return Segment(Mode.BYTE, len(data), tuple(bits))


def make_numeric(digits: str) -> Segment:
    """Segment holding a string of decimal digits in numeric mode."""
    if not is_numeric(digits):
        raise ValueError("string contains non-numeric characters")
    calc_segment_bit_length(Mode.NUMERIC, len(digits))
    bits: list[int] = []
    for start in range(0, len(digits), 3):
        group = digits[start:start + 3]
        append_bits(bits, int(group), len(group) * 3 + 1)
    return Segment(Mode.NUMERIC, len(digits), tuple(bits))


def make_alphanumeric(text: str) -> Segment:
    """Segment holding ``text`` in alphanumeric mode."""
    if not is_alphanumeric(text):
        raise ValueError("string contains characters not encodable in alphanumeric mode")
    calc_segment_bit_length(Mode.ALPHANUMERIC, len(text))
    bits: list[int] = []
    for start in range(0, len(text), 2):
        pair = text[start:start + 2]
        if len(pair) == 2:
            value = ALPHANUMERIC_CHARSET.index(pair[0]) * 45 + ALPHANUMERIC_CHARSET.index(pair[1])
            append_bits(bits, value, 11)
        else:
            append_bits(bits, ALPHANUMERIC_CHARSET.index(pair), 6)
    return Segment(Mode.ALPHANUMERIC, len(text), tuple(bits))


def make_eci(assign_val: int) -> Segment:
    """Segment holding an Extended Channel Interpretation designator."""
    bits: list[int] = []
    if assign_val < 0:
        raise ValueError("ECI assignment value must not be negative")
    if assign_val < (1 << 7):
        append_bits(bits, assign_val, 8)
    elif assign_val < (1 << 14):
        append_bits(bits, 2, 2)
        append_bits(bits, assign_val, 14)
    elif assign_val < 1_000_000:
        append_bits(bits, 6, 3)
        append_bits(bits, assign_val >> 10, 11)
        append_bits(bits, assign_val & 0x3FF, 10)
    else:
        raise ValueError("ECI assignment value out of range")
    return Segment(Mode.ECI, 0, tuple(bits))


def num_char_count_bits(mode: Mode, version: int) -> int:
    """Width of the character count field for ``mode`` at ``version``."""
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version {version} out of range")
    return _CHAR_COUNT_BITS[Mode(mode)][(version + 7) // 17]


def get_total_bits(segs: Iterable[Segment], version: int) -> int:
    """Number of bits needed to encode ``segs`` at ``version``.

    Raises DataTooLongError if a segment's length does not fit its count
    field or the total exceeds 32767 bits.
    """
    result = 0
    for seg in segs:
        ccbits = num_char_count_bits(seg.mode, version)
        if seg.num_chars >= (1 << ccbits):
            raise DataTooLongError("segment too long for its character count field")
        result += 4 + ccbits + seg.bit_length
        if result > MAX_BIT_LENGTH:
            raise DataTooLongError("segments need too many bits")
    return result


def bits_to_int(bits: Sequence[int]) -> int:
    """Read ``bits`` as a big-endian unsigned integer."""
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value