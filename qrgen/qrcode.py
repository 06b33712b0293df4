"""Encoding segments, text and binary data into a finished QR Code symbol."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable

from qrgen.ecc import Ecc, add_ecc_and_interleave, get_num_data_codewords
from qrgen.matrix import (
    Mask,
    apply_mask,
    draw_codewords,
    draw_format_bits,
    draw_light_function_modules,
    function_module_grid,
    penalty_score,
)
from qrgen.segment import (
    VERSION_MAX,
    VERSION_MIN,
    DataTooLongError,
    Mode,
    Segment,
    append_bits,
    bits_to_int,
    calc_segment_buffer_size,
    get_total_bits,
    is_alphanumeric,
    is_numeric,
    make_alphanumeric,
    make_bytes,
    make_numeric,
    num_char_count_bits,
)


def buffer_len_for_version(version: int) -> int:
    """Bytes needed to store any QR Code up to and including ``version``."""
    size = version * 4 + 17
    return (size * size + 7) // 8 + 1


@dataclass(frozen=True)
class QrCode:
    """An immutable square grid of dark (True) and light (False) modules."""

    version: int
    ecl: Ecc
    mask: Mask
    modules: tuple[tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        """Side length in modules, from 21 to 177."""
        return len(self.modules)

    def get_module(self, x: int, y: int) -> bool:
        """Colour of the module at (x, y); out-of-bounds coordinates are light."""
        return 0 <= x < self.size and 0 <= y < self.size and self.modules[y][x]


def _check_versions(min_version: int, max_version: int) -> None:
    if not VERSION_MIN <= min_version <= max_version <= VERSION_MAX:
        raise ValueError(
            f"versions must satisfy {VERSION_MIN} <= min <= max <= {VERSION_MAX}, "
            f"got {min_version} and {max_version}"
        )


def _choose_version(segs: list[Segment], ecl: Ecc, min_version: int, max_version: int) -> tuple[int, int]:
    for version in range(min_version, max_version + 1):
        capacity = get_num_data_codewords(version, ecl) * 8
        try:
            used = get_total_bits(segs, version)
        except DataTooLongError:
            continue
        if used <= capacity:
            return version, used
    raise DataTooLongError("data too long for any version in the given range")


def _data_codewords(segs: list[Segment], version: int, capacity: int) -> bytes:
    bits: list[int] = []
    for seg in segs:
        append_bits(bits, int(seg.mode), 4)
        append_bits(bits, seg.num_chars, num_char_count_bits(seg.mode, version))
        bits.extend(seg.data)
    append_bits(bits, 0, min(4, capacity - len(bits)))
    append_bits(bits, 0, -len(bits) % 8)
    for pad in itertools.cycle((0xEC, 0x11)):
        if len(bits) >= capacity:
            break
        append_bits(bits, pad, 8)
    return bytes(bits_to_int(bits[i:i + 8]) for i in range(0, len(bits), 8))


def encode_segments_advanced(
    segs: Iterable[Segment],
    ecl: Ecc = Ecc.LOW,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode ``segs`` in the smallest version within the range.

    With ``boost_ecl`` the error correction level is raised as far as the
    chosen version allows. Raises DataTooLongError if nothing fits.
    """
    segs = list(segs)
    ecl = Ecc(ecl)
    mask = Mask(mask)
    _check_versions(min_version, max_version)

    version, used = _choose_version(segs, ecl, min_version, max_version)
    if boost_ecl:
        for level in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
            if used <= get_num_data_codewords(version, level) * 8:
                ecl = level

    capacity = get_num_data_codewords(version, ecl) * 8
    codewords = add_ecc_and_interleave(_data_codewords(segs, version, capacity), version, ecl)

    grid = function_module_grid(version)
    draw_codewords(grid, codewords)
    draw_light_function_modules(grid, version)
    function_modules = function_module_grid(version)

    if mask is Mask.AUTO:
        best_penalty = None
        for candidate in Mask:
            if candidate is Mask.AUTO:
                continue
            apply_mask(function_modules, grid, candidate)
            draw_format_bits(grid, ecl, candidate)
            penalty = penalty_score(grid)
            if best_penalty is None or penalty < best_penalty:
                mask, best_penalty = candidate, penalty
            apply_mask(function_modules, grid, candidate)  # XOR undoes it
    apply_mask(function_modules, grid, mask)
    draw_format_bits(grid, ecl, mask)
    return QrCode(version, ecl, mask, tuple(tuple(row) for row in grid))


def encode_segments(segs: Iterable[Segment], ecl: Ecc = Ecc.LOW) -> QrCode:
    """Encode ``segs`` over all versions with automatic mask and boosted ECC."""
    return encode_segments_advanced(segs, ecl, VERSION_MIN, VERSION_MAX, Mask.AUTO, True)


def encode_text(
    text: str,
    ecl: Ecc = Ecc.LOW,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode ``text`` in numeric, alphanumeric or byte (UTF-8) mode."""
    if "\0" in text:
        raise ValueError("text must not contain NUL characters")
    _check_versions(min_version, max_version)
    if not text:
        return encode_segments_advanced([], ecl, min_version, max_version, mask, boost_ecl)
    buf_len = buffer_len_for_version(max_version)
    if is_numeric(text):
        if calc_segment_buffer_size(Mode.NUMERIC, len(text)) > buf_len:
            raise DataTooLongError("text too long")
        seg = make_numeric(text)
    elif is_alphanumeric(text):
        if calc_segment_buffer_size(Mode.ALPHANUMERIC, len(text)) > buf_len:
            raise DataTooLongError("text too long")
        seg = make_alphanumeric(text)
    else:
        data = text.encode("utf-8")
        if len(data) > buf_len:
            raise DataTooLongError("text too long")
        seg = make_bytes(data)
    return encode_segments_advanced([seg], ecl, min_version, max_version, mask, boost_ecl)


def encode_binary(
    data: bytes,
    ecl: Ecc = Ecc.LOW,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode ``data`` in byte mode."""
    seg = make_bytes(data)
    return encode_segments_advanced([seg], ecl, min_version, max_version, mask, boost_ecl)