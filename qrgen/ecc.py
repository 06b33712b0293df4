"""Error correction levels, codeword capacities and Reed-Solomon coding."""

from __future__ import annotations

import enum
from typing import Sequence

from qrgen.segment import VERSION_MAX, VERSION_MIN

#: Largest Reed-Solomon divisor degree used by any version and level.
REED_SOLOMON_DEGREE_MAX = 30


class Ecc(enum.IntEnum):
    """Error correction level, in ascending order of protection."""

    LOW = 0
    MEDIUM = 1
    QUARTILE = 2
    HIGH = 3

    @property
    def format_bits(self) -> int:
        """The two-bit value this level takes in the format information."""
        return _FORMAT_BITS[self]


_FORMAT_BITS = {Ecc.LOW: 1, Ecc.MEDIUM: 0, Ecc.QUARTILE: 3, Ecc.HIGH: 2}

# Indexed by [level][version]; index 0 of each row is padding.
ECC_CODEWORDS_PER_BLOCK = (
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28,
     28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26,
     26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30,
     28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28,
     30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
)

NUM_ERROR_CORRECTION_BLOCKS = (
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8,
     8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16,
     17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20,
     23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25,
     25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
)


def _check_version(version: int) -> None:
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version {version} out of range")


def get_num_raw_data_modules(version: int) -> int:
    """Number of modules left for data and ECC once function modules are excluded."""
    _check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def get_num_data_codewords(version: int, ecl: Ecc) -> int:
    """Number of 8-bit data codewords (not ECC) a version holds at a level."""
    ecl = Ecc(ecl)
    return (get_num_raw_data_modules(version) // 8
            - ECC_CODEWORDS_PER_BLOCK[ecl][version] * NUM_ERROR_CORRECTION_BLOCKS[ecl][version])


def reed_solomon_multiply(x: int, y: int) -> int:
    """Product of two elements of GF(2^8/0x11D)."""
    if not (0 <= x <= 0xFF and 0 <= y <= 0xFF):
        raise ValueError("field elements must be bytes")
    z = 0
    for i in reversed(range(8)):
        z = ((z << 1) ^ ((z >> 7) * 0x11D)) & 0xFF
        z ^= ((y >> i) & 1) * x
    return z


def reed_solomon_compute_divisor(degree: int) -> bytes:
    """Generator polynomial of ``degree``, highest power first, leading 1 omitted."""
    if not 1 <= degree <= REED_SOLOMON_DEGREE_MAX:
        raise ValueError(f"degree {degree} out of range")
    result = [0] * (degree - 1) + [1]
    root = 1
    for _ in range(degree):
        for j in range(degree):
            result[j] = reed_solomon_multiply(result[j], root)
            if j + 1 < degree:
                result[j] ^= result[j + 1]
        root = reed_solomon_multiply(root, 0x02)
    return bytes(result)


def reed_solomon_compute_remainder(data: Sequence[int], divisor: Sequence[int]) -> bytes:
    """Remainder of ``data`` times x^degree divided by the generator ``divisor``."""
    if not 1 <= len(divisor) <= REED_SOLOMON_DEGREE_MAX:
        raise ValueError("divisor degree out of range")
    result = [0] * len(divisor)
    for byte in data:
        factor = byte ^ result.pop(0)
        result.append(0)
        for j, coef in enumerate(divisor):
            result[j] ^= reed_solomon_multiply(coef, factor)
    return bytes(result)


def add_ecc_and_interleave(data: Sequence[int], version: int, ecl: Ecc) -> bytes:
    """Split data codewords into blocks, append ECC to each and interleave them."""
    ecl = Ecc(ecl)
    data_len = get_num_data_codewords(version, ecl)
    if len(data) != data_len:
        raise ValueError(f"expected {data_len} data codewords, got {len(data)}")
    num_blocks = NUM_ERROR_CORRECTION_BLOCKS[ecl][version]
    block_ecc_len = ECC_CODEWORDS_PER_BLOCK[ecl][version]
    raw_codewords = get_num_raw_data_modules(version) // 8
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_len = raw_codewords // num_blocks
    short_data_len = short_block_len - block_ecc_len

    divisor = reed_solomon_compute_divisor(block_ecc_len)
    blocks: list[list[int]] = []
    start = 0
    for i in range(num_blocks):
        end = start + short_data_len + (0 if i < num_short_blocks else 1)
        block = list(data[start:end])
        start = end
        ecc = reed_solomon_compute_remainder(block, divisor)
        if i < num_short_blocks:
            block.append(0)  # placeholder, skipped when interleaving
        blocks.append(block + list(ecc))

    result = bytearray()
    for i in range(len(blocks[0])):
        for j, block in enumerate(blocks):
            if i != short_data_len or j >= num_short_blocks:
                result.append(block[i])
    return bytes(result)