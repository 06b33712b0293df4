"""The module grid: function patterns, codeword placement, masking and scoring."""

from __future__ import annotations

import enum
import itertools
from typing import Callable, Iterator, Sequence

from qrgen.ecc import Ecc
from qrgen.segment import VERSION_MAX, VERSION_MIN

#: A square grid of modules, indexed ``grid[y][x]``; True means dark.
Grid = list[list[bool]]

PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10


class Mask(enum.IntEnum):
    """Mask pattern; AUTO asks the encoder to choose the best one."""

    AUTO = -1
    MASK_0 = 0
    MASK_1 = 1
    MASK_2 = 2
    MASK_3 = 3
    MASK_4 = 4
    MASK_5 = 5
    MASK_6 = 6
    MASK_7 = 7


_MASK_PATTERNS: dict[Mask, Callable[[int, int], bool]] = {
    Mask.MASK_0: lambda x, y: (x + y) % 2 == 0,
    Mask.MASK_1: lambda x, y: y % 2 == 0,
    Mask.MASK_2: lambda x, y: x % 3 == 0,
    Mask.MASK_3: lambda x, y: (x + y) % 3 == 0,
    Mask.MASK_4: lambda x, y: (x // 3 + y // 2) % 2 == 0,
    Mask.MASK_5: lambda x, y: x * y % 2 + x * y % 3 == 0,
    Mask.MASK_6: lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    Mask.MASK_7: lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
}


def _check_version(version: int) -> None:
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version {version} out of range")


def _concrete_mask(mask: int) -> Mask:
    mask = Mask(mask)
    if mask is Mask.AUTO:
        raise ValueError("a concrete mask pattern is required")
    return mask


def get_alignment_pattern_positions(version: int) -> list[int]:
    """Ascending centre coordinates of alignment patterns, used on both axes."""
    _check_version(version)
    if version == 1:
        return []
    num_align = version // 7 + 2
    step = (version * 8 + num_align * 3 + 5) // (num_align * 4 - 4) * 2
    last = version * 4 + 10
    return [6] + [last - step * k for k in reversed(range(num_align - 1))]


def _alignment_centres(version: int) -> Iterator[tuple[int, int]]:
    positions = get_alignment_pattern_positions(version)
    last = len(positions) - 1
    for i, x in enumerate(positions):
        for j, y in enumerate(positions):
            if (i, j) in ((0, 0), (0, last), (last, 0)):
                continue  # these overlap the finder patterns
            yield x, y


def _fill_rectangle(grid: Grid, left: int, top: int, width: int, height: int) -> None:
    for y in range(top, top + height):
        for x in range(left, left + width):
            grid[y][x] = True


def function_module_grid(version: int) -> Grid:
    """A grid for ``version`` with every function module dark and the rest light."""
    _check_version(version)
    size = version * 4 + 17
    grid = [[False] * size for _ in range(size)]
    _fill_rectangle(grid, 6, 0, 1, size)
    _fill_rectangle(grid, 0, 6, size, 1)
    _fill_rectangle(grid, 0, 0, 9, 9)
    _fill_rectangle(grid, size - 8, 0, 8, 9)
    _fill_rectangle(grid, 0, size - 8, 9, 8)
    for x, y in _alignment_centres(version):
        _fill_rectangle(grid, x - 2, y - 2, 5, 5)
    if version >= 7:
        _fill_rectangle(grid, size - 11, 0, 3, 6)
        _fill_rectangle(grid, 0, size - 11, 6, 3)
    return grid


def draw_light_function_modules(grid: Grid, version: int) -> None:
    """Draw the light (and version) parts of the function patterns.

    Requires every function module to be dark already, as produced by
    function_module_grid; format bits are not drawn.
    """
    _check_version(version)
    size = len(grid)
    if size != version * 4 + 17:
        raise ValueError("grid size does not match version")

    for i in range(7, size - 7, 2):
        grid[i][6] = False
        grid[6][i] = False

    for dy in range(-4, 5):
        for dx in range(-4, 5):
            if max(abs(dx), abs(dy)) in (2, 4):
                for cx, cy in ((3, 3), (size - 4, 3), (3, size - 4)):
                    x, y = cx + dx, cy + dy
                    if 0 <= x < size and 0 <= y < size:
                        grid[y][x] = False

    for cx, cy in _alignment_centres(version):
        for dy in range(-1, 2):
            for dx in range(-1, 2):
                grid[cy + dy][cx + dx] = dx == 0 and dy == 0

    if version >= 7:
        rem = version
        for _ in range(12):
            rem = (rem << 1) ^ ((rem >> 11) * 0x1F25)
        bits = version << 12 | rem
        for i in range(6):
            for j in range(3):
                k = size - 11 + j
                dark = bits & 1 != 0
                grid[i][k] = dark
                grid[k][i] = dark
                bits >>= 1


def draw_format_bits(grid: Grid, ecl: Ecc, mask: Mask) -> None:
    """Draw both copies of the format information for ``ecl`` and ``mask``."""
    mask = _concrete_mask(mask)
    data = Ecc(ecl).format_bits << 3 | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * 0x537)
    bits = (data << 10 | rem) ^ 0x5412

    def bit(i: int) -> bool:
        return (bits >> i) & 1 != 0

    for i in range(6):
        grid[i][8] = bit(i)
    grid[7][8] = bit(6)
    grid[8][8] = bit(7)
    grid[8][7] = bit(8)
    for i in range(9, 15):
        grid[8][14 - i] = bit(i)

    size = len(grid)
    for i in range(8):
        grid[8][size - 1 - i] = bit(i)
    for i in range(8, 15):
        grid[size - 15 + i][8] = bit(i)
    grid[size - 8][8] = True


def _zigzag(size: int) -> Iterator[tuple[int, int]]:
    right = size - 1
    while right >= 1:
        if right == 6:
            right = 5
        upward = ((right + 1) & 2) == 0
        for vert in range(size):
            y = size - 1 - vert if upward else vert
            yield right, y
            yield right - 1, y
        right -= 2


def draw_codewords(grid: Grid, data: Sequence[int]) -> None:
    """Place codeword bits into the light modules in zigzag order.

    Function modules must be dark and all others light beforehand.
    Raises ValueError if the data does not fit.
    """
    bits = ((byte >> (7 - k)) & 1 for byte in data for k in range(8))
    remaining = len(data) * 8
    for x, y in _zigzag(len(grid)):
        if remaining and not grid[y][x]:
            grid[y][x] = next(bits) == 1
            remaining -= 1
    if remaining:
        raise ValueError("too many codewords for this grid")


def apply_mask(function_modules: Grid, grid: Grid, mask: Mask) -> None:
    """XOR the non-function modules of ``grid`` with ``mask``; applying twice undoes it."""
    pattern = _MASK_PATTERNS[_concrete_mask(mask)]
    if len(function_modules) != len(grid):
        raise ValueError("grids differ in size")
    for y, (row, fixed) in enumerate(zip(grid, function_modules)):
        for x, is_function in enumerate(fixed):
            if not is_function:
                row[x] ^= pattern(x, y)


def _add_history(run_length: int, history: list[int], size: int) -> None:
    if history[0] == 0:
        run_length += size  # light border before the first run
    history.insert(0, run_length)
    history.pop()


def _count_patterns(history: list[int]) -> int:
    n = history[1]
    core = n > 0 and history[2] == n and history[3] == n * 3 and history[4] == n and history[5] == n
    return (int(core and history[0] >= n * 4 and history[6] >= n)
            + int(core and history[6] >= n * 4 and history[0] >= n))


def _terminate_and_count(run_color: bool, run_length: int, history: list[int], size: int) -> int:
    if run_color:
        _add_history(run_length, history, size)
        run_length = 0
    _add_history(run_length + size, history, size)  # light border after the last run
    return _count_patterns(history)


def _line_penalty(line: Sequence[bool], size: int) -> int:
    result = 0
    run_color = False
    run_length = 0
    history = [0] * 7
    for color in line:
        if color == run_color:
            run_length += 1
            if run_length == 5:
                result += PENALTY_N1
            elif run_length > 5:
                result += 1
        else:
            _add_history(run_length, history, size)
            if not run_color:
                result += _count_patterns(history) * PENALTY_N3
            run_color = color
            run_length = 1
    result += _terminate_and_count(run_color, run_length, history, size) * PENALTY_N3
    return result


def penalty_score(grid: Grid) -> int:
    """Penalty used to pick the mask: lower means a better-looking symbol."""
    size = len(grid)
    result = sum(_line_penalty(line, size) for line in itertools.chain(grid, zip(*grid)))

    for y in range(size - 1):
        for x in range(size - 1):
            color = grid[y][x]
            if color == grid[y][x + 1] == grid[y + 1][x] == grid[y + 1][x + 1]:
                result += PENALTY_N2

    dark = sum(sum(row) for row in grid)
    total = size * size
    k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
    result += k * PENALTY_N4
    return result