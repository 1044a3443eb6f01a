"""Grid geometry helpers shared by placement, the solver and the repair engine."""

from functools import lru_cache
from typing import Dict, List, Tuple


def is_valid_cell(x: int, y: int, columns: int, rows: int) -> bool:
    """Return True if (x, y) lies on a board of the given size."""
    return 0 <= x < columns and 0 <= y < rows


def _clipped_block(x: int, y: int, columns: int, rows: int) -> List[Tuple[int, int]]:
    """The 3x3 block centered on (x, y), row by row, without off-board cells."""
    return [
        (x + dx, y + dy)
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
        if is_valid_cell(x + dx, y + dy, columns, rows)
    ]


@lru_cache(maxsize=None)
def get_neighborhoods(
    columns: int, rows: int
) -> Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]]:
    """
    Map every cell of a columns x rows board to its 8-connected neighbors.

    One table is built per board size and shared by every Board of that
    size, so callers must treat it as read-only. Neighbors come in the
    same row-by-row order as build_safe_zone().

    Raises:
        ValueError: If columns or rows is non-positive.
    """
    if columns <= 0 or rows <= 0:
        raise ValueError("columns and rows must be positive.")

    return {
        (x, y): tuple(c for c in _clipped_block(x, y, columns, rows) if c != (x, y))
        for y in range(rows)
        for x in range(columns)
    }


def cell_key(x: int, y: int, columns: int) -> int:
    """Encode (x, y) as a single integer usable in sets and dict keys."""
    return y * columns + x


def key_to_cell(key: int, columns: int) -> Tuple[int, int]:
    """Inverse of cell_key()."""
    y, x = divmod(key, columns)
    return x, y


def manhattan_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def build_safe_zone(
    x: int, y: int, columns: int, rows: int
) -> List[Tuple[int, int]]:
    """
    Return the 3x3 block centered on a first click, clipped to the board.

    Cells are listed row by row, so for an interior click the clicked cell
    is the middle element of the list.
    """
    return _clipped_block(x, y, columns, rows)
