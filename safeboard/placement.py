"""Random mine placement outside a protected safe zone."""

import random
from typing import AbstractSet, List, Optional, Tuple

from .board import Board
from .errors import ConfigurationError


def place_mines(
    board: Board,
    safe_zone_set: AbstractSet[Tuple[int, int]],
    mine_count: int,
    rng: Optional[random.Random] = None,
) -> None:
    """
    Reset the board's mine layout and scatter mine_count mines outside the safe zone.

    Only is_mine and adjacent_mines are touched; is_revealed / is_flagged
    belong to the caller.

    Args:
        board: Board to mutate in place.
        safe_zone_set: Cells that must stay mine-free.
        mine_count: Number of mines to place.
        rng: Random source; the module-level generator when omitted.

    Raises:
        ConfigurationError: If mine_count does not fit outside the safe zone.
    """
    protected = sum(1 for x, y in safe_zone_set if board.is_valid_cell(x, y))
    if mine_count <= 0:
        raise ConfigurationError("mine_count must be positive.")
    if mine_count > board.total_cells - protected:
        raise ConfigurationError(
            f"Cannot place {mine_count} mines on {board.total_cells} cells "
            f"with {protected} protected."
        )

    for row in board.cells:
        for cell in row:
            cell.is_mine = False
            cell.adjacent_mines = 0

    pool: List[Tuple[int, int]] = [
        (x, y) for x, y in board.iter_coords() if (x, y) not in safe_zone_set
    ]
    (rng or random).shuffle(pool)

    for mx, my in pool[:mine_count]:
        board.cells[my][mx].is_mine = True

    update_adjacent_mine_counts(board)


def update_adjacent_mine_counts(board: Board) -> None:
    """Populate every non-mine cell with its adjacent mine count; clear it on mines."""
    for row in board.cells:
        for cell in row:
            cell.adjacent_mines = 0

    for x, y in board.mine_positions():
        for nx, ny in board.neighbors(x, y):
            neighbor = board.cells[ny][nx]
            if not neighbor.is_mine:
                neighbor.adjacent_mines = (neighbor.adjacent_mines or 0) + 1

    for row in board.cells:
        for cell in row:
            if cell.is_mine:
                cell.adjacent_mines = None


def refresh_neighborhood(board: Board, x: int, y: int) -> None:
    """Recompute adjacent_mines for (x, y) and its neighbors after a single-mine change."""
    board.recount_cell(x, y)
    for nx, ny in board.neighbors(x, y):
        board.recount_cell(nx, ny)


def move_mine(
    board: Board, source: Tuple[int, int], target: Tuple[int, int]
) -> None:
    """Move the mine at source to the empty cell target and refresh both neighborhoods."""
    sx, sy = source
    tx, ty = target
    board.cells[sy][sx].is_mine = False
    board.cells[ty][tx].is_mine = True
    refresh_neighborhood(board, sx, sy)
    refresh_neighborhood(board, tx, ty)
