"""Deductive solver used to verify that a mine layout needs no guessing."""

import math
from collections import deque
from typing import (
    Deque,
    FrozenSet,
    List,
    NamedTuple,
    Sequence,
    Set,
    Tuple,
    Union,
)

from .board import Board
from .config import SOLVER_ITERATION_FACTOR
from .errors import InvalidArgumentError

# unsolved_count reported when a forced deduction contradicts the real board
UNSOLVABLE = math.inf


class SolveResult(NamedTuple):
    unsolved_count: Union[int, float]
    revealed: FrozenSet[int]
    flagged: FrozenSet[int] = frozenset()

    @property
    def solved(self) -> bool:
        return self.unsolved_count == 0


def anchor_cell(safe_zone: Sequence[Tuple[int, int]]) -> Tuple[int, int]:
    """Return the cell deduction starts from: the middle element of the safe zone."""
    if not safe_zone:
        raise InvalidArgumentError("safe_zone must not be empty.")
    x, y = safe_zone[len(safe_zone) // 2]
    return x, y


class DeductiveSolver:
    """
    Single-constraint Minesweeper solver run against a known layout.

    Starting from the anchor cell of the safe zone it flood-fills the opening
    and then repeatedly applies two rules to revealed numbered cells:

    - forced mines: the unknown neighbors exactly account for the missing mines;
    - forced clears: every mine around the cell is already deduced.

    Each deduction is checked against the real layout. A mismatch means the
    counts cannot have come from the mines and the solve stops with
    UNSOLVABLE. The solver works on a private copy of the board.
    """

    def __init__(self, board: Board, safe_zone: Sequence[Tuple[int, int]]) -> None:
        """
        Args:
            board: Layout to verify. Never mutated.
            safe_zone: Mine-free cells around the first click; must be non-empty
                and lie on the board.

        Raises:
            InvalidArgumentError: If safe_zone is empty or out of bounds.
        """
        self.anchor: Tuple[int, int] = anchor_cell(safe_zone)
        if not board.is_valid_cell(*self.anchor):
            raise InvalidArgumentError(f"Anchor cell {self.anchor} is outside the board.")

        self.board: Board = board.clone()
        self.max_iterations: int = SOLVER_ITERATION_FACTOR * board.total_cells

        self.revealed: Set[int] = set()
        # Deduced mines; unrelated to the cells' player-facing is_flagged
        self.flagged: Set[int] = set()

        # Revealed numbered cells awaiting (re-)examination, FIFO without duplicates
        self.frontier_queue: Deque[int] = deque()
        self.frontier_set: Set[int] = set()

        # Metrics
        self.iterations: int = 0
        self.forced_mines_count: int = 0
        self.forced_clears_count: int = 0
        self.contradiction: bool = False

    # -------------------------------------------------------------------------
    # Frontier helpers
    # -------------------------------------------------------------------------

    def _is_numbered(self, x: int, y: int) -> bool:
        adjacent = self.board.cells[y][x].adjacent_mines
        return adjacent is not None and adjacent > 0

    def _enqueue(self, x: int, y: int) -> None:
        key = self.board.key(x, y)
        if key in self.frontier_set:
            return
        self.frontier_queue.append(key)
        self.frontier_set.add(key)

    def _enqueue_revealed_neighbors(self, x: int, y: int) -> None:
        """Queue the revealed numbered neighbors of (x, y)."""
        for nx, ny in self.board.neighbors(x, y):
            if self.board.key(nx, ny) in self.revealed and self._is_numbered(nx, ny):
                self._enqueue(nx, ny)

    # -------------------------------------------------------------------------
    # Reveal
    # -------------------------------------------------------------------------

    def flood_fill(self, x: int, y: int) -> Union[List[Tuple[int, int]], None]:
        """
        Reveal (x, y), a cell deduced to be safe, and the zero region behind it.

        Returns:
            The newly revealed cells, or None if a cell that must be safe
            holds a mine.
        """
        start = self.board.key(x, y)
        if start in self.revealed:
            return []

        stack: List[Tuple[int, int]] = [(x, y)]
        visited: Set[int] = {start}
        newly_revealed: List[Tuple[int, int]] = []

        while stack:
            cx, cy = stack.pop()
            cell = self.board.cells[cy][cx]
            if cell.is_mine:
                return None

            self.revealed.add(self.board.key(cx, cy))
            newly_revealed.append((cx, cy))

            if cell.adjacent_mines != 0:
                continue

            for nx, ny in self.board.neighbors(cx, cy):
                nkey = self.board.key(nx, ny)
                if nkey in visited or nkey in self.revealed:
                    continue
                visited.add(nkey)
                stack.append((nx, ny))

        return newly_revealed

    # -------------------------------------------------------------------------
    # Deduction
    # -------------------------------------------------------------------------

    def examine(self, x: int, y: int) -> bool:
        """
        Apply the forced-mine / forced-clear rules to one revealed numbered cell.

        Returns:
            False on contradiction, True otherwise.
        """
        flagged_count = 0
        revealed_neighbors: List[Tuple[int, int]] = []
        unknown: List[Tuple[int, int]] = []

        for nx, ny in self.board.neighbors(x, y):
            nkey = self.board.key(nx, ny)
            if nkey in self.flagged:
                flagged_count += 1
            elif nkey in self.revealed:
                revealed_neighbors.append((nx, ny))
            else:
                unknown.append((nx, ny))

        adjacent = self.board.cells[y][x].adjacent_mines or 0
        missing = adjacent - flagged_count
        changed = False

        if missing > 0 and missing == len(unknown):
            for nx, ny in unknown:
                if not self.board.cells[ny][nx].is_mine:
                    return False
                self.flagged.add(self.board.key(nx, ny))
                self.forced_mines_count += 1
                changed = True
                self._enqueue_revealed_neighbors(nx, ny)

        elif missing == 0 and unknown:
            for nx, ny in unknown:
                if self.board.key(nx, ny) in self.revealed:
                    continue  # opened by an earlier flood fill in this loop
                newly_revealed = self.flood_fill(nx, ny)
                if newly_revealed is None:
                    return False
                self.forced_clears_count += 1
                changed = True
                for rx, ry in newly_revealed:
                    if self._is_numbered(rx, ry):
                        self._enqueue(rx, ry)
                    self._enqueue_revealed_neighbors(rx, ry)

        if changed:
            for rx, ry in revealed_neighbors:
                if self._is_numbered(rx, ry):
                    self._enqueue(rx, ry)

        return True

    def _unsolved_count(self) -> int:
        return sum(
            1
            for x, y in self.board.iter_coords()
            if not self.board.cells[y][x].is_mine
            and self.board.key(x, y) not in self.revealed
        )

    def _result(self, unsolved_count: Union[int, float]) -> SolveResult:
        return SolveResult(unsolved_count, frozenset(self.revealed), frozenset(self.flagged))

    def run(self) -> SolveResult:
        """
        Deduce as far as possible from the anchor cell.

        Returns:
            SolveResult whose unsolved_count is the number of safe cells left
            unrevealed (0 means solvable without guessing), or UNSOLVABLE on
            contradiction.
        """
        ax, ay = self.anchor
        opening = self.flood_fill(ax, ay)
        if opening is None:
            self.contradiction = True
            return self._result(UNSOLVABLE)

        for x, y in opening:
            if self._is_numbered(x, y):
                self._enqueue(x, y)

        while self.frontier_queue and self.iterations < self.max_iterations:
            self.iterations += 1
            key = self.frontier_queue.popleft()
            self.frontier_set.discard(key)

            x, y = self.board.coords(key)
            if not self.examine(x, y):
                self.contradiction = True
                return self._result(UNSOLVABLE)

        return self._result(self._unsolved_count())


def solve(board: Board, safe_zone: Sequence[Tuple[int, int]]) -> SolveResult:
    """Run the deductive solver on a private copy of board; see DeductiveSolver."""
    return DeductiveSolver(board, safe_zone).run()
