"""Hill-climbing repair that relocates blocking mines away from the opening."""

import logging
import random
from typing import AbstractSet, FrozenSet, List, Optional, Sequence, Tuple, Union

from .board import Board
from .config import REPAIR_ITERATION_FACTOR, REPAIR_SAFE_DISTANCE
from .placement import move_mine
from .solver import anchor_cell, solve
from .utils import manhattan_distance

logger = logging.getLogger(__name__)


class BoardRepairer:
    """
    Greedy local search over single-mine moves.

    Each iteration moves one mine touching the deduced region to a random
    empty cell far from the first click, re-runs the solver, and keeps the
    move only if the number of unsolved safe cells strictly drops.
    """

    def __init__(
        self,
        board: Board,
        safe_zone: Sequence[Tuple[int, int]],
        safe_zone_set: Optional[AbstractSet[Tuple[int, int]]] = None,
        rng: Optional[random.Random] = None,
        max_iterations: Optional[int] = None,
        safe_distance: int = REPAIR_SAFE_DISTANCE,
    ) -> None:
        """
        Args:
            board: Board to repair in place.
            safe_zone: Protected cells; its middle element is the first click.
            safe_zone_set: Set view of safe_zone (built when omitted).
            rng: Random source; the module-level generator when omitted.
            max_iterations: Swap budget, REPAIR_ITERATION_FACTOR x board area by default.
            safe_distance: Relocated mines land strictly farther than this
                (Manhattan) from the first click.
        """
        self.board = board
        self.safe_zone = safe_zone
        self.safe_zone_set = (
            safe_zone_set if safe_zone_set is not None else frozenset(safe_zone)
        )
        self.rng = rng
        self.anchor = anchor_cell(safe_zone)
        self.max_iterations = (
            max_iterations
            if max_iterations is not None
            else REPAIR_ITERATION_FACTOR * board.total_cells
        )
        self.safe_distance = safe_distance

        self.unsolved_count: Union[int, float] = float("inf")
        self.revealed: FrozenSet[int] = frozenset()

        # Metrics
        self.iterations: int = 0
        self.swaps_accepted: int = 0
        self.swaps_rejected: int = 0
        self.unsolved_history: List[Union[int, float]] = []

    def _choice(self, candidates: List[Tuple[int, int]]) -> Tuple[int, int]:
        if self.rng is not None:
            return self.rng.choice(candidates)
        return random.choice(candidates)

    def mine_candidates(self) -> List[Tuple[int, int]]:
        """Mines outside the safe zone that touch a revealed cell."""
        board = self.board
        candidates: List[Tuple[int, int]] = []
        for x, y in board.iter_coords():
            if not board.cells[y][x].is_mine or (x, y) in self.safe_zone_set:
                continue
            if any(board.key(nx, ny) in self.revealed for nx, ny in board.neighbors(x, y)):
                candidates.append((x, y))
        return candidates

    def empty_candidates(self) -> List[Tuple[int, int]]:
        """Safe cells outside the safe zone and far enough from the first click."""
        board = self.board
        return [
            (x, y)
            for x, y in board.iter_coords()
            if not board.cells[y][x].is_mine
            and (x, y) not in self.safe_zone_set
            and manhattan_distance((x, y), self.anchor) > self.safe_distance
        ]

    def step(self) -> bool:
        """
        Try one mine move.

        Returns:
            False if no move is possible (no candidates), True otherwise.
        """
        mines = self.mine_candidates()
        if not mines:
            return False
        source = self._choice(mines)

        targets = self.empty_candidates()
        if not targets:
            return False
        target = self._choice(targets)

        move_mine(self.board, source, target)
        result = solve(self.board, self.safe_zone)

        if result.unsolved_count < self.unsolved_count:
            self.unsolved_count = result.unsolved_count
            self.revealed = result.revealed
            self.swaps_accepted += 1
            self.unsolved_history.append(result.unsolved_count)
        else:
            move_mine(self.board, target, source)
            self.swaps_rejected += 1
        return True

    def run(self) -> bool:
        """Repair the board; return True iff it ends solvable without guessing."""
        baseline = solve(self.board, self.safe_zone)
        self.unsolved_count = baseline.unsolved_count
        self.revealed = baseline.revealed
        self.unsolved_history.append(baseline.unsolved_count)

        while self.unsolved_count != 0 and self.iterations < self.max_iterations:
            self.iterations += 1
            if not self.step():
                logger.debug("Repair stalled: no movable mine or free target cell.")
                break

        logger.debug(
            "Repair finished after %d iterations: unsolved=%s accepted=%d rejected=%d",
            self.iterations,
            self.unsolved_count,
            self.swaps_accepted,
            self.swaps_rejected,
        )
        return self.unsolved_count == 0


def repair(
    board: Board,
    safe_zone: Sequence[Tuple[int, int]],
    safe_zone_set: Optional[AbstractSet[Tuple[int, int]]] = None,
    rng: Optional[random.Random] = None,
) -> bool:
    """Run BoardRepairer on board in place; return True iff it became solvable."""
    return BoardRepairer(board, safe_zone, safe_zone_set, rng=rng).run()
