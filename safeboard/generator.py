"""Public entry point: place mines so the board can be solved from the first click."""

import logging
import random
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from .board import Board
from .config import MAX_GENERATION_ATTEMPTS
from .errors import InvalidArgumentError
from .placement import place_mines
from .repair import BoardRepairer
from .solver import solve

logger = logging.getLogger(__name__)


class SolvableBoardGenerator:
    """
    Place-test-repair loop over fresh random layouts.

    Every attempt scatters the mines again, checks the layout with the
    deductive solver and, when deduction stalls, hands it to BoardRepairer.
    The first attempt that ends solvable wins; after max_attempts the last
    layout is left on the board and generate() reports failure.
    """

    def __init__(
        self,
        board: Board,
        mine_count: int,
        rng: Optional[random.Random] = None,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
    ) -> None:
        self.board = board
        self.mine_count = mine_count
        self.rng = rng
        self.max_attempts = max_attempts

        # Metrics
        self.attempts_count: int = 0
        self.repairs_count: int = 0
        self.repair_iterations: int = 0
        self.swaps_accepted: int = 0
        self.solved_by_repair: bool = False
        self.last_unsolved_count: Union[int, float] = float("inf")

    def _validate_safe_zone(self, safe_zone: Sequence[Tuple[int, int]]) -> None:
        if not safe_zone:
            raise InvalidArgumentError("safe_zone must not be empty.")
        for x, y in safe_zone:
            if not self.board.is_valid_cell(x, y):
                raise InvalidArgumentError(f"Safe cell ({x}, {y}) is outside the board.")

    def generate(self, safe_zone: Sequence[Tuple[int, int]]) -> bool:
        """
        Fill the board with mine_count mines, none inside safe_zone.

        Returns:
            True if the resulting board is fully solvable by deduction from
            the safe zone, False if every attempt failed.

        Raises:
            InvalidArgumentError: If safe_zone is empty or leaves the board.
            ConfigurationError: If the mines do not fit outside safe_zone.
        """
        self._validate_safe_zone(safe_zone)
        safe_zone_set = frozenset(safe_zone)

        for attempt in range(1, self.max_attempts + 1):
            self.attempts_count = attempt
            place_mines(self.board, safe_zone_set, self.mine_count, rng=self.rng)

            result = solve(self.board, safe_zone)
            self.last_unsolved_count = result.unsolved_count
            if result.unsolved_count == 0:
                logger.info("Generated solvable board in %d attempt(s).", attempt)
                return True

            logger.debug(
                "Attempt %d: %s safe cells unsolved, repairing.",
                attempt,
                result.unsolved_count,
            )
            repairer = BoardRepairer(self.board, safe_zone, safe_zone_set, rng=self.rng)
            repaired = repairer.run()

            self.repairs_count += 1
            self.repair_iterations += repairer.iterations
            self.swaps_accepted += repairer.swaps_accepted
            self.last_unsolved_count = repairer.unsolved_count

            if repaired:
                self.solved_by_repair = True
                logger.info(
                    "Generated solvable board in %d attempt(s) after repair.", attempt
                )
                return True

        logger.warning(
            "No solvable board after %d attempts; keeping the last layout "
            "(%s safe cells need guessing).",
            self.max_attempts,
            self.last_unsolved_count,
        )
        return False

    def metrics(self) -> Dict[str, Any]:
        return {
            "attempts_count": self.attempts_count,
            "repairs_count": self.repairs_count,
            "repair_iterations": self.repair_iterations,
            "swaps_accepted": self.swaps_accepted,
            "solved_by_repair": self.solved_by_repair,
            "last_unsolved_count": self.last_unsolved_count,
        }


def generate_solvable_board(
    board: Board,
    safe_zone: Sequence[Tuple[int, int]],
    mine_count: int,
    rng: Optional[random.Random] = None,
) -> bool:
    """
    Place mine_count mines on board so it is solvable from safe_zone.

    The board is mutated in place whatever the outcome; on False it holds
    the last (possibly guess-requiring) layout with the requested mine count.
    """
    return SolvableBoardGenerator(board, mine_count, rng=rng).generate(safe_zone)
