"""
Solvable Minesweeper board generator

Places mines so that a board can be cleared from the first click by pure
deduction, without 50/50 guesses:
- Mine placement: uniform random layout outside a protected safe zone
- Deductive solver: flood fill plus forced-mine / forced-clear propagation
- Repair engine: hill-climbing that moves blocking mines away from the opening
- Generator: bounded place-test-repair retries
"""

from .board import Board, Cell
from .config import DIFFICULTIES, GameConfig
from .errors import ConfigurationError, InvalidArgumentError
from .game import Minesweeper, play_cli
from .generator import SolvableBoardGenerator, generate_solvable_board
from .placement import place_mines, refresh_neighborhood, update_adjacent_mine_counts
from .repair import BoardRepairer, repair
from .solver import UNSOLVABLE, DeductiveSolver, SolveResult, solve
from .utils import build_safe_zone, cell_key, get_neighborhoods, is_valid_cell
from .analysis import (
    find_fifty_fifty_patterns,
    format_solver_view,
    run_generator_single_test,
    run_generator_many_tests,
    run_generator_difficulty_analysis,
)

__version__ = "1.0.0"

__all__ = [
    # Data model
    "Board",
    "Cell",
    "GameConfig",
    "DIFFICULTIES",
    # Errors
    "ConfigurationError",
    "InvalidArgumentError",
    # Generation core
    "place_mines",
    "update_adjacent_mine_counts",
    "refresh_neighborhood",
    "DeductiveSolver",
    "SolveResult",
    "UNSOLVABLE",
    "solve",
    "BoardRepairer",
    "repair",
    "SolvableBoardGenerator",
    "generate_solvable_board",
    # Geometry
    "build_safe_zone",
    "cell_key",
    "get_neighborhoods",
    "is_valid_cell",
    # Game / CLI
    "Minesweeper",
    "play_cli",
    # Analysis functions
    "find_fifty_fifty_patterns",
    "format_solver_view",
    "run_generator_single_test",
    "run_generator_many_tests",
    "run_generator_difficulty_analysis",
]
