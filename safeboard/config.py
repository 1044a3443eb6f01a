"""Game configuration, difficulty presets and custom-setting validation."""

import math
from typing import Dict, NamedTuple, Optional, Tuple

from .errors import ConfigurationError

# Generator tuning
MAX_GENERATION_ATTEMPTS = 40
REPAIR_SAFE_DISTANCE = 7  # minimum Manhattan distance from the first click for relocated mines
SOLVER_ITERATION_FACTOR = 4
REPAIR_ITERATION_FACTOR = 10

# Custom game limits
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 500
DEFAULT_BOARD_SIZE = 10
MIN_MINES = 1
MAX_MINE_DENSITY = 0.3
SAFE_AREA_SIZE = 9  # 3x3 block around the first click

# name -> (rows, columns, mines)
DIFFICULTIES: Dict[str, Tuple[int, int, int]] = {
    "easy": (9, 9, 10),
    "medium": (16, 16, 40),
    "hard": (16, 30, 99),
}


def max_safe_area(rows: int, columns: int) -> int:
    """Largest first-click safe area on the board: the 3x3 block, clipped."""
    return min(3, rows) * min(3, columns)


class GameConfig:
    """Board dimensions and mine count for one game."""

    def __init__(self, rows: int, columns: int, mine_count: int) -> None:
        """
        Args:
            rows: Number of rows (y extent), must be > 0.
            columns: Number of columns (x extent), must be > 0.
            mine_count: Mines to place, must be > 0 and fit outside the largest
                first-click safe area the board allows.

        Raises:
            ConfigurationError: If any value is out of range.
        """
        if rows <= 0 or columns <= 0:
            raise ConfigurationError("rows and columns must be positive.")
        if mine_count <= 0:
            raise ConfigurationError("mine_count must be positive.")
        max_mines = rows * columns - max_safe_area(rows, columns)
        if mine_count > max_mines:
            raise ConfigurationError(
                f"mine_count must be at most {max_mines} on a {columns}x{rows} board "
                "so the first click stays clear."
            )

        self.rows: int = rows
        self.columns: int = columns
        self.mine_count: int = mine_count

    @classmethod
    def from_difficulty(cls, name: str) -> "GameConfig":
        if name not in DIFFICULTIES:
            raise ConfigurationError(
                f"Unknown difficulty {name!r}; expected one of {sorted(DIFFICULTIES)}."
            )
        rows, columns, mines = DIFFICULTIES[name]
        return cls(rows, columns, mines)

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns

    def difficulty_name(self) -> str:
        """Return the matching preset name, or "custom"."""
        for name, preset in DIFFICULTIES.items():
            if preset == (self.rows, self.columns, self.mine_count):
                return name
        return "custom"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameConfig):
            return NotImplemented
        return (self.rows, self.columns, self.mine_count) == (
            other.rows,
            other.columns,
            other.mine_count,
        )

    def __repr__(self) -> str:
        return (
            f"GameConfig(rows={self.rows}, columns={self.columns}, "
            f"mine_count={self.mine_count})"
        )


class ValidationResult(NamedTuple):
    is_valid: bool
    corrected: Tuple[int, ...]
    error: Optional[str] = None


def _as_int(value: object) -> Optional[int]:
    """Parse a positive whole number from user input, or return None."""
    if isinstance(value, bool):
        return None
    try:
        num = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(num) or num <= 0 or num != int(num):
        return None
    return int(num)


def validate_board_dimensions(columns: object, rows: object) -> ValidationResult:
    """
    Check custom board dimensions and clamp them into the allowed range.

    Returns:
        ValidationResult with corrected == (columns, rows). Unparseable
        values are replaced by DEFAULT_BOARD_SIZE.
    """
    parsed_columns = _as_int(columns)
    parsed_rows = _as_int(rows)
    error = f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}."

    if parsed_columns is None or parsed_rows is None:
        return ValidationResult(
            False,
            (
                DEFAULT_BOARD_SIZE if parsed_columns is None else parsed_columns,
                DEFAULT_BOARD_SIZE if parsed_rows is None else parsed_rows,
            ),
            error,
        )

    corrected_columns = max(MIN_BOARD_SIZE, min(MAX_BOARD_SIZE, parsed_columns))
    corrected_rows = max(MIN_BOARD_SIZE, min(MAX_BOARD_SIZE, parsed_rows))
    is_valid = (corrected_columns, corrected_rows) == (parsed_columns, parsed_rows)
    return ValidationResult(
        is_valid, (corrected_columns, corrected_rows), None if is_valid else error
    )


def max_allowed_mines(total_cells: int) -> int:
    """Upper mine limit for a custom board: density cap and room for the safe area."""
    return max(
        MIN_MINES,
        min(math.floor(total_cells * MAX_MINE_DENSITY), total_cells - SAFE_AREA_SIZE),
    )


def validate_mine_count(mine_count: object, total_cells: int) -> ValidationResult:
    """
    Check a custom mine count against the board size and clamp it.

    Returns:
        ValidationResult with corrected == (mine_count,).
    """
    max_allowed = max_allowed_mines(total_cells)
    parsed = _as_int(mine_count)
    if parsed is None:
        return ValidationResult(
            False,
            (MIN_MINES,),
            f"Mine count must be between {MIN_MINES} and {max_allowed}.",
        )

    corrected = max(MIN_MINES, min(max_allowed, parsed))
    if parsed > max_allowed:
        percent = round(MAX_MINE_DENSITY * 100)
        return ValidationResult(
            False,
            (corrected,),
            f"Too many mines: at most {max_allowed} ({percent}% density).",
        )
    return ValidationResult(corrected == parsed, (corrected,))
