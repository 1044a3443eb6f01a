"""Minesweeper game loop that generates a solvable board on the first click."""

import random
from typing import Any, Dict, FrozenSet, List, Optional, Set, Tuple

from .board import Board
from .config import GameConfig
from .errors import InvalidArgumentError
from .generator import SolvableBoardGenerator
from .placement import place_mines
from .utils import build_safe_zone


class Minesweeper:
    """Minesweeper game with a 3x3 safe first click and optional no-guess generation."""

    def __init__(
        self,
        config: GameConfig,
        safe_mode: bool = True,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize a game; mines are placed on the first reveal.

        Args:
            config: Board dimensions and mine count.
            safe_mode: If True, the first reveal runs the solvable-board
                generator; otherwise mines are scattered at random outside
                the safe zone.
            rng: Random source; the module-level generator when omitted.
        """
        self.config: GameConfig = config
        self.safe_mode: bool = safe_mode
        self.rng: Optional[random.Random] = rng

        self.board: Board = Board(config.rows, config.columns)
        self.first_move: bool = True
        self.game_over: bool = False
        self.won: bool = False
        self.cells_revealed: int = 0

        # Outcome of the last generation (None until the first reveal)
        self.generated_solvable: Optional[bool] = None
        self.generation_metrics: Dict[str, Any] = {}

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def columns(self) -> int:
        return self.config.columns

    @property
    def safe_cells_count(self) -> int:
        return self.config.total_cells - self.config.mine_count

    @property
    def flags_count(self) -> int:
        return sum(1 for row in self.board.cells for cell in row if cell.is_flagged)

    @property
    def remaining_mines(self) -> int:
        """Mine counter shown to the player: mines minus placed flags."""
        return self.config.mine_count - self.flags_count

    def _check_coords(self, x: int, y: int) -> None:
        if not self.board.is_valid_cell(x, y):
            raise InvalidArgumentError("Cell coordinates are outside the board.")

    def place_mines(self, first_x: int, first_y: int) -> None:
        """Lay out the mines around a first click at (first_x, first_y)."""
        safe_zone = build_safe_zone(first_x, first_y, self.columns, self.rows)

        if self.safe_mode:
            generator = SolvableBoardGenerator(
                self.board, self.config.mine_count, rng=self.rng
            )
            self.generated_solvable = generator.generate(safe_zone)
            self.generation_metrics = generator.metrics()
        else:
            place_mines(
                self.board, frozenset(safe_zone), self.config.mine_count, rng=self.rng
            )
            self.generated_solvable = None
            self.generation_metrics = {}

        # Placement only owns the mine layout; player state is reset here.
        self.board.clear_player_state()
        self.first_move = False

    def flood_fill(self, x: int, y: int) -> List[Tuple[int, int, int]]:
        """
        Reveal a connected region starting at (x, y) using Minesweeper flood fill rules.

        Flagged cells are never opened.

        Returns:
            A list of newly revealed cells as (x, y, adjacent_mines).
        """
        stack: List[Tuple[int, int]] = [(x, y)]
        visited: Set[Tuple[int, int]] = {(x, y)}
        revealed_cells: List[Tuple[int, int, int]] = []

        while stack:
            cx, cy = stack.pop()
            cell = self.board.cells[cy][cx]
            if cell.is_revealed or cell.is_flagged:
                continue

            cell.is_revealed = True
            self.cells_revealed += 1
            adjacent = cell.adjacent_mines or 0
            revealed_cells.append((cx, cy, adjacent))

            if adjacent == 0:
                for nx, ny in self.board.neighbors(cx, cy):
                    if (nx, ny) in visited:
                        continue
                    visited.add((nx, ny))
                    stack.append((nx, ny))

        return revealed_cells

    def _end_game(self, won: bool) -> None:
        self.game_over = True
        self.won = won
        if won:
            # Winning flags every mine left unmarked
            for x, y in self.board.mine_positions():
                self.board.cells[y][x].is_flagged = True

    def reveal(self, x: int, y: int) -> Tuple[int, Dict[str, object]]:
        """
        Reveal a single cell and return a status code plus payload.

        Returns:
            Tuple of (status, payload) where status is:
                - -1: Mine hit (loss)
                - 0: Non-terminal reveal (or no-op)
                - 1: Win (all safe cells revealed)

            Payload contains:
                - For status 0 or 1: {"revealed_cells": List[(x, y, adjacent_mines)]}
                - For status -1: {"revealed_cells_count": int, "all_mines": FrozenSet}

        Raises:
            InvalidArgumentError: If coordinates are out of bounds.
        """
        self._check_coords(x, y)

        if self.game_over:
            return 0, {}

        cell = self.board.cells[y][x]
        if cell.is_revealed or cell.is_flagged:
            return 0, {}

        if self.first_move:
            self.place_mines(x, y)

        if cell.is_mine:
            cell.is_revealed = True
            self._end_game(won=False)
            all_mines: FrozenSet[Tuple[int, int]] = frozenset(self.board.mine_positions())
            return -1, {
                "revealed_cells_count": self.cells_revealed,
                "all_mines": all_mines,
            }

        revealed_cells = self.flood_fill(x, y)

        if self.cells_revealed == self.safe_cells_count:
            self._end_game(won=True)
            return 1, {"revealed_cells": revealed_cells}

        return 0, {"revealed_cells": revealed_cells}

    def toggle_flag(self, x: int, y: int) -> bool:
        """Toggle a flag on an unrevealed cell; return the new flag state."""
        self._check_coords(x, y)
        cell = self.board.cells[y][x]
        if self.game_over or cell.is_revealed:
            return cell.is_flagged
        cell.is_flagged = not cell.is_flagged
        return cell.is_flagged

    def chord(self, x: int, y: int) -> Tuple[int, Dict[str, object]]:
        """
        Reveal every unflagged neighbor of a revealed number whose flags match it.

        Returns:
            The same (status, payload) contract as reveal(); revealed cells
            of all opened neighbors are merged.
        """
        self._check_coords(x, y)
        cell = self.board.cells[y][x]
        if self.game_over or not cell.is_revealed or not cell.adjacent_mines:
            return 0, {}

        neighbors = self.board.neighbors(x, y)
        flagged = sum(1 for nx, ny in neighbors if self.board.cells[ny][nx].is_flagged)
        if flagged != cell.adjacent_mines:
            return 0, {}

        revealed_cells: List[Tuple[int, int, int]] = []
        for nx, ny in neighbors:
            neighbor = self.board.cells[ny][nx]
            if neighbor.is_flagged or neighbor.is_revealed:
                continue
            status, payload = self.reveal(nx, ny)
            if status == -1:
                return status, payload
            revealed_cells.extend(payload.get("revealed_cells", []))  # type: ignore[arg-type]
            if status == 1:
                return status, {"revealed_cells": revealed_cells}

        return 0, {"revealed_cells": revealed_cells}

    def auto_flag(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Flag all unrevealed neighbors of a revealed number when they must all be mines.

        Returns:
            The newly flagged cells.
        """
        self._check_coords(x, y)
        cell = self.board.cells[y][x]
        if self.game_over or not cell.is_revealed or not cell.adjacent_mines:
            return []

        flagged = 0
        hidden: List[Tuple[int, int]] = []
        for nx, ny in self.board.neighbors(x, y):
            neighbor = self.board.cells[ny][nx]
            if neighbor.is_revealed:
                continue
            if neighbor.is_flagged:
                flagged += 1
            else:
                hidden.append((nx, ny))

        if not hidden or cell.adjacent_mines != flagged + len(hidden):
            return []

        for nx, ny in hidden:
            self.board.cells[ny][nx].is_flagged = True
        return hidden

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _m(self, s: str) -> str:
        """Wrap string in mine color (red)."""
        return f"{self._ANSI_MINE}{s}{self._ANSI_RESET}"

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show mines and all underlying values.
            color: If False, emit plain text without ANSI escapes.

        Returns:
            A formatted multi-line string with coordinate labels and the board grid.
        """
        c = self._c if color else str
        m = self._m if color else str

        def cell_str(x: int, y: int) -> str:
            cell = self.board.cells[y][x]
            if reveal_all or cell.is_revealed:
                if cell.is_mine:
                    return m("M")
                return str(cell.adjacent_mines)
            if cell.is_flagged:
                return "F"
            return "."

        header_cells = " ".join(f"{x:2d}" for x in range(self.columns))
        out = [c("   ") + c(header_cells)]
        out.append(c("   " + "-" * (3 * self.columns - 1)))

        for y in range(self.rows):
            row_cells = " ".join(f" {cell_str(x, y)}" for x in range(self.columns))
            out.append(c(f"{y:2d} ") + c("|") + row_cells)

        return "\n".join(out)


def play_cli(game: Minesweeper) -> None:
    """
    Run a simple terminal UI for playing Minesweeper.

    Commands: "x y" reveals, "f x y" toggles a flag, "c x y" chords.
    """
    print("Minesweeper CLI (enter: x y | f x y | c x y). Coordinates are 0-based. Type 'q' to quit.\n")
    print(game.format_board(reveal_all=False))

    while True:
        s = input("\nMove: ").strip()
        if s.lower() in {"q", "quit", "exit"}:
            print("Quit.")
            return

        parts = s.replace(",", " ").split()
        action = "r"
        if parts and parts[0].lower() in {"f", "c"}:
            action = parts.pop(0).lower()

        if len(parts) != 2:
            print("Invalid input. Example: 3 5")
            continue

        try:
            x = int(parts[0])
            y = int(parts[1])
        except ValueError:
            print("Invalid input. Coordinates must be integers.")
            continue

        was_first_move = game.first_move
        try:
            if action == "f":
                game.toggle_flag(x, y)
                status = 0
            elif action == "c":
                status, _ = game.chord(x, y)
            else:
                status, _ = game.reveal(x, y)
        except InvalidArgumentError as e:
            print(f"Invalid move: {e}")
            continue

        if was_first_move and game.generated_solvable is False:
            print("(No guess-free layout found; this board may need a guess.)")

        print()
        print(game.format_board(reveal_all=False))
        print(f"Mines left: {game.remaining_mines}")

        if status == -1:
            print("\nYou hit a mine. You lost.")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return

        if status == 1:
            print("\nYou revealed all safe cells. You won!")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return
