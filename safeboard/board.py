"""Board data model: a rows x columns grid of cells addressed as (x, y)."""

from typing import Dict, Iterator, List, Optional, Tuple

from .utils import cell_key, get_neighborhoods, is_valid_cell, key_to_cell


class Cell:
    """One grid location.

    adjacent_mines is None exactly when is_mine is True.
    """

    __slots__ = ("is_mine", "is_revealed", "is_flagged", "adjacent_mines")

    def __init__(
        self,
        is_mine: bool = False,
        is_revealed: bool = False,
        is_flagged: bool = False,
        adjacent_mines: Optional[int] = None,
    ) -> None:
        if adjacent_mines is None and not is_mine:
            adjacent_mines = 0
        self.is_mine: bool = is_mine
        self.is_revealed: bool = is_revealed
        self.is_flagged: bool = is_flagged
        self.adjacent_mines: Optional[int] = adjacent_mines

    def copy(self) -> "Cell":
        return Cell(self.is_mine, self.is_revealed, self.is_flagged, self.adjacent_mines)

    def __repr__(self) -> str:
        return (
            f"Cell(is_mine={self.is_mine}, is_revealed={self.is_revealed}, "
            f"is_flagged={self.is_flagged}, adjacent_mines={self.adjacent_mines})"
        )


class Board:
    """Rectangular grid of cells; cells[y][x] with 0 <= x < columns, 0 <= y < rows."""

    def __init__(self, rows: int, columns: int) -> None:
        """
        Allocate an empty board (no mines, all counts zero).

        Raises:
            ValueError: If rows or columns is non-positive.
        """
        if rows <= 0 or columns <= 0:
            raise ValueError("rows and columns must be positive.")

        self.rows: int = rows
        self.columns: int = columns
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(columns)] for _ in range(rows)
        ]
        self._neighborhoods: Dict[
            Tuple[int, int], Tuple[Tuple[int, int], ...]
        ] = get_neighborhoods(columns, rows)

    @classmethod
    def from_mines(
        cls, rows: int, columns: int, mines: "List[Tuple[int, int]]"
    ) -> "Board":
        """Build a board with mines at the given (x, y) positions and exact counts."""
        board = cls(rows, columns)
        for x, y in mines:
            board.cells[y][x].is_mine = True
        board.recount_all()
        return board

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns

    def is_valid_cell(self, x: int, y: int) -> bool:
        return is_valid_cell(x, y, self.columns, self.rows)

    def neighbors(self, x: int, y: int) -> Tuple[Tuple[int, int], ...]:
        """Return precomputed neighbor coordinates for a cell."""
        return self._neighborhoods[(x, y)]

    def key(self, x: int, y: int) -> int:
        return cell_key(x, y, self.columns)

    def coords(self, key: int) -> Tuple[int, int]:
        return key_to_cell(key, self.columns)

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def iter_coords(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.rows):
            for x in range(self.columns):
                yield x, y

    # -------------------------------------------------------------------------
    # Mine bookkeeping
    # -------------------------------------------------------------------------

    def count_adjacent_mines(self, x: int, y: int) -> int:
        return sum(1 for nx, ny in self.neighbors(x, y) if self.cells[ny][nx].is_mine)

    def recount_cell(self, x: int, y: int) -> None:
        """Recompute adjacent_mines for one cell from the live mine flags."""
        cell = self.cells[y][x]
        cell.adjacent_mines = None if cell.is_mine else self.count_adjacent_mines(x, y)

    def recount_all(self) -> None:
        for x, y in self.iter_coords():
            self.recount_cell(x, y)

    def mine_positions(self) -> List[Tuple[int, int]]:
        return [(x, y) for x, y in self.iter_coords() if self.cells[y][x].is_mine]

    def mines_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.is_mine)

    def clear_player_state(self) -> None:
        """Reset is_revealed / is_flagged on every cell, keeping the mine layout."""
        for row in self.cells:
            for cell in row:
                cell.is_revealed = False
                cell.is_flagged = False

    def clone(self) -> "Board":
        """Return a structural deep copy; the copy shares no Cell objects."""
        other = Board.__new__(Board)
        other.rows = self.rows
        other.columns = self.columns
        other.cells = [[cell.copy() for cell in row] for row in self.cells]
        other._neighborhoods = self._neighborhoods
        return other

    def render(self) -> str:
        """Plain text view of the full layout: '*' mine, '.' zero, digits otherwise."""
        lines: List[str] = []
        for row in self.cells:
            chars: List[str] = []
            for cell in row:
                if cell.is_mine:
                    chars.append("*")
                elif cell.adjacent_mines == 0:
                    chars.append(".")
                else:
                    chars.append(str(cell.adjacent_mines))
            lines.append("".join(chars))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, columns={self.columns}, mines={self.mines_count()})"
