import pytest

from safeboard.board import Board, Cell


def test_new_board_is_empty():
    board = Board(rows=3, columns=4)
    assert board.total_cells == 12
    assert len(board.cells) == 3
    assert len(board.cells[0]) == 4
    assert board.mines_count() == 0
    assert all(cell.adjacent_mines == 0 for row in board.cells for cell in row)


def test_board_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        Board(rows=0, columns=3)


def test_from_mines_counts():
    board = Board.from_mines(3, 3, [(0, 0), (2, 2)])
    assert board.cell(0, 0).adjacent_mines is None
    assert board.cell(2, 2).adjacent_mines is None
    assert board.cell(1, 1).adjacent_mines == 2
    assert board.cell(2, 0).adjacent_mines == 0
    assert board.cell(1, 0).adjacent_mines == 1
    assert board.mine_positions() == [(0, 0), (2, 2)]


def test_clone_is_independent():
    board = Board.from_mines(3, 3, [(1, 1)])
    copy = board.clone()
    copy.cells[1][1].is_mine = False
    copy.cells[0][0].is_revealed = True
    copy.recount_all()

    assert board.cells[1][1].is_mine
    assert not board.cells[0][0].is_revealed
    assert board.cells[0][0].adjacent_mines == 1
    assert copy.cells[0][0].adjacent_mines == 0


def test_clear_player_state_keeps_mines():
    board = Board.from_mines(2, 2, [(1, 1)])
    board.cells[0][0].is_revealed = True
    board.cells[1][1].is_flagged = True
    board.clear_player_state()
    assert not board.cells[0][0].is_revealed
    assert not board.cells[1][1].is_flagged
    assert board.cells[1][1].is_mine


def test_key_round_trip():
    board = Board(rows=4, columns=6)
    assert board.coords(board.key(5, 3)) == (5, 3)


def test_render():
    board = Board.from_mines(2, 3, [(2, 0)])
    assert board.render() == ".1*\n.11"


def test_cell_count_defaults_follow_mine_flag():
    assert Cell().adjacent_mines == 0
    assert Cell(is_mine=True).adjacent_mines is None
    assert Cell(is_mine=False, adjacent_mines=None).adjacent_mines == 0


def test_cell_copy():
    cell = Cell(is_mine=True, adjacent_mines=None)
    other = cell.copy()
    other.is_flagged = True
    assert not cell.is_flagged
    assert other.is_mine and other.adjacent_mines is None
