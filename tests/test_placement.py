import random

import pytest

from safeboard.board import Board
from safeboard.errors import ConfigurationError
from safeboard.placement import (
    move_mine,
    place_mines,
    refresh_neighborhood,
    update_adjacent_mine_counts,
)
from safeboard.utils import build_safe_zone


def assert_counts_consistent(board):
    for y in range(board.rows):
        for x in range(board.columns):
            cell = board.cells[y][x]
            if cell.is_mine:
                assert cell.adjacent_mines is None
                continue
            expected = 0
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    nx, ny = x + dx, y + dy
                    if (dx or dy) and 0 <= nx < board.columns and 0 <= ny < board.rows:
                        expected += board.cells[ny][nx].is_mine
            assert cell.adjacent_mines == expected, (x, y)


def test_place_mines_count_safety_and_counts():
    board = Board(9, 9)
    safe_zone = set(build_safe_zone(4, 4, 9, 9))
    place_mines(board, safe_zone, 10, rng=random.Random(3))

    assert board.mines_count() == 10
    assert not any(board.cells[y][x].is_mine for x, y in safe_zone)
    assert_counts_consistent(board)


def test_place_mines_resets_previous_layout():
    board = Board(6, 6)
    rng = random.Random(11)
    place_mines(board, {(0, 0)}, 20, rng=rng)
    place_mines(board, {(0, 0)}, 5, rng=rng)
    assert board.mines_count() == 5
    assert_counts_consistent(board)


def test_place_mines_is_deterministic_for_a_seed():
    a = Board(8, 8)
    b = Board(8, 8)
    place_mines(a, {(0, 0)}, 12, rng=random.Random(42))
    place_mines(b, {(0, 0)}, 12, rng=random.Random(42))
    assert a.mine_positions() == b.mine_positions()


def test_place_mines_leaves_player_state_alone():
    board = Board(5, 5)
    board.cells[0][0].is_revealed = True
    board.cells[4][4].is_flagged = True
    place_mines(board, {(0, 0)}, 3, rng=random.Random(0))
    assert board.cells[0][0].is_revealed
    assert board.cells[4][4].is_flagged


def test_place_mines_fills_every_free_cell():
    board = Board(5, 5)
    safe_zone = set(build_safe_zone(2, 2, 5, 5))
    place_mines(board, safe_zone, 16, rng=random.Random(0))
    assert board.mines_count() == 16
    assert all(
        board.cells[y][x].is_mine
        for x, y in board.iter_coords()
        if (x, y) not in safe_zone
    )


def test_place_mines_rejects_too_many_mines():
    board = Board(5, 5)
    safe_zone = set(build_safe_zone(2, 2, 5, 5))
    with pytest.raises(ConfigurationError):
        place_mines(board, safe_zone, 17)


def test_place_mines_rejects_non_positive_count():
    with pytest.raises(ConfigurationError):
        place_mines(Board(5, 5), {(0, 0)}, 0)


def test_update_adjacent_mine_counts_from_scratch():
    board = Board(4, 4)
    board.cells[1][1].is_mine = True
    board.cells[3][3].is_mine = True
    board.cells[0][3].adjacent_mines = 7  # stale value
    update_adjacent_mine_counts(board)
    assert_counts_consistent(board)


def test_refresh_neighborhood_after_manual_swap():
    board = Board.from_mines(6, 6, [(0, 0), (5, 5)])
    board.cells[0][0].is_mine = False
    board.cells[2][3].is_mine = True
    refresh_neighborhood(board, 0, 0)
    refresh_neighborhood(board, 3, 2)
    assert_counts_consistent(board)


def test_move_mine_and_back():
    board = Board.from_mines(5, 5, [(1, 1)])
    before = board.render()
    move_mine(board, (1, 1), (4, 4))
    assert not board.cells[1][1].is_mine
    assert board.cells[4][4].is_mine
    assert_counts_consistent(board)
    move_mine(board, (4, 4), (1, 1))
    assert board.render() == before
