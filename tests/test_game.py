import random

import pytest

from safeboard.board import Board
from safeboard.config import GameConfig
from safeboard.errors import InvalidArgumentError
from safeboard.game import Minesweeper
from safeboard.utils import build_safe_zone


def make_game(rows, columns, mines):
    game = Minesweeper(GameConfig(rows=rows, columns=columns, mine_count=len(mines)))
    game.board = Board.from_mines(rows, columns, mines)
    game.first_move = False
    return game


def test_first_reveal_is_safe_and_generates_solvable_board():
    game = Minesweeper(GameConfig.from_difficulty("easy"), rng=random.Random(7))
    status, payload = game.reveal(4, 4)

    assert status in (0, 1)
    assert payload["revealed_cells"]
    assert not game.first_move
    assert game.generated_solvable is True
    assert game.generation_metrics["attempts_count"] >= 1
    assert game.board.mines_count() == 10
    for x, y in build_safe_zone(4, 4, 9, 9):
        assert not game.board.cells[y][x].is_mine


def test_unsafe_mode_uses_plain_placement():
    game = Minesweeper(
        GameConfig.from_difficulty("easy"), safe_mode=False, rng=random.Random(1)
    )
    status, _ = game.reveal(0, 0)
    assert status != -1
    assert game.generated_solvable is None
    assert game.board.mines_count() == 10


def test_reveal_every_safe_cell_wins():
    game = Minesweeper(GameConfig.from_difficulty("easy"), rng=random.Random(3))
    game.reveal(4, 4)

    status = 0
    for x, y in game.board.iter_coords():
        if not game.board.cells[y][x].is_mine and not game.board.cells[y][x].is_revealed:
            status, _ = game.reveal(x, y)
            assert status != -1

    assert status == 1 or game.won
    assert game.won and game.game_over
    assert all(game.board.cells[y][x].is_flagged for x, y in game.board.mine_positions())


def test_hitting_a_mine_loses():
    game = make_game(1, 4, [(2, 0)])
    status, payload = game.reveal(2, 0)
    assert status == -1
    assert payload["all_mines"] == frozenset({(2, 0)})
    assert game.game_over and not game.won
    assert game.reveal(0, 0) == (0, {})


def test_flags_block_reveal_and_update_counter():
    game = make_game(1, 4, [(2, 0)])
    assert game.toggle_flag(3, 0)
    assert game.remaining_mines == 0
    assert game.reveal(3, 0) == (0, {})
    assert not game.toggle_flag(3, 0)
    assert game.remaining_mines == 1


def test_chord_reveals_unflagged_neighbors():
    game = make_game(2, 4, [(2, 0)])
    status, payload = game.reveal(0, 0)
    assert status == 0
    assert len(payload["revealed_cells"]) == 4

    # No flags placed yet
    assert game.chord(1, 1) == (0, {})

    game.toggle_flag(2, 0)
    status, payload = game.chord(1, 0)
    assert status == 0
    assert [(x, y) for x, y, _ in payload["revealed_cells"]] == [(2, 1)]

    status, _ = game.chord(2, 1)
    assert status == 1
    assert game.won


def test_auto_flag_marks_forced_mines():
    game = make_game(1, 4, [(2, 0)])
    game.reveal(0, 0)
    assert game.auto_flag(1, 0) == [(2, 0)]
    assert game.board.cells[0][2].is_flagged
    assert game.auto_flag(1, 0) == []


def test_auto_flag_ignores_ambiguous_number():
    game = make_game(2, 4, [(2, 0)])
    game.reveal(0, 0)
    assert game.auto_flag(1, 0) == []


def test_out_of_bounds_rejected():
    game = make_game(1, 4, [(2, 0)])
    with pytest.raises(InvalidArgumentError):
        game.reveal(4, 0)
    with pytest.raises(InvalidArgumentError):
        game.toggle_flag(0, -1)


def test_format_board_plain():
    game = make_game(1, 4, [(2, 0)])
    game.reveal(0, 0)
    game.toggle_flag(2, 0)
    row = game.format_board(color=False).splitlines()[-1]
    assert row.split("|")[1].split() == ["0", "1", "F", "."]

    full = game.format_board(reveal_all=True, color=False).splitlines()[-1]
    assert full.split("|")[1].split() == ["0", "1", "M", "1"]


@pytest.mark.parametrize("safe_mode", [True, False])
def test_densest_valid_config_survives_any_first_click(safe_mode):
    config = GameConfig(5, 5, 16)
    for y in range(5):
        for x in range(5):
            game = Minesweeper(config, safe_mode=safe_mode, rng=random.Random(x + 5 * y))
            status, _ = game.reveal(x, y)
            assert status != -1
            assert game.board.mines_count() == 16
