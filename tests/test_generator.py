import logging
import random

import pytest

from safeboard.board import Board
from safeboard.errors import ConfigurationError, InvalidArgumentError
from safeboard.generator import SolvableBoardGenerator, generate_solvable_board
from safeboard.solver import solve
from safeboard.utils import build_safe_zone


def assert_layout(board, safe_zone, mine_count):
    assert board.mines_count() == mine_count
    assert not any(board.cells[y][x].is_mine for x, y in safe_zone)
    for x, y in board.iter_coords():
        cell = board.cells[y][x]
        if cell.is_mine:
            assert cell.adjacent_mines is None
        else:
            assert cell.adjacent_mines == board.count_adjacent_mines(x, y)


def test_easy_board_is_solvable():
    board = Board(9, 9)
    safe_zone = build_safe_zone(4, 4, 9, 9)
    assert generate_solvable_board(board, safe_zone, 10, rng=random.Random(1234))
    assert_layout(board, safe_zone, 10)
    assert solve(board, safe_zone).unsolved_count == 0


def test_single_mine_always_succeeds():
    for seed in range(20):
        board = Board(5, 5)
        assert generate_solvable_board(board, [(0, 0)], 1, rng=random.Random(seed))
        assert_layout(board, [(0, 0)], 1)


def test_dense_board_keeps_count_and_safe_zone():
    board = Board(5, 5)
    safe_zone = build_safe_zone(2, 2, 5, 5)
    ok = generate_solvable_board(board, safe_zone, 16, rng=random.Random(0))
    assert isinstance(ok, bool)
    assert_layout(board, safe_zone, 16)


def test_success_rate_on_easy_boards():
    rng = random.Random(2024)
    safe_zone = build_safe_zone(4, 4, 9, 9)
    successes = 0
    for _ in range(100):
        board = Board(9, 9)
        if generate_solvable_board(board, safe_zone, 10, rng=rng):
            successes += 1
        assert_layout(board, safe_zone, 10)
    assert successes >= 95


def test_exhausted_attempts_keep_last_layout(caplog):
    # Every layout of one mine on this board is a guess
    board = Board(2, 3)
    generator = SolvableBoardGenerator(board, 1, rng=random.Random(5))
    with caplog.at_level(logging.WARNING, logger="safeboard.generator"):
        assert not generator.generate([(0, 0)])

    assert generator.attempts_count == 40
    assert generator.repairs_count == 40
    assert generator.last_unsolved_count > 0
    assert not generator.metrics()["solved_by_repair"]
    assert_layout(board, [(0, 0)], 1)
    assert "No solvable board" in caplog.text


def test_metrics_after_success():
    board = Board(9, 9)
    generator = SolvableBoardGenerator(board, 10, rng=random.Random(9))
    assert generator.generate(build_safe_zone(4, 4, 9, 9))
    metrics = generator.metrics()
    assert 1 <= metrics["attempts_count"] <= 40
    assert metrics["last_unsolved_count"] == 0


def test_empty_safe_zone_rejected():
    with pytest.raises(InvalidArgumentError):
        generate_solvable_board(Board(5, 5), [], 3)


def test_out_of_bounds_safe_zone_rejected():
    with pytest.raises(InvalidArgumentError):
        generate_solvable_board(Board(5, 5), [(0, 0), (5, 0)], 3)


def test_too_many_mines_rejected():
    with pytest.raises(ConfigurationError):
        generate_solvable_board(Board(5, 5), build_safe_zone(2, 2, 5, 5), 17)
