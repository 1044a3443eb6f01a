import pytest

from safeboard.config import (
    GameConfig,
    max_allowed_mines,
    max_safe_area,
    validate_board_dimensions,
    validate_mine_count,
)
from safeboard.errors import ConfigurationError


def test_difficulty_presets():
    assert GameConfig.from_difficulty("easy") == GameConfig(9, 9, 10)
    assert GameConfig.from_difficulty("medium") == GameConfig(16, 16, 40)
    hard = GameConfig.from_difficulty("hard")
    assert (hard.rows, hard.columns, hard.mine_count) == (16, 30, 99)
    assert hard.difficulty_name() == "hard"
    assert GameConfig(10, 10, 12).difficulty_name() == "custom"


def test_unknown_difficulty():
    with pytest.raises(ConfigurationError):
        GameConfig.from_difficulty("expert")


@pytest.mark.parametrize(
    "rows,columns,mines",
    [(0, 5, 1), (5, 5, 0), (5, 5, 25), (5, 5, 17), (5, 5, 20), (2, 2, 1)],
)
def test_game_config_rejects_bad_values(rows, columns, mines):
    with pytest.raises(ConfigurationError):
        GameConfig(rows, columns, mines)


def test_game_config_leaves_room_for_first_click():
    assert GameConfig(5, 5, 16).mine_count == 16
    assert GameConfig(1, 4, 1).mine_count == 1
    assert max_safe_area(5, 5) == 9
    assert max_safe_area(2, 8) == 6


def test_validate_board_dimensions():
    assert validate_board_dimensions(10, 12) == (True, (10, 12), None)

    result = validate_board_dimensions(3, 600)
    assert not result.is_valid
    assert result.corrected == (5, 500)
    assert result.error

    assert validate_board_dimensions("abc", 8).corrected == (10, 8)
    assert validate_board_dimensions("20", "7").is_valid


def test_max_allowed_mines():
    assert max_allowed_mines(81) == 24
    assert max_allowed_mines(25) == 7
    assert max_allowed_mines(10) == 1


def test_validate_mine_count():
    assert validate_mine_count(10, 81) == (True, (10,), None)

    result = validate_mine_count(50, 81)
    assert not result.is_valid
    assert result.corrected == (24,)
    assert "24" in result.error

    result = validate_mine_count("x", 81)
    assert not result.is_valid
    assert result.corrected == (1,)

    assert validate_mine_count(2.5, 81).corrected == (1,)
