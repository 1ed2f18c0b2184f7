"""Tests for game settings validation, mine placement and the opening."""

import math
from collections import deque

import numpy as np
import pytest

from minebot import settings as config
from minebot.game import (
    GameSettings, MINE, check_game_settings, generate_game, place_mines, uncover_opening)

SEEDS = range(25)


def _neighbours(board, y, x):
    height, width = board.shape
    for ny in range(max(0, y - 1), min(height, y + 2)):
        for nx in range(max(0, x - 1), min(width, x + 2)):
            if (ny, nx) != (y, x):
                yield ny, nx


# --- check_game_settings ---

def test_defaults():
    game = GameSettings()
    assert check_game_settings(game) is None
    assert (game.width, game.height) == (8, 8)
    assert game.num_mines == 13  # 64 * 0.2, rounded
    assert game.starts_not_uncovered is False


def test_missing_dimension_copies_the_other():
    game = GameSettings(width=10)
    assert check_game_settings(game) is None
    assert (game.width, game.height) == (10, 10)

    game = GameSettings(height=6)
    assert check_game_settings(game) is None
    assert (game.width, game.height) == (6, 6)


def test_nan_counts_as_missing():
    game = GameSettings(width=math.nan, height=5, num_mines=math.nan)
    assert check_game_settings(game) is None
    assert (game.width, game.height, game.num_mines) == (5, 5, 5)


def test_small_board_gets_a_mine():
    game = GameSettings(width=1, height=2)
    assert check_game_settings(game) is None
    assert game.num_mines == 1


@pytest.mark.parametrize("width, height, named", [
    (0, 5, "The width must"),
    (5, -1, "The height must"),
    (0, 0, "The width and height must"),
])
def test_too_small(width, height, named):
    error = check_game_settings(GameSettings(width, height))
    assert named in error


@pytest.mark.parametrize("width, height, named", [
    (41, 5, "too wide"),
    (5, 21, "too tall"),
    (41, 21, "too large"),
])
def test_too_large(width, height, named):
    error = check_game_settings(GameSettings(width, height))
    assert named in error


def test_size_error_before_mine_error():
    error = check_game_settings(GameSettings(50, 5, -3))
    assert "too wide" in error


def test_no_mines():
    error = check_game_settings(GameSettings(5, 5, 0))
    assert "without mines" in error


def test_too_many_mines():
    assert check_game_settings(GameSettings(5, 5, 26)) == \
        "I can't fit that many mines in a game sized 5x5!"


def test_full_board_is_valid():
    assert check_game_settings(GameSettings(5, 5, 25)) is None


def test_idempotent():
    game = GameSettings(width=7, num_mines=None, starts_not_uncovered=None)
    assert check_game_settings(game) is None
    before = (game.width, game.height, game.num_mines, game.starts_not_uncovered)
    assert check_game_settings(game) is None
    assert (game.width, game.height, game.num_mines, game.starts_not_uncovered) == before


def test_maximum_size_is_valid():
    game = GameSettings(config.MAX_GAME_WIDTH, config.MAX_GAME_HEIGHT)
    assert check_game_settings(game) is None


# --- place_mines ---

@pytest.mark.parametrize("seed", SEEDS)
def test_counts_are_exact(seed):
    rng = np.random.default_rng(seed)
    width = int(rng.integers(1, config.MAX_GAME_WIDTH + 1))
    height = int(rng.integers(1, config.MAX_GAME_HEIGHT + 1))
    num_mines = int(rng.integers(1, width * height + 1))

    board = place_mines(width, height, num_mines, rng)

    assert board.shape == (height, width)
    assert int((board == MINE).sum()) == num_mines
    for y in range(height):
        for x in range(width):
            if board[y, x] == MINE:
                continue
            expected = sum(1 for ny, nx in _neighbours(board, y, x) if board[ny, nx] == MINE)
            assert board[y, x] == expected


def test_same_seed_same_board():
    a = place_mines(10, 8, 20, np.random.default_rng(42))
    b = place_mines(10, 8, 20, np.random.default_rng(42))
    assert np.array_equal(a, b)


def test_full_board():
    board = place_mines(4, 3, 12, np.random.default_rng(0))
    assert (board == MINE).all()


def test_nearly_full_board():
    board = place_mines(10, 10, 95, np.random.default_rng(0))
    assert int((board == MINE).sum()) == 95


# --- uncover_opening ---

def _zero_component(board, start):
    """All squares reachable from start through zeroes, plus their neighbours."""
    seen = {start}
    queue = deque([start])
    while queue:
        y, x = queue.popleft()
        if board[y, x] != 0:
            continue
        for n in _neighbours(board, y, x):
            if n not in seen:
                seen.add(n)
                queue.append(n)
    return seen


@pytest.mark.parametrize("seed", SEEDS)
def test_opening_is_one_connected_region(seed):
    rng = np.random.default_rng(seed)
    board = place_mines(16, 12, 25, rng)
    uncovered = uncover_opening(board, rng)

    squares = {(int(y), int(x)) for y, x in np.argwhere(uncovered)}
    if not (board == 0).any():
        assert not squares
        return

    zeroes = [s for s in squares if board[s] == 0]
    assert zeroes
    assert squares == _zero_component(board, zeroes[0])
    for y, x in squares:
        assert board[y, x] != MINE
        if board[y, x] != 0:
            assert any(board[n] == 0 and uncovered[n] for n in _neighbours(board, y, x))


def test_opening_skips_unconnected_zeroes():
    # Two zero regions separated by a column of mines
    board = np.array([
        [0, 2, MINE, 2, 0],
        [0, 3, MINE, 3, 0],
        [0, 2, MINE, 2, 0],
    ])
    uncovered = uncover_opening(board, np.random.default_rng(1))
    left = uncovered[:, :2].all()
    right = uncovered[:, 3:].all()
    assert left != right
    assert not uncovered[:, 2].any()


def test_no_zeroes_nothing_uncovered():
    board = place_mines(1, 1, 1, np.random.default_rng(0))
    assert not uncover_opening(board, np.random.default_rng(0)).any()


# --- generate_game ---

def test_single_mine_game():
    game = GameSettings(1, 1, 1)
    assert check_game_settings(game) is None
    assert generate_game(game, rng=np.random.default_rng(0)) == \
        "Here's a board sized 1x1 with 1 mine:\n||:bomb:||"


def test_starts_not_uncovered():
    game = GameSettings(6, 6, 1, starts_not_uncovered=True)
    check_game_settings(game)
    text = generate_game(game, rng=np.random.default_rng(3))
    for row in text.splitlines()[1:]:
        assert row.count("||") == 2 * 6


def test_uncovered_squares_have_no_spoilers():
    game = GameSettings(6, 6, 1)
    check_game_settings(game)
    text = generate_game(game, rng=np.random.default_rng(3))
    # One mine leaves a single zero region covering most of the board
    assert text.count("||") < 2 * 36
    assert ":zero:" in text.replace("||:zero:||", "")


def test_generate_is_deterministic_with_seed():
    game = GameSettings(12, 9, 20)
    check_game_settings(game)
    assert generate_game(game, rng=np.random.default_rng(7)) == \
        generate_game(game, rng=np.random.default_rng(7))


def test_copied_dimension_is_not_blamed():
    error = check_game_settings(GameSettings(height=0))
    assert "The height must" in error
    assert "width" not in error.split(".")[1]

    error = check_game_settings(GameSettings(width=-2))
    assert "The width must" in error


def test_copied_dimension_not_called_too_large():
    error = check_game_settings(GameSettings(height=50))
    assert "too tall" in error
    assert "too large" not in error
