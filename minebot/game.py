"""Minesweeper game generation.

check_game_settings() normalizes user-supplied settings, and generate_game()
builds a board, uncovers a random opening and renders it as message text.

The board is a numpy int array indexed [y, x]: MINE for a mine, otherwise
the number of mines among the (up to) eight neighbouring squares.
"""

import math
from collections import deque
from dataclasses import dataclass

import numpy as np

from minebot import settings as config
from minebot.log import log
from minebot.render import MINE, MessageTooLarge, render_rows, split_messages

# Offsets of the eight neighbours of a square, as (dy, dx)
_NEIGHBOURS = [(-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1)]

TOO_LARGE_MESSAGE = (
    "Sorry, your message appears to be too large to send (because of the "
    "character limit). Please try a smaller game next time.")


@dataclass
class GameSettings:
    width: int = None
    height: int = None
    num_mines: int = None
    starts_not_uncovered: bool = False


def _missing(value):
    return value is None or (isinstance(value, float) and math.isnan(value))


def _size_error(width, height, given):
    """Describe what is wrong with the game size, or None if it's fine.

    given holds the dimensions the user typed; one copied from the other is
    never named in the message.
    """
    too_small = [name for name, value in (("width", width), ("height", height))
                 if value <= 0 and name in given]
    if too_small:
        what = " and ".join(too_small)
        return (f"Uh, I'm not smart enough to generate a game sized {width} by {height}. "
                f"The {what} must be a positive number. Sorry :cry:")

    too_wide = width > config.MAX_GAME_WIDTH and "width" in given
    too_tall = height > config.MAX_GAME_HEIGHT and "height" in given
    if too_wide and too_tall:
        what = "large"
    elif too_wide:
        what = "wide"
    elif too_tall:
        what = "tall"
    else:
        return None
    return (f"That's way too {what}! The maximum is "
            f"{config.MAX_GAME_WIDTH}x{config.MAX_GAME_HEIGHT}. "
            f"Think of all the mobile users who are going to see this!")


def check_game_settings(settings):
    """Fill in defaults and validate, in place.

    Returns:
        None if the settings are usable, else an error message.
    """
    width, height = settings.width, settings.height
    given = {name for name, value in (("width", width), ("height", height))
             if not _missing(value)}
    if _missing(width):
        width = config.DEFAULT_GAME_SIZE if _missing(height) else height
    if _missing(height):
        height = width
    width, height = int(width), int(height)

    error = _size_error(width, height, given)
    if error:
        return error
    settings.width, settings.height = width, height

    num_mines = settings.num_mines
    if _missing(num_mines):
        # Round half up, and always at least one mine
        num_mines = max(1, math.floor(width * height * config.MINE_DENSITY + 0.5))
    num_mines = int(num_mines)

    if num_mines <= 0:
        return ("You think you can look clever by solving a Minesweeper game "
                "without mines? Not gonna happen my friend.")
    if num_mines > width * height:
        return f"I can't fit that many mines in a game sized {width}x{height}!"

    settings.num_mines = num_mines
    settings.starts_not_uncovered = bool(settings.starts_not_uncovered)
    return None


def _neighbours(y, x, height, width):
    for dy, dx in _NEIGHBOURS:
        ny, nx = y + dy, x + dx
        if 0 <= ny < height and 0 <= nx < width:
            yield ny, nx


def _place_mine(board, y, x):
    height, width = board.shape
    board[y, x] = MINE
    for ny, nx in _neighbours(y, x, height, width):
        if board[ny, nx] != MINE:
            board[ny, nx] += 1


def place_mines(width, height, num_mines, rng):
    """Create a board with num_mines randomly placed mines and their counts."""
    board = np.zeros((height, width), dtype=int)

    if num_mines > width * height * config.FULL_DENSITY_THRESHOLD:
        # Nearly full: retrying would mostly hit existing mines
        for cell in rng.choice(width * height, size=num_mines, replace=False):
            y, x = divmod(int(cell), width)
            _place_mine(board, y, x)
        return board

    placed = 0
    while placed < num_mines:
        y = int(rng.integers(height))
        x = int(rng.integers(width))
        if board[y, x] == MINE:
            continue
        _place_mine(board, y, x)
        placed += 1
    return board


def uncover_opening(board, rng):
    """Uncover the region around one randomly chosen zero.

    Zeroes spread the uncovering to all their neighbours; numbers are
    uncovered but stop it. Returns a bool array of uncovered squares, all
    False when the board has no zeroes.
    """
    height, width = board.shape
    uncovered = np.zeros(board.shape, dtype=bool)

    zeroes = np.argwhere(board == 0)
    if len(zeroes) == 0:
        return uncovered

    y, x = (int(v) for v in zeroes[rng.integers(len(zeroes))])
    uncovered[y, x] = True
    queue = deque([(y, x)])
    while queue:
        y, x = queue.popleft()
        for ny, nx in _neighbours(y, x, height, width):
            if uncovered[ny, nx]:
                continue
            uncovered[ny, nx] = True
            if board[ny, nx] == 0:
                queue.append((ny, nx))
    return uncovered


def board_header(settings):
    if settings.num_mines == 1:
        mines = "1 mine"
    else:
        mines = f"{settings.num_mines} mines"
    return f"Here's a board sized {settings.width}x{settings.height} with {mines}:"


def generate_game(settings, is_raw=False, rng=None):
    """Generate a game for already-checked settings.

    Args:
        settings: GameSettings that passed check_game_settings().
        is_raw: Put the board in a code block, for copy-pasting.
        rng: numpy Generator; a fresh unseeded one if omitted.

    Returns:
        The message text, or a list of messages when it had to be split.
    """
    if rng is None:
        rng = np.random.default_rng()

    board = place_mines(settings.width, settings.height, settings.num_mines, rng)
    if settings.starts_not_uncovered:
        uncovered = np.zeros(board.shape, dtype=bool)
    else:
        uncovered = uncover_opening(board, rng)

    try:
        return split_messages(board_header(settings), render_rows(board, uncovered), is_raw)
    except MessageTooLarge:
        log("A too large message was generated after creating a game.")
        return TOO_LARGE_MESSAGE
