"""Minesweeper commands: generate a game to play, or its raw markup.

Handles:
    "minesweeper"               8x8 board, mines chosen by size
    "minesweeper 10 5"          10 wide, 5 tall
    "ms 10 5 12 true"           12 mines, nothing uncovered
    "minesweeperraw 10 5"       same, in a code block for copy-pasting
"""

from minebot import settings
from minebot.commands.argument import Command, Kind, Option
from minebot.game import GameSettings, check_game_settings, generate_game

OPTIONS = [
    Option(Kind.INTEGER, "game-width", "Amount of squares horizontally.",
           min_value=1, max_value=settings.MAX_GAME_WIDTH),
    Option(Kind.INTEGER, "game-height", "Amount of squares vertically.",
           min_value=1, max_value=settings.MAX_GAME_HEIGHT),
    Option(Kind.INTEGER, "num-mines", "Number of mines in the game.",
           min_value=1, max_value=settings.MAX_GAME_WIDTH * settings.MAX_GAME_HEIGHT),
    Option(Kind.BOOLEAN, "dont-start-uncovered",
           "Option to not uncover the first part of the minesweeper field automatically."),
]


def game_settings(inputs):
    width, height, num_mines, starts_not_uncovered = inputs[:4]
    return GameSettings(width, height, num_mines, starts_not_uncovered)


def _check_and_generate(inputs, is_raw):
    game = game_settings(inputs)
    error = check_game_settings(game)
    if error:
        return error
    return generate_game(game, is_raw)


def play(source, inputs):
    return _check_and_generate(inputs, is_raw=False)


def play_raw(source, inputs):
    return _check_and_generate(inputs, is_raw=True)


MINESWEEPER_RAW = Command(
    "minesweeperraw",
    "Creates a Minesweeper game and shows the markdown code for copy-pasting.",
    OPTIONS, play_raw)

MINESWEEPER = Command(
    "minesweeper", "Creates a Minesweeper game for you to play!", OPTIONS, play)

# Longer names first: "ms" would also match "msraw"
COMMANDS = [
    MINESWEEPER_RAW,
    MINESWEEPER_RAW.alias("msraw"),
    MINESWEEPER,
    MINESWEEPER.alias("ms"),
]
