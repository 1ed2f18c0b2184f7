"""Informational commands: help, info, howtoplay and news."""

from minebot import settings
from minebot.commands.argument import Command
from minebot.game import GameSettings, check_game_settings, generate_game


def help_text(source, inputs):
    """List every command with its syntax, and the options of the main ones."""
    from minebot.commands import TREE

    lines = []
    for command in TREE.root.options:
        syntax = settings.PREFIX + command.name
        options_syntax = command.get_options_syntax()
        if options_syntax:
            syntax += " " + options_syntax
        lines.append(f"\n• `{syntax}`\n\t\t{command.description}")
        if not command.text_only:
            for option in command.options:
                lines.append(f"\n\t\t\t{option.describe()}")
    return "You can execute the following commands: " + "".join(lines)


def info_text(source, inputs):
    from minebot.commands import TREE

    command, _ = TREE.find_command("minesweeper")
    p = settings.PREFIX
    return (
        "Hello, I'm a bot that can generate a random Minesweeper game using spoiler tags, "
        f"for anyone to play! To generate a new minesweeper game, use the `{p}minesweeper` command:\n"
        f"```\n{p}minesweeper {command.get_options_syntax()}\n```"
        "`<game-width>` and `<game-height>` tell me how many squares the game should be wide "
        f"and tall, for a maximum of {settings.MAX_GAME_WIDTH}x{settings.MAX_GAME_HEIGHT}. "
        f"Default is {settings.DEFAULT_GAME_SIZE}x{settings.DEFAULT_GAME_SIZE}.\n"
        "`<num-mines>` is how many mines there should be in the game, the more mines the more "
        "difficult it is. If omitted, I will pick a number based on the size of the game.\n"
        "When you run this command, I will reply with a grid of spoiler tags. Unless you set "
        "the `<dont-start-uncovered>` parameter to true, the first zeroes will have already "
        "been opened for you.\n\n"
        f"If you don't know how to play Minesweeper, use the `{p}howtoplay` command. "
        f"For a list of all commands and their syntaxes, use `{p}help`.\n\n"
        f"I'm at version {settings.VERSION}. My source code is available at "
        f"{settings.REPOSITORY}, where you can submit bug reports and feature requests.\n"
        "Thank you for using me!"
    )


def how_to_play_text(source, inputs):
    example = GameSettings(width=5, height=5, num_mines=3)
    check_game_settings(example)
    board = generate_game(example)
    return (
        "In Minesweeper, you get a rectangular grid of squares. In some of those squares, "
        "mines are hidden, but you don't know which squares. The objective is to 'open' all "
        "the squares that don't have a hidden mine, but to not touch the ones that do.\n\n"
        f"Let's start with an example. {board}\n"
        "To open a square, click the spoiler tag. So go click one now. The contents of that "
        "square will be revealed when you do so. If it's a mine (:bomb:), you lose! If it's "
        "not a mine, you get a mysterious number instead, like :two:. This number is there to "
        "help you, as it indicates how many mines are in the eight squares that touch it "
        "(horizontally, vertically or diagonally). Using this information and some good "
        "logic, you can figure out the location of most of the mines!"
    )


def news_text(source, inputs):
    text = "These were my past three updates:\n"
    for update in settings.NEWS[:3]:
        text += f"\nVersion {update['name']} – {update['description']}"
    return text


HELP = Command("help", "Lists available commands.", action=help_text, text_only=True)

COMMANDS = [
    Command("info", "Gives info about the bot.", action=info_text),
    Command("howtoplay", "Teaches you how to play Minesweeper.", action=how_to_play_text),
    Command("news", "Lists the past three updates to the bot.", action=news_text),
]
