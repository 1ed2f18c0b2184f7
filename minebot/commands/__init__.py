from minebot import settings
from minebot.commands import info, minesweeper, ping
from minebot.commands.argument import Root
from minebot.commands.router import CommandTree

# Order matters: the first command whose name the text starts with wins
ALL_COMMANDS = [
    info.HELP,
    *minesweeper.COMMANDS,
    *info.COMMANDS,
    *ping.COMMANDS,
]

TREE = CommandTree(Root(settings.PREFIX, ALL_COMMANDS))
