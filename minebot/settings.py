"""Bot-wide settings.

Credentials do not live here: the chat gateway reads its token from an
uncommitted minebot/telegram_credentials.py (see telegram_bot.py).
"""

VERSION = "2.0.0"
REPOSITORY = "https://github.com/JochCool/minesweeper-bot"

# Text commands must start with this
PREFIX = "/"

# --- Game limits ---

MAX_GAME_WIDTH = 40
MAX_GAME_HEIGHT = 20
DEFAULT_GAME_SIZE = 8
MINE_DENSITY = 0.2  # used when the number of mines is omitted

# Above this fraction of mined squares, rejection sampling is replaced by a
# single draw without replacement
FULL_DENSITY_THRESHOLD = 0.9

# --- Output limits ---

# The transport refuses messages over 2000 characters; keep a margin
MAX_MESSAGE_LENGTH = 1900
# Spoilers and emoji stop rendering past this many per message
MAX_RICH_TOKENS = 198

# Most recent first
NEWS = [
    {"name": "2.0.0", "description": "Large games are now split into several messages without breaking the spoilers."},
    {"name": "1.9.0", "description": "Added slash commands and the /news command."},
    {"name": "1.8.0", "description": "The dont-start-uncovered option can now be given as a flag."},
    {"name": "1.7.0", "description": "Added the /minesweeperraw command for copy-pasting games."},
]
