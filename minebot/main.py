"""Minesweeper bot main entry point.

Usage:
    python -m minebot.main
"""

from minebot import settings
from minebot.commands import TREE
from minebot.log import log


def main():
    log(f"Starting Minesweeper Bot version {settings.VERSION}")
    log(f"Commands: {TREE.root.get_options_syntax()}")

    from minebot.telegram_bot import start_telegram
    try:
        if not start_telegram():
            log("Nothing to connect to. Fill in minebot/telegram_credentials.py.")
    except KeyboardInterrupt:
        log("Shutting down.")


if __name__ == "__main__":
    main()
