"""Tests for the Telegram adapter's message handling helpers."""

import asyncio
from types import SimpleNamespace

import pytest
from telegram.constants import ParseMode

from minebot.commands.parse import Reply
from minebot.telegram_bot import _content, _handle_message, command_text, to_markdown


@pytest.mark.parametrize("text, expected", [
    ("/minesweeper 5 5", "minesweeper 5 5"),
    ("/ minesweeper 5 5 ", "minesweeper 5 5"),
    ("/ping@MinesweeperBot", "ping"),
    ("/ms@MinesweeperBot 4 4", "ms 4 4"),
    ("minesweeper 5 5", None),
    ("", None),
    (None, None),
])
def test_command_text(text, expected):
    assert command_text(text) == expected


def test_content():
    assert _content("hi") == "hi"
    assert _content(Reply("secret", ephemeral=True)) == "secret"


@pytest.mark.parametrize("text, expected", [
    ("/ms@Bot\n4 4", "ms\n4 4"),
    ("/minesweeper\n10 5", "minesweeper\n10 5"),
    ("/ms@Bot 10\n5", "ms 10\n5"),
    ("/", ""),
])
def test_command_text_keeps_separator(text, expected):
    assert command_text(text) == expected


def test_markdown_spoilers_and_emoji():
    assert to_markdown("||:bomb:||:zero:") == "||\U0001f4a3||0\ufe0f\u20e3"


def test_markdown_escapes_text():
    assert to_markdown("Hi (there).") == "Hi \\(there\\)\\."


def test_markdown_unmatched_spoiler_is_text():
    assert to_markdown("a||b") == "a\\|\\|b"


def test_markdown_code_block_keeps_markup():
    text = "Board:\n```\n||:one:||:zero:\n```"
    assert to_markdown(text) == "Board:\n```\n||:one:||:zero:\n```"


class _FakeMessage:
    def __init__(self, text):
        self.text = text
        self.from_user = None
        self.chat_id = 1
        self.sent = []

    async def reply_text(self, text, parse_mode=None):
        self.sent.append((text, parse_mode))


def test_update_without_message_is_ignored():
    update = SimpleNamespace(effective_message=None, message=None)
    assert asyncio.run(_handle_message(update, None)) is None


def test_handler_replies_in_markdown(monkeypatch):
    monkeypatch.setattr("minebot.commands.router.log_request", lambda *args: None)
    message = _FakeMessage("/ping")
    asyncio.run(_handle_message(SimpleNamespace(effective_message=message), None))
    assert message.sent == [("pong", ParseMode.MARKDOWN_V2)]
