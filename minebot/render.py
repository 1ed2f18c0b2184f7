"""Board rendering: turns a board into spoiler-tagged text messages.

Each square is an emoji glyph. Squares that have not been uncovered are
wrapped in spoiler tags, so players click to open them. A rendered board can
be far larger than one message allows, so rows are packed into as many
messages as needed under two limits:

    MAX_MESSAGE_LENGTH  characters per message
    MAX_RICH_TOKENS     emoji + spoilers per message (a covered square or a
                        mine costs 2, an uncovered number costs 1)
"""

import re

from minebot import settings

NUMBER_GLYPHS = [":zero:", ":one:", ":two:", ":three:", ":four:",
                 ":five:", ":six:", ":seven:", ":eight:", ":nine:"]
MINE_GLYPH = ":bomb:"
SPOILER = "||"
FENCE = "```"

MINE = -1

_GLYPH = re.compile(r":[a-z]+:")


class MessageTooLarge(Exception):
    """A single row does not fit in one message."""


def count_rich_tokens(text):
    """Count the emoji glyphs plus spoiler pairs in text."""
    return len(_GLYPH.findall(text)) + text.count(SPOILER) // 2


def render_square(value, uncovered):
    if value == MINE:
        return SPOILER + MINE_GLYPH + SPOILER
    glyph = NUMBER_GLYPHS[value]
    if uncovered:
        return glyph
    return SPOILER + glyph + SPOILER


def render_rows(board, uncovered):
    """Render each board row to one line of text."""
    height, width = board.shape
    return ["".join(render_square(int(board[y, x]), bool(uncovered[y, x]))
                    for x in range(width))
            for y in range(height)]


def split_messages(header, rows, is_raw=False,
                   max_length=settings.MAX_MESSAGE_LENGTH,
                   max_tokens=settings.MAX_RICH_TOKENS):
    """Pack header + rows into messages that each respect both limits.

    In raw mode the rows sit inside a fenced code block, which is closed at
    the end of every message and re-opened at the start of the next one.

    Returns:
        str when everything fits in one message, else a list of str.

    Raises:
        MessageTooLarge: when one row alone cannot fit in a message.
    """
    closer = "\n" + FENCE if is_raw else ""
    messages = []
    lines = [header, FENCE] if is_raw else [header]
    tokens = 0

    for row in rows:
        row_tokens = count_rich_tokens(row)
        candidate = "\n".join(lines + [row]) + closer
        if len(candidate) > max_length or tokens + row_tokens > max_tokens:
            # The header may end up in a message of its own
            messages.append("\n".join(lines) + closer)
            lines = [FENCE] if is_raw else []
            tokens = 0
            candidate = "\n".join(lines + [row]) + closer
            if len(candidate) > max_length or row_tokens > max_tokens:
                raise MessageTooLarge(row)
        lines.append(row)
        tokens += row_tokens

    messages.append("\n".join(lines) + closer)
    if len(messages) == 1:
        return messages[0]
    return messages
