"""Telegram interface for the Minesweeper bot.

Text messages that start with the command prefix are run through the
command tree; everything else is ignored. When a game is too large for one
message, the first part is sent as a reply and the rest as plain messages.

Replies go out as MarkdownV2, so ||...|| becomes a spoiler. Emoji shortcodes
are turned into real emoji, except inside code blocks, which are meant for
copy-pasting the markup as-is.

Requires telegram_credentials.py with TELEGRAM_TOKEN from @BotFather.
If not configured, start_telegram() logs a message and returns without error.
"""

import asyncio
import re

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ApplicationBuilder, MessageHandler, filters, ContextTypes
from telegram.helpers import escape_markdown

from minebot import settings
from minebot.commands import TREE
from minebot.commands.parse import Reply
from minebot.log import log
from minebot.render import FENCE, SPOILER

# Command word, minus any @botname, up to the first space or newline
_COMMAND_WORD = re.compile(r"^(\S+?)(?:@\S*)?(?=\s|$)")

_SHORTCODE = re.compile(r":[a-z]+:")
_EMOJI = {
    ":zero:": "0\ufe0f\u20e3", ":one:": "1\ufe0f\u20e3", ":two:": "2\ufe0f\u20e3",
    ":three:": "3\ufe0f\u20e3", ":four:": "4\ufe0f\u20e3", ":five:": "5\ufe0f\u20e3",
    ":six:": "6\ufe0f\u20e3", ":seven:": "7\ufe0f\u20e3", ":eight:": "8\ufe0f\u20e3",
    ":nine:": "9\ufe0f\u20e3", ":bomb:": "\U0001f4a3", ":cry:": "\U0001f622",
}


def command_text(text, prefix=settings.PREFIX):
    """Strip the prefix (and any @botname on the command word), or None if absent."""
    if not text or not text.startswith(prefix):
        return None
    text = text[len(prefix):].strip()
    m = _COMMAND_WORD.match(text)
    if m is None:
        return text
    return m.group(1) + text[m.end():]


def _content(message):
    # Telegram has no ephemeral messages; those are sent as normal replies
    if isinstance(message, Reply):
        return message.content
    return message


def _spoilers(text):
    text = _SHORTCODE.sub(lambda m: _EMOJI.get(m.group(0), m.group(0)), text)
    pieces = text.split(SPOILER)
    if len(pieces) % 2 == 0:
        # Unmatched marker: keep it as text
        pieces[-2:] = [pieces[-2] + SPOILER + pieces[-1]]
    return SPOILER.join(escape_markdown(p, version=2) for p in pieces)


def to_markdown(text):
    """Convert a reply to Telegram MarkdownV2."""
    parts = text.split(FENCE)
    for i, part in enumerate(parts):
        if i % 2:
            parts[i] = escape_markdown(part, version=2, entity_type="pre")
        else:
            parts[i] = _spoilers(part)
    return FENCE.join(parts)


async def _handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle an incoming Telegram message."""
    message = update.effective_message
    if message is None:
        return
    text = command_text(message.text)
    if text is None:
        return

    user = message.from_user
    username = (user.first_name or user.username) if user else None
    source = f"[Telegram:{username or 'unknown'}]"

    result = TREE.dispatch(message, text, log_source=source)
    if not result:
        return

    replies = result if isinstance(result, list) else [result]
    try:
        await message.reply_text(to_markdown(_content(replies[0])),
                                 parse_mode=ParseMode.MARKDOWN_V2)
        for reply in replies[1:]:
            await context.bot.send_message(message.chat_id, to_markdown(_content(reply)),
                                           parse_mode=ParseMode.MARKDOWN_V2)
    except Exception as e:
        log(e)


async def _run_bot_async(token):
    """Run the Telegram bot polling loop (async)."""
    app = ApplicationBuilder().token(token).build()
    app.add_handler(MessageHandler(filters.TEXT, _handle_message))

    await app.initialize()
    await app.updater.start_polling(drop_pending_updates=True)
    await app.start()
    log("Telegram bot started.")

    # Block forever (until interrupted)
    stop_event = asyncio.Event()
    await stop_event.wait()


def start_telegram():
    """Run the Telegram bot (blocking).

    Returns False if skipped (no token).
    """
    try:
        from minebot.telegram_credentials import TELEGRAM_TOKEN as token
    except ImportError:
        log("No telegram_credentials.py, Telegram disabled.")
        return False

    asyncio.run(_run_bot_async(token))
    return True
