"""Ping command: check that the bot is alive."""

from datetime import datetime, timezone

from minebot.commands.argument import Command


def pong(source, inputs):
    # Chat messages carry their send time; report how long they took to get here
    sent = getattr(source, "date", None)
    if isinstance(sent, datetime) and sent.tzinfo is not None:
        ms = (datetime.now(timezone.utc) - sent).total_seconds() * 1000
        return f"pong ({max(0, int(ms))}ms delay)"
    return "pong"


COMMANDS = [
    Command("ping", "Pong?", action=pong),
]
