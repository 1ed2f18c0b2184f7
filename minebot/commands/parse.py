"""Result objects for the command system.

Argument.check_input(text) returns a CheckResult.
CommandTree.parse(...) returns a ParsedCommand (or None), and dispatch()
runs the parsed action and returns its result: a str, a Reply, a list of
those (first is the reply, the rest are follow-ups), or None.
"""

from dataclasses import dataclass, field
from enum import Enum


class ParseError(str, Enum):
    """Why an input could not be parsed. Values are shown to the user."""
    MISSING_ARGUMENT = "Missing argument"
    INVALID_OPTION = "Invalid option"
    UNMATCHED_QUOTE = "Unmatched quote"
    NOT_A_NUMBER = "Not a valid number"
    NOT_AN_INTEGER = "Not an integer"
    NOT_A_CHANNEL_MENTION = "Not a channel mention"
    UNSUPPORTED_IN_STRUCTURED_MODE = "This command is only available as a text command"


@dataclass
class CheckResult:
    value: object         # parsed value, or the offending input on error
    end: int = 0          # number of characters consumed
    error: ParseError = None


@dataclass
class Reply:
    content: str
    ephemeral: bool = False


@dataclass
class ParsedCommand:
    command: str          # name of the matched command, e.g. "minesweeper"
    inputs: list = field(default_factory=list)  # one value per option, None if omitted
    action: object = None  # deepest action reached
    error: ParseError = None
    message: str = None   # user-facing description of the error
