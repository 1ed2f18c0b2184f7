"""Command tree nodes.

A tree has one Root whose options are the Commands (an OR-set: the first
one that matches wins). A Command has an ordered list of Options, which
are filled in from left to right; required options come first.

Any node may carry an action. The deepest node reached while parsing that
has one is the action that gets run:

    action(source, inputs) -> str | Reply | list | None

source is whatever the chat layer passed to dispatch() (its message), and
inputs has one value per option of the command, None where omitted.

Trees are built once at import and never modified afterwards.
"""

import math
import re
from enum import Enum

from minebot.commands.parse import CheckResult, ParseError

_CHANNEL_MENTION = re.compile(r"^<#(\d+)>$")


class Kind(Enum):
    ROOT = "root"
    LITERAL = "literal"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    CHANNEL = "channel"


def _split_token(text):
    """Isolate the first token of text. Returns (token, end, error)."""
    if text.startswith('"'):
        i = 1
        chars = []
        while i < len(text):
            ch = text[i]
            if ch == "\\" and i + 1 < len(text) and text[i + 1] in '"\\':
                chars.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                return "".join(chars), i + 1, None
            chars.append(ch)
            i += 1
        return text, 0, ParseError.UNMATCHED_QUOTE

    ends = [i for i in (text.find(" "), text.find("\n")) if i >= 0]
    end = min(ends) if ends else len(text)
    return text[:end], end, None


def _to_number(token):
    try:
        num = float(token)
    except ValueError:
        return None
    if math.isnan(num) or math.isinf(num):
        return None
    return num


class Argument:
    """Base for all tree nodes."""

    kind = None

    def __init__(self, name, description=None, action=None):
        self.name = name
        self.description = description
        self.action = action
        self.options = []

    @property
    def is_optional(self):
        return False

    def check_input(self, text):
        """Check whether the first token of text is valid for this node."""
        if text == "":
            return CheckResult("", error=ParseError.MISSING_ARGUMENT)
        if text.startswith(self.name):
            return CheckResult(self.name, len(self.name))
        return CheckResult(text, error=ParseError.INVALID_OPTION)

    def get_options_syntax(self, from_index=0, required_only=False):
        """Format the options from from_index on, e.g. "<a> [<b> [<c>]]".

        With required_only, stops before the first optional option and never
        uses brackets.
        """
        if not self.options:
            return ""

        if required_only and self.options[from_index].is_optional:
            return f"<{self.options[from_index].name}>"

        parts = []
        brackets = 0
        for option in self.options[from_index:]:
            if option.is_optional:
                if required_only:
                    break
                parts.append(f"[<{option.name}>")
                brackets += 1
            else:
                parts.append(f"<{option.name}>")
        return " ".join(parts) + "]" * brackets

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class Root(Argument):
    """Top of the tree: an OR-set of commands."""

    kind = Kind.ROOT

    def __init__(self, name, commands, action=None):
        super().__init__(name, action=action)
        _check_unique(commands)
        self.options = list(commands)

    def get_options_syntax(self, from_index=0, required_only=False):
        """Format the commands as "(a|b|c)", plus " ..." if any takes options."""
        if not self.options:
            return ""
        names = "|".join(c.name for c in self.options)
        has_options = any(
            c.options and not (required_only and c.options[0].is_optional)
            for c in self.options)
        return f"({names}) ..." if has_options else f"({names})"


class Command(Argument):
    """A literal keyword with an ordered list of options."""

    kind = Kind.LITERAL

    def __init__(self, name, description=None, options=(), action=None, text_only=False):
        super().__init__(name, description, action)
        self.options = list(options)
        self.text_only = text_only
        _check_unique(self.options)
        _check_order(name, self.options)

    def alias(self, name, description=None):
        """A text-only command sharing this command's options and action."""
        return Command(name, description or f"Alias of the {self.name} command.",
                       self.options, self.action, text_only=True)


class Option(Argument):
    """A typed value given by the user."""

    def __init__(self, kind, name, description=None, required=False, action=None,
                 min_value=None, max_value=None):
        if kind in (Kind.ROOT, Kind.LITERAL):
            raise ValueError(f"option {name!r} cannot be of kind {kind.name}")
        super().__init__(name, description, action)
        self.kind = kind
        self.required = required
        # Only enforced by the slash-command platform, not in text commands
        self.min_value = min_value
        self.max_value = max_value

    @property
    def is_optional(self):
        return not self.required

    def describe(self):
        """One line for the help text, e.g. "`<game-width>` Squares across (1 to 40)"."""
        text = f"`<{self.name}>`"
        if self.description:
            text += " " + self.description
        if self.min_value is not None and self.max_value is not None:
            text += f" ({self.min_value} to {self.max_value})"
        elif self.min_value is not None:
            text += f" (at least {self.min_value})"
        elif self.max_value is not None:
            text += f" (at most {self.max_value})"
        return text

    def check_input(self, text):
        if text == "":
            return CheckResult("", error=ParseError.MISSING_ARGUMENT)

        token, end, error = _split_token(text)
        if error:
            return CheckResult(token, error=error)

        if self.kind == Kind.BOOLEAN:
            # Anything that doesn't say no is a yes, so the option works as a flag
            value = not token.lower().startswith(("false", "no"))
            return CheckResult(value, end)

        if self.kind in (Kind.INTEGER, Kind.NUMBER):
            num = _to_number(token)
            if num is None:
                return CheckResult(token, error=ParseError.NOT_A_NUMBER)
            if self.kind == Kind.INTEGER:
                if not num.is_integer():
                    return CheckResult(token, error=ParseError.NOT_AN_INTEGER)
                return CheckResult(int(num), end)
            return CheckResult(num, end)

        if self.kind == Kind.CHANNEL:
            m = _CHANNEL_MENTION.match(token)
            if m is None:
                return CheckResult(token, error=ParseError.NOT_A_CHANNEL_MENTION)
            return CheckResult(m.group(1), end)

        return CheckResult(token, end)


def _check_unique(nodes):
    names = [n.name for n in nodes]
    for name in names:
        if names.count(name) > 1:
            raise ValueError(f"duplicate argument name {name!r}")


def _check_order(command, options):
    seen_optional = False
    for option in options:
        if option.is_optional:
            seen_optional = True
        elif seen_optional:
            raise ValueError(
                f"{command}: required option {option.name!r} follows an optional one")
