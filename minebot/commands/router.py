"""Command router: walks the command tree and runs the matched action.

Two kinds of input are supported and behave the same way:
    text commands     "minesweeper 10 8 12", tokenized here
    structured input  the command name plus a name -> value mapping of its
                      options, as slash-command platforms deliver them

Values in the mapping may be plain values or objects with a .value
attribute.
"""

from minebot.commands.parse import ParsedCommand, ParseError, Reply
from minebot.log import log, log_request

NOT_IMPLEMENTED_MESSAGE = (
    "It looks like this command has not been implemented yet. "
    "Please contact my owner if you think this is an error.")
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while evaluating your command."


def _option_value(options, name):
    value = options.get(name)
    return getattr(value, "value", value)


class CommandTree:
    """An immutable command tree plus the logic to parse against it."""

    def __init__(self, root):
        self.root = root

    def find_command(self, text):
        """Return (command, remaining_text) for the first matching command, or None."""
        for command in self.root.options:
            result = command.check_input(text)
            if not result.error:
                return command, text[result.end:].strip()
        return None

    def parse(self, text, options=None):
        """Parse a command without running it.

        Args:
            text: The whole text command, or only the command name when
                options is given.
            options: Structured option values keyed by option name, or None.

        Returns:
            A ParsedCommand (check its error), or None if no command matched.
        """
        found = self.find_command(text.strip())
        if found is None:
            return None
        command, rest = found

        parsed = ParsedCommand(command=command.name, inputs=[None] * len(command.options))
        parsed.action = command.action or self.root.action

        if options is not None and command.text_only:
            return self._fail(parsed, ParseError.UNSUPPORTED_IN_STRUCTURED_MODE,
                              f"{ParseError.UNSUPPORTED_IN_STRUCTURED_MODE.value}: `{command.name}`.")

        for i, option in enumerate(command.options):
            if options is not None:
                value = _option_value(options, option.name)
                if value is None:
                    if option.required:
                        return self._fail(
                            parsed, ParseError.MISSING_ARGUMENT,
                            f"You're missing a required argument: "
                            f"`{command.get_options_syntax(i, True)}`.")
                    continue
                parsed.inputs[i] = value

            else:
                if rest == "":
                    if option.required:
                        return self._fail(
                            parsed, ParseError.MISSING_ARGUMENT,
                            f"You're missing one or more required arguments: "
                            f"`{command.get_options_syntax(i, True)}`.")
                    break

                result = option.check_input(rest)
                if result.error:
                    return self._fail(
                        parsed, result.error,
                        f"{result.error.value}: `{result.value}` "
                        f"(at `{command.get_options_syntax(i, True)}`).")
                parsed.inputs[i] = result.value
                rest = rest[result.end:].strip()

            if option.action:
                parsed.action = option.action

        return parsed

    @staticmethod
    def _fail(parsed, error, message):
        parsed.error = error
        parsed.message = message
        return parsed

    def dispatch(self, source, text, options=None, log_source="[text]"):
        """Parse and run a command.

        Returns the action's result: a str, a Reply, a list of those, or None
        when the text isn't a command at all. Never raises.
        """
        try:
            parsed = self.parse(text, options)
            log_request(text, parsed, log_source)
            if parsed is None:
                return None
            if parsed.error:
                return Reply(parsed.message, ephemeral=True)
            if parsed.action is None:
                log(f"WARNING: no command execution method found for {parsed.command!r}.")
                return Reply(NOT_IMPLEMENTED_MESSAGE, ephemeral=True)
            return parsed.action(source, parsed.inputs)
        except Exception as e:
            log(e)
            return Reply(UNKNOWN_ERROR_MESSAGE, ephemeral=True)
