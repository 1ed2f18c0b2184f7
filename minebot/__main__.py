"""Entry point for `python -m minebot`.

    python -m minebot                        run the bot
    python -m minebot -parse minesweeper 5 5  show how a command parses
    python -m minebot -run minesweeper 5 5    run a command and print the output
"""

import sys


def _parse_cmd(text):
    """Parse a single command and print the result in test_cases.txt format."""
    from minebot.commands import TREE

    print(f"> {text}")
    parsed = TREE.parse(text)
    if parsed is None:
        print("command: none")
        return

    print(f"command: {parsed.command}")
    if parsed.error:
        print(f"error: {parsed.error.name}")
        print(f"message: {parsed.message}")
        return
    print(f"inputs: {', '.join(_format_value(v) for v in parsed.inputs)}")


def _format_value(val):
    if isinstance(val, bool):
        return "true" if val else "false"
    if val is None:
        return "none"
    return str(val)


def _run_cmd(text):
    """Dispatch a single command and print every message it produces."""
    from minebot.commands import TREE
    from minebot.commands.parse import Reply

    result = TREE.dispatch(None, text, log_source="[cli]")
    if result is None:
        print("(not a command)")
        return
    for message in result if isinstance(result, list) else [result]:
        if isinstance(message, Reply):
            message = message.content
        print(message)
        print()


if __name__ == "__main__" or not sys.argv[0]:
    if len(sys.argv) >= 3 and sys.argv[1] == "-parse":
        _parse_cmd(" ".join(sys.argv[2:]))
    elif len(sys.argv) >= 3 and sys.argv[1] == "-run":
        _run_cmd(" ".join(sys.argv[2:]))
    else:
        from minebot.main import main
        main()
