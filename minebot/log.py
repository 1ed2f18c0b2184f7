"""Console and request logging."""

import os
import traceback
from datetime import datetime

# Log file: lives next to the minebot package directory
_LOG_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "minebot.log")


def log(message):
    """Print a timestamped line. Exceptions are printed with their traceback."""
    if isinstance(message, BaseException):
        message = "".join(traceback.format_exception(
            type(message), message, message.__traceback__)).rstrip()
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[Minesweeper Bot] [{ts}] {message}", flush=True)


def log_request(text, parsed, source="[text]"):
    """Append a compact 2-line entry to the log file."""
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if parsed is None:
        parse_line = "  -> none"
    elif parsed.error:
        parse_line = f"  -> {parsed.command}, error={parsed.error.name}"
    else:
        inputs = ", ".join(repr(v) for v in parsed.inputs)
        parse_line = f"  -> {parsed.command}({inputs})"
    try:
        with open(_LOG_PATH, "a") as f:
            f.write(f"{ts} {source}  {text}\n{parse_line}\n")
    except OSError:
        pass
