"""Console and file logging to ``latest.log`` next to the program."""

import enum
import os

from .paths import absolute_path

LOG_FILE_NAME = "latest.log"


class LogOptions(enum.Flag):
    """Where a log message goes."""

    NONE = 0
    CONSOLE = 1
    FILE = 2


DEFAULT = LogOptions.CONSOLE | LogOptions.FILE

_started_files: set = set()


def _write_to_file(text: str) -> None:
    path = absolute_path(LOG_FILE_NAME)
    # The log starts over the first time this process writes to it.
    mode = "a" if path in _started_files else "w"
    try:
        with open(path, mode, encoding="utf-8") as file:
            file.write(text + "\n")
    except OSError:
        return
    _started_files.add(path)


def message(text: str, options: LogOptions = DEFAULT) -> None:
    """Write a line as is; never raises on I/O failure."""
    if options & LogOptions.CONSOLE:
        try:
            print(text, flush=True)
        except OSError:
            pass
    if options & LogOptions.FILE:
        _write_to_file(text)


def info(text: str, options: LogOptions = DEFAULT) -> None:
    """Log an informational line."""
    message("[INFO] " + text, options)


def debug(text: str, options: LogOptions = DEFAULT) -> None:
    """Log a debug line when BATTLECITY_DEBUG is set."""
    if os.environ.get("BATTLECITY_DEBUG"):
        message("[DEBUG] " + text, options)


def warning(text: str, options: LogOptions = DEFAULT) -> None:
    """Log a warning line."""
    message("[WARNING] " + text, options)


def error(text: str, options: LogOptions = DEFAULT) -> None:
    """Log an error line."""
    message("[ERROR] " + text, options)