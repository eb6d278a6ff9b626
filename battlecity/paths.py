"""Locating files next to the running program."""

import os
import sys


def executable_path() -> str:
    """Return the resolved path of the running program."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return os.path.realpath(program)


def executable_dir() -> str:
    """Return the directory holding the running program."""
    return os.path.dirname(executable_path())


def merge_paths(path_a: str, path_b: str) -> str:
    """Join two path fragments."""
    return os.path.join(path_a, path_b)


def absolute_path(path: str) -> str:
    """Return ``path`` resolved against the program's directory."""
    return merge_paths(executable_dir(), path)