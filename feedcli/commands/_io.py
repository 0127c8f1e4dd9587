"""
Input helpers shared by commands.
"""

import sys


def read_input(path: str) -> bytes:
    """Read a message file, or stdin when path is "-"."""
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()
