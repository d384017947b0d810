from typing import Sequence

COMMANDS = '><+-.,[]'
LOOP_COMMANDS = '[]'


def is_command(ch: str) -> bool:
    return len(ch) == 1 and ch in COMMANDS


def is_loop_command(ch: str) -> bool:
    return len(ch) == 1 and ch in LOOP_COMMANDS


def skip_comment(code: Sequence[str], i: int) -> int:
    """Return the index of the first command at or after ``i`` (``len(code)`` if none)."""
    while i < len(code) and not is_command(code[i]):
        i += 1
    return i