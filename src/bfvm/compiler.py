from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .lexer import is_loop_command, skip_comment

logger = logging.getLogger(__name__)


class Command(str, enum.Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_BEGIN = '['
    LOOP_END = ']'

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class Instruction:
    command: Command
    count: int = 1
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        if self.count > 1:
            return f"{self.command.symbol} x{self.count}"
        return self.command.symbol


class _Cursor:
    """Walks a character sequence while tracking the 1-based line/column."""

    def __init__(self, code: Sequence[str]):
        self.code = code
        self.i = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        return self.i >= len(self.code)

    def peek(self) -> str:
        return self.code[self.i]

    def advance_to(self, j: int) -> None:
        while self.i < j:
            if self.code[self.i] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.i += 1

    def skip_comments(self) -> None:
        self.advance_to(skip_comment(self.code, self.i))


def compile_source(code: Iterable[str]) -> List[Instruction]:
    """
    Compile source text into run-length-encoded instructions.

    Non-command characters are comments; they produce nothing and do not
    interrupt a run, so ``"+ + +"`` compiles to a single increment x3.
    Loop commands are never merged. Brackets are not checked here.
    """
    code = code if isinstance(code, str) else ''.join(code)
    cur = _Cursor(code)
    instructions: List[Instruction] = []

    while True:
        cur.skip_comments()
        if cur.at_end():
            break
        ch = cur.peek()
        line, column = cur.line, cur.column

        if is_loop_command(ch):
            cur.advance_to(cur.i + 1)
            instructions.append(Instruction(Command(ch), 1, line, column))
            continue

        count = 0
        while not cur.at_end() and cur.peek() == ch:
            count += 1
            cur.advance_to(cur.i + 1)
            cur.skip_comments()
        instructions.append(Instruction(Command(ch), count, line, column))

    logger.debug("compiled %d characters into %d instructions", len(code), len(instructions))
    return instructions


def render(instructions: Iterable[Instruction]) -> str:
    return ''.join(ins.command.symbol * ins.count for ins in instructions)


def format_listing(instructions: Sequence[Instruction]) -> str:
    out: List[str] = []
    depth = 0
    for idx, ins in enumerate(instructions):
        if ins.command is Command.LOOP_END:
            depth = max(0, depth - 1)
        out.append(f"{idx:6d}  {ins.line:4d}:{ins.column:<4d} {'  ' * depth}{ins}")
        if ins.command is Command.LOOP_BEGIN:
            depth += 1
    return "\n".join(out)
