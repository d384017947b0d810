from __future__ import annotations

import logging
import sys
from typing import BinaryIO, Optional, Sequence

from .compiler import Command, Instruction
from .errors import make_runtime_error
from .state import EngineState
from .tape import Tape

logger = logging.getLogger(__name__)


class Engine:
    """
    Fetch-execute loop over compiled instructions.

    Loop targets are resolved while running: entering a loop body pushes the
    position of its ``[`` and the matching ``]`` jumps back to it. A ``[`` on a
    zero cell scans forward for its partner, counting nested brackets.
    """

    def __init__(
        self,
        instructions: Sequence[Instruction],
        *,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        source: str = "",
        initial_cells: int = 1,
        flush_output: bool = True,
    ):
        self.instructions = list(instructions)
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.source = source
        self.initial_cells = initial_cells
        self.flush_output = flush_output
        self.tape = Tape(initial_cells)
        self.state = EngineState()

    def reset(self) -> None:
        self.tape = Tape(self.initial_cells)
        self.state.reset()

    @property
    def running(self) -> bool:
        return not self.state.halted

    def run(self) -> EngineState:
        while self.step():
            pass
        return self.state

    def step(self) -> bool:
        """Execute one instruction. Returns False once the program has halted."""
        state = self.state
        if state.halted:
            return False
        if state.ip >= len(self.instructions):
            self._halt()
            return False

        ins = self.instructions[state.ip]
        cmd = ins.command
        tape = self.tape

        if cmd is Command.LOOP_BEGIN:
            if tape.read() == 0:
                state.ip = self._skip_loop(state.ip) + 1
            else:
                state.loop_stack.append(state.ip)
                state.ip += 1
        elif cmd is Command.LOOP_END:
            if not state.loop_stack:
                raise self._error('loop-end', "']' with no open loop", ins)
            # Jump back onto the '[' so its condition is tested again.
            state.ip = state.loop_stack.pop()
        else:
            if cmd is Command.MOVE_RIGHT:
                tape.advance(ins.count)
            elif cmd is Command.MOVE_LEFT:
                try:
                    tape.retreat(ins.count)
                except ValueError as e:
                    raise self._error('underflow', str(e), ins) from e
            elif cmd is Command.INCREMENT:
                tape.increment(ins.count)
            elif cmd is Command.DECREMENT:
                tape.decrement(ins.count)
            elif cmd is Command.OUTPUT:
                self._output(tape.read(), ins.count)
            elif cmd is Command.INPUT:
                self._input(ins.count)
            state.ip += 1

        state.steps += 1
        if state.ip >= len(self.instructions):
            self._halt()
            return False
        return True

    def _skip_loop(self, start: int) -> int:
        depth = 0
        for i in range(start, len(self.instructions)):
            cmd = self.instructions[i].command
            if cmd is Command.LOOP_BEGIN:
                depth += 1
            elif cmd is Command.LOOP_END:
                depth -= 1
                if depth == 0:
                    logger.debug("skipped loop %d..%d", start, i)
                    return i
        raise self._error('loop-begin', "'[' has no matching ']'", self.instructions[start])

    def _output(self, value: int, count: int) -> None:
        self.stdout.write(bytes((value,)) * count)
        if self.flush_output:
            self.stdout.flush()

    def _input(self, count: int) -> None:
        # A blocking read must not hold back output the user should already see.
        self.stdout.flush()
        for _ in range(count):
            data = self.stdin.read(1)
            if data:
                self.tape.write(data[0])

    def _halt(self) -> None:
        self.state.halted = True
        logger.debug(
            "halted after %d steps (open loops=%d, tape=%d cells)",
            self.state.steps, self.state.depth, len(self.tape),
        )

    def _error(self, kind: str, message: str, ins: Instruction):
        return make_runtime_error(
            kind=kind,
            message=message,
            source=self.source,
            line=ins.line,
            position=self.state.ip,
        )
