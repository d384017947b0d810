from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class EngineState:
    ip: int = 0
    loop_stack: List[int] = field(default_factory=list)
    halted: bool = False
    steps: int = 0

    def reset(self) -> None:
        self.ip = 0
        self.loop_stack.clear()
        self.halted = False
        self.steps = 0

    @property
    def depth(self) -> int:
        return len(self.loop_stack)
