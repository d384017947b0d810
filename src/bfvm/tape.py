from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


class Tape:
    """
    Unbounded byte tape with a single cursor.

    Cells live in a ``uint8`` array that doubles in capacity when the cursor
    moves past it. Only the high end grows, and the tape never shrinks.
    Everything beyond ``len(tape)`` is still zero.
    """

    def __init__(self, initial_cells: int = 1):
        if initial_cells < 1:
            raise ValueError(f"Tape needs at least one cell, got {initial_cells}")
        self._cells = np.zeros(initial_cells, dtype=np.uint8)
        self._length = initial_cells
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self._length:
            raise IndexError(f"Cell {index} is outside the tape (len={self._length})")
        return int(self._cells[index])

    def cells(self) -> bytes:
        return self._cells[:self._length].tobytes()

    def read(self) -> int:
        return int(self._cells[self._cursor])

    def write(self, value: int) -> None:
        self._cells[self._cursor] = value & 0xFF

    def advance(self, n: int = 1) -> None:
        self._cursor += n
        if self._cursor >= self._length:
            self._grow(self._cursor + 1)

    def retreat(self, n: int = 1) -> None:
        if n > self._cursor:
            raise ValueError(f"cannot move {n} cell(s) left of cell {self._cursor}")
        self._cursor -= n

    def increment(self, n: int = 1) -> None:
        self._cells[self._cursor] = (int(self._cells[self._cursor]) + n) & 0xFF

    def decrement(self, n: int = 1) -> None:
        self._cells[self._cursor] = (int(self._cells[self._cursor]) - n) & 0xFF

    def _grow(self, length: int) -> None:
        capacity = len(self._cells)
        if length > capacity:
            new_capacity = max(length, capacity * 2)
            cells = np.zeros(new_capacity, dtype=np.uint8)
            cells[:capacity] = self._cells
            self._cells = cells
            logger.debug("tape capacity %d -> %d", capacity, new_capacity)
        self._length = length

    def __repr__(self) -> str:
        return f"Tape(len={self._length}, cursor={self._cursor})"
