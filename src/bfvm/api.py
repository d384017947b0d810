from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .compiler import Instruction, compile_source
from .engine import Engine
from .errors import make_load_error


@dataclass(frozen=True)
class RunOptions:
    initial_cells: int = 1
    flush_output: bool = True


@dataclass(frozen=True)
class RunResult:
    output: bytes
    steps: int
    cursor: int
    cells: bytes
    open_loops: int


def load_source(path: str | Path, *, encoding: str = "utf-8") -> str:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise make_load_error(path=str(p), reason=e.strerror or type(e).__name__) from e
    return data.decode(encoding, errors="replace")


def compile_string(source: str) -> List[Instruction]:
    return compile_source(source)


def compile_file(path: str | Path, *, encoding: str = "utf-8") -> List[Instruction]:
    return compile_string(load_source(path, encoding=encoding))


def run_string(source: str, input: bytes = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    """Compile and run ``source`` in-process, feeding ``input`` and capturing output."""
    opts = options if options is not None else RunOptions()
    stdout = io.BytesIO()
    engine = Engine(
        compile_source(source),
        stdin=io.BytesIO(input),
        stdout=stdout,
        source=source,
        initial_cells=opts.initial_cells,
        flush_output=opts.flush_output,
    )
    state = engine.run()
    return RunResult(
        output=stdout.getvalue(),
        steps=state.steps,
        cursor=engine.tape.cursor,
        cells=engine.tape.cells(),
        open_loops=state.depth,
    )


def run_file(path: str | Path, input: bytes = b"", *, options: Optional[RunOptions] = None, encoding: str = "utf-8") -> RunResult:
    return run_string(load_source(path, encoding=encoding), input, options=options)
