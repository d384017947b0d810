from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2) -> str:
    if not lines:
        return ""
    idx = min(max(1, line_no_1), len(lines))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'underflow':
        return 'The cursor starts at cell 0 and cannot move left of it. Check the balance of "<" and ">".'
    if kind == 'loop-end':
        return 'A "]" was reached with no open "[" on the executed path. Check for a stray "]".'
    if kind == 'loop-begin':
        return 'A "[" was skipped but has no matching "]". Check for a missing "]".'
    return None


@dataclass
class BFVMError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SourceLoadError(BFVMError):
    path: str


@dataclass
class BFVMRuntimeError(BFVMError):
    position: int
    line: int
    context: str


@dataclass
class TapeUnderflowError(BFVMRuntimeError):
    pass


@dataclass
class UnmatchedLoopEndError(BFVMRuntimeError):
    pass


@dataclass
class UnmatchedLoopBeginError(BFVMRuntimeError):
    pass


_KINDS = {
    'underflow': ('TapeUnderflow', TapeUnderflowError),
    'loop-end': ('UnmatchedLoopEnd', UnmatchedLoopEndError),
    'loop-begin': ('UnmatchedLoopBegin', UnmatchedLoopBeginError),
}


def make_runtime_error(*, kind: str, message: str, source: str, line: int, position: int) -> BFVMRuntimeError:
    label, cls = _KINDS[kind]
    ctx = _build_context(source.split('\n'), line) if source else ""
    hint = _hint_for(kind)
    ctx_block = f"\n{ctx}" if ctx else ""
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"{label}: {message} (instruction {position}, line {line}){ctx_block}{hint_block}",
        position=position,
        line=line,
        context=ctx,
    )


def make_load_error(*, path: str, reason: str) -> SourceLoadError:
    return SourceLoadError(message=f"Can't open the source file {path!r}: {reason}", path=path)
