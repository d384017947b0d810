import logging

from .compiler import Command, Instruction, compile_source, format_listing, render
from .engine import Engine
from .errors import (
    BFVMError,
    BFVMRuntimeError,
    SourceLoadError,
    TapeUnderflowError,
    UnmatchedLoopBeginError,
    UnmatchedLoopEndError,
)
from .tape import Tape
from .api import RunOptions, RunResult, compile_file, compile_string, load_source, run_file, run_string

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Command',
    'Instruction',
    'compile_source',
    'format_listing',
    'render',
    'Engine',
    'Tape',
    'BFVMError',
    'BFVMRuntimeError',
    'SourceLoadError',
    'TapeUnderflowError',
    'UnmatchedLoopBeginError',
    'UnmatchedLoopEndError',
    'RunOptions',
    'RunResult',
    'compile_string',
    'compile_file',
    'load_source',
    'run_string',
    'run_file',
]
