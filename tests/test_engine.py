"""
Execution of compiled programs through the engine.
"""

import io

import pytest

from bfvm import (
    Engine,
    TapeUnderflowError,
    UnmatchedLoopBeginError,
    UnmatchedLoopEndError,
    compile_source,
    run_string,
)


def make_engine(source, input_data=b""):
    return Engine(
        compile_source(source),
        stdin=io.BytesIO(input_data),
        stdout=io.BytesIO(),
        source=source,
    )


def test_multiply_outputs_64():
    assert run_string("++++++++[>++++++++<-]>.").output == bytes([64])


def test_echo_input():
    assert run_string(",.", b"A").output == bytes([65])


def test_echo_without_input_outputs_initial_zero():
    assert run_string(",.").output == b"\x00"


def test_input_exhaustion_leaves_cell_unchanged():
    result = run_string("+++++,,,.", b"\x07")
    assert result.output == b"\x07"


def test_input_reads_one_byte_per_repeat():
    result = run_string(",,>,.<.", b"abc")
    assert result.output == b"cb"


def test_output_repeats_count_times():
    assert run_string("+++...").output == b"\x03\x03\x03"


def test_output_is_raw_bytes():
    result = run_string("-.")
    assert result.output == b"\xff"


def test_hello_world():
    source = (
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>"
        "---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
    )
    assert run_string(source).output == b"Hello World!\n"


@pytest.mark.parametrize("n", [0, 1, 5, 200])
def test_loop_body_runs_n_times(n):
    # Each pass prints once.
    result = run_string("+" * n + "[>+.<-]")
    assert len(result.output) == n
    assert result.cells[0] == 0


def test_skipped_loop_with_nested_loops():
    result = run_string("[+[+]>]+.")
    assert result.output == b"\x01"
    assert result.cursor == 0


def test_comment_only_program_halts_without_io():
    engine = make_engine("nothing to see here")
    state = engine.run()
    assert state.halted
    assert state.steps == 0
    assert engine.stdout.getvalue() == b""
    assert len(engine.tape) == 1


def test_empty_program_halts_immediately():
    engine = make_engine("")
    assert engine.step() is False
    assert not engine.running


def test_open_loop_at_end_still_halts():
    result = run_string("+[")
    assert result.open_loops == 1


def test_step_by_step():
    engine = make_engine("++>+")
    assert engine.step() is True
    assert engine.tape.read() == 2
    assert engine.step() is True
    assert engine.tape.cursor == 1
    assert engine.step() is False
    assert engine.state.steps == 3
    assert engine.step() is False


def test_loop_end_returns_to_loop_begin():
    engine = make_engine("+[-]")
    engine.step()
    engine.step()
    assert engine.state.loop_stack == [1]
    engine.step()
    engine.step()
    assert engine.state.ip == 1
    assert engine.state.loop_stack == []
    assert engine.step() is False


def test_underflow_is_fatal():
    with pytest.raises(TapeUnderflowError) as excinfo:
        run_string(">><<<")
    assert excinfo.value.position == 1
    assert "TapeUnderflow" in str(excinfo.value)


def test_stray_loop_end_is_fatal():
    with pytest.raises(UnmatchedLoopEndError) as excinfo:
        run_string("]")
    assert excinfo.value.position == 0
    assert excinfo.value.line == 1


def test_unmatched_loop_begin_on_zero_cell_is_fatal():
    with pytest.raises(UnmatchedLoopBeginError):
        run_string("+>[[]")


def test_error_context_marks_the_line():
    source = "+\n+\n<<\n"
    with pytest.raises(TapeUnderflowError) as excinfo:
        run_string(source)
    err = excinfo.value
    assert err.line == 3
    assert ">    3 | <<" in err.context
    assert "Hint:" in str(err)


def test_reset():
    engine = make_engine("+++>")
    engine.run()
    engine.reset()
    assert engine.running
    assert engine.state.ip == 0
    assert engine.tape.cursor == 0
    assert engine.tape.read() == 0
