import io

import pytest
from whitespace_interp.cli import main, load_source

from program_builder import ws


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("WS_VERBOSE", "WS_DRY_RUN", "WS_HEAP_CAPACITY", "WS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def program_file(tmp_path):
    def write(source, name="program.ws"):
        path = tmp_path / name
        path.write_bytes(source.encode("utf-8") if isinstance(source, str) else source)
        return str(path)
    return write


def test_runs_program(program_file, capsys):
    path = program_file(ws("PUSH 1", "PUSH 1", "ADD", "PUTNUM", "FINISH"))
    assert main([path]) == 0
    captured = capsys.readouterr()
    assert captured.out == "2"


def test_malformed_program_exit_code(program_file, capsys):
    path = program_file("  \t")
    assert main([path]) == 1
    captured = capsys.readouterr()
    assert "UnexpectedEndOfInput" in captured.err
    assert captured.out == ""


def test_runtime_error_exit_code(program_file, capsys):
    path = program_file(ws("RET"))
    assert main([path]) == 1
    assert "ReturnWithoutCall" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.ws")]) == 1
    assert "not found" in capsys.readouterr().err


def test_dry_run_with_dump(program_file, capsys):
    path = program_file(ws("PUSH 5", "PUTNUM"))
    assert main([path, "--dry-run", "--dump", "text"]) == 0
    assert capsys.readouterr().out == "0: PUSH 5\n1: PUTNUM\n"


def test_legacy_dry_run_spelling(program_file, capsys):
    path = program_file(ws("PUSH 5", "PUTNUM"))
    assert main([path, "--dry_run"]) == 0
    assert capsys.readouterr().out == ""


def test_dry_run_from_environment(program_file, capsys, monkeypatch):
    monkeypatch.setenv("WS_DRY_RUN", "true")
    path = program_file(ws("PUSH 5", "PUTNUM"))
    assert main([path]) == 0
    assert capsys.readouterr().out == ""


def test_verbose_goes_to_stderr(program_file, capsys):
    path = program_file(ws("PUSH 5", "PUTNUM"))
    assert main([path, "-v"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "5"
    assert "* Parsing the program:" in captured.err
    assert "PUSH 5 [stack] []" in captured.err


def test_program_from_stdin(monkeypatch, capsys):
    source = ws("PUSH 9", "PUTNUM").encode("utf-8")
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(source)))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == "9"


def test_load_source_reads_bytes(program_file):
    path = program_file(b"\xff \t\n")
    assert load_source(path) == b"\xff \t\n"


def test_bad_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
    with pytest.raises(SystemExit):
        main(["x.ws", "--dump", "xml"])


def test_bad_environment(program_file, monkeypatch):
    monkeypatch.setenv("WS_HEAP_CAPACITY", "-4")
    assert main([program_file("")]) == 2
