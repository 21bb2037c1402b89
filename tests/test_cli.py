import json
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from lbasic import lbasic_cli

PROGRAM = '20 GOTO 10\n10 PRINT "hi";\n'


def test_run_lbasic_string_repr(capsys: pytest.CaptureFixture[str]) -> None:
    lbasic_cli.run_lbasic(source=PROGRAM, is_string=True)
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("PrintStatement(line_number=10")
    assert lines[1].startswith("GotoStatement(line_number=20")


def test_run_lbasic_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "prog.bas"
    file_path.write_text(PROGRAM)
    lbasic_cli.run_lbasic(source=str(file_path), mode="json")
    data = json.loads(capsys.readouterr().out)
    assert [d["line_number"] for d in data] == [10, 20]
    assert data[0]["line_mod"] is True


def test_run_lbasic_rejects_other_extensions(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match=".bas"):
        lbasic_cli.run_lbasic(source=str(tmp_path / "prog.txt"))


def test_run_lbasic_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError, match="mode"):
        lbasic_cli.run_lbasic(source=PROGRAM, is_string=True, mode="xml")


def test_run_lbasic_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    lbasic_cli.run_lbasic(source="10 let a = 1\n\n", is_string=True, mode="tokens")
    out = capsys.readouterr().out.strip()
    assert out == (
        "Token(LINENO, 10) Token(KEYWORD, LET) Token(VARIABLE, A) "
        "Token(OPERATOR, =) Token(NUMBER, 1)"
    )


def test_run_lbasic_emit(capsys: pytest.CaptureFixture[str]) -> None:
    lbasic_cli.run_lbasic(
        source="10 LET A$ = LEFT(B$, 2) + C$\n20 END", is_string=True, mode="emit"
    )
    assert capsys.readouterr().out.splitlines() == [
        "10 LET: A_S; (LEFT(B_S, 2) + C_S)",
        "20 END:",
    ]


def test_main_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert lbasic_cli.main(["-s", "10 END", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == [{"kind": "END", "line_number": 10}]


def test_main_reports_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert lbasic_cli.main(["-s", "10 LET A = "]) == 1
    err = capsys.readouterr().err
    assert "line 10: error: Expected expression" in err


def test_main_reports_lex_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert lbasic_cli.main(["-s", "PRINT 1"]) == 1
    assert "error: Every line must start with a line number" in capsys.readouterr().err


def test_main_extra_functions(capsys: pytest.CaptureFixture[str]) -> None:
    assert lbasic_cli.main(["-s", "10 LET A = foo(1) + ABS(2)", "--functions", "foo", "-e"]) == 0
    assert capsys.readouterr().out.strip() == "10 LET: A; (FOO(1) + ABS(2))"


def test_main_max_depth(capsys: pytest.CaptureFixture[str]) -> None:
    source = "10 IF A THEN IF B THEN END"
    assert lbasic_cli.main(["-s", source, "--max-depth", "1"]) == 1
    assert "nested deeper than 1" in capsys.readouterr().err


def test_main_views_are_exclusive(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        lbasic_cli.main(["-s", "10 END", "--json", "--tokens"])


def test_main_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    assert lbasic_cli.main(["-s", "10 END", "--verbose"]) == 0
    assert "EndStatement(line_number=10)" in capsys.readouterr().out


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(n=st.integers(min_value=0, max_value=99999))  # type: ignore[misc]
def test_main_any_goto_target(
    n: int, capsys: pytest.CaptureFixture[str]
) -> None:
    assert lbasic_cli.main(["-s", f"1 GOTO {n}", "-e"]) == 0
    assert capsys.readouterr().out.strip() == f"1 GOTO: {n}"
