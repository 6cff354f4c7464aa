import pytest

from jilox.config import load_settings
from jilox.lox import (
    EXIT_DATAERR,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_SOFTWARE,
    main,
    stringify,
)


def test_stringify():
    assert stringify(None) == "nil"
    assert stringify(True) == "true"
    assert stringify(False) == "false"
    assert stringify(3.0) == "3"
    assert stringify(2.5) == "2.5"
    assert stringify("hi") == "hi"


def test_evaluate_line_expression(lox):
    assert lox.evaluate_line("1 + 2") == (True, "3")
    assert lox.evaluate_line('"foo" + "bar"') == (True, "foobar")


def test_evaluate_line_reports_errors_and_continues(lox):
    ok, out = lox.evaluate_line('"a" + 1')
    assert not ok
    assert out.startswith("Runtime error:")
    ok, out = lox.evaluate_line("(1")
    assert not ok
    assert out.startswith("Parse error:")
    assert lox.evaluate_line("2 * 2") == (True, "4")


def test_commands(lox):
    assert lox.evaluate_line(":ast -123 * (45.67)") == (True, "( * (-123) (gr 45.67) )")
    assert lox.evaluate_line(":tokens 1") == (True, "NUMBER 1 1.0\nEOF  None")
    ok, out = lox.evaluate_line(":help")
    assert ok and ":quit" in out
    ok, out = lox.evaluate_line(":nope")
    assert ok and "Unknown command" in out
    assert lox.evaluate_line(":")[0] is False


def test_quit_command_raises_eof(lox):
    with pytest.raises(EOFError):
        lox.evaluate_line(":quit")


def test_run_file_ok(lox, tmp_path, capsys):
    script = tmp_path / "ok.lox"
    script.write_text("// sum\n1 + 2 * 3\n", encoding="utf-8")
    assert lox.run_file(str(script)) == EXIT_OK
    assert capsys.readouterr().out == "7\n"


@pytest.mark.parametrize(
    "source, status",
    [
        ("(1 + 2", EXIT_DATAERR),
        ("1 @ 2", EXIT_DATAERR),
        ('1 + "a"', EXIT_SOFTWARE),
    ],
)
def test_run_file_errors(lox, tmp_path, capsys, source, status):
    script = tmp_path / "bad.lox"
    script.write_text(source, encoding="utf-8")
    assert lox.run_file(str(script)) == status
    assert "line 1" in capsys.readouterr().err


def test_run_file_missing(lox, tmp_path):
    assert lox.run_file(str(tmp_path / "missing.lox")) == EXIT_NOINPUT


def test_main_runs_script(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("JILOX_HISTORY_FILE", str(tmp_path / "history"))
    script = tmp_path / "main.lox"
    script.write_text("!(1 < 2)", encoding="utf-8")
    assert main([str(script)]) == EXIT_OK
    assert capsys.readouterr().out == "false\n"


def test_main_rejects_extra_arguments():
    with pytest.raises(SystemExit) as e:
        main(["a.lox", "b.lox"])
    assert e.value.code == 2


def test_load_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("JILOX_LOG_LEVEL", "debug")
    monkeypatch.setenv("JILOX_HISTORY_FILE", str(tmp_path / "h"))
    monkeypatch.setenv("JILOX_PROMPT", "lox> ")
    settings = load_settings()
    assert settings.log_level == "DEBUG"
    assert settings.history_file == str(tmp_path / "h")
    assert settings.prompt == "lox> "


@pytest.mark.parametrize(
    "source",
    ["-" * 1200 + "1", "(" * 600 + "1" + ")" * 600],
)
def test_deep_nesting_is_reported_and_prompt_continues(lox, source):
    ok, out = lox.evaluate_line(source)
    assert not ok
    assert "Expression nested too deeply." in out
    assert lox.evaluate_line("1 + 1") == (True, "2")


def test_single_precision_results_print_short(lox):
    assert lox.evaluate_line("0.1 + 0.2") == (True, "0.3")
