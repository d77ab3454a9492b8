import io

import pytest

from minilisp.__main__ import main, repl
from minilisp.interpreter import Interpreter


def write(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_run_file(tmp_path, capsys):
    path = write(tmp_path, "ok.lisp", "(def x 20)\n(print-debug (+ x 22))\n")
    assert main([path]) == 0
    assert capsys.readouterr().out == "42\n"


def test_files_share_bindings(tmp_path, capsys):
    first = write(tmp_path, "a.lisp", "(def x 1)")
    second = write(tmp_path, "b.lisp", "(print-debug x)")
    assert main([first, second]) == 0
    assert capsys.readouterr().out == "1\n"


def test_failing_form_sets_exit_status(tmp_path, capsys):
    path = write(tmp_path, "bad.lisp", "(car 1)\n(print-debug 7)\n")
    assert main([path]) == 1
    assert capsys.readouterr().out == "7\n"


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.lisp")]) == 1


def test_reader_error(tmp_path, capsys):
    path = write(tmp_path, "broken.lisp", "(print-debug 1")
    assert main([path]) == 1
    assert capsys.readouterr().out == ""


def test_no_prelude_flag(tmp_path):
    path = write(tmp_path, "uses_prelude.lisp", "(print-debug (length '(1 2)))")
    assert main([path]) == 0
    assert main(["--no-prelude", path]) == 1


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "minilisp" in capsys.readouterr().out


def test_repl():
    stdin = io.StringIO("(+ 1\n 2)\n\n(car 1)\n'a\n(def f (lambda (x) x))\n")
    stdout = io.StringIO()
    assert repl(Interpreter(prelude=None), stdin, stdout) == 0
    assert stdout.getvalue() == (
        "minilisp> ... 3\n"
        "minilisp> minilisp> "
        "minilisp> a\n"
        "minilisp> #<lambda (x)>\n"
        "minilisp> \n"
    )


def test_repl_recovers_from_reader_errors():
    stdin = io.StringIO(")\n(+ 2 2)\n")
    stdout = io.StringIO()
    repl(Interpreter(prelude=None), stdin, stdout)
    assert "4\n" in stdout.getvalue()
