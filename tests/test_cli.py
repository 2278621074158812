## dscript — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def run_cli(*cli_args: str | Path, stdin: str | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "dscript", "--plain", *(str(arg) for arg in cli_args)]
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(repo_root() / "src"), env.get("PYTHONPATH")]))
    return subprocess.run(args, input=stdin, capture_output=True, text=True, env=env)


def test_cli_runs_script_file():
    result = run_cli(repo_root() / "tests" / "hello.ds")
    assert result.returncode == 0, result.stdout + result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == "hello"
    assert ">>> Void" in lines
    assert "7" in lines
    assert lines[-2:] == ['>>> String("hello")', ">>> Integer(7)"]
    assert "\033[" not in result.stdout


def test_cli_parser_error_shows_context():
    result = run_cli(repo_root() / "tests" / "error-parser.ds")
    assert result.returncode == 1
    out = result.stdout
    assert "SYNTAX ERROR." in out and "Parsing" in out
    assert "File \"" in out and "error-parser.ds" in out
    assert "    2 | let = 2;" in out


def test_cli_runtime_error_continues_with_partial_exit_code():
    result = run_cli(repo_root() / "tests" / "error-runtime.ds")
    assert result.returncode == 2
    out = result.stdout
    assert "RUNTIME ERROR." in out and "DivisionByZero: Division of 10 by zero." in out
    assert "10" in out.splitlines()


def test_cli_tokenizer_error_on_inline_command():
    result = run_cli("-c", "1 @ 2;")
    assert result.returncode == 1
    assert "SYNTAX ERROR." in result.stdout and "Tokenizing" in result.stdout


def test_cli_inline_commands_each_run():
    result = run_cli("-c", "1 + 2;", '"x";')
    assert result.returncode == 0
    assert result.stdout.splitlines() == [">>> Integer(3)", '>>> String("x")']


def test_cli_ignore_keeps_going_after_syntax_error():
    result = run_cli("--ignore", "exec", "let = 1;", "5;")
    assert result.returncode == 1
    assert "SYNTAX ERROR." in result.stdout
    assert ">>> Integer(5)" in result.stdout


def test_cli_reads_stdin_when_piped():
    result = run_cli(stdin="2 * 21;")
    assert result.returncode == 0
    assert ">>> Integer(42)" in result.stdout


def test_cli_token_dump():
    result = run_cli("tokens", repo_root() / "tests" / "hello.ds")
    assert result.returncode == 0
    out = result.stdout
    assert "LET" in out and "Identifier(greeting)" in out and "String(hello)" in out
    assert out.splitlines()[-1].strip().endswith("EOF")


def test_cli_tree_dump():
    result = run_cli("ast", repo_root() / "tests" / "hello.ds")
    assert result.returncode == 0
    assert result.stdout.startswith("BlockStatement [")
    assert "FunctionCallExpression" in result.stdout and "variable_name='answer'" in result.stdout
