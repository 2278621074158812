## dscript — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from types import ModuleType

from dscript.runtime import Runtime, RunResult
from dscript.library import Library
from dscript.types import AbstractValue, Function, Types
from dscript.errors import InvalidToken, ParserError, HostFunctionError

import pytest


def test_run_reports_results_and_errors_in_order():
    rt = Runtime()
    result = rt.run("1 + 1; 2 / 0; 3;")
    assert isinstance(result, RunResult)
    assert [kind for kind, _ in result.events] == ['result', 'error', 'result']
    assert result.outputs == [AbstractValue.from_int(2), AbstractValue.from_int(3)]
    assert result.errors[0].startswith("DivisionByZero:")
    assert not result.ok


def test_run_forwards_to_caller_callbacks_then_clears_them():
    rt = Runtime()
    seen, failed = [], []
    result = rt.run('"a"; x!();', on_result=seen.append, on_error=failed.append)
    assert seen == result.outputs == [AbstractValue.from_str("a")]
    assert failed == result.errors and len(failed) == 1
    assert rt.interpreter.on_result is None and rt.interpreter.on_error is None


def test_syntax_errors_propagate_before_execution():
    rt = Runtime()
    with pytest.raises(InvalidToken):
        rt.run("1 # 2;")
    with pytest.raises(ParserError):
        rt.run("print!(1; let x = 2;")
    assert rt.variables == {}


def test_variables_persist_between_runs_until_reset():
    rt = Runtime()
    rt.run("let x = 40;")
    assert rt.run("x + 2;").outputs[0] == AbstractValue.from_int(42)
    rt.reset()
    assert rt.variables == {}
    assert rt.run("x;").outputs == [AbstractValue.from_str("x")]


def test_register_function_is_callable_from_scripts():
    rt = Runtime()
    received = []
    def remember(value: int, label: str) -> None: received.append((value, label))
    rt.register_function("remember!", remember)

    result = rt.run('remember!(6 * 7, "answer");')
    assert result.ok
    assert received == [(42, "answer")]
    assert result.outputs == [AbstractValue.void()]


def test_register_function_requires_marker():
    rt = Runtime()
    def plain(x: int) -> None: pass
    with pytest.raises(HostFunctionError):
        rt.register_function("plain", plain)


def test_register_signature_without_handler():
    rt = Runtime()
    rt.register_signature(Function("notify!", (Types.STRING,)))
    assert rt.run('notify!("ping");').ok
    assert rt.run('notify!(1);').errors[0].startswith("TypeMismatch:")


def test_load_module_uses_function_registry():
    calls = []
    def op_double_b(x: float) -> float:
        calls.append(x)
        return x * 2
    module = ModuleType("doubling")
    module.__functions__ = [op_double_b]

    rt = Runtime()
    rt.load_module(module)
    assert rt.get_signature("double!") == Function("double!", (Types.FLOAT,), Types.FLOAT)
    rt.run("double!(1.5);")
    assert calls == [1.5]


def test_load_module_without_registry():
    with pytest.raises(HostFunctionError):
        Runtime().load_module(ModuleType("empty"))


def test_list_functions_includes_builtins():
    names = set(Runtime().list_functions())
    assert {"print!", "print_int!", "print_uint!", "print_float!", "warn!"} <= names


def test_custom_library_replaces_builtins():
    rt = Runtime(library=Library())
    assert rt.list_functions() == {}
    assert rt.run('print!("x");').errors[0].startswith("FunctionNotFound:")


def test_failing_host_function_only_fails_its_statement():
    rt = Runtime()
    def explode(x: int) -> None: raise ValueError("host failed")
    rt.register_function("explode!", explode)

    result = rt.run("explode!(1); 2;")
    assert [kind for kind, _ in result.events] == ['error', 'result']
    assert result.errors[0].startswith("HostCallFailed:") and "ValueError: host failed" in result.errors[0]
    assert result.outputs == [AbstractValue.from_int(2)]
