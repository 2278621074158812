## dscript — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math

from dscript import descriptions as D
from dscript.lexer import tokenize
from dscript.parser import parse
from dscript.interpreter import Interpreter
from dscript.types import AbstractValue, BinaryOperation, Custom, Function, Types
from dscript.errors import Unimplemented

import pytest


INT = AbstractValue.from_int
UINT = AbstractValue.from_uint
FLOAT = AbstractValue.from_float
STR = AbstractValue.from_str


def run(source: str, functions=None, executor=None):
    results, errors = [], []
    interp = Interpreter(functions, on_result=results.append, on_error=errors.append, executor=executor)
    interp.execute(parse(tokenize(source)))
    return interp, results, errors


def error_kinds(errors: list[str]) -> list[str]:
    return [e.split(':', 1)[0] for e in errors]


def test_precedence_evaluates_multiplication_first():
    _, results, errors = run("1 + 2 * 3;")
    assert results == [INT(7)] and errors == []


def test_integer_division_truncates_toward_zero():
    _, results, _ = run("7 / 2; let n = 0 - 7; n / 2;")
    assert results[:2] == [INT(3), INT(-3)]


def test_division_by_zero_is_reported_and_execution_continues():
    _, results, errors = run("10 / 0; 1;")
    assert error_kinds(errors) == ["DivisionByZero"]
    assert results == [INT(1)]


def test_signed_overflow_and_underflow():
    _, _, errors = run("9223372036854775807 + 1; 0 - 9223372036854775807 - 2; 4611686018427387904 * 2;")
    assert error_kinds(errors) == ["IntegerOverflow", "IntegerUnderflow", "IntegerOverflow"]


def test_unsigned_arithmetic_is_checked():
    _, results, errors = run("18446744073709551615 + 1; 9223372036854775808 - 9223372036854775809; 9223372036854775808 + 1;")
    assert error_kinds(errors) == ["IntegerOverflow", "IntegerUnderflow"]
    assert results == [UINT(2**63 + 1)]


def test_float_arithmetic_follows_ieee():
    _, results, errors = run("1.5 + 2.25; 1.0 / 0.0; 0.0 / 0.0;")
    assert errors == []
    assert results[0] == FLOAT(3.75)
    assert results[1].to_float() == math.inf
    assert math.isnan(results[2].to_float())


def test_string_concatenation_and_unsupported_subtraction():
    _, results, errors = run('"a" + "b"; "a" - "b";')
    assert results == [STR("ab")]
    assert error_kinds(errors) == ["Unimplemented"]


def test_mixed_operand_types_mismatch():
    _, results, errors = run('1 + 1.5; "a" + 1;')
    assert results == []
    assert error_kinds(errors) == ["TypeMismatch", "TypeMismatch"]


def test_unknown_symbol_evaluates_to_its_name():
    _, results, errors = run("hello;")
    assert results == [STR("hello")] and errors == []


def test_unsupported_expression_kinds_fail_per_statement():
    _, results, errors = run("-1; (2); x = 3; 1 < 2; 4;")
    assert error_kinds(errors) == ["Unimplemented"] * 4
    assert results == [INT(4)]


def test_redeclaring_identical_value_is_rejected():
    interp, _, errors = run("let x = 1; let x = 1;")
    assert error_kinds(errors) == ["VariableAlreadyExists"]
    assert len(interp.vars["x"]) == 1


def test_redeclaring_different_value_shadows_by_depth():
    interp, results, errors = run("let x = 1; let x = 2; x;")
    assert errors == []
    assert [v.depth for v in interp.vars["x"]] == [0, 1]
    # Lookup picks the shallowest entry, then the end-of-run dump lists both.
    assert results == [INT(1), INT(1), INT(2)]


def test_depth_advances_after_failed_statements():
    interp, _, _ = run("1 / 0; let y = 1;")
    assert interp.vars["y"][0].depth == 1
    assert interp.current_depth == 2


def test_failure_does_not_disturb_later_statements():
    _, results, errors = run("let a = 1; a / 0; let b = a + 1; b;")
    assert error_kinds(errors) == ["DivisionByZero"]
    assert results == [INT(2), INT(1), INT(2)]


def test_nested_block_statement_advances_depth():
    interp = Interpreter()
    block = D.Block((D.VariableDeclaration("z", False, None, 8, D.Literal(INT(1))),
                     D.ExpressionStatement(D.Literal(INT(2)))))
    assert interp.execute_statement(block) is None
    assert interp.current_depth == 2
    assert interp.vars["z"][0].value == INT(1)


def test_custom_values_support_no_arithmetic():
    point = AbstractValue(b"\x00" * 16, Custom("point", 16))
    interp = Interpreter()
    with pytest.raises(Unimplemented):
        interp.evaluate_binary(point, point, BinaryOperation.ADD)
    with pytest.raises(Unimplemented):
        interp.execute_expression(D.Binary(D.Literal(INT(1)), D.Literal(point), BinaryOperation.MULTIPLY))


def test_callbacks_are_optional():
    interp = Interpreter()
    interp.execute(parse(tokenize("let v = 1 / 0; let w = 3;")))
    assert list(interp.vars) == ["w"]


## HOST CALLS
@pytest.fixture
def host():
    calls = []
    def executor(name, arguments):
        calls.append((name, list(arguments)))
        return None
    functions = {"print!": Function("print!", (Types.STRING,)),
                 "add!": Function("add!", (Types.INTEGER, Types.INTEGER), Types.INTEGER)}
    return functions, executor, calls


def test_host_call_invokes_executor_once_and_yields_void(host):
    functions, executor, calls = host
    _, results, errors = run('print!("hi");', functions, executor)
    assert errors == []
    assert calls == [("print!", [STR("hi")])]
    assert results == [AbstractValue.void()]


def test_host_call_arguments_are_evaluated_first(host):
    functions, executor, calls = host
    run('let a = 2; add!(a * 3, 1);', functions, executor)
    assert calls == [("add!", [INT(6), INT(1)])]


def test_host_call_unknown_function(host):
    functions, executor, calls = host
    _, _, errors = run('missing!("hi");', functions, executor)
    assert error_kinds(errors) == ["FunctionNotFound"]
    assert calls == []


def test_host_call_argument_count_and_types(host):
    functions, executor, calls = host
    _, _, errors = run('print!(); print!("a", "b"); print!(1); add!(1, 2.0);', functions, executor)
    assert error_kinds(errors) == ["ArgumentCountMismatch", "ArgumentCountMismatch", "TypeMismatch", "TypeMismatch"]
    assert calls == []


def test_only_marked_functions_are_callable(host):
    functions, executor, calls = host
    _, _, errors = run('print("hi"); 5(1);', functions, executor)
    assert error_kinds(errors) == ["Unimplemented", "Unimplemented"]
    assert calls == []


def test_host_call_without_executor_still_checks_signature(host):
    functions, _, _ = host
    _, results, errors = run('print!("x"); print!(2);', functions)
    assert results == [AbstractValue.void()]
    assert error_kinds(errors) == ["TypeMismatch"]
