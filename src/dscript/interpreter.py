## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
from typing import Callable

from . import descriptions as D
from .ast import BlockStatement
from .types import (AbstractValue, BinaryOperation, Function, Types, TypeTag, Variable,
                    HOST_MARKER, INT64_MIN, INT64_MAX, UINT64_MAX)
from .errors import (InterpreterError, VariableAlreadyExists, Unimplemented, FunctionNotFound,
                     ArgumentCountMismatch, TypeMismatch, IntegerOverflow, IntegerUnderflow, DivisionByZero)


ResultCallback = Callable[[AbstractValue], None]
ErrorCallback = Callable[[str], None]
Executor = Callable[[str, list[AbstractValue]], TypeTag | None]

_INTEGER_TYPES = (Types.INTEGER, Types.UNSIGNED_INTEGER)


def format_error(exc: InterpreterError) -> str:
    return f"{type(exc).__name__}: {exc}"


def _checked_integer(op: BinaryOperation, left: int, right: int, lowest: int, highest: int) -> int:
    match op:
        case BinaryOperation.ADD: result = left + right
        case BinaryOperation.SUBTRACT: result = left - right
        case BinaryOperation.MULTIPLY: result = left * right
        case BinaryOperation.DIVIDE:
            if right == 0:
                raise DivisionByZero(f"Division of {left} by zero.")
            # Integer division truncates toward zero.
            result = abs(left) // abs(right) * (1 if (left < 0) == (right < 0) else -1)

    if result > highest:
        raise IntegerOverflow(f"{op.value} of {left} and {right} overflows {highest}.")
    if result < lowest:
        raise IntegerUnderflow(f"{op.value} of {left} and {right} underflows {lowest}.")
    return result


def _ieee_float(op: BinaryOperation, left: float, right: float) -> float:
    match op:
        case BinaryOperation.ADD: return left + right
        case BinaryOperation.SUBTRACT: return left - right
        case BinaryOperation.MULTIPLY: return left * right
        case BinaryOperation.DIVIDE:
            if right != 0.0:
                return left / right
            if left == 0.0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)


class Interpreter:
    """Tree-walking evaluator over statement and expression descriptions.

    Not safe for concurrent use: `vars` and `current_depth` are mutated during `execute`.
    """

    def __init__(self, functions: dict[str, Function] | None = None, *,
                 on_result: ResultCallback | None = None,
                 on_error: ErrorCallback | None = None,
                 executor: Executor | None = None):
        self.vars: dict[str, list[Variable]] = {}
        self.current_depth = 0
        self.functions: dict[str, Function] = {} if functions is None else functions
        self.on_result = on_result
        self.on_error = on_error
        self.executor = executor

    def execute(self, block: BlockStatement) -> None:
        for statement in block.body:
            try:
                self.execute_statement(statement.description())
            except InterpreterError as exc:
                if self.on_error is not None:
                    self.on_error(format_error(exc))
            self.current_depth += 1

        if self.vars and self.on_result is not None:
            for variables in self.vars.values():
                for variable in variables:
                    self.on_result(variable.value)

    def execute_statement(self, description: D.StatementDescription) -> AbstractValue | None:
        match description:
            case D.VariableDeclaration(name=name, value=value):
                variable = Variable(self.execute_expression(value), self.current_depth)
                variables = self.vars.setdefault(name, [])
                if any(v.value == variable.value for v in variables):
                    raise VariableAlreadyExists(name)
                variables.append(variable)
                variables.sort(key=lambda v: v.depth)
                return None
            case D.Block(statements=statements):
                result = None
                for statement in statements:
                    result = self.execute_statement(statement)
                    self.current_depth += 1
                return result
            case D.ExpressionStatement(expression=expression):
                value = self.execute_expression(expression)
                if self.on_result is not None:
                    self.on_result(value)
                return None
        raise Unimplemented(f"No evaluation rule for statement {type(description).__name__}.")

    def execute_expression(self, description: D.ExpressionDescription) -> AbstractValue:
        match description:
            case D.Literal(value=value):
                return value
            case D.Symbol(name=name):
                return self.lookup(name)
            case D.Binary(left=left, right=right, operation=operation):
                return self.evaluate_binary(self.execute_expression(left), self.execute_expression(right), operation)
            case D.FunctionCall(callee=callee, arguments=arguments):
                return self.call(callee, [self.execute_expression(a) for a in arguments])
        raise Unimplemented(f"No evaluation rule for {type(description).__name__} expressions.")

    def lookup(self, name: str) -> AbstractValue:
        # Unknown names evaluate to their own text rather than raising SymbolNotFound.
        if variables := self.vars.get(name):
            return variables[0].value
        return AbstractValue.from_str(name)

    def evaluate_binary(self, left: AbstractValue, right: AbstractValue, op: BinaryOperation) -> AbstractValue:
        for operand in (left, right):
            if not operand.type.supports(op):
                raise Unimplemented(f"{op.value} is not supported on {operand.type.value}.")
        if left.type != right.type and not (left.type in _INTEGER_TYPES and right.type in _INTEGER_TYPES):
            raise TypeMismatch(f"Cannot {op.value.lower()} {left.type.value} and {right.type.value}.")

        match left.type:
            case Types.INTEGER:
                return AbstractValue.from_int(_checked_integer(op, left.to_int(), right.to_int(), INT64_MIN, INT64_MAX))
            case Types.UNSIGNED_INTEGER:
                return AbstractValue.from_uint(_checked_integer(op, left.to_uint(), right.to_uint(), 0, UINT64_MAX))
            case Types.FLOAT:
                return AbstractValue.from_float(_ieee_float(op, left.to_float(), right.to_float()))
            case Types.STRING if op == BinaryOperation.ADD:
                return AbstractValue(left.memory + right.memory, Types.STRING)
        raise Unimplemented(f"{op.value} is not implemented for {left.type.value}.")

    def call(self, callee: D.ExpressionDescription, arguments: list[AbstractValue]) -> AbstractValue:
        if not isinstance(callee, D.Symbol) or not callee.name.endswith(HOST_MARKER):
            raise Unimplemented("Only host functions ending in `!` can be called.")
        if (function := self.functions.get(callee.name)) is None:
            raise FunctionNotFound(callee.name)

        if len(arguments) != len(function.parameters):
            raise ArgumentCountMismatch(callee.name, len(function.parameters), len(arguments))
        for i, (argument, expected) in enumerate(zip(arguments, function.parameters)):
            if argument.type != expected:
                raise TypeMismatch(f"`{callee.name}` expects {expected.value} at position {i+1}, got {argument.type.value}.")

        if self.executor is not None:
            self.executor(callee.name, arguments)
        return AbstractValue.void()
