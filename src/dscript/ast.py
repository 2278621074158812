## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass, field

from . import descriptions as D
from .tokens import Token, TokenKind
from .types import AbstractValue, BinaryOperation, INT64_MAX
from .errors import Unimplemented


_BINARY_OPERATIONS = {
    TokenKind.PLUS: BinaryOperation.ADD,
    TokenKind.MINUS: BinaryOperation.SUBTRACT,
    TokenKind.DIVIDE: BinaryOperation.DIVIDE,
    TokenKind.STAR: BinaryOperation.MULTIPLY,
}


## EXPRESSIONS
@dataclass
class IntegerExpression:
    value: int

    def memory_hint(self) -> int: return 8

    def description(self) -> D.Literal:
        if self.value <= INT64_MAX:
            return D.Literal(AbstractValue.from_int(self.value))
        return D.Literal(AbstractValue.from_uint(self.value))


@dataclass
class FloatExpression:
    value: float

    def memory_hint(self) -> int: return 8

    def description(self) -> D.Literal:
        return D.Literal(AbstractValue.from_float(self.value))


@dataclass
class StringExpression:
    value: str

    def memory_hint(self) -> int: return len(self.value.encode('utf-8'))

    def description(self) -> D.Literal:
        return D.Literal(AbstractValue.from_str(self.value))


@dataclass
class SymbolExpression:
    value: str

    def memory_hint(self) -> int: return 0

    def description(self) -> D.Symbol:
        return D.Symbol(self.value)


@dataclass
class BinaryExpression:
    left: "Expression"
    operator: Token
    right: "Expression"

    def memory_hint(self) -> int:
        return self.left.memory_hint() + self.right.memory_hint()

    def description(self) -> D.Binary:
        if (operation := _BINARY_OPERATIONS.get(self.operator.kind)) is None:
            raise Unimplemented(f"Operator `{self.operator.text}` has no evaluation rule.", token=self.operator)
        return D.Binary(self.left.description(), self.right.description(), operation)


@dataclass
class UnaryExpression:
    operator: Token
    expression: "Expression"

    def memory_hint(self) -> int: return self.expression.memory_hint()

    def description(self) -> D.Unary:
        return D.Unary(self.operator.kind, self.expression.description())


@dataclass
class GroupingExpression:
    inner: "Expression"

    def memory_hint(self) -> int: return self.inner.memory_hint()

    def description(self) -> D.Grouping:
        return D.Grouping(self.inner.description())


@dataclass
class AssignmentExpression:
    assignee: "Expression"
    operator: Token
    value: "Expression"

    def memory_hint(self) -> int: return self.value.memory_hint()

    def description(self) -> D.Assignment:
        return D.Assignment(self.assignee.description(), self.operator.kind, self.value.description())


@dataclass
class FunctionCallExpression:
    identifier: "Expression"
    params: list["Expression"] = field(default_factory=list)

    def memory_hint(self) -> int:
        return sum(p.memory_hint() for p in self.params)

    def description(self) -> D.FunctionCall:
        return D.FunctionCall(self.identifier.description(), tuple(p.description() for p in self.params))


Expression = (IntegerExpression | FloatExpression | StringExpression | SymbolExpression | BinaryExpression
              | UnaryExpression | GroupingExpression | AssignmentExpression | FunctionCallExpression)


## STATEMENTS
@dataclass
class BlockStatement:
    body: list["Statement"] = field(default_factory=list)

    def memory_hint(self) -> int:
        return sum(s.memory_hint() for s in self.body)

    def description(self) -> D.Block:
        return D.Block(tuple(s.description() for s in self.body))


@dataclass
class ExpressionStatement:
    expression: Expression

    def memory_hint(self) -> int: return self.expression.memory_hint()

    def description(self) -> D.ExpressionStatement:
        return D.ExpressionStatement(self.expression.description())


@dataclass
class VariableStatement:
    is_const: bool
    variable_name: str
    explicit_type: str | None
    assignment: Expression

    def memory_hint(self) -> int: return self.assignment.memory_hint()

    def description(self) -> D.VariableDeclaration:
        return D.VariableDeclaration(self.variable_name, self.is_const, self.explicit_type,
                                     self.memory_hint(), self.assignment.description())


Statement = BlockStatement | ExpressionStatement | VariableStatement
