## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Behaviour-free mirrors of the syntax tree; the interpreter only ever sees these.
#

from dataclasses import dataclass

from .tokens import TokenKind
from .types import AbstractValue, BinaryOperation


## EXPRESSIONS
@dataclass(frozen=True)
class Literal:
    value: AbstractValue

@dataclass(frozen=True)
class Symbol:
    name: str

@dataclass(frozen=True)
class Binary:
    left: "ExpressionDescription"
    right: "ExpressionDescription"
    operation: BinaryOperation

@dataclass(frozen=True)
class Unary:
    operator: TokenKind
    operand: "ExpressionDescription"

@dataclass(frozen=True)
class Grouping:
    inner: "ExpressionDescription"

@dataclass(frozen=True)
class Assignment:
    target: "ExpressionDescription"
    operator: TokenKind
    value: "ExpressionDescription"

@dataclass(frozen=True)
class FunctionCall:
    callee: "ExpressionDescription"
    arguments: tuple["ExpressionDescription", ...]


ExpressionDescription = Literal | Symbol | Binary | Unary | Grouping | Assignment | FunctionCall


## STATEMENTS
@dataclass(frozen=True)
class Block:
    statements: tuple["StatementDescription", ...]

@dataclass(frozen=True)
class ExpressionStatement:
    expression: ExpressionDescription

@dataclass(frozen=True)
class VariableDeclaration:
    name: str
    is_const: bool
    explicit_type: str | None
    size: int
    value: ExpressionDescription


StatementDescription = Block | ExpressionStatement | VariableDeclaration
