## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from typing import Callable
from collections import deque

from .tokens import Token, TokenKind, BindingPower, binding_power
from .errors import NoHandlerForToken, UnexpectedTokenKind, UnexpectedEndOfInput, NumberIsNotANumber
from .types import UINT64_MAX
from .ast import (
    Expression, Statement,
    IntegerExpression, FloatExpression, StringExpression, SymbolExpression, BinaryExpression,
    UnaryExpression, GroupingExpression, AssignmentExpression, FunctionCallExpression,
    BlockStatement, ExpressionStatement, VariableStatement,
)


_INTEGER_RE = re.compile(r'[0-9]+')
_FLOAT_RE = re.compile(r'[0-9]+(?:\.[0-9]+)?')


class Parser:
    """Pratt parser over a token queue, driven by null-denotation, left-denotation and statement tables."""

    def __init__(self, tokens: list[Token]):
        self.tokens = deque(tokens)
        self.nud: dict[TokenKind, Callable[[], Expression]] = {}
        self.led: dict[TokenKind, Callable[[Expression, BindingPower], Expression]] = {}
        self.stmt: dict[TokenKind, Callable[[], Statement]] = {}
        self._create_lookup_tables()

    def _create_lookup_tables(self) -> None:
        K = TokenKind
        for kind in (K.NUMBER, K.STRING, K.IDENTIFIER):
            self.nud[kind] = self.parse_primary_expression
        for kind in (K.MINUS, K.NOT):
            self.nud[kind] = self.parse_unary_expression
        self.nud[K.OPEN_PAREN] = self.parse_grouping_expression

        for kind in (K.AND, K.OR, K.DOT_DOT,
                     K.LESS, K.LESS_EQUALS, K.GREATER, K.GREATER_EQUALS, K.EQUALS, K.NOT_EQUALS,
                     K.PLUS, K.MINUS, K.STAR, K.DIVIDE, K.PERCENT):
            self.led[kind] = self.parse_binary_expression
        for kind in (K.ASSIGNMENT, K.PLUS_EQUALS, K.MINUS_EQUALS,
                     K.DIVIDE_EQUALS, K.MULTIPLY_EQUALS, K.MOD_EQUALS):
            self.led[kind] = self.parse_assignment_expression
        self.led[K.OPEN_PAREN] = self.parse_function_call

        self.stmt[K.LET] = self.parse_variable_statement
        self.stmt[K.CONST] = self.parse_variable_statement

    # Token queue ─────────────────────────────────────────────────────────────────────────────
    def current(self) -> Token:
        if not self.tokens:
            raise UnexpectedEndOfInput("Token stream ended before the end-of-input marker.")
        return self.tokens[0]

    def advance(self) -> Token:
        if not self.tokens:
            raise UnexpectedEndOfInput("Token stream ended before the end-of-input marker.")
        return self.tokens.popleft()

    def expect(self, kind: TokenKind) -> Token:
        if (token := self.current()).kind != kind:
            raise UnexpectedTokenKind(f"Expected {kind.name} but found {token.kind.name}.", token=token, expected=kind)
        return self.advance()

    def has_tokens(self) -> bool:
        return self.current().kind != TokenKind.EOF

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def parse_expression(self, power: BindingPower) -> Expression:
        token = self.current()
        if (nud := self.nud.get(token.kind)) is None:
            raise NoHandlerForToken(f"`{token.text or token.kind.name}` cannot start an expression.", token=token)
        left = nud()

        while (next_power := binding_power((token := self.current()).kind)) > power:
            if (led := self.led.get(token.kind)) is None:
                raise NoHandlerForToken(f"`{token.text}` cannot continue an expression.", token=token)
            left = led(left, next_power)
        return left

    def parse_primary_expression(self) -> Expression:
        token = self.advance()
        match token.kind:
            case TokenKind.NUMBER:
                return self._parse_number(token)
            case TokenKind.STRING:
                return StringExpression(token.text)
            case TokenKind.IDENTIFIER:
                return SymbolExpression(token.text)
        raise UnexpectedTokenKind(f"{token.kind.name} is not a primary expression.", token=token)

    def _parse_number(self, token: Token) -> Expression:
        if _INTEGER_RE.fullmatch(token.text) and (value := int(token.text)) <= UINT64_MAX:
            return IntegerExpression(value)
        if _FLOAT_RE.fullmatch(token.text):
            return FloatExpression(float(token.text))
        raise NumberIsNotANumber(f"`{token.text}` is not a valid number.", token=token)

    def parse_unary_expression(self) -> Expression:
        operator = self.advance()
        return UnaryExpression(operator, self.parse_expression(BindingPower.UNARY))

    def parse_grouping_expression(self) -> Expression:
        self.expect(TokenKind.OPEN_PAREN)
        inner = self.parse_expression(BindingPower.NONE)
        self.expect(TokenKind.CLOSE_PAREN)
        return GroupingExpression(inner)

    def parse_binary_expression(self, left: Expression, power: BindingPower) -> Expression:
        operator = self.advance()
        return BinaryExpression(left, operator, self.parse_expression(power))

    def parse_assignment_expression(self, left: Expression, power: BindingPower) -> Expression:
        operator = self.advance()
        return AssignmentExpression(left, operator, self.parse_expression(power))

    def parse_function_call(self, left: Expression, power: BindingPower) -> Expression:
        self.expect(TokenKind.OPEN_PAREN)
        params = []
        if self.current().kind != TokenKind.CLOSE_PAREN:
            # Arguments bind tighter than commas, so each one stops at the separator.
            params.append(self.parse_expression(BindingPower.COMMA))
            while self.current().kind == TokenKind.COMMA:
                self.advance()
                params.append(self.parse_expression(BindingPower.COMMA))
        self.expect(TokenKind.CLOSE_PAREN)
        return FunctionCallExpression(left, params)

    # Statements ──────────────────────────────────────────────────────────────────────────────
    def parse_statement(self) -> Statement:
        if (handler := self.stmt.get(self.current().kind)) is not None:
            return handler()
        expression = self.parse_expression(BindingPower.NONE)
        self.expect(TokenKind.SEMICOLON)
        return ExpressionStatement(expression)

    def parse_variable_statement(self) -> Statement:
        keyword = self.advance()
        if keyword.kind not in (TokenKind.LET, TokenKind.CONST):
            raise UnexpectedTokenKind(f"Expected `let` or `const`, found `{keyword.text}`.", token=keyword)

        name = self.expect(TokenKind.IDENTIFIER)
        explicit_type = None
        if self.current().kind == TokenKind.COLON:
            self.advance()
            explicit_type = self.expect(TokenKind.IDENTIFIER).text
        self.expect(TokenKind.ASSIGNMENT)
        assignment = self.parse_expression(BindingPower.NONE)
        self.expect(TokenKind.SEMICOLON)

        return VariableStatement(keyword.kind == TokenKind.CONST, name.text, explicit_type, assignment)


def parse(tokens: list[Token]) -> BlockStatement:
    parser, body = Parser(tokens), []
    while parser.has_tokens():
        body.append(parser.parse_statement())
    return BlockStatement(body)
