## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum, IntEnum, auto
from types import MappingProxyType
from dataclasses import dataclass


class TokenKind(Enum):
    EOF = auto()

    # Reserved; `true` and `false` currently lex as identifiers.
    TRUE = auto()
    FALSE = auto()
    NUMBER = auto()
    STRING = auto()
    IDENTIFIER = auto()

    # Grouping & braces
    PIPE = auto()
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()
    OPEN_CURLY = auto()
    CLOSE_CURLY = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()

    # Equivalence
    EQUALS = auto()
    NOT_EQUALS = auto()
    NOT = auto()
    ASSIGNMENT = auto()

    # Conditional
    LESS = auto()
    LESS_EQUALS = auto()
    GREATER = auto()
    GREATER_EQUALS = auto()

    # Logical
    OR = auto()
    AND = auto()

    # Symbols
    DOT_DOT = auto()
    DOT = auto()
    SEMICOLON = auto()
    DOUBLE_COLON = auto()
    COLON = auto()
    QUESTION = auto()
    COMMA = auto()

    # Shorthand
    PLUS_PLUS = auto()
    MINUS_MINUS = auto()
    PLUS_EQUALS = auto()
    MINUS_EQUALS = auto()
    DIVIDE_EQUALS = auto()
    MULTIPLY_EQUALS = auto()
    MOD_EQUALS = auto()

    # Maths
    PLUS = auto()
    MINUS = auto()
    DIVIDE = auto()
    STAR = auto()
    PERCENT = auto()

    # Reserved keywords
    LET = auto()
    CONST = auto()
    STRUCT = auto()
    IMPORT = auto()
    FN = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    FOR = auto()
    IN = auto()
    MATCH = auto()
    PUB = auto()
    RETURN = auto()
    CONTINUE = auto()
    BREAK = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int = 1
    column: int = 1


KEYWORDS: MappingProxyType = MappingProxyType({
    'let': TokenKind.LET, 'const': TokenKind.CONST, 'struct': TokenKind.STRUCT,
    'import': TokenKind.IMPORT, 'fn': TokenKind.FN, 'if': TokenKind.IF, 'else': TokenKind.ELSE,
    'while': TokenKind.WHILE, 'for': TokenKind.FOR, 'in': TokenKind.IN, 'match': TokenKind.MATCH,
    'pub': TokenKind.PUB, 'return': TokenKind.RETURN, 'continue': TokenKind.CONTINUE,
    'break': TokenKind.BREAK,
})


# Lexer tries these in order, so every multi-character operator sits before its prefix.
PUNCTUATION: tuple[tuple[str, TokenKind], ...] = (
    ('[', TokenKind.OPEN_BRACKET), (']', TokenKind.CLOSE_BRACKET),
    ('{', TokenKind.OPEN_CURLY), ('}', TokenKind.CLOSE_CURLY),
    ('(', TokenKind.OPEN_PAREN), (')', TokenKind.CLOSE_PAREN),
    ('==', TokenKind.EQUALS), ('!=', TokenKind.NOT_EQUALS),
    ('=', TokenKind.ASSIGNMENT), ('!', TokenKind.NOT),
    ('<=', TokenKind.LESS_EQUALS), ('<', TokenKind.LESS),
    ('>=', TokenKind.GREATER_EQUALS), ('>', TokenKind.GREATER),
    ('||', TokenKind.OR), ('|', TokenKind.PIPE), ('&&', TokenKind.AND),
    ('..', TokenKind.DOT_DOT), ('.', TokenKind.DOT),
    (';', TokenKind.SEMICOLON), ('::', TokenKind.DOUBLE_COLON), (':', TokenKind.COLON),
    ('?', TokenKind.QUESTION), (',', TokenKind.COMMA),
    ('++', TokenKind.PLUS_PLUS), ('--', TokenKind.MINUS_MINUS),
    ('+=', TokenKind.PLUS_EQUALS), ('-=', TokenKind.MINUS_EQUALS),
    ('/=', TokenKind.DIVIDE_EQUALS), ('*=', TokenKind.MULTIPLY_EQUALS), ('%=', TokenKind.MOD_EQUALS),
    ('+', TokenKind.PLUS), ('-', TokenKind.MINUS),
    ('/', TokenKind.DIVIDE), ('*', TokenKind.STAR), ('%', TokenKind.PERCENT),
)


class BindingPower(IntEnum):
    NONE = 0
    COMMA = auto()
    ASSIGNMENT = auto()
    LOGICAL = auto()
    COMPARISON = auto()
    ADDITIVE = auto()
    MULTIPLICATIVE = auto()
    UNARY = auto()
    CALL = auto()
    MEMBER = auto()
    PRIMARY = auto()


def _build_binding_powers() -> MappingProxyType:
    table = {TokenKind.COMMA: BindingPower.COMMA}
    for kind in (TokenKind.ASSIGNMENT, TokenKind.PLUS_EQUALS, TokenKind.MINUS_EQUALS,
                 TokenKind.DIVIDE_EQUALS, TokenKind.MULTIPLY_EQUALS, TokenKind.MOD_EQUALS):
        table[kind] = BindingPower.ASSIGNMENT
    for kind in (TokenKind.AND, TokenKind.OR, TokenKind.DOT_DOT):
        table[kind] = BindingPower.LOGICAL
    for kind in (TokenKind.LESS, TokenKind.LESS_EQUALS, TokenKind.GREATER,
                 TokenKind.GREATER_EQUALS, TokenKind.EQUALS, TokenKind.NOT_EQUALS):
        table[kind] = BindingPower.COMPARISON
    for kind in (TokenKind.PLUS, TokenKind.MINUS):
        table[kind] = BindingPower.ADDITIVE
    for kind in (TokenKind.STAR, TokenKind.DIVIDE, TokenKind.PERCENT):
        table[kind] = BindingPower.MULTIPLICATIVE
    table[TokenKind.OPEN_PAREN] = BindingPower.CALL
    table[TokenKind.DOT] = BindingPower.MEMBER
    table[TokenKind.DOUBLE_COLON] = BindingPower.MEMBER
    return MappingProxyType(table)


BINDING_POWERS = _build_binding_powers()


def binding_power(kind: TokenKind) -> BindingPower:
    return BINDING_POWERS.get(kind, BindingPower.NONE)
