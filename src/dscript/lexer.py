## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from typing import Callable
from dataclasses import dataclass

from .tokens import Token, TokenKind, KEYWORDS, PUNCTUATION
from .errors import InvalidToken


Handler = Callable[[re.Match, int, int], tuple[int, Token | None]]


@dataclass(frozen=True)
class Recognizer:
    pattern: re.Pattern
    handler: Handler


def _skip(match: re.Match, line: int, column: int) -> tuple[int, Token | None]:
    return len(match.group(0)), None

def _string(match: re.Match, line: int, column: int) -> tuple[int, Token | None]:
    return len(match.group(0)), Token(TokenKind.STRING, match.group(1), line, column)

def _number(match: re.Match, line: int, column: int) -> tuple[int, Token | None]:
    return len(match.group(0)), Token(TokenKind.NUMBER, match.group(0), line, column)

def _symbol(match: re.Match, line: int, column: int) -> tuple[int, Token | None]:
    text = match.group(0)
    return len(text), Token(KEYWORDS.get(text, TokenKind.IDENTIFIER), text, line, column)

def _fixed(kind: TokenKind) -> Handler:
    def handler(match: re.Match, line: int, column: int) -> tuple[int, Token | None]:
        return len(match.group(0)), Token(kind, match.group(0), line, column)
    return handler


def _build_recognizers() -> tuple[Recognizer, ...]:
    table = [
        Recognizer(re.compile(r'\s+'), _skip),
        Recognizer(re.compile(r'//[^\n]*'), _skip),
        Recognizer(re.compile(r'"([^"]*)"'), _string),
        Recognizer(re.compile(r'[0-9]+(?:\.[0-9]+)?'), _number),
        # A trailing `!` marks host functions, unless it begins a `!=`.
        Recognizer(re.compile(r'[A-Za-z_][A-Za-z0-9_]*(?:!(?!=))?'), _symbol),
    ]
    table += [Recognizer(re.compile(re.escape(text)), _fixed(kind)) for text, kind in PUNCTUATION]
    return tuple(table)


RECOGNIZERS = _build_recognizers()


def tokenize(source: str, recognizers: tuple[Recognizer, ...] = RECOGNIZERS) -> list[Token]:
    """Split source into tokens, committing at each position to the first recognizer that matches."""
    tokens, pos, line, column = [], 0, 1, 1

    while pos < len(source):
        for recognizer in recognizers:
            if (match := recognizer.pattern.match(source, pos)) is not None:
                consumed, token = recognizer.handler(match, line, column)
                break
        else:
            raise InvalidToken(pos, line=line, column=column)

        if token is not None:
            tokens.append(token)
        text = source[pos:pos+consumed]
        if (newlines := text.count('\n')) > 0:
            line, column = line + newlines, len(text) - text.rfind('\n')
        else:
            column += consumed
        pos += consumed

    tokens.append(Token(TokenKind.EOF, '', line, column))
    return tokens
