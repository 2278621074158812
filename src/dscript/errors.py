## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .tokens import Token, TokenKind


class ScriptError(Exception):
    def __init__(self, message: str = "", *, token: Token | None = None):
        """Base class for all errors raised by the script front end and evaluator."""
        super().__init__(message)
        self.token: Token | None = token


## LEXING
class TokenizerError(ScriptError, ValueError):
    pass

class InvalidToken(TokenizerError):
    def __init__(self, position: int, *, line: int = 1, column: int = 1):
        super().__init__(f"No token matches source at offset {position} (line {line}, column {column}).")
        self.position = position
        self.line = line
        self.column = column


## PARSING
class ParserError(ScriptError):
    @property
    def line(self) -> int | None:
        return self.token.line if self.token is not None else None

    @property
    def column(self) -> int | None:
        return self.token.column if self.token is not None else None

class NoHandlerForToken(ParserError):
    pass

class UnexpectedTokenKind(ParserError):
    def __init__(self, message: str = "", *, token: Token | None = None, expected: TokenKind | None = None):
        super().__init__(message, token=token)
        self.expected = expected

class UnexpectedEndOfInput(ParserError):
    pass

class NumberIsNotANumber(ParserError, ValueError):
    pass


## INTERPRETATION
class InterpreterError(ScriptError):
    pass

class VariableAlreadyExists(InterpreterError):
    def __init__(self, name: str):
        super().__init__(f"Variable `{name}` already holds this value.")
        self.name = name

class SymbolNotFound(InterpreterError, NameError):
    def __init__(self, name: str):
        super().__init__(f"Symbol `{name}` was not found.")
        self.name = name

class Unimplemented(InterpreterError, NotImplementedError):
    pass

class FunctionNotFound(InterpreterError, NameError):
    def __init__(self, name: str):
        super().__init__(f"Function `{name}` is not registered with the host.")
        self.name = name

class ArgumentCountMismatch(InterpreterError, TypeError):
    def __init__(self, name: str, expected: int, given: int):
        super().__init__(f"`{name}` expects {expected} argument(s), but {given} given.")
        self.name = name
        self.expected = expected
        self.given = given

class TypeMismatch(InterpreterError, TypeError):
    pass

class HostCallFailed(InterpreterError, RuntimeError):
    def __init__(self, name: str, reason: str = ""):
        super().__init__(f"Host function `{name}` failed" + (f": {reason}" if reason else "."))
        self.name = name


class ArithmeticFailure(InterpreterError, ArithmeticError):
    """Checked integer arithmetic that would wrap or trap."""
    pass

class IntegerOverflow(ArithmeticFailure, OverflowError):
    pass

class IntegerUnderflow(ArithmeticFailure):
    pass

class DivisionByZero(ArithmeticFailure, ZeroDivisionError):
    pass


## HOST REGISTRATION
class HostFunctionError(ScriptError, TypeError):
    """Registration-time problems with Python callables exposed to scripts."""
    def __init__(self, message: str = "", *, name: str | None = None):
        super().__init__(message)
        self.name = name
