## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from types import ModuleType
from typing import Callable
from dataclasses import dataclass, field

from .ast import BlockStatement
from .tokens import Token
from .types import AbstractValue, Function
from .lexer import tokenize
from .parser import parse
from .library import Library
from .builtins import load_builtins_library
from .interpreter import Interpreter
from .loader import iter_module_functions


@dataclass
class RunResult:
    """Ordered record of what a run reported: `('result', AbstractValue)` or `('error', str)`."""
    events: list[tuple[str, AbstractValue | str]] = field(default_factory=list)

    @property
    def outputs(self) -> list[AbstractValue]:
        return [payload for kind, payload in self.events if kind == 'result']

    @property
    def errors(self) -> list[str]:
        return [payload for kind, payload in self.events if kind == 'error']

    @property
    def ok(self) -> bool:
        return not self.errors


class Runtime:
    """Minimal runtime facade focused on embedding and extension."""

    def __init__(self, library: Library | None = None):
        self.library = library or load_builtins_library()
        self.reset()

    def reset(self) -> None:
        """Drop every declared variable by starting over with a fresh interpreter."""
        self.interpreter = Interpreter(self.library.functions, executor=self.library.executor)

    # Front end ───────────────────────────────────────────────────────────────────────────────
    def tokenize(self, source: str) -> list[Token]:
        return tokenize(source)

    def parse(self, source: str) -> BlockStatement:
        return parse(tokenize(source))

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, on_result: Callable[[AbstractValue], None] | None = None,
            on_error: Callable[[str], None] | None = None) -> RunResult:
        """Parse then execute; lexer and parser errors propagate before anything runs."""
        block = self.parse(source)
        result = RunResult()

        def _on_result(value: AbstractValue) -> None:
            result.events.append(('result', value))
            if on_result is not None: on_result(value)

        def _on_error(message: str) -> None:
            result.events.append(('error', message))
            if on_error is not None: on_error(message)

        self.interpreter.on_result, self.interpreter.on_error = _on_result, _on_error
        try:
            self.interpreter.execute(block)
        finally:
            self.interpreter.on_result, self.interpreter.on_error = None, None
        return result

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_function(self, name: str | None, func: Callable) -> Function:
        return self.library.add_function(name, func)

    def register_signature(self, function: Function, handler: Callable | None = None) -> None:
        self.library.add_signature(function, handler)

    def load_module(self, module: ModuleType) -> None:
        for name, fn in iter_module_functions(module):
            self.library.add_function(name, fn)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get_signature(self, name: str) -> Function:
        return self.library.get_function(name)

    def list_functions(self) -> dict[str, Function]:
        return dict(self.library.functions)

    @property
    def variables(self) -> dict[str, list]:
        return self.interpreter.vars
