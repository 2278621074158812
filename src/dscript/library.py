## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .types import AbstractValue, Function, TypeTag
from .errors import InterpreterError, FunctionNotFound, HostFunctionError, HostCallFailed
from .loader import get_signature


@dataclass
class Library:
    functions: dict[str, Function] = field(default_factory=dict)
    handlers: dict[str, Callable[..., Any]] = field(default_factory=dict)

    # Registration helpers
    def add_function(self, name: str | None, fn: Callable[..., Any]) -> Function:
        function = get_signature(fn, name)
        self.add_signature(function, fn)
        return function

    def add_signature(self, function: Function, handler: Callable[..., Any] | None = None) -> None:
        if not function.is_host:
            raise HostFunctionError(f"Host function `{function.identifier}` must end with `!`.", name=function.identifier)
        self.functions[function.identifier] = function
        if handler is not None:
            self.handlers[function.identifier] = handler

    def ensure_consistent(self) -> None:
        for name in self.handlers:
            assert name in self.functions, f"Handler `{name}` has no registered signature."

    def get_function(self, name: str) -> Function:
        if (function := self.functions.get(name)) is not None:
            return function
        raise FunctionNotFound(name)

    def executor(self, name: str, arguments: list[AbstractValue]) -> TypeTag | None:
        """Invoke the Python handler for a type-checked host call, with arguments decoded to Python values."""
        function = self.get_function(name)
        if (handler := self.handlers.get(name)) is not None:
            try:
                handler(*(a.to_python() for a in arguments))
            except InterpreterError:
                raise
            except Exception as exc:
                raise HostCallFailed(name, f"{type(exc).__name__}: {exc}") from exc
        return function.returns
