## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from types import ModuleType
from typing import Any, Callable

from .types import Function, Types, TypeTag, uint, HOST_MARKER
from .errors import HostFunctionError


# Checked in order, so `uint` wins over its base `int` and `bool` is never read as `int`.
_ANNOTATION_TYPES: tuple[tuple[type, Types], ...] = (
    (uint, Types.UNSIGNED_INTEGER),
    (bool, Types.BOOLEAN),
    (int, Types.INTEGER),
    (float, Types.FLOAT),
    (str, Types.STRING),
)


def get_python_name(script_name: str) -> str:
    """Map a script host-function name to its Python function name."""
    return 'op_' + script_name.replace(HOST_MARKER, '_b')


def get_script_name(py_name: str) -> str:
    """Inverse of `get_python_name` for well-formed operator names."""
    if not py_name.startswith('op_') or not py_name.endswith('_b'):
        raise HostFunctionError(f"Host function `{py_name}` requires the `op_..._b` naming convention.", name=py_name)
    return py_name[3:-2] + HOST_MARKER


def _annotation_to_type(annotation: Any, name: str, what: str) -> TypeTag:
    for py_type, tag in _ANNOTATION_TYPES:
        if annotation is py_type:
            return tag
    raise HostFunctionError(f"Host function `{name}` has unsupported {what} annotation `{annotation}`.", name=name)


def get_signature(fn: Callable, name: str | None = None) -> Function:
    """Derive the script-facing signature of a Python callable from its annotations.

    Every positional parameter needs an annotation among `int`, `uint`, `float`, `str`
    and `bool`.  The return annotation is required too; `None` declares no return type.
    """
    name = name or get_script_name(fn.__name__)
    if not name.endswith(HOST_MARKER):
        raise HostFunctionError(f"Host function `{name}` must end with `{HOST_MARKER}`, as in `{name}{HOST_MARKER}` implemented by `{get_python_name(name + HOST_MARKER)}`.", name=name)

    sig = inspect.signature(fn)
    params = list(sig.parameters.values())
    if any(p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD) for p in params):
        raise HostFunctionError(f"Host function `{name}` cannot take variadic arguments.", name=name)
    if missing := [p.name for p in params if p.annotation is inspect.Parameter.empty]:
        raise HostFunctionError(f"Host function `{name}` must annotate parameters: {', '.join(missing)}.", name=name)

    ret = sig.return_annotation
    if ret is inspect.Signature.empty:
        raise HostFunctionError(f"Host function `{name}` must declare a return annotation.", name=name)

    return Function(
        identifier=name,
        parameters=tuple(_annotation_to_type(p.annotation, name, f"`{p.name}`") for p in params),
        returns=None if ret in (None, type(None)) else _annotation_to_type(ret, name, "return"),
    )


def iter_module_functions(module: ModuleType):
    """Yield `(script_name, py_function)` pairs listed in a module's `__functions__` registry."""
    registry = getattr(module, '__functions__', None)
    if not isinstance(registry, list):
        raise HostFunctionError(f"Module `{module.__name__}` is missing function registry `__functions__`.",
                                name=module.__name__)
    for fn in registry:
        yield get_script_name(fn.__name__), fn
