## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import struct
from enum import Enum
from dataclasses import dataclass


HOST_MARKER = '!'

INT64_MIN, INT64_MAX = -2**63, 2**63 - 1
UINT64_MAX = 2**64 - 1


class uint(int):
    """Annotation marker for host functions taking or returning unsigned integers."""
    pass


class BinaryOperation(Enum):
    ADD = 'Add'
    SUBTRACT = 'Subtract'
    DIVIDE = 'Divide'
    MULTIPLY = 'Multiply'


_ARITHMETIC = frozenset(BinaryOperation)


class Types(Enum):
    INTEGER = 'Integer'
    UNSIGNED_INTEGER = 'UnsignedInteger'
    FLOAT = 'Float'
    STRING = 'String'
    BOOLEAN = 'Boolean'
    POINTER = 'Pointer'
    VOID = 'Void'

    def supports(self, operation: BinaryOperation) -> bool:
        return operation in _SUPPORTED_OPERATIONS[self]

    def __repr__(self):
        return self.value


_SUPPORTED_OPERATIONS: dict[Types, frozenset] = {
    Types.INTEGER: _ARITHMETIC,
    Types.UNSIGNED_INTEGER: _ARITHMETIC,
    Types.FLOAT: _ARITHMETIC,
    Types.STRING: frozenset({BinaryOperation.ADD}),
    Types.BOOLEAN: frozenset(),
    Types.POINTER: frozenset(),
    Types.VOID: frozenset(),
}


@dataclass(frozen=True)
class Custom:
    """Host-named type of a fixed byte size; no operations are defined on it yet."""
    name: str
    size: int

    def supports(self, operation: BinaryOperation) -> bool:
        return False

    @property
    def value(self) -> str:
        return f"Custom:{self.name}"


TypeTag = Types | Custom


@dataclass(frozen=True)
class AbstractValue:
    """Runtime value as raw bytes plus the type tag that says how to read them.

    Numbers always occupy 8 big-endian bytes; strings are stored as UTF-8.  Decoding
    assumes the tag matches the width, so a `struct.error` here is a bug in the caller.
    """
    memory: bytes
    type: TypeTag

    @classmethod
    def from_int(cls, value: int) -> "AbstractValue":
        return cls(struct.pack('>q', value), Types.INTEGER)

    @classmethod
    def from_uint(cls, value: int) -> "AbstractValue":
        return cls(struct.pack('>Q', value), Types.UNSIGNED_INTEGER)

    @classmethod
    def from_float(cls, value: float) -> "AbstractValue":
        return cls(struct.pack('>d', value), Types.FLOAT)

    @classmethod
    def from_str(cls, value: str) -> "AbstractValue":
        return cls(value.encode('utf-8'), Types.STRING)

    @classmethod
    def from_bool(cls, value: bool) -> "AbstractValue":
        return cls(b'\x01' if value else b'\x00', Types.BOOLEAN)

    @classmethod
    def void(cls) -> "AbstractValue":
        return cls(b'', Types.VOID)

    def to_int(self) -> int: return struct.unpack('>q', self.memory)[0]
    def to_uint(self) -> int: return struct.unpack('>Q', self.memory)[0]
    def to_float(self) -> float: return struct.unpack('>d', self.memory)[0]
    def to_str(self) -> str: return self.memory.decode('utf-8')
    def to_bool(self) -> bool: return self.memory != b'\x00'

    def to_python(self):
        match self.type:
            case Types.INTEGER: return self.to_int()
            case Types.UNSIGNED_INTEGER: return uint(self.to_uint())
            case Types.FLOAT: return self.to_float()
            case Types.STRING: return self.to_str()
            case Types.BOOLEAN: return self.to_bool()
            case Types.VOID: return None
        return self.memory


@dataclass(frozen=True)
class Variable:
    value: AbstractValue
    depth: int


@dataclass(frozen=True)
class Function:
    """Signature of a host-callable function, registered before a run begins."""
    identifier: str
    parameters: tuple[TypeTag, ...]
    returns: TypeTag | None = None

    @property
    def is_host(self) -> bool:
        return self.identifier.endswith(HOST_MARKER)
