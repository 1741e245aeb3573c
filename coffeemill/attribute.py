"""Dynamically typed attribute values attached to particles, frames and trajectories."""

from __future__ import annotations

import enum
from typing import Any

import numpy as np

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class AttributeKind(enum.IntEnum):
    """The kind of value an :class:`Attribute` currently holds."""

    EMPTY = 0
    BOOLEAN = 1
    INTEGER = 2
    FLOATING = 3
    STRING = 4
    VECTOR = 5
    ARRAY = 6


def _classify(value: Any) -> tuple[AttributeKind, Any]:
    if value is None:
        return AttributeKind.EMPTY, None
    if isinstance(value, Attribute):
        kind, stored = value.kind(), value.value
        if kind is AttributeKind.VECTOR:
            stored = stored.copy()
        elif kind is AttributeKind.ARRAY:
            stored = [Attribute(item) for item in stored]
        return kind, stored
    if isinstance(value, (bool, np.bool_)):
        return AttributeKind.BOOLEAN, bool(value)
    if isinstance(value, (int, np.integer)):
        number = int(value)
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise OverflowError(f"integer attribute out of 64-bit range: {number}")
        return AttributeKind.INTEGER, number
    if isinstance(value, (float, np.floating)):
        return AttributeKind.FLOATING, float(value)
    if isinstance(value, str):
        return AttributeKind.STRING, value
    if isinstance(value, np.ndarray):
        if value.shape != (3,):
            raise ValueError(f"vector attribute must have shape (3,), got {value.shape}")
        return AttributeKind.VECTOR, value.astype(float)
    if isinstance(value, (list, tuple)):
        return AttributeKind.ARRAY, [Attribute(item) for item in value]
    raise TypeError(f"unsupported attribute value type: {type(value).__name__}")


def _format_float(value: float) -> str:
    return f"{value:g}"


class Attribute:
    """A value that is empty, a boolean, an integer, a float, a string,
    a 3D vector (numpy array) or an array of attributes."""

    __slots__ = ("_kind", "_value")

    def __init__(self, value: Any = None) -> None:
        self._kind, self._value = _classify(value)

    @property
    def value(self) -> Any:
        """The stored value, ``None`` when empty."""
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        self._kind, self._value = _classify(new_value)

    def kind(self) -> AttributeKind:
        return self._kind

    def empty(self) -> bool:
        return self.is_empty()

    def clear(self) -> None:
        self._kind, self._value = AttributeKind.EMPTY, None

    def is_empty(self) -> bool:
        return self._kind is AttributeKind.EMPTY

    def is_boolean(self) -> bool:
        return self._kind is AttributeKind.BOOLEAN

    def is_integer(self) -> bool:
        return self._kind is AttributeKind.INTEGER

    def is_floating(self) -> bool:
        return self._kind is AttributeKind.FLOATING

    def is_string(self) -> bool:
        return self._kind is AttributeKind.STRING

    def is_vector(self) -> bool:
        return self._kind is AttributeKind.VECTOR

    def is_array(self) -> bool:
        return self._kind is AttributeKind.ARRAY

    def _expect(self, kind: AttributeKind) -> Any:
        if self._kind is not kind:
            raise TypeError(
                f"attribute holds {self._kind.name.lower()}, not {kind.name.lower()}"
            )
        return self._value

    def as_boolean(self) -> bool:
        return self._expect(AttributeKind.BOOLEAN)

    def as_integer(self) -> int:
        return self._expect(AttributeKind.INTEGER)

    def as_floating(self) -> float:
        return self._expect(AttributeKind.FLOATING)

    def as_string(self) -> str:
        return self._expect(AttributeKind.STRING)

    def as_vector(self) -> np.ndarray:
        return self._expect(AttributeKind.VECTOR)

    def as_array(self) -> list[Attribute]:
        return self._expect(AttributeKind.ARRAY)

    def try_get(self, kind: AttributeKind) -> Any:
        """Return the value if it is of ``kind``, otherwise ``None``."""
        return self._value if self._kind is kind else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attribute):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self._kind is AttributeKind.VECTOR:
            return bool(np.array_equal(self._value, other._value))
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Attribute({self._value!r})"

    def __str__(self) -> str:
        kind = self._kind
        if kind is AttributeKind.EMPTY:
            return "nil"
        if kind is AttributeKind.BOOLEAN:
            return "1" if self._value else "0"
        if kind is AttributeKind.INTEGER:
            return str(self._value)
        if kind is AttributeKind.FLOATING:
            return _format_float(self._value)
        if kind is AttributeKind.STRING:
            return self._value
        if kind is AttributeKind.VECTOR:
            return "(" + ", ".join(_format_float(float(x)) for x in self._value) + ")"
        return "[ " + "".join(f"{item} " for item in self._value) + "]"