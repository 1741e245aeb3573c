"""A single particle: a position and a set of named attributes."""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from coffeemill.attribute import Attribute


def _as_position(values: Any) -> np.ndarray:
    array = np.array(values, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"position must be a 3D vector, got shape {array.shape}")
    return array


class Particle:
    """A particle with a 3D position and named :class:`Attribute` values."""

    __slots__ = ("_position", "attributes")

    def __init__(self, position: Any = None, attributes: Mapping[str, Any] | None = None) -> None:
        self._position = np.zeros(3) if position is None else _as_position(position)
        self.attributes: dict[str, Attribute] = {
            name: Attribute(value) for name, value in (attributes or {}).items()
        }

    @property
    def position(self) -> np.ndarray:
        return self._position

    @position.setter
    def position(self, value: Any) -> None:
        self._position = _as_position(value)

    def __getitem__(self, name: str) -> Attribute:
        return self.attributes[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.attributes[name] = Attribute(value)

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def try_at(self, name: str) -> Attribute | None:
        """Return the attribute called ``name``, or ``None`` if absent."""
        return self.attributes.get(name)

    def merge_attributes(self, other: Particle) -> None:
        """Move over the attributes of ``other`` whose names are not present here.

        Attributes with a name already present stay in ``other``; positions
        are not merged.
        """
        for name in list(other.attributes):
            if name not in self.attributes:
                self.attributes[name] = other.attributes.pop(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Particle):
            return NotImplemented
        return bool(np.array_equal(self._position, other._position)) and (
            self.attributes == other.attributes
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Particle({self._position.tolist()!r}, {self.attributes!r})"