"""Boundary conditions for simulation boxes."""

from __future__ import annotations

import enum
import math

import numpy as np


def _vec(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected a 3D vector, got shape {array.shape}")
    return array


class UnlimitedBoundary:
    """No boundary: positions and directions are left as they are."""

    def adjust_direction(self, dr) -> np.ndarray:
        return _vec(dr)

    def adjust_position(self, r) -> np.ndarray:
        return _vec(r)

    def volume(self) -> float:
        return math.inf

    def lower(self) -> np.ndarray:
        return np.full(3, -math.inf)

    def upper(self) -> np.ndarray:
        return np.full(3, math.inf)

    def width(self) -> np.ndarray:
        return np.full(3, math.inf)


class CuboidalPeriodicBoundary:
    """A rectangular periodic box spanning ``[lower, upper)``."""

    def __init__(self, lower=None, upper=None) -> None:
        self.set_boundary(
            np.zeros(3) if lower is None else lower,
            np.zeros(3) if upper is None else upper,
        )

    def set_boundary(self, lower, upper) -> None:
        self._lower = _vec(lower)
        self._upper = _vec(upper)
        self._width = self._upper - self._lower
        self._halfw = self._width * 0.5

    def _check_box(self) -> None:
        if np.any(self._width <= 0.0):
            raise ValueError(f"periodic box has non-positive width: {self._width}")

    def adjust_direction(self, dr) -> np.ndarray:
        self._check_box()
        dr = _vec(dr)
        for axis, (half, width) in enumerate(zip(self._halfw, self._width)):
            while dr[axis] < -half:
                dr[axis] += width
            while dr[axis] >= half:
                dr[axis] -= width
        return dr

    def adjust_position(self, r) -> np.ndarray:
        self._check_box()
        pos = _vec(r)
        for axis, (low, up, width) in enumerate(zip(self._lower, self._upper, self._width)):
            while pos[axis] < low:
                pos[axis] += width
            while pos[axis] >= up:
                pos[axis] -= width
        return pos

    def volume(self) -> float:
        return float(self._width[0] * self._width[1] * self._width[2])

    def lower(self) -> np.ndarray:
        return self._lower.copy()

    def upper(self) -> np.ndarray:
        return self._upper.copy()

    def width(self) -> np.ndarray:
        return self._width.copy()


class BoundaryConditionKind(enum.IntEnum):
    UNLIMITED = 0
    CUBOIDAL_PERIODIC = 1

    def __str__(self) -> str:
        return "Unlimited" if self is BoundaryConditionKind.UNLIMITED else "Periodic"


class BoundaryCondition:
    """Either an unlimited or a cuboidal periodic boundary."""

    def __init__(self, boundary=None) -> None:
        if boundary is None:
            boundary = UnlimitedBoundary()
        if not isinstance(boundary, (UnlimitedBoundary, CuboidalPeriodicBoundary)):
            raise TypeError(f"unsupported boundary type: {type(boundary).__name__}")
        self._boundary = boundary

    def adjust_direction(self, dr) -> np.ndarray:
        return self._boundary.adjust_direction(dr)

    def adjust_position(self, r) -> np.ndarray:
        return self._boundary.adjust_position(r)

    def volume(self) -> float:
        return self._boundary.volume()

    def lower(self) -> np.ndarray:
        return self._boundary.lower()

    def upper(self) -> np.ndarray:
        return self._boundary.upper()

    def width(self) -> np.ndarray:
        return self._boundary.width()

    def kind(self) -> BoundaryConditionKind:
        if isinstance(self._boundary, CuboidalPeriodicBoundary):
            return BoundaryConditionKind.CUBOIDAL_PERIODIC
        return BoundaryConditionKind.UNLIMITED

    def as_unlimited(self) -> UnlimitedBoundary:
        if not isinstance(self._boundary, UnlimitedBoundary):
            raise TypeError("boundary condition is not unlimited")
        return self._boundary

    def as_periodic(self) -> CuboidalPeriodicBoundary:
        if not isinstance(self._boundary, CuboidalPeriodicBoundary):
            raise TypeError("boundary condition is not periodic")
        return self._boundary