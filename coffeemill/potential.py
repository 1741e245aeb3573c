"""Reaction coordinates, biasing potentials and histogram reweighting."""

from __future__ import annotations

import abc
import copy
import math
from typing import Iterable

import numpy as np

from coffeemill.histogram import Histogram, ProbabilityDensity
from coffeemill.snapshot import Snapshot


class ReactionCoordinate(abc.ABC):
    """Maps a snapshot to a scalar and gives the Jacobian weight of that scalar."""

    @abc.abstractmethod
    def __call__(self, frame: Snapshot) -> float:
        """Return the value of the coordinate for ``frame``."""

    @abc.abstractmethod
    def weight(self, x: float) -> float:
        """Return the volume weight of the coordinate value ``x``."""


class ReactionDistance(ReactionCoordinate):
    """Distance between two particles, weighted by ``x**2``."""

    def __init__(self, first: int, second: int) -> None:
        self.first = first
        self.second = second

    def __call__(self, frame: Snapshot) -> float:
        delta = frame[self.second].position - frame[self.first].position
        return float(np.linalg.norm(delta))

    def weight(self, x: float) -> float:
        return x * x


def make_histogram(
    trajectory: Iterable[Snapshot], rc: ReactionCoordinate, bins: int = 100
) -> Histogram:
    """Histogram ``rc`` over a trajectory, divided by the coordinate's weight.

    Bin centres sit on the smallest and largest sampled values.
    """
    if bins < 2:
        raise ValueError(f"at least two bins are needed, got {bins}")
    samples = [rc(frame) for frame in trajectory]
    if not samples:
        raise ValueError("cannot make a histogram from an empty trajectory")
    low, high = min(samples), max(samples)
    dx = (high - low) / (bins - 1)
    if dx <= 0.0:
        raise ValueError("all samples have the same value; histogram range is empty")

    hist = Histogram(bins, low - dx * 0.5, high + dx * 0.5)
    for sample in samples:
        hist.add(sample, 1.0)
    for i in range(bins):
        x = hist.start + dx * (i + 0.5)
        hist.scale(x, 1.0 / rc.weight(x))
    return hist


class PotentialFunction(abc.ABC):
    """A potential defined on a reaction coordinate."""

    def __init__(self, rc: ReactionCoordinate) -> None:
        self._rc = rc

    @abc.abstractmethod
    def energy(self, x: float) -> float:
        """Return the potential energy at coordinate value ``x``."""

    def __call__(self, frame: Snapshot) -> float:
        return self.energy(self._rc(frame))

    def rc(self, frame: Snapshot) -> float:
        """Return the reaction coordinate of ``frame``."""
        return self._rc(frame)


class HarmonicPotential(PotentialFunction):
    """``k * (x - x0)**2``."""

    def __init__(self, rc: ReactionCoordinate, k: float, x0: float) -> None:
        super().__init__(rc)
        self.k = float(k)
        self.x0 = float(x0)

    def energy(self, x: float) -> float:
        dx = x - self.x0
        return self.k * dx * dx


def reweight(
    histogram: Histogram, potential: PotentialFunction, kbt: float = 0.59587
) -> ProbabilityDensity:
    """Remove the bias of ``potential`` from a histogram and normalise it.

    The given histogram is left unchanged.
    """
    beta = 1.0 / kbt
    hist = copy.deepcopy(histogram)
    for i in range(len(hist)):
        x = hist.start + hist.dx * (i + 0.5)
        hist.scale(x, 1.0 / math.exp(-beta * potential.energy(x)))
    return ProbabilityDensity(hist)