"""Fixed-width histograms and the probability densities built from them."""

from __future__ import annotations

import math
from typing import Iterator


class Histogram:
    """Counts accumulated in ``bins`` equal-width bins covering ``[start, stop)``."""

    def __init__(self, bins: int, start: float, stop: float) -> None:
        if bins <= 0:
            raise ValueError(f"number of bins must be positive, got {bins}")
        if not stop > start:
            raise ValueError(f"histogram range is empty: [{start}, {stop})")
        self.start = float(start)
        self.stop = float(stop)
        self.dx = (self.stop - self.start) / bins
        self._counts = [0.0] * bins

    def _contains(self, x: float) -> bool:
        return self.start <= x < self.stop

    def _index(self, x: float) -> int:
        index = math.floor((x - self.start) / self.dx)
        if not 0 <= index < len(self._counts):
            raise IndexError(f"bin index {index} out of range for x = {x}")
        return index

    def _checked_index(self, x: float) -> int:
        if not self._contains(x):
            raise ValueError(
                f"x ({x}) is out of range [{self.start}, {self.stop})"
            )
        return self._index(x)

    def at(self, x: float) -> float:
        """Return the count of the bin holding ``x``; zero outside the range."""
        if not self._contains(x):
            return 0.0
        return self._counts[self._index(x)]

    def add(self, x: float, value: float = 1.0) -> None:
        """Add ``value`` to the bin holding ``x``."""
        self._counts[self._checked_index(x)] += value

    def scale(self, x: float, factor: float) -> None:
        """Multiply the bin holding ``x`` by ``factor``."""
        self._counts[self._checked_index(x)] *= factor

    def __iter__(self) -> Iterator[float]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"Histogram({len(self._counts)}, {self.start}, {self.stop})"


class ProbabilityDensity:
    """A histogram normalised so that its bins sum to one."""

    def __init__(self, histogram: Histogram) -> None:
        counts = list(histogram)
        total = sum(counts)
        if total == 0:
            raise ValueError("cannot normalise a histogram whose total is zero")
        self.start = histogram.start
        self.stop = histogram.stop
        self.dx = histogram.dx
        self._values = [float(count) / total for count in counts]

    def at(self, x: float) -> float:
        """Return the probability of the bin holding ``x``; zero outside the range."""
        if not self.start <= x < self.stop:
            return 0.0
        index = math.floor((x - self.start) / self.dx)
        if not 0 <= index < len(self._values):
            raise IndexError(f"bin index {index} out of range for x = {x}")
        return self._values[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ProbabilityDensity({len(self._values)}, {self.start}, {self.stop})"