"""A single frame of a trajectory: particles plus frame-level data."""

from __future__ import annotations

import operator
from typing import Any, Iterable, Iterator, Mapping

from coffeemill.attribute import Attribute
from coffeemill.boundary import BoundaryCondition
from coffeemill.particle import Particle
from coffeemill.topology import Topology


class Snapshot:
    """Particles with frame attributes, a boundary condition and an optional topology.

    Integer keys address particles, string keys address frame attributes.
    """

    def __init__(
        self,
        particles: Iterable[Particle] | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self.particles: list[Particle] = list(particles or ())
        for particle in self.particles:
            if not isinstance(particle, Particle):
                raise TypeError(f"expected Particle, got {type(particle).__name__}")
        self.attributes: dict[str, Attribute] = {
            name: Attribute(value) for name, value in (attributes or {}).items()
        }
        self.boundary = BoundaryCondition()
        self._topology: Topology | None = None

    @classmethod
    def from_positions(cls, positions: Iterable[Any]) -> Snapshot:
        """Build a snapshot with one attribute-less particle per position."""
        return cls(Particle(position) for position in positions)

    @classmethod
    def with_size(cls, size: int) -> Snapshot:
        """Build a snapshot of ``size`` particles at the origin."""
        return cls(Particle() for _ in range(size))

    def clear(self) -> None:
        self.attributes.clear()
        self.particles.clear()
        self._topology = None

    def empty(self) -> bool:
        return not self.attributes and not self.particles and self._topology is None

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            return self.attributes[key]
        return self.particles[operator.index(key)]

    def __setitem__(self, key: int | str, value: Any) -> None:
        if isinstance(key, str):
            self.attributes[key] = Attribute(value)
            return
        if not isinstance(value, Particle):
            raise TypeError(f"expected Particle, got {type(value).__name__}")
        self.particles[operator.index(key)] = value

    def try_at(self, key: int | str) -> Any:
        """Return the particle or attribute at ``key``, or ``None`` if absent."""
        if isinstance(key, str):
            return self.attributes.get(key)
        try:
            return self.particles[operator.index(key)]
        except IndexError:
            return None

    def has_topology(self) -> bool:
        return self._topology is not None

    def topology(self) -> Topology:
        """Return the topology, creating an empty one sized to the particles if absent."""
        if self._topology is None:
            self._topology = Topology(len(self.particles))
        return self._topology

    def merge_attributes(self, other: Snapshot) -> None:
        """Move over missing frame attributes from ``other``; merge particle
        attributes pairwise when both frames have the same number of particles."""
        for name in list(other.attributes):
            if name not in self.attributes:
                self.attributes[name] = other.attributes.pop(name)
        if len(self) == len(other):
            for mine, theirs in zip(self.particles, other.particles):
                mine.merge_attributes(theirs)

    def __repr__(self) -> str:
        return f"Snapshot({len(self.particles)} particles, {self.attributes!r})"