"""Reading and writing of the plain-text XYZ trajectory format."""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Mapping

from coffeemill.attribute import Attribute
from coffeemill.particle import Particle
from coffeemill.snapshot import Snapshot
from coffeemill.trajectory import Trajectory
from coffeemill.trajio import TrajectoryFormatError, TrajectoryReader, TrajectoryWriter

logger = logging.getLogger(__name__)

_COUNT = re.compile(r"\s*\+?(\d+)")


class XYZReader(TrajectoryReader):
    """Reads an XYZ file frame by frame."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self.current = 0
        self._file = open(self.path, "r", encoding="utf-8")

    def _readline(self) -> str:
        line = self._file.readline()
        if not line:
            raise TrajectoryFormatError(f"{self.path}: unexpected end of file")
        return line.rstrip("\r\n")

    def _read_count(self) -> int:
        line = self._readline()
        match = _COUNT.match(line)
        if match is None:
            raise TrajectoryFormatError(
                f"{self.path}: expected number of particles, but got {line!r}"
            )
        return int(match.group(1))

    def _read_particle(self) -> Particle:
        line = self._readline()
        fields = line.split()
        if len(fields) < 4:
            raise TrajectoryFormatError(f"{self.path}: malformed particle line {line!r}")
        try:
            position = [float(value) for value in fields[1:4]]
        except ValueError:
            raise TrajectoryFormatError(
                f"{self.path}: malformed particle line {line!r}"
            ) from None
        return Particle(position, {"name": fields[0]})

    def read_header(self) -> dict[str, Attribute]:
        """XYZ files have no header; always an empty mapping."""
        return {}

    def read(self) -> Trajectory:
        self.rewind()
        trajectory = Trajectory(attributes=self.read_header())
        while not self.is_eof():
            trajectory.snapshots.append(self.read_frame())
        return trajectory

    def read_frame(self, index: int | None = None) -> Snapshot | None:
        if index is not None:
            return self._read_frame_at(index)
        if self.is_eof():
            return None
        count = self._read_count()
        comment = self._readline()
        particles = [self._read_particle() for _ in range(count)]
        self.current += 1
        return Snapshot(particles, {"comment": comment})

    def _read_frame_at(self, index: int) -> Snapshot | None:
        if index < 0:
            raise ValueError(f"frame index must not be negative: {index}")
        self.rewind()
        for _ in range(index):
            if self.is_eof():
                logger.error("%s: %d-th snapshot does not exist", self.path, index)
                return None
            count = self._read_count()
            for _ in range(count + 1):
                self._readline()
        self.current = index
        return self.read_frame()

    def rewind(self) -> None:
        self.current = 0
        self._file.seek(0)

    def is_eof(self) -> bool:
        position = self._file.tell()
        at_end = self._file.read(1) == ""
        self._file.seek(position)
        return at_end

    def close(self) -> None:
        self._file.close()


def _name_of(particle: Particle) -> str:
    name = particle.try_at("name")
    return "X" if name is None else name.as_string()


class XYZWriter(TrajectoryWriter):
    """Writes snapshots to an XYZ file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self._file = open(self.path, "w", encoding="utf-8")

    def write_header(self, header: Trajectory | Mapping[str, Any]) -> None:
        """XYZ has no header; nothing is written."""

    def write_footer(self, trajectory: Trajectory) -> None:
        """XYZ has no footer; nothing is written."""

    def write(self, trajectory: Trajectory) -> None:
        for frame in trajectory:
            self.write_frame(frame)

    def write_frame(self, frame: Snapshot) -> None:
        comment = frame.try_at("comment")
        names = [_name_of(particle) for particle in frame]
        width = max((len(name) for name in names), default=0) + 1
        lines = [
            f"{len(frame)}\n",
            f"{'' if comment is None else comment.as_string()}\n",
        ]
        for name, particle in zip(names, frame):
            x, y, z = (float(value) for value in particle.position)
            lines.append(f"{name:<{width}}{x:18.6f} {y:18.6f} {z:18.6f}\n")
        self._file.writelines(lines)
        self._file.flush()

    def close(self) -> None:
        self._file.close()