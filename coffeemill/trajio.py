"""Common interfaces for trajectory readers and writers."""

from __future__ import annotations

import abc
from typing import Any, Iterator, Mapping

from coffeemill.attribute import Attribute
from coffeemill.snapshot import Snapshot
from coffeemill.trajectory import Trajectory


class TrajectoryFormatError(ValueError):
    """Raised when a trajectory file is malformed or its format is unsupported."""


def header_attributes(header: Trajectory | Mapping[str, Any]) -> dict[str, Attribute]:
    """Return header attributes from a trajectory or a plain mapping."""
    if isinstance(header, Trajectory):
        return dict(header.attributes)
    return {name: Attribute(value) for name, value in header.items()}


class TrajectoryReader(abc.ABC):
    """A reader that yields snapshots one at a time from a trajectory file.

    Iterating over a reader continues from its current position.
    """

    path: str = ""
    current: int = 0

    @abc.abstractmethod
    def read_header(self) -> dict[str, Attribute]:
        """Return the header attributes of the file."""

    def read(self) -> Trajectory:
        """Rewind and read the whole trajectory."""
        self.rewind()
        trajectory = Trajectory(attributes=self.read_header())
        trajectory.snapshots.extend(self)
        return trajectory

    @abc.abstractmethod
    def read_frame(self, index: int | None = None) -> Snapshot | None:
        """Read the next snapshot, or the ``index``-th one when given.

        Returns ``None`` when there is no such snapshot.
        """

    @abc.abstractmethod
    def rewind(self) -> None:
        """Go back to the first snapshot."""

    @abc.abstractmethod
    def is_eof(self) -> bool:
        """Whether no data remains to be read."""

    def __iter__(self) -> Iterator[Snapshot]:
        while (frame := self.read_frame()) is not None:
            yield frame

    @abc.abstractmethod
    def close(self) -> None:
        """Release the underlying file."""

    def __enter__(self) -> TrajectoryReader:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class TrajectoryWriter(abc.ABC):
    """A writer that stores a header, snapshots and a footer in a trajectory file."""

    path: str = ""

    @abc.abstractmethod
    def write_header(self, header: Trajectory | Mapping[str, Any]) -> None:
        """Write the header taken from a trajectory or an attribute mapping."""

    def write(self, trajectory: Trajectory) -> None:
        """Write a whole trajectory: header, every snapshot, footer."""
        self.write_header(trajectory)
        for frame in trajectory:
            self.write_frame(frame)
        self.write_footer(trajectory)

    @abc.abstractmethod
    def write_frame(self, frame: Snapshot) -> None:
        """Append one snapshot."""

    def write_footer(self, trajectory: Trajectory) -> None:
        """Finish the file; formats without a footer write nothing."""

    @abc.abstractmethod
    def close(self) -> None:
        """Flush and release the underlying file."""

    def __enter__(self) -> TrajectoryWriter:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()