"""A sequence of snapshots with trajectory-level (header) attributes."""

from __future__ import annotations

import operator
from typing import Any, Iterable, Iterator, Mapping

from coffeemill.attribute import Attribute
from coffeemill.snapshot import Snapshot


class Trajectory:
    """Snapshots plus header attributes.

    Integer keys address snapshots, string keys address header attributes.
    """

    def __init__(
        self,
        snapshots: Iterable[Snapshot] | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self.snapshots: list[Snapshot] = list(snapshots or ())
        for snapshot in self.snapshots:
            if not isinstance(snapshot, Snapshot):
                raise TypeError(f"expected Snapshot, got {type(snapshot).__name__}")
        self.attributes: dict[str, Attribute] = {
            name: Attribute(value) for name, value in (attributes or {}).items()
        }

    def clear(self) -> None:
        self.attributes.clear()
        self.snapshots.clear()

    def empty(self) -> bool:
        return not self.attributes and not self.snapshots

    def __len__(self) -> int:
        return len(self.snapshots)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self.snapshots)

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            return self.attributes[key]
        return self.snapshots[operator.index(key)]

    def __setitem__(self, key: int | str, value: Any) -> None:
        if isinstance(key, str):
            self.attributes[key] = Attribute(value)
            return
        if not isinstance(value, Snapshot):
            raise TypeError(f"expected Snapshot, got {type(value).__name__}")
        self.snapshots[operator.index(key)] = value

    def try_at(self, key: int | str) -> Any:
        """Return the snapshot or attribute at ``key``, or ``None`` if absent."""
        if isinstance(key, str):
            return self.attributes.get(key)
        try:
            return self.snapshots[operator.index(key)]
        except IndexError:
            return None

    def merge_attributes(self, other: Trajectory) -> None:
        """Move over missing header attributes from ``other``; merge snapshots
        pairwise when both trajectories have the same length."""
        for name in list(other.attributes):
            if name not in self.attributes:
                self.attributes[name] = other.attributes.pop(name)
        if len(self) == len(other):
            for mine, theirs in zip(self.snapshots, other.snapshots):
                mine.merge_attributes(theirs)

    def __repr__(self) -> str:
        return f"Trajectory({len(self.snapshots)} snapshots, {self.attributes!r})"