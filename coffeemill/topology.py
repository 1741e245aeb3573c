"""Connectivity between particles, grouped by edge kind."""

from __future__ import annotations


class Topology:
    """A set of nodes, each holding neighbour lists keyed by edge kind."""

    __slots__ = ("_nodes",)

    def __init__(self, size: int = 0) -> None:
        self._nodes: list[dict[str, list[int]]] = [{} for _ in range(size)]

    def _node(self, i: int) -> dict[str, list[int]]:
        if not 0 <= i < len(self._nodes):
            raise IndexError(f"node index {i} out of range for topology of size {len(self._nodes)}")
        return self._nodes[i]

    def resize(self, size: int) -> None:
        if size < len(self._nodes):
            del self._nodes[size:]
        else:
            self._nodes.extend({} for _ in range(size - len(self._nodes)))

    def clear(self) -> None:
        self._nodes.clear()

    def __len__(self) -> int:
        return len(self._nodes)

    def empty(self) -> bool:
        return not self._nodes

    def list_connected(self, i: int, kind: str) -> list[int]:
        """Return the neighbours of ``i`` connected by edges of ``kind``."""
        return list(self._node(i).get(kind, ()))

    def add_edge(self, i: int, j: int, kind: str) -> None:
        first, second = self._node(i), self._node(j)
        neighbors = first.setdefault(kind, [])
        if j not in neighbors:
            neighbors.append(j)
        neighbors = second.setdefault(kind, [])
        if i not in neighbors:
            neighbors.append(i)

    def erase_edge(self, i: int, j: int, kind: str) -> None:
        first, second = self._node(i), self._node(j)
        try:
            first.setdefault(kind, []).remove(j)
            second.setdefault(kind, []).remove(i)
        except ValueError:
            raise ValueError(f"no {kind!r} edge between {i} and {j}") from None

    def has_edge(self, i: int, j: int, kind: str) -> bool:
        """Whether ``i`` and ``j`` share an edge of ``kind``.

        Raises KeyError if node ``i`` has never had an edge of that kind.
        """
        return j in self._node(i)[kind]

    def edges_between(self, i: int, j: int) -> list[str]:
        """Return the kinds of edges connecting ``i`` to ``j``, sorted by name."""
        return [kind for kind, neighbors in sorted(self._node(i).items()) if j in neighbors]

    def __repr__(self) -> str:
        return f"Topology({len(self._nodes)})"