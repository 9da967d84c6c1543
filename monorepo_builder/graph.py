"""Dependency graph utilities.

Provides a small directed graph over package names and the topological sort
that determines build order in a monorepo. Edges point from a dependent to
its dependency, so when package A depends on package B, B is built first.
"""

from __future__ import annotations

from collections.abc import Iterator

_UNVISITED, _IN_PROGRESS, _DONE = 0, 1, 2


class CycleError(RuntimeError):
    """Raised when the dependency graph contains a directed cycle.

    Attributes:
        cycle: Vertices on the cycle, starting and ending with the same name.
    """

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Dependency cycle detected: {' -> '.join(cycle)}")


class Digraph:
    """Directed graph keyed by package name.

    Vertices and each vertex's outgoing edges keep insertion order, which
    makes traversal (and therefore build order) deterministic.
    """

    def __init__(self) -> None:
        # vertex → ordered set of dependencies (dict keys as an ordered set)
        self._adjacency: dict[str, dict[str, None]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self) -> Iterator[str]:
        return iter(self._adjacency)

    @property
    def vertices(self) -> list[str]:
        """All vertices in insertion order."""
        return list(self._adjacency)

    def add_vertex(self, name: str) -> None:
        """Register a vertex. Adding an existing vertex is a no-op."""
        self._adjacency.setdefault(name, {})

    def add_edge(self, source: str, target: str) -> None:
        """Record that ``source`` depends on ``target``.

        Both endpoints are registered as vertices if needed, so a dependency
        that was never added explicitly still takes part in ordering.
        Repeated edges are ignored.
        """
        self.add_vertex(source)
        self.add_vertex(target)
        self._adjacency[source][target] = None

    def adjacent_list(self, name: str) -> list[str]:
        """Direct dependencies of ``name``, empty for unknown vertices."""
        return list(self._adjacency.get(name, ()))

    def topological_sort(self) -> list[str]:
        """Order all vertices so that dependencies come before dependents.

        Depth-first search with three-colour marking. Vertices are appended
        once all of their dependencies are finished, so no reversal is
        needed. Top-level iteration follows insertion order, so among
        unconstrained choices the output matches discovery order.

        The search is recursive, so dependency chains approaching Python's
        recursion limit (about 1000 packages deep) raise RecursionError.

        Returns:
            Every vertex exactly once, in build order.

        Raises:
            CycleError: If the graph contains a cycle. The graph is left
                untouched and no partial order is returned.

        Example:
            If A depends on B, and B depends on C:
            topological_sort() → [C, B, A]
        """
        state = dict.fromkeys(self._adjacency, _UNVISITED)
        order: list[str] = []
        path: list[str] = []

        def visit(vertex: str) -> None:
            state[vertex] = _IN_PROGRESS
            path.append(vertex)
            for dep in self._adjacency[vertex]:
                if state[dep] == _IN_PROGRESS:
                    raise CycleError(path[path.index(dep) :] + [dep])
                if state[dep] == _UNVISITED:
                    visit(dep)
            path.pop()
            state[vertex] = _DONE
            order.append(vertex)

        for vertex in self._adjacency:
            if state[vertex] == _UNVISITED:
                visit(vertex)
        return order
