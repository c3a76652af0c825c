"""DependencyGraph — directed package graph backed by a NetworkX DiGraph.

Vertices are package names; an edge ``A -> B`` means "A depends on B", so
B must be installed before A. The DiGraph successor map is the adjacency
list and keeps insertion order, which fixes the traversal order of every
algorithm built on top.

Built once while loading a manifest, read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TypeAlias

import networkx as nx

from pkgorder.domain.errors import PackageNotFoundError

_Graph: TypeAlias = nx.DiGraph


class DependencyGraph:
    """Directed graph over package names with ordered adjacency lists.

    ``add_edge`` creates missing endpoints, so a package that only ever
    appears as a dependency still becomes a vertex.
    """

    def __init__(self) -> None:
        self._graph: _Graph = nx.DiGraph()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> DependencyGraph:
        """Build a graph from ``{package: [dependencies]}``.

        Packages are added in mapping order, then their edges in list order.
        """
        graph = cls()
        for name, dependencies in mapping.items():
            graph.add_vertex(name)
            for dep in dependencies:
                graph.add_edge(name, dep)
        return graph

    @property
    def graph(self) -> _Graph:
        """The underlying DiGraph (treat as read-only)."""
        return self._graph

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_vertex(self, name: str) -> None:
        """Insert *name* if absent. Adding an existing vertex is a no-op."""
        if name not in self._graph:
            self._graph.add_node(name)

    def add_edge(self, src: str, dst: str) -> None:
        """Record that *src* depends on *dst*, creating either endpoint if missing."""
        if self._graph.has_edge(src, dst):
            return
        self.add_vertex(src)
        self.add_vertex(dst)
        self._graph.add_edge(src, dst)

    def remove_vertex(self, name: str) -> None:
        """Delete *name* and every edge into or out of it. No-op if absent."""
        if name in self._graph:
            self._graph.remove_node(name)

    def remove_edge(self, src: str, dst: str) -> None:
        """Delete the ``src -> dst`` relation if present."""
        if self._graph.has_edge(src, dst):
            self._graph.remove_edge(src, dst)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_vertex(self, name: str) -> bool:
        return name in self._graph

    def __contains__(self, name: object) -> bool:
        return name in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __iter__(self) -> Iterator[str]:
        return iter(self._graph)

    def get_adjacent_vertices_of(self, name: str) -> list[str]:
        """Direct dependencies of *name*, in the order they were added.

        Raises:
            PackageNotFoundError: If *name* is not a vertex.
        """
        if name not in self._graph:
            raise PackageNotFoundError(name)
        return list(self._graph.successors(name))

    def dependents_of(self, name: str) -> list[str]:
        """Packages that depend directly on *name*.

        Raises:
            PackageNotFoundError: If *name* is not a vertex.
        """
        if name not in self._graph:
            raise PackageNotFoundError(name)
        return list(self._graph.predecessors(name))

    def get_all_vertices(self) -> set[str]:
        return set(self._graph.nodes)

    def vertices(self) -> list[str]:
        """All vertex names in insertion order."""
        return list(self._graph.nodes)

    def roots(self) -> list[str]:
        """Vertices nothing else depends on, in insertion order."""
        return [name for name, degree in self._graph.in_degree() if degree == 0]

    def order(self) -> int:
        """Number of vertices."""
        return self._graph.number_of_nodes()

    def size(self) -> int:
        """Number of edges."""
        return self._graph.number_of_edges()

    def __repr__(self) -> str:
        return f"DependencyGraph(order={self.order()}, size={self.size()})"
