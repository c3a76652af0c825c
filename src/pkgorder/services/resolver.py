"""ResolverService — installation-order algorithms over a DependencyGraph.

The ordering functions at module level raise :class:`PackageNotFoundError`
and :class:`CycleDetectedError`; :class:`ResolverService` wraps them into
``ServiceResult`` payloads for the CLI.

Ordering is an iterative depth-first traversal with an explicit stack.
Dependencies are explored in adjacency insertion order and a package is
emitted once all of its dependencies have been emitted, so every
dependency precedes its dependents and the queried package comes last.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

import networkx as nx

from pkgorder.domain.errors import CycleDetectedError, PackageNotFoundError, ResolverError
from pkgorder.services.base import BaseService
from pkgorder.services.result import ServiceResult

if TYPE_CHECKING:
    from pkgorder.infrastructure.graph.engine import DependencyGraph


# ---------------------------------------------------------------------------
# Ordering algorithms
# ---------------------------------------------------------------------------


def installation_order(graph: DependencyGraph, pkg: str) -> list[str]:
    """Return a valid installation order for *pkg*, ending with *pkg*.

    Only the subgraph reachable from *pkg* is visited, so cycles elsewhere
    in the graph do not affect the result.

    Raises:
        PackageNotFoundError: If *pkg* is not in the graph.
        CycleDetectedError: If a dependency leads back to a package still
            being expanded (any cycle length, including self-dependency).
    """
    if pkg not in graph:
        raise PackageNotFoundError(pkg)

    order: list[str] = []
    done: set[str] = set()
    # Packages on the current DFS path, in path order.
    active: dict[str, None] = {pkg: None}
    stack: list[tuple[str, Iterator[str]]] = [(pkg, iter(graph.get_adjacent_vertices_of(pkg)))]

    while stack:
        vertex, pending = stack[-1]
        for dep in pending:
            if dep in active:
                path = list(active)
                raise CycleDetectedError([*path[path.index(dep) :], dep])
            if dep not in done:
                active[dep] = None
                stack.append((dep, iter(graph.get_adjacent_vertices_of(dep))))
                break
        else:
            stack.pop()
            del active[vertex]
            done.add(vertex)
            order.append(vertex)

    return order


def _find_cycle(graph: DependencyGraph, names: list[str] | None = None) -> list[str]:
    """Walk one cycle in *graph* (restricted to *names*) as a closed path."""
    view = graph.graph if names is None else graph.graph.subgraph(names)
    edges = nx.find_cycle(view, source=names)
    return [*(src for src, _dst in edges), edges[0][0]]


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop repeated names, keeping each one at its first position."""
    return list(dict.fromkeys(items))


def installation_order_for_all(graph: DependencyGraph, *, strict_edge_count: bool = False) -> list[str]:
    """Return an installation order covering every package in the graph.

    Concatenates the order of each root (in insertion order) and keeps the
    first occurrence of each package.

    The edge-count guard (more than ``order - 1`` dependencies counts as a
    cycle) is opt-in here rather than always applied: it rejects acyclic
    graphs where two packages share a dependency, and the root coverage
    check already catches every cycle the traversals miss.

    Raises:
        CycleDetectedError: If a root's traversal meets a cycle, if some
            package is unreachable from every root (it sits on or behind a
            cycle with no root), or, with *strict_edge_count*, if the graph
            has more than ``order - 1`` edges.
    """
    combined: list[str] = []
    for root in graph.roots():
        combined.extend(installation_order(graph, root))
    order = dedupe(combined)

    if len(order) < graph.order():
        covered = set(order)
        uncovered = [name for name in graph.vertices() if name not in covered]
        # Every uncovered package has an uncovered predecessor, so the
        # induced subgraph always contains a cycle.
        raise CycleDetectedError(_find_cycle(graph, uncovered))

    if strict_edge_count and graph.size() > graph.order() - 1:
        msg = (
            f"Dependency cycle detected: {graph.size()} dependencies across "
            f"{graph.order()} packages exceeds {graph.order() - 1}"
        )
        raise CycleDetectedError(message=msg)

    return order


def to_install(graph: DependencyGraph, new_pkg: str, installed_pkg: str) -> list[str]:
    """Packages *new_pkg* needs that installing *installed_pkg* did not bring in.

    Both orders are computed independently, installed first; the result
    keeps *new_pkg*'s relative order.
    """
    installed = set(installation_order(graph, installed_pkg))
    return [name for name in installation_order(graph, new_pkg) if name not in installed]


def package_with_max_dependencies(
    graph: DependencyGraph,
    *,
    roots_only: bool = False,
) -> tuple[str, list[str]]:
    """Return ``(package, order)`` for the package with the longest order.

    Candidates are visited in insertion order; ties keep the first one.

    Raises:
        PackageNotFoundError: If the graph is empty.
        CycleDetectedError: If any candidate's traversal meets a cycle.
    """
    candidates = graph.roots() if roots_only else graph.vertices()
    best: tuple[str, list[str]] | None = None
    for name in candidates:
        order = installation_order(graph, name)
        if best is None or len(order) > len(best[1]):
            best = (name, order)
    if best is None:
        if graph.order():
            # No roots in a non-empty graph: every package is on or behind a cycle.
            raise CycleDetectedError(_find_cycle(graph))
        raise PackageNotFoundError("", message="Dependency graph is empty")
    return best


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ResolverService(BaseService):
    """Answers installation-order queries against one dependency graph."""

    def installation_order(self, pkg: str) -> ServiceResult:
        """Installation order for a single package."""
        try:
            order = installation_order(self._graph, pkg)
        except ResolverError as exc:
            return self._failure("install_order", exc)
        return ServiceResult(
            ok=True,
            op="install_order",
            data={"package": pkg, "count": len(order), "order": order},
        )

    def installation_order_for_all(self) -> ServiceResult:
        """Installation order for every package in the graph."""
        try:
            order = installation_order_for_all(
                self._graph,
                strict_edge_count=self._config.strict_edge_count,
            )
        except ResolverError as exc:
            return self._failure("install_all", exc)
        return ServiceResult(
            ok=True,
            op="install_all",
            data={"count": len(order), "roots": self._graph.roots(), "order": order},
        )

    def to_install(self, new_pkg: str, installed_pkg: str) -> ServiceResult:
        """Packages still needed for *new_pkg* once *installed_pkg* is installed."""
        try:
            order = to_install(self._graph, new_pkg, installed_pkg)
        except ResolverError as exc:
            return self._failure("to_install", exc)
        return ServiceResult(
            ok=True,
            op="to_install",
            data={
                "package": new_pkg,
                "installed": installed_pkg,
                "count": len(order),
                "order": order,
            },
        )

    def package_with_max_dependencies(self) -> ServiceResult:
        """The package with the most transitive dependencies.

        The dependency count excludes the package itself.
        """
        op = "max_dependencies"
        roots_only = self._config.max_dependencies_scope == "roots"
        try:
            name, order = package_with_max_dependencies(self._graph, roots_only=roots_only)
        except ResolverError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "package": name,
                "dependency_count": len(order) - 1,
                "dependencies": order[:-1],
            },
            meta={"scope": self._config.max_dependencies_scope},
        )

    def list_packages(self) -> ServiceResult:
        """Every package with its direct dependencies, in insertion order."""
        items = [
            {"id": name, "dependencies": self._graph.get_adjacent_vertices_of(name)}
            for name in self._graph.vertices()
        ]
        return ServiceResult(
            ok=True,
            op="list_packages",
            data={
                "count": len(items),
                "edges": self._graph.size(),
                "roots": self._graph.roots(),
                "items": items,
            },
        )

    def dependencies(self, pkg: str) -> ServiceResult:
        """Direct dependencies and direct dependents of one package."""
        try:
            deps = self._graph.get_adjacent_vertices_of(pkg)
            dependents = self._graph.dependents_of(pkg)
        except ResolverError as exc:
            return self._failure("dependencies", exc)
        return ServiceResult(
            ok=True,
            op="dependencies",
            data={"package": pkg, "dependencies": deps, "dependents": dependents},
        )
