"""Resolver error types.

Raised by the graph and the ordering algorithms; the service layer turns
them into ``ServiceError`` payloads. Neither error ever leaves the graph
partially modified, since both are raised from read-only queries.
"""

from __future__ import annotations

PACKAGE_NOT_FOUND = "PACKAGE_NOT_FOUND"
CYCLE_DETECTED = "CYCLE_DETECTED"


class ResolverError(Exception):
    """Base class for errors reported by the resolver."""

    code: str = "RESOLVER_ERROR"


class PackageNotFoundError(ResolverError, LookupError):
    """A query referenced a package that is not in the graph."""

    code = PACKAGE_NOT_FOUND

    def __init__(self, package: str, message: str | None = None) -> None:
        self.package = package
        super().__init__(message or f"Package '{package}' not found in dependency graph")


class CycleDetectedError(ResolverError, ValueError):
    """Installing a package would require installing it before itself.

    Attributes:
        cycle: The offending path, first and last element equal
            (e.g. ``["A", "B", "A"]``). Empty when the cycle was inferred
            structurally rather than walked.
    """

    code = CYCLE_DETECTED

    def __init__(self, cycle: list[str] | None = None, message: str | None = None) -> None:
        self.cycle = list(cycle or [])
        if message is None:
            if self.cycle:
                message = "Dependency cycle detected: " + " -> ".join(self.cycle)
            else:
                message = "Dependency cycle detected"
        super().__init__(message)
