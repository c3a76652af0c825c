"""BaseService — shared foundation for resolver services.

Every service receives the :class:`DependencyGraph` it queries at
construction time. The graph is borrowed, never copied or mutated.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pkgorder.config.models import ResolverConfig
from pkgorder.domain.errors import CycleDetectedError, PackageNotFoundError, ResolverError
from pkgorder.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from pkgorder.infrastructure.graph.engine import DependencyGraph

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes operating on one dependency graph.

    Usage::

        class ResolverService(BaseService):
            def installation_order(self, pkg: str) -> ServiceResult:
                try:
                    order = installation_order(self._graph, pkg)
                except ResolverError as exc:
                    return self._failure("install_order", exc)
                ...
    """

    def __init__(self, graph: DependencyGraph, config: ResolverConfig | None = None) -> None:
        self._graph = graph
        self._config = config or ResolverConfig()

    @staticmethod
    def _failure(op: str, exc: ResolverError) -> ServiceResult:
        """Convert a resolver exception into a failed ServiceResult."""
        detail: dict[str, object] = {}
        if isinstance(exc, PackageNotFoundError) and exc.package:
            detail["package"] = exc.package
        elif isinstance(exc, CycleDetectedError) and exc.cycle:
            detail["cycle"] = exc.cycle
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=str(exc), detail=detail),
        )
