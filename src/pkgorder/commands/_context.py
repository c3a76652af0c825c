"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy manifest loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from pkgorder.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pkgorder.config.settings import PkgSettings
    from pkgorder.infrastructure.graph.engine import DependencyGraph
    from pkgorder.services.resolver import ResolverService
    from pkgorder.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The manifest is
    loaded on first use so ``--help`` and ``--version`` never touch
    the filesystem.
    """

    def __init__(self, settings: PkgSettings) -> None:
        self.settings = settings
        self._graph: DependencyGraph | None = None

        from pkgorder.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def graph(self) -> DependencyGraph:
        """The dependency graph (loaded from the manifest on first access).

        Raises:
            click.ClickException: If the manifest cannot be loaded.
        """
        if self._graph is None:
            from pkgorder.infrastructure.manifest import ManifestError, load_graph

            path = self.settings.manifest_path
            try:
                self._graph = load_graph(path)
            except ManifestError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._graph

    @property
    def resolver(self) -> ResolverService:
        """A resolver bound to the loaded graph and the [resolver] settings."""
        from pkgorder.services.resolver import ResolverService

        return ResolverService(self.graph, self.settings.resolver)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            logger.debug("%s returned %s", result.op, result.error.code if result.error else "error")
            click.echo(output, err=True)
            raise SystemExit(1)
