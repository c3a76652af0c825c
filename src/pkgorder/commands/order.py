"""Commands: installation-order queries against the loaded manifest."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pkgorder.commands._base import PkgCommand

if TYPE_CHECKING:
    from pkgorder.commands._context import AppContext


@click.command(
    cls=PkgCommand,
    examples="""\
  pkgorder order p1
  pkgorder -f deps.json order web-app
  pkgorder --quiet order p1 | xargs -n1 echo install""",
)
@click.argument("package")
@click.pass_obj
def order(app: AppContext, package: str) -> None:
    """Show the installation order for PACKAGE."""
    app.emit(app.resolver.installation_order(package))


@click.command(
    "all",
    cls=PkgCommand,
    examples="""\
  pkgorder all
  pkgorder --json all""",
)
@click.pass_obj
def all_packages(app: AppContext) -> None:
    """Show an installation order covering every package."""
    app.emit(app.resolver.installation_order_for_all())


@click.command(
    "to-install",
    cls=PkgCommand,
    examples="""\
  pkgorder to-install p1 p3
  pkgorder --json to-install web-app base-runtime""",
)
@click.argument("new_package")
@click.argument("installed_package")
@click.pass_obj
def to_install(app: AppContext, new_package: str, installed_package: str) -> None:
    """List what NEW_PACKAGE still needs once INSTALLED_PACKAGE is installed."""
    app.emit(app.resolver.to_install(new_package, installed_package))


@click.command(
    "max-deps",
    cls=PkgCommand,
    examples="""\
  pkgorder max-deps
  PKGORDER_RESOLVER__MAX_DEPENDENCIES_SCOPE=roots pkgorder max-deps""",
)
@click.pass_obj
def max_deps(app: AppContext) -> None:
    """Find the package with the most transitive dependencies."""
    app.emit(app.resolver.package_with_max_dependencies())


@click.command(
    cls=PkgCommand,
    examples="""\
  pkgorder packages
  pkgorder -v packages""",
)
@click.pass_obj
def packages(app: AppContext) -> None:
    """List every package with its direct dependencies."""
    app.emit(app.resolver.list_packages())


@click.command(
    cls=PkgCommand,
    examples="""\
  pkgorder deps p4
  pkgorder --json deps p4""",
)
@click.argument("package")
@click.pass_obj
def deps(app: AppContext, package: str) -> None:
    """Show direct dependencies and dependents of PACKAGE."""
    app.emit(app.resolver.dependencies(package))
