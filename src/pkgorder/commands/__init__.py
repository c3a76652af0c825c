"""Subcommand modules for pkgorder.

Provides register_commands() which uses deferred imports to keep
``pkgorder --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone resolver commands on the root CLI group."""
    from pkgorder.commands.order import all_packages, deps, max_deps, order, packages, to_install

    cli.add_command(order)
    cli.add_command(all_packages)
    cli.add_command(to_install)
    cli.add_command(max_deps)
    cli.add_command(packages)
    cli.add_command(deps)
