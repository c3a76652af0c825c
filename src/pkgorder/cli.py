"""Root CLI group for pkgorder with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from pkgorder import __version__
from pkgorder.commands import register_commands
from pkgorder.commands._base import PkgGroup
from pkgorder.commands._context import AppContext
from pkgorder.config.settings import PkgSettings


@click.group(
    cls=PkgGroup,
    invoke_without_command=True,
    examples="""\
  pkgorder order p1
  pkgorder -f deps.json --json all
  pkgorder -c ci/pkgorder.toml max-deps""",
)
@click.version_option(version=__version__, prog_name="pkgorder")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (one package per line).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-f",
    "--file",
    "manifest_file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Package manifest (JSON). Defaults to [manifest] path.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    manifest_file: Path | None,
) -> None:
    """pkgorder — package installation order resolver."""
    ctx.ensure_object(dict)
    settings = PkgSettings.from_cli(
        config_path=config_path,
        # Unset flags pass None so PKGORDER_* env vars and TOML still apply.
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        manifest_file=manifest_file,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
