"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PKGORDER_*`` prefix
  3. TOML file    — ``pkgorder.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`pkgorder.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pkgorder.config.discovery import find_config
from pkgorder.config.models import ManifestConfig, ResolverConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``pkgorder.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PkgSettings(BaseSettings):
    """Unified settings for the pkgorder CLI.

    Stored on the CLI's :class:`AppContext`, frozen after construction.

    Attributes:
        project_root: Directory holding ``pkgorder.toml``, or CWD if no
            config was found. Relative ``[manifest] path`` values resolve
            against it.
        config_path: The TOML file in effect, if any.
        manifest_file: ``--file`` override; takes precedence over
            ``[manifest] path`` and is resolved against CWD.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PKGORDER_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved paths (not in TOML) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    manifest_file: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    manifest: ManifestConfig = Field(default_factory=ManifestConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def manifest_path(self) -> Path:
        """The manifest file to load."""
        if self.manifest_file is not None:
            return self.manifest_file
        path = Path(self.manifest.path)
        return path if path.is_absolute() else self.project_root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> PkgSettings:
        """Construct settings from CLI invocation.

        Discovers ``pkgorder.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. ``None`` flag
        values are dropped so they never mask env or TOML values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                import click

                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        flags = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **flags,
            )
        finally:
            _tls.toml_path = None
