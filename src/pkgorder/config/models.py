"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pkgorder.toml only contains
overrides. A project needs no config file at all when its manifest is
named ``packages.json``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

# --- pkgorder.toml sections ---


class ManifestConfig(BaseModel):
    """[manifest] section."""

    model_config = {"frozen": True}

    path: str = "packages.json"


class ResolverConfig(BaseModel):
    """[resolver] section.

    Attributes:
        max_dependencies_scope: ``"all"`` considers every package when
            looking for the one with the most transitive dependencies;
            ``"roots"`` only considers packages nothing depends on.
        strict_edge_count: Also reject a whole-graph order when the graph
            has more edges than ``packages - 1``. Rejects acyclic graphs
            with shared dependencies, so it is off by default.
    """

    model_config = {"frozen": True}

    max_dependencies_scope: Literal["all", "roots"] = "all"
    strict_edge_count: bool = False
