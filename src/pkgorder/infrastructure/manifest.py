"""Manifest loading — JSON package document to DependencyGraph.

The manifest is validated in full before the graph is touched, so a
malformed document never produces a half-populated graph.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pkgorder.domain.packages import PackageManifest
from pkgorder.infrastructure.graph.engine import DependencyGraph

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """The manifest file is missing, unreadable, or not a valid package document."""

    def __init__(self, path: Path | None, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def parse_manifest(data: Any, *, path: Path | None = None) -> PackageManifest:
    """Validate decoded JSON against :class:`PackageManifest`."""
    if not isinstance(data, dict):
        raise ManifestError(path, "expected a JSON object with a 'packages' list")
    if "packages" not in data:
        raise ManifestError(path, "missing required key 'packages'")
    try:
        return PackageManifest.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        raise ManifestError(path, f"invalid manifest at {loc}: {first['msg']}") from exc


def read_manifest(path: Path) -> PackageManifest:
    """Read and validate a manifest file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(path, "manifest file not found") from exc
    except OSError as exc:
        raise ManifestError(path, f"cannot read manifest: {exc.strerror}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON (line {exc.lineno}, column {exc.colno}): {exc.msg}"
        raise ManifestError(path, msg) from exc
    return parse_manifest(data, path=path)


def build_graph(manifest: PackageManifest) -> DependencyGraph:
    """Populate a DependencyGraph from a validated manifest.

    One vertex per entry name, one edge per listed dependency, both in
    document order.
    """
    return DependencyGraph.from_mapping(manifest.as_mapping())


def load_graph(path: Path) -> DependencyGraph:
    """Read *path* and return the populated dependency graph."""
    graph = build_graph(read_manifest(path))
    logger.debug(
        "Loaded manifest %s (%d packages, %d dependencies)",
        path,
        graph.order(),
        graph.size(),
    )
    return graph
