"""Shared pytest fixtures and test helpers for pkgorder tests."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkgorder.infrastructure.graph.engine import DependencyGraph

# p1 -> {p2, p3, p4}, p2 -> {p5}, p3 -> {p6, p7}, p4 -> {p2, p3}
EXAMPLE_PACKAGES: dict[str, list[str]] = {
    "p1": ["p2", "p3", "p4"],
    "p2": ["p5"],
    "p3": ["p6", "p7"],
    "p4": ["p2", "p3"],
}

# A <-> B cycle, plus C -> D which never reaches it.
CYCLIC_PACKAGES: dict[str, list[str]] = {
    "A": ["B"],
    "B": ["A"],
    "C": ["D"],
}


def write_manifest(path: Path, packages: Mapping[str, list[str]]) -> Path:
    """Write a ``{"packages": [...]}`` manifest to *path*."""
    doc = {"packages": [{"name": name, "dependencies": deps} for name, deps in packages.items()]}
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PKGORDER_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("PKGORDER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def example_graph() -> DependencyGraph:
    """The seven-package acyclic example graph."""
    return DependencyGraph.from_mapping(EXAMPLE_PACKAGES)


@pytest.fixture
def cyclic_graph() -> DependencyGraph:
    """Graph with an A <-> B cycle and an unrelated C -> D chain."""
    return DependencyGraph.from_mapping(CYCLIC_PACKAGES)


@pytest.fixture
def manifest_factory(tmp_path: Path) -> Callable[..., Path]:
    """Write a manifest under *tmp_path*: ``manifest_factory(packages, name="packages.json")``."""

    def _factory(packages: Mapping[str, list[str]], name: str = "packages.json") -> Path:
        return write_manifest(tmp_path / name, packages)

    return _factory


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory holding ``packages.json`` (the example graph)."""
    write_manifest(tmp_path / "packages.json", EXAMPLE_PACKAGES)
    return tmp_path


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Change CWD to the temp project so the CLI finds ``packages.json``.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)
    yield
