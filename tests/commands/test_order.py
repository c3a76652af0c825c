"""Tests for the installation-order commands."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkgorder.cli import cli

P1_ORDER = ["p5", "p2", "p6", "p7", "p3", "p4", "p1"]
CYCLIC_PACKAGES = {"A": ["B"], "B": ["A"], "C": ["D"]}


def _json(cli_runner: CliRunner, *args: str) -> dict:
    result = cli_runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def _json_error(cli_runner: CliRunner, *args: str) -> dict:
    result = cli_runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 1
    assert result.stdout == ""
    return json.loads(result.stderr)


@pytest.mark.usefixtures("_isolated_project")
class TestOrderCommand:
    def test_order_json(self, cli_runner: CliRunner) -> None:
        out = _json(cli_runner, "order", "p1")
        assert out["ok"] is True
        assert out["op"] == "install_order"
        assert out["data"]["order"] == P1_ORDER
        assert out["data"]["count"] == 7

    def test_order_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "order", "p3"])
        assert result.exit_code == 0
        assert result.stdout == "p6\np7\np3\n"

    def test_order_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["order", "p3"])
        assert result.exit_code == 0
        assert "install_order" in result.stdout
        assert "3 packages" in result.stdout

    def test_leaf_package(self, cli_runner: CliRunner) -> None:
        out = _json(cli_runner, "order", "p7")
        assert out["data"]["order"] == ["p7"]

    def test_unknown_package(self, cli_runner: CliRunner) -> None:
        out = _json_error(cli_runner, "order", "p9")
        assert out["ok"] is False
        assert out["error"]["code"] == "PACKAGE_NOT_FOUND"
        assert out["error"]["detail"] == {"package": "p9"}

    def test_unknown_package_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["order", "p9"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "p9" in result.stderr


@pytest.mark.usefixtures("_isolated_project")
class TestAllCommand:
    def test_all_json(self, cli_runner: CliRunner) -> None:
        out = _json(cli_runner, "all")
        assert out["op"] == "install_all"
        assert out["data"]["order"] == P1_ORDER
        assert out["data"]["roots"] == ["p1"]

    def test_strict_edge_count_from_toml(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "pkgorder.toml").write_text("[resolver]\nstrict_edge_count = true\n")
        out = _json_error(cli_runner, "all")
        assert out["error"]["code"] == "CYCLE_DETECTED"


@pytest.mark.usefixtures("_isolated_project")
class TestToInstallCommand:
    def test_to_install_json(self, cli_runner: CliRunner) -> None:
        out = _json(cli_runner, "to-install", "p1", "p3")
        assert out["op"] == "to_install"
        assert out["data"]["package"] == "p1"
        assert out["data"]["installed"] == "p3"
        assert out["data"]["order"] == ["p5", "p2", "p4", "p1"]

    def test_nothing_to_install(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["to-install", "p3", "p1"])
        assert result.exit_code == 0
        assert "Nothing to install." in result.stdout

    def test_unknown_installed_package(self, cli_runner: CliRunner) -> None:
        out = _json_error(cli_runner, "to-install", "p1", "nope")
        assert out["error"]["detail"] == {"package": "nope"}


@pytest.mark.usefixtures("_isolated_project")
class TestMaxDepsCommand:
    def test_max_deps_json(self, cli_runner: CliRunner) -> None:
        out = _json(cli_runner, "max-deps")
        assert out["data"]["package"] == "p1"
        assert out["data"]["dependency_count"] == 6
        assert out["meta"] == {"scope": "all"}

    def test_max_deps_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "max-deps"])
        assert result.exit_code == 0
        assert result.stdout == "p1\n"

    def test_roots_scope_from_env(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PKGORDER_RESOLVER__MAX_DEPENDENCIES_SCOPE", "roots")
        out = _json(cli_runner, "max-deps")
        assert out["data"]["package"] == "p1"
        assert out["meta"] == {"scope": "roots"}


@pytest.mark.usefixtures("_isolated_project")
class TestPackagesAndDeps:
    def test_packages_json(self, cli_runner: CliRunner) -> None:
        out = _json(cli_runner, "packages")
        data = out["data"]
        assert data["count"] == 7
        assert data["edges"] == 8
        assert data["roots"] == ["p1"]
        assert data["items"][0] == {"id": "p1", "dependencies": ["p2", "p3", "p4"]}

    def test_packages_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "packages"])
        assert result.stdout.split() == ["p1", "p2", "p3", "p4", "p5", "p6", "p7"]

    def test_deps_json(self, cli_runner: CliRunner) -> None:
        out = _json(cli_runner, "deps", "p2")
        assert out["data"]["dependencies"] == ["p5"]
        assert out["data"]["dependents"] == ["p1", "p4"]


@pytest.mark.usefixtures("_isolated_project")
class TestManifestSelection:
    def test_file_flag(
        self, cli_runner: CliRunner, manifest_factory: Callable[..., Path]
    ) -> None:
        manifest_factory({"web": ["db", "cache"], "db": []}, name="deps.json")
        out = _json(cli_runner, "-f", "deps.json", "order", "web")
        assert out["data"]["order"] == ["db", "cache", "web"]

    def test_manifest_path_from_toml(
        self,
        cli_runner: CliRunner,
        project_root: Path,
        manifest_factory: Callable[..., Path],
    ) -> None:
        manifest_factory({"a": ["b"]}, name="other.json")
        (project_root / "pkgorder.toml").write_text('[manifest]\npath = "other.json"\n')
        out = _json(cli_runner, "order", "a")
        assert out["data"]["order"] == ["b", "a"]

    def test_missing_manifest(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-f", "missing.json", "order", "p1"])
        assert result.exit_code == 1
        assert "manifest file not found" in result.stderr

    def test_invalid_manifest(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "broken.json").write_text('{"packages": [{"dependencies": []}]}')
        result = cli_runner.invoke(cli, ["-f", "broken.json", "packages"])
        assert result.exit_code == 1
        assert "invalid manifest" in result.stderr


@pytest.mark.usefixtures("_isolated_project")
class TestCycles:
    def test_cycle_reported(
        self, cli_runner: CliRunner, manifest_factory: Callable[..., Path]
    ) -> None:
        manifest_factory(CYCLIC_PACKAGES, name="cyclic.json")
        out = _json_error(cli_runner, "-f", "cyclic.json", "order", "A")
        assert out["error"]["code"] == "CYCLE_DETECTED"
        assert out["error"]["detail"]["cycle"] == ["A", "B", "A"]

    def test_acyclic_part_still_resolves(
        self, cli_runner: CliRunner, manifest_factory: Callable[..., Path]
    ) -> None:
        manifest_factory(CYCLIC_PACKAGES, name="cyclic.json")
        out = _json(cli_runner, "-f", "cyclic.json", "order", "C")
        assert out["data"]["order"] == ["D", "C"]

    def test_all_rejects_rootless_cycle(
        self, cli_runner: CliRunner, manifest_factory: Callable[..., Path]
    ) -> None:
        manifest_factory(CYCLIC_PACKAGES, name="cyclic.json")
        out = _json_error(cli_runner, "-f", "cyclic.json", "all")
        assert out["error"]["code"] == "CYCLE_DETECTED"
