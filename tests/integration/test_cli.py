"""Integration tests for temploc CLI commands."""

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from temploc import __version__
from temploc.cli import EXIT_INVALID, EXIT_NOT_FOUND, EXIT_STALE, app
from tests.fixtures import BASE_MTIME

runner = CliRunner()


@pytest.fixture(autouse=True)
def _work_in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every command from an empty directory so no config is discovered."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture
def path_args(root_a: Path, root_b: Path) -> list[str]:
    return ["--quiet", "--path", str(root_a), "--path", str(root_b)]


class TestGlobalOptions:
    """Tests for global options."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"temploc {__version__}" in result.stdout

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """Test a nonexistent --config is refused."""
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "roots"])

        assert result.exit_code != 0


class TestRootsCommand:
    """Tests for `temploc roots`."""

    def test_default_is_absolute_mode(self) -> None:
        result = runner.invoke(app, ["--quiet", "roots"])

        assert result.exit_code == 0
        assert "1. <absolute path mode>" in result.stdout

    def test_path_overrides_in_order(self, path_args: list[str], root_a: Path, root_b: Path) -> None:
        result = runner.invoke(app, [*path_args, "roots"])

        assert result.exit_code == 0
        assert f"1. {root_a}" in result.stdout
        assert f"2. {root_b}" in result.stdout

    def test_roots_from_config_file(self, tmp_path: Path, root_b: Path) -> None:
        config_file = tmp_path / "temploc.yaml"
        config_file.write_text(f"path:\n  - {root_b}\n")

        result = runner.invoke(app, ["--quiet", "--config", str(config_file), "roots"])

        assert result.exit_code == 0
        assert f"1. {root_b}" in result.stdout


class TestResolveCommand:
    """Tests for `temploc resolve`."""

    def test_resolve_found(
        self,
        path_args: list[str],
        root_b: Path,
        write_template: Callable[..., Path],
    ) -> None:
        path = write_template(root_b, "hello.vm")

        result = runner.invoke(app, [*path_args, "resolve", "hello.vm"])

        assert result.exit_code == 0
        assert f"root:          {root_b}" in result.stdout
        assert str(path) in result.stdout

    def test_resolve_json(
        self,
        path_args: list[str],
        root_a: Path,
        write_template: Callable[..., Path],
    ) -> None:
        write_template(root_a, "hello.vm")

        result = runner.invoke(app, [*path_args, "resolve", "hello.vm", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["root"] == str(root_a)
        assert data["last_modified"] == BASE_MTIME
        assert data["name"] == "hello.vm"

    def test_resolve_show(
        self,
        path_args: list[str],
        root_a: Path,
        write_template: Callable[..., Path],
    ) -> None:
        write_template(root_a, "hello.vm", "Hello $name\n")

        result = runner.invoke(app, [*path_args, "resolve", "hello.vm", "--show"])

        assert result.exit_code == 0
        assert result.stdout.endswith("Hello $name\n")

    def test_resolve_show_undecodable(self, path_args: list[str], root_a: Path) -> None:
        """Test --show forwards bytes that are not valid UTF-8 unchanged."""
        (root_a / "bin.vm").write_bytes(b"\xff\xfe bad")

        result = runner.invoke(app, [*path_args, "resolve", "bin.vm", "--show"])

        assert result.exception is None
        assert result.exit_code == 0
        assert result.stdout_bytes.endswith(b"\xff\xfe bad")

    def test_resolve_missing(self, path_args: list[str]) -> None:
        result = runner.invoke(app, [*path_args, "resolve", "missing.vm"])

        assert result.exit_code == EXIT_NOT_FOUND

    def test_resolve_traversal(self, path_args: list[str]) -> None:
        """Test traversal is reported like a missing template."""
        result = runner.invoke(app, [*path_args, "resolve", "../../secret"])

        assert result.exit_code == EXIT_NOT_FOUND

    def test_resolve_empty_name(self, path_args: list[str]) -> None:
        result = runner.invoke(app, [*path_args, "resolve", ""])

        assert result.exit_code == EXIT_INVALID


class TestCheckCommand:
    """Tests for `temploc check`."""

    def test_up_to_date(
        self,
        path_args: list[str],
        root_b: Path,
        write_template: Callable[..., Path],
    ) -> None:
        write_template(root_b, "x.vm")

        result = runner.invoke(app, [*path_args, "check", "x.vm", "--since", str(BASE_MTIME)])

        assert result.exit_code == 0
        assert "x.vm is up to date" in result.stdout

    def test_stale(
        self,
        path_args: list[str],
        root_b: Path,
        write_template: Callable[..., Path],
    ) -> None:
        path = write_template(root_b, "x.vm")
        os.utime(path, (BASE_MTIME + 60, BASE_MTIME + 60))

        result = runner.invoke(
            app,
            [*path_args, "check", "x.vm", "--since", str(BASE_MTIME), "--json"],
        )

        assert result.exit_code == EXIT_STALE
        data = json.loads(result.stdout)
        assert data["stale"] is True
        assert data["last_modified"] == BASE_MTIME + 60

    def test_missing(self, path_args: list[str]) -> None:
        result = runner.invoke(app, [*path_args, "check", "x.vm", "--since", "0"])

        assert result.exit_code == EXIT_NOT_FOUND


class TestRenderCommand:
    """Tests for `temploc render`."""

    def test_render_with_vars(
        self,
        path_args: list[str],
        root_a: Path,
        write_template: Callable[..., Path],
    ) -> None:
        write_template(root_a, "hello.j2", "Hello {{ name }} from {{ place }}")

        result = runner.invoke(
            app,
            [*path_args, "render", "hello.j2", "--var", "name=World", "--var", "place=temploc"],
        )

        assert result.exit_code == 0
        assert result.stdout == "Hello World from temploc"

    def test_render_to_file(
        self,
        path_args: list[str],
        tmp_path: Path,
        root_a: Path,
        write_template: Callable[..., Path],
    ) -> None:
        write_template(root_a, "hello.j2", "Hi")
        output = tmp_path / "out.txt"

        result = runner.invoke(app, [*path_args, "render", "hello.j2", "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == "Hi"

    def test_render_missing(self, path_args: list[str]) -> None:
        result = runner.invoke(app, [*path_args, "render", "missing.j2"])

        assert result.exit_code == EXIT_NOT_FOUND

    def test_render_bad_var(
        self,
        path_args: list[str],
        root_a: Path,
        write_template: Callable[..., Path],
    ) -> None:
        write_template(root_a, "hello.j2", "Hi")

        result = runner.invoke(app, [*path_args, "render", "hello.j2", "--var", "novalue"])

        assert result.exit_code == 2


class TestInitCommand:
    """Tests for `temploc init`."""

    def test_init_creates_config(self) -> None:
        result = runner.invoke(app, ["--quiet", "init"])

        assert result.exit_code == 0
        assert Path(".temploc/config.yaml").exists()

    def test_init_refuses_overwrite(self) -> None:
        runner.invoke(app, ["--quiet", "init"])

        result = runner.invoke(app, ["--quiet", "init"])

        assert result.exit_code == 1

    def test_init_force(self) -> None:
        runner.invoke(app, ["--quiet", "init"])

        result = runner.invoke(app, ["--quiet", "init", "--force"])

        assert result.exit_code == 0
