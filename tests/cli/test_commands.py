"""
Tests for CLI command implementations.

Tool actions are patched out; these tests check settings plumbing, output
and exit codes.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from wasmtoolkit.cli.commands.opt import tool_args_from
from wasmtoolkit.cli.parser import CLI
from wasmtoolkit.cli.utils import EXIT_OK, EXIT_SKIPPED, settings_from_args
from wasmtoolkit.config import CONFIG_FILENAME, InstallMode
from wasmtoolkit.tools.actions import ActionReport
from wasmtoolkit.tools.registry import Tool
from wasmtoolkit.tools.resolver import CannotInstall, Found, ToolResolver

MAKE_RESOLVER = "wasmtoolkit.cli.commands.resolve.make_resolver"


@pytest.fixture
def project(temp_dir, monkeypatch):
    """Run commands from an empty project with an isolated cache."""
    root = temp_dir / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    monkeypatch.setenv("WASMTOOLKIT_CACHE_DIR", str(temp_dir / "cache"))
    return root


class TestSettingsFromArgs:
    """Tests for CLI overrides of settings."""

    def test_flags_override_config(self, project, temp_dir):
        """Test --no-install and --cache-dir beat the config file."""
        (project / CONFIG_FILENAME).write_text("install: normal\n")
        args = CLI().parse_args(
            [
                "--cache-dir",
                str(temp_dir / "flag"),
                "resolve",
                "wasm-opt",
                "--no-install",
            ]
        )

        settings = settings_from_args(args)

        assert settings.install is InstallMode.NO_INSTALL
        assert settings.cache_dir == temp_dir / "flag"

    def test_config_without_flags(self, project):
        """Test config values apply when no flags are given."""
        (project / CONFIG_FILENAME).write_text("install: no-install\n")
        args = CLI().parse_args(["resolve", "wasm-opt"])

        assert not settings_from_args(args).install_permitted


class TestToolArgs:
    """Tests for wasm-opt argument passthrough."""

    def test_default(self):
        assert tool_args_from(Mock(tool_args=[]), ["-O"]) == ["-O"]

    def test_strips_separator(self):
        assert tool_args_from(Mock(tool_args=["--", "-Oz"]), ["-O"]) == ["-Oz"]

    def test_trailing_no_install_is_the_option(self):
        args = Mock(tool_args=["-O3", "--no-install"], no_install=False)

        assert tool_args_from(args, ["-O"]) == ["-O3"]
        assert args.no_install is True


class TestResolveCommand:
    """Tests for the resolve command."""

    def test_found(self, project, capsys):
        """Test the path is printed and exit code is 0."""
        resolver = Mock(spec=ToolResolver)
        resolver.resolve.return_value = Found(Path("/opt/bin/wasm-opt"))

        with patch(MAKE_RESOLVER, return_value=resolver):
            result = CLI().run(["resolve", "wasm-opt", "--no-install"])

        assert result == EXIT_OK
        assert capsys.readouterr().out.strip() == str(Path("/opt/bin/wasm-opt"))
        resolver.resolve.assert_called_once_with(Tool.WASM_OPT, False)

    def test_skipped(self, project, capsys):
        """Test an informational outcome exits with 2."""
        resolver = Mock(spec=ToolResolver)
        resolver.resolve.return_value = CannotInstall()

        with patch(MAKE_RESOLVER, return_value=resolver):
            result = CLI().run(["resolve", "wasm-dis"])

        assert result == EXIT_SKIPPED
        assert capsys.readouterr().out == ""


class TestOptCommand:
    """Tests for the opt command."""

    def test_optimized(self, project, capsys):
        """Test optimized files are printed."""
        report = ActionReport(
            Tool.WASM_OPT, Found(Path("/bin/wasm-opt")), [project / "a.wasm"]
        )

        with patch(
            "wasmtoolkit.cli.commands.opt.optimize", return_value=report
        ) as optimize:
            result = CLI().run(["opt", str(project), "--", "-Oz"])

        assert result == EXIT_OK
        assert f"optimized {project / 'a.wasm'}" in capsys.readouterr().out
        assert optimize.call_args[0][1] == ["-Oz"]
        assert optimize.call_args[1]["install_permitted"] is True

    def test_config_args(self, project):
        """Test wasm_opt.args from the config is the default."""
        (project / CONFIG_FILENAME).write_text("wasm_opt:\n  args: ['-O4']\n")
        report = ActionReport(Tool.WASM_OPT, CannotInstall())

        with patch(
            "wasmtoolkit.cli.commands.opt.optimize", return_value=report
        ) as optimize:
            result = CLI().run(["opt", str(project)])

        assert result == EXIT_SKIPPED
        assert optimize.call_args[0][1] == ["-O4"]

    def test_trailing_no_install_forbids_download(self, project):
        """Test --no-install after DIR is not passed on to wasm-opt."""
        report = ActionReport(Tool.WASM_OPT, CannotInstall())

        with patch(
            "wasmtoolkit.cli.commands.opt.optimize", return_value=report
        ) as optimize:
            result = CLI().run(["opt", str(project), "-O3", "--no-install"])

        assert result == EXIT_SKIPPED
        assert optimize.call_args[0][1] == ["-O3"]
        assert optimize.call_args[1]["install_permitted"] is False

    def test_disabled(self, project):
        """Test wasm_opt.enabled: false skips without resolving."""
        (project / CONFIG_FILENAME).write_text("wasm_opt:\n  enabled: false\n")

        with patch("wasmtoolkit.cli.commands.opt.optimize") as optimize:
            result = CLI().run(["opt", str(project)])

        assert result == EXIT_SKIPPED
        optimize.assert_not_called()


class TestDisCommand:
    """Tests for the dis command."""

    def test_written(self, project, capsys):
        report = ActionReport(
            Tool.WASM_DIS, Found(Path("/bin/wasm-dis")), [project / "a.wat"]
        )

        with patch("wasmtoolkit.cli.commands.dis.disassemble", return_value=report):
            result = CLI().run(["dis", str(project)])

        assert result == EXIT_OK
        assert f"wrote {project / 'a.wat'}" in capsys.readouterr().out


class TestNewCommand:
    """Tests for the new command."""

    def test_created(self, project, capsys):
        """Test the project root is used as cwd."""
        report = ActionReport(
            Tool.CARGO_GENERATE,
            Found(Path("/bin/cargo-generate")),
            [project / "hello"],
        )

        with patch(
            "wasmtoolkit.cli.commands.new.generate", return_value=report
        ) as generate:
            result = CLI().run(["--project-root", str(project), "new", "hello"])

        assert result == EXIT_OK
        assert "Created project" in capsys.readouterr().out
        assert generate.call_args[1]["cwd"] == project


class TestCacheCommand:
    """Tests for the cache command."""

    def test_location(self, project, temp_dir, capsys):
        result = CLI().run(["cache"])

        assert result == EXIT_OK
        assert str(temp_dir / "cache") in capsys.readouterr().out

    def test_list_empty(self, project, capsys):
        CLI().run(["cache", "--list"])

        assert "(empty)" in capsys.readouterr().out

    def test_list_entries(self, project, temp_dir, capsys):
        """Test entries are listed with their binaries."""
        entry = temp_dir / "cache" / "wasm-opt-0123456789abcdef"
        entry.mkdir(parents=True)
        (entry / "wasm-opt").write_text("bin")
        (temp_dir / "cache" / "lock").mkdir()

        CLI().run(["cache", "--list"])

        out = capsys.readouterr().out
        assert "wasm-opt-0123456789abcdef: wasm-opt" in out
        assert "lock" not in out
