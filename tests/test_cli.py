"""
Tests for pdd/cli.py — verb dispatch, output and exit codes.

default_config() is patched to a tmp_path target so the CLI never writes to
the real ~/.claude/commands/.
"""
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from pdd import __version__
from pdd.cli import main
from pdd.config_loader import COMMANDS_SRC_DIR, SyncConfig


def _config(tmp_path: Path, version: str = __version__) -> SyncConfig:
    return SyncConfig(
        source_dir=COMMANDS_SRC_DIR,
        target_dir=tmp_path / ".claude" / "commands",
        version=version,
    )


def _run(argv: list, config: SyncConfig) -> int:
    with patch("pdd.cli.default_config", return_value=config):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
    return excinfo.value.code


class TestInstallCommand:

    def test_install_exit_zero_and_summary(self, tmp_path, capsys):
        config = _config(tmp_path)
        assert _run(["install"], config) == 0

        out = capsys.readouterr().out
        bundled = sorted(p.name for p in COMMANDS_SRC_DIR.glob("*.md"))
        assert f"Installed {len(bundled)} commands (v{__version__})" in out
        assert "/pdd-help" in out
        assert sorted(p.name for p in config.target_dir.iterdir()) == bundled

    def test_install_reports_cleanup(self, tmp_path, capsys):
        config = _config(tmp_path)
        config.target_dir.mkdir(parents=True)
        (config.target_dir / "pdd-retired.md").write_text("old", encoding="utf-8")

        assert _run(["install"], config) == 0
        out = capsys.readouterr().out
        assert "pdd-retired.md" in out
        assert "Cleaned up 1 old command(s)" in out

    def test_write_failure_exits_nonzero(self, tmp_path, capsys):
        config = _config(tmp_path)
        config.target_dir.parent.mkdir(parents=True)
        config.target_dir.write_text("a file, not a directory", encoding="utf-8")

        assert _run(["install"], config) == 1
        err = capsys.readouterr().err
        assert err.startswith("ERROR:")
        assert "Cannot create" in err


class TestUninstallCommand:

    def test_nothing_installed(self, tmp_path, capsys):
        config = _config(tmp_path)
        assert _run(["uninstall"], config) == 0
        assert "Nothing to uninstall" in capsys.readouterr().out
        assert not config.target_dir.exists()

    def test_uninstall_after_install(self, tmp_path, capsys):
        config = _config(tmp_path)
        _run(["install"], config)
        capsys.readouterr()

        assert _run(["uninstall"], config) == 0
        out = capsys.readouterr().out
        bundled = len(list(COMMANDS_SRC_DIR.glob("*.md")))
        assert f"Removed {bundled} commands" in out
        assert list(config.target_dir.iterdir()) == []

    def test_uninstall_all_removes_legacy(self, tmp_path, capsys):
        config = _config(tmp_path)
        _run(["install"], config)
        (config.target_dir / "pdd-retired.md").write_text("old", encoding="utf-8")

        assert _run(["uninstall", "--all"], config) == 0
        assert list(config.target_dir.iterdir()) == []


class TestUpdateCommand:

    def test_update_not_installed_runs_install(self, tmp_path, capsys):
        config = _config(tmp_path)
        assert _run(["update"], config) == 0
        out = capsys.readouterr().out
        assert "not installed. Running install" in out
        assert (config.target_dir / "pdd-help.md").exists()

    def test_update_already_current(self, tmp_path, capsys):
        config = _config(tmp_path)
        _run(["install"], config)
        capsys.readouterr()

        assert _run(["update"], config) == 0
        out = capsys.readouterr().out
        assert "Already up to date!" in out
        assert "Installed" not in out.split("Already")[1]

    def test_update_from_older(self, tmp_path, capsys):
        _run(["install"], _config(tmp_path, version="0.9.0"))
        capsys.readouterr()

        assert _run(["update"], _config(tmp_path)) == 0
        out = capsys.readouterr().out
        assert "Installed version: v0.9.0" in out
        assert f"Latest version: v{__version__}" in out
        assert "Updating commands" in out


class TestVersionCommand:

    @pytest.mark.parametrize("argv", [["version"], ["--version"], ["-v"]])
    def test_version_not_installed(self, tmp_path, capsys, argv):
        assert _run(argv, _config(tmp_path)) == 0
        out = capsys.readouterr().out
        assert f"pdd-dev v{__version__}" in out
        assert "Commands not installed" in out

    def test_outdated_warning_still_exits_zero(self, tmp_path, capsys):
        _run(["install"], _config(tmp_path, version="0.9.0"))
        capsys.readouterr()

        assert _run(["--version"], _config(tmp_path)) == 0
        out = capsys.readouterr().out
        assert "Installed commands: v0.9.0" in out
        assert "outdated" in out

    def test_no_version_information(self, tmp_path, capsys):
        config = _config(tmp_path)
        config.target_dir.mkdir(parents=True)
        (config.target_dir / "pdd-prd.md").write_text("leftover", encoding="utf-8")

        assert _run(["version"], config) == 0
        assert "no version information" in capsys.readouterr().out


class TestHelpAndUsage:

    @pytest.mark.parametrize("argv", [[], ["help"], ["--help"], ["-h"]])
    def test_help(self, tmp_path, capsys, argv):
        assert _run(argv, _config(tmp_path)) == 0
        out = capsys.readouterr().out
        assert "pdd-dev install" in out
        assert "/pdd-audit" in out

    def test_unknown_verb_rejected(self, tmp_path, capsys):
        assert _run(["frobnicate"], _config(tmp_path)) != 0
        assert "usage:" in capsys.readouterr().err
