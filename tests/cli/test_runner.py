"""Tests for the CLI runner."""

from pathlib import Path

import orjson
import pytest

from lens_migrate import __version__
from lens_migrate.cli.runner import EXIT_ERROR, EXIT_OK, EXIT_USAGE, CLIRunner


@pytest.fixture
def files(tmp_path: Path) -> dict[str, Path]:
    return {
        "user": tmp_path / "user" / "settings.json",
        "workspace": tmp_path / "proj" / ".vscode" / "settings.json",
        "state": tmp_path / "state.json",
    }


def _write(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data))


def _read(path: Path) -> dict:
    return orjson.loads(path.read_bytes())


def _argv(command: str, files: dict[str, Path], *extra: str) -> list[str]:
    return [
        command,
        "--user-settings",
        str(files["user"]),
        "--workspace-settings",
        str(files["workspace"]),
        "--state",
        str(files["state"]),
        *extra,
    ]


class TestGlobalOptions:
    def test_version(self, capsys) -> None:
        assert CLIRunner().run(["--version"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == __version__

    def test_no_command(self, capsys) -> None:
        assert CLIRunner().run([]) == EXIT_USAGE
        assert "No command specified" in capsys.readouterr().out

    def test_invalid_current_version(self, files, capsys) -> None:
        """Test an unparsable --current-version is reported, not raised."""
        exit_code = CLIRunner().run(
            _argv("activate", files, "--current-version", "eight")
        )
        assert exit_code == EXIT_ERROR
        assert "Invalid version" in capsys.readouterr().out
        assert not files["state"].exists()


class TestActivate:
    def test_first_run(self, files, capsys) -> None:
        assert CLIRunner().run(_argv("activate", files)) == EXIT_OK

        assert "First run: recorded v8.0.2." in capsys.readouterr().out
        assert _read(files["state"]) == {"gitlensVersion": "8.0.2"}

    def test_upgrade(self, files, capsys) -> None:
        """Test an upgrade migrates both settings files."""
        _write(files["user"], {"gitlens.blame.line.enabled": True})
        _write(
            files["workspace"],
            {"gitlens": {"gitExplorer": {"gravatars": False}}},
        )
        _write(files["state"], {"gitlensVersion": "7.5.9"})

        assert CLIRunner().run(_argv("activate", files)) == EXIT_OK

        out = capsys.readouterr().out
        assert "Migrated v7.5.9 -> v8.0.2" in out
        assert "0 failed across 5 batch(es)" in out

        user = _read(files["user"])
        assert user == {
            "gitlens.blame.line.enabled": True,
            "gitlens.currentLine.enabled": True,
            "gitlens.hovers.currentLine.enabled": True,
            "gitlens.keymap": "alternate",
        }

        workspace = _read(files["workspace"])["gitlens"]
        assert workspace["explorers"] == {"avatars": False}
        assert _read(files["state"]) == {"gitlensVersion": "8.0.2"}

    def test_disabled(self, files, capsys) -> None:
        _write(files["user"], {"git": {"enabled": False}})
        _write(files["state"], {"gitlensVersion": "7.5.9"})

        assert CLIRunner().run(_argv("activate", files)) == EXIT_OK

        assert "disabled" in capsys.readouterr().out
        assert _read(files["state"]) == {"gitlensVersion": "7.5.9"}

    def test_corrupt_marker(self, files, capsys) -> None:
        _write(files["state"], {"gitlensVersion": "not-a-version"})

        assert CLIRunner().run(_argv("activate", files)) == EXIT_OK

        assert "aborted" in capsys.readouterr().out
        assert _read(files["state"]) == {"gitlensVersion": "8.0.2"}


class TestStatus:
    def test_first_run(self, files, capsys) -> None:
        assert CLIRunner().run(_argv("status", files)) == EXIT_OK
        out = capsys.readouterr().out
        assert "Current version:  v8.0.2" in out
        assert "none (first run)" in out
        assert not files["state"].exists()

    def test_pending(self, files, capsys) -> None:
        _write(files["state"], {"gitlensVersion": "8.0.0-rc"})

        assert CLIRunner().run(_argv("status", files)) == EXIT_OK

        out = capsys.readouterr().out
        assert "Recorded version: v8.0.0-rc" in out
        assert "v8.0.0-rc:" in out
        assert "v8.0.0:" in out
        assert "v8.0.2:" in out
        assert "v7.5.10" not in out

    def test_current(self, files, capsys) -> None:
        _write(files["state"], {"gitlensVersion": "8.0.3"})
        assert CLIRunner().run(_argv("status", files)) == EXIT_OK
        assert "Settings are current." in capsys.readouterr().out

    def test_corrupt_marker(self, files, capsys) -> None:
        _write(files["state"], {"gitlensVersion": "junk"})
        assert CLIRunner().run(_argv("status", files)) == EXIT_ERROR
        assert "Error:" in capsys.readouterr().out
