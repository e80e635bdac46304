"""
Tests for the command-line interface and settings.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from ..cli import main
from ..config import Settings


class TestCheckCommand:
    def test_forced_confirmation(self, capsys):
        main(["check", "w1 | l1", "-x", "w1"])

        out = capsys.readouterr().out
        assert "Clue: w1 | l1" in out
        assert "Leaves: w1, l1" in out
        assert "Result: l1 -> confirmed" in out

    def test_not_solvable(self, capsys):
        main(["check", "w1|l3|p5", "-x", "w1"])
        assert "Result: no" in capsys.readouterr().out

    def test_parse_error_exits(self, capsys):
        with pytest.raises(SystemExit):
            main(["check", "w1 | q2"])
        assert "Error: Invalid section" in capsys.readouterr().out

    def test_invalid_element_id_exits(self, capsys):
        with pytest.raises(SystemExit):
            main(["check", "w1 | l1", "-c", "zz"])
        assert "Invalid element id: zz" in capsys.readouterr().out


class TestPlayCommand:
    def test_rejected_commands_stay_off_stderr(self, tmp_path):
        """Without --log-file, warnings must not be drawn over the board."""
        package_root = Path(__file__).resolve().parents[2]
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(package_root), env.get("PYTHONPATH")]))
        env["SLEUTH_ELEMENTS_FILE"] = str(tmp_path / "missing.toml")

        completed = subprocess.run(
            [sys.executable, "-m", "sleuth", "play", "--no-color"],
            input="q1c\nw1 | q2\nq\n",
            capture_output=True,
            text=True,
            cwd=tmp_path,
            env=env,
            timeout=60,
        )

        assert completed.returncode == 0
        assert "Clue Solver" in completed.stdout
        assert completed.stderr == ""


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("SLEUTH_ENV", "SLEUTH_ELEMENTS_FILE", "SLEUTH_LOG_LEVEL", "ALLOWED_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.env == "development"
        assert settings.elements_file == "./elements.toml"
        assert settings.allowed_origins == ["*"]
        assert not settings.is_production

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SLEUTH_ENV", "production")
        monkeypatch.setenv("SLEUTH_LOG_LEVEL", "debug")
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example")

        settings = Settings.from_env()

        assert settings.is_production
        assert settings.log_level == "DEBUG"
        assert settings.allowed_origins == ["http://a.example", "http://b.example"]
