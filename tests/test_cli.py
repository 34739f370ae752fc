"""
Tests for the command-line interface.
"""

import json

import pytest

from physcalc.cli.main import cli
from physcalc.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def no_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestEvalCommand:
    """Tests for `physcalc eval`."""

    def test_simple_expression(self, capsys):
        """Test precedence through the CLI."""
        assert cli(["eval", "2+3*4"]) == 0
        assert "=>  14" in capsys.readouterr().out

    def test_variables(self, capsys):
        """Test several equations sharing variables."""
        assert cli(["eval", "v = d0 / t0", "d0 = 100m", "t0 = 20s"]) == 0
        assert "=>  5m s^-1" in capsys.readouterr().out

    def test_failure_exit_code(self, capsys):
        """Test that a failed equation gives exit code 1."""
        assert cli(["eval", "1m + 1s"]) == 1
        captured = capsys.readouterr()
        assert "DimensionMismatchError" in captured.out
        assert "1 of 1 equations failed" in captured.err

    def test_json_output(self, capsys):
        """Test JSON output."""
        assert cli(["eval", "--json", "--sig-figs", "3", "x = 1/3"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["variables"] == {"x": "0.333"}


class TestRunCommand:
    """Tests for `physcalc run`."""

    def test_run_file(self, tmp_path, capsys):
        """Test evaluating an equation file to a JSON file."""
        source = tmp_path / "equations.txt"
        source.write_text("force = m0 * a0\nm0 = 2kg\na0 = 9.80665m/s^2\n", encoding="utf-8")
        output = tmp_path / "results.json"

        assert cli(["run", str(source), "--output", str(output)]) == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["variables"]["force"] == "19.6133N"
        assert "Results saved" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing equation file."""
        assert cli(["run", str(tmp_path / "missing.txt")]) == 1
        assert "not found" in capsys.readouterr().err


class TestOtherCommands:
    """Tests for listing commands and settings handling."""

    def test_units(self, capsys):
        """Test the unit listing."""
        assert cli(["units"]) == 0
        out = capsys.readouterr().out
        assert "eV" in out
        assert "Prefixes:" in out

    def test_constants(self, capsys):
        """Test the constant listing."""
        assert cli(["constants"]) == 0
        assert "NA" in capsys.readouterr().out

    def test_no_command(self, capsys):
        """Test that no command prints help."""
        assert cli([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_bad_config(self, tmp_path, capsys):
        """Test that an invalid settings file is reported."""
        path = tmp_path / "settings.json"
        path.write_text("[", encoding="utf-8")
        assert cli(["--config", str(path), "units"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_settings_sig_figs(self, tmp_path, capsys):
        """Test that settings supply the default precision."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"sig_figs": 2}), encoding="utf-8")
        assert cli(["--config", str(path), "eval", "2/3"]) == 0
        assert "=>  0.67" in capsys.readouterr().out
