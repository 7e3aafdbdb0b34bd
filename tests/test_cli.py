"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from recital.cli import app


runner = CliRunner()


@pytest.fixture
def events_csv(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text(
        "name,minutes,cost\n"
        "Opening gala,60,15\n"
        "Mahler 2,120,25\n"
        "String quartet,40,8\n"
        "Organ recital,75,15\n"
        "Lieder,65,20\n"
    )
    return path


class TestFestivalCommands:
    """Test festival and scenarios."""

    def test_festival(self, events_csv, tmp_path):
        out = tmp_path / "plan.json"
        result = runner.invoke(app, ["festival", str(events_csv), "--budget", "50", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "Best total: 235 minutes" in result.output
        assert json.loads(out.read_text())["total_minutes"] == 235

    def test_festival_strategy(self, events_csv):
        result = runner.invoke(app, ["festival", str(events_csv), "-b", "50", "-s", "exhaustive"])

        assert result.exit_code == 0, result.output
        assert "(exhaustive)" in result.output

    def test_festival_negative_budget(self, events_csv):
        result = runner.invoke(app, ["festival", str(events_csv), "--budget", "-5"])
        assert result.exit_code == 2

    def test_festival_missing_file(self, tmp_path):
        result = runner.invoke(app, ["festival", str(tmp_path / "none.csv"), "--budget", "5"])
        assert result.exit_code == 2

    def test_scenarios(self, events_csv):
        result = runner.invoke(app, ["scenarios", str(events_csv), "-b", "20", "-b", "50"])

        assert result.exit_code == 0, result.output
        assert "Budget 20" in result.output
        assert "235" in result.output


class TestModulationCommands:
    """Test related and modulate."""

    def test_related(self):
        result = runner.invoke(app, ["related", "F minor", "-r", "0", "-r", "3", "-r", "5"])

        assert result.exit_code == 0, result.output
        assert result.output.split("\n")[:3] == ["Ab major", "C minor", "F major"]

    def test_related_bad_key(self):
        result = runner.invoke(app, ["related", "H major"])
        assert result.exit_code == 2

    def test_modulate(self):
        result = runner.invoke(app, ["modulate", "C major", "Bb minor"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("C major -> ")
        assert "Bb minor" in result.output
        assert "3 modulation(s)" in result.output

    def test_modulate_dfs(self):
        result = runner.invoke(app, ["modulate", "Db major", "A minor", "-r", "3", "-r", "5", "-s", "dfs"])

        assert result.exit_code == 0, result.output
        assert "6 modulation(s)" in result.output

    def test_modulate_no_path(self):
        result = runner.invoke(app, ["modulate", "G minor", "Ab major", "-r", "1"])

        assert result.exit_code == 1
        assert "No modulation path" in result.output

    def test_config_option(self, tmp_path):
        cfg = tmp_path / "recital.yaml"
        cfg.write_text("modulation:\n  default_strategy: dfs\n")

        result = runner.invoke(app, ["modulate", "C major", "G major", "--config", str(cfg)])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("C major -> G major")
