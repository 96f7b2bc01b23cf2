"""Tests for the command line interface."""

import json

import click
import pytest
from click.testing import CliRunner

from main import cli, resolve_reference
from tests.fixtures import PAYLOAD, build_squares


@pytest.fixture
def runner():
    return CliRunner()


class TestResolveReference:
    def test_resolves_attribute(self):
        assert resolve_reference("tests.fixtures:build_squares") is build_squares
        assert resolve_reference("tests.fixtures:PAYLOAD") is PAYLOAD

    def test_resolves_nested_attribute(self):
        assert resolve_reference("tests.fixtures:Ranged.get_range").__name__ == "get_range"

    @pytest.mark.parametrize(
        "reference",
        ["tests.fixtures", "tests.fixtures:", ":build_squares", "tests.nope:x", "tests.fixtures:nope"],
    )
    def test_invalid_reference(self, reference):
        with pytest.raises(click.BadParameter):
            resolve_reference(reference)


class TestRunCommand:
    def test_run_work(self, runner):
        result = runner.invoke(cli, ["run", "tests.fixtures:build_squares", "-n", "2", "--label", "squares"])
        assert result.exit_code == 0, result.output
        assert "Evaluation for squares" in result.output
        assert "Execution Time:" in result.output

    def test_run_value(self, runner):
        result = runner.invoke(cli, ["run", "tests.fixtures:PAYLOAD", "-n", "1"])
        assert result.exit_code == 0, result.output
        assert "Count: 100.0" in result.output

    def test_run_multiple_targets_prints_table(self, runner):
        result = runner.invoke(
            cli, ["run", "tests.fixtures:build_squares", "tests.fixtures:PAYLOAD", "-n", "1", "-m", "all"]
        )
        assert result.exit_code == 0, result.output
        assert "Target" in result.output

    def test_invalid_metrics(self, runner):
        result = runner.invoke(cli, ["run", "tests.fixtures:build_squares", "-m", "latency"])
        assert result.exit_code == 2
        assert "Unknown metric" in result.output

    def test_invalid_reference(self, runner):
        result = runner.invoke(cli, ["run", "tests.fixtures:missing"])
        assert result.exit_code == 2

    def test_invalid_times(self, runner):
        result = runner.invoke(cli, ["run", "tests.fixtures:build_squares", "-n", "0"])
        assert result.exit_code == 2

    def test_debug_action_exits_non_zero(self, runner):
        result = runner.invoke(cli, ["run", "tests.fixtures:PAYLOAD", "-n", "1", "--action", "debug"])
        assert result.exit_code == 1

    def test_json_export(self, runner, tmp_path, monkeypatch):
        from evaluate.config import Config

        monkeypatch.setattr(Config, "REPORT_DIR", tmp_path)
        result = runner.invoke(cli, ["run", "tests.fixtures:PAYLOAD", "-n", "1", "--json", "-m", "all"])
        assert result.exit_code == 0, result.output

        files = list(tmp_path.rglob("*.json"))
        assert len(files) == 1
        data = json.loads(files[0].read_text(encoding="utf-8"))
        assert data["results"][0]["count"] == 100


class TestValueCommand:
    def test_value_from_json_file(self, runner, tmp_path):
        data_file = tmp_path / "payload.json"
        data_file.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

        result = runner.invoke(cli, ["value", str(data_file), "-n", "2"])
        assert result.exit_code == 0, result.output
        assert "Evaluation for payload.json" in result.output
        assert "Count: 3.0" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["value", str(tmp_path / "missing.json")])
        assert result.exit_code == 2


class TestProcessCommand:
    def test_process(self, runner):
        result = runner.invoke(cli, ["process", "--label", "cli"])
        assert result.exit_code == 0, result.output
        assert "Evaluation for cli" in result.output
        assert "Count: N/A" in result.output


class TestListProbes:
    def test_list_probes(self, runner):
        result = runner.invoke(cli, ["list-probes"])
        assert result.exit_code == 0
        assert "rss" in result.output
        assert "tracemalloc" in result.output
