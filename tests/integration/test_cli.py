"""Integration tests for the command-line interface."""

import yaml
from click.testing import CliRunner

from bookbench.cli import cli


def test_generate_and_validate_config(tmp_path):
    """A generated example configuration passes validation."""
    runner = CliRunner()
    config_path = tmp_path / "example.yaml"
    
    result = runner.invoke(cli, ["generate-config", "--output", str(config_path)])
    assert result.exit_code == 0
    assert config_path.exists()
    
    result = runner.invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 0
    assert "Configuration is valid" in result.output


def test_validate_reports_errors(tmp_path):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text(yaml.dump({"benchmark": {"modes": ["carrier-pigeon"]}}))
    
    result = CliRunner().invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 1
    assert "carrier-pigeon" in result.output


def test_validate_empty_sections(tmp_path):
    """Sections left empty in YAML fall back to their defaults."""
    config_path = tmp_path / "sparse.yaml"
    config_path.write_text("benchmark:\n  modes: [local]\nremote:\nworkload:\n")

    result = CliRunner().invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 0
    assert "Configuration is valid" in result.output


def test_run_local_sweep(tmp_path, monkeypatch):
    monkeypatch.delenv("BOOKBENCH_LOCAL_TEST", raising=False)
    config_path = tmp_path / "sweep.yaml"
    config_path.write_text(yaml.dump({
        "benchmark": {"max_threads": 2, "modes": ["local"], "random_seed": 1},
        "workload": {"warm_up_runs": 2, "num_actual_runs": 10},
        "metrics_config": {"output_dir": str(tmp_path)},
    }))
    
    result = CliRunner().invoke(cli, ["run", str(config_path)])
    assert result.exit_code == 0, result.output
    assert "Benchmark completed!" in result.output
    assert len((tmp_path / "fileT_local.txt").read_text().splitlines()) == 2


def test_run_reports_failed_point(tmp_path, monkeypatch):
    """A remote sweep with no server fails with the point identified."""
    monkeypatch.delenv("BOOKBENCH_LOCAL_TEST", raising=False)
    config_path = tmp_path / "remote.yaml"
    config_path.write_text(yaml.dump({
        "benchmark": {"max_threads": 1, "modes": ["remote"]},
        "remote": {"server_address": "http://127.0.0.1:9", "timeout_s": 1},
        "metrics_config": {"output_dir": str(tmp_path)},
    }))
    
    result = CliRunner().invoke(cli, ["run", str(config_path)])
    assert result.exit_code == 1
    assert "mode=remote, threads=1" in result.output
