"""Command-line interface for BookBench."""

import logging
import sys
from pathlib import Path

import click

from bookbench import __version__
from bookbench.orchestration import BenchmarkPointError, WorkloadDriver
from bookbench.utils.config_validator import validate_config_file

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


EXAMPLE_CONFIG = {
    "benchmark": {
        "max_threads": 10,
        "threads_step": 1,
        "modes": ["local", "remote"],
        "initial_num_books": 100,
        "random_seed": 42,
    },
    "remote": {
        "server_address": "http://localhost:8081",
        "timeout_s": 30,
    },
    "workload": {
        "percent_rare_stock_manager_interaction": 10,
        "percent_frequent_stock_manager_interaction": 30,
        "warm_up_runs": 100,
        "num_actual_runs": 500,
        "num_books_to_add": 5,
        "num_books_with_least_copies": 5,
        "num_add_copies": 10,
        "num_editor_picks_to_get": 10,
        "num_books_to_buy": 5,
        "num_book_copies_to_buy": 1,
    },
    "metrics_config": {
        "output_dir": "results",
        "throughput_local_file": "fileT_local.txt",
        "latency_local_file": "fileL_local.txt",
        "throughput_remote_file": "fileT_http.txt",
        "latency_remote_file": "fileL_http.txt",
        "output_summary_json_path": "results/summary.json",
        "output_workers_csv_path": "results/workers.csv",
    },
}


@click.group()
@click.version_option(version=__version__, prog_name="BookBench")
def cli():
    """BookBench: concurrent workload generator for the bookstore service."""
    pass


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level"
)
def run(config_file: str, format: str, log_level: str):
    """Run a benchmark sweep from a configuration file."""
    logging.getLogger().setLevel(getattr(logging, log_level))
    
    click.echo(f"Loading configuration from {config_file}...")
    
    try:
        if format == "yaml":
            driver = WorkloadDriver.from_yaml_file(config_file)
        else:
            driver = WorkloadDriver.from_json_file(config_file)
        
        click.echo("Starting benchmark sweep...")
        summary = driver.run()
        
    except BenchmarkPointError as e:
        click.echo(f"Error: {e}", err=True)
        if e.__cause__ is not None:
            click.echo(f"Caused by: {e.__cause__!r}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    
    click.echo("\nBenchmark completed!")
    for mode, points in summary["modes"].items():
        click.echo(f"[{mode}]")
        for point in points:
            click.echo(
                f"  n={point['num_threads']:3d}  "
                f"throughput={point['aggregate_throughput']:.6e}/ns  "
                f"latency={point['average_latency_ns']:.1f}ns  "
                f"success={point['success_rate']:.1%}"
            )


@cli.command()
@click.option(
    "--output", "-o", default="example_config.yaml",
    help="Output file path"
)
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
def generate_config(output: str, format: str):
    """Generate an example configuration file."""
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    
    if format == "yaml":
        import yaml
        with open(output_path, "w") as f:
            yaml.dump(EXAMPLE_CONFIG, f, default_flow_style=False, sort_keys=False)
    else:
        import json
        with open(output_path, "w") as f:
            json.dump(EXAMPLE_CONFIG, f, indent=2)
    
    click.echo(f"Generated example configuration at {output_path}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate(config_file: str):
    """Validate a configuration file without running the benchmark."""
    click.echo(f"Validating configuration: {config_file}")
    
    try:
        is_valid, errors, _ = validate_config_file(config_file)
    except Exception as e:
        click.echo(click.style(f"Error validating configuration: {e}", fg="red"))
        sys.exit(1)
    
    if is_valid:
        click.echo(click.style("✓ Configuration is valid", fg="green"))
    else:
        click.echo(click.style(f"✗ Configuration has {len(errors)} errors:", fg="red"))
        for i, error in enumerate(errors[:20], 1):
            click.echo(f"  {i}. {error}")
        if len(errors) > 20:
            click.echo(f"  ... and {len(errors) - 20} more errors")
    
    sys.exit(0 if is_valid else 1)


if __name__ == "__main__":
    cli()
