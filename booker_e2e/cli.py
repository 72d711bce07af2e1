"""CLI entry point for booker-e2e.

Usage:
    booker-e2e [FIXTURE] [options]
    python -m booker_e2e [FIXTURE] [options]
"""

import sys
import time
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import load_config
from .errors import ConfigurationError
from .fixture.parser import parse_fixture
from .fixture.validator import validate_fixture
from .reporting.json_reporter import JsonReporter
from .runner.executor import ExecutionConfig, LifecycleRunner


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("fixture", required=False, type=click.Path(path_type=Path))
@click.option("--env-file", type=click.Path(path_type=Path), help="Path to .env file (default: ./.env).")
@click.option("--base-url", help="API base URL (default: BOOKER_BASE_URL or the public Restful Booker).")
@click.option("--timeout", type=float, help="Per-step timeout in seconds (default: 10).")
@click.option("--save-report", is_flag=True, help="Save report to file.")
@click.option("--report-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for saved reports.")
@click.option("--pretty", is_flag=True, help="Pretty print output.")
@click.version_option(__version__, prog_name="booker-e2e")
def main(
    fixture: Optional[Path],
    env_file: Optional[Path],
    base_url: Optional[str],
    timeout: Optional[float],
    save_report: bool,
    report_dir: Optional[Path],
    pretty: bool,
):
    """Run the booking lifecycle (auth, create, get, delete) against the API.

    FIXTURE is a .json/.yaml booking file (default: BOOKER_FIXTURE or
    booking_data.json).
    """
    # Configuration errors abort before any request
    try:
        run_config = load_config(
            env_file=env_file,
            base_url=base_url,
            fixture_path=fixture,
            timeout=timeout,
        )
        booking = parse_fixture(run_config.fixture_path)
        validation = validate_fixture(booking)

        if not validation.valid:
            errors_str = "; ".join(f"{e.path}: {e.message}" for e in validation.errors)
            raise ConfigurationError(f"Invalid fixture: {errors_str}")

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        output_error(f"Configuration error: {e}", pretty=pretty)
        sys.exit(1)

    for warning in validation.warnings:
        print(f"Warning: {warning.path}: {warning.message}")
    print(f"Fixture loaded from {run_config.fixture_path}")
    print(f"Configuration: {run_config.redacted()}")

    start_time = time.time()

    try:
        runner = LifecycleRunner(
            run_config=run_config,
            booking=booking,
            config=ExecutionConfig(save_report=save_report, report_dir=report_dir),
        )
        result = runner.execute()

        flow_output = result.to_flow_json()
        print(JsonReporter().to_json_string(flow_output, pretty=pretty))

        if not flow_output.get("success", False):
            sys.exit(1)

    except KeyboardInterrupt:
        duration_ms = int((time.time() - start_time) * 1000)
        output_error("Run interrupted by user", pretty=pretty, duration_ms=duration_ms)
        sys.exit(130)


def output_error(message: str, pretty: bool = False, **extra):
    """Output error in the JSON envelope format."""
    output = {
        "success": False,
        "command": "run",
        "data": extra or None,
        "message": message,
    }
    print(JsonReporter().to_json_string(output, pretty=pretty))


if __name__ == "__main__":
    main()
