"""
Runner module for invoking the per-framework measurement tool.

The measurement tool (by default ``tsx scripts/measure-single.ts``) drives a
headless browser against one framework build, performs N cold-load runs per
page and prints a JSON array on stdout. Its stderr is progress output and is
passed straight through to the console.
"""

import json
import subprocess
from typing import List, Optional

from config import BenchConfig
from core.aggregator import aggregate_output
from exceptions import MeasurementError
from models.framework import Framework
from models.measurement import AggregatedStats


def build_measure_command(
    config: BenchConfig, framework: Framework, runs: int, network: str
) -> List[str]:
    """
    Build the argument vector for one framework measurement.

    Args:
        config: Harness configuration (provides the base command)
        framework: Framework to measure
        runs: Runs per page
        network: Network condition name

    Returns:
        Argument list suitable for subprocess.run (no shell involved)
    """
    return [
        *config.measure_command,
        framework.name,
        "--runs",
        str(runs),
        "--network",
        network,
    ]


def measure_framework(
    framework: Framework,
    runs: int,
    network: str,
    config: BenchConfig,
    timeout_s: Optional[float] = None,
) -> List[AggregatedStats]:
    """
    Run the measurement tool for a single framework.

    Args:
        framework: Framework to measure
        runs: Runs per page
        network: Network condition name
        config: Harness configuration
        timeout_s: Optional timeout for the whole subprocess

    Returns:
        Aggregated records for the framework's pages

    Raises:
        MeasurementError: if the tool cannot be started, fails, times out or
            prints output that cannot be turned into records
    """
    cmd = build_measure_command(config, framework, runs, network)

    try:
        result = subprocess.run(
            cmd,
            cwd=str(config.project_root),
            stdout=subprocess.PIPE,
            stderr=None,  # inherit: tool progress goes to the console
            timeout=timeout_s,
        )
    except OSError as e:
        raise MeasurementError(framework.name, f"Could not start measurement tool: {e}")
    except subprocess.TimeoutExpired:
        raise MeasurementError(framework.name, f"Measurement timed out after {timeout_s}s")

    if result.returncode != 0:
        raise MeasurementError(
            framework.name,
            f"Measurement tool exited with code {result.returncode}",
            returncode=result.returncode,
        )

    try:
        payload = json.loads(result.stdout.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise MeasurementError(framework.name, f"Output is not valid UTF-8: {e}")
    except json.JSONDecodeError as e:
        raise MeasurementError(framework.name, f"Invalid JSON output: {e}")

    try:
        return aggregate_output(framework.name, payload)
    except ValueError as e:
        raise MeasurementError(framework.name, f"Invalid measurement output: {e}")
