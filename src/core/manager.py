"""
Manager module for orchestrating a full measurement run.

A run validates that every framework has been built, measures each one in
turn, writes the reports and prints a summary. Execution is sequential: one
framework after another, one measurement subprocess at a time.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import BenchConfig, validate_network, validate_runs
from console import SEPARATOR, log_and_print, print_block
from core.aggregator import compare_measurements, utc_timestamp
from core.runner import measure_framework
from exceptions import BuildMissingError, MeasurementError
from models.framework import Framework
from models.measurement import AggregatedStats
from reporting.artifacts import build_metadata, read_measurements
from reporting.reporter import format_console_summary, generate_reports


@dataclass
class MeasurementRun:
    """Outcome of a measurement run."""

    results: List[AggregatedStats] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    paths: Dict[str, Path] = field(default_factory=dict)
    comparison: Optional[Dict[str, Any]] = None

    @property
    def all_failed(self) -> bool:
        return bool(self.failed) and not self.results


def validate_builds(frameworks: List[Framework], project_root: Path) -> List[str]:
    """
    Check that every framework has a build on disk.

    Returns:
        Names of frameworks whose build is missing (empty if all present)
    """
    missing = []
    for framework in frameworks:
        if framework.build_exists(project_root):
            log_and_print(f"{framework.name}: Build found", "OK")
        else:
            missing.append(framework.name)
            log_and_print(f"{framework.name}: Build not found", "ERROR")
    return missing


def measure_all(
    frameworks: List[Framework],
    runs: int,
    network: str,
    config: BenchConfig,
    timeout_s: Optional[float] = None,
) -> MeasurementRun:
    """
    Measure each framework in order.

    A failing framework is logged and recorded in ``failed``; the remaining
    frameworks are still measured.
    """
    run = MeasurementRun()

    for framework in frameworks:
        print_block(f"\n{SEPARATOR}\nMeasuring {framework.name}...\n{SEPARATOR}")
        try:
            records = measure_framework(framework, runs, network, config, timeout_s)
        except MeasurementError as e:
            log_and_print(f"Failed to measure {framework.name}: {e}", "ERROR")
            run.failed.append(framework.name)
            continue

        run.results.extend(records)
        log_and_print(f"{framework.name}: {len(records)} page result(s)", "OK")

    return run


def load_baseline(baseline_path: Optional[Path]) -> Optional[List[AggregatedStats]]:
    """Load baseline records, or None when no baseline was requested."""
    if baseline_path is None:
        return None
    _, baseline = read_measurements(baseline_path)
    log_and_print(f"Loaded baseline with {len(baseline)} record(s) from {baseline_path}")
    return baseline


def write_run_reports(
    run: MeasurementRun,
    config: BenchConfig,
    runs: int,
    network: str,
    baseline: Optional[List[AggregatedStats]] = None,
    baseline_label: str = "",
    plots: bool = False,
    timestamp: Optional[str] = None,
    write_json: bool = True,
) -> MeasurementRun:
    """
    Fill in metadata and comparison on ``run`` and write its reports.

    Metadata already present on ``run`` takes precedence over the values
    derived from ``runs``, ``network`` and the records.
    """
    run.metadata = {
        **build_metadata(run.results, runs, network, run.failed, timestamp or utc_timestamp()),
        **run.metadata,
    }
    if baseline is not None:
        run.comparison = compare_measurements(baseline, run.results)

    run.paths = generate_reports(
        config.output_dir,
        run.results,
        run.metadata,
        run.failed,
        run.comparison,
        baseline_label,
        plots,
        write_json,
    )
    for name, path in run.paths.items():
        log_and_print(f"{name}: {path}", "OK")

    print_block(format_console_summary(run.results, run.failed, run.comparison))
    return run


def run_final_measurements(
    config: BenchConfig,
    runs: Optional[int] = None,
    network: Optional[str] = None,
    frameworks: Optional[List[Framework]] = None,
    timeout_s: Optional[float] = None,
    plots: bool = False,
    baseline_path: Optional[Path] = None,
) -> MeasurementRun:
    """
    Run the complete measurement pipeline.

    Args:
        config: Harness configuration
        runs: Runs per page (defaults to config.default_runs)
        network: Network condition (defaults to config.default_network)
        frameworks: Frameworks to measure (defaults to all configured)
        timeout_s: Per-framework subprocess timeout
        plots: Also render PNG charts
        baseline_path: Previous final-measurements.json to compare against

    Returns:
        MeasurementRun with results, failures, metadata and written paths

    Raises:
        ConfigError: if runs or network are invalid
        BuildMissingError: if any framework build is missing (nothing is
            measured in that case)
    """
    runs = validate_runs(runs if runs is not None else config.default_runs)
    network = validate_network(network or config.default_network)
    frameworks = frameworks if frameworks is not None else list(config.frameworks)
    if timeout_s is None:
        timeout_s = config.timeout_s

    log_and_print("Final Production Measurements", "STEP 0")
    log_and_print(f"Runs per page: {runs}")
    log_and_print(f"Network: {network}")
    log_and_print(f"Frameworks: {len(frameworks)}")

    baseline = load_baseline(baseline_path)

    log_and_print("Validating builds...", "STEP 1")
    missing = validate_builds(frameworks, config.project_root)
    if missing:
        log_and_print("Please run \"npm run build\" in each framework directory first.")
        raise BuildMissingError(missing)
    log_and_print("All builds validated", "OK")

    log_and_print("Running measurements...", "STEP 2")
    run = measure_all(frameworks, runs, network, config, timeout_s)

    log_and_print("Generating reports...", "STEP 3")
    return write_run_reports(
        run,
        config,
        runs,
        network,
        baseline=baseline,
        baseline_label=baseline_path.name if baseline_path else "",
        plots=plots,
    )


def regenerate_reports(
    results_path: Path,
    config: BenchConfig,
    plots: bool = False,
    baseline_path: Optional[Path] = None,
) -> MeasurementRun:
    """
    Rebuild Markdown, legacy summary and charts from an existing results file.

    The stored metadata is used unchanged and final-measurements.json is not
    rewritten.
    """
    metadata, results = read_measurements(results_path)
    log_and_print(f"Loaded {len(results)} record(s) from {results_path}", "STEP 1")

    baseline = load_baseline(baseline_path)

    run = MeasurementRun(
        results=results,
        failed=list(metadata.get("failedFrameworks") or []),
        metadata=dict(metadata),
    )
    log_and_print("Generating reports...", "STEP 2")
    return write_run_reports(
        run,
        config,
        int(metadata.get("runsPerPage") or config.default_runs),
        metadata.get("networkCondition") or config.default_network,
        baseline=baseline,
        baseline_label=baseline_path.name if baseline_path else "",
        plots=plots,
        timestamp=metadata.get("timestamp") or None,
        write_json=False,
    )
