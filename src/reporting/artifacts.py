"""
Artifact management module for the benchmark harness.

This module handles writing and reading the files a measurement run
produces in the metrics directory:
- final-measurements.json: metadata plus every aggregated record
- final-measurements.md: human-readable comparison report
- bundle-summary.json: legacy chart format (bundle medians only)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from models.measurement import AggregatedStats

RESULTS_FILENAME = "final-measurements.json"
MARKDOWN_FILENAME = "final-measurements.md"
LEGACY_FILENAME = "bundle-summary.json"

MEASUREMENT_TYPE = "cold-load"

LEGACY_NOTE = "Bundle sizes use raw (uncompressed) as primary, compressed in parentheses"


def ensure_metrics_dir(metrics_dir: Path) -> Path:
    """Ensure the metrics directory exists."""
    metrics_dir = Path(metrics_dir)
    metrics_dir.mkdir(parents=True, exist_ok=True)
    return metrics_dir


def build_metadata(
    results: List[AggregatedStats],
    runs: int,
    network: str,
    failed: Optional[List[str]] = None,
    timestamp: str = "",
) -> Dict[str, Any]:
    """
    Build the metadata block for final-measurements.json.

    Network condition, browser version and compression come from the first
    record when there is one, since the measurement tool reports what it
    actually used.
    """
    first = results[0] if results else None
    return {
        "timestamp": timestamp,
        "runsPerPage": runs,
        "measurementType": MEASUREMENT_TYPE,
        "networkCondition": (first.network_condition if first else None) or network,
        "chromeVersion": first.chrome_version if first else "unknown",
        "compressionType": first.compression_type if first else "gzip",
        "failedFrameworks": list(failed or []),
    }


def write_final_measurements(
    metrics_dir: Path, metadata: Dict[str, Any], results: List[AggregatedStats]
) -> Path:
    """
    Write final-measurements.json.

    Returns:
        Path to the written file
    """
    metrics_dir = ensure_metrics_dir(metrics_dir)
    results_file = metrics_dir / RESULTS_FILENAME

    data = {
        "metadata": metadata,
        "results": [r.to_dict() for r in results],
    }
    with open(results_file, "w") as f:
        json.dump(data, f, indent=2)

    return results_file


def sorted_by_bundle(results: List[AggregatedStats], page: str) -> List[AggregatedStats]:
    """Records for one page, smallest raw median bundle first."""
    return sorted(
        (r for r in results if r.page == page),
        key=lambda r: r.js_uncompressed.median,
    )


def build_legacy_summary(results: List[AggregatedStats], timestamp: str) -> Dict[str, Any]:
    """Build the bundle-summary.json structure consumed by the existing charts."""

    def entries(page: str) -> List[Dict[str, Any]]:
        return [
            {
                "framework": r.framework,
                "jsUncompressed": r.js_uncompressed.median,
                "jsTransferred": r.js_transferred.median,
                "compressionRatio": r.compression_ratio,
                "requests": 0,  # not tracked by the measurement tool
            }
            for r in sorted_by_bundle(results, page)
        ]

    return {
        "timestamp": timestamp,
        "note": LEGACY_NOTE,
        "boardPage": entries("board"),
        "homePage": entries("home"),
    }


def write_bundle_summary(
    metrics_dir: Path, results: List[AggregatedStats], timestamp: str
) -> Path:
    """Write bundle-summary.json and return its path."""
    metrics_dir = ensure_metrics_dir(metrics_dir)
    legacy_file = metrics_dir / LEGACY_FILENAME

    with open(legacy_file, "w") as f:
        json.dump(build_legacy_summary(results, timestamp), f, indent=2)

    return legacy_file


def write_markdown(metrics_dir: Path, markdown: str) -> Path:
    """Write final-measurements.md and return its path."""
    metrics_dir = ensure_metrics_dir(metrics_dir)
    markdown_file = metrics_dir / MARKDOWN_FILENAME
    markdown_file.write_text(markdown)
    return markdown_file


def read_measurements(path: Path) -> Tuple[Dict[str, Any], List[AggregatedStats]]:
    """
    Read a final-measurements.json file.

    Args:
        path: Path to the file

    Returns:
        (metadata, records)

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not a valid results file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Results file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in {path.name}: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise ValueError(f"{path.name} has no 'results' list")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError(f"{path.name} has a malformed 'metadata' block")
    results = [AggregatedStats.from_dict(item) for item in data["results"]]
    return metadata, results
