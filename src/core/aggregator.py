"""
Aggregator module for turning measurement output into summary records.

The measurement tool prints a JSON array on stdout. Depending on its version
that array holds either one raw sample per run, or records it already
aggregated itself. Both are normalised into AggregatedStats here.

Also provides regression detection between two result sets.
"""

from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from core.stats import compression_ratio, summarize
from models.measurement import (
    METRIC_FIELDS,
    PAGES,
    AggregatedStats,
    RawSample,
)


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string with a trailing Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def page_sort_key(page: str) -> Tuple[int, str]:
    return (PAGES.index(page) if page in PAGES else len(PAGES), page)


def aggregate_samples(
    framework: str,
    page: str,
    samples: List[RawSample],
    timestamp: Optional[str] = None,
) -> AggregatedStats:
    """
    Aggregate the raw samples of one framework/page into a summary record.

    Args:
        framework: Framework display name
        page: Page identifier ("home" or "board")
        samples: Raw per-run samples for that page
        timestamp: Measurement timestamp (defaults to now)

    Returns:
        AggregatedStats with one trimmed summary per metric

    Raises:
        ValueError: if samples is empty
    """
    if not samples:
        raise ValueError(f"No samples for {framework} ({page})")

    summaries = {
        attr: summarize([s.value(attr) for s in samples]) for attr, _ in METRIC_FIELDS
    }

    first = samples[0]
    return AggregatedStats(
        framework=framework,
        page=page,
        compression_ratio=compression_ratio(
            summaries["js_transferred"].median, summaries["js_uncompressed"].median
        ),
        compression_type=first.compression_type,
        chrome_version=first.chrome_version,
        measurement_timestamp=timestamp or utc_timestamp(),
        network_condition=first.network_condition,
        **summaries,
    )


def is_aggregated_record(item: Any) -> bool:
    """Aggregated records carry summary objects instead of plain numbers."""
    return isinstance(item, dict) and isinstance(item.get("jsUncompressed"), dict)


def aggregate_output(framework: str, payload: Any) -> List[AggregatedStats]:
    """
    Normalise measurement-tool output into aggregated records.

    Args:
        framework: Framework the output belongs to
        payload: Parsed JSON printed by the measurement tool

    Returns:
        Records ordered board page first, then home page

    Raises:
        ValueError: if the payload is empty, mixes shapes, or describes a
            different framework
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array, got {type(payload).__name__}")
    if not payload:
        raise ValueError("Measurement output is empty")

    aggregated_flags = {is_aggregated_record(item) for item in payload}
    if len(aggregated_flags) > 1:
        raise ValueError("Measurement output mixes raw samples and aggregated records")

    if aggregated_flags == {True}:
        records = [AggregatedStats.from_dict(item) for item in payload]
    else:
        if not all(isinstance(item, dict) for item in payload):
            raise ValueError("Measurement output must be an array of objects")
        samples = [RawSample.from_dict(item, framework=framework) for item in payload]
        for sample in samples:
            if sample.framework != framework:
                raise ValueError(
                    f"Output describes '{sample.framework}', expected '{framework}'"
                )
        by_page: "OrderedDict[str, List[RawSample]]" = OrderedDict()
        for sample in samples:
            by_page.setdefault(sample.page, []).append(sample)
        timestamp = utc_timestamp()
        records = [
            aggregate_samples(framework, page, page_samples, timestamp)
            for page, page_samples in by_page.items()
        ]

    for record in records:
        if record.framework != framework:
            raise ValueError(
                f"Output describes '{record.framework}', expected '{framework}'"
            )

    return sorted(records, key=lambda r: page_sort_key(r.page))


# Default regression thresholds (configurable)
DEFAULT_REGRESSION_THRESHOLDS = {
    "bundle_pct": 5.0,  # Raw bundle growth > 5% is a regression
    "score_points": 5.0,  # Perf score drop > 5 points is a regression
    "lcp_pct": 10.0,  # LCP growth > 10% is a regression
}


def _percent_change(baseline: float, current: float) -> float:
    return ((current - baseline) / baseline * 100) if baseline != 0 else 0.0


def compare_measurements(
    baseline: List[AggregatedStats],
    current: List[AggregatedStats],
    thresholds: Optional[Dict[str, float]] = None,
) -> Dict[str, Any]:
    """
    Compare two result sets and flag regressions per framework and page.

    Checks, on median values:
    - Raw bundle size: growth beyond bundle_pct (%) is a regression
    - Performance score: drop beyond score_points (absolute) is a regression
    - LCP: growth beyond lcp_pct (%) is a regression

    Changes past the same thresholds in the other direction are reported as
    improvements.

    Args:
        baseline: Records from the earlier run
        current: Records from the run under test
        thresholds: Optional overrides for DEFAULT_REGRESSION_THRESHOLDS

    Returns:
        Comparison dict with per-entry metrics, regressions, improvements,
        added/removed entries and a PASS/FAIL verdict
    """
    config = DEFAULT_REGRESSION_THRESHOLDS.copy()
    if thresholds:
        config.update(thresholds)

    base_index = {(r.framework, r.page): r for r in baseline}
    curr_index = {(r.framework, r.page): r for r in current}

    comparison: Dict[str, Any] = {
        "thresholds": config,
        "entries": {},
        "regressions": [],
        "improvements": [],
        "added": sorted(f"{f} ({p})" for f, p in curr_index.keys() - base_index.keys()),
        "removed": sorted(f"{f} ({p})" for f, p in base_index.keys() - curr_index.keys()),
        "verdict": "PASS",
    }

    for key in sorted(base_index.keys() & curr_index.keys()):
        framework, page = key
        base, curr = base_index[key], curr_index[key]
        label = f"{framework} ({page})"

        checks = [
            (
                "Raw Bundle (bytes)",
                base.js_uncompressed.median,
                curr.js_uncompressed.median,
                "bundle_pct",
            ),
            (
                "Perf Score",
                base.performance_score.median,
                curr.performance_score.median,
                "score_points",
            ),
            ("LCP (ms)", base.lcp.median, curr.lcp.median, "lcp_pct"),
        ]

        metrics = {}
        for metric, val1, val2, threshold_key in checks:
            threshold = config[threshold_key]
            delta = val2 - val1

            if threshold_key == "score_points":
                # Higher is better; compare absolute points
                change = delta
                is_regression = change < -threshold
                is_improvement = change > threshold
                change_str = f"{change:+.1f} pts"
                threshold_str = f"{threshold} pts"
            else:
                # Lower is better; compare relative change
                change = _percent_change(val1, val2)
                is_regression = change > threshold
                is_improvement = change < -threshold
                change_str = f"{change:+.1f}%"
                threshold_str = f"{threshold}%"

            metrics[metric] = {
                "baseline": val1,
                "current": val2,
                "delta": delta,
                "change": change,
                "regression": is_regression,
                "improvement": is_improvement,
                "threshold": threshold,
            }

            if is_regression:
                comparison["regressions"].append(
                    {
                        "entry": label,
                        "metric": metric,
                        "change": change_str,
                        "threshold": threshold_str,
                    }
                )
            elif is_improvement:
                comparison["improvements"].append(
                    {"entry": label, "metric": metric, "change": change_str}
                )

        comparison["entries"][label] = metrics

    if comparison["regressions"]:
        comparison["verdict"] = "FAIL"

    return comparison
