"""
Report generator module for framework comparison reports.

This module renders aggregated measurements as Markdown (for blog posts and
the repository) and as a plain-text console summary, and writes every
report file for a run.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from config import NETWORK_CONDITIONS
from models.measurement import AggregatedStats
from reporting.artifacts import (
    sorted_by_bundle,
    write_bundle_summary,
    write_final_measurements,
    write_markdown,
)

PAGE_TITLES = {
    "board": "Board Page",
    "home": "Home Page",
}


def format_kb(num_bytes: float) -> str:
    """Format a byte count as kilobytes with one decimal."""
    return f"{num_bytes / 1024:.1f}"


def format_value(value: float) -> str:
    """Print whole numbers without a decimal part, others with one decimal."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def generate_markdown_table(results: List[AggregatedStats], page: str) -> str:
    """
    Render the comparison table for one page.

    Rows are sorted by raw median bundle size (smallest first); cells show
    median ±stddev.
    """
    rows = sorted_by_bundle(results, page)

    lines = [
        f"## {PAGE_TITLES.get(page, page.title())} Performance",
        "",
        "Sorted by raw bundle size (smallest first):",
        "",
        "| Framework | Raw (kB) | Compressed (kB) | Ratio | Perf Score | FCP (ms) | LCP (ms) |",
        "|-----------|----------|----------------|-------|------------|----------|----------|",
    ]

    for r in rows:
        raw = f"{format_kb(r.js_uncompressed.median)} ±{format_kb(r.js_uncompressed.stddev)}"
        compressed = f"{format_kb(r.js_transferred.median)} ±{format_kb(r.js_transferred.stddev)}"
        ratio = f"{format_value(r.compression_ratio)}%"
        perf = f"{format_value(r.performance_score.median)} ±{r.performance_score.stddev:.1f}"
        fcp = f"{format_value(r.fcp.median)} ±{r.fcp.stddev:.0f}"
        lcp = f"{format_value(r.lcp.median)} ±{r.lcp.stddev:.0f}"
        lines.append(
            f"| {r.framework} | {raw} | {compressed} | {ratio} | {perf} | {fcp} | {lcp} |"
        )

    runs = rows[0].js_transferred.runs if rows else 3
    compression = rows[0].compression_type if rows else "gzip"

    lines.extend(
        [
            "",
            "**Explanation:**",
            "- **Raw**: Uncompressed bundle size (actual code volume, more consistent for comparison)",
            "- **Compressed**: Bytes transferred over network (what users download)",
            "- **Ratio**: Percentage saved by compression (higher is better compression)",
            f"- Values show median ±std dev from {runs} measurement runs",
            f"- Compression type: {compression}",
            "",
            "",
        ]
    )

    return "\n".join(lines)


def generate_comparison_section(comparison: Dict[str, Any], baseline_label: str = "") -> str:
    """Render a baseline comparison result as Markdown."""
    lines = ["## Baseline Comparison", ""]
    if baseline_label:
        lines.extend([f"Baseline: `{baseline_label}`", ""])

    lines.append(f"**Verdict: {comparison['verdict']}**")
    lines.append("")

    if comparison["regressions"]:
        lines.extend(
            [
                "| Entry | Metric | Change | Threshold |",
                "|-------|--------|--------|-----------|",
            ]
        )
        for reg in comparison["regressions"]:
            lines.append(
                f"| {reg['entry']} | {reg['metric']} | {reg['change']} | {reg['threshold']} |"
            )
        lines.append("")
    else:
        lines.extend(["No regressions detected.", ""])

    if comparison["improvements"]:
        lines.append("Improvements:")
        for imp in comparison["improvements"]:
            lines.append(f"- {imp['entry']}: {imp['metric']} {imp['change']}")
        lines.append("")

    if comparison["added"]:
        lines.extend([f"New in this run: {', '.join(comparison['added'])}", ""])
    if comparison["removed"]:
        lines.extend([f"Missing from this run: {', '.join(comparison['removed'])}", ""])

    lines.append("")
    return "\n".join(lines)


def generate_markdown_report(
    results: List[AggregatedStats],
    metadata: Dict[str, Any],
    failed: Optional[List[str]] = None,
    comparison: Optional[Dict[str, Any]] = None,
    baseline_label: str = "",
) -> str:
    """
    Generate the full Markdown comparison report.

    Args:
        results: All aggregated records of the run
        metadata: Metadata block (as written to final-measurements.json)
        failed: Frameworks whose measurement failed
        comparison: Optional result of compare_measurements()
        baseline_label: Name of the baseline file, shown in the comparison

    Returns:
        Markdown document as a string
    """
    network = metadata.get("networkCondition") or "4g"
    network_desc = NETWORK_CONDITIONS.get(network, network)

    lines = [
        "# Framework Performance Comparison",
        "",
        f"*Measured: {metadata.get('timestamp', '')}*",
        "",
        "## Methodology",
        "",
        f"- **Runs per page**: {metadata.get('runsPerPage', '')}",
        "- **Measurement type**: Cold-load (cache cleared between runs)",
        "- **Device**: Mobile (Pixel 5 emulation)",
        f"- **Network**: {network_desc}",
        "- **CPU**: 1x (no throttling, to isolate bundle size impact)",
        f"- **Lighthouse version**: {metadata.get('chromeVersion') or 'unknown'}",
        f"- **Compression**: {metadata.get('compressionType') or 'gzip'}",
        "- **Outliers**: removed per metric with the 1.5×IQR rule before summarising",
        "",
        "",
    ]
    markdown = "\n".join(lines)

    markdown += generate_markdown_table(results, "board")
    markdown += generate_markdown_table(results, "home")

    if failed:
        markdown += "## Failed Measurements\n\n"
        markdown += f"The following frameworks failed to measure: {', '.join(failed)}\n\n"

    if comparison is not None:
        markdown += generate_comparison_section(comparison, baseline_label)

    return markdown


def _summary_lines(results: List[AggregatedStats], page: str) -> List[str]:
    lines = []
    for r in sorted_by_bundle(results, page):
        raw = format_kb(r.js_uncompressed.median)
        compressed = format_kb(r.js_transferred.median)
        ratio = format_value(r.compression_ratio)
        perf = format_value(r.performance_score.median)
        lines.append(
            f"   {r.framework:<23} {raw:>6} kB raw ({compressed:>5} kB compressed, {ratio}%) | Perf: {perf}"
        )
    return lines


def format_console_summary(
    results: List[AggregatedStats],
    failed: Optional[List[str]] = None,
    comparison: Optional[Dict[str, Any]] = None,
) -> str:
    """Render the end-of-run summary printed to the console."""
    separator = "=" * 60
    lines = [
        "",
        separator,
        "MEASUREMENT SUMMARY",
        separator,
        "",
        "Board Page Bundle Sizes (smallest to largest by raw size):",
        *_summary_lines(results, "board"),
        "",
        "Home Page Bundle Sizes (smallest to largest by raw size):",
        *_summary_lines(results, "home"),
    ]

    if comparison is not None:
        lines.extend(["", f"Baseline comparison: {comparison['verdict']}"])
        for reg in comparison["regressions"]:
            lines.append(f"   ✗ {reg['entry']}: {reg['metric']} {reg['change']}")

    if failed:
        lines.extend(["", f"✗ Failed: {', '.join(failed)}"])

    lines.extend(["", "✓ All measurements complete!", ""])
    return "\n".join(lines)


def generate_reports(
    metrics_dir: Path,
    results: List[AggregatedStats],
    metadata: Dict[str, Any],
    failed: Optional[List[str]] = None,
    comparison: Optional[Dict[str, Any]] = None,
    baseline_label: str = "",
    plots: bool = False,
    write_json: bool = True,
) -> Dict[str, Path]:
    """
    Write every report file for a run.

    Args:
        metrics_dir: Output directory (created if missing)
        results: Aggregated records
        metadata: Metadata block
        failed: Frameworks whose measurement failed
        comparison: Optional baseline comparison
        baseline_label: Name of the baseline file
        plots: Also render PNG charts
        write_json: Also write final-measurements.json

    Returns:
        Mapping of report name to written path
    """
    timestamp = metadata.get("timestamp", "")
    paths: Dict[str, Path] = {}
    if write_json:
        paths["json"] = write_final_measurements(metrics_dir, metadata, results)
    paths["markdown"] = write_markdown(
        metrics_dir,
        generate_markdown_report(results, metadata, failed, comparison, baseline_label),
    )
    paths["legacy"] = write_bundle_summary(metrics_dir, results, timestamp)

    if plots:
        # matplotlib loads only when charts are requested
        from reporting.plotting import generate_plots

        for name, path in generate_plots(results, Path(metrics_dir) / "plots").items():
            paths[f"plot:{name}"] = path

    return paths
