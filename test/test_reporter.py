"""
Tests for Markdown and console report rendering.
"""

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.aggregator import compare_measurements
from models.measurement import StatisticalSummary
from reporting.artifacts import build_metadata
from reporting.reporter import (
    format_console_summary,
    format_kb,
    format_value,
    generate_markdown_report,
    generate_markdown_table,
    generate_reports,
)


def summary(median, stddev):
    return StatisticalSummary(
        mean=median, median=median, stddev=stddev, min=median, max=median, runs=7
    )


def test_format_helpers():
    assert format_kb(102400) == "100.0"
    assert format_kb(1536) == "1.5"
    assert format_value(95.0) == "95"
    assert format_value(97.5) == "97.5"


def test_table_row_formatting(make_record):
    record = replace(
        make_record(),
        js_uncompressed=summary(102400, 1024),
        js_transferred=summary(30720, 512),
        performance_score=summary(95, 1.5),
        fcp=summary(800, 12.4),
        lcp=summary(1200.5, 20),
    )

    table = generate_markdown_table([record], "board")

    assert table.startswith("## Board Page Performance\n")
    assert "| Alpha | 100.0 ±1.0 | 30.0 ±0.5 | 70% | 95 ±1.5 | 800 ±12 | 1200.5 ±20 |" in table
    assert "from 7 measurement runs" in table
    assert "Compression type: gzip" in table


def test_table_sorted_by_raw_bundle(make_record):
    results = [
        make_record(framework="Heavy", raw=500000),
        make_record(framework="Light", raw=20000),
        make_record(framework="Medium", raw=150000),
        make_record(framework="HomeOnly", page="home", raw=1000),
    ]
    table = generate_markdown_table(results, "board")

    assert table.index("| Light |") < table.index("| Medium |") < table.index("| Heavy |")
    assert "HomeOnly" not in table


def test_empty_table_defaults():
    table = generate_markdown_table([], "home")
    assert table.startswith("## Home Page Performance")
    assert "from 3 measurement runs" in table
    assert "Compression type: gzip" in table


def test_full_report_structure(make_record):
    results = [make_record(page="board"), make_record(page="home")]
    metadata = build_metadata(results, 10, "3g", ["Marko"], "2026-01-09T12:00:00.000Z")

    report = generate_markdown_report(results, metadata, ["Marko"])

    assert report.startswith("# Framework Performance Comparison\n")
    assert "*Measured: 2026-01-09T12:00:00.000Z*" in report
    assert "- **Runs per page**: 10" in report
    assert "3G throttling (1.6 Mbps down, 150ms RTT)" in report
    assert "- **Lighthouse version**: Chrome/120" in report
    assert report.index("## Board Page Performance") < report.index("## Home Page Performance")
    assert "## Failed Measurements" in report
    assert "The following frameworks failed to measure: Marko" in report
    assert "## Baseline Comparison" not in report


def test_report_without_failures(make_record):
    results = [make_record()]
    metadata = build_metadata(results, 5, "4g", [], "T")

    report = generate_markdown_report(results, metadata, [])

    assert "## Failed Measurements" not in report
    assert "4G throttling (10 Mbps down, 40ms RTT)" in report


def test_report_with_comparison(make_record):
    baseline = [make_record(raw=100000)]
    current = [make_record(raw=120000)]
    comparison = compare_measurements(baseline, current)
    metadata = build_metadata(current, 5, "4g", [], "T")

    report = generate_markdown_report(current, metadata, [], comparison, "old.json")

    assert "## Baseline Comparison" in report
    assert "Baseline: `old.json`" in report
    assert "**Verdict: FAIL**" in report
    assert "| Alpha (board) | Raw Bundle (bytes) | +20.0% | 5.0% |" in report


def test_console_summary(make_record):
    results = [
        make_record(framework="Next.js", raw=204800),
        make_record(framework="Astro", raw=10240, transferred=4096, perf=100),
    ]
    text = format_console_summary(results, failed=["Qwik"])

    assert "MEASUREMENT SUMMARY" in text
    assert text.index("Astro") < text.index("Next.js")
    assert f"   {'Astro':<23}   10.0 kB raw (  4.0 kB compressed, 60%) | Perf: 100" in text
    assert "✗ Failed: Qwik" in text


def test_generate_reports_writes_files(tmp_path, make_record):
    results = [make_record(page="board"), make_record(page="home")]
    metadata = build_metadata(results, 10, "4g", [], "T")

    paths = generate_reports(tmp_path / "metrics", results, metadata)

    assert set(paths) == {"json", "markdown", "legacy"}
    for path in paths.values():
        assert path.exists()
    assert paths["markdown"].name == "final-measurements.md"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
