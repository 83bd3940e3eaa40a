"""
Shared fixtures for the harness tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.stats import compression_ratio
from models.measurement import AggregatedStats, StatisticalSummary


def constant_summary(value: float, stddev: float = 0.0, runs: int = 5) -> StatisticalSummary:
    return StatisticalSummary(
        mean=value, median=value, stddev=stddev, min=value, max=value, runs=runs
    )


@pytest.fixture
def make_record():
    """Factory for AggregatedStats with the same stddev on every metric."""

    def _make(
        framework: str = "Alpha",
        page: str = "board",
        raw: float = 102400.0,
        transferred: float = 30720.0,
        perf: float = 95.0,
        fcp: float = 800.0,
        lcp: float = 1200.0,
        stddev: float = 0.0,
        runs: int = 5,
        chrome_version: str = "Chrome/120",
        compression_type: str = "gzip",
    ) -> AggregatedStats:
        return AggregatedStats(
            framework=framework,
            page=page,
            js_transferred=constant_summary(transferred, stddev, runs),
            js_uncompressed=constant_summary(raw, stddev, runs),
            compression_ratio=compression_ratio(transferred, raw),
            performance_score=constant_summary(perf, stddev, runs),
            fcp=constant_summary(fcp, stddev, runs),
            lcp=constant_summary(lcp, stddev, runs),
            tbt=constant_summary(50.0, stddev, runs),
            cls=constant_summary(0.01, stddev, runs),
            si=constant_summary(1500.0, stddev, runs),
            compression_type=compression_type,
            chrome_version=chrome_version,
            measurement_timestamp="2026-01-09T12:00:00.000Z",
        )

    return _make


@pytest.fixture
def make_sample():
    """Factory for raw per-run sample dicts as printed by the measurement tool."""

    def _make(
        page: str = "board",
        framework: str = "Alpha",
        transferred: float = 30000,
        uncompressed: float = 100000,
        perf: float = 95,
        fcp: float = 800,
        lcp: float = 1200,
        tbt: float = 40,
        cls: float = 0.0,
        si: float = 1400,
    ) -> dict:
        return {
            "framework": framework,
            "page": page,
            "jsTransferred": transferred,
            "jsUncompressed": uncompressed,
            "performanceScore": perf,
            "fcp": fcp,
            "lcp": lcp,
            "tbt": tbt,
            "cls": cls,
            "si": si,
            "compressionType": "br",
            "chromeVersion": "Chrome/120",
            "networkCondition": "4g",
        }

    return _make
