"""
Unit tests for the aggregator: measurement output normalisation and
regression detection between result sets.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.aggregator import (
    DEFAULT_REGRESSION_THRESHOLDS,
    aggregate_output,
    aggregate_samples,
    compare_measurements,
)
from models.measurement import RawSample


class TestAggregateSamples:

    def test_builds_summary_per_metric(self, make_sample):
        samples = [
            RawSample.from_dict(make_sample(lcp=lcp))
            for lcp in [1000, 1010, 1020, 1030, 5000]
        ]
        record = aggregate_samples("Alpha", "board", samples, timestamp="T")

        assert record.framework == "Alpha"
        assert record.page == "board"
        assert record.lcp.runs == 4
        assert record.lcp.outliers_removed == 1
        assert record.lcp.max == 1030
        assert record.js_uncompressed.median == 100000
        assert record.compression_ratio == 70.0
        assert record.compression_type == "br"
        assert record.chrome_version == "Chrome/120"
        assert record.network_condition == "4g"
        assert record.measurement_timestamp == "T"

    def test_empty_samples_raise(self):
        with pytest.raises(ValueError):
            aggregate_samples("Alpha", "board", [])


class TestAggregateOutput:

    def test_raw_samples_grouped_by_page(self, make_sample):
        payload = [make_sample(page="home", transferred=10000, uncompressed=40000) for _ in range(3)]
        payload += [make_sample(page="board") for _ in range(3)]

        records = aggregate_output("Alpha", payload)

        assert [r.page for r in records] == ["board", "home"]
        assert records[0].js_transferred.runs == 3
        assert records[1].compression_ratio == 75.0

    def test_aggregated_records_pass_through(self, make_record):
        board = make_record(page="board")
        home = make_record(page="home")

        records = aggregate_output("Alpha", [home.to_dict(), board.to_dict()])

        assert records == [board, home]

    def test_other_framework_rejected(self, make_sample):
        with pytest.raises(ValueError, match="expected 'Alpha'"):
            aggregate_output("Alpha", [make_sample(framework="Beta")])

    def test_stray_sample_among_valid_ones_rejected(self, make_sample):
        payload = [make_sample(page="board"), make_sample(page="board", framework="Beta")]
        with pytest.raises(ValueError, match="Output describes 'Beta', expected 'Alpha'"):
            aggregate_output("Alpha", payload)

    def test_aggregated_record_for_other_framework_rejected(self, make_record):
        with pytest.raises(ValueError, match="expected 'Alpha'"):
            aggregate_output("Alpha", [make_record(framework="Beta").to_dict()])

    @pytest.mark.parametrize(
        "field, value",
        [
            ("runs", float("inf")),
            ("runs", 10 ** 400),
            ("runs", 2.5),
            ("outliersRemoved", {"count": 1}),
            ("mean", float("nan")),
        ],
    )
    def test_malformed_summary_field_raises_value_error(self, make_record, field, value):
        record = make_record().to_dict()
        record["lcp"][field] = value
        with pytest.raises(ValueError, match=field):
            aggregate_output("Alpha", [record])

    def test_malformed_compression_ratio_raises_value_error(self, make_record):
        record = make_record().to_dict()
        record["compressionRatio"] = {"value": 70}
        with pytest.raises(ValueError, match="compressionRatio"):
            aggregate_output("Alpha", [record])

    def test_non_finite_raw_sample_rejected(self, make_sample):
        with pytest.raises(ValueError, match="fcp"):
            aggregate_output("Alpha", [make_sample(fcp=float("inf"))])

    def test_mixed_shapes_rejected(self, make_sample, make_record):
        with pytest.raises(ValueError, match="mixes"):
            aggregate_output("Alpha", [make_sample(), make_record().to_dict()])

    def test_empty_and_non_list_rejected(self):
        with pytest.raises(ValueError):
            aggregate_output("Alpha", [])
        with pytest.raises(ValueError):
            aggregate_output("Alpha", {"results": []})

    def test_missing_metric_rejected(self, make_sample):
        sample = make_sample()
        del sample["lcp"]
        with pytest.raises(ValueError, match="lcp"):
            aggregate_output("Alpha", [sample])

    def test_unknown_page_rejected(self, make_sample):
        with pytest.raises(ValueError, match="page"):
            aggregate_output("Alpha", [make_sample(page="settings")])


class TestCompareMeasurements:

    def test_identical_results_pass(self, make_record):
        results = [make_record(page="board"), make_record(page="home")]
        comparison = compare_measurements(results, results)

        assert comparison["verdict"] == "PASS"
        assert comparison["regressions"] == []
        assert comparison["improvements"] == []

    def test_bundle_growth_is_regression(self, make_record):
        baseline = [make_record(raw=100000)]
        current = [make_record(raw=110000)]  # +10%

        comparison = compare_measurements(baseline, current)

        assert comparison["verdict"] == "FAIL"
        assert comparison["regressions"][0]["entry"] == "Alpha (board)"
        assert comparison["regressions"][0]["metric"] == "Raw Bundle (bytes)"
        assert comparison["regressions"][0]["change"] == "+10.0%"

    def test_bundle_growth_within_threshold_passes(self, make_record):
        comparison = compare_measurements([make_record(raw=100000)], [make_record(raw=103000)])
        assert comparison["verdict"] == "PASS"

    def test_score_drop_is_regression(self, make_record):
        comparison = compare_measurements([make_record(perf=95)], [make_record(perf=85)])

        assert comparison["verdict"] == "FAIL"
        assert comparison["regressions"][0]["metric"] == "Perf Score"
        assert comparison["regressions"][0]["change"] == "-10.0 pts"

    def test_improvements_reported(self, make_record):
        comparison = compare_measurements([make_record(lcp=2000)], [make_record(lcp=1000)])

        assert comparison["verdict"] == "PASS"
        assert comparison["improvements"][0]["metric"] == "LCP (ms)"

    def test_custom_thresholds(self, make_record):
        comparison = compare_measurements(
            [make_record(raw=100000)],
            [make_record(raw=110000)],
            thresholds={"bundle_pct": 20.0},
        )
        assert comparison["verdict"] == "PASS"
        assert comparison["thresholds"]["bundle_pct"] == 20.0
        assert DEFAULT_REGRESSION_THRESHOLDS["bundle_pct"] == 5.0

    def test_added_and_removed_entries(self, make_record):
        comparison = compare_measurements(
            [make_record(framework="Alpha")],
            [make_record(framework="Beta")],
        )
        assert comparison["added"] == ["Beta (board)"]
        assert comparison["removed"] == ["Alpha (board)"]
        assert comparison["entries"] == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
