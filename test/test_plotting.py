"""
Tests for chart generation (Agg backend, files written to tmp).
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from reporting.plotting import generate_plots, plot_bundle_sizes, plot_metric_comparison


def test_generate_plots_for_both_pages(tmp_path, make_record):
    results = [
        make_record(framework="Alpha", page="board", stddev=100),
        make_record(framework="Beta", page="board", raw=204800),
        make_record(framework="Alpha", page="home"),
    ]

    plots = generate_plots(results, tmp_path / "plots")

    assert "board_bundle_size" in plots
    assert "home_lcp" in plots
    assert len(plots) == 10
    for path in plots.values():
        assert path.exists()
        assert path.stat().st_size > 0


def test_empty_page_writes_nothing(tmp_path, make_record):
    results = [make_record(page="board")]

    assert not plot_bundle_sizes(results, "home", tmp_path / "home.png")
    assert not plot_metric_comparison(results, "home", "fcp", tmp_path / "fcp.png")
    assert not (tmp_path / "home.png").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
