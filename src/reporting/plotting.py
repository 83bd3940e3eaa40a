"""
Plotting module for framework comparison charts.

This module creates PNG bar charts from aggregated measurements:
- Raw vs compressed bundle size per framework (with stddev error bars)
- Single-metric comparisons (performance score, FCP, LCP, TBT)
"""

from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np

from models.measurement import AggregatedStats
from reporting.artifacts import sorted_by_bundle
from reporting.reporter import PAGE_TITLES

# Configure matplotlib for non-interactive backend
plt.switch_backend("Agg")

METRIC_LABELS = {
    "performance_score": ("Performance Score", "Score (0-100)"),
    "fcp": ("First Contentful Paint", "Milliseconds"),
    "lcp": ("Largest Contentful Paint", "Milliseconds"),
    "tbt": ("Total Blocking Time", "Milliseconds"),
    "si": ("Speed Index", "Milliseconds"),
    "cls": ("Cumulative Layout Shift", "Score"),
}


def setup_plot_style():
    """Set up consistent plot styling."""
    plt.style.use("default")
    plt.rcParams.update(
        {
            "font.size": 10,
            "axes.titlesize": 12,
            "axes.labelsize": 10,
            "xtick.labelsize": 9,
            "ytick.labelsize": 9,
            "legend.fontsize": 9,
            "figure.titlesize": 14,
            "figure.dpi": 100,
            "savefig.dpi": 150,
            "savefig.bbox": "tight",
        }
    )


def plot_bundle_sizes(results: List[AggregatedStats], page: str, output_path: Path) -> bool:
    """
    Create a grouped bar chart of raw and compressed bundle sizes.

    Args:
        results: Aggregated records
        page: Page to plot
        output_path: Path to save the plot

    Returns:
        True if a chart was written, False if the page has no data
    """
    rows = sorted_by_bundle(results, page)
    if not rows:
        return False

    setup_plot_style()

    labels = [r.framework for r in rows]
    raw = [r.js_uncompressed.median / 1024 for r in rows]
    raw_err = [r.js_uncompressed.stddev / 1024 for r in rows]
    compressed = [r.js_transferred.median / 1024 for r in rows]
    compressed_err = [r.js_transferred.stddev / 1024 for r in rows]

    x = np.arange(len(labels))
    width = 0.38

    fig, ax = plt.subplots(figsize=(max(8, len(labels) * 0.9), 5))
    bars = ax.bar(x - width / 2, raw, width, yerr=raw_err, capsize=3, label="Raw", color="#3498db")
    ax.bar(
        x + width / 2,
        compressed,
        width,
        yerr=compressed_err,
        capsize=3,
        label="Compressed",
        color="#2ecc71",
    )

    # Add raw size labels on bars
    for bar, value in zip(bars, raw):
        ax.text(
            bar.get_x() + bar.get_width() / 2.0,
            bar.get_height(),
            f"{value:.1f}",
            ha="center",
            va="bottom",
            fontsize=8,
        )

    ax.set_title(f"{PAGE_TITLES.get(page, page.title())} JavaScript Bundle Size")
    ax.set_ylabel("Size (kB)")
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)
    ax.set_ylim(bottom=0)

    plt.savefig(output_path)
    plt.close(fig)
    return True


def plot_metric_comparison(
    results: List[AggregatedStats], page: str, metric: str, output_path: Path
) -> bool:
    """
    Create a bar chart of one metric's median per framework.

    Frameworks keep bundle-size order so charts line up with the tables.

    Returns:
        True if a chart was written, False if the page has no data
    """
    rows = sorted_by_bundle(results, page)
    if not rows:
        return False

    setup_plot_style()

    title, ylabel = METRIC_LABELS.get(metric, (metric, "Value"))
    labels = [r.framework for r in rows]
    values = [r.summary(metric).median for r in rows]
    errors = [r.summary(metric).stddev for r in rows]

    fig, ax = plt.subplots(figsize=(max(8, len(labels) * 0.9), 5))
    colors = plt.cm.viridis(np.linspace(0.2, 0.8, len(labels)))
    ax.bar(labels, values, yerr=errors, capsize=3, color=colors)

    ax.set_title(f"{PAGE_TITLES.get(page, page.title())}: {title}")
    ax.set_ylabel(ylabel)
    ax.tick_params(axis="x", rotation=45)
    plt.setp(ax.get_xticklabels(), ha="right")
    ax.grid(True, axis="y", alpha=0.3)
    ax.set_ylim(bottom=0)

    plt.savefig(output_path)
    plt.close(fig)
    return True


def generate_plots(results: List[AggregatedStats], output_dir: Path) -> Dict[str, Path]:
    """
    Generate the standard chart set for both pages.

    Args:
        results: Aggregated records
        output_dir: Directory for PNG files (created if missing)

    Returns:
        Mapping of chart name to written path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    plots: Dict[str, Path] = {}
    for page in PAGE_TITLES:
        path = output_dir / f"{page}_bundle_size.png"
        if plot_bundle_sizes(results, page, path):
            plots[f"{page}_bundle_size"] = path

        for metric in ("performance_score", "fcp", "lcp", "tbt"):
            path = output_dir / f"{page}_{metric}.png"
            if plot_metric_comparison(results, page, metric, path):
                plots[f"{page}_{metric}"] = path

    return plots
