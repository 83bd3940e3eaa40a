"""
Core logic for the benchmark harness.

Contains:
- stats: Outlier-trimmed statistical summaries
- aggregator: Measurement output normalisation and regression detection
- runner: Per-framework measurement subprocess
- manager: Full run orchestration
"""

from .stats import summarize, remove_outliers_iqr, compression_ratio
from .aggregator import aggregate_samples, aggregate_output, compare_measurements
from .runner import measure_framework, build_measure_command
from .manager import run_final_measurements, regenerate_reports, validate_builds
