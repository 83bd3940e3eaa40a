"""
Data models for the benchmark harness.

Contains:
- framework: Framework variant definition and build check
- measurement: Raw samples, statistical summaries, aggregated records
"""

from .framework import Framework, DEFAULT_FRAMEWORKS
from .measurement import (
    PAGES,
    METRIC_FIELDS,
    RawSample,
    StatisticalSummary,
    AggregatedStats,
)
