#!/usr/bin/env python3
"""
Measurement data models.

Three shapes of data flow through the harness:
- RawSample: one measurement run of one page, as printed by the measurement tool
- StatisticalSummary: trimmed statistics of one metric across runs
- AggregatedStats: all summaries for one (framework, page) pair

On disk every record uses the camelCase keys of the JSON reports; in Python
the fields are snake_case. to_dict()/from_dict() translate between the two.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple

PAGES: Tuple[str, ...] = ("board", "home")

# (attribute name, JSON key)
METRIC_FIELDS: List[Tuple[str, str]] = [
    ("js_transferred", "jsTransferred"),
    ("js_uncompressed", "jsUncompressed"),
    ("performance_score", "performanceScore"),
    ("fcp", "fcp"),
    ("lcp", "lcp"),
    ("tbt", "tbt"),
    ("cls", "cls"),
    ("si", "si"),
]


def _require_number(data: Dict[str, Any], key: str) -> float:
    value = data.get(key)
    # bool is an int subclass; a true/false metric is malformed output
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"Field '{key}' must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise ValueError(f"Field '{key}' must be finite, got {value!r}")
    return number


def _require_count(data: Dict[str, Any], key: str, default: Optional[int] = None) -> int:
    if default is not None and data.get(key) is None:
        return default
    value = _require_number(data, key)
    if value < 0 or value != int(value):
        raise ValueError(f"Field '{key}' must be a non-negative integer, got {value!r}")
    return int(value)


def _optional_number(data: Dict[str, Any], key: str, default: float = 0.0) -> float:
    if data.get(key) is None:
        return default
    return _require_number(data, key)


def _require_page(data: Dict[str, Any]) -> str:
    page = data.get("page")
    if page not in PAGES:
        raise ValueError(f"Field 'page' must be one of {', '.join(PAGES)}, got {page!r}")
    return page


@dataclass
class RawSample:
    """A single measurement run of one page."""

    framework: str
    page: str
    js_transferred: float  # bytes over the wire
    js_uncompressed: float  # bytes after decompression
    performance_score: float  # 0-100
    fcp: float  # ms
    lcp: float  # ms
    tbt: float  # ms
    cls: float  # unitless
    si: float  # ms
    compression_type: str = "gzip"
    chrome_version: str = "unknown"
    network_condition: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], framework: Optional[str] = None) -> "RawSample":
        """
        Build a sample from the measurement tool's JSON.

        Raises:
            ValueError: if the page or any metric is missing or not numeric
        """
        values = {attr: _require_number(data, key) for attr, key in METRIC_FIELDS}
        return cls(
            framework=str(data.get("framework") or framework or "unknown"),
            page=_require_page(data),
            compression_type=str(data.get("compressionType") or "gzip"),
            chrome_version=str(data.get("chromeVersion") or "unknown"),
            network_condition=data.get("networkCondition"),
            **values,
        )

    def value(self, attr: str) -> float:
        return getattr(self, attr)


@dataclass
class StatisticalSummary:
    """Outlier-trimmed statistics for one metric."""

    mean: float
    median: float
    stddev: float
    min: float
    max: float
    runs: int  # samples kept after trimming
    outliers_removed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": self.mean,
            "median": self.median,
            "stddev": self.stddev,
            "min": self.min,
            "max": self.max,
            "runs": self.runs,
            "outliersRemoved": self.outliers_removed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatisticalSummary":
        if not isinstance(data, dict):
            raise ValueError(f"Statistical summary must be an object, got {data!r}")
        return cls(
            mean=_require_number(data, "mean"),
            median=_require_number(data, "median"),
            stddev=_require_number(data, "stddev"),
            min=_require_number(data, "min"),
            max=_require_number(data, "max"),
            runs=_require_count(data, "runs"),
            outliers_removed=_require_count(data, "outliersRemoved", default=0),
        )


@dataclass
class AggregatedStats:
    """
    Aggregated measurements for one framework on one page.

    This is the record written to final-measurements.json and the unit every
    report is built from.
    """

    framework: str
    page: str
    js_transferred: StatisticalSummary
    js_uncompressed: StatisticalSummary
    compression_ratio: float
    performance_score: StatisticalSummary
    fcp: StatisticalSummary
    lcp: StatisticalSummary
    tbt: StatisticalSummary
    cls: StatisticalSummary
    si: StatisticalSummary
    compression_type: str = "gzip"
    chrome_version: str = "unknown"
    measurement_timestamp: str = ""
    network_condition: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def summary(self, attr: str) -> StatisticalSummary:
        return getattr(self, attr)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"framework": self.framework, "page": self.page}
        for attr, key in METRIC_FIELDS:
            data[key] = self.summary(attr).to_dict()
        data["compressionRatio"] = self.compression_ratio
        data["compressionType"] = self.compression_type
        data["chromeVersion"] = self.chrome_version
        data["measurementTimestamp"] = self.measurement_timestamp
        if self.network_condition:
            data["networkCondition"] = self.network_condition
        # Unknown keys from the measurement tool are carried through untouched
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregatedStats":
        """
        Load an aggregated record.

        Raises:
            ValueError: if a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Aggregated record must be an object, got {data!r}")
        framework = data.get("framework")
        if not framework:
            raise ValueError("Aggregated record is missing 'framework'")

        summaries = {}
        for attr, key in METRIC_FIELDS:
            if key not in data:
                raise ValueError(f"Aggregated record for {framework} is missing '{key}'")
            summaries[attr] = StatisticalSummary.from_dict(data[key])

        known = {key for _, key in METRIC_FIELDS} | {
            "framework",
            "page",
            "compressionRatio",
            "compressionType",
            "chromeVersion",
            "measurementTimestamp",
            "networkCondition",
        }
        extra = {k: v for k, v in data.items() if k not in known}

        return cls(
            framework=str(framework),
            page=_require_page(data),
            compression_ratio=_optional_number(data, "compressionRatio"),
            compression_type=str(data.get("compressionType") or "gzip"),
            chrome_version=str(data.get("chromeVersion") or "unknown"),
            measurement_timestamp=str(data.get("measurementTimestamp") or ""),
            network_condition=data.get("networkCondition"),
            extra=extra,
            **summaries,
        )
