"""
Exception types raised by the benchmark harness.

Per-framework failures (MeasurementError) are handled by the manager, which
records the framework and moves on. Run-level failures (BuildMissingError,
ConfigError) propagate to the frontend and end the run.
"""

from typing import List, Optional


class BenchError(Exception):
    """Base class for all harness errors."""


class ConfigError(BenchError):
    """Invalid configuration value or file."""


class BuildMissingError(BenchError):
    """One or more framework builds were not found on disk."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing builds for: {', '.join(self.missing)}")


class MeasurementError(BenchError):
    """The measurement subprocess for a framework failed."""

    def __init__(self, framework: str, message: str, returncode: Optional[int] = None):
        self.framework = framework
        self.returncode = returncode
        super().__init__(f"{framework}: {message}")
