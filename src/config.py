#!/usr/bin/env python3
"""
Configuration for the benchmark harness.

Values come from three places, later ones winning:
1. Built-in defaults (the twelve kanban variants, tsx measure-single command)
2. A YAML config file (see benchmark.example.yaml)
3. Environment variables (KANBAN_BENCH_ROOT, KANBAN_BENCH_METRICS_DIR,
   KANBAN_BENCH_MEASURE_CMD)

Command-line flags are applied on top by the frontend.
"""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from exceptions import ConfigError
from models.framework import DEFAULT_FRAMEWORKS, Framework

# =============================================================================
# Network conditions
# =============================================================================

NETWORK_CONDITIONS: Dict[str, str] = {
    "4g": "4G throttling (10 Mbps down, 40ms RTT)",
    "3g": "3G throttling (1.6 Mbps down, 150ms RTT)",
    "slow-3g": "Slow 3G throttling (400 Kbps down, 400ms RTT)",
}

DEFAULT_NETWORK = "4g"
DEFAULT_RUNS = 10
DEFAULT_MEASURE_COMMAND = ["tsx", "scripts/measure-single.ts"]


def validate_runs(runs: Any) -> int:
    """Return runs as a positive int, or raise ConfigError."""
    if isinstance(runs, bool):
        raise ConfigError(f"--runs must be a positive number, got {runs!r}")
    try:
        value = int(str(runs).strip())
    except ValueError:
        raise ConfigError(f"--runs must be a positive number, got {runs!r}")
    if value < 1:
        raise ConfigError(f"--runs must be a positive number, got {runs!r}")
    return value


def validate_network(network: str) -> str:
    """Return network if it is a known condition, or raise ConfigError."""
    if network not in NETWORK_CONDITIONS:
        raise ConfigError(
            f'Invalid network condition "{network}". '
            f"Available conditions: {', '.join(NETWORK_CONDITIONS)}"
        )
    return network


# =============================================================================
# Configuration object
# =============================================================================


@dataclass
class BenchConfig:
    """Resolved harness configuration."""

    project_root: Path = field(default_factory=Path.cwd)
    metrics_dir: Optional[Path] = None  # None -> <project_root>/metrics
    measure_command: List[str] = field(default_factory=lambda: list(DEFAULT_MEASURE_COMMAND))
    default_runs: int = DEFAULT_RUNS
    default_network: str = DEFAULT_NETWORK
    timeout_s: Optional[float] = None
    frameworks: List[Framework] = field(default_factory=lambda: list(DEFAULT_FRAMEWORKS))

    @property
    def output_dir(self) -> Path:
        if self.metrics_dir is None:
            return self.project_root / "metrics"
        if self.metrics_dir.is_absolute():
            return self.metrics_dir
        return self.project_root / self.metrics_dir

    def select_frameworks(self, names: Optional[List[str]]) -> List[Framework]:
        """
        Return the configured frameworks restricted to ``names``.

        Registry order is kept. Names are matched case-insensitively.

        Raises:
            ConfigError: if a name is not in the registry
        """
        if not names:
            return list(self.frameworks)

        by_name = {fw.name.lower(): fw for fw in self.frameworks}
        unknown = [n for n in names if n.lower() not in by_name]
        if unknown:
            raise ConfigError(
                f"Unknown framework(s): {', '.join(unknown)}. "
                f"Available: {', '.join(fw.name for fw in self.frameworks)}"
            )
        wanted = {n.lower() for n in names}
        return [fw for fw in self.frameworks if fw.name.lower() in wanted]

    @classmethod
    def from_yaml(cls, yaml_data: Dict[str, Any], base_dir: Optional[Path] = None) -> "BenchConfig":
        """
        Create a BenchConfig from parsed YAML data.

        Relative ``project_root`` values are resolved against ``base_dir``
        (the directory holding the config file).

        Raises:
            ConfigError: on invalid values
        """
        if not isinstance(yaml_data, dict):
            raise ConfigError("Config file must contain a mapping at the top level")

        config = cls()
        base_dir = base_dir or Path.cwd()

        if "project_root" in yaml_data:
            root = Path(str(yaml_data["project_root"])).expanduser()
            config.project_root = root if root.is_absolute() else base_dir / root
        else:
            config.project_root = base_dir

        if yaml_data.get("metrics_dir"):
            config.metrics_dir = Path(str(yaml_data["metrics_dir"])).expanduser()

        if "measure_command" in yaml_data:
            command = yaml_data["measure_command"]
            if isinstance(command, str):
                command = shlex.split(command)
            if not isinstance(command, list) or not command:
                raise ConfigError("measure_command must be a non-empty string or list")
            config.measure_command = [str(part) for part in command]

        if "runs" in yaml_data:
            config.default_runs = validate_runs(yaml_data["runs"])

        if "network" in yaml_data:
            config.default_network = validate_network(str(yaml_data["network"]))

        if yaml_data.get("timeout_s") is not None:
            try:
                config.timeout_s = float(yaml_data["timeout_s"])
            except (TypeError, ValueError):
                raise ConfigError(f"timeout_s must be a number, got {yaml_data['timeout_s']!r}")

        if "frameworks" in yaml_data:
            entries = yaml_data["frameworks"]
            if not isinstance(entries, list) or not entries:
                raise ConfigError("frameworks must be a non-empty list")
            try:
                config.frameworks = [Framework.from_dict(entry) for entry in entries]
            except (KeyError, TypeError) as e:
                raise ConfigError(f"Invalid framework entry: {e}")

        return config

    def apply_environment(self, environ: Optional[Dict[str, str]] = None) -> "BenchConfig":
        """Apply KANBAN_BENCH_* environment overrides in place."""
        environ = os.environ if environ is None else environ

        if environ.get("KANBAN_BENCH_ROOT"):
            self.project_root = Path(environ["KANBAN_BENCH_ROOT"]).expanduser()
        if environ.get("KANBAN_BENCH_METRICS_DIR"):
            self.metrics_dir = Path(environ["KANBAN_BENCH_METRICS_DIR"]).expanduser()
        if environ.get("KANBAN_BENCH_MEASURE_CMD"):
            self.measure_command = shlex.split(environ["KANBAN_BENCH_MEASURE_CMD"])
        return self


def load_config(path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> BenchConfig:
    """
    Load the harness configuration.

    Args:
        path: Optional YAML config file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        BenchConfig with file and environment overrides applied

    Raises:
        FileNotFoundError: If the config file does not exist
        yaml.YAMLError: If the file contains invalid YAML
        ConfigError: If a value is invalid
    """
    if path is None:
        config = BenchConfig()
    else:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        if not path.is_file():
            raise ConfigError(f"Config path is not a file: {path}")

        with open(path, "r") as file:
            yaml_data = yaml.safe_load(file)

        if yaml_data is None:
            yaml_data = {}

        config = BenchConfig.from_yaml(yaml_data, base_dir=path.resolve().parent)

    return config.apply_environment(environ)
