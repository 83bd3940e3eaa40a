#!/usr/bin/env python3
"""
Frontend module for the benchmark harness.

This module handles command-line argument parsing and dispatches to the
measurement pipeline or to report regeneration.

Usage:
    python src/frontend.py                      # 10 runs per page, 4G
    python src/frontend.py --runs 5 --network 3g
    python src/frontend.py --frameworks Astro Qwik --plots
    python src/frontend.py --from-json metrics/final-measurements.json
"""

import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional

import yaml

from config import NETWORK_CONDITIONS, load_config, validate_network, validate_runs
from console import log_and_print
from core.manager import regenerate_reports, run_final_measurements
from exceptions import BuildMissingError, ConfigError


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="kanban-bench",
        description="Measure bundle size and load performance of every kanban framework variant",
        epilog="Example: kanban-bench --runs 10 --network 4g",
    )

    # --runs and --network are validated in main()
    parser.add_argument(
        "--runs",
        type=str,
        default=None,
        help="Measurement runs per page (default: 10)",
    )
    parser.add_argument(
        "--network",
        type=str,
        default=None,
        help=f"Network condition: {', '.join(NETWORK_CONDITIONS)} (default: 4g)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--frameworks",
        nargs="+",
        metavar="NAME",
        default=None,
        help="Only measure these frameworks (names as in the registry)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for report files (default: <project root>/metrics)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-framework measurement timeout in seconds",
    )
    parser.add_argument(
        "--plots",
        action="store_true",
        help="Also render PNG charts into <output dir>/plots",
    )
    parser.add_argument(
        "--baseline",
        type=Path,
        default=None,
        help="Previous final-measurements.json to check for regressions",
    )
    parser.add_argument(
        "--from-json",
        type=Path,
        default=None,
        metavar="PATH",
        help="Regenerate reports from an existing final-measurements.json without measuring",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the harness.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        if args.output_dir is not None:
            # relative paths resolve against the working directory
            config.metrics_dir = Path.cwd() / args.output_dir.expanduser()

        if args.from_json is not None:
            regenerate_reports(args.from_json, config, plots=args.plots, baseline_path=args.baseline)
            return 0

        runs = validate_runs(args.runs) if args.runs is not None else config.default_runs
        network = validate_network(args.network) if args.network is not None else config.default_network
        frameworks = config.select_frameworks(args.frameworks)

        run = run_final_measurements(
            config,
            runs=runs,
            network=network,
            frameworks=frameworks,
            timeout_s=args.timeout,
            plots=args.plots,
            baseline_path=args.baseline,
        )

        if run.all_failed:
            log_and_print("Every framework failed to measure", "ERROR")
            return 1
        return 0

    except BuildMissingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except yaml.YAMLError as e:
        print(f"Error parsing YAML: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 3


if __name__ == "__main__":
    sys.exit(main())
