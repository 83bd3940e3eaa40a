"""
Console output helpers.

All progress output goes to stderr so that stdout stays free for piping.
"""

import sys

SEPARATOR = "=" * 60


def log_and_print(message: str, step_name: str = "") -> None:
    """Print a formatted progress message to stderr."""
    if step_name.startswith("STEP"):
        print(f"\n{SEPARATOR}", file=sys.stderr, flush=True)
        print(f"  {step_name}: {message}", file=sys.stderr, flush=True)
        print(SEPARATOR, file=sys.stderr, flush=True)
    elif step_name == "ERROR":
        print(f"  ✗ {message}", file=sys.stderr, flush=True)
    elif step_name == "OK":
        print(f"  ✓ {message}", file=sys.stderr, flush=True)
    elif step_name:
        print(f"  {step_name}: {message}", file=sys.stderr, flush=True)
    else:
        print(f"  {message}", file=sys.stderr, flush=True)


def print_block(text: str) -> None:
    """Print a multi-line block to stderr unchanged."""
    print(text, file=sys.stderr, flush=True)
