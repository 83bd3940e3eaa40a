"""
Reporting and output generation for the benchmark harness.

Contains:
- reporter: Markdown and console report generation
- plotting: Chart generation (matplotlib, loaded on demand)
- artifacts: JSON artifact handling
"""

from .reporter import (
    generate_markdown_report,
    generate_markdown_table,
    format_console_summary,
    generate_reports,
)
from .artifacts import (
    build_metadata,
    build_legacy_summary,
    read_measurements,
    write_final_measurements,
    write_bundle_summary,
    ensure_metrics_dir,
)
