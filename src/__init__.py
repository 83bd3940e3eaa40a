"""
Kanban Framework Benchmark Harness

Measures bundle size and page-load performance of the same kanban demo
application built in many web frameworks, and aggregates the results into
comparison reports.

Package structure:
- core/: Measurement orchestration (runner, manager, aggregator, stats)
- models/: Data models (framework, measurement)
- reporting/: Report generation (reporter, plotting, artifacts)
- config.py: Configuration loading (YAML + environment)
- frontend.py: Command line interface
"""

__version__ = "1.0.0"
