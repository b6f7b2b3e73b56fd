"""Run diagnostics: run identifiers and metadata files."""

from .run_metadata import RUN_ID, ensure_runs_dir, log_run_metadata

__all__ = ["RUN_ID", "ensure_runs_dir", "log_run_metadata"]
