"""Reading and writing of result tables."""

from .results import format_row, read_results, write_results, write_solution

__all__ = ["format_row", "read_results", "write_results", "write_solution"]
