"""
Fixed-width results table.

One line per discretization node, in increasing node order, with four
``%16.4e`` fields separated by a space: elapsed time, position, velocity
and acceleration.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Dict, Mapping, Sequence

import numpy as np

from mintime.constants import RESULTS_COLUMNS, ROW_FORMAT
from mintime.logging import get_logger

log = get_logger(__name__)


def format_row(t: float, x: float, v: float, a: float) -> str:
    """Format one node as a table line (without newline)."""
    return ROW_FORMAT % (t, x, v, a)


def _write_rows(stream: IO[str], columns: Sequence[np.ndarray]) -> int:
    n_rows = 0
    for t, x, v, a in zip(*columns):
        stream.write(format_row(t, x, v, a) + "\n")
        n_rows += 1
    return n_rows


def write_results(
    target: str | Path | IO[str],
    time: Sequence[float],
    position: Sequence[float],
    velocity: Sequence[float],
    acceleration: Sequence[float],
) -> int:
    """
    Write the results table to a path or an open text stream.

    Args:
        target: Output path (overwritten) or writable text stream
        time, position, velocity, acceleration: Per-node values, equal length

    Returns:
        Number of rows written
    """
    columns = [np.asarray(c, dtype=float).reshape(-1) for c in (time, position, velocity, acceleration)]
    lengths = {c.shape[0] for c in columns}
    if len(lengths) != 1:
        raise ValueError(f"result columns must have equal length, got {sorted(lengths)}")

    if hasattr(target, "write"):
        n_rows = _write_rows(target, columns)
    else:
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            n_rows = _write_rows(fh, columns)
        log.info(f"Wrote {n_rows} rows to {path}")
    return n_rows


def write_solution(target: str | Path | IO[str], solution: Mapping[str, Any]) -> int:
    """Write an ``OptimizationResult.solution`` dict as a results table."""
    return write_results(target, *(solution[name] for name in RESULTS_COLUMNS))


def read_results(path: str | Path) -> Dict[str, np.ndarray]:
    """Read a results table back into ``time/position/velocity/acceleration`` arrays."""
    data = np.loadtxt(Path(path), dtype=float, ndmin=2)
    if data.shape[1] != len(RESULTS_COLUMNS):
        raise ValueError(
            f"{path}: expected {len(RESULTS_COLUMNS)} columns, got {data.shape[1]}",
        )
    return {name: data[:, k] for k, name in enumerate(RESULTS_COLUMNS)}
