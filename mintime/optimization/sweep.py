"""Solve the car model over a range of friction coefficients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from mintime.config import CarConfig
from mintime.logging import get_logger
from mintime.optimization.base import OptimizationResult
from mintime.optimization.car import MinimumTimeCarOptimizer

log = get_logger(__name__)


@dataclass
class SweepPoint:
    friction: float
    result: OptimizationResult

    @property
    def final_time(self) -> Optional[float]:
        return self.result.objective_value if self.result.is_successful() else None


def sweep_friction(
    config: CarConfig,
    friction_values: Iterable[float],
    optimizer: Optional[MinimumTimeCarOptimizer] = None,
) -> List[SweepPoint]:
    """Solve ``config`` once per friction coefficient, in the order given.

    Failed solves are kept in the output with ``final_time`` None.
    """
    optimizer = optimizer or MinimumTimeCarOptimizer()
    points = []
    for friction in friction_values:
        result = optimizer.solve(config.replace(friction=float(friction)))
        if not result.is_successful():
            log.warning(f"Sweep point R={friction} did not converge: {result.error_message}")
        points.append(SweepPoint(friction=float(friction), result=result))
    return points


def is_non_decreasing(points: List[SweepPoint], rtol: float = 1e-6) -> bool:
    """True when converged final times do not decrease with friction."""
    converged = sorted(
        (p.friction, p.final_time) for p in points if p.final_time is not None
    )
    times = np.array([tf for _, tf in converged])
    if times.size < 2:
        return True
    return bool(np.all(np.diff(times) >= -rtol * np.abs(times[:-1])))
