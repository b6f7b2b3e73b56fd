"""
Base optimization result types.

This module defines the status and result containers returned by the
model solvers, so callers can inspect convergence without depending on
CasADi objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from mintime.logging import get_logger

log = get_logger(__name__)


class OptimizationStatus(Enum):
    """Status of optimization process."""

    PENDING = "pending"
    RUNNING = "running"
    CONVERGED = "converged"
    FAILED = "failed"
    TIMEOUT = "timeout"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"


# Ipopt return_status strings as reported by CasADi's stats()
_IPOPT_STATUS_MAP: Dict[str, OptimizationStatus] = {
    "Solve_Succeeded": OptimizationStatus.CONVERGED,
    "Solved_To_Acceptable_Level": OptimizationStatus.CONVERGED,
    "Infeasible_Problem_Detected": OptimizationStatus.INFEASIBLE,
    "Diverging_Iterates": OptimizationStatus.UNBOUNDED,
    "Maximum_Iterations_Exceeded": OptimizationStatus.TIMEOUT,
    "Maximum_CpuTime_Exceeded": OptimizationStatus.TIMEOUT,
    "Maximum_WallTime_Exceeded": OptimizationStatus.TIMEOUT,
}


def status_from_ipopt(return_status: Optional[str]) -> OptimizationStatus:
    """Map an Ipopt return status to an :class:`OptimizationStatus`."""
    if not return_status:
        return OptimizationStatus.FAILED
    return _IPOPT_STATUS_MAP.get(return_status, OptimizationStatus.FAILED)


@dataclass
class OptimizationResult:
    """Result of an optimization process."""

    # Solution data
    solution: Dict[str, Any] = field(default_factory=dict)

    # Optimization status
    status: OptimizationStatus = OptimizationStatus.PENDING

    # Performance metrics
    objective_value: Optional[float] = None
    solve_time: Optional[float] = None
    iterations: Optional[int] = None

    # Convergence information
    convergence_info: Dict[str, Any] = field(default_factory=dict)

    # Error information
    error_message: Optional[str] = None

    # Additional metadata
    metadata: Dict[str, Any] = field(default_factory=dict)

    def is_successful(self) -> bool:
        """Check if optimization was successful."""
        return self.status == OptimizationStatus.CONVERGED

    def has_solution(self) -> bool:
        """Check if solution data is available."""
        return len(self.solution) > 0

