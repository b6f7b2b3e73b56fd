"""
Minimum-time car optimization.
"""

from __future__ import annotations

from .analytic import BangBangSolution, double_integrator_min_time
from .base import OptimizationResult, OptimizationStatus, status_from_ipopt
from .car import CarModel, MinimumTimeCarOptimizer
from .ipopt_factory import build_ipopt_solver_options
from .sweep import SweepPoint, is_non_decreasing, sweep_friction

__all__ = [
    "BangBangSolution",
    "CarModel",
    "MinimumTimeCarOptimizer",
    "OptimizationResult",
    "OptimizationStatus",
    "SweepPoint",
    "build_ipopt_solver_options",
    "double_integrator_min_time",
    "is_non_decreasing",
    "status_from_ipopt",
    "sweep_friction",
]
