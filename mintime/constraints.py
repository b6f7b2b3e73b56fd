"""
Constraint checks on a solved car trajectory.

The solver reports convergence against its own scaled tolerances; these
helpers re-evaluate the discretized dynamics, boundary conditions and
acceleration bounds on the returned arrays in physical units.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from mintime.config import CarConfig
from mintime.constants import BOUND_TOLERANCE, RESIDUAL_TOLERANCE
from mintime.logging import get_logger

log = get_logger(__name__)


class ConstraintType(Enum):
    """Families of constraints in the car model."""

    POSITION_DYNAMICS = "position_dynamics"
    VELOCITY_DYNAMICS = "velocity_dynamics"
    INITIAL_STATE = "initial_state"
    FINAL_STATE = "final_state"
    ACCELERATION = "acceleration"


@dataclass
class ConstraintViolation:
    """Represents a constraint violation."""

    constraint_type: ConstraintType
    constraint_name: str
    violation_value: float
    limit_value: float
    time_index: Optional[int] = None
    message: str = ""

    def __post_init__(self):
        if not self.message:
            where = f" at node {self.time_index}" if self.time_index is not None else ""
            self.message = (
                f"{self.constraint_name} violation{where}: "
                f"{self.violation_value:.3e} exceeds limit {self.limit_value:.3e}"
            )


def _arrays(solution: Mapping[str, Any]) -> tuple[float, np.ndarray, np.ndarray, np.ndarray]:
    x = np.asarray(solution["position"], dtype=float)
    v = np.asarray(solution["velocity"], dtype=float)
    a = np.asarray(solution["acceleration"], dtype=float)
    if "final_time" in solution:
        tf = float(solution["final_time"])
    else:
        tf = float(np.asarray(solution["time"], dtype=float)[-1])
    return tf, x, v, a


def dynamics_residuals(config: CarConfig, solution: Mapping[str, Any]) -> Dict[str, np.ndarray]:
    """
    Residuals of the difference quotients at nodes 1..N.

    Returns:
        ``{"position": (x[i]-x[i-1])/h - v[i],
        "velocity": (v[i]-v[i-1])/h - (a[i] - R v[i]^2)}``
    """
    tf, x, v, a = _arrays(solution)
    if x.shape != (config.n_nodes,):
        raise ValueError(f"expected {config.n_nodes} nodes, got {x.shape[0]}")
    h = tf / config.n_intervals
    if h <= 0:
        raise ValueError(f"interval length must be positive, got {h}")
    return {
        "position": np.diff(x) / h - v[1:],
        "velocity": np.diff(v) / h - (a[1:] - config.friction * v[1:] ** 2),
    }


def boundary_residuals(config: CarConfig, solution: Mapping[str, Any]) -> Dict[str, float]:
    _, x, v, _ = _arrays(solution)
    return {
        "x[0]": float(x[0]),
        "x[N]": float(x[-1] - config.distance),
        "v[0]": float(v[0]),
        "v[N]": float(v[-1]),
    }


def max_residuals(config: CarConfig, solution: Mapping[str, Any]) -> Dict[str, float]:
    """Largest absolute residual per constraint family."""
    dyn = dynamics_residuals(config, solution)
    bnd = boundary_residuals(config, solution)
    _, _, _, a = _arrays(solution)
    bound_excess = np.maximum(a - config.accel_max, config.accel_min - a)
    return {
        "position_dynamics": float(np.max(np.abs(dyn["position"]))),
        "velocity_dynamics": float(np.max(np.abs(dyn["velocity"]))),
        "boundary": max(abs(r) for r in bnd.values()),
        "acceleration_bound": float(max(np.max(bound_excess), 0.0)),
    }


def check_solution(
    config: CarConfig,
    solution: Mapping[str, Any],
    tol: float = RESIDUAL_TOLERANCE.value,
    bound_tol: float = BOUND_TOLERANCE.value,
) -> List[ConstraintViolation]:
    """Return every dynamics, boundary and bound violation in ``solution``."""
    violations: List[ConstraintViolation] = []

    dyn = dynamics_residuals(config, solution)
    families = (
        ("position", ConstraintType.POSITION_DYNAMICS, "dx/dt = v"),
        ("velocity", ConstraintType.VELOCITY_DYNAMICS, "dv/dt = a - R v^2"),
    )
    for key, ctype, name in families:
        for i in np.flatnonzero(np.abs(dyn[key]) > tol):
            violations.append(
                ConstraintViolation(ctype, name, float(abs(dyn[key][i])), tol, int(i) + 1),
            )

    for name, residual in boundary_residuals(config, solution).items():
        if abs(residual) > tol:
            ctype = ConstraintType.INITIAL_STATE if "[0]" in name else ConstraintType.FINAL_STATE
            violations.append(ConstraintViolation(ctype, name, abs(residual), tol))

    _, _, _, a = _arrays(solution)
    lower, upper = config.accel_min - bound_tol, config.accel_max + bound_tol
    for i in np.flatnonzero((a < lower) | (a > upper)):
        limit = config.accel_max if a[i] > upper else config.accel_min
        violations.append(
            ConstraintViolation(
                ConstraintType.ACCELERATION, "aL <= a <= aU", float(a[i]), limit, int(i),
            ),
        )

    if violations:
        log.warning(f"Solution has {len(violations)} constraint violations")
    return violations
