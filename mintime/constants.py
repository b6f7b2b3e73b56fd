"""Constants used across the mintime package.

Numerical tolerances use the PhysicalConstant dataclass for traceability.
Pure configuration constants (default model parameters, solver settings,
file names) are raw values.
"""

from __future__ import annotations

import os as _os

from mintime.units import PhysicalConstant

# =============================================================================
# Numerical Tolerances
# =============================================================================

SOLVER_TOLERANCE = PhysicalConstant(
    value=1e-8,
    unit="dimensionless",
    source="Ipopt default desired convergence tolerance",
    notes="Passed to ipopt.tol",
)

RESIDUAL_TOLERANCE = PhysicalConstant(
    value=1e-6,
    unit="dimensionless",
    source="Ipopt constr_viol_tol default (1e-4) tightened for a small NLP",
    notes="Allowed |residual| of a discretized ODE or boundary equality",
)

BOUND_TOLERANCE = PhysicalConstant(
    value=1e-7,
    unit="m/s^2",
    source="Ipopt bound_relax_factor default (1e-8) times typical bound size",
    notes="Slack allowed when checking aL <= a[i] <= aU",
)


# =============================================================================
# Default Model Parameters
# =============================================================================

DEFAULT_N_INTERVALS: int = 50
DEFAULT_DISTANCE: float = 100.0
DEFAULT_ACCEL_MAX: float = 1.0
DEFAULT_ACCEL_MIN: float = -3.0
DEFAULT_FRICTION: float = 0.001
DEFAULT_TF_INIT: float = 1.0


# =============================================================================
# Solver Settings
# =============================================================================

DEFAULT_MAX_ITER: int = 3000
DEFAULT_PRINT_LEVEL: int = 0

# MUMPS ships with the CasADi wheels; HSL solvers need a separate library.
LINEAR_SOLVER: str = _os.environ.get("MINTIME_LINEAR_SOLVER", "mumps")
HSLLIB_PATH: str = _os.environ.get("HSLLIB_PATH", "")
IPOPT_LOG_DIR: str = _os.environ.get("MINTIME_RUNS_DIR", "runs")


# =============================================================================
# Output Files
# =============================================================================

ROW_FORMAT: str = "%16.4e %16.4e %16.4e %16.4e"
RESULTS_COLUMNS: tuple[str, ...] = ("time", "position", "velocity", "acceleration")
DEFAULT_RESULTS_FILE: str = "car.out"
DEFAULT_PLOT_SCRIPT: str = "car.gp"
DEFAULT_PLOT_EXECUTABLE: str = "gnuplot"
