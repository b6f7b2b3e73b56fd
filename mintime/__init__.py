"""mintime: minimum-time car optimal control with CasADi and Ipopt."""
from __future__ import annotations

import os

from mintime.config import CarConfig, ConfigurationError, load_config
from mintime.driver import SolveError, SolveReport, run_model
from mintime.logging import get_logger

__version__ = "0.1.0"

log = get_logger(__name__)

# Global flag to track ipopt availability
_IPOPT_AVAILABLE: bool | None = None


def _check_ipopt_availability() -> bool:
    """Check if the ipopt plugin can be loaded by CasADi."""
    global _IPOPT_AVAILABLE

    if _IPOPT_AVAILABLE is not None:
        return _IPOPT_AVAILABLE

    import casadi as ca

    try:
        _IPOPT_AVAILABLE = bool(ca.has_nlpsol("ipopt"))
    except RuntimeError as exc:
        log.warning("IPOPT availability check failed: %s", exc)
        _IPOPT_AVAILABLE = False

    if not _IPOPT_AVAILABLE:
        log.warning("IPOPT solver is not available in CasADi; solves will fail.")
    return _IPOPT_AVAILABLE


def is_ipopt_available() -> bool:
    """
    Check if ipopt solver is available.

    Returns:
        True if ipopt is available, False otherwise
    """
    return _check_ipopt_availability()


if os.getenv("MINTIME_SKIP_VALIDATION") != "1":
    _check_ipopt_availability()

__all__ = [
    "CarConfig",
    "ConfigurationError",
    "SolveError",
    "SolveReport",
    "is_ipopt_available",
    "load_config",
    "run_model",
]
