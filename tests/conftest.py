"""
Pytest configuration for the mintime test suite.

Skips the import-time Ipopt check during collection and exposes a marker
for tests that need a working Ipopt plugin.
"""

import os

import pytest

# Set before mintime is imported by any test module
os.environ["MINTIME_SKIP_VALIDATION"] = "1"


def _ipopt_available() -> bool:
    try:
        import casadi as ca
    except ImportError:
        return False
    try:
        return bool(ca.has_nlpsol("ipopt"))
    except RuntimeError:
        return False


requires_ipopt = pytest.mark.skipif(
    not _ipopt_available(), reason="CasADi Ipopt plugin not available",
)
