"""Typed numerical constants with provenance metadata.

Tolerances and reference values used by the car model carry their unit
and the reason they were chosen, so a check that fails can be traced back
to where its threshold came from.

Usage:
    from mintime.constants import RESIDUAL_TOLERANCE

    tol = RESIDUAL_TOLERANCE.value
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhysicalConstant:
    """Typed constant with engineering metadata.

    Attributes:
        value: Numerical value of the constant
        unit: Unit string (e.g., "m", "m/s^2", "dimensionless")
        source: Where the value comes from
        notes: Additional documentation
    """

    value: float
    unit: str
    source: str
    notes: str = ""

