"""
Model parameters for the minimum-time car problem.

This module holds the immutable parameter set the model builder consumes,
the validation applied before any model is built, and loading of the
parameters from YAML or JSON files.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from mintime.constants import (
    DEFAULT_ACCEL_MAX,
    DEFAULT_ACCEL_MIN,
    DEFAULT_DISTANCE,
    DEFAULT_FRICTION,
    DEFAULT_N_INTERVALS,
    DEFAULT_TF_INIT,
)
from mintime.logging import get_logger

log = get_logger(__name__)

# Short names used in parameter files and on the command line
_ALIASES: Dict[str, str] = {
    "N": "n_intervals",
    "L": "distance",
    "aU": "accel_max",
    "aL": "accel_min",
    "R": "friction",
    "tf_init": "tf_init",
}


class ConfigurationError(ValueError):
    """Raised when model parameters cannot produce a well-posed model."""


class ParameterValidator:
    """Validators for scalar model parameters."""

    @staticmethod
    def validate_finite(value: Any, name: str) -> float:
        """Return ``value`` as a float, raising if it is not a finite number."""
        if isinstance(value, bool):
            raise ConfigurationError(f"{name} must be a number, got {type(value).__name__}")
        try:
            float_val = float(value)
        except (ValueError, TypeError) as exc:
            raise ConfigurationError(
                f"{name} must be a number, got {type(value).__name__}",
            ) from exc
        if not math.isfinite(float_val):
            raise ConfigurationError(f"{name} must be finite, got {float_val}")
        return float_val

    @staticmethod
    def validate_positive_int(value: Any, name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise ConfigurationError(f"{name} must be >= 1, got {value}")
        return value

    @staticmethod
    def validate_positive_float(value: Any, name: str) -> float:
        float_val = ParameterValidator.validate_finite(value, name)
        if float_val <= 0:
            raise ConfigurationError(f"{name} must be positive, got {float_val}")
        return float_val

    @staticmethod
    def validate_non_negative_float(value: Any, name: str) -> float:
        float_val = ParameterValidator.validate_finite(value, name)
        if float_val < 0:
            raise ConfigurationError(f"{name} must be non-negative, got {float_val}")
        return float_val


@dataclass(frozen=True)
class CarConfig:
    """
    Parameters of the minimum-time car model.

    Attributes:
        n_intervals: Number of discretization intervals N (nodes are 0..N)
        distance: Target distance L
        accel_max: Upper acceleration bound aU
        accel_min: Lower acceleration bound aL
        friction: Quadratic friction coefficient R
        tf_init: Initial guess for the final time

    Raises:
        ConfigurationError: if any parameter is out of range. The sign of
            the acceleration bounds is not checked; only aL <= aU is.
    """

    n_intervals: int = DEFAULT_N_INTERVALS
    distance: float = DEFAULT_DISTANCE
    accel_max: float = DEFAULT_ACCEL_MAX
    accel_min: float = DEFAULT_ACCEL_MIN
    friction: float = DEFAULT_FRICTION
    tf_init: float = DEFAULT_TF_INIT

    def __post_init__(self) -> None:
        ParameterValidator.validate_positive_int(self.n_intervals, "N")
        ParameterValidator.validate_positive_float(self.distance, "L")
        accel_max = ParameterValidator.validate_finite(self.accel_max, "aU")
        accel_min = ParameterValidator.validate_finite(self.accel_min, "aL")
        ParameterValidator.validate_non_negative_float(self.friction, "R")
        ParameterValidator.validate_positive_float(self.tf_init, "tf_init")
        if accel_min > accel_max:
            raise ConfigurationError(
                f"aL must not exceed aU, got aL={accel_min} > aU={accel_max}",
            )
        if not accel_min <= 0.0 <= accel_max:
            log.warning(
                "Acceleration bounds [%s, %s] exclude zero; the a=0 initial guess is infeasible",
                accel_min,
                accel_max,
            )

    @property
    def n_nodes(self) -> int:
        """Number of discretization nodes (N + 1)."""
        return self.n_intervals + 1

    def replace(self, **changes: Any) -> "CarConfig":
        """Return a copy with ``changes`` applied (short names accepted)."""
        return replace(self, **_normalize_keys(changes))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CarConfig":
        """Build a config from a mapping using short (N, L, ...) or long names."""
        return cls(**_normalize_keys(data))


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    valid = set(_ALIASES.values())
    out: Dict[str, Any] = {}
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name not in valid:
            raise ConfigurationError(f"Unknown model parameter: {key!r}")
        if name in out:
            raise ConfigurationError(f"Parameter {name!r} given more than once")
        out[name] = value
    return out


def load_config(path: str | Path) -> CarConfig:
    """Load a :class:`CarConfig` from a YAML (``.yml``/``.yaml``) or JSON file."""
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yml", ".yaml"}:
        raw = yaml.safe_load(text)
    else:
        raw = json.loads(text)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError("Configuration root must be a mapping")
    # Parameters may sit at the root or under a "model" section
    params = raw.get("model", raw)
    if not isinstance(params, dict):
        raise ConfigurationError("'model' section must be a mapping")
    config = CarConfig.from_mapping(params)
    log.debug(f"Loaded configuration from {p}: {config}")
    return config
