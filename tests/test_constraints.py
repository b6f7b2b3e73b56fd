from __future__ import annotations

import numpy as np
import pytest

from mintime.config import CarConfig
from mintime.constraints import (
    ConstraintType,
    boundary_residuals,
    check_solution,
    dynamics_residuals,
    max_residuals,
)


def _config() -> CarConfig:
    return CarConfig(n_intervals=2, distance=1.0, accel_max=1.0, accel_min=-1.0, friction=0.0)


def _consistent_solution() -> dict:
    """Backward-difference consistent trajectory for N=2, h=1, R=0."""
    return {
        "time": np.array([0.0, 1.0, 2.0]),
        "position": np.array([0.0, 1.0, 1.0]),
        "velocity": np.array([0.0, 1.0, 0.0]),
        # a[0] does not enter any difference equation
        "acceleration": np.array([0.0, 1.0, -1.0]),
        "final_time": 2.0,
    }


def test_consistent_solution_has_no_violations() -> None:
    config = _config()
    solution = _consistent_solution()
    assert check_solution(config, solution) == []
    residuals = max_residuals(config, solution)
    assert residuals["position_dynamics"] == pytest.approx(0.0)
    assert residuals["velocity_dynamics"] == pytest.approx(0.0)
    assert residuals["boundary"] == pytest.approx(0.0)
    assert residuals["acceleration_bound"] == 0.0


def test_friction_enters_velocity_residual() -> None:
    config = _config().replace(friction=0.5)
    dyn = dynamics_residuals(config, _consistent_solution())
    # (v1 - v0)/h - (a1 - R v1^2) = 1 - (1 - 0.5)
    assert dyn["velocity"][0] == pytest.approx(0.5)


def test_dynamics_violation_reports_node() -> None:
    solution = _consistent_solution()
    solution["position"] = np.array([0.0, 1.5, 1.0])
    violations = check_solution(_config(), solution)
    position = [v for v in violations if v.constraint_type is ConstraintType.POSITION_DYNAMICS]
    assert {v.time_index for v in position} == {1, 2}
    assert "node 1" in position[0].message


def test_boundary_violation() -> None:
    solution = _consistent_solution()
    solution["velocity"] = np.array([0.0, 1.0, 0.25])
    residuals = boundary_residuals(_config(), solution)
    assert residuals["v[N]"] == pytest.approx(0.25)
    types = {v.constraint_type for v in check_solution(_config(), solution)}
    assert ConstraintType.FINAL_STATE in types


def test_acceleration_bound_violation() -> None:
    solution = _consistent_solution()
    solution["acceleration"] = np.array([-2.0, 1.0, -1.0])
    violations = check_solution(_config(), solution)
    bound = [v for v in violations if v.constraint_type is ConstraintType.ACCELERATION]
    assert len(bound) == 1
    assert bound[0].time_index == 0
    assert bound[0].limit_value == -1.0
    assert max_residuals(_config(), solution)["acceleration_bound"] == pytest.approx(1.0)


def test_final_time_falls_back_to_time_column() -> None:
    solution = _consistent_solution()
    del solution["final_time"]
    assert check_solution(_config(), solution) == []


def test_wrong_node_count_rejected() -> None:
    with pytest.raises(ValueError, match="nodes"):
        dynamics_residuals(_config().replace(N=3), _consistent_solution())
