from __future__ import annotations

import math

import numpy as np
import pytest

from mintime.optimization.analytic import double_integrator_min_time


def test_closed_form_values() -> None:
    sol = double_integrator_min_time(5.0, 1.0, -3.0)
    assert sol.final_time == pytest.approx(math.sqrt(2 * 5.0 * (1.0 + 1.0 / 3.0)))
    assert sol.switch_time == pytest.approx(math.sqrt(2 * 5.0 / (1.0 * (1.0 + 1.0 / 3.0))))
    assert sol.peak_velocity == pytest.approx(sol.switch_time * 1.0)


def test_profile_is_rest_to_rest() -> None:
    sol = double_integrator_min_time(5.0, 1.0, -3.0)
    prof = sol.profile(np.linspace(0.0, sol.final_time, 201))
    assert prof["position"][0] == 0.0
    assert prof["position"][-1] == pytest.approx(5.0)
    assert prof["velocity"][0] == 0.0
    assert prof["velocity"][-1] == pytest.approx(0.0, abs=1e-12)
    assert set(np.unique(prof["acceleration"])) == {-3.0, 1.0}


def test_symmetric_bounds_switch_halfway() -> None:
    sol = double_integrator_min_time(1.0, 2.0, -2.0)
    assert sol.switch_time == pytest.approx(sol.final_time / 2)


@pytest.mark.parametrize("args", [(0.0, 1.0, -1.0), (1.0, 0.0, -1.0), (1.0, 1.0, 0.0)])
def test_invalid_arguments(args) -> None:
    with pytest.raises(ValueError):
        double_integrator_min_time(*args)
