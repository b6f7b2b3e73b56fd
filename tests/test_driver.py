from __future__ import annotations

import numpy as np
import pytest

from conftest import requires_ipopt
from mintime.config import CarConfig
from mintime.driver import SolveError, run_model
from mintime.io.results import read_results
from mintime.optimization.base import OptimizationResult, OptimizationStatus
from mintime.rendering import RenderError


class _FakeOptimizer:
    """Returns a fixed result instead of calling Ipopt."""

    def __init__(self, result: OptimizationResult):
        self.result = result
        self.configs = []

    def solve(self, config):
        self.configs.append(config)
        return self.result


class _RecordingRenderer:
    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def render(self, results_path):
        # the table must be complete when the renderer runs
        self.calls.append((results_path, results_path.read_text(encoding="utf-8")))
        if self.fail:
            raise RenderError("plotter exploded")


def _config() -> CarConfig:
    return CarConfig(n_intervals=2, distance=1.0, accel_max=1.0, accel_min=-1.0, friction=0.0)


def _converged() -> OptimizationResult:
    return OptimizationResult(
        status=OptimizationStatus.CONVERGED,
        objective_value=2.0,
        iterations=7,
        solution={
            "time": np.array([0.0, 1.0, 2.0]),
            "position": np.array([0.0, 1.0, 1.0]),
            "velocity": np.array([0.0, 1.0, 0.0]),
            "acceleration": np.array([0.0, 1.0, -1.0]),
            "final_time": 2.0,
        },
    )


def test_run_writes_then_renders(tmp_path) -> None:
    output = tmp_path / "car.out"
    renderer = _RecordingRenderer()
    optimizer = _FakeOptimizer(_converged())

    report = run_model(_config(), output, renderer=renderer, optimizer=optimizer)

    assert optimizer.configs == [_config()]
    assert report.status == "converged"
    assert report.final_time == 2.0
    assert report.n_iter == 7
    assert report.artifacts["results"] == str(output)
    assert report.artifacts["rows"] == 3
    assert report.artifacts["renderer"] == "_RecordingRenderer"
    assert report.residuals["position_dynamics"] == pytest.approx(0.0)

    assert len(renderer.calls) == 1
    rendered_path, contents = renderer.calls[0]
    assert rendered_path == output
    assert len(contents.splitlines()) == 3
    np.testing.assert_allclose(read_results(output)["velocity"], [0.0, 1.0, 0.0])


def test_solver_failure_aborts_pipeline(tmp_path) -> None:
    output = tmp_path / "car.out"
    renderer = _RecordingRenderer()
    failed = OptimizationResult(
        status=OptimizationStatus.INFEASIBLE,
        error_message="Infeasible_Problem_Detected",
    )

    with pytest.raises(SolveError) as excinfo:
        run_model(_config(), output, renderer=renderer, optimizer=_FakeOptimizer(failed))

    assert excinfo.value.result is failed
    assert "infeasible" in str(excinfo.value)
    assert not output.exists()
    assert renderer.calls == []


def test_render_failure_is_logged_not_raised(tmp_path, caplog) -> None:
    output = tmp_path / "car.out"
    report = run_model(
        _config(), output, renderer=_RecordingRenderer(fail=True), optimizer=_FakeOptimizer(_converged()),
    )

    assert output.exists()
    assert report.artifacts["render_error"] == "plotter exploded"
    assert "renderer" not in report.artifacts
    assert "Rendering failed" in caplog.text


def test_default_renderer_is_null(tmp_path) -> None:
    report = run_model(_config(), tmp_path / "car.out", optimizer=_FakeOptimizer(_converged()))
    assert report.artifacts["renderer"] == "NullRenderer"


@pytest.mark.slow
@requires_ipopt
def test_end_to_end_with_ipopt(tmp_path) -> None:
    config = CarConfig(n_intervals=20, distance=5.0, friction=0.0, tf_init=1.0)
    output = tmp_path / "car.out"
    report = run_model(config, output, renderer=_RecordingRenderer())

    data = read_results(output)
    assert data["time"].shape == (21,)
    assert data["time"][-1] == pytest.approx(report.final_time, rel=1e-3)
    assert data["position"][-1] == pytest.approx(5.0, rel=1e-3)
    assert np.all(np.diff(data["time"]) > 0)


def test_mapping_config_is_validated(tmp_path) -> None:
    from mintime.config import ConfigurationError

    optimizer = _FakeOptimizer(_converged())
    with pytest.raises(ConfigurationError):
        run_model({"N": 0}, tmp_path / "car.out", optimizer=optimizer)
    assert optimizer.configs == []

    run_model({"N": 2, "L": 1.0, "aL": -1.0, "R": 0.0}, tmp_path / "car.out", optimizer=optimizer)
    assert optimizer.configs == [_config()]
