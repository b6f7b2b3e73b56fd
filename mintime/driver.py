"""
Build, solve, write and render in one call.

``run_model`` is the whole pipeline: a failing solve raises
:class:`SolveError` before anything is written, and a failing renderer is
logged and recorded on the report without failing the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from mintime.config import CarConfig
from mintime.constants import DEFAULT_RESULTS_FILE
from mintime.constraints import max_residuals
from mintime.diagnostics.run_metadata import RUN_ID
from mintime.io.results import write_solution
from mintime.logging import get_logger
from mintime.optimization.base import OptimizationResult
from mintime.optimization.car import MinimumTimeCarOptimizer
from mintime.rendering import NullRenderer, Renderer, RenderError

log = get_logger(__name__)


class SolveError(RuntimeError):
    """The solver did not converge; carries the failed result."""

    def __init__(self, result: OptimizationResult):
        self.result = result
        super().__init__(
            f"Solve failed with status '{result.status.value}': {result.error_message}",
        )


@dataclass
class SolveReport:
    """Structured outcome of one model run."""

    run_id: str
    status: str
    final_time: Optional[float] = None
    n_iter: int = 0
    solve_time: Optional[float] = None
    config: Dict[str, Any] = field(default_factory=dict)
    residuals: Dict[str, float] = field(default_factory=dict)
    artifacts: Dict[str, Any] = field(default_factory=dict)  # results/plot paths, render errors


def run_model(
    config: CarConfig | Mapping[str, Any],
    output_path: str | Path = DEFAULT_RESULTS_FILE,
    renderer: Optional[Renderer] = None,
    optimizer: Optional[MinimumTimeCarOptimizer] = None,
) -> SolveReport:
    """
    Solve ``config``, write the results table and render it.

    Args:
        config: Model parameters, or a mapping of them (short or long names)
        output_path: Results table path
        renderer: Called with the closed results file; defaults to no rendering
        optimizer: Solver to use; a default one is created if omitted

    Returns:
        SolveReport for the run

    Raises:
        ConfigurationError: if the parameters are invalid
        SolveError: if the solver did not converge
    """
    if not isinstance(config, CarConfig):
        config = CarConfig.from_mapping(config)
    optimizer = optimizer or MinimumTimeCarOptimizer()
    renderer = renderer or NullRenderer()
    output_path = Path(output_path)

    result = optimizer.solve(config)
    if not result.is_successful():
        raise SolveError(result)

    n_rows = write_solution(output_path, result.solution)

    report = SolveReport(
        run_id=RUN_ID,
        status=result.status.value,
        final_time=result.objective_value,
        n_iter=result.iterations or 0,
        solve_time=result.solve_time,
        config=config.as_dict(),
        residuals=max_residuals(config, result.solution),
        artifacts={"results": str(output_path), "rows": n_rows},
    )

    try:
        renderer.render(output_path)
    except RenderError as exc:
        log.warning(f"Rendering failed, results are still in {output_path}: {exc}")
        report.artifacts["render_error"] = str(exc)
    else:
        report.artifacts["renderer"] = type(renderer).__name__

    log.info(f"Run {RUN_ID} finished: tf = {report.final_time:.6f}")
    return report
