"""
CasADi model builder for the minimum-time car problem.

The continuous problem

    min tf  s.t.  dx/dt = v,  dv/dt = a - R v^2,
    x(0) = 0, x(tf) = L, v(0) = v(tf) = 0,  aL <= a <= aU

is discretized with backward differences on N equal intervals of length
h = tf / N and solved with Ipopt through CasADi's Opti stack.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

import casadi as ca
import numpy as np

from mintime.config import CarConfig
from mintime.logging import get_logger
from mintime.optimization.base import (
    OptimizationResult,
    OptimizationStatus,
    status_from_ipopt,
)
from mintime.optimization.ipopt_factory import build_ipopt_solver_options

log = get_logger(__name__)


def _solver_stats(opti: ca.Opti) -> dict[str, Any]:
    """Solver statistics, or an empty dict when no solve was attempted."""
    try:
        return dict(opti.stats())
    except RuntimeError as exc:
        log.debug(f"No solver statistics available: {exc}")
        return {}


@dataclass
class CarModel:
    """
    A built, not yet solved, car NLP.

    The model exclusively owns its Opti instance and decision variables for
    the duration of one solve.
    """

    config: CarConfig
    opti: ca.Opti
    tf: ca.MX
    x: ca.MX
    v: ca.MX
    a: ca.MX
    h: ca.MX
    n_equality_constraints: int

    @property
    def n_nodes(self) -> int:
        return self.config.n_nodes


class MinimumTimeCarOptimizer:
    """
    Minimum-time car optimizer using the Opti stack.

    Parameters
    ----------
    solver_options : dict, optional
        Ipopt overrides in CasADi ``ipopt.<name>`` form
    linear_solver : str, optional
        Ipopt linear solver; defaults to ``MINTIME_LINEAR_SOLVER`` or mumps
    enable_log_sink : bool
        Write the Ipopt iteration log to a file
    log_dir : str, optional
        Folder for that log; defaults to ``MINTIME_RUNS_DIR`` or ``runs``
    """

    def __init__(
        self,
        solver_options: dict[str, Any] | None = None,
        linear_solver: str | None = None,
        enable_log_sink: bool = False,
        log_dir: str | None = None,
    ):
        self.name = "MinimumTimeCarOptimizer"
        self._solver_options: dict[str, Any] = dict(solver_options or {})
        self._linear_solver = linear_solver
        self._enable_log_sink = enable_log_sink
        self._log_dir = log_dir

    def configure(self, **kwargs) -> None:
        """
        Update solver settings.

        Parameters
        ----------
        **kwargs
            - solver_options: dict of Ipopt options merged into the current ones
            - linear_solver: Ipopt linear solver name
            - enable_log_sink: bool
            - log_dir: folder for the Ipopt log
        """
        solver_options = kwargs.get("solver_options")
        if solver_options:
            self._solver_options.update(solver_options)
            log.debug(f"Updated solver options: {solver_options}")
        if "linear_solver" in kwargs:
            self._linear_solver = kwargs["linear_solver"]
        if "enable_log_sink" in kwargs:
            self._enable_log_sink = bool(kwargs["enable_log_sink"])
        if "log_dir" in kwargs:
            self._log_dir = kwargs["log_dir"]

    def solver_options(self) -> dict[str, Any]:
        """Return the full Ipopt option dict used for the next solve."""
        return build_ipopt_solver_options(
            self._solver_options,
            self._linear_solver,
            enable_log_sink=self._enable_log_sink,
            log_dir=self._log_dir,
        )

    def build(self, config: CarConfig) -> CarModel:
        """Allocate variables, initial guesses, constraints and objective."""
        n = config.n_intervals
        opti = ca.Opti()

        tf = opti.variable()
        x = opti.variable(n + 1)
        v = opti.variable(n + 1)
        a = opti.variable(n + 1)
        h = tf / n

        opti.subject_to(tf >= 0)
        opti.subject_to(opti.bounded(config.accel_min, a, config.accel_max))

        # Backward difference quotients at nodes 1..N
        for i in range(1, n + 1):
            opti.subject_to((x[i] - x[i - 1]) / h == v[i])
            opti.subject_to((v[i] - v[i - 1]) / h == a[i] - config.friction * v[i] ** 2)

        opti.subject_to(x[0] == 0)
        opti.subject_to(x[n] == config.distance)
        opti.subject_to(v[0] == 0)
        opti.subject_to(v[n] == 0)

        opti.minimize(tf)

        opti.set_initial(tf, config.tf_init)
        opti.set_initial(x, np.linspace(0.0, config.distance, n + 1))
        opti.set_initial(v, np.full(n + 1, config.distance / config.tf_init))
        opti.set_initial(a, np.zeros(n + 1))

        log.debug(
            f"Built car model: N={n}, L={config.distance}, "
            f"a in [{config.accel_min}, {config.accel_max}], R={config.friction}",
        )
        return CarModel(
            config=config,
            opti=opti,
            tf=tf,
            x=x,
            v=v,
            a=a,
            h=h,
            n_equality_constraints=2 * n + 4,
        )

    def solve(self, config: CarConfig) -> OptimizationResult:
        """
        Build and solve the model.

        Returns
        -------
        OptimizationResult
            ``CONVERGED`` with ``time``, ``position``, ``velocity``,
            ``acceleration`` arrays and ``final_time``; otherwise the status
            mapped from Ipopt's return status and an empty solution.
        """
        model = self.build(config)

        log.info(f"Solving minimum-time car model with N={config.n_intervals}...")
        start = time.perf_counter()
        try:
            model.opti.solver("ipopt", self.solver_options())
            sol = model.opti.solve()
        except RuntimeError as exc:
            stats = _solver_stats(model.opti)
            return_status = stats.get("return_status")
            status = status_from_ipopt(return_status)
            if status is OptimizationStatus.CONVERGED:
                # Acceptable-level exits can still raise; read the iterate directly
                return self._converged_result(
                    model, model.opti.debug.value, stats, time.perf_counter() - start,
                )
            log.error(f"Car model solve failed ({return_status}): {exc}")
            message = f"{return_status}: {exc}" if return_status else str(exc)
            return OptimizationResult(
                status=status,
                objective_value=None,
                solve_time=time.perf_counter() - start,
                iterations=stats.get("iter_count"),
                solution={},
                error_message=message,
                convergence_info={"return_status": return_status},
                metadata={"config": config.as_dict()},
            )

        return self._converged_result(
            model, sol.value, sol.stats(), time.perf_counter() - start,
        )

    def _converged_result(
        self,
        model: CarModel,
        value: Callable[[Any], Any],
        stats: dict[str, Any],
        elapsed: float,
    ) -> OptimizationResult:
        config = model.config
        tf_opt = float(value(model.tf))
        x_opt = np.asarray(value(model.x), dtype=float).reshape(-1)
        v_opt = np.asarray(value(model.v), dtype=float).reshape(-1)
        a_opt = np.asarray(value(model.a), dtype=float).reshape(-1)
        h_opt = tf_opt / config.n_intervals

        result = OptimizationResult(
            status=OptimizationStatus.CONVERGED,
            objective_value=tf_opt,
            solve_time=stats.get("t_wall_total", elapsed),
            iterations=stats.get("iter_count"),
            solution={
                "time": np.arange(config.n_nodes) * h_opt,
                "position": x_opt,
                "velocity": v_opt,
                "acceleration": a_opt,
                "final_time": tf_opt,
            },
            convergence_info={"return_status": stats.get("return_status")},
            metadata={
                "config": config.as_dict(),
                "interval": h_opt,
                "n_equality_constraints": model.n_equality_constraints,
            },
        )
        log.info(f"Car model converged: tf = {tf_opt:.6f} ({result.iterations} iterations)")
        return result
