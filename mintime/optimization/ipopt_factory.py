"""
Centralized IPOPT option assembly.

Every Opti instance in the package takes its Ipopt options from
:func:`build_ipopt_solver_options`, so the linear solver, tolerances and
the optional log sink are configured in one place.
"""

from __future__ import annotations

from typing import Any

from mintime.constants import (
    DEFAULT_MAX_ITER,
    DEFAULT_PRINT_LEVEL,
    HSLLIB_PATH,
    IPOPT_LOG_DIR,
    LINEAR_SOLVER,
    SOLVER_TOLERANCE,
)
from mintime.diagnostics.run_metadata import RUN_ID, ensure_runs_dir
from mintime.logging import get_logger

log = get_logger(__name__)

_HSL_SOLVERS = frozenset({"ma27", "ma57", "ma77", "ma86", "ma97"})


def build_ipopt_solver_options(
    options: dict[str, Any] | None = None,
    linear_solver: str | None = None,
    *,
    enable_log_sink: bool = False,
    log_dir: str | None = None,
) -> dict[str, Any]:
    """Return CasADi plugin options for Ipopt.

    Args:
        options: Overrides, using CasADi's ``ipopt.<name>`` keys
        linear_solver: Linear solver name (default: ``MINTIME_LINEAR_SOLVER``
            or mumps)
        enable_log_sink: Also write the Ipopt iteration log to
            ``<log_dir>/<RUN_ID>-ipopt.log``
        log_dir: Folder for the log sink (default: ``MINTIME_RUNS_DIR`` or
            ``runs``)
    """
    opts = options.copy() if options else {}

    requested = linear_solver or opts.pop("ipopt.linear_solver", None) or LINEAR_SOLVER
    opts["ipopt.linear_solver"] = requested.lower()

    if opts["ipopt.linear_solver"] in _HSL_SOLVERS:
        if HSLLIB_PATH:
            opts.setdefault("ipopt.hsllib", HSLLIB_PATH)
        else:
            log.warning(
                "HSL linear solver '%s' requested but HSLLIB_PATH is not set; "
                "Ipopt will rely on builtin defaults.",
                requested,
            )

    opts.setdefault("ipopt.tol", SOLVER_TOLERANCE.value)
    opts.setdefault("ipopt.max_iter", DEFAULT_MAX_ITER)
    opts.setdefault("ipopt.print_level", DEFAULT_PRINT_LEVEL)
    opts.setdefault("ipopt.sb", "yes")
    opts.setdefault("print_time", False)

    if enable_log_sink:
        folder = ensure_runs_dir(log_dir or IPOPT_LOG_DIR)
        opts.setdefault("ipopt.output_file", str(folder / f"{RUN_ID}-ipopt.log"))
        opts.setdefault("ipopt.file_print_level", 5)

    return opts

