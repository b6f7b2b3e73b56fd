"""mintime command-line interface.

Usage:
  mintime solve --config car.yml --output car.out --renderer gnuplot --script car.gp
  mintime solve --N 100 --L 5 --R 0 --renderer matplotlib
  mintime write-script --output car.gp --results car.out
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict

import yaml

from mintime.config import CarConfig, ConfigurationError, load_config
from mintime.constants import DEFAULT_PLOT_SCRIPT, DEFAULT_RESULTS_FILE, IPOPT_LOG_DIR
from mintime.diagnostics.run_metadata import log_run_metadata
from mintime.driver import SolveError, run_model
from mintime.logging import set_package_level
from mintime.optimization.car import MinimumTimeCarOptimizer
from mintime.rendering import get_renderer, write_default_script

# (flag, parameter) pairs for command-line overrides
_PARAM_FLAGS = (
    ("N", "n_intervals"),
    ("L", "distance"),
    ("aU", "accel_max"),
    ("aL", "accel_min"),
    ("R", "friction"),
    ("tf_init", "tf_init"),
)


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        param: getattr(args, flag)
        for flag, param in _PARAM_FLAGS
        if getattr(args, flag) is not None
    }


def _renderer(args: argparse.Namespace):
    if args.renderer == "gnuplot":
        return get_renderer("gnuplot", script=args.script)
    if args.renderer == "matplotlib":
        return get_renderer("matplotlib", output=args.image)
    return get_renderer("none")


def cmd_solve(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config) if args.config else CarConfig()
        overrides = _overrides(args)
        if overrides:
            config = config.replace(**overrides)
    except FileNotFoundError as exc:
        print(f"Config file not found: {exc.filename}", file=sys.stderr)
        return 2
    except (ConfigurationError, ValueError, yaml.YAMLError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    optimizer = MinimumTimeCarOptimizer(
        linear_solver=args.linear_solver,
        enable_log_sink=args.ipopt_log,
        log_dir=args.runs_dir,
    )
    try:
        report = run_model(config, args.output, renderer=_renderer(args), optimizer=optimizer)
    except SolveError as exc:
        print(f"Solve failed: {exc}", file=sys.stderr)
        return 1

    print(f"final time = {report.final_time:.6f}")
    print(f"Results written: {report.artifacts['results']}")
    if "render_error" in report.artifacts:
        print(f"Rendering failed: {report.artifacts['render_error']}", file=sys.stderr)

    if args.report:
        out_path = log_run_metadata(asdict(report), folder=args.runs_dir)
        print(f"SolveReport written: {out_path}")
    return 0


def cmd_write_script(args: argparse.Namespace) -> int:
    path = write_default_script(args.output, results_name=args.results, image_name=args.image)
    print(f"Plot script written: {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mintime", description="Minimum-time car model")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for console output")
    sub = parser.add_subparsers(dest="command", required=True)

    p_solve = sub.add_parser("solve", help="Solve the car model and write the results table")
    p_solve.add_argument("--config", help="Path to YAML/JSON parameter file")
    p_solve.add_argument("--output", default=DEFAULT_RESULTS_FILE, help="Results table path")
    p_solve.add_argument(
        "--renderer", choices=("gnuplot", "matplotlib", "none"), default="none",
        help="How to plot the results",
    )
    p_solve.add_argument("--script", default=DEFAULT_PLOT_SCRIPT, help="gnuplot script")
    p_solve.add_argument("--image", default=None, help="Image path for the matplotlib renderer")
    p_solve.add_argument("--linear-solver", default=None, help="Ipopt linear solver")
    p_solve.add_argument("--ipopt-log", action="store_true", help="Write the Ipopt log into --runs-dir")
    p_solve.add_argument("--report", action="store_true", help="Write the SolveReport as JSON")
    p_solve.add_argument("--runs-dir", default=IPOPT_LOG_DIR, help="Folder for reports and logs")
    p_solve.add_argument("--N", type=int, default=None, help="Number of intervals")
    p_solve.add_argument("--L", type=float, default=None, help="Target distance")
    p_solve.add_argument("--aU", type=float, default=None, help="Upper acceleration bound")
    p_solve.add_argument("--aL", type=float, default=None, help="Lower acceleration bound")
    p_solve.add_argument("--R", type=float, default=None, help="Friction coefficient")
    p_solve.add_argument("--tf-init", dest="tf_init", type=float, default=None,
                         help="Initial guess for the final time")
    p_solve.set_defaults(func=cmd_solve)

    p_script = sub.add_parser("write-script", help="Write a default gnuplot script")
    p_script.add_argument("--output", default=DEFAULT_PLOT_SCRIPT, help="Script path")
    p_script.add_argument("--results", default=DEFAULT_RESULTS_FILE, help="Results table name")
    p_script.add_argument("--image", default=None, help="PNG name written by gnuplot")
    p_script.set_defaults(func=cmd_write_script)

    ns = parser.parse_args(argv)
    level = getattr(logging, str(ns.log_level).upper(), logging.WARNING)
    set_package_level(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler])
    return ns.func(ns)


if __name__ == "__main__":
    raise SystemExit(main())
