"""
Renderers for result tables.

A renderer receives the path of a finished results table and turns it into
something to look at. The driver only depends on the :class:`Renderer`
protocol, so tests inject fakes instead of shelling out.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Any, Protocol

from matplotlib.figure import Figure

from mintime.constants import DEFAULT_PLOT_EXECUTABLE, DEFAULT_PLOT_SCRIPT
from mintime.io.results import read_results
from mintime.logging import get_logger

log = get_logger(__name__)


class RenderError(RuntimeError):
    """Raised when a renderer cannot produce its output."""


class Renderer(Protocol):
    def render(self, results_path: Path) -> None:
        ...


class NullRenderer:
    """Renderer that does nothing."""

    def render(self, results_path: Path) -> None:
        log.debug(f"Rendering disabled; leaving {results_path} as is")


class GnuplotRenderer:
    """
    Run an external plotting program with a companion script.

    The script is expected to read the results table itself; it is run from
    the folder holding the table, so a relative file name in the script
    resolves next to it.

    Args:
        script: Plot script passed as the only argument
        executable: Plotting program to run
        timeout: Seconds to wait for the program, None for no limit
    """

    def __init__(
        self,
        script: str | Path = DEFAULT_PLOT_SCRIPT,
        executable: str = DEFAULT_PLOT_EXECUTABLE,
        timeout: float | None = None,
    ):
        self.script = Path(script)
        self.executable = executable
        self.timeout = timeout

    def command(self) -> list[str]:
        # Absolute script path, since the program runs in the results folder
        return [self.executable, str(self.script.resolve())]

    def render(self, results_path: Path) -> None:
        results_path = Path(results_path)
        if shutil.which(self.executable) is None:
            raise RenderError(f"Plotting program '{self.executable}' not found on PATH")

        cwd = results_path.parent
        log.info(f"Running {' '.join(self.command())} in {cwd}")
        try:
            completed = subprocess.run(
                self.command(),
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise RenderError(f"{self.executable} failed to run: {exc}") from exc

        if completed.returncode != 0:
            raise RenderError(
                f"{self.executable} exited with status {completed.returncode}: "
                f"{completed.stderr.strip()}",
            )


def write_default_script(
    path: str | Path = DEFAULT_PLOT_SCRIPT,
    results_name: str = "car.out",
    image_name: str | None = None,
) -> Path:
    """
    Write a gnuplot script that plots the four result columns.

    Args:
        path: Script path to write
        results_name: Results table name as seen from the script's folder
        image_name: PNG to write; defaults to the results name with ``.png``

    Returns:
        Path of the written script
    """
    image_name = image_name or str(Path(results_name).with_suffix(".png"))
    lines = [
        "set terminal pngcairo size 1200,400",
        f"set output '{image_name}'",
        "set multiplot layout 1,3",
        "set xlabel 'time'",
        "set grid",
        f"plot '{results_name}' using 1:2 with lines title 'position'",
        f"plot '{results_name}' using 1:3 with lines title 'velocity'",
        f"plot '{results_name}' using 1:4 with steps title 'acceleration'",
        "unset multiplot",
    ]
    script = Path(path)
    script.write_text("\n".join(lines) + "\n", encoding="utf-8")
    log.info(f"Plot script written to {script}")
    return script


class MatplotlibRenderer:
    """Save a three-panel figure of the table next to it (or at ``output``)."""

    def __init__(self, output: str | Path | None = None, dpi: int = 150):
        self.output = Path(output) if output is not None else None
        self.dpi = dpi

    def render(self, results_path: Path) -> None:
        results_path = Path(results_path)
        try:
            data = read_results(results_path)
        except (OSError, ValueError) as exc:
            raise RenderError(f"Cannot read {results_path}: {exc}") from exc

        fig = plot_results(data, title=f"Minimum-time car ({results_path.name})")
        save_path = self.output or results_path.with_suffix(".png")
        fig.savefig(save_path, dpi=self.dpi, bbox_inches="tight")
        log.info(f"Plot saved to {save_path}")


def plot_results(data: dict[str, Any], title: str = "Minimum-time car") -> Figure:
    """
    Create position, velocity and acceleration panels against time.

    Args:
        data: Arrays keyed ``time``, ``position``, ``velocity``, ``acceleration``
        title: Figure title

    Returns:
        matplotlib Figure object
    """
    fig = Figure(figsize=(12, 4), dpi=100)
    axes = fig.subplots(1, 3)
    fig.suptitle(title, fontsize=14, fontweight="bold")

    curves = [
        ("position", "b-", "Position", axes[0]),
        ("velocity", "g-", "Velocity", axes[1]),
        ("acceleration", "r-", "Acceleration", axes[2]),
    ]
    t = data["time"]
    for key, style, label, ax in curves:
        if key == "acceleration":
            ax.step(t, data[key], style, where="pre", linewidth=2)
        else:
            ax.plot(t, data[key], style, linewidth=2)
        ax.axhline(y=0, color="gray", linestyle="-", alpha=0.3, linewidth=0.5)
        ax.set_xlabel("Time")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Time")
        ax.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


_RENDERERS = {
    "gnuplot": GnuplotRenderer,
    "matplotlib": MatplotlibRenderer,
    "none": NullRenderer,
}


def get_renderer(name: str, **kwargs: Any) -> Renderer:
    """Return a renderer by name: ``gnuplot``, ``matplotlib`` or ``none``."""
    try:
        cls = _RENDERERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown renderer '{name}'; choose one of {sorted(_RENDERERS)}",
        ) from None
    return cls(**kwargs)
