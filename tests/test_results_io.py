from __future__ import annotations

import io

import numpy as np
import pytest

from mintime.io.results import format_row, read_results, write_results, write_solution


def _two_interval_solution() -> dict:
    """N=2, h=1 trajectory."""
    return {
        "time": np.array([0.0, 1.0, 2.0]),
        "position": np.array([0.0, 2.5, 5.0]),
        "velocity": np.array([0.0, 1.0, 0.0]),
        "acceleration": np.array([1.0, -1.0, -1.0]),
        "final_time": 2.0,
    }


def test_format_row_fixed_width() -> None:
    row = format_row(0.0, 2.5, -1.0, 123456.0)
    assert row == "      0.0000e+00       2.5000e+00      -1.0000e+00       1.2346e+05"
    assert len(row) == 4 * 16 + 3


def test_write_to_stream_two_intervals() -> None:
    """Three nodes give exactly three fixed-width lines in node order."""
    stream = io.StringIO()
    n_rows = write_solution(stream, _two_interval_solution())

    assert n_rows == 3
    assert stream.getvalue().splitlines() == [
        "      0.0000e+00       0.0000e+00       0.0000e+00       1.0000e+00",
        "      1.0000e+00       2.5000e+00       1.0000e+00      -1.0000e+00",
        "      2.0000e+00       5.0000e+00       0.0000e+00      -1.0000e+00",
    ]


def test_write_to_path_and_read_back(tmp_path) -> None:
    solution = _two_interval_solution()
    path = tmp_path / "out" / "car.out"
    write_solution(path, solution)

    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert len(text.splitlines()) == 3

    data = read_results(path)
    for key in ("time", "position", "velocity", "acceleration"):
        np.testing.assert_allclose(data[key], solution[key])


def test_write_rounds_to_four_decimals(tmp_path) -> None:
    path = tmp_path / "car.out"
    write_results(path, [0.0], [1.23456789], [0.0], [0.0])
    assert read_results(path)["position"][0] == pytest.approx(1.2346)


def test_unequal_columns_rejected() -> None:
    with pytest.raises(ValueError, match="equal length"):
        write_results(io.StringIO(), [0.0, 1.0], [0.0], [0.0, 1.0], [0.0, 1.0])


def test_single_row_reads_as_arrays(tmp_path) -> None:
    path = tmp_path / "one.out"
    write_results(path, [0.5], [1.0], [2.0], [3.0])
    data = read_results(path)
    assert data["acceleration"].shape == (1,)
    assert data["acceleration"][0] == 3.0


def test_read_rejects_wrong_column_count(tmp_path) -> None:
    path = tmp_path / "bad.out"
    path.write_text("1.0 2.0 3.0\n", encoding="utf-8")
    with pytest.raises(ValueError, match="columns"):
        read_results(path)
