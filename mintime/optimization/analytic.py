"""Closed-form reference for the frictionless (R = 0) car.

Without friction the car is a double integrator and the minimum-time
control is bang-bang: full acceleration ``aU`` up to the switch time, then
full braking ``aL`` until it stops at ``L``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class BangBangSolution:
    """Switch time, final time and peak speed of the bang-bang profile."""

    accel_max: float
    accel_min: float
    switch_time: float
    final_time: float
    peak_velocity: float

    def profile(self, time: np.ndarray) -> dict[str, np.ndarray]:
        """Sample position, velocity and acceleration at ``time``."""
        t = np.clip(np.asarray(time, dtype=float), 0.0, self.final_time)
        t1 = self.switch_time
        accelerating = t <= t1
        dt = t - t1
        x1 = 0.5 * self.accel_max * t1**2

        position = np.where(
            accelerating,
            0.5 * self.accel_max * t**2,
            x1 + self.peak_velocity * dt + 0.5 * self.accel_min * dt**2,
        )
        velocity = np.where(
            accelerating,
            self.accel_max * t,
            self.peak_velocity + self.accel_min * dt,
        )
        acceleration = np.where(accelerating, self.accel_max, self.accel_min)
        return {
            "time": t,
            "position": position,
            "velocity": velocity,
            "acceleration": acceleration,
        }


def double_integrator_min_time(
    distance: float, accel_max: float, accel_min: float,
) -> BangBangSolution:
    """
    Minimum-time rest-to-rest transfer of a frictionless double integrator.

    Args:
        distance: Distance L to cover (> 0)
        accel_max: Acceleration bound aU (> 0)
        accel_min: Braking bound aL (< 0)

    Returns:
        BangBangSolution with ``final_time = sqrt(2 L (1/aU + 1/|aL|))``
    """
    if distance <= 0:
        raise ValueError(f"distance must be positive, got {distance}")
    if accel_max <= 0 or accel_min >= 0:
        raise ValueError(
            f"rest-to-rest transfer needs aL < 0 < aU, got aL={accel_min}, aU={accel_max}",
        )
    brake = -accel_min
    peak_velocity = math.sqrt(2.0 * distance / (1.0 / accel_max + 1.0 / brake))
    return BangBangSolution(
        accel_max=accel_max,
        accel_min=accel_min,
        switch_time=peak_velocity / accel_max,
        final_time=peak_velocity / accel_max + peak_velocity / brake,
        peak_velocity=peak_velocity,
    )
