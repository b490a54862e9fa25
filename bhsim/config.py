#!/usr/bin/env python3
"""
Runtime simulation settings.

SimulationConfig is owned by SimulationController and only mutated under its
lock. The integrator and the lens read three fields: time_scale, is_paused and
lensing_enabled. The rest are host settings for the viewport and controls.
"""
import math
from dataclasses import dataclass

from .constants import (
    DEFAULT_BLACK_HOLE_MASS,
    DEFAULT_GRID_DENSITY,
    DEFAULT_TIME_SCALE,
    MIN_BLACK_HOLE_MASS,
    MAX_BLACK_HOLE_MASS,
    MIN_TIME_SCALE,
    MAX_TIME_SCALE,
)
from .vector_utils import clamp


def _finite(name: str, value) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


@dataclass
class SimulationConfig:
    black_hole_mass: float = DEFAULT_BLACK_HOLE_MASS
    time_scale: float = DEFAULT_TIME_SCALE
    is_paused: bool = False
    lensing_enabled: bool = True
    show_grid: bool = True
    grid_density: int = DEFAULT_GRID_DENSITY

    def set_time_scale(self, s: float) -> None:
        s = _finite("time_scale", s)
        if s <= 0:
            raise ValueError(f"time_scale must be positive, got {s}")
        self.time_scale = clamp(s, MIN_TIME_SCALE, MAX_TIME_SCALE)

    def set_black_hole_mass(self, m: float) -> None:
        m = _finite("black_hole_mass", m)
        if m <= 0:
            raise ValueError(f"black_hole_mass must be positive, got {m}")
        self.black_hole_mass = clamp(m, MIN_BLACK_HOLE_MASS, MAX_BLACK_HOLE_MASS)

    def set_grid_density(self, n: int) -> None:
        self.grid_density = max(10, int(n))

    def reset_dynamics(self) -> None:
        """Restore mass and time scale; display toggles are left alone."""
        self.black_hole_mass = DEFAULT_BLACK_HOLE_MASS
        self.time_scale = DEFAULT_TIME_SCALE
