#!/usr/bin/env python3
"""
Simulation controller: the single owner of shared simulation state.

The renderer thread steps and draws; the Dear PyGui thread edits settings and
spawns bodies. Every access goes through this class and is guarded by a
re-entrant lock, and renders read a detached snapshot taken under that lock.
"""
import logging
import random
import threading
from dataclasses import replace
from typing import List, NamedTuple, Optional

from .camera import ViewportState
from .config import SimulationConfig
from .constants import BASE_DT
from .data_models import Attractor, Body
from .physics import OrbitIntegrator
from .presets import (
    boost,
    initial_objects,
    spawn_comet,
    spawn_planet,
    spawn_slingshot,
    spawn_star,
)
from .presets_loader import Scene

logger = logging.getLogger(__name__)

SLINGSHOT_RESET_ZOOM = 1.5


class SimulationSnapshot(NamedTuple):
    bodies: List[Body]
    black_hole_mass: float
    lensing_enabled: bool
    show_grid: bool
    grid_density: int
    time_scale: float
    is_paused: bool
    viewport: ViewportState

    @property
    def attractor(self) -> Attractor:
        return Attractor(self.black_hole_mass)


class SimulationController:
    """
    Shared state between UI thread (Dear PyGui) and rendering thread (pygame).
    Includes thread-safe operations guarded by a lock.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 viewport: Optional[ViewportState] = None,
                 rng: Optional[random.Random] = None):
        self.lock = threading.RLock()
        self.config = config if config is not None else SimulationConfig()
        self.viewport = viewport if viewport is not None else ViewportState()
        self.bodies: List[Body] = []
        self.integrator = OrbitIntegrator()
        self.rng = rng if rng is not None else random.Random()
        self.running = True  # app running
        self.last_event_msg: Optional[str] = None

    @property
    def attractor(self) -> Attractor:
        return Attractor(self.config.black_hole_mass)

    # -----------------------
    # Frame operations
    # -----------------------

    def is_paused(self) -> bool:
        with self.lock:
            return self.config.is_paused

    def step(self) -> None:
        """One nominal integration step at the current time scale."""
        with self.lock:
            self.bodies = self.integrator.advance(
                self.bodies, self.attractor, BASE_DT, self.config.time_scale)
            captured = self.integrator.last_captured
            if captured:
                self.last_event_msg = f"Captured by the horizon: {', '.join(captured)}"

    def snapshot(self) -> SimulationSnapshot:
        with self.lock:
            return SimulationSnapshot(
                bodies=[b.snapshot() for b in self.bodies],
                black_hole_mass=self.config.black_hole_mass,
                lensing_enabled=self.config.lensing_enabled,
                show_grid=self.config.show_grid,
                grid_density=self.config.grid_density,
                time_scale=self.config.time_scale,
                is_paused=self.config.is_paused,
                viewport=replace(self.viewport),
            )

    # -----------------------
    # Settings
    # -----------------------

    def set_time_scale(self, s: float) -> None:
        with self.lock:
            self.config.set_time_scale(s)

    def set_black_hole_mass(self, m: float) -> None:
        with self.lock:
            self.config.set_black_hole_mass(m)

    def set_paused(self, paused: bool) -> None:
        with self.lock:
            self.config.is_paused = bool(paused)

    def toggle_pause(self) -> bool:
        with self.lock:
            self.config.is_paused = not self.config.is_paused
            return self.config.is_paused

    def set_lensing(self, enabled: bool) -> None:
        with self.lock:
            self.config.lensing_enabled = bool(enabled)

    def set_show_grid(self, show: bool) -> None:
        with self.lock:
            self.config.show_grid = bool(show)

    def set_grid_density(self, n: int) -> None:
        with self.lock:
            self.config.set_grid_density(n)

    # -----------------------
    # Bodies
    # -----------------------

    def add_body(self, body: Body) -> Body:
        with self.lock:
            self.bodies.append(body)
        logger.info("Spawned %s at (%.1f, %.1f)", body.id, body.position[0], body.position[1])
        return body

    def add_comet(self) -> Body:
        with self.lock:
            return self.add_body(spawn_comet(self.rng))

    def add_planet(self, key: str) -> Body:
        with self.lock:
            return self.add_body(spawn_planet(key, self.config.black_hole_mass, self.rng))

    def add_star(self, key: str) -> Body:
        with self.lock:
            return self.add_body(spawn_star(key, self.config.black_hole_mass, self.rng))

    def launch_slingshot(self) -> Body:
        with self.lock:
            body = self.add_body(spawn_slingshot())
            # bring the whole trajectory into view
            if self.viewport.zoom > SLINGSHOT_RESET_ZOOM:
                self.viewport.reset()
            return body

    def boost(self) -> int:
        with self.lock:
            n = boost(self.bodies)
        logger.info("Prograde boost applied to %d bodies", n)
        return n

    def replace_bodies(self, new_bodies: List[Body]) -> None:
        with self.lock:
            self.bodies = list(new_bodies)

    def reset(self) -> None:
        with self.lock:
            self.replace_bodies(initial_objects())
            self.viewport.reset()
            self.config.reset_dynamics()
        logger.info("Simulation reset")

    def apply_scene(self, scene: Scene) -> None:
        """
        Swap in a scene's bodies and settings as one change.

        Raises:
            ValueError: for an invalid time scale or mass; nothing is applied.
        """
        with self.lock:
            staged = replace(self.config)
            if scene.time_scale is not None:
                staged.set_time_scale(scene.time_scale)
            if scene.black_hole_mass is not None:
                staged.set_black_hole_mass(scene.black_hole_mass)
            self.config.time_scale = staged.time_scale
            self.config.black_hole_mass = staged.black_hole_mass
            self.replace_bodies(scene.bodies)
            self.last_event_msg = f"Loaded scene: {scene.name}"
        logger.info("Applied scene %r", scene.name)
