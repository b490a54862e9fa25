#!/usr/bin/env python3
"""
Core Physics Engine for the Black Hole Simulator

Responsibilities
- Accelerate every moving body toward the attractor at the origin (inverse-square law).
- Advance body states with a semi-implicit (symplectic) Euler step.
- Capture bodies that cross the horizon and drop them from the active set.
- Provide small helpers for common orbital computations (circular orbit speed).

Units and conventions
- World positions are in simulation units, attractor at (0, 0).
- G is the simulation constant from bhsim.constants, shared with the lens.
- Time steps are nominal frame intervals (BASE_DT) multiplied by the time scale.

Numerical notes
- Bodies do not attract each other; only the attractor's field is applied, so a
  step is O(N).
- Semi-implicit Euler updates velocity first and uses the new velocity for the
  position. It is symplectic, so bound orbits do not drift outward the way
  explicit Euler orbits do.
- A body at (or numerically at) the origin is treated as captured rather than
  dividing by a near-zero distance.

Threading
- Pure compute on the frame thread. The controller holds its lock for the call.
"""

import logging
import math
from typing import List, Optional

from .constants import G, SINGULARITY_EPSILON
from .data_models import Attractor, Body
from .vector_utils import vec_add, vec_len, vec_scale

logger = logging.getLogger(__name__)


class OrbitIntegrator:
    """
    Single-attractor integrator with horizon capture.

    The acceleration of a body at distance r from the origin is:
    a = -G * M / r^2 * r_hat

    Where M is the attractor mass and r_hat the unit vector from the origin
    to the body.
    """

    def __init__(self, gravitational_constant: float = G):
        """
        Args:
            gravitational_constant: G in simulation units
        """
        self.g = float(gravitational_constant)
        self.last_captured: List[str] = []

    def acceleration(self, position, attractor_mass: float, r: Optional[float] = None):
        """
        Acceleration at `position` due to the attractor.

        Args:
            position: (x, y) of the body
            attractor_mass: Mass at the origin
            r: Precomputed distance from the origin, if available

        Returns:
            (ax, ay) pointing toward the origin.
        """
        if r is None:
            r = vec_len(position)
        force_magnitude = self.g * attractor_mass / (r * r)
        return (-force_magnitude * (position[0] / r), -force_magnitude * (position[1] / r))

    def advance(self, bodies: List[Body], attractor: Attractor,
                dt_base: float, time_scale: float) -> List[Body]:
        """
        Advance every body one step and return the surviving active set.

        Workflow per body:
        1) dt = dt_base * time_scale
        2) r = |position|
        3) inside the horizon (or at the singularity): capture as debris, skip the rest
        4) a = -G*M/r^2 * r_hat
        5) v' = v + a*dt; p' = p + v'*dt
        6) append the pre-update position to the trail

        Bodies are updated in place. Captured bodies keep their debris state but
        are not part of the returned list, so they are never integrated again.

        Args:
            bodies: Active bodies (modified in place).
            attractor: The black hole at the origin.
            dt_base: Nominal frame interval.
            time_scale: Multiplier on elapsed time (> 0).

        Returns:
            New list holding the bodies that still have mass.
        """
        dt = dt_base * time_scale
        horizon = attractor.horizon_radius
        captured: List[str] = []

        for body in bodies:
            if body.mass == 0:
                continue

            r = vec_len(body.position)

            if r < horizon or r < SINGULARITY_EPSILON:
                body.capture()
                captured.append(body.id)
                continue

            accel = self.acceleration(body.position, attractor.mass, r)
            velocity = vec_add(body.velocity, vec_scale(accel, dt))

            body.add_trail_point(body.position)
            body.velocity = velocity
            body.position = vec_add(body.position, vec_scale(velocity, dt))

        self.last_captured = captured
        for body_id in captured:
            logger.info("Body %s crossed the horizon (r_s=%.2f)", body_id, horizon)

        survivors = [b for b in bodies if b.mass > 0]
        logger.debug("Advanced %d bodies by dt=%.4f, %d remain", len(bodies), dt, len(survivors))
        return survivors


def circular_orbit_velocity(central_mass: float, orbital_radius: float, g: float = G) -> float:
    """
    Calculate the velocity needed for a circular orbit.

    For a circular orbit, the gravitational force provides exactly the
    centripetal force needed. This gives us:
    G * M / r = v^2 / r
    Therefore: v = sqrt(G * M / r)

    Args:
        central_mass: Mass of the attractor
        orbital_radius: Orbital radius

    Returns:
        Orbital speed for a circular orbit
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(g * central_mass / orbital_radius)
