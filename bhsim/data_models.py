#!/usr/bin/env python3
"""
Data models for the Black Hole Simulator.

This module defines the Body dataclass shared between physics, rendering, and UI,
and the Attractor that sits at the world origin.

Units and usage
- position and velocity are in world units centered on the attractor.
- radius is visual only; mass is a dimensionless simulation mass.
- trail stores past positions (oldest first) to render motion paths; it is a bounded
  deque mutated by the integrator on the frame thread.
- Access to Body instances is coordinated by SimulationController using a lock.
"""
import enum
import itertools
import math
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Deque, Tuple

from .constants import MAX_TRAIL_LENGTH, RS_FACTOR
from .vector_utils import Vec2, vec_is_finite

_id_counter = itertools.count(1)


class BodyKind(enum.Enum):
    STAR = "STAR"
    PLANET = "PLANET"
    COMET = "COMET"
    DEBRIS = "DEBRIS"  # crossed the horizon; zero mass and radius


def next_body_id(kind: BodyKind) -> str:
    """Return a process-unique id such as ``comet-7``; ids are never reused."""
    return f"{kind.value.lower()}-{next(_id_counter)}"


def new_trail() -> Deque[Vec2]:
    return deque(maxlen=MAX_TRAIL_LENGTH)


@dataclass
class Body:
    """
    A moving point mass orbiting the attractor.

    Fields:
    - id: Stable identity assigned at creation
    - kind: Star, Planet, Comet, or Debris once captured
    - position: 2D position (x, y) relative to the attractor
    - velocity: 2D velocity (vx, vy)
    - mass: Non-negative; zero marks the body for removal
    - radius: Visual radius in world units
    - color: RGB tuple used for rendering
    - trail: Bounded deque of past positions for drawing motion trails
    """
    id: str
    kind: BodyKind
    position: Vec2
    velocity: Vec2
    mass: float
    radius: float
    color: Tuple[int, int, int] = (200, 200, 255)
    trail: Deque[Vec2] = field(default_factory=new_trail)

    @property
    def is_debris(self) -> bool:
        return self.mass == 0

    def add_trail_point(self, point: Vec2) -> None:
        """Append a position to the trail; the deque drops the oldest when full."""
        self.trail.append(point)

    def capture(self) -> None:
        """Turn the body into debris after it crosses the horizon."""
        self.kind = BodyKind.DEBRIS
        self.mass = 0.0
        self.radius = 0.0

    def snapshot(self) -> "Body":
        """Detached copy for a render pass; the trail is copied, not shared."""
        return replace(self, trail=deque(self.trail, maxlen=self.trail.maxlen))


@dataclass
class Attractor:
    """The fixed black hole at the origin. Only its mass is tunable."""
    mass: float

    @property
    def horizon_radius(self) -> float:
        # Derived on every access so a live mass change is never stale.
        return self.mass * RS_FACTOR


def make_body(kind: BodyKind, position: Vec2, velocity: Vec2, mass: float, radius: float,
              color: Tuple[int, int, int] = (200, 200, 255)) -> Body:
    """
    Construct a body for the active set, validating the spawn parameters.

    Raises:
        ValueError: on non-finite vectors, negative or non-finite mass/radius,
            or an attempt to spawn debris directly.
    """
    if kind is BodyKind.DEBRIS:
        raise ValueError("debris cannot be spawned")
    position = (float(position[0]), float(position[1]))
    velocity = (float(velocity[0]), float(velocity[1]))
    if not vec_is_finite(position) or not vec_is_finite(velocity):
        raise ValueError(f"non-finite spawn state: pos={position} vel={velocity}")
    mass = float(mass)
    radius = float(radius)
    if not math.isfinite(mass) or mass <= 0:
        raise ValueError(f"mass must be positive, got {mass}")
    if not math.isfinite(radius) or radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    return Body(
        id=next_body_id(kind),
        kind=kind,
        position=position,
        velocity=velocity,
        mass=mass,
        radius=radius,
        color=color,
    )
