#!/usr/bin/env python3
"""
Built-in scene and spawn presets.

Spawned planets and stars are placed at a random angle and given the tangential
speed of a circular orbit around the current attractor mass. Comets get a
random tangential speed that is usually faster than circular, so they swing
past on open orbits. Randomness always comes from a caller-supplied
random.Random so tests can seed it.
"""
import math
import random
from typing import Dict, List, NamedTuple, Tuple

from .data_models import Body, BodyKind, make_body
from .physics import circular_orbit_velocity
from .vector_utils import vec_from_polar, vec_tangent


class BodyPreset(NamedTuple):
    mass: float
    radius: float
    label: str
    color: Tuple[int, int, int]


PLANET_PRESETS: Dict[str, BodyPreset] = {
    "EARTH": BodyPreset(2.0, 5.0, "Earth", (96, 165, 250)),
    "JUPITER": BodyPreset(8.0, 11.0, "Jupiter", (217, 119, 6)),
    "MARS": BodyPreset(1.0, 3.5, "Mars", (239, 68, 68)),
    "NEPTUNE": BodyPreset(4.0, 8.0, "Neptune", (99, 102, 241)),
}

STAR_PRESETS: Dict[str, BodyPreset] = {
    "SUN": BodyPreset(10.0, 12.0, "Sun-like", (251, 191, 36)),
    "SIRIUS": BodyPreset(20.0, 16.0, "Sirius (White)", (224, 242, 254)),
    "RIGEL": BodyPreset(40.0, 25.0, "Rigel (Blue Supergiant)", (96, 165, 250)),
    "BETELGEUSE": BodyPreset(30.0, 45.0, "Betelgeuse (Red Giant)", (239, 68, 68)),
    "UY_SCUTI": BodyPreset(60.0, 70.0, "UY Scuti (Hypergiant)", (185, 28, 28)),
    "STEPHENSON": BodyPreset(70.0, 80.0, "Stephenson 2-18", (127, 29, 29)),
}

COMET_MASS = 0.5
COMET_RADIUS = 3.0
COMET_COLOR = (165, 243, 252)
SLINGSHOT_COLOR = (134, 239, 172)
BOOST_FACTOR = 1.2


def initial_objects() -> List[Body]:
    """
    Default scene: a star on a near-circular orbit, a planet on an eccentric one
    and a comet on a hyperbolic fly-by.
    """
    return [
        make_body(BodyKind.STAR, (300.0, 0.0), (0.0, 15.0), 10.0, 12.0, (251, 191, 36)),
        make_body(BodyKind.PLANET, (-400.0, 100.0), (5.0, -12.0), 2.0, 5.0, (156, 163, 175)),
        make_body(BodyKind.COMET, (-600.0, -600.0), (25.0, 20.0), COMET_MASS, COMET_RADIUS, (96, 165, 250)),
    ]


def spawn_comet(rng: random.Random) -> Body:
    angle = rng.random() * math.pi * 2
    distance = 400 + rng.random() * 200
    speed = 15 + rng.random() * 10
    return make_body(BodyKind.COMET, vec_from_polar(distance, angle), vec_tangent(angle, speed),
                     COMET_MASS, COMET_RADIUS, COMET_COLOR)


def _spawn_on_circular_orbit(kind: BodyKind, preset: BodyPreset, attractor_mass: float,
                             distance: float, angle: float) -> Body:
    speed = circular_orbit_velocity(attractor_mass, distance)
    return make_body(kind, vec_from_polar(distance, angle), vec_tangent(angle, speed),
                     preset.mass, preset.radius, preset.color)


def spawn_planet(key: str, attractor_mass: float, rng: random.Random) -> Body:
    """
    Raises:
        KeyError: for an unknown preset key.
    """
    preset = PLANET_PRESETS[key]
    angle = rng.random() * math.pi * 2
    distance = 350 + rng.random() * 300
    return _spawn_on_circular_orbit(BodyKind.PLANET, preset, attractor_mass, distance, angle)


def spawn_star(key: str, attractor_mass: float, rng: random.Random) -> Body:
    """Stars go further out than planets to keep the inner region readable."""
    preset = STAR_PRESETS[key]
    angle = rng.random() * math.pi * 2
    distance = 500 + rng.random() * 400
    return _spawn_on_circular_orbit(BodyKind.STAR, preset, attractor_mass, distance, angle)


def spawn_slingshot() -> Body:
    """Fast comet aimed just off-center so it whips around the hole instead of falling in."""
    return make_body(BodyKind.COMET, (-900.0, 140.0), (22.0, -1.5), COMET_MASS, 4.0, SLINGSHOT_COLOR)


def boost(bodies: List[Body], factor: float = BOOST_FACTOR) -> int:
    """
    Prograde burn: scale every live body's velocity by `factor`.

    Burns are most effective near periapsis (the Oberth effect), which is what
    this is for. Returns the number of bodies boosted.
    """
    boosted = 0
    for b in bodies:
        if b.kind is BodyKind.DEBRIS:
            continue
        b.velocity = (b.velocity[0] * factor, b.velocity[1] * factor)
        boosted += 1
    return boosted
