#!/usr/bin/env python3
"""
Decorative background field: nebulae, spiral galaxies, star clusters and a
uniform star field spread over a large square around the black hole.

The points never feed back into the physics. The renderer pushes each one
through the lens like any other point and uses the resulting magnification to
brighten and enlarge it; point_alpha and point_radius hold that mapping.
"""
import math
import random
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .vector_utils import Vec2

WORLD_SIZE = 12000.0
FIELD_STAR_COUNT = 2500

FIELD_COLORS = (
    (255, 255, 255),
    (200, 220, 255),
    (255, 240, 200),
    (255, 200, 200),
)


@dataclass
class BackgroundPoint:
    position: Vec2
    size: float
    base_alpha: float
    twinkle_phase: float
    twinkle_speed: float
    color: Tuple[int, int, int]
    is_nebula: bool = False


class BackgroundBuilder:
    """Accumulates points; each add_* method appends one structure."""

    def __init__(self, rng: random.Random):
        self.rng = rng
        self.points: List[BackgroundPoint] = []

    def _uniform(self, lo: float, hi: float) -> float:
        return self.rng.random() * (hi - lo) + lo

    def add_point(self, x: float, y: float, size: float, alpha: float,
                  color: Tuple[int, int, int], speed_mod: float = 1.0, is_nebula: bool = False) -> None:
        self.points.append(BackgroundPoint(
            position=(x, y),
            size=size,
            base_alpha=alpha,
            twinkle_phase=self.rng.random() * math.pi * 2,
            twinkle_speed=(0.2 + self.rng.random() * 0.8) * speed_mod,
            color=color,
            is_nebula=is_nebula,
        ))

    def add_nebula(self, cx: float, cy: float, radius: float,
                   color: Tuple[int, int, int], particles: int) -> None:
        """Large faint puffs, uniform over a disc."""
        for _ in range(particles):
            r = math.sqrt(self.rng.random()) * radius
            theta = self.rng.random() * math.pi * 2
            self.add_point(cx + r * math.cos(theta), cy + r * math.sin(theta),
                           self._uniform(40, 100), self._uniform(0.02, 0.05), color,
                           speed_mod=0.1, is_nebula=True)

    def add_galaxy(self, cx: float, cy: float, radius: float, color: Tuple[int, int, int]) -> None:
        arm_count = int(self._uniform(2, 4))
        twist = self._uniform(3, 6)

        # core
        for _ in range(150):
            r = self.rng.random() * radius * 0.15
            theta = self.rng.random() * math.pi * 2
            self.add_point(cx + r * math.cos(theta), cy + r * math.sin(theta),
                           self._uniform(1, 2.5), self._uniform(0.5, 0.9), (255, 240, 200))

        # arms
        for i in range(500):
            r = (i / 500) * radius
            arm_offset = (self.rng.randrange(arm_count) / arm_count) * math.pi * 2
            angle = arm_offset + r * twist / radius
            x = cx + r * math.cos(angle) + (self.rng.random() - 0.5) * radius * 0.1
            y = cy + r * math.sin(angle) + (self.rng.random() - 0.5) * radius * 0.1
            star_color = color if self.rng.random() > 0.3 else (255, 255, 255)
            self.add_point(x, y, self._uniform(0.8, 2.0), self._uniform(0.3, 0.8), star_color)

    def add_cluster(self, cx: float, cy: float, count: int, spread: float,
                    color: Tuple[int, int, int]) -> None:
        """Roughly Gaussian cluster (Rayleigh-distributed radius)."""
        for _ in range(count):
            # 1 - random() lies in (0, 1], so the log is always defined
            r = spread * math.sqrt(-2 * math.log(1.0 - self.rng.random()))
            theta = self.rng.random() * math.pi * 2
            self.add_point(cx + r * math.cos(theta), cy + r * math.sin(theta),
                           self._uniform(0.5, 2.0), self._uniform(0.4, 0.9), color)

    def add_field(self, count: int = FIELD_STAR_COUNT, world_size: float = WORLD_SIZE,
                  colors: Sequence[Tuple[int, int, int]] = FIELD_COLORS) -> None:
        for _ in range(count):
            self.points.append(BackgroundPoint(
                position=((self.rng.random() - 0.5) * 2 * world_size,
                          (self.rng.random() - 0.5) * 2 * world_size),
                size=self.rng.random() * 1.5 + 0.5,
                base_alpha=self.rng.random() * 0.6 + 0.1,
                twinkle_phase=self.rng.random() * math.pi * 2,
                twinkle_speed=0.2 + self.rng.random() * 0.8,
                color=self.rng.choice(colors),
            ))


def generate_background(rng: random.Random) -> List[BackgroundPoint]:
    """The default sky: three nebulae, three galaxies, four clusters and the field."""
    builder = BackgroundBuilder(rng)

    builder.add_nebula(-3000, -2000, 1500, (50, 0, 80), 60)
    builder.add_nebula(4000, 3000, 2000, (0, 40, 60), 80)
    builder.add_nebula(-2000, 5000, 1200, (80, 20, 20), 50)

    builder.add_galaxy(-3500, 2500, 1500, (150, 200, 255))
    builder.add_galaxy(4500, -1500, 1200, (200, 220, 255))
    builder.add_galaxy(2000, 6000, 800, (255, 200, 200))

    builder.add_cluster(-1500, -4000, 100, 300, (100, 200, 255))
    builder.add_cluster(3000, 1000, 150, 200, (255, 150, 50))
    builder.add_cluster(-5000, 1000, 80, 250, (255, 255, 255))
    builder.add_cluster(1000, -5000, 120, 200, (200, 255, 200))

    builder.add_field()
    return builder.points


def magnification_effect(point: BackgroundPoint, magnification: float) -> float:
    # Nebulae brighten less so magnified puffs don't wash out the screen.
    if point.is_nebula:
        return max(magnification, 0.0) ** 0.3
    return magnification


def twinkle_offset(point: BackgroundPoint, image_pos: Vec2, magnification: float,
                   time_s: float, horizon_radius: float) -> float:
    """
    Alpha offset from twinkling. Stars seen close to the hole and strongly
    magnified stars twinkle faster and harder; nebulae only pulse slowly.
    """
    dist_sq = image_pos[0] * image_pos[0] + image_pos[1] * image_pos[1]
    proximity = min(4.0, (horizon_radius * horizon_radius * 500) / (dist_sq + 100))
    brightness = math.sqrt(max(magnification, 0.0))
    speed = point.twinkle_speed * (1 + proximity + brightness * 0.5)
    intensity = 0.05 if point.is_nebula else 0.15 + proximity * 0.15
    noise = (math.sin(time_s * speed + point.twinkle_phase)
             + math.sin(time_s * speed * 1.7 + point.twinkle_phase) * 0.4)
    return noise * intensity


def point_alpha(point: BackgroundPoint, magnification: float, offset: float) -> float:
    """Final opacity in [0.01, 1]."""
    lensed = min(1.0, point.base_alpha * magnification_effect(point, magnification))
    return max(0.01, min(1.0, lensed + offset))


def point_radius(point: BackgroundPoint, magnification: float, offset: float, zoom: float) -> float:
    """On-screen radius in pixels."""
    max_r = 300.0 if point.is_nebula else 6.0
    pulse = 1 + offset * 0.3
    r = min(point.size * zoom * math.sqrt(magnification_effect(point, magnification)) * pulse, max_r)
    return max(0.2, r)
