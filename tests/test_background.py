"""Tests for the decorative background field."""
import random

import pytest

from bhsim.background import (
    BackgroundBuilder,
    BackgroundPoint,
    WORLD_SIZE,
    generate_background,
    magnification_effect,
    point_alpha,
    point_radius,
    twinkle_offset,
)
from bhsim.lensing import project


def _star(**kw):
    args = dict(position=(100.0, 0.0), size=1.0, base_alpha=0.5, twinkle_phase=0.0,
                twinkle_speed=0.5, color=(255, 255, 255))
    args.update(kw)
    return BackgroundPoint(**args)


class TestGeneration:
    def test_seeded_and_complete(self):
        a = generate_background(random.Random(1))
        b = generate_background(random.Random(1))
        assert a == b
        # 190 nebula puffs, 3 galaxies of 650, 450 cluster stars, 2500 field stars
        assert len(a) == 190 + 3 * 650 + 450 + 2500
        assert sum(p.is_nebula for p in a) == 190

    def test_field_inside_world(self):
        builder = BackgroundBuilder(random.Random(5))
        builder.add_field(count=200)
        for p in builder.points:
            assert abs(p.position[0]) <= WORLD_SIZE
            assert abs(p.position[1]) <= WORLD_SIZE

    def test_nebula_within_radius(self):
        builder = BackgroundBuilder(random.Random(5))
        builder.add_nebula(100.0, -50.0, 300.0, (10, 20, 30), 40)
        assert len(builder.points) == 40
        for p in builder.points:
            dx, dy = p.position[0] - 100.0, p.position[1] + 50.0
            assert dx * dx + dy * dy <= 300.0 ** 2 + 1e-6


class TestBrightness:
    def test_nebula_magnification_damped(self):
        assert magnification_effect(_star(is_nebula=True), 8.0) == pytest.approx(8.0 ** 0.3)
        assert magnification_effect(_star(), 8.0) == 8.0

    def test_alpha_bounds(self):
        star = _star(base_alpha=0.9)
        assert point_alpha(star, 8.0, 0.5) == 1.0
        assert point_alpha(star, 0.0, -1.0) == 0.01

    def test_magnified_image_is_larger(self):
        star = _star()
        assert point_radius(star, 4.0, 0.0, 1.0) > point_radius(star, 1.0, 0.0, 1.0)
        assert point_radius(star, 1e6, 0.0, 5.0) == 6.0

    def test_twinkle_bounded(self):
        star = _star()
        result = project(star.position, 10.0, True)
        for t in (0.0, 0.7, 12.3):
            off = twinkle_offset(star, result.primary.position, result.primary.magnification, t, 15.0)
            # intensity <= 0.15 + 4 * 0.15, noise amplitude <= 1.4
            assert abs(off) <= 1.4 * 0.75 + 1e-9
