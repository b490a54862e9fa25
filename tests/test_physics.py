"""Tests for the orbit integrator."""
import math

import pytest

from bhsim.constants import BASE_DT, MAX_TRAIL_LENGTH, RS_FACTOR
from bhsim.data_models import Attractor, BodyKind, make_body
from bhsim.physics import OrbitIntegrator, circular_orbit_velocity
from bhsim.vector_utils import vec_add, vec_len, vec_norm, vec_scale, vec_sub


def _body(pos, vel=(0.0, 0.0), kind=BodyKind.COMET, mass=1.0, radius=3.0):
    return make_body(kind, pos, vel, mass, radius)


class TestSingleStep:
    def test_closed_form_semi_implicit_euler(self):
        integrator = OrbitIntegrator(gravitational_constant=1000.0)
        star = _body((300.0, 0.0), (0.0, 15.0), kind=BodyKind.STAR, mass=10.0, radius=12.0)
        out = integrator.advance([star], Attractor(10.0), 0.016, 1.0)
        assert out == [star]
        # F = 1000 * 10 / 300^2
        assert star.velocity[0] == pytest.approx(-0.0017778, abs=1e-4)
        assert star.velocity[1] == pytest.approx(15.0, abs=1e-4)
        assert star.position[0] == pytest.approx(299.99997, abs=1e-4)
        assert star.position[1] == pytest.approx(0.24, abs=1e-4)

    def test_position_uses_updated_velocity(self):
        integrator = OrbitIntegrator()
        b = _body((400.0, 0.0))
        integrator.advance([b], Attractor(10.0), BASE_DT, 1.0)
        assert b.position[0] == pytest.approx(400.0 + b.velocity[0] * BASE_DT)

    def test_time_scale_multiplies_step(self):
        integrator = OrbitIntegrator()
        slow = _body((400.0, 0.0), (0.0, 5.0))
        fast = _body((400.0, 0.0), (0.0, 5.0))
        integrator.advance([slow], Attractor(10.0), BASE_DT, 1.0)
        integrator.advance([fast], Attractor(10.0), BASE_DT, 2.0)
        assert fast.velocity[0] == pytest.approx(2 * slow.velocity[0])

    def test_acceleration_points_at_origin(self):
        integrator = OrbitIntegrator()
        ax, ay = integrator.acceleration((-300.0, 400.0), 10.0)
        assert ax > 0 and ay < 0
        assert math.hypot(ax, ay) == pytest.approx(1000.0 * 10.0 / 500.0 ** 2)


class TestRadialInfall:
    def test_distance_decreases_monotonically_until_capture(self):
        integrator = OrbitIntegrator()
        attractor = Attractor(10.0)
        b = _body((500.0, 0.0))
        bodies = [b]
        last_r = 500.0
        for _ in range(20000):
            bodies = integrator.advance(bodies, attractor, BASE_DT, 1.0)
            if not bodies:
                break
            r = math.hypot(*b.position)
            assert r < last_r
            last_r = r
        assert bodies == []
        assert b.kind is BodyKind.DEBRIS

    def test_stays_on_axis(self):
        integrator = OrbitIntegrator()
        b = _body((0.0, -600.0))
        integrator.advance([b], Attractor(20.0), BASE_DT, 1.0)
        assert b.position[0] == 0.0
        assert b.velocity[1] > 0


class TestCapture:
    @pytest.mark.parametrize("vel", [(0.0, 0.0), (500.0, 0.0), (0.0, -1e4)])
    def test_inside_horizon_becomes_debris_regardless_of_velocity(self, vel):
        attractor = Attractor(10.0)
        b = _body((attractor.horizon_radius * 0.5, 0.0), vel, radius=5.0)
        out = OrbitIntegrator().advance([b], attractor, BASE_DT, 1.0)
        assert out == []
        assert b.kind is BodyKind.DEBRIS
        assert b.mass == 0
        assert b.radius == 0

    def test_captured_position_untouched_and_no_trail_point(self):
        b = _body((1.0, 1.0), (3.0, 3.0))
        OrbitIntegrator().advance([b], Attractor(10.0), BASE_DT, 1.0)
        assert b.position == (1.0, 1.0)
        assert len(b.trail) == 0

    def test_singularity_is_captured_without_nan(self):
        b = _body((0.0, 0.0), (1.0, 0.0))
        # tiny mass makes the horizon smaller than the body's distance
        out = OrbitIntegrator().advance([b], Attractor(1e-12), BASE_DT, 1.0)
        assert out == []
        assert b.is_debris

    def test_survivors_keep_order_and_identity(self):
        attractor = Attractor(10.0)
        a = _body((300.0, 0.0))
        doomed = _body((1.0, 0.0))
        c = _body((0.0, 400.0))
        integrator = OrbitIntegrator()
        out = integrator.advance([a, doomed, c], attractor, BASE_DT, 1.0)
        assert [b.id for b in out] == [a.id, c.id]
        assert integrator.last_captured == [doomed.id]

    def test_debris_is_never_integrated_again(self):
        b = _body((300.0, 0.0))
        b.capture()
        out = OrbitIntegrator().advance([b], Attractor(10.0), BASE_DT, 1.0)
        assert out == []
        assert b.position == (300.0, 0.0)

    def test_horizon_follows_live_mass_change(self):
        attractor = Attractor(10.0)
        b = _body((20.0, 0.0))
        assert attractor.horizon_radius == 10.0 * RS_FACTOR
        attractor.mass = 20.0
        out = OrbitIntegrator().advance([b], attractor, BASE_DT, 1.0)
        assert out == []


class TestTrail:
    def test_trail_records_pre_update_position(self):
        b = _body((300.0, 0.0), (0.0, 15.0))
        OrbitIntegrator().advance([b], Attractor(10.0), BASE_DT, 1.0)
        assert list(b.trail) == [(300.0, 0.0)]

    def test_trail_never_exceeds_capacity(self):
        integrator = OrbitIntegrator()
        b = _body((300.0, 0.0), (0.0, 5.7735))
        bodies = [b]
        for _ in range(MAX_TRAIL_LENGTH * 3):
            bodies = integrator.advance(bodies, Attractor(10.0), BASE_DT, 1.0)
            assert len(b.trail) <= MAX_TRAIL_LENGTH
        assert len(b.trail) == MAX_TRAIL_LENGTH

    def test_trail_is_fifo(self):
        integrator = OrbitIntegrator()
        b = _body((300.0, 0.0), (0.0, 5.7735))
        positions = []
        for _ in range(MAX_TRAIL_LENGTH + 5):
            positions.append(b.position)
            integrator.advance([b], Attractor(10.0), BASE_DT, 1.0)
        assert list(b.trail) == positions[-MAX_TRAIL_LENGTH:]

    def test_trails_not_shared_between_bodies(self):
        a = _body((300.0, 0.0))
        b = _body((0.0, 300.0))
        OrbitIntegrator().advance([a, b], Attractor(10.0), BASE_DT, 1.0)
        assert list(a.trail) == [(300.0, 0.0)]
        assert list(b.trail) == [(0.0, 300.0)]


class TestIndependence:
    def test_bad_body_does_not_corrupt_others(self):
        good = _body((300.0, 0.0), (0.0, 5.0))
        bad = _body((300.0, 0.0), (0.0, 5.0))
        bad.position = (float("nan"), 0.0)
        reference = _body((300.0, 0.0), (0.0, 5.0))
        integrator = OrbitIntegrator()
        integrator.advance([good, bad], Attractor(10.0), BASE_DT, 1.0)
        integrator.advance([reference], Attractor(10.0), BASE_DT, 1.0)
        assert good.position == reference.position
        assert good.velocity == reference.velocity


class TestOrbits:
    def test_circular_orbit_velocity(self):
        assert circular_orbit_velocity(10.0, 400.0) == pytest.approx(5.0)
        assert circular_orbit_velocity(10.0, 0.0) == 0.0

    def test_circular_orbit_keeps_radius(self):
        r0 = 300.0
        v = circular_orbit_velocity(10.0, r0)
        b = _body((r0, 0.0), (0.0, v))
        integrator = OrbitIntegrator()
        for _ in range(3000):
            integrator.advance([b], Attractor(10.0), BASE_DT, 1.0)
        assert math.hypot(*b.position) == pytest.approx(r0, rel=0.01)


class TestVectorHelpers:
    def test_arithmetic(self):
        assert vec_add((1.0, 2.0), (3.0, -4.0)) == (4.0, -2.0)
        assert vec_sub((1.0, 2.0), (3.0, -4.0)) == (-2.0, 6.0)
        assert vec_scale((1.5, -2.0), 2.0) == (3.0, -4.0)
        assert vec_len((3.0, 4.0)) == 5.0

    def test_norm(self):
        assert vec_norm((0.0, -5.0)) == (0.0, -1.0)
        assert vec_norm((0.0, 0.0)) == (0.0, 0.0)
