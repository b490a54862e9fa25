#!/usr/bin/env python3
"""
Point-mass gravitational lens for the Black Hole Simulator.

Maps a true position to the apparent positions a distant observer sees through
the attractor, using the thin point-lens equation rather than ray tracing:

    theta_+- = (beta +- sqrt(beta^2 + 4 * R_E^2)) / 2

where beta is the true distance from the lens axis and R_E = sqrt(4 G M) the
Einstein radius (same G as the integrator). Every source produces an outer,
brightened primary image and an inner, inverted secondary image on the
opposite side of the lens.

Magnification
- The combined point-lens magnification is A = (u^2 + 2) / (2 u sqrt(u^2 + 4))
  with u = beta / R_E.
- It is split into A + 0.5 for the primary and A - 0.5 for the secondary, and
  both are capped at MAGNIFICATION_CAP. These are tuned visual constants kept
  for parity with reference renderings, not first-principles optics.

This runs once per drawn primitive per frame (stars, trail points, grid
vertices) so it stays closed-form with no allocation beyond the result tuples.
"""
import math
from typing import List, NamedTuple, Optional

from .constants import (
    G,
    LENS_EPSILON,
    MAGNIFICATION_CAP,
    SECONDARY_MIN_MAGNIFICATION,
)
from .vector_utils import Vec2, vec_norm, vec_scale


class LensImage(NamedTuple):
    position: Vec2
    magnification: float


class LensResult(NamedTuple):
    primary: LensImage
    secondary: Optional[LensImage] = None


def einstein_radius(attractor_mass: float, g: float = G) -> float:
    return math.sqrt(4.0 * g * attractor_mass)


def project(point: Vec2, attractor_mass: float, lensing_enabled: bool) -> LensResult:
    """
    Compute the lensed images of `point`.

    Args:
        point: True (x, y) position relative to the attractor.
        attractor_mass: Mass of the lens.
        lensing_enabled: When False the point is returned untouched.

    A non-positive attractor mass has a zero Einstein radius and also returns
    the point untouched.

    Returns:
        LensResult with the primary image and, for off-axis sources, the
        secondary image. A source on the axis maps onto the Einstein ring.
    """
    if not lensing_enabled:
        return LensResult(LensImage(point, 1.0))

    if attractor_mass <= 0:
        # a massless lens bends nothing
        return LensResult(LensImage(point, 1.0))

    re = einstein_radius(attractor_mass)
    re_sq = re * re

    x, y = point
    r_sq = x * x + y * y
    r = math.sqrt(r_sq)

    if r < LENS_EPSILON:
        # Source directly behind the lens: place it on the Einstein ring.
        direction = vec_norm(point) if r > 0 else (1.0, 0.0)
        return LensResult(LensImage(vec_scale(direction, re), 1.0))

    u = r / re
    u_sq = u * u
    root = math.sqrt(u_sq + 4.0)

    total = (u_sq + 2.0) / (2.0 * u * root)
    mag1 = min(total + 0.5, MAGNIFICATION_CAP)
    mag2 = min(total - 0.5, MAGNIFICATION_CAP)

    spread = math.sqrt(r_sq + 4.0 * re_sq)
    scale1 = (r + spread) / 2.0 / r
    # theta_- is negative, which flips the secondary through the lens center
    scale2 = (r - spread) / 2.0 / r

    return LensResult(
        LensImage(vec_scale(point, scale1), mag1),
        LensImage(vec_scale(point, scale2), mag2),
    )


def lensed_position(point: Vec2, attractor_mass: float, lensing_enabled: bool) -> Vec2:
    """Primary image position only; used for bodies, trails and grid vertices."""
    return project(point, attractor_mass, lensing_enabled).primary.position


def visible_images(result: LensResult,
                   min_magnification: float = SECONDARY_MIN_MAGNIFICATION) -> List[LensImage]:
    """Images worth drawing: the primary, plus the secondary unless it is negligible."""
    images = [result.primary]
    if result.secondary is not None and result.secondary.magnification > min_magnification:
        images.append(result.secondary)
    return images
