#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

The map is affine: screen = center + (world + pan_offset) * zoom. The transforms
never clamp; every mutator of ViewportState keeps zoom inside [MIN_ZOOM, MAX_ZOOM].
"""
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    DEFAULT_ZOOM,
    MIN_ZOOM,
    MAX_ZOOM,
    VIEW_WIDTH,
    VIEW_HEIGHT,
    WHEEL_ZOOM_SENSITIVITY,
)
from .vector_utils import Vec2, clamp


@dataclass
class ViewportState:
    pan_offset: Vec2 = (0.0, 0.0)
    zoom: float = DEFAULT_ZOOM

    def __post_init__(self):
        self.zoom = clamp(float(self.zoom), MIN_ZOOM, MAX_ZOOM)

    def set_zoom(self, zoom: float) -> None:
        self.zoom = clamp(float(zoom), MIN_ZOOM, MAX_ZOOM)

    def zoom_by_wheel(self, wheel_delta: float) -> None:
        """Wheel up (negative delta in browser convention) zooms in."""
        self.set_zoom(self.zoom - wheel_delta * WHEEL_ZOOM_SENSITIVITY)

    def pan_pixels(self, dx_pixels: float, dy_pixels: float) -> None:
        # Screen drag distance is divided by zoom so the world follows the cursor.
        self.pan_offset = (self.pan_offset[0] + dx_pixels / self.zoom,
                           self.pan_offset[1] + dy_pixels / self.zoom)

    def reset(self) -> None:
        self.pan_offset = (0.0, 0.0)
        self.zoom = DEFAULT_ZOOM


def to_screen(world: Vec2, viewport: ViewportState, screen_center: Vec2) -> Vec2:
    zoom = viewport.zoom
    return (screen_center[0] + (world[0] + viewport.pan_offset[0]) * zoom,
            screen_center[1] + (world[1] + viewport.pan_offset[1]) * zoom)


def to_world(screen: Vec2, viewport: ViewportState, screen_center: Vec2) -> Vec2:
    zoom = viewport.zoom
    return ((screen[0] - screen_center[0]) / zoom - viewport.pan_offset[0],
            (screen[1] - screen_center[1]) / zoom - viewport.pan_offset[1])


class Camera2D:
    """
    Viewport state plus the window size, so callers need not track the center.
    """

    def __init__(self, viewport: ViewportState = None):
        self.viewport = viewport if viewport is not None else ViewportState()
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    @property
    def screen_center(self) -> Vec2:
        return (self.viewport_size[0] / 2, self.viewport_size[1] / 2)

    @property
    def zoom(self) -> float:
        return self.viewport.zoom

    def world_to_screen(self, pos: Vec2) -> Vec2:
        return to_screen(pos, self.viewport, self.screen_center)

    def screen_to_world(self, screen: Tuple[float, float]) -> Vec2:
        return to_world(screen, self.viewport, self.screen_center)

    def visible_world_bounds(self, margin: float = 0.0) -> Tuple[float, float, float, float]:
        """(min_x, max_x, min_y, max_y) of the world region on screen, padded by `margin`."""
        w, h = self.viewport_size
        min_x, min_y = self.screen_to_world((0, 0))
        max_x, max_y = self.screen_to_world((w, h))
        return (min_x - margin, max_x + margin, min_y - margin, max_y + margin)
