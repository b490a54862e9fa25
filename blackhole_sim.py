#!/usr/bin/env python3
"""
Black Hole Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController that owns the bodies and simulation settings;
  all access is guarded by a re-entrant lock for thread-safety.
- Draws the lensed sky, the lensed coordinate grid, the accretion disk, bodies with
  trails and the black hole shadow.

Threading model
- PygameRenderer runs in a background thread. Each display frame it handles input and
  pumps a ManualFrameScheduler; the SimulationClock registered there steps the physics
  (unless paused) and then draws from a snapshot of the controller.
- The UI class runs in the main thread via Dear PyGui and only talks to the
  controller through its lock-protected methods.

Units and conventions
- Simulation units: the black hole sits at the world origin, G = 1000, r_s = 1.5 * M.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python blackhole_sim.py [--scene default.json] [--mass 10]`

Windows/OS notes
- Two windows will open: the viewport (pygame) and the controls (Dear PyGui). Closing either
  will shut down the application cleanly.
"""

import argparse
import logging
import math
import random
import threading
import time
from typing import List, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from bhsim.background import (
    BackgroundPoint,
    generate_background,
    point_alpha,
    point_radius,
    twinkle_offset,
)
from bhsim.camera import Camera2D
from bhsim.clock import ManualFrameScheduler, SimulationClock
from bhsim.constants import (
    ACCRETION_DISK_FACTOR,
    BACKGROUND_COLOR,
    GRID_COLOR,
    GRID_SAMPLE_STEP,
    HORIZON_LABEL_COLOR,
    HUD_COLOR,
    MAX_BLACK_HOLE_MASS,
    MAX_TIME_SCALE,
    MIN_BLACK_HOLE_MASS,
    MIN_TIME_SCALE,
    SAFE_COORD_LIMIT,
    SHADOW_FACTOR,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from bhsim.controller import SimulationController, SimulationSnapshot
from bhsim.data_models import BodyKind, make_body
from bhsim.lensing import lensed_position, project, visible_images
from bhsim.presets import PLANET_PRESETS, STAR_PRESETS
from bhsim.presets_loader import list_scenes, load_scene
from bhsim.utils import try_float
from bhsim.vector_utils import vec_len, vec_sub

logger = logging.getLogger("blackhole_sim")

# Browser-style wheel delta per notch; zoom changes by delta * WHEEL_ZOOM_SENSITIVITY
WHEEL_NOTCH_DELTA = 100.0

# Accretion disk gradient stops: (fraction of disk radius, RGBA)
DISK_STOPS = (
    (0.0, (0, 0, 0, 255)),
    (0.15, (255, 100, 0, 230)),
    (0.3, (255, 50, 0, 153)),
    (1.0, (100, 0, 0, 0)),
)
DISK_RINGS = 32

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: owns the display frame signal and draws the lensed scene.
    Handles panning (drag), zoom (wheel), hover info and the pause key.
    """
    def __init__(self, sim: SimulationController, background: List[BackgroundPoint]):
        super().__init__(daemon=True)
        self.sim = sim
        self.background = background
        self.camera = Camera2D(sim.viewport)
        self.scheduler = ManualFrameScheduler()
        self.clock = SimulationClock(self.scheduler, step=sim.step, render=self.draw,
                                     is_paused=sim.is_paused)
        self.surface = None
        self.fps_clock = None
        self.font = None
        self.dragging = False
        self.last_mouse_screen = (0, 0)
        self.hover_id: Optional[str] = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Black Hole Simulator - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.fps_clock = pygame.time.Clock()
        self.font = _load_font()

        self.clock.start()
        try:
            while self.running and self.sim.running:
                self.handle_events()
                if not (self.running and self.sim.running):
                    break
                # One display frame: the clock steps and renders from here.
                self.scheduler.pump()
                self.fps_clock.tick(TARGET_FPS)
        finally:
            self.clock.stop()
            pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                # pygame reports wheel-up as positive y; browsers report it as negative delta
                with self.sim.lock:
                    self.sim.viewport.zoom_by_wheel(-event.y * WHEEL_NOTCH_DELTA)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button in (1, 2, 3):
                    self.dragging = True
                    self.last_mouse_screen = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (1, 2, 3):
                    self.dragging = False

            elif event.type == pygame.MOUSEMOTION:
                mouse = event.pos
                if self.dragging:
                    dx = mouse[0] - self.last_mouse_screen[0]
                    dy = mouse[1] - self.last_mouse_screen[1]
                    with self.sim.lock:
                        self.sim.viewport.pan_pixels(dx, dy)
                self.last_mouse_screen = mouse

            elif event.type == pygame.WINDOWLEAVE:
                self.dragging = False
                self.hover_id = None

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                paused = self.sim.toggle_pause()
                logger.info("Simulation %s", "paused" if paused else "resumed")

    def pick_body(self, snap: SimulationSnapshot, screen_pos: Tuple[int, int]) -> Optional[str]:
        """Topmost body whose lensed disc is under the cursor."""
        world = self.camera.screen_to_world(screen_pos)
        zoom = self.camera.zoom
        for b in reversed(snap.bodies):
            if b.kind is BodyKind.DEBRIS:
                continue
            p = lensed_position(b.position, snap.black_hole_mass, snap.lensing_enabled)
            dist_px = vec_len(vec_sub(world, p)) * zoom
            if dist_px <= max(b.radius * zoom, 8) + 5:
                return b.id
        return None

    # -----------------------
    # Drawing
    # -----------------------

    def draw_background(self, surf, snap: SimulationSnapshot, time_s: float):
        w, h = self.camera.viewport_size
        zoom = self.camera.zoom
        horizon = snap.attractor.horizon_radius
        for point in self.background:
            result = project(point.position, snap.black_hole_mass, snap.lensing_enabled)
            images = visible_images(result) if snap.lensing_enabled else [result.primary]
            if point.is_nebula:
                # inverted puffs near the center look like artifacts
                images = images[:1]
            margin = 200 if point.is_nebula else 20
            for image in images:
                sx, sy = self.camera.world_to_screen(image.position)
                if sx < -margin or sx > w + margin or sy < -margin or sy > h + margin:
                    continue
                offset = twinkle_offset(point, image.position, image.magnification, time_s, horizon)
                alpha = point_alpha(point, image.magnification, offset)
                r = point_radius(point, image.magnification, offset, zoom)
                color = (point.color[0], point.color[1], point.color[2], int(alpha * 255))
                if r < 1.0:
                    gfxdraw.pixel(surf, int(sx), int(sy), color)
                else:
                    gfxdraw.filled_circle(surf, int(sx), int(sy), int(r), color)

    def draw_grid(self, surf, snap: SimulationSnapshot):
        spacing = snap.grid_density
        min_x, max_x, min_y, max_y = self.camera.visible_world_bounds(margin=100)
        start_x = math.floor(min_x / spacing) * spacing
        start_y = math.floor(min_y / spacing) * spacing

        def polyline(samples):
            pts = []
            for world in samples:
                lensed = lensed_position(world, snap.black_hole_mass, snap.lensing_enabled)
                sp = _safe_point(self.camera.world_to_screen(lensed))
                if sp:
                    pts.append(sp)
            if len(pts) > 1:
                pygame.draw.lines(surf, GRID_COLOR, False, pts, 1)

        x = start_x
        while x <= max_x:
            polyline((x, y) for y in _frange(min_y, max_y, GRID_SAMPLE_STEP))
            x += spacing
        y = start_y
        while y <= max_y:
            polyline((x, y) for x in _frange(min_x, max_x, GRID_SAMPLE_STEP))
            y += spacing

    def draw_accretion_disk(self, surf, snap: SimulationSnapshot):
        center = _safe_point(self.camera.world_to_screen((0.0, 0.0)))
        if not center:
            return
        rs_px = snap.attractor.horizon_radius * self.camera.zoom
        disk_px = rs_px * ACCRETION_DISK_FACTOR
        # Outside in, so inner rings paint over outer ones.
        for i in range(DISK_RINGS, -1, -1):
            frac = i / DISK_RINGS
            radius = int(rs_px + (disk_px - rs_px) * frac)
            if radius <= 0:
                continue
            gfxdraw.filled_circle(surf, center[0], center[1], radius, _gradient_color(frac))

    def draw_bodies(self, surf, snap: SimulationSnapshot):
        zoom = self.camera.zoom
        for b in snap.bodies:
            if len(b.trail) > 1:
                pts = []
                for p in b.trail:
                    lensed = lensed_position(p, snap.black_hole_mass, snap.lensing_enabled)
                    sp = _safe_point(self.camera.world_to_screen(lensed))
                    if sp:
                        pts.append(sp)
                if len(pts) > 1:
                    pygame.draw.aalines(surf, _dim(b.color, 0.6), False, pts)

            lensed = lensed_position(b.position, snap.black_hole_mass, snap.lensing_enabled)
            sp = _safe_point(self.camera.world_to_screen(lensed))
            if not sp:
                continue
            vis_r = max(1, int(b.radius * zoom))
            # soft glow
            gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r + 3, (*b.color, 60))
            gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, b.color)
            gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, b.color)

    def draw_shadow(self, surf, snap: SimulationSnapshot):
        # Drawn last so it occludes everything behind the hole, lensed stars included.
        center = _safe_point(self.camera.world_to_screen((0.0, 0.0)))
        if not center:
            return
        shadow_px = int(snap.attractor.horizon_radius * SHADOW_FACTOR * self.camera.zoom)
        if shadow_px <= 0:
            return
        gfxdraw.filled_circle(surf, center[0], center[1], shadow_px, (0, 0, 0))
        gfxdraw.aacircle(surf, center[0], center[1], shadow_px, (255, 255, 255, 51))

    def draw_hud(self, surf, snap: SimulationSnapshot):
        vp = snap.viewport
        draw_text(surf, self.font, f"Obj Count: {len(snap.bodies)}", 10, 10, HUD_COLOR)
        draw_text(surf, self.font, f"Time scale: {snap.time_scale:.1f}x  [{'Paused' if snap.is_paused else 'Running'}]",
                  10, 30, HUD_COLOR)
        h = self.camera.viewport_size[1]
        draw_text(surf, self.font, f"Zoom: {vp.zoom:.2f}x", 10, h - 66, HUD_COLOR)
        draw_text(surf, self.font, f"Offset: {vp.pan_offset[0]:.0f}, {vp.pan_offset[1]:.0f}", 10, h - 46, HUD_COLOR)
        draw_text(surf, self.font, f"BH Radius (Rs): {snap.attractor.horizon_radius:.1f}", 10, h - 26,
                  HORIZON_LABEL_COLOR)

        hovered = next((b for b in snap.bodies if b.id == self.hover_id), None)
        if hovered is not None:
            x, y = self.last_mouse_screen
            lines = [
                hovered.kind.value,
                f"Mass: {hovered.mass:.2f} M",
                f"Velocity: {math.hypot(*hovered.velocity):.1f} c/s",
                f"Distance: {math.hypot(*hovered.position):.0f} au",
            ]
            for i, line in enumerate(lines):
                draw_text(surf, self.font, line, x + 20, y + 20 + i * 18, hovered.color if i == 0 else HUD_COLOR)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Snapshot for consistency during draw; the camera reads its frozen viewport
        snap = self.sim.snapshot()
        self.camera.viewport = snap.viewport
        self.hover_id = None if self.dragging else self.pick_body(snap, self.last_mouse_screen)

        self.draw_background(surf, snap, time.perf_counter())
        if snap.show_grid:
            self.draw_grid(surf, snap)
        self.draw_accretion_disk(surf, snap)
        self.draw_bodies(surf, snap)
        self.draw_shadow(surf, snap)
        self.draw_hud(surf, snap)

        pygame.display.flip()


def _load_font():
    try:
        return pygame.font.SysFont("consolas", 14)
    except Exception:
        return pygame.font.Font(None, 16)


def draw_text(surface, font, text, x, y, color):
    img = font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def _frange(start, stop, step):
    v = start
    while v <= stop:
        yield v
        v += step


def _dim(color, factor):
    return (int(color[0] * factor), int(color[1] * factor), int(color[2] * factor))


def _gradient_color(frac):
    for (f0, c0), (f1, c1) in zip(DISK_STOPS, DISK_STOPS[1:]):
        if frac <= f1:
            t = (frac - f0) / (f1 - f0)
            return tuple(int(a + (b - a) * t) for a, b in zip(c0, c1))
    return DISK_STOPS[-1][1]

# ============================================================
# Dear PyGui UI
# ============================================================

KIND_CHOICES = ["STAR", "PLANET", "COMET"]


class UI:
    """
    Dear PyGui interface: playback, singularity mass, lensing/grid toggles,
    spawning presets and custom bodies, scene loading.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim

        self.status_msg_id = None
        self.scene_combo_id = None
        self.planet_combo_id = None
        self.star_combo_id = None
        self.pause_button_id = None

        # Custom body form
        self.kind_id = None
        self.mass_id = None
        self.radius_id = None
        self.pos_x_id = None
        self.pos_y_id = None
        self.vel_x_id = None
        self.vel_y_id = None
        self.color_id = None

        self._scene_map = {}
        self._planet_map = {p.label: key for key, p in PLANET_PRESETS.items()}
        self._star_map = {p.label: key for key, p in STAR_PRESETS.items()}

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        try:
            current = dpg.get_frame_count()
        except Exception:
            current = 0
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Black Hole Simulator - Controls', width=420, height=760)

        with dpg.window(label="Controls", width=400, height=740, pos=(10, 10), tag="main_window"):
            dpg.add_text("Playback")
            with dpg.group(horizontal=True):
                self.pause_button_id = dpg.add_button(label="Pause", callback=self._toggle_play)
                dpg.add_button(label="Reset", callback=self._on_reset)
            with dpg.group(horizontal=True):
                dpg.add_button(label="Launch Slingshot", callback=self._on_slingshot)
                dpg.add_button(label="Boost (prograde x1.2)", callback=self._on_boost)

            dpg.add_separator()

            dpg.add_text("Singularity")
            with self.sim.lock:
                cfg = self.sim.config
                mass, scale, lensing, grid, density = (cfg.black_hole_mass, cfg.time_scale,
                                                       cfg.lensing_enabled, cfg.show_grid, cfg.grid_density)
            dpg.add_slider_float(label="Mass", min_value=MIN_BLACK_HOLE_MASS, max_value=MAX_BLACK_HOLE_MASS,
                                 default_value=mass, width=220, format="%.1f",
                                 callback=lambda s, a, u: self.sim.set_black_hole_mass(a), tag="mass_slider")

            dpg.add_separator()

            dpg.add_text("Visuals & Lensing")
            dpg.add_checkbox(label="Gravitational lensing", default_value=lensing,
                             callback=lambda s, a, u: self.sim.set_lensing(a), tag="lensing_checkbox")
            dpg.add_checkbox(label="Space-time grid", default_value=grid,
                             callback=lambda s, a, u: self.sim.set_show_grid(a), tag="grid_checkbox")
            dpg.add_slider_int(label="Grid density", min_value=20, max_value=200, default_value=density, width=220,
                               callback=lambda s, a, u: self.sim.set_grid_density(a), tag="grid_density_slider")
            dpg.add_slider_float(label="Time scale", min_value=MIN_TIME_SCALE, max_value=MAX_TIME_SCALE,
                                 default_value=scale, width=220, format="%.1f",
                                 callback=lambda s, a, u: self.sim.set_time_scale(a), tag="speed_slider")

            dpg.add_separator()

            dpg.add_text("Matter")
            dpg.add_button(label="Add Comet", callback=self._on_add_comet)
            with dpg.group(horizontal=True):
                labels = list(self._planet_map.keys())
                self.planet_combo_id = dpg.add_combo(labels, default_value=labels[0], width=200)
                dpg.add_button(label="Add Planet", callback=self._on_add_planet)
            with dpg.group(horizontal=True):
                labels = list(self._star_map.keys())
                self.star_combo_id = dpg.add_combo(labels, default_value=labels[0], width=200)
                dpg.add_button(label="Add Star", callback=self._on_add_star)

            dpg.add_separator()

            dpg.add_text("Custom Body")
            with dpg.group():
                self.kind_id = dpg.add_combo(KIND_CHOICES, label="Kind", default_value="PLANET", width=120)
                with dpg.group(horizontal=True):
                    self.mass_id = dpg.add_input_text(label="Mass", default_value="1.0", width=80)
                    self.radius_id = dpg.add_input_text(label="Radius", default_value="4.0", width=80)
                with dpg.group(horizontal=True):
                    self.pos_x_id = dpg.add_input_text(label="Pos X", default_value="400.0", width=80)
                    self.pos_y_id = dpg.add_input_text(label="Pos Y", default_value="0.0", width=80)
                with dpg.group(horizontal=True):
                    self.vel_x_id = dpg.add_input_text(label="Vel X", default_value="0.0", width=80)
                    self.vel_y_id = dpg.add_input_text(label="Vel Y", default_value="5.0", width=80)
                self.color_id = dpg.add_color_edit(default_value=(200, 200, 255, 255), label="Color",
                                                   no_alpha=True, width=220)
                dpg.add_button(label="Add Body", callback=self._on_add_custom_body)

            dpg.add_separator()

            dpg.add_text("Scenes")
            with dpg.group(horizontal=True):
                try:
                    for fn, display in list_scenes():
                        self._scene_map[display] = fn
                except OSError as e:
                    logger.warning("Could not list scenes: %s", e)
                items = list(self._scene_map.keys()) or ["No scenes found (add JSONs to scenes/)"]
                self.scene_combo_id = dpg.add_combo(items, default_value=items[0], width=220)
                dpg.add_button(label="Load", callback=lambda: self.load_scene(dpg.get_value(self.scene_combo_id)))

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _toggle_play(self):
        paused = self.sim.toggle_pause()
        self._set_status("Paused." if paused else "Running.")

    def _on_reset(self):
        self.sim.reset()
        with self.sim.lock:
            dpg.set_value("mass_slider", self.sim.config.black_hole_mass)
            dpg.set_value("speed_slider", self.sim.config.time_scale)
        self._set_status("Simulation reset.")

    def _on_slingshot(self):
        body = self.sim.launch_slingshot()
        self._set_status(f"Launched {body.id} on a slingshot trajectory.")

    def _on_boost(self):
        n = self.sim.boost()
        self._set_status(f"Boosted {n} bodies.")

    def _on_add_comet(self):
        body = self.sim.add_comet()
        self._set_status(f"Added {body.id}.")

    def _on_add_planet(self):
        key = self._planet_map.get(dpg.get_value(self.planet_combo_id))
        if key is None:
            self._set_error("Select a planet preset.")
            return
        body = self.sim.add_planet(key)
        self._set_status(f"Added {body.id} ({PLANET_PRESETS[key].label}).")

    def _on_add_star(self):
        key = self._star_map.get(dpg.get_value(self.star_combo_id))
        if key is None:
            self._set_error("Select a star preset.")
            return
        body = self.sim.add_star(key)
        self._set_status(f"Added {body.id} ({STAR_PRESETS[key].label}).")

    def _on_add_custom_body(self):
        values = [try_float(dpg.get_value(i)) for i in
                  (self.mass_id, self.radius_id, self.pos_x_id, self.pos_y_id, self.vel_x_id, self.vel_y_id)]
        if None in values:
            self._set_error("Invalid numeric input.")
            return
        mass, radius, px, py, vx, vy = values
        color_rgba = dpg.get_value(self.color_id)
        color = (int(color_rgba[0]), int(color_rgba[1]), int(color_rgba[2]))
        try:
            body = make_body(BodyKind[dpg.get_value(self.kind_id)], (px, py), (vx, vy), mass, radius, color)
        except (KeyError, ValueError) as e:
            self._set_error(f"Cannot add body: {e}")
            return
        self.sim.add_body(body)
        self._set_status(f"Added {body.id}.")

    def load_scene(self, name: str):
        fn = self._scene_map.get(name.strip())
        if fn is None:
            self._set_error(f"Unknown scene: {name}")
            return
        scene = load_scene(fn)
        if scene is None:
            self._set_error(f"Could not read scene file {fn}.")
            return
        try:
            self.sim.apply_scene(scene)
        except ValueError as e:
            self._set_error(f"Invalid scene settings: {e}")
            return
        with self.sim.lock:
            dpg.set_value("mass_slider", self.sim.config.black_hole_mass)
            dpg.set_value("speed_slider", self.sim.config.time_scale)
        self._set_status(f"Loaded scene: {scene.name} ({len(scene.bodies)} bodies)")

    def _sync_ui_with_sim(self):
        """Periodic UI update: pause button label and capture/scene messages."""
        with self.sim.lock:
            paused = self.sim.config.is_paused
            msg = self.sim.last_event_msg
            self.sim.last_event_msg = None
        dpg.configure_item(self.pause_button_id, label="Resume" if paused else "Pause")
        if msg:
            self._set_status(msg)
        # Reschedule next sync
        self._schedule_sync()

# ============================================================
# Default Scene and Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Orbits and gravitational lensing around a black hole.")
    parser.add_argument("--scene", help="scene JSON file name in scenes/ to load instead of the default")
    parser.add_argument("--mass", type=float, help="black hole mass (1-50)")
    parser.add_argument("--time-scale", type=float, help="simulation speed multiplier (0.1-5)")
    parser.add_argument("--no-lensing", action="store_true", help="start with lensing disabled")
    parser.add_argument("--seed", type=int, help="seed for spawn positions and the background sky")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def build_initial_state(sim: SimulationController, args) -> None:
    sim.reset()
    if args.scene:
        scene = load_scene(args.scene)
        if scene is None:
            logger.warning("Scene %s not found, using the default scene", args.scene)
        else:
            try:
                sim.apply_scene(scene)
            except ValueError as e:
                logger.warning("Scene %s has invalid settings (%s), using the default scene", args.scene, e)
    if args.mass is not None:
        sim.set_black_hole_mass(args.mass)
    if args.time_scale is not None:
        sim.set_time_scale(args.time_scale)
    if args.no_lensing:
        sim.set_lensing(False)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    rng = random.Random(args.seed)
    sim = SimulationController(rng=rng)
    build_initial_state(sim, args)

    renderer = PygameRenderer(sim, generate_background(rng))

    # Start pygame renderer thread
    renderer.start()

    ui = UI(sim)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
