"""Tests for bodies, spawn presets and the scene loader."""
import json
import math
import random

import pytest

from bhsim.constants import MAX_TRAIL_LENGTH
from bhsim.data_models import Body, BodyKind, make_body
from bhsim.presets import (
    PLANET_PRESETS,
    STAR_PRESETS,
    boost,
    initial_objects,
    spawn_comet,
    spawn_slingshot,
    spawn_star,
)
from bhsim.presets_loader import body_from_dict, list_scenes, load_scene
from bhsim.utils import try_float


class TestMakeBody:
    def test_ids_unique_and_prefixed(self):
        a = make_body(BodyKind.COMET, (1.0, 2.0), (0.0, 0.0), 1.0, 1.0)
        b = make_body(BodyKind.COMET, (1.0, 2.0), (0.0, 0.0), 1.0, 1.0)
        assert a.id != b.id
        assert a.id.startswith("comet-")

    def test_trail_capacity(self):
        b = make_body(BodyKind.PLANET, (1.0, 2.0), (0.0, 0.0), 1.0, 1.0)
        assert b.trail.maxlen == MAX_TRAIL_LENGTH
        for i in range(MAX_TRAIL_LENGTH + 10):
            b.add_trail_point((float(i), 0.0))
        assert len(b.trail) == MAX_TRAIL_LENGTH
        assert b.trail[0] == (10.0, 0.0)

    @pytest.mark.parametrize("kwargs", [
        dict(mass=0.0),
        dict(mass=-1.0),
        dict(radius=-0.5),
        dict(position=(float("nan"), 0.0)),
        dict(velocity=(0.0, float("inf"))),
        dict(kind=BodyKind.DEBRIS),
    ])
    def test_rejects_invalid(self, kwargs):
        args = dict(kind=BodyKind.STAR, position=(100.0, 0.0), velocity=(0.0, 1.0), mass=1.0, radius=1.0)
        args.update(kwargs)
        with pytest.raises(ValueError):
            make_body(**args)

    def test_capture_zeroes_mass_and_radius(self):
        b = make_body(BodyKind.STAR, (100.0, 0.0), (0.0, 1.0), 5.0, 9.0)
        b.capture()
        assert b.is_debris
        assert (b.kind, b.mass, b.radius) == (BodyKind.DEBRIS, 0.0, 0.0)

    def test_snapshot_copies_trail(self):
        b = make_body(BodyKind.STAR, (100.0, 0.0), (0.0, 1.0), 5.0, 9.0)
        b.add_trail_point((1.0, 1.0))
        snap = b.snapshot()
        b.add_trail_point((2.0, 2.0))
        assert list(snap.trail) == [(1.0, 1.0)]
        assert snap.id == b.id
        assert snap.trail.maxlen == MAX_TRAIL_LENGTH


class TestSpawns:
    def test_initial_objects(self):
        star, planet, comet = initial_objects()
        assert star.position == (300.0, 0.0) and star.velocity == (0.0, 15.0)
        assert planet.position == (-400.0, 100.0) and planet.mass == 2.0
        assert comet.velocity == (25.0, 20.0) and comet.radius == 3.0

    def test_comet_ranges(self):
        rng = random.Random(7)
        for _ in range(50):
            c = spawn_comet(rng)
            assert 400 <= math.hypot(*c.position) <= 600
            assert 15 <= math.hypot(*c.velocity) <= 25
            assert c.mass == 0.5

    def test_star_preset(self):
        s = spawn_star("UY_SCUTI", 10.0, random.Random(3))
        assert 500 <= math.hypot(*s.position) <= 900
        assert (s.mass, s.radius) == (STAR_PRESETS["UY_SCUTI"].mass, STAR_PRESETS["UY_SCUTI"].radius)

    def test_preset_tables(self):
        assert set(PLANET_PRESETS) == {"EARTH", "JUPITER", "MARS", "NEPTUNE"}
        assert len(STAR_PRESETS) == 6

    def test_slingshot(self):
        s = spawn_slingshot()
        assert s.kind is BodyKind.COMET
        assert s.velocity == (22.0, -1.5)

    def test_boost_skips_debris(self):
        live = make_body(BodyKind.COMET, (100.0, 0.0), (10.0, 0.0), 1.0, 1.0)
        dead = make_body(BodyKind.COMET, (100.0, 0.0), (10.0, 0.0), 1.0, 1.0)
        dead.capture()
        assert boost([live, dead], factor=2.0) == 1
        assert live.velocity == (20.0, 0.0)
        assert dead.velocity == (10.0, 0.0)


class TestSceneLoader:
    def _write(self, tmp_path, name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
        return path

    def test_bundled_scenes(self):
        names = dict(list_scenes())
        assert "default.json" in names
        scene = load_scene("default.json")
        assert scene is not None
        assert len(scene.bodies) == 3
        assert scene.black_hole_mass == 10.0

    def test_skips_bad_records(self, tmp_path):
        self._write(tmp_path, "s.json", {
            "name": "Mixed",
            "bodies": [
                {"kind": "PLANET", "mass": 1, "radius": 2, "position": [100, 0], "velocity": [0, 5]},
                {"kind": "PLANET", "mass": -1, "radius": 2, "position": [100, 0], "velocity": [0, 5]},
                {"kind": "BLACK_HOLE", "mass": 1, "radius": 2, "position": [100, 0], "velocity": [0, 5]},
                {"kind": "STAR", "radius": 2, "position": [100, 0], "velocity": [0, 5]},
                {"kind": "star", "mass": 3, "radius": 2, "position": [0, 200], "velocity": [5, 0],
                 "color": [300, -4, "x"]},
            ],
        })
        scene = load_scene("s.json", scenes_dir=str(tmp_path))
        assert scene.name == "Mixed"
        assert [b.kind for b in scene.bodies] == [BodyKind.PLANET, BodyKind.STAR]
        assert scene.time_scale is None

    def test_skips_non_object_records(self, tmp_path):
        valid = {"kind": "PLANET", "mass": 1, "radius": 2, "position": [100, 0], "velocity": [0, 5]}
        self._write(tmp_path, "s.json", {"name": "Odd", "bodies": [valid, 7, "comet", [1, 2], None]})
        scene = load_scene("s.json", scenes_dir=str(tmp_path))
        assert [b.kind for b in scene.bodies] == [BodyKind.PLANET]

    def test_bodies_not_a_list(self, tmp_path):
        self._write(tmp_path, "s.json", {"name": "Keyed", "bodies": {"a": {"kind": "STAR"}}})
        scene = load_scene("s.json", scenes_dir=str(tmp_path))
        assert scene.name == "Keyed"
        assert scene.bodies == []

    def test_unreadable_file(self, tmp_path):
        self._write(tmp_path, "broken.json", "{not json")
        assert load_scene("broken.json", scenes_dir=str(tmp_path)) is None
        assert load_scene("missing.json", scenes_dir=str(tmp_path)) is None

    def test_list_scenes_uses_display_names(self, tmp_path):
        self._write(tmp_path, "a.json", {"name": "Alpha", "bodies": []})
        self._write(tmp_path, "b.json", {"bodies": []})
        self._write(tmp_path, "notes.txt", "ignored")
        assert list_scenes(str(tmp_path)) == [("a.json", "Alpha"), ("b.json", "b")]

    def test_body_from_dict_color(self):
        b = body_from_dict({"kind": "COMET", "mass": 1, "radius": 1, "position": [1, 0],
                            "velocity": [0, 0], "color": [300, -5, 10]})
        assert isinstance(b, Body)
        assert b.color == (255, 0, 10)


class TestTryFloat:
    @pytest.mark.parametrize("val, expected", [("1.5", 1.5), (" 2 ", 2.0), ("x", None), (None, None),
                                               ("nan", None), ("inf", None)])
    def test_parse(self, val, expected):
        assert try_float(val) == expected
