#!/usr/bin/env python3
"""
Scene JSON loading utilities.

Scene templates (scenes/*.json) describe a set of bodies to spawn around the
black hole, plus optional simulation settings to apply when the scene loads.

Schema
======
{
  "name": "Human-friendly scene name",
  "description": "Optional description",
  "time_scale": 1.0,                 # optional
  "black_hole_mass": 10.0,           # optional
  "bodies": [
    {
      "kind": "STAR",                # STAR | PLANET | COMET
      "mass": 10.0,
      "radius": 12.0,
      "position": [300.0, 0.0],
      "velocity": [0.0, 15.0],
      "color": [251, 191, 36]
    }
  ]
}

Users can add their own JSON files into the folder and they'll be picked up by
the loader. Unreadable files and malformed body records are skipped with a
warning rather than aborting the load.
"""
import json
import logging
import os
from typing import List, NamedTuple, Optional, Tuple

from .data_models import Body, BodyKind, make_body

logger = logging.getLogger(__name__)

SCENES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scenes")

DEFAULT_COLOR = (200, 200, 255)


class Scene(NamedTuple):
  name: str
  bodies: List[Body]
  time_scale: Optional[float] = None
  black_hole_mass: Optional[float] = None
  description: str = ""


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as e:
    logger.warning("Could not read scene file %s: %s", path, e)
    return None
  if not isinstance(data, dict):
    logger.warning("Scene file %s is not a JSON object", path)
    return None
  return data


def _coerce_color(c) -> Tuple[int, int, int]:
  try:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
    r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
    return (r, g, b)
  except (TypeError, ValueError, IndexError):
    return DEFAULT_COLOR


def _optional_float(data: dict, key: str) -> Optional[float]:
  value = data.get(key)
  if value is None:
    return None
  try:
    return float(value)
  except (TypeError, ValueError):
    logger.warning("Ignoring non-numeric %s=%r", key, value)
    return None


def body_from_dict(b: dict) -> Body:
  """
  Build a body from one scene record.

  Raises:
    KeyError, TypeError, ValueError: when the record is incomplete or invalid.
  """
  kind = BodyKind[str(b.get("kind", "PLANET")).upper()]
  return make_body(
    kind,
    (float(b["position"][0]), float(b["position"][1])),
    (float(b["velocity"][0]), float(b["velocity"][1])),
    float(b["mass"]),
    float(b["radius"]),
    _coerce_color(b.get("color", DEFAULT_COLOR)),
  )


def list_scenes(scenes_dir: str = SCENES_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available scenes."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(scenes_dir):
    return items
  for fn in sorted(os.listdir(scenes_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(scenes_dir, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_scene(file_name: str, scenes_dir: str = SCENES_DIR) -> Optional[Scene]:
  """
  Load a scene JSON by file name.

  Returns None when the file cannot be read. Body records that fail
  validation are skipped.
  """
  path = os.path.join(scenes_dir, file_name)
  data = _read_json(path)
  if data is None:
    return None
  bodies: List[Body] = []
  records = data.get("bodies", [])
  if not isinstance(records, list):
    logger.warning("Ignoring non-list 'bodies' in %s", file_name)
    records = []
  for i, b in enumerate(records):
    if not isinstance(b, dict):
      logger.warning("Skipping body #%d in %s: not a JSON object", i, file_name)
      continue
    try:
      bodies.append(body_from_dict(b))
    except (KeyError, TypeError, ValueError, IndexError) as e:
      logger.warning("Skipping body #%d in %s: %s", i, file_name, e)
      continue
  scene = Scene(
    name=data.get("name") or os.path.splitext(file_name)[0],
    bodies=bodies,
    time_scale=_optional_float(data, "time_scale"),
    black_hole_mass=_optional_float(data, "black_hole_mass"),
    description=data.get("description", ""),
  )
  logger.info("Loaded scene %r with %d bodies", scene.name, len(bodies))
  return scene
