#!/usr/bin/env python3
"""
System template loading utilities.

A template describes a whole orbital tree declaratively; build_system() turns
the description into attached Body instances.

Schema
======
Template JSON (orrery/templates/*.json):
{
  "name": "Human-friendly template name",
  "description": "Optional description",
  "speed": 0,                          # optional initial slider value
  "root": {
    "name": "Sun",
    "radius": 20,
    "color": "yellow",                 # pygame color name or [r, g, b]
    "children": [
      {"name": "Earth", "distance": 150, "radius": 10, "color": [100, 149, 237],
       "children": [{"name": "Moon", "distance": 20, "radius": 3, "color": "gray"}]}
    ]
  }
}

"distance" is required for every body except the root, whose distance must be
0 when given. Malformed templates raise PresetError while loading, never
during a frame.

Users can add their own JSON files to the templates folder or pass a path.
"""
import json
import logging
import os
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple

import pygame

from .constants import DEFAULT_TEMPLATE
from .data_models import Body, Color

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")


class PresetError(ValueError):
  """Raised for template files or descriptions that cannot build a tree."""


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except OSError as exc:
    raise PresetError(f"Cannot read template {path}: {exc}") from exc
  except json.JSONDecodeError as exc:
    raise PresetError(f"Invalid JSON in {path}: {exc}") from exc
  if not isinstance(data, dict):
    raise PresetError(f"Template {path} must contain a JSON object")
  return data


def _coerce_color(c: Any, where: str) -> Color:
  if isinstance(c, str):
    try:
      color = pygame.Color(c)
    except ValueError as exc:
      raise PresetError(f"{where}: unknown color name {c!r}") from exc
    return (color.r, color.g, color.b)
  if isinstance(c, (list, tuple)) and len(c) in (3, 4):
    try:
      channels = [max(0, min(255, int(v))) for v in c]
    except (TypeError, ValueError) as exc:
      raise PresetError(f"{where}: invalid color {c!r}") from exc
    return tuple(channels)
  raise PresetError(f"{where}: color must be a name or [r, g, b], got {c!r}")


def _number(node: Dict[str, Any], key: str, where: str, default: Optional[float] = None) -> float:
  value = node.get(key, default)
  if value is None:
    raise PresetError(f"{where}: missing {key!r}")
  if isinstance(value, bool) or not isinstance(value, Real):
    raise PresetError(f"{where}: {key!r} must be a number, got {value!r}")
  return float(value)


def _build_body(node: Any, where: str, is_root: bool) -> Body:
  if not isinstance(node, dict):
    raise PresetError(f"{where}: body description must be an object")
  name = node.get("name")
  if not isinstance(name, str) or not name:
    raise PresetError(f"{where}: missing body name")
  where = f"{where}/{name}"

  distance = _number(node, "distance", where, default=0.0 if is_root else None)
  if is_root and distance != 0:
    raise PresetError(f"{where}: the root body cannot orbit anything (distance {distance})")
  radius = _number(node, "radius", where)
  color = _coerce_color(node["color"], where) if "color" in node else None

  kwargs = {"name": name, "distance": distance, "radius": radius}
  if color is not None:
    kwargs["color"] = color
  try:
    body = Body(**kwargs)
  except ValueError as exc:
    raise PresetError(str(exc)) from exc

  children = node.get("children", [])
  if not isinstance(children, list):
    raise PresetError(f"{where}: 'children' must be a list")
  for child_node in children:
    body.attach(_build_body(child_node, where, is_root=False))
  return body


def build_system(description: Dict[str, Any]) -> Body:
  """
  Build and attach a Body tree from a declarative description.

  Accepts either a full template ({"root": {...}}) or a bare root body node.
  """
  if isinstance(description, dict) and "root" in description:
    description = description["root"]
  return _build_body(description, "", is_root=True)


def list_templates() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(TEMPLATES_DIR):
    return items
  for fn in sorted(os.listdir(TEMPLATES_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      data = _read_json(os.path.join(TEMPLATES_DIR, fn))
    except PresetError as exc:
      logger.warning("Skipping template %s: %s", fn, exc)
      continue
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def resolve_template_path(name_or_path: str) -> str:
  """Bundled template file name, or a path to any JSON file."""
  if os.path.isfile(name_or_path):
    return name_or_path
  bundled = os.path.join(TEMPLATES_DIR, name_or_path)
  if not bundled.lower().endswith(".json"):
    bundled += ".json"
  if os.path.isfile(bundled):
    return bundled
  raise PresetError(f"No template named {name_or_path!r}")


def load_template(name_or_path: str = DEFAULT_TEMPLATE) -> Tuple[Body, Optional[int], str]:
  """
  Load a template by bundled file name or path.
  Returns (root, speed, display_name)
  """
  path = resolve_template_path(name_or_path)
  data = _read_json(path)
  display_name = data.get("name") or os.path.splitext(os.path.basename(path))[0]
  if "root" not in data:
    raise PresetError(f"Template {path} has no 'root' body")
  speed = data.get("speed")
  if speed is not None and (isinstance(speed, bool) or not isinstance(speed, int)):
    raise PresetError(f"Template {path}: 'speed' must be an integer slider value")
  root = build_system(data)
  logger.info("Loaded template %s (%d bodies)", display_name, sum(1 for _ in root.walk()))
  return root, speed, display_name
