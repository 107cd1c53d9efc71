#!/usr/bin/env python3
"""
Launch preset JSON loading utilities.

Schema
======
Preset JSON (presets/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "parameters": {
    "initial_speed": 40.0,          # m/s
    "launch_angle_deg": 45.0,       # degrees
    "initial_height": 0.0,          # m
    "mass": 1.0,                    # kg
    "gravity": 9.81,                # m/s^2
    "restitution": 0.6,             # 0..1
    "target_x": 150.0,              # m
    "target_width": 10.0,           # m
    "use_air_resistance": false,
    "show_ideal": true
  }
}

Every parameter is optional and falls back to the LaunchParameters default.
Users can add their own JSON files into the folder and they'll be picked up by
the loader.
"""
import json
import logging
import os
from dataclasses import fields
from typing import Any, Dict, List, Optional, Tuple

from .data_models import LaunchParameters
from .utils import try_float

log = logging.getLogger("trajectory.presets")

PRESETS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "presets")

_BOOL_FIELDS = {"use_air_resistance", "show_ideal"}


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    log.warning("Could not read preset %s: %s", path, exc)
    return None
  if not isinstance(data, dict):
    log.warning("Preset %s is not a JSON object", path)
    return None
  return data


def parameters_from_dict(raw: Dict[str, Any]) -> LaunchParameters:
  """Build LaunchParameters from a mapping, skipping unknown or non-numeric entries."""
  kwargs: Dict[str, Any] = {}
  known = {f.name for f in fields(LaunchParameters)}
  for key, value in raw.items():
    if key not in known:
      log.warning("Ignoring unknown preset parameter %r", key)
      continue
    if key in _BOOL_FIELDS:
      kwargs[key] = bool(value)
      continue
    num = try_float(value)
    if num is None:
      log.warning("Ignoring non-numeric value %r for %r", value, key)
      continue
    kwargs[key] = num
  return LaunchParameters(**kwargs)


def list_presets(presets_dir: str = PRESETS_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available presets."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(presets_dir):
    return items
  for fn in sorted(os.listdir(presets_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(presets_dir, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_preset(file_name: str, presets_dir: str = PRESETS_DIR) -> Optional[Tuple[LaunchParameters, str]]:
  """
  Load a preset JSON by file name.
  Returns (parameters, display_name), or None if the file is unusable.
  """
  data = _read_json(os.path.join(presets_dir, file_name))
  if data is None:
    return None
  display_name = data.get("name") or os.path.splitext(file_name)[0]
  raw = data.get("parameters", {})
  if not isinstance(raw, dict):
    log.warning("Preset %s has no parameters object", file_name)
    return None
  return parameters_from_dict(raw), display_name
