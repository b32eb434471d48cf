# rope/config.py
from __future__ import annotations
import json, os
from typing import Optional

# Window
WINDOW_WIDTH  = 1280
WINDOW_HEIGHT = 720
FPS           = 60

# Colors (RGB)
BG_COLOR          = (255, 255, 255)
HELPER_COLOR      = (204, 204, 204)
TANGENT_COLOR     = (204, 0, 0)
CURVE_COLOR       = (51, 51, 255)
ENDPOINT_COLOR    = (0, 0, 0)
ACTIVE_COLOR      = (0, 0, 170)
INACTIVE_COLOR    = (170, 170, 255)
STATUS_ALL_COLOR  = (0, 123, 255)
STATUS_LOCK_COLOR = (204, 0, 0)
TEXT_COLOR        = (40, 40, 40)

# Rope behaviour
HIT_RADIUS      = 25.0
TARGET_OFFSET   = (100.0, 50.0)
MAX_DT          = 1.0 / 30.0
TANGENT_TS      = (0.1, 0.3, 0.5, 0.7, 0.9)
TANGENT_OFFSET  = 6.0
CURVE_SAMPLES   = 100

# Marker radii
ENDPOINT_RADIUS = 8
CONTROL_RADIUS  = 12
SELECTED_RADIUS = 15

CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG = {
    "physics": {
        "stiffness":      {"value": 50.0},
        "damping":        {"value": 8.0},
        "tangent_length": {"value": 50.0},
    },
    "layout": {
        "endpoint_margin_px": {"value": 300.0},
    },
    "ui": {
        "show_helpers":  {"value": 1},
        "show_tangents": {"value": 1},
        "show_status":   {"value": 1},
    },
}

# Slider ranges for the settings window: (min, max)
SLIDER_RANGES = {
    "stiffness":      (1.0, 200.0),
    "damping":        (0.0, 30.0),
    "tangent_length": (0.0, 150.0),
}

def _flatten(section: dict) -> dict:
    """Extract 'value' from nested dict structure."""
    flat = {}
    for k, v in section.items():
        flat[k] = v.get("value", v) if isinstance(v, dict) and "value" in v else v
    return flat

def _config_candidates() -> list:
    """Config paths in lookup order: project root, then package directory."""
    here = os.path.dirname(__file__)
    return [
        os.path.normpath(os.path.join(here, os.pardir, CONFIG_FILENAME)),
        os.path.normpath(os.path.join(here, CONFIG_FILENAME)),
    ]

def _load_json(path: str) -> Optional[dict]:
    """Load JSON file, return None on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return None

def _save_json(path: str, data: dict) -> None:
    """Write JSON, creating the parent directory if needed."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

def _merge_defaults(data: dict) -> dict:
    """Fill sections/keys missing from an older config file. Non-dict sections are ignored."""
    merged = {}
    for section, keys in DEFAULT_CONFIG.items():
        merged[section] = dict(keys)
        found = data.get(section)
        if isinstance(found, dict):
            merged[section].update(found)
        elif found is not None:
            print(f"Ignoring malformed config section '{section}': {found!r}")
    return merged

def _num(x, d=0.0):
    """Extract numeric value or return default."""
    if isinstance(x, dict):
        x = x.get("value", d)
    try:
        return float(x)
    except (TypeError, ValueError):
        return d

def load_config(path: Optional[str] = None) -> dict:
    """Load config from the first readable candidate, create default if missing."""
    candidates = [path] if path else _config_candidates()
    for cand in candidates:
        data = _load_json(cand)
        if isinstance(data, dict):
            return _merge_defaults(data)
    data = _merge_defaults({})
    try:
        _save_json(candidates[0], data)
    except OSError as e:
        print(f"Could not write default config to {candidates[0]}: {e}")
    return data

def save_config(cfg_dict: dict, path: Optional[str] = None) -> bool:
    """Save a flat config ({section: {key: value}}) back in wrapped form."""
    target = path or _config_candidates()[0]
    try:
        def wrap(v): return {"value": v}
        raw = {
            "physics": {k: wrap(float(v)) for k, v in cfg_dict["physics"].items()},
            "layout":  {k: wrap(float(v)) for k, v in cfg_dict.get("layout", {}).items()},
            "ui":      {k: wrap(int(v)) for k, v in cfg_dict.get("ui", {}).items()},
        }
        _save_json(target, raw)
        print(f"Config saved to {target}")
        return True
    except (OSError, KeyError, TypeError, ValueError) as e:
        print(f"Failed to save config: {e}")
        return False

def flat_config(cfg: dict) -> dict:
    """Flatten every section of a loaded config."""
    return {section: _flatten(cfg.get(section, {})) for section in DEFAULT_CONFIG}

