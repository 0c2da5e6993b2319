"""
Configuration management for mapedit.

Handles:
- Loading/saving config.json next to the project root
- Environment overrides (MAPEDIT_GEOMETRY_TYPE, MAPEDIT_FEATURES_PATH)
- Turning JSON style entries into Style values
- Building validated ModifyControl options
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from mapedit.edit.constants import (
    DEFAULT_CLASS_NAME,
    DEFAULT_GEOMETRY_TYPE,
    DEFAULT_TITLE,
    GEOMETRY_TYPES,
    VERTEX_PIXEL_TOLERANCE,
)
from mapedit.paths import get_config_path
from mapedit.styles import Style

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "geometry_type": DEFAULT_GEOMETRY_TYPE,
    "title": DEFAULT_TITLE,
    "class_name": DEFAULT_CLASS_NAME,
    "pixel_tolerance": VERTEX_PIXEL_TOLERANCE,
    "features_path": None,
    "select_style": [{"stroke": "#00bcd4", "stroke_width": 3, "z_index": 10}],
    "modify_style": {"fill": "#ffffff", "stroke": "#0099ff", "radius": 6},
}


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """
    Load configuration from config.json, falling back to defaults.

    Missing keys are filled from DEFAULT_CONFIG and environment variables
    take precedence over the file.
    """
    config_path = Path(config_path) if config_path else get_config_path()
    config = dict(DEFAULT_CONFIG)

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config.update(json.load(f))
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")

    env_type = os.environ.get("MAPEDIT_GEOMETRY_TYPE")
    if env_type:
        config["geometry_type"] = env_type
    env_features = os.environ.get("MAPEDIT_FEATURES_PATH")
    if env_features:
        config["features_path"] = env_features

    return config


def save_config(config: dict, config_path: Optional[Union[str, Path]] = None) -> None:
    """Save configuration to config.json."""
    config_path = Path(config_path) if config_path else get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def style_from_dict(data: Dict[str, Any]) -> Style:
    """
    Build a Style from a JSON dict.

    Raises:
        ValueError: if the entry is not a dict or has unknown keys
    """
    if not isinstance(data, dict):
        raise ValueError(f"Style entry must be an object, got {type(data).__name__}")
    return Style.from_dict(data)


def styles_from_config(value: Any) -> Optional[List[Style]]:
    """Turn a style config value (None, one dict, or a list of dicts) into Styles."""
    if value is None:
        return None
    if isinstance(value, list):
        return [style_from_dict(entry) for entry in value]
    return [style_from_dict(value)]


@dataclass
class ModifyOptions:
    """Validated construction options for ModifyControl."""
    geometry_type: str = DEFAULT_GEOMETRY_TYPE
    title: str = DEFAULT_TITLE
    class_name: str = DEFAULT_CLASS_NAME
    pixel_tolerance: float = VERTEX_PIXEL_TOLERANCE
    style: Optional[List[Style]] = None
    modify_style: Optional[List[Style]] = None
    features_path: Optional[str] = None

    def control_kwargs(self) -> Dict[str, Any]:
        return {
            'geometry_type': self.geometry_type,
            'title': self.title,
            'class_name': self.class_name,
            'pixel_tolerance': self.pixel_tolerance,
            'style': self.style,
            'modify_style': self.modify_style,
        }


def get_control_options(config: Optional[dict] = None) -> ModifyOptions:
    """
    Build ModifyOptions from a config dict (loaded from disk when omitted).

    Raises:
        ValueError: for an unknown geometry type or a malformed style entry
    """
    if config is None:
        config = load_config()

    geometry_type = config.get("geometry_type", DEFAULT_GEOMETRY_TYPE)
    if geometry_type not in GEOMETRY_TYPES:
        raise ValueError(
            f"Unknown geometry type '{geometry_type}'. "
            f"Expected one of: {', '.join(GEOMETRY_TYPES)}"
        )

    return ModifyOptions(
        geometry_type=geometry_type,
        title=config.get("title", DEFAULT_TITLE),
        class_name=config.get("class_name", DEFAULT_CLASS_NAME),
        pixel_tolerance=float(config.get("pixel_tolerance", VERTEX_PIXEL_TOLERANCE)),
        style=styles_from_config(config.get("select_style")),
        modify_style=styles_from_config(config.get("modify_style")),
        features_path=config.get("features_path"),
    )
