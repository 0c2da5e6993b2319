"""
Feature - a geometry plus an optional style, and GeoJSON loading.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from mapedit.styles import Style, StyleSpec, as_style_spec
from mapedit.map.geometry import GEOMETRY_CLASSES, Geometry

logger = logging.getLogger(__name__)


class Feature:
    """An editable geometric object with an optional style."""

    def __init__(self, geometry: Optional[Geometry] = None, style=None,
                 feature_id: Optional[str] = None,
                 properties: Optional[Dict[str, Any]] = None):
        self.id = feature_id or str(uuid.uuid4())
        self._geometry = geometry
        self._style: Optional[StyleSpec] = as_style_spec(style)
        self.properties: Dict[str, Any] = dict(properties or {})

    def get_geometry(self) -> Optional[Geometry]:
        return self._geometry

    def set_geometry(self, geometry: Geometry) -> None:
        self._geometry = geometry

    def get_style(self) -> Optional[StyleSpec]:
        """Return the feature's own style specification, or None."""
        return self._style

    def set_style(self, style) -> None:
        self._style = as_style_spec(style)

    def __repr__(self):
        return f"Feature(id={self.id[:8]!r}, geometry={self._geometry!r})"


def feature_from_geojson(data: Dict[str, Any]) -> Feature:
    """
    Build a Feature from a GeoJSON feature dict.

    A `style` property (a dict or a list of dicts) becomes the feature's
    own style.

    Raises:
        ValueError: for geometry types other than Point, LineString and Polygon
    """
    geom = data.get('geometry') or {}
    geom_type = geom.get('type')
    geometry_cls = GEOMETRY_CLASSES.get(geom_type)
    if geometry_cls is None:
        raise ValueError(f"Unsupported geometry type: {geom_type}")

    properties = dict(data.get('properties') or {})
    raw_style = properties.pop('style', None)
    if isinstance(raw_style, dict):
        style = Style.from_dict(raw_style)
    elif isinstance(raw_style, list):
        style = [Style.from_dict(s) for s in raw_style]
    else:
        style = None

    return Feature(
        geometry=geometry_cls(geom['coordinates']),
        style=style,
        feature_id=data.get('id'),
        properties=properties,
    )


def read_features(source: Union[str, Path, Dict[str, Any]]) -> List[Feature]:
    """
    Read features from a GeoJSON FeatureCollection.

    Args:
        source: Path to a .geojson file, or an already parsed dict

    Returns:
        List of Feature objects. Unsupported features are skipped with a warning.
    """
    if isinstance(source, dict):
        data = source
    else:
        with open(source, 'r', encoding='utf-8') as f:
            data = json.load(f)

    features = []
    for item in data.get('features', []):
        try:
            features.append(feature_from_geojson(item))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Skipping feature {item.get('id')}: {e}")
    return features
