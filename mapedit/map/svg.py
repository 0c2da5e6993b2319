"""
SVG sketch of map layers.

Turns features into (tag, attributes) pairs in viewport pixels so a UI can
draw them with plain SVG elements. One shape is emitted per style entry, in
order, so a select overlay is drawn on top of the feature's own style.
"""

from typing import Dict, Iterable, List, Tuple

from mapedit.map.feature import Feature
from mapedit.map.source import VectorLayer
from mapedit.styles import Style, get_styles

Shape = Tuple[str, Dict[str, str]]

DEFAULT_STYLE = Style(fill='#90a4ae55', stroke='#90a4ae', stroke_width=1.5, radius=5)


def _points(map_, coordinates) -> str:
    pixels = (map_.get_pixel_from_coordinate(c) for c in coordinates)
    return ' '.join(f'{x:g},{y:g}' for x, y in pixels)


def feature_shapes(map_, feature: Feature, default_style=None) -> List[Shape]:
    """Return the shapes drawing one feature, using `default_style` if it has none."""
    geometry = feature.get_geometry()
    if geometry is None:
        return []

    styles = get_styles(feature.get_style(), feature)
    if not styles:
        styles = get_styles(default_style if default_style is not None else DEFAULT_STYLE, feature)

    shapes = []
    geometry_type = geometry.get_type()
    for style in styles:
        if not isinstance(style, Style):
            continue
        attrs = {
            'stroke': style.stroke or 'none',
            'stroke-width': f'{style.stroke_width:g}',
        }
        if geometry_type == 'Point':
            x, y = map_.get_pixel_from_coordinate(geometry.get_coordinates())
            attrs.update({'cx': f'{x:g}', 'cy': f'{y:g}', 'r': f'{style.radius or 5:g}',
                          'fill': style.fill or 'none'})
            shapes.append(('circle', attrs))
        elif geometry_type == 'LineString':
            attrs.update({'points': _points(map_, geometry.get_coordinates()), 'fill': 'none'})
            shapes.append(('polyline', attrs))
        elif geometry_type == 'Polygon':
            attrs.update({'points': _points(map_, geometry.get_coordinates()[0]),
                          'fill': style.fill or 'none'})
            shapes.append(('polygon', attrs))
    return shapes


def layer_shapes(map_, layers: Iterable[VectorLayer]) -> List[Shape]:
    """Shapes for every feature of the given layers, bottom layer first."""
    shapes = []
    for layer in layers:
        for feature in layer.get_source().get_features():
            shapes.extend(feature_shapes(map_, feature, layer.style))
    return shapes


def scene_key(layers: Iterable[VectorLayer]) -> tuple:
    """A value that changes whenever a feature, its geometry or its style changes."""
    key = []
    for layer in layers:
        for feature in layer.get_source().get_features():
            geometry = feature.get_geometry()
            key.append((
                feature.id,
                repr(geometry),
                geometry.revision if geometry is not None else None,
                repr(feature.get_style()),
            ))
    return tuple(key)


def svg_props(attrs: Dict[str, str]) -> str:
    """Format attributes as a NiceGUI props string."""
    return ' '.join(f'{name}="{value}"' for name, value in attrs.items())
