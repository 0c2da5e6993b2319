"""
In-memory map primitives for the modify control.

- Feature / geometries: editable objects with an optional style
- VectorSource / VectorLayer: backing feature stores
- Collection: observable list used for selections
- Select / Modify / PointerInteraction: interactions fed by the Map
- Map / Document: viewport, hit-testing, pointer and keyboard dispatch

The protocols in mapedit.map.protocol describe what the edit package needs
from these, so other map engines can be plugged in.
"""

from mapedit.map.events import CollectionEvent, KeyEvent, MapBrowserEvent, Observable
from mapedit.map.geometry import LineString, Point, Polygon, get_center
from mapedit.map.feature import Feature, read_features
from mapedit.map.collection import Collection
from mapedit.map.source import VectorLayer, VectorSource
from mapedit.map.interactions import Interaction, Modify, PointerInteraction, Select
from mapedit.map.viewport import Document, Map, ViewportElement
from mapedit.map.protocol import (
    EditSessionBridge, KeyboardTarget, MapViewport, ModifyInteraction, SelectInteraction,
)

__all__ = [
    'CollectionEvent',
    'KeyEvent',
    'MapBrowserEvent',
    'Observable',
    'Point',
    'LineString',
    'Polygon',
    'get_center',
    'Feature',
    'read_features',
    'Collection',
    'VectorLayer',
    'VectorSource',
    'Interaction',
    'Modify',
    'PointerInteraction',
    'Select',
    'Document',
    'Map',
    'ViewportElement',
    'EditSessionBridge',
    'KeyboardTarget',
    'MapViewport',
    'ModifyInteraction',
    'SelectInteraction',
]
