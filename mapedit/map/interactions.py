"""
Map interactions: pointer handling, click selection and vertex modification.

Interactions receive MapBrowserEvents from Map.handle_map_browser_event().
handle_event() returns False to stop the event from reaching the
interactions registered after this one.
"""

import logging
from typing import Callable, Iterable, Optional, Tuple, Union

from mapedit.map.collection import Collection
from mapedit.map.events import MapBrowserEvent, Observable
from mapedit.map.feature import Feature
from mapedit.map.geometry import Coordinate, Point
from mapedit.map.source import VectorLayer

logger = logging.getLogger(__name__)


class Interaction(Observable):
    """Base class: holds the map reference and the active flag."""

    def __init__(self):
        super().__init__()
        self._map = None
        self._active = True

    def get_map(self):
        return self._map

    def set_map(self, map_) -> None:
        self._map = map_

    def get_active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        self._active = active

    def handle_event(self, event: MapBrowserEvent) -> bool:
        return True


class PointerInteraction(Interaction):
    """
    Three-phase pointer handler.

    A down event accepted by handle_down_event starts tracking: the following
    drag events go to handle_drag_event until handle_up_event returns False.
    Move events (pointer not pressed) go to handle_move_event.
    """

    def __init__(self,
                 handle_down_event: Optional[Callable[[MapBrowserEvent], bool]] = None,
                 handle_drag_event: Optional[Callable[[MapBrowserEvent], None]] = None,
                 handle_up_event: Optional[Callable[[MapBrowserEvent], bool]] = None,
                 handle_move_event: Optional[Callable[[MapBrowserEvent], None]] = None):
        super().__init__()
        if handle_down_event:
            self.handle_down_event = handle_down_event
        if handle_drag_event:
            self.handle_drag_event = handle_drag_event
        if handle_up_event:
            self.handle_up_event = handle_up_event
        if handle_move_event:
            self.handle_move_event = handle_move_event
        self._handling = False

    def handle_down_event(self, event: MapBrowserEvent) -> bool:
        return False

    def handle_drag_event(self, event: MapBrowserEvent) -> None:
        pass

    def handle_up_event(self, event: MapBrowserEvent) -> bool:
        return False

    def handle_move_event(self, event: MapBrowserEvent) -> None:
        pass

    @property
    def is_handling(self) -> bool:
        return self._handling

    def handle_event(self, event: MapBrowserEvent) -> bool:
        stop = False
        if event.type == 'pointerdown':
            handled = bool(self.handle_down_event(event))
            self._handling = handled
            stop = handled
        elif event.type == 'pointerdrag':
            if self._handling:
                self.handle_drag_event(event)
        elif event.type == 'pointerup':
            if self._handling:
                self._handling = bool(self.handle_up_event(event))
        elif event.type == 'pointermove':
            self.handle_move_event(event)
        return not stop


LayerFilter = Union[Callable[[VectorLayer], bool], Iterable[VectorLayer], None]


def _make_layer_filter(layers: LayerFilter) -> Callable[[VectorLayer], bool]:
    if layers is None:
        return lambda layer: True
    if callable(layers):
        return layers
    allowed = list(layers)
    return lambda layer: layer in allowed


class Select(Interaction):
    """
    Click selection of a single feature into an observable collection.

    Clicking empty space clears the collection; clicking a feature replaces
    the selection with it.
    """

    def __init__(self, layers: LayerFilter = None, style=None,
                 features: Optional[Collection] = None):
        super().__init__()
        self.style = style
        self._layer_filter = _make_layer_filter(layers)
        self._features = features if features is not None else Collection()

    def get_features(self) -> Collection:
        return self._features

    def handle_event(self, event: MapBrowserEvent) -> bool:
        if event.type != 'click' or self._map is None:
            return True

        hit = self._map.for_each_feature_at_pixel(
            event.pixel, lambda feature, layer: feature, layer_filter=self._layer_filter
        )
        selected = self._features
        if hit is None:
            selected.clear()
        elif hit not in selected:
            selected.clear()
            selected.push(hit)
        self.dispatch('select', hit)
        return True


class Modify(PointerInteraction):
    """
    Vertex dragging for the features of a collection.

    While the pointer hovers within `pixel_tolerance` of a vertex, the overlay
    layer holds one point feature marking that vertex. The overlay feature
    count is what callers use to tell whether vertex editing is underway.
    """

    def __init__(self, features: Collection, style=None, pixel_tolerance: float = 10):
        super().__init__()
        self._features = features
        self._overlay = VectorLayer(style=style, name='modify-overlay')
        self.pixel_tolerance = pixel_tolerance
        self._vertex: Optional[Tuple[Feature, int, int]] = None
        self._dragging = False
        self._features.on('remove', self._on_feature_removed)

    def get_overlay(self) -> VectorLayer:
        return self._overlay

    def _on_feature_removed(self, event) -> None:
        if self._vertex and self._vertex[0] is event.element:
            self._clear_vertex()

    def _clear_vertex(self) -> None:
        self._vertex = None
        self._dragging = False
        self._overlay.get_source().clear()

    def _find_vertex(self, coordinate: Coordinate):
        """Return (feature, ring, index, vertex) of the closest vertex in tolerance."""
        resolution = self._map.resolution if self._map is not None else 1.0
        max_sq = (self.pixel_tolerance * resolution) ** 2
        best, best_sq = None, None
        for feature in self._features:
            geometry = feature.get_geometry()
            if geometry is None:
                continue
            for ring, index, (x, y) in geometry.iter_vertices():
                sq = (x - coordinate[0]) ** 2 + (y - coordinate[1]) ** 2
                if sq <= max_sq and (best_sq is None or sq < best_sq):
                    best, best_sq = (feature, ring, index, (x, y)), sq
        return best

    def _show_vertex(self, coordinate: Coordinate) -> None:
        source = self._overlay.get_source()
        source.clear()
        source.add_feature(Feature(Point(coordinate), style=self._overlay.style))

    def handle_move_event(self, event: MapBrowserEvent) -> None:
        found = self._find_vertex(event.coordinate)
        if found is None:
            if self._vertex is not None:
                self._clear_vertex()
            return
        feature, ring, index, vertex = found
        self._vertex = (feature, ring, index)
        self._show_vertex(vertex)

    def handle_down_event(self, event: MapBrowserEvent) -> bool:
        if self._vertex is None:
            return False
        self._dragging = True
        self.dispatch('modifystart', self._vertex[0])
        return True

    def handle_drag_event(self, event: MapBrowserEvent) -> None:
        if not self._dragging or self._vertex is None:
            return
        feature, ring, index = self._vertex
        feature.get_geometry().set_vertex(ring, index, event.coordinate)
        self._show_vertex(event.coordinate)

    def handle_up_event(self, event: MapBrowserEvent) -> bool:
        if self._dragging and self._vertex is not None:
            self.dispatch('modifyend', self._vertex[0])
        self._dragging = False
        return False
