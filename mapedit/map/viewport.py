"""
In-memory map viewport.

Map owns the layers and interactions, converts pixels to map coordinates and
turns raw pointer input (down / move / up at a pixel) into MapBrowserEvents:

- 'pointerdown' on press
- 'pointerdrag' for moves while pressed, 'pointermove' otherwise
- 'pointerup' on release, followed by 'click' when the pointer did not drag
- 'pointerup' alone when the pointer leaves the viewport while pressed

Interactions are offered each event in the order they were added until one
returns False. 'click' events then go to the map's own 'click' listeners.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from mapedit.map.events import KeyEvent, MapBrowserEvent, Observable
from mapedit.map.feature import Feature
from mapedit.map.geometry import Coordinate
from mapedit.map.source import VectorLayer

logger = logging.getLogger(__name__)

Pixel = Tuple[float, float]


@dataclass
class ViewportElement:
    """The element the map renders into. Only its cursor matters here."""
    cursor: str = ''


class Document(Observable):
    """Keyboard event target."""

    def add_listener(self, event_type: str, callback: Callable) -> None:
        self.on(event_type, callback)

    def remove_listener(self, event_type: str, callback: Callable) -> None:
        self.un(event_type, callback)

    def key_down(self, key: str) -> None:
        self.dispatch('keydown', KeyEvent(key=key))


class Map(Observable):
    """
    Minimal map: y axis points up in map units, down in pixels.

    Args:
        target: Element whose cursor reflects the interaction mode
        center: Map coordinate shown at the middle of the viewport
        resolution: Map units per pixel
        size: Viewport size in pixels (width, height)
        hit_tolerance: Extra pixels accepted around geometries when hit-testing
    """

    def __init__(self, target: Optional[ViewportElement] = None,
                 center: Coordinate = (0.0, 0.0), resolution: float = 1.0,
                 size: Tuple[int, int] = (800, 600), hit_tolerance: float = 3):
        super().__init__()
        self._target = target if target is not None else ViewportElement()
        self.center = center
        self.resolution = resolution
        self.size = size
        self.hit_tolerance = hit_tolerance
        self._layers: List[VectorLayer] = []
        self._interactions: list = []
        self._down_pixel: Optional[Pixel] = None
        self._dragging = False

    # --- Layers & interactions ---

    def get_target_element(self) -> ViewportElement:
        return self._target

    def add_layer(self, layer: VectorLayer) -> None:
        if layer not in self._layers:
            self._layers.append(layer)

    def remove_layer(self, layer: VectorLayer) -> None:
        if layer in self._layers:
            self._layers.remove(layer)

    def get_layers(self) -> List[VectorLayer]:
        return list(self._layers)

    def add_interaction(self, interaction) -> None:
        if interaction in self._interactions:
            return
        self._interactions.append(interaction)
        interaction.set_map(self)

    def remove_interaction(self, interaction) -> None:
        if interaction not in self._interactions:
            return
        self._interactions.remove(interaction)
        interaction.set_map(None)

    def get_interactions(self) -> list:
        return list(self._interactions)

    # --- Coordinates & hit-testing ---

    def get_coordinate_from_pixel(self, pixel: Pixel) -> Coordinate:
        width, height = self.size
        x = self.center[0] + (pixel[0] - width / 2) * self.resolution
        y = self.center[1] - (pixel[1] - height / 2) * self.resolution
        return (x, y)

    def get_pixel_from_coordinate(self, coordinate: Coordinate) -> Pixel:
        width, height = self.size
        px = (coordinate[0] - self.center[0]) / self.resolution + width / 2
        py = (self.center[1] - coordinate[1]) / self.resolution + height / 2
        return (px, py)

    def for_each_feature_at_pixel(self, pixel: Pixel,
                                  callback: Callable[[Feature, VectorLayer], Optional[Feature]],
                                  layer_filter: Optional[Callable[[VectorLayer], bool]] = None):
        """
        Call `callback(feature, layer)` for features under the pixel, topmost
        first, and return the first truthy result (or None).
        """
        coordinate = self.get_coordinate_from_pixel(pixel)
        tolerance = self.hit_tolerance * self.resolution
        for layer in reversed(self._layers):
            if layer_filter is not None and not layer_filter(layer):
                continue
            for feature in reversed(layer.get_source().get_features()):
                geometry = feature.get_geometry()
                if geometry is None or not geometry.contains_coordinate(coordinate, tolerance):
                    continue
                result = callback(feature, layer)
                if result:
                    return result
        return None

    # --- Event dispatch ---

    def handle_map_browser_event(self, event: MapBrowserEvent) -> None:
        for interaction in list(self._interactions):
            if not interaction.get_active():
                continue
            if not interaction.handle_event(event):
                break
        if event.type == 'click':
            self.dispatch('click', event)

    def _make_event(self, event_type: str, pixel: Pixel) -> MapBrowserEvent:
        return MapBrowserEvent(
            type=event_type,
            pixel=(pixel[0], pixel[1]),
            coordinate=self.get_coordinate_from_pixel(pixel),
            map=self,
            dragging=self._dragging,
        )

    def _release(self, pixel: Pixel, allow_click: bool) -> None:
        if self._down_pixel is None:
            return
        was_dragging = self._dragging
        self.handle_map_browser_event(self._make_event('pointerup', pixel))
        self._down_pixel = None
        self._dragging = False
        if allow_click and not was_dragging:
            self.handle_map_browser_event(self._make_event('click', pixel))

    def handle_pointer(self, action: str, pixel: Pixel, buttons: Optional[int] = None) -> None:
        """
        Feed raw pointer input into the map.

        Args:
            action: 'down', 'move', 'up' or 'leave'
            pixel: Pointer position in viewport pixels
            buttons: Pressed mouse buttons, if the UI reports them. A move with
                     no button pressed ends a press whose release was missed.

        'leave' ends a press without a click, since the release will happen
        outside the viewport.
        """
        if action == 'down':
            self._down_pixel = pixel
            self._dragging = False
            self.handle_map_browser_event(self._make_event('pointerdown', pixel))
        elif action == 'move':
            if self._down_pixel is not None and buttons == 0:
                logger.debug(f"Pointer released outside the viewport, ending press at {pixel}")
                self._release(pixel, allow_click=False)
            if self._down_pixel is not None:
                if pixel != self._down_pixel:
                    self._dragging = True
                self.handle_map_browser_event(self._make_event('pointerdrag', pixel))
            else:
                self.handle_map_browser_event(self._make_event('pointermove', pixel))
        elif action == 'up':
            self._release(pixel, allow_click=True)
        elif action == 'leave':
            self._release(pixel, allow_click=False)
        else:
            logger.warning(f"Ignoring unknown pointer action: {action}")
