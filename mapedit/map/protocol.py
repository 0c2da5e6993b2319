"""
Map collaborator Protocol definitions.

This module defines the narrow interface the modify control needs from a map
engine. The in-memory classes of mapedit.map conform to these protocols; a
different engine can be plugged in by providing objects with the same shape.
"""

from typing import Any, Callable, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Geometry(Protocol):
    """A feature's geometry."""

    def get_type(self) -> str:
        """Return the geometry type name ('Point', 'LineString', 'Polygon', ...)."""
        ...

    def get_extent(self) -> Tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        ...

    def translate(self, dx: float, dy: float) -> None:
        """Shift the geometry by (dx, dy) map units."""
        ...


@runtime_checkable
class Feature(Protocol):
    """An editable object: a geometry plus an optional style."""

    def get_geometry(self) -> Optional[Geometry]:
        ...

    def get_style(self) -> Any:
        """Return the feature's own style specification, or None."""
        ...

    def set_style(self, style: Any) -> None:
        ...


@runtime_checkable
class TargetElement(Protocol):
    """The viewport element; exposes a mutable cursor string."""

    cursor: str


@runtime_checkable
class FeatureCollection(Protocol):
    """Observable collection firing 'add' and 'remove' events."""

    def on(self, event_type: str, callback: Callable) -> None:
        ...

    def un(self, event_type: str, callback: Callable) -> None:
        ...

    def clear(self) -> None:
        """Remove every element, firing 'remove' for each."""
        ...

    def get_length(self) -> int:
        ...


@runtime_checkable
class VectorSource(Protocol):
    """Backing feature store."""

    def get_features(self) -> List[Feature]:
        ...

    def has_feature(self, feature: Feature) -> bool:
        ...

    def remove_feature(self, feature: Feature) -> None:
        ...


@runtime_checkable
class MapViewport(Protocol):
    """The map the control is attached to."""

    def get_target_element(self) -> TargetElement:
        ...

    def add_interaction(self, interaction: Any) -> None:
        ...

    def remove_interaction(self, interaction: Any) -> None:
        ...

    def for_each_feature_at_pixel(self, pixel: Tuple[float, float],
                                  callback: Callable[..., Optional[Feature]],
                                  layer_filter: Optional[Callable[..., bool]] = None) -> Optional[Feature]:
        """
        Hit-test at a pixel.

        Args:
            pixel: Viewport pixel
            callback: Called as callback(feature, layer); the first truthy
                      return value is returned
            layer_filter: Optional predicate restricting the layers tested

        Returns:
            The first truthy callback result, or None
        """
        ...

    def on(self, event_type: str, callback: Callable) -> None:
        ...

    def un(self, event_type: str, callback: Callable) -> None:
        ...


@runtime_checkable
class SelectInteraction(Protocol):
    """Selection primitive; its collection fires 'add' / 'remove'."""

    def get_features(self) -> FeatureCollection:
        ...


@runtime_checkable
class ModifyInteraction(Protocol):
    """Vertex-modify primitive; a non-empty overlay means vertex editing."""

    def get_overlay(self) -> Any:
        """Return a layer whose get_source().get_features() is the overlay."""
        ...


@runtime_checkable
class EditSessionBridge(Protocol):
    """External sink told which feature, if any, is being edited."""

    def set_edit_feature(self, feature: Optional[Feature]) -> None:
        ...


@runtime_checkable
class KeyboardTarget(Protocol):
    """Where the control listens for key presses."""

    def add_listener(self, event_type: str, callback: Callable) -> None:
        ...

    def remove_listener(self, event_type: str, callback: Callable) -> None:
        ...
