"""
Event types and a minimal observable base for the map primitives.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass
class MapBrowserEvent:
    """A pointer event translated into map space."""
    type: str  # 'pointerdown', 'pointerdrag', 'pointermove', 'pointerup', 'click'
    pixel: Tuple[float, float]
    coordinate: Tuple[float, float]
    map: Any = None
    dragging: bool = False


@dataclass
class KeyEvent:
    """A keyboard event forwarded from the UI layer."""
    key: str
    type: str = 'keydown'


@dataclass
class CollectionEvent:
    """Fired by a Collection when an element is added or removed."""
    type: str  # 'add' or 'remove'
    element: Any = None


class Observable:
    """
    Keeps listener lists per event type.

    Listeners are called in registration order. A listener registered twice
    is called twice, matching how the callbacks were added.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def on(self, event_type: str, callback: Callable) -> None:
        """Register a callback for an event type."""
        self._listeners.setdefault(event_type, []).append(callback)

    def un(self, event_type: str, callback: Callable) -> None:
        """Remove a callback for an event type, if registered."""
        listeners = self._listeners.get(event_type)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def has_listener(self, event_type: str, callback: Optional[Callable] = None) -> bool:
        listeners = self._listeners.get(event_type, [])
        if callback is None:
            return bool(listeners)
        return callback in listeners

    def dispatch(self, event_type: str, event: Any = None) -> None:
        # Copy so listeners may unregister themselves while being called
        for callback in list(self._listeners.get(event_type, [])):
            callback(event)
