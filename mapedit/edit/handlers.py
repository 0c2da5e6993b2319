"""
Edit Handlers - bind NiceGUI events to the modify control.

Mouse events of the element hosting the map are turned into pixel positions
and fed to Map.handle_pointer(); key-downs from ui.keyboard go to the
Document the control listens on. The element's inline style carries the
cursor chosen by the control.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from nicegui import ui

from mapedit.map.viewport import Document, Map

logger = logging.getLogger(__name__)

POINTER_EVENT_KEYS = ['offsetX', 'offsetY', 'buttons']


def normalize_pointer_payload(raw: Any) -> Optional[Tuple[float, float]]:
    """
    Extract a pixel position from a browser event payload.

    Accepts NiceGUI event arguments (anything with `.args`), [x, y] lists
    and dicts with offsetX/offsetY (or x/y). Returns None when no position
    can be found.
    """
    if hasattr(raw, 'args'):
        raw = raw.args

    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        x, y = raw[0], raw[1]
    elif isinstance(raw, dict):
        x = raw.get('offsetX', raw.get('x'))
        y = raw.get('offsetY', raw.get('y'))
    else:
        return None

    try:
        return (float(x), float(y))
    except (TypeError, ValueError):
        return None


def pointer_buttons(raw: Any) -> Optional[int]:
    """Return the pressed-buttons bitmask of a mouse event payload, if present."""
    if hasattr(raw, 'args'):
        raw = raw.args
    if not isinstance(raw, dict) or raw.get('buttons') is None:
        return None
    try:
        return int(raw['buttons'])
    except (TypeError, ValueError):
        return None


class ElementCursor:
    """Exposes a NiceGUI element's CSS cursor as a plain `cursor` attribute."""

    def __init__(self, element):
        self._element = element

    @property
    def cursor(self) -> str:
        return self._element.style.get('cursor', '')

    @cursor.setter
    def cursor(self, value: str) -> None:
        current = self.cursor
        if value:
            self._element.style(add=f'cursor: {value}')
        elif current:
            self._element.style(remove=f'cursor: {current}')


def create_pointer_handlers(map_: Map) -> Dict[str, Callable]:
    """Return mousedown / mousemove / mouseup / mouseleave handlers feeding the map."""

    def make_handler(action: str) -> Callable:
        def handler(event):
            pixel = normalize_pointer_payload(event)
            if pixel is None:
                logger.warning(f"Ignoring {action} event without a position: {event!r}")
                return
            map_.handle_pointer(action, pixel, buttons=pointer_buttons(event))
        return handler

    return {
        'handle_mouse_down': make_handler('down'),
        'handle_mouse_move': make_handler('move'),
        'handle_mouse_up': make_handler('up'),
        'handle_mouse_leave': make_handler('leave'),
    }


def create_key_handler(document: Document) -> Callable:
    """Return a ui.keyboard callback forwarding key-downs to the document."""

    def handle_keyboard(e):
        if not e.action.keydown:
            return
        key = getattr(e.key, 'name', e.key)
        document.key_down(str(key))

    return handle_keyboard


def setup_modify_handlers(map_: Map, element, document: Document) -> Dict[str, Callable]:
    """
    Set up all event handlers for editing on a NiceGUI element.

    Args:
        map_: Map receiving the pointer input
        element: NiceGUI element the map is displayed in
        document: Keyboard target the modify control listens on

    Returns:
        Dict with the handler functions that were bound
    """
    handlers = create_pointer_handlers(map_)
    handlers['handle_keyboard'] = create_key_handler(document)

    element.on('mousedown', handlers['handle_mouse_down'], POINTER_EVENT_KEYS)
    element.on('mousemove', handlers['handle_mouse_move'], POINTER_EVENT_KEYS)
    element.on('mouseup', handlers['handle_mouse_up'], POINTER_EVENT_KEYS)
    element.on('mouseleave', handlers['handle_mouse_leave'], POINTER_EVENT_KEYS)
    ui.keyboard(on_key=handlers['handle_keyboard'])

    return handlers
