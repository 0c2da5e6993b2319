"""
Cursor Feedback - reflects the interaction mode on the viewport cursor.

The cursor in place before the first override is kept in a single slot and
put back once no mode needs a special cursor.
"""

import logging
from typing import Callable, Optional

from mapedit.edit.constants import CURSOR_GRAB, CURSOR_MOVE
from mapedit.map.protocol import TargetElement

logger = logging.getLogger(__name__)


class CursorFeedback:
    """
    Applies cursor names to the map's target element.

    Args:
        get_element: Returns the element to style, or None when detached
    """

    def __init__(self, get_element: Callable[[], Optional[TargetElement]]):
        self._get_element = get_element
        self.saved: Optional[str] = None

    @property
    def current(self) -> Optional[str]:
        element = self._get_element()
        return element.cursor if element is not None else None

    def set_cursor(self, cursor: str) -> None:
        """Overwrite the cursor, saving the previous one if the slot is empty."""
        element = self._get_element()
        if element is None:
            return
        if element.cursor != cursor:
            if self.saved is None:
                self.saved = element.cursor
            element.cursor = cursor
            logger.debug(f"Cursor: {self.saved!r} -> {cursor!r}")

    def restore(self) -> bool:
        """Put the saved cursor back and clear the slot. Returns True if restored."""
        if self.saved is None:
            return False
        self.set_cursor(self.saved)
        self.saved = None
        return True

    def update(self, vertex_edit_active: bool, has_feature: bool) -> Optional[str]:
        """
        Apply the cursor policy for the current mode.

        Returns:
            The cursor now applied, or None if nothing changed
        """
        if vertex_edit_active:
            self.set_cursor(CURSOR_GRAB)
            return CURSOR_GRAB
        if has_feature:
            self.set_cursor(CURSOR_MOVE)
            return CURSOR_MOVE
        if self.restore():
            return self.current
        return None
