"""
Edit Session - tells the rest of the UI which feature is being edited.
"""

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class EditSession:
    """Holds the current edit feature and notifies subscribers when it changes."""

    def __init__(self):
        self._edit_feature = None
        self._callbacks: List[Callable] = []

    def get_edit_feature(self):
        return self._edit_feature

    def set_edit_feature(self, feature) -> None:
        """
        Set the feature being edited (None when editing ends).

        Subscribers run only when the feature actually changes, so the
        collection and map-click paths of a single click notify them once.
        """
        if feature is self._edit_feature:
            return
        self._edit_feature = feature
        logger.debug(f"Edit feature: {feature!r}")
        for callback in list(self._callbacks):
            callback(feature)

    def on_change(self, callback: Callable[[Optional[object]], None]) -> None:
        self._callbacks.append(callback)

    def off_change(self, callback: Callable) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)
