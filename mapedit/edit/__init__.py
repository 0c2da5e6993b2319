"""
Modify control for vector features.

This package provides click-select / drag-vertex / drag-move / Delete editing:
- ModifyControl: toolbar control wiring interactions on activate/deactivate
- ModifyController: state machine, style compositing and delete handling
- CursorFeedback: cursor reflecting the interaction mode
- EditSession: tells the rest of the UI which feature is being edited

Usage:
    from mapedit.edit import ModifyControl, EditSession
    from mapedit.edit.handlers import setup_modify_handlers
"""

from mapedit.edit.constants import (
    CURSOR_GRAB,
    CURSOR_MOVE,
    DELETE_KEY,
    GEOMETRY_TYPES,
)
from mapedit.edit.controller import Mode, ModifyController, ModifyState
from mapedit.edit.cursor import CursorFeedback
from mapedit.edit.session import EditSession
from mapedit.edit.control import Control, ModifyControl

__all__ = [
    'Control',
    'ModifyControl',
    'ModifyController',
    'ModifyState',
    'Mode',
    'CursorFeedback',
    'EditSession',
    'CURSOR_GRAB',
    'CURSOR_MOVE',
    'DELETE_KEY',
    'GEOMETRY_TYPES',
]
