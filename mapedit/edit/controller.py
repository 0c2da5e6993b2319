"""
Modify Controller - single source of truth for the modify control's state.

This controller coordinates three independently firing event sources:
- Selection changes (features added to / removed from the select collection)
- The vertex-modify overlay filling up or emptying as the pointer moves
- Pointer gestures dragging the edited feature as a whole

and keeps one notion of "the edited feature" across them. It also layers the
select style over the edited feature's own style and strips it off again,
and keeps the viewport cursor in step with the mode.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from mapedit.edit.constants import DELETE_KEY
from mapedit.edit.cursor import CursorFeedback
from mapedit.map.geometry import get_center
from mapedit.map.protocol import (
    EditSessionBridge, ModifyInteraction, SelectInteraction, VectorSource,
)
from mapedit.styles import as_style_spec, compose, decompose, get_styles

logger = logging.getLogger(__name__)


class Mode(Enum):
    IDLE = 'idle'
    SELECTED = 'selected'
    VERTEX_EDITING = 'vertex_editing'
    MOVING = 'moving'


@dataclass(frozen=True)
class ModifyState:
    """Immutable snapshot of the modify control's state."""
    edited_feature: Optional[Any] = None
    vertex_edit_active: bool = False
    coordinate: Optional[Tuple[float, float]] = None

    @property
    def mode(self) -> Mode:
        if self.edited_feature is None:
            return Mode.IDLE
        if self.coordinate is not None:
            return Mode.MOVING
        if self.vertex_edit_active:
            return Mode.VERTEX_EDITING
        return Mode.SELECTED


class ModifyController:
    """
    Reacts to selection, pointer and keyboard events for one modify control.

    Args:
        source: Backing store of the editable features
        modify_interaction: Vertex-modify primitive; its overlay is the
                            vertex-edit signal
        select_interaction: Selection primitive, cleared on delete
        select_style: Style spec layered over selected features with own styles
        editor: Edit-session bridge told which feature is being edited
        cursor: Cursor feedback for the map viewport
    """

    def __init__(self, source: VectorSource, modify_interaction: ModifyInteraction,
                 select_interaction: Optional[SelectInteraction] = None,
                 select_style=None, editor: Optional[EditSessionBridge] = None,
                 cursor: Optional[CursorFeedback] = None):
        self.source = source
        self.modify_interaction = modify_interaction
        self.select_interaction = select_interaction
        self.select_style = as_style_spec(select_style)
        self.editor = editor
        self.cursor = cursor
        self._state = ModifyState()
        self._on_state_change: Optional[Callable[[ModifyState], None]] = None

    @property
    def state(self) -> ModifyState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def edited_feature(self):
        return self._state.edited_feature

    def set_on_state_change(self, callback: Callable[[ModifyState], None]):
        self._on_state_change = callback

    def _set_state(self, **changes) -> ModifyState:
        new_state = replace(self._state, **changes)
        if new_state != self._state:
            self._state = new_state
            self._notify_change()
        return self._state

    def _notify_change(self):
        if self._on_state_change:
            self._on_state_change(self._state)

    def _notify_editor(self, feature) -> None:
        if self.editor is not None:
            self.editor.set_edit_feature(feature)

    # --- Style compositing ---

    def _apply_select_style(self, feature) -> None:
        if feature is None or feature.get_style() is None or self.select_style is None:
            return
        feature_styles = get_styles(feature.get_style())
        select_styles = get_styles(self.select_style, feature)
        feature.set_style(compose(feature_styles, select_styles))

    def _remove_select_style(self, feature) -> None:
        if feature is None or feature.get_style() is None or self.select_style is None:
            return
        styles = get_styles(feature.get_style())
        select_styles = get_styles(self.select_style, feature)
        feature.set_style(decompose(styles, select_styles))

    # --- Vertex-edit monitor & cursor ---

    def refresh_vertex_state(self) -> bool:
        """Recompute whether the modify overlay currently holds any geometry."""
        overlay = self.modify_interaction.get_overlay()
        count = len(overlay.get_source().get_features())
        logger.debug(f"Modify overlay holds {count} feature(s)")
        self._set_state(vertex_edit_active=count > 0)
        return self._state.vertex_edit_active

    def update_cursor(self) -> None:
        if self.cursor is not None:
            self.cursor.update(self._state.vertex_edit_active,
                               self._state.edited_feature is not None)

    def _refresh(self) -> None:
        self.refresh_vertex_state()
        self.update_cursor()

    # --- Selection tracker ---

    def on_selection_added(self, feature) -> None:
        """A feature was added to the selection: it becomes the edited feature."""
        # Strip a previous overlay first so re-selecting never stacks it twice
        self._remove_select_style(self._state.edited_feature)
        self._set_state(edited_feature=feature, coordinate=None)
        logger.debug(f"Selected {feature!r}")
        self._notify_editor(feature)
        self._refresh()
        self._apply_select_style(feature)

    def on_selection_cleared(self) -> None:
        """The selection was cleared: restore the style and end the edit."""
        feature = self._state.edited_feature
        self._remove_select_style(feature)
        self._notify_editor(None)
        self._set_state(edited_feature=None, coordinate=None)
        logger.debug(f"Selection cleared ({feature!r})")
        self._refresh()

    def handle_collection_add(self, event) -> None:
        self.on_selection_added(event.element)

    def handle_collection_remove(self, event) -> None:
        self.on_selection_cleared()

    def on_map_click(self, event) -> None:
        """
        Select the feature under the click, limited to the backing store.

        Clicking nothing clears the edited feature. Clicking the edited
        feature again strips and re-applies its select style. The editor is
        always told the result, even when the selection collection already
        reported the same feature for this click.
        """
        self._remove_select_style(self._state.edited_feature)

        feature = event.map.for_each_feature_at_pixel(
            event.pixel,
            lambda f, layer=None: f if self.source.has_feature(f) else None,
        )
        self._set_state(edited_feature=feature, coordinate=None)
        self._apply_select_style(feature)
        self._notify_editor(feature)
        self._refresh()

    # --- Move handler ---

    def start_move(self, event) -> bool:
        """Pointer down: capture the gesture if the edited feature can be moved."""
        feature = self._state.edited_feature
        if feature is None or self._state.vertex_edit_active:
            return False

        geometry = feature.get_geometry()
        if geometry.get_type() == 'Point':
            coordinate = get_center(geometry.get_extent())
        else:
            coordinate = tuple(event.coordinate)
        self._set_state(coordinate=coordinate)
        logger.debug(f"Move started at {coordinate}")
        return True

    def move(self, event) -> None:
        """Pointer drag: translate by the delta since the previous tick."""
        if self._state.vertex_edit_active:
            return
        feature = self._state.edited_feature
        reference = self._state.coordinate
        if feature is None or reference is None:
            return

        delta_x = event.coordinate[0] - reference[0]
        delta_y = event.coordinate[1] - reference[1]
        feature.get_geometry().translate(delta_x, delta_y)
        self._set_state(coordinate=tuple(event.coordinate))

    def stop_move(self, event=None) -> bool:
        """Pointer up: drop the reference coordinate. Never continues the gesture."""
        if self._state.coordinate is not None:
            logger.debug("Move stopped")
        self._set_state(coordinate=None)
        return False

    def handle_pointer_move(self, event=None) -> None:
        self._refresh()

    # --- Delete handler ---

    def delete_feature(self, event) -> None:
        """Remove the edited feature from its source on a Delete key press."""
        feature = self._state.edited_feature
        if getattr(event, 'key', None) != DELETE_KEY or feature is None:
            return

        self.source.remove_feature(feature)
        logger.info(f"Deleted {feature!r}")
        self.clear_selection()

    def clear_selection(self) -> None:
        """Clear the selection collection and end any edit it did not cover."""
        if self.select_interaction is not None:
            self.select_interaction.get_features().clear()
        if self._state.edited_feature is not None:
            self.on_selection_cleared()
        else:
            self.update_cursor()
