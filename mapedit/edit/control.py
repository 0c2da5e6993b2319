"""
Toolbar controls.

Control is the generic base: presentation (title, class name, image), the map
and editor it is attached to, and the active flag. ModifyControl builds the
select, modify and move interactions around a ModifyController and registers
or releases all of them on activation / deactivation.
"""

import logging
from contextlib import contextmanager
from typing import Optional

from mapedit.edit.constants import (
    DEFAULT_CLASS_NAME,
    DEFAULT_GEOMETRY_TYPE,
    DEFAULT_IMAGE,
    DEFAULT_TITLE,
    GEOMETRY_TYPES,
    VERTEX_PIXEL_TOLERANCE,
)
from mapedit.edit.controller import ModifyController
from mapedit.edit.cursor import CursorFeedback
from mapedit.map.events import Observable
from mapedit.map.collection import Collection
from mapedit.map.interactions import Modify, PointerInteraction, Select
from mapedit.map.protocol import EditSessionBridge, KeyboardTarget, MapViewport
from mapedit.map.source import VectorLayer, VectorSource

logger = logging.getLogger(__name__)


class Control(Observable):
    """
    Base class for toolbar controls.

    Fires 'change:active' with the new active flag unless the change is silent.
    """

    def __init__(self, title: str = '', class_name: str = '', image: str = '',
                 source: Optional[VectorSource] = None,
                 geometry_type: str = DEFAULT_GEOMETRY_TYPE):
        super().__init__()
        if geometry_type not in GEOMETRY_TYPES:
            raise ValueError(
                f"Unknown geometry type '{geometry_type}'. "
                f"Expected one of: {', '.join(GEOMETRY_TYPES)}"
            )
        self.title = title
        self.class_name = class_name
        self.image = image
        self.source = source if source is not None else VectorSource()
        self.geometry_type = geometry_type
        self.map: Optional[MapViewport] = None
        self.editor: Optional[EditSessionBridge] = None
        self.document: Optional[KeyboardTarget] = None
        self._active = False

    def set_map(self, map_: Optional[MapViewport]) -> None:
        self.map = map_

    def set_editor(self, editor: Optional[EditSessionBridge]) -> None:
        self.editor = editor

    def set_document(self, document: Optional[KeyboardTarget]) -> None:
        """Set the keyboard target the control listens on."""
        self.document = document

    def get_active(self) -> bool:
        return self._active

    def layer_filter(self, layer) -> bool:
        """Only layers backed by this control's source take part."""
        return isinstance(layer, VectorLayer) and layer.get_source() is self.source

    def activate(self, silent: bool = False) -> None:
        self._active = True
        if not silent:
            self.dispatch('change:active', True)

    def deactivate(self, silent: bool = False) -> None:
        self._active = False
        if not silent:
            self.dispatch('change:active', False)


class ModifyControl(Control):
    """
    Control for modifying geometries: click to select, drag vertices to
    reshape, drag the body to move, press Delete to remove.

    Args:
        source: Backing store of the editable features
        geometry_type: Geometry type the control is meant for
        style: Style layered over the selected feature (select style)
        modify_style: Style of the vertex-modify overlay
        title, class_name, image: Toolbar presentation
        pixel_tolerance: Distance in pixels to pick up a vertex
        features: Collection to hold the selection, shared with the caller
    """

    def __init__(self, source: Optional[VectorSource] = None,
                 geometry_type: str = DEFAULT_GEOMETRY_TYPE,
                 style=None, modify_style=None,
                 title: str = DEFAULT_TITLE, class_name: str = DEFAULT_CLASS_NAME,
                 image: str = DEFAULT_IMAGE,
                 pixel_tolerance: float = VERTEX_PIXEL_TOLERANCE,
                 features: Optional[Collection] = None):
        super().__init__(title=title, class_name=class_name, image=image,
                         source=source, geometry_type=geometry_type)

        self.select_interaction = Select(layers=self.layer_filter, style=style, features=features)
        self.modify_interaction = Modify(
            self.select_interaction.get_features(),
            style=modify_style,
            pixel_tolerance=pixel_tolerance,
        )
        self.cursor = CursorFeedback(self._get_target_element)
        self.controller = ModifyController(
            source=self.source,
            modify_interaction=self.modify_interaction,
            select_interaction=self.select_interaction,
            select_style=style,
            cursor=self.cursor,
        )
        self.move_interaction = PointerInteraction(
            handle_down_event=self.controller.start_move,
            handle_drag_event=self.controller.move,
            handle_up_event=self.controller.stop_move,
            handle_move_event=self.controller.handle_pointer_move,
        )

        # Bound once so the very same callables can be unregistered
        self._on_key_down = self.controller.delete_feature
        self._on_map_click = self.controller.on_map_click
        self._on_selection_add = self.controller.handle_collection_add
        self._on_selection_remove = self.controller.handle_collection_remove

        features = self.select_interaction.get_features()
        features.on('add', self._on_selection_add)
        features.on('remove', self._on_selection_remove)

    def _get_target_element(self):
        return self.map.get_target_element() if self.map is not None else None

    def set_editor(self, editor: Optional[EditSessionBridge]) -> None:
        super().set_editor(editor)
        self.controller.editor = editor

    @property
    def mode(self):
        return self.controller.mode

    def activate(self, silent: bool = False) -> None:
        """Register the keyboard listener and the modify, move and select interactions."""
        if self._active:
            return
        if self.map is None:
            raise RuntimeError("ModifyControl.activate() requires a map; call set_map() first")

        try:
            if self.document is not None:
                self.document.add_listener('keydown', self._on_key_down)
            self.map.add_interaction(self.modify_interaction)
            self.map.add_interaction(self.move_interaction)
            self.map.add_interaction(self.select_interaction)
            self.map.on('click', self._on_map_click)
        except Exception:
            logger.error("Activation of the modify control failed, releasing handlers")
            self.deactivate(silent=True)
            raise

        super().activate(silent)
        logger.info(f"Activated '{self.title}'")

    def deactivate(self, silent: bool = False) -> None:
        """Clear the selection and release every handler registered by activate()."""
        try:
            self.controller.clear_selection()
            self.controller.stop_move()
        finally:
            if self.document is not None:
                self.document.remove_listener('keydown', self._on_key_down)
            if self.map is not None:
                self.map.un('click', self._on_map_click)
                self.map.remove_interaction(self.modify_interaction)
                self.map.remove_interaction(self.move_interaction)
                self.map.remove_interaction(self.select_interaction)
            self.cursor.restore()
            super().deactivate(silent)
        logger.info(f"Deactivated '{self.title}'")

    @contextmanager
    def activated(self):
        """Keep the control active for the duration of a `with` block."""
        self.activate()
        try:
            yield self
        finally:
            self.deactivate()
