"""
Tests for the NiceGUI event bridge (no browser needed).
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from mapedit.edit import CursorFeedback, ModifyControl
from mapedit.edit.handlers import (
    ElementCursor,
    create_key_handler,
    create_pointer_handlers,
    normalize_pointer_payload,
    pointer_buttons,
    setup_modify_handlers,
)
from mapedit.map import Document, Feature, Map, Point, VectorLayer, VectorSource


class FakeStyle(dict):
    """Mimics a NiceGUI element's style: a dict that is also callable."""

    def __call__(self, add=None, remove=None):
        if remove:
            self.pop(remove.split(':')[0].strip(), None)
        if add:
            key, value = add.split(':', 1)
            self[key.strip()] = value.strip()


def key_event(key, keydown=True):
    return SimpleNamespace(action=SimpleNamespace(keydown=keydown),
                           key=SimpleNamespace(name=key))


class TestNormalizePointerPayload:

    def test_handles_dict(self):
        assert normalize_pointer_payload({'offsetX': 10, 'offsetY': 20}) == (10.0, 20.0)

    def test_handles_xy_dict(self):
        assert normalize_pointer_payload({'x': 1, 'y': 2}) == (1.0, 2.0)

    def test_handles_list(self):
        assert normalize_pointer_payload([3, 4]) == (3.0, 4.0)

    def test_handles_event_arguments(self):
        event = SimpleNamespace(args={'offsetX': 5, 'offsetY': 6})
        assert normalize_pointer_payload(event) == (5.0, 6.0)

    def test_buttons(self):
        assert pointer_buttons({'offsetX': 1, 'offsetY': 2, 'buttons': 1}) == 1
        assert pointer_buttons(SimpleNamespace(args={'buttons': 0})) == 0
        assert pointer_buttons({'offsetX': 1}) is None
        assert pointer_buttons([1, 2]) is None

    def test_rejects_missing_position(self):
        assert normalize_pointer_payload({'offsetX': 5}) is None
        assert normalize_pointer_payload('nope') is None


class TestPointerHandlers:

    def test_forwards_actions_to_map(self):
        map_ = MagicMock()
        handlers = create_pointer_handlers(map_)

        handlers['handle_mouse_down']({'offsetX': 1, 'offsetY': 2})
        handlers['handle_mouse_move']([3, 4])
        handlers['handle_mouse_up'](SimpleNamespace(args={'offsetX': 3, 'offsetY': 4}))

        assert [c.args for c in map_.handle_pointer.call_args_list] == [
            ('down', (1.0, 2.0)),
            ('move', (3.0, 4.0)),
            ('up', (3.0, 4.0)),
        ]

    def test_buttons_are_forwarded(self):
        map_ = MagicMock()
        handlers = create_pointer_handlers(map_)

        handlers['handle_mouse_move']({'offsetX': 1, 'offsetY': 2, 'buttons': 0})
        handlers['handle_mouse_leave']({'offsetX': 1, 'offsetY': 2})

        assert map_.handle_pointer.call_args_list[0].kwargs == {'buttons': 0}
        assert map_.handle_pointer.call_args_list[1].args == ('leave', (1.0, 2.0))
        assert map_.handle_pointer.call_args_list[1].kwargs == {'buttons': None}

    def test_release_outside_canvas_ends_drag(self):
        map_ = Map(size=(100, 100))
        feature = Feature(Point((0, 0)))
        map_.add_layer(VectorLayer(VectorSource([feature])))
        control = ModifyControl(source=map_.get_layers()[0].get_source())
        control.set_map(map_)
        control.activate()
        handlers = create_pointer_handlers(map_)

        handlers['handle_mouse_down']({'offsetX': 50, 'offsetY': 50, 'buttons': 1})
        handlers['handle_mouse_up']({'offsetX': 50, 'offsetY': 50, 'buttons': 0})
        handlers['handle_mouse_down']({'offsetX': 50, 'offsetY': 50, 'buttons': 1})
        handlers['handle_mouse_move']({'offsetX': 80, 'offsetY': 50, 'buttons': 0})

        assert feature.get_geometry().get_coordinates() == (0, 0)

    def test_bad_payload_is_logged_and_dropped(self, caplog):
        map_ = MagicMock()
        handlers = create_pointer_handlers(map_)
        with caplog.at_level('WARNING'):
            handlers['handle_mouse_down']({})
        map_.handle_pointer.assert_not_called()
        assert 'without a position' in caplog.text


class TestKeyHandler:

    def test_keydown_is_forwarded(self):
        document = Document()
        keys = []
        document.add_listener('keydown', lambda e: keys.append(e.key))

        handler = create_key_handler(document)
        handler(key_event('Delete'))
        handler(key_event('Delete', keydown=False))

        assert keys == ['Delete']


class TestElementCursor:

    @pytest.fixture
    def element(self):
        return SimpleNamespace(style=FakeStyle())

    def test_reads_and_writes_inline_cursor(self, element):
        target = ElementCursor(element)
        assert target.cursor == ''

        target.cursor = 'move'
        assert element.style['cursor'] == 'move'
        assert target.cursor == 'move'

    def test_empty_value_removes_cursor(self, element):
        target = ElementCursor(element)
        target.cursor = 'grab'
        target.cursor = ''
        assert 'cursor' not in element.style

    def test_works_with_cursor_feedback(self, element):
        target = ElementCursor(element)
        feedback = CursorFeedback(lambda: target)

        feedback.update(vertex_edit_active=False, has_feature=True)
        assert target.cursor == 'move'
        feedback.update(vertex_edit_active=False, has_feature=False)
        assert target.cursor == ''


class TestSetupModifyHandlers:

    def test_binds_element_and_keyboard(self):
        element = MagicMock()
        with patch('mapedit.edit.handlers.ui') as mock_ui:
            handlers = setup_modify_handlers(MagicMock(), element, Document())

        bound = [c.args[0] for c in element.on.call_args_list]
        assert bound == ['mousedown', 'mousemove', 'mouseup', 'mouseleave']
        assert all('buttons' in c.args[2] for c in element.on.call_args_list)
        mock_ui.keyboard.assert_called_once_with(on_key=handlers['handle_keyboard'])
