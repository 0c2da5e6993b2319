"""
Tests for cursor feedback: policy mapping and one-slot save/restore.
"""

import pytest

from mapedit.edit import CURSOR_GRAB, CURSOR_MOVE, CursorFeedback
from mapedit.map import ViewportElement


@pytest.fixture
def element():
    return ViewportElement(cursor='crosshair')


@pytest.fixture
def cursor(element):
    return CursorFeedback(lambda: element)


class TestSetCursor:

    def test_first_override_saves_previous(self, cursor, element):
        cursor.set_cursor('move')
        assert element.cursor == 'move'
        assert cursor.saved == 'crosshair'

    def test_later_overrides_keep_first_saved(self, cursor, element):
        cursor.set_cursor('move')
        cursor.set_cursor('grab')
        assert element.cursor == 'grab'
        assert cursor.saved == 'crosshair'

    def test_same_cursor_saves_nothing(self, cursor):
        cursor.set_cursor('crosshair')
        assert cursor.saved is None

    def test_restore_happens_once(self, cursor, element):
        cursor.set_cursor('move')
        assert cursor.restore() is True
        assert element.cursor == 'crosshair'
        assert cursor.saved is None
        assert cursor.restore() is False

    def test_empty_cursor_is_restored(self):
        element = ViewportElement()
        cursor = CursorFeedback(lambda: element)
        cursor.set_cursor('move')
        assert cursor.saved == ''
        cursor.restore()
        assert element.cursor == ''

    def test_detached_map_is_ignored(self):
        cursor = CursorFeedback(lambda: None)
        cursor.set_cursor('move')
        assert cursor.saved is None
        assert cursor.current is None


class TestPolicy:
    """Exactly one branch fires per update."""

    def test_vertex_editing_wins(self, cursor, element):
        assert cursor.update(vertex_edit_active=True, has_feature=True) == CURSOR_GRAB
        assert element.cursor == 'grab'

    def test_feature_means_move(self, cursor, element):
        assert cursor.update(vertex_edit_active=False, has_feature=True) == CURSOR_MOVE
        assert element.cursor == 'move'

    def test_idle_restores_saved(self, cursor, element):
        cursor.update(vertex_edit_active=False, has_feature=True)
        cursor.update(vertex_edit_active=True, has_feature=True)
        assert cursor.update(vertex_edit_active=False, has_feature=False) == 'crosshair'
        assert element.cursor == 'crosshair'
        assert cursor.saved is None

    def test_idle_without_saved_changes_nothing(self, cursor, element):
        assert cursor.update(vertex_edit_active=False, has_feature=False) is None
        assert element.cursor == 'crosshair'
