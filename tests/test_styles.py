"""
Tests for style normalization and select-style compositing.
"""

import pytest

from mapedit.map import Feature, Point
from mapedit.styles import (
    ConstantStyle,
    FeatureStyleFunction,
    StaticStyleFunction,
    Style,
    StyleList,
    as_style_spec,
    compose,
    decompose,
    get_styles,
)

OWN = Style(fill='#ff0000')
OTHER = Style(stroke='#00ff00')
SELECT = Style(stroke='#00bcd4', stroke_width=3)


@pytest.fixture
def feature():
    return Feature(Point((0, 0)), feature_id='f1')


class TestAsStyleSpec:
    """Raw style values resolve to one tagged variant."""

    def test_none_stays_none(self):
        assert as_style_spec(None) is None

    def test_single_entry_is_constant(self):
        assert isinstance(as_style_spec(OWN), ConstantStyle)

    def test_list_and_tuple_are_style_lists(self):
        assert isinstance(as_style_spec([OWN]), StyleList)
        assert isinstance(as_style_spec((OWN, OTHER)), StyleList)

    def test_zero_arg_function_is_static(self):
        assert isinstance(as_style_spec(lambda: OWN), StaticStyleFunction)

    def test_one_arg_function_is_per_feature(self):
        assert isinstance(as_style_spec(lambda f: OWN), FeatureStyleFunction)

    def test_existing_spec_is_returned_as_is(self):
        spec = StyleList([OWN])
        assert as_style_spec(spec) is spec


class TestGetStyles:
    """get_styles always returns a list."""

    def test_absent_style(self):
        assert get_styles(None) == []

    def test_constant_is_wrapped(self):
        assert get_styles(OWN) == [OWN]

    def test_list_is_copied(self):
        styles = [OWN, OTHER]
        result = get_styles(styles)
        assert result == styles
        assert result is not styles

    def test_static_function_called_without_argument(self):
        calls = []

        def shared():
            calls.append(True)
            return OWN

        assert get_styles(shared) == [OWN]
        assert calls == [True]

    def test_feature_function_receives_feature(self, feature):
        seen = []

        def per_feature(f):
            seen.append(f)
            return [OWN, OTHER]

        assert get_styles(per_feature, feature) == [OWN, OTHER]
        assert seen == [feature]

    def test_feature_function_without_feature_gets_none(self):
        seen = []
        get_styles(lambda f: seen.append(f) or OWN)
        assert seen == [None]

    def test_function_returning_none(self):
        assert get_styles(lambda: None) == []


class TestCompositing:
    """compose/decompose add and strip the select overlay."""

    def test_compose_appends_select_styles(self):
        assert compose([OWN], [SELECT]) == [OWN, SELECT]

    def test_decompose_restores_own_styles(self):
        own = [OWN, OTHER]
        assert decompose(compose(own, [SELECT]), [SELECT]) == own

    def test_decompose_cuts_at_first_equal_entry(self):
        # The own styles already hold an entry equal to the first select entry:
        # the cut happens there, dropping the own entries after it.
        own = [OWN, Style(stroke='#00bcd4', stroke_width=3), OTHER]
        merged = compose(own, [SELECT])
        assert decompose(merged, [SELECT]) == [OWN]

    def test_decompose_without_select_styles(self):
        assert decompose([OWN, OTHER], []) == [OWN, OTHER]

    def test_decompose_when_select_entry_absent(self):
        assert decompose([OWN, OTHER], [SELECT]) == [OWN, OTHER]

    def test_style_equality_is_by_value(self):
        assert Style(fill='#fff') == Style(fill='#fff')


class TestStyleFromDict:

    def test_known_keys(self):
        style = Style.from_dict({'fill': '#fff', 'radius': 4})
        assert style == Style(fill='#fff', radius=4)
        assert style.to_dict() == {'fill': '#fff', 'stroke_width': 1.0, 'radius': 4, 'z_index': 0}

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match='colour'):
            Style.from_dict({'colour': 'red'})
