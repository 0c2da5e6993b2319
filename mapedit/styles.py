"""
Style Compositor - normalizes style specifications and layers a "selected"
overlay style on top of a feature's own style.

A style specification is resolved once, at configuration time, into one of
four variants:

- ConstantStyle: a single Style entry
- StyleList: an ordered list of entries
- FeatureStyleFunction: fn(feature) -> entry | list, per-feature styling
- StaticStyleFunction: fn() -> entry | list, shared styling

get_styles() then always yields a flat list, and compose()/decompose() add
and strip the overlay.
"""

import inspect
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional


@dataclass(frozen=True)
class Style:
    """A renderable style entry. Compared by value."""
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: float = 1.0
    radius: Optional[float] = None
    z_index: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Style':
        known = {'fill', 'stroke', 'stroke_width', 'radius', 'z_index'}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown style keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class StyleSpec:
    """Base class of the style specification variants."""

    def resolve(self, feature=None) -> Any:
        raise NotImplementedError


class ConstantStyle(StyleSpec):
    def __init__(self, style):
        self.style = style

    def resolve(self, feature=None):
        return self.style

    def __repr__(self):
        return f"ConstantStyle({self.style!r})"


class StyleList(StyleSpec):
    def __init__(self, styles):
        self.styles = list(styles)

    def resolve(self, feature=None):
        return list(self.styles)

    def __repr__(self):
        return f"StyleList({self.styles!r})"


class FeatureStyleFunction(StyleSpec):
    """Called with the feature being styled (None when there is none)."""

    def __init__(self, fn: Callable):
        self.fn = fn

    def resolve(self, feature=None):
        return self.fn(feature)


class StaticStyleFunction(StyleSpec):
    """Called with no argument; the feature is ignored."""

    def __init__(self, fn: Callable):
        self.fn = fn

    def resolve(self, feature=None):
        return self.fn()


def _positional_count(fn: Callable) -> int:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        # Builtins without a signature are treated as per-feature functions
        return 1
    count = 0
    for p in params:
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL):
            count += 1
    return count


def as_style_spec(value) -> Optional[StyleSpec]:
    """
    Resolve a raw style value into a StyleSpec variant.

    Args:
        value: None, a StyleSpec, a Style entry, a list/tuple of entries,
               or a callable taking zero or one argument.

    Returns:
        A StyleSpec, or None when no style is given.
    """
    if value is None:
        return None
    if isinstance(value, StyleSpec):
        return value
    if isinstance(value, (list, tuple)):
        return StyleList(value)
    if callable(value):
        if _positional_count(value) == 0:
            return StaticStyleFunction(value)
        return FeatureStyleFunction(value)
    return ConstantStyle(value)


def get_styles(style, feature=None) -> List[Any]:
    """
    Return the ordered list of style entries for a style specification.

    Raw values are accepted and resolved through as_style_spec().
    A function result that is not a list is wrapped in a single-element list.
    """
    spec = as_style_spec(style)
    if spec is None:
        return []
    styles = spec.resolve(feature)
    if styles is None:
        return []
    if isinstance(styles, (list, tuple)):
        return list(styles)
    return [styles]


def compose(own_styles: List[Any], select_styles: List[Any]) -> List[Any]:
    """Return the feature's own styles followed by the select overlay."""
    return list(own_styles) + list(select_styles)


def decompose(merged: List[Any], select_styles: List[Any]) -> List[Any]:
    """
    Strip the select overlay back off a composed style list.

    Returns the prefix of `merged` before the first entry equal to
    select_styles[0]. If the feature's own styles already contain such an
    entry the result is cut at that earlier position.
    """
    # Nothing to strip: keep every entry rather than cutting at index -1
    if not select_styles or select_styles[0] not in merged:
        return list(merged)
    return list(merged[:merged.index(select_styles[0])])
