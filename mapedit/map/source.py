"""
In-memory vector source - the backing feature store of an editable layer.
"""

import logging
from typing import Iterable, List, Optional

from mapedit.map.events import CollectionEvent, Observable
from mapedit.map.feature import Feature

logger = logging.getLogger(__name__)


class VectorSource(Observable):
    """Holds features and fires 'addfeature' / 'removefeature'."""

    def __init__(self, features: Optional[Iterable[Feature]] = None):
        super().__init__()
        self._features: List[Feature] = []
        self.add_features(features or [])

    def get_features(self) -> List[Feature]:
        return list(self._features)

    def has_feature(self, feature: Feature) -> bool:
        return feature in self._features

    def get_feature_by_id(self, feature_id: str) -> Optional[Feature]:
        for feature in self._features:
            if feature.id == feature_id:
                return feature
        return None

    def add_feature(self, feature: Feature) -> None:
        if feature in self._features:
            return
        self._features.append(feature)
        self.dispatch('addfeature', CollectionEvent('addfeature', feature))

    def add_features(self, features: Iterable[Feature]) -> None:
        for feature in features:
            self.add_feature(feature)

    def remove_feature(self, feature: Feature) -> None:
        if feature not in self._features:
            logger.debug(f"remove_feature: {feature!r} not in source")
            return
        self._features.remove(feature)
        self.dispatch('removefeature', CollectionEvent('removefeature', feature))

    def clear(self) -> None:
        for feature in list(self._features):
            self.remove_feature(feature)


class VectorLayer:
    """A source plus the style used to render it."""

    def __init__(self, source: Optional[VectorSource] = None, style=None, name: str = ''):
        self._source = source if source is not None else VectorSource()
        self.style = style
        self.name = name

    def get_source(self) -> VectorSource:
        return self._source
