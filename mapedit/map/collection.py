"""
Observable feature collection.
"""

from typing import Any, Iterable, List, Optional

from mapedit.map.events import CollectionEvent, Observable


class Collection(Observable):
    """
    An ordered list that fires 'add' and 'remove' events.

    Elements are unique: adding an element already present is a no-op.
    """

    def __init__(self, items: Optional[Iterable[Any]] = None):
        super().__init__()
        self._items: List[Any] = []
        for item in items or []:
            if item not in self._items:
                self._items.append(item)

    def get_length(self) -> int:
        return len(self._items)

    def get_array(self) -> List[Any]:
        return list(self._items)

    def item(self, index: int) -> Any:
        return self._items[index]

    def push(self, element: Any) -> None:
        if element in self._items:
            return
        self._items.append(element)
        self.dispatch('add', CollectionEvent('add', element))

    def remove(self, element: Any) -> Optional[Any]:
        if element not in self._items:
            return None
        self._items.remove(element)
        self.dispatch('remove', CollectionEvent('remove', element))
        return element

    def clear(self) -> None:
        """Remove every element, firing one 'remove' event each."""
        while self._items:
            self.remove(self._items[-1])

    def __contains__(self, element):
        return element in self._items

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self):
        return len(self._items)
