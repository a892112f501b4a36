"""Priority-ordered queue of handler instances for one entity."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .handler import AnnotationHandler


class AnnotationQueue:
    """
    Ordered handler worklist.

    Invariants:
        - at most one live instance per concrete handler type; a later
          declaration replaces the earlier one, in place when its priority
          still fits there, otherwise re-spliced by priority
        - non-increasing priority, ties kept in arrival order
    """

    def __init__(self, handlers: Iterable[AnnotationHandler] = ()) -> None:
        self._items: list[AnnotationHandler] = []
        for handler in handlers:
            self.insert_or_replace(handler)

    def insert_or_replace(self, handler: AnnotationHandler) -> None:
        priority = handler.get_priority()
        for index, item in enumerate(self._items):
            if type(item) is type(handler):
                if self._fits(index, priority):
                    self._items[index] = handler
                    return
                del self._items[index]
                break
        for index, item in enumerate(self._items):
            if priority > item.get_priority():
                self._items.insert(index, handler)
                return
        self._items.append(handler)

    def _fits(self, index: int, priority: int) -> bool:
        before = self._items[index - 1].get_priority() if index > 0 else None
        after = self._items[index + 1].get_priority() if index + 1 < len(self._items) else None
        return (before is None or before >= priority) and (after is None or after <= priority)

    def __iter__(self) -> Iterator[AnnotationHandler]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"AnnotationQueue({self._items!r})"

    def priorities(self) -> list[int]:
        return [item.get_priority() for item in self._items]

    @classmethod
    def from_ordered(cls, handlers: Iterable[AnnotationHandler]) -> AnnotationQueue:
        """Wrap handlers that are already in queue order, without reordering."""
        queue = cls()
        queue._items = list(handlers)
        return queue

    def copy(self) -> AnnotationQueue:
        return AnnotationQueue.from_ordered(self._items)
