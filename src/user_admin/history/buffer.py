from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Tuple

from ..core.constants import MAX_ACTIONS_PER_USER
from .model import Action


class BoundedHistory:
    """FIFO action log with a fixed capacity.

    Once full, appending drops the oldest entry. Iteration is oldest first.
    """

    def __init__(self, capacity: int = MAX_ACTIONS_PER_USER):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._items: Deque[Action] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen

    def append(self, action: Action) -> None:
        self._items.append(action)

    def snapshot(self) -> Tuple[Action, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Action]:
        return iter(self.snapshot())
