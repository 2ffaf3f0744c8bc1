"""Fixed-capacity FIFO of the most recent scalar readings."""
from __future__ import annotations

import collections
from typing import Iterator, List, Optional, Tuple

from sensordash.constants import WINDOW_LEN


class SlidingWindow:
    def __init__(self, capacity: int = WINDOW_LEN) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._buf: collections.deque = collections.deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._buf.maxlen

    def push(self, value: float) -> None:
        self._buf.append(value)            # maxlen drops the oldest

    def values(self) -> List[float]:
        return list(self._buf)

    def index(self) -> List[int]:
        """Fresh x sequence 0..len-1 for plotting."""
        return list(range(len(self._buf)))

    def bounds(self, margin: float) -> Optional[Tuple[float, float]]:
        """
        (min - margin, max + margin), or None while fewer than two
        readings are held.
        """
        if len(self._buf) <= 1:
            return None
        return min(self._buf) - margin, max(self._buf) + margin

    def __len__(self) -> int:
        return len(self._buf)

    def __iter__(self) -> Iterator[float]:
        return iter(self._buf)

    def __repr__(self) -> str:
        return f"SlidingWindow({list(self._buf)!r}, capacity={self.capacity})"
