"""
Frontier: pending patterns ordered by discovery depth.

Min-heap keyed on (depth, sequence). The sequence number breaks ties
between same-depth entries in insertion order, so runs are reproducible;
recorded depths do not depend on this tie-break.
"""

import heapq
import itertools
from typing import List, Tuple

from fws_core.types import Depth, Pattern


class Frontier:
    """Min-priority queue of (pattern, depth) pending expansion."""

    def __init__(self):
        self._heap: List[Tuple[int, int, Pattern]] = []
        self._sequence = itertools.count()

    def push(self, pattern: Pattern, depth: Depth) -> None:
        heapq.heappush(self._heap, (depth, next(self._sequence), pattern))

    def pop(self) -> Tuple[Pattern, Depth]:
        """
        Remove and return the entry of minimal depth.

        Raises:
            IndexError: If the frontier is empty
        """
        if not self._heap:
            raise IndexError("pop from empty Frontier")
        depth, _, pattern = heapq.heappop(self._heap)
        return pattern, Depth(depth)

    def peek_depth(self) -> Depth:
        """Minimal pending depth without removing it."""
        if not self._heap:
            raise IndexError("peek into empty Frontier")
        return Depth(self._heap[0][0])

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
