"""
AttractorPool - the attractors currently in play.
"""

from typing import Iterator, List
import numpy as np

from .attractor import Attractor


class AttractorPool:
    def __init__(self):
        self._attractors: List[Attractor] = []

    def insert(self, attractor: Attractor) -> int:
        self._attractors.append(attractor)
        return len(self._attractors) - 1

    def _check_index(self, index: int):
        if not 0 <= index < len(self._attractors):
            raise IndexError(f"Attractor {index} does not exist (pool size {len(self._attractors)})")

    def remove_unordered(self, index: int) -> Attractor:
        """
        Remove the attractor at ``index`` by moving the last one into its slot.

        O(1), but reorders the pool: a caller walking the pool by index must
        look at ``index`` again after a removal.
        """
        self._check_index(index)
        removed = self._attractors[index]
        last = self._attractors.pop()
        if index < len(self._attractors):
            self._attractors[index] = last
        return removed

    def disable_until(self, index: int, iteration: int):
        self._check_index(index)
        self._attractors[index].active_from_iteration = iteration

    def __getitem__(self, index: int) -> Attractor:
        self._check_index(index)
        return self._attractors[index]

    def __len__(self) -> int:
        return len(self._attractors)

    def __iter__(self) -> Iterator[Attractor]:
        return iter(self._attractors)

    def iter_positions(self) -> Iterator[np.ndarray]:
        return (a.position for a in self._attractors)
