"""
Node class - a single point of the growing structure.
"""

from typing import Any, Optional
import numpy as np

from .vector import zeros


class Node:
    __slots__ = (
        'index', 'position', 'parent', 'root', 'length', 'branches',
        'growth', 'growth_count', 'assigned_information'
    )

    def __init__(
        self,
        index: int,
        position: np.ndarray,
        parent: Optional[int] = None,
        root: Optional[int] = None,
        length: int = 0,
        assigned_information: Any = None
    ):
        self.index = index
        self.position = position
        self.parent = parent  # None marks a root
        self.root = index if root is None else root
        self.length = length
        self.branches = 0  # Number of children spawned so far
        self.growth = zeros(position.shape[0])
        self.growth_count = 0  # Attractors that contributed to growth this step
        self.assigned_information = assigned_information

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def has_information(self) -> bool:
        return self.assigned_information is not None

    def can_grow(self, max_length: int, max_branches: int) -> bool:
        return self.length < max_length and self.branches < max_branches

    def accumulate(self, direction: np.ndarray):
        self.growth += direction
        self.growth_count += 1

    def reset_growth(self):
        self.growth[:] = 0.0
        self.growth_count = 0

    def __repr__(self) -> str:
        parent = "root" if self.is_root else self.parent
        return f"Node(#{self.index}, {self.position}, parent={parent}, length={self.length})"
