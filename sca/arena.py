"""
NodeArena - append-only store of every node created during a run.

Node references are plain integer indices into the arena. Positions are also
mirrored into a contiguous numpy buffer so the engine can compute distances to
a whole window of nodes at once.
"""

from typing import Any, Iterator, List, Optional, Tuple
import numpy as np

from .node import Node
from .vector import PointLike, as_point


class NodeArena:
    _INITIAL_CAPACITY = 64

    def __init__(self):
        self._nodes: List[Node] = []
        self._positions: Optional[np.ndarray] = None
        self._dim: Optional[int] = None

    @property
    def dim(self) -> Optional[int]:
        return self._dim

    @property
    def positions(self) -> np.ndarray:
        """(n, dim) view of all node positions, in arena order."""
        if self._positions is None:
            return np.empty((0, self._dim or 0))
        return self._positions[:len(self._nodes)]

    def _check_dim(self, position: np.ndarray):
        if self._dim is None:
            self._dim = position.shape[0]
        elif position.shape[0] != self._dim:
            raise ValueError(
                f"Position has {position.shape[0]} components, arena holds {self._dim}D nodes"
            )

    def _store_position(self, position: np.ndarray):
        n = len(self._nodes)
        if self._positions is None:
            self._positions = np.empty((self._INITIAL_CAPACITY, self._dim))
        elif n == self._positions.shape[0]:
            grown = np.empty((2 * n, self._dim))
            grown[:n] = self._positions
            self._positions = grown
        self._positions[n] = position

    def _append(self, node: Node) -> int:
        self._store_position(node.position)
        self._nodes.append(node)
        return node.index

    def insert_root(self, position: PointLike, information: Any = None) -> int:
        position = as_point(position)
        self._check_dim(position)
        index = len(self._nodes)
        return self._append(Node(index, position, assigned_information=information))

    def insert_child(self, position: PointLike, parent: int) -> int:
        if not 0 <= parent < len(self._nodes):
            raise IndexError(f"Parent node {parent} does not exist (arena size {len(self._nodes)})")
        position = as_point(position)
        self._check_dim(position)

        parent_node = self._nodes[parent]
        index = len(self._nodes)
        child = Node(
            index,
            position,
            parent=parent,
            root=parent_node.root,
            length=parent_node.length + 1
        )
        parent_node.branches += 1
        return self._append(child)

    def window_start(self, last_n: Optional[int]) -> int:
        """First index of the trailing window of ``last_n`` nodes (0 = whole arena)."""
        if last_n is None:
            return 0
        return max(0, len(self._nodes) - last_n)

    def __getitem__(self, index: int) -> Node:
        if not 0 <= index < len(self._nodes):
            raise IndexError(f"Node {index} does not exist (arena size {len(self._nodes)})")
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def iter_segments(self) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """Yield (child position, parent position) for every non-root node."""
        for node in self._nodes:
            if not node.is_root:
                yield node.position, self._nodes[node.parent].position

    def iter_roots(self) -> Iterator[Node]:
        return (node for node in self._nodes if node.is_root)

    def iter_information_nodes(self) -> Iterator[Tuple[Node, Node]]:
        """Yield (node, its root) for every node that received a connect payload."""
        for node in self._nodes:
            if node.has_information:
                yield node, self._nodes[node.root]
