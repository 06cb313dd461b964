"""
SpaceColonization - runs the Space Colonization Algorithm over a node arena
and an attractor pool.

Each step every active attractor looks for a node it has reached (connect)
or, failing that, the nearest node inside its attract distance and pulls it
towards itself. Every node that was pulled then spawns one child a fixed
distance along the sum of its pulls.
"""

import itertools
from typing import Any, Callable, Iterator, Optional, Tuple
import numpy as np
from tqdm import tqdm

from .arena import NodeArena
from .attractor import Attractor
from .config import SCAConfig
from .node import Node
from .pool import AttractorPool
from .profiling import profile
from .vector import PointLike, as_point, is_zero, normalize


class SpaceColonization:
    def __init__(self, config: Optional[SCAConfig] = None):
        self.config = config or SCAConfig()
        self.nodes = NodeArena()
        self.attractors = AttractorPool()
        self.iteration = 0
        self._dim: Optional[int] = None
        self._stagnation_counter: int = 0

    @property
    def dim(self) -> Optional[int]:
        return self._dim

    def _claim_dim(self, position: PointLike) -> np.ndarray:
        point = as_point(position)
        if self._dim is None:
            self._dim = point.shape[0]
        elif point.shape[0] != self._dim:
            raise ValueError(f"Expected a {self._dim}D position, got {point.shape[0]}D")
        return point

    # ------------------------------------------------------------------ inserts

    def insert_root(self, position: PointLike) -> int:
        return self.nodes.insert_root(self._claim_dim(position))

    def insert_root_with_information(self, position: PointLike, information: Any) -> int:
        return self.nodes.insert_root(self._claim_dim(position), information=information)

    def insert_default_attractor(self, position: PointLike) -> int:
        return self.attractors.insert(Attractor(
            position=self._claim_dim(position),
            attract_dist=self.config.attract_dist,
            connect_dist=self.config.connect_dist,
            strength=self.config.default_strength,
            connect_action=self.config.default_connect_action,
        ))

    def insert_attractor(self, attractor: Attractor) -> int:
        self._claim_dim(attractor.position)
        return self.attractors.insert(attractor)

    # ------------------------------------------------------------------ growth

    @profile
    def _scan_attractors(self, window_start: int):
        """Connect or accumulate growth for every active attractor, in pool order."""
        positions = self.nodes.positions[window_start:]
        if len(positions) == 0:
            return

        i = 0
        while i < len(self.attractors):
            attractor = self.attractors[i]
            if not attractor.is_active(self.iteration):
                i += 1
                continue

            diff = positions - attractor.position
            dist_sq = np.einsum('ij,ij->i', diff, diff)

            # First node in arena order wins the connect, not the closest one
            reached = np.flatnonzero(dist_sq < attractor.connect_dist.value)
            if reached.size > 0:
                node = self.nodes[window_start + int(reached[0])]
                if attractor.information is not None:
                    node.assigned_information = attractor.information

                action = attractor.connect_action
                if action.kills:
                    # The last attractor now sits at i, look at it next
                    self.attractors.remove_unordered(i)
                    continue
                self.attractors.disable_until(i, self.iteration + action.disable_iterations)
                i += 1
                continue

            # A node sitting on the attractor has no direction to grow in
            eligible = np.where(dist_sq > 0.0, dist_sq, np.inf)
            nearest = int(np.argmin(eligible))
            if eligible[nearest] < attractor.attract_dist.value:
                node = self.nodes[window_start + nearest]
                direction = normalize(attractor.position - node.position)
                node.accumulate(direction * attractor.strength)
            i += 1

    def _may_spawn(self, node: Node) -> bool:
        if is_zero(node.growth):
            return False
        if not self.config.enforce_growth_limits:
            return True
        return node.can_grow(self.config.max_length, self.config.max_branches)

    @profile
    def _materialize_growth(self, window_start: int, window_end: int):
        move_distance = self.config.move_distance
        for index in range(window_start, window_end):
            node = self.nodes[index]
            if node.growth_count == 0:
                continue
            if self._may_spawn(node):
                new_position = node.position + normalize(node.growth) * move_distance
                self.nodes.insert_child(new_position, index)
            node.reset_growth()

    def step(self) -> int:
        """
        Perform one growth iteration.
        Returns the number of nodes created.

        A connecting attractor with ``information=None`` carries no payload and
        leaves the node's existing information untouched.
        """
        size_before = len(self.nodes)
        window_start = self.nodes.window_start(self.config.use_last_nodes)

        self._scan_attractors(window_start)
        self._materialize_growth(window_start, size_before)

        self.iteration += 1
        return len(self.nodes) - size_before

    def __iter__(self) -> 'SpaceColonization':
        return self

    def __next__(self) -> int:
        return self.step()

    def grow(
        self,
        max_iterations: Optional[int] = None,
        callback: Optional[Callable[['SpaceColonization', int], None]] = None,
        verbose: bool = True
    ) -> int:
        """
        Run steps until max_iterations, an empty pool or stagnation.
        Optional callback is called after each step with (engine, new_nodes).
        Returns the number of steps run.
        """
        if verbose:
            print(f"Starting growth with {len(self.nodes)} nodes and "
                  f"{len(self.attractors)} attractors...")

        steps = range(max_iterations) if max_iterations is not None else itertools.count()
        if verbose:
            steps = tqdm(steps, total=max_iterations, desc="Growing")

        done = 0
        for _ in steps:
            if not self.attractors or self.stagnated:
                break

            new_nodes = self.step()
            done += 1
            if new_nodes == 0:
                self._stagnation_counter += 1
            else:
                self._stagnation_counter = 0

            if callback:
                callback(self, new_nodes)

        if verbose:
            if self.stagnated:
                print(f"Growth stopped: no new nodes for {self.config.stagnation_limit} iterations")
            print(f"Growth complete after {self.iteration} iterations")
            print(f"  Nodes: {len(self.nodes)}")
            print(f"  Remaining attractors: {len(self.attractors)}")

        return done

    @property
    def stagnated(self) -> bool:
        return self._stagnation_counter >= self.config.stagnation_limit

    # ------------------------------------------------------------------ queries

    def iter_segments(self) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        return self.nodes.iter_segments()

    def iter_attractor_positions(self) -> Iterator[np.ndarray]:
        return self.attractors.iter_positions()

    def iter_attractors(self) -> Iterator[Attractor]:
        return iter(self.attractors)

    def iter_roots(self) -> Iterator[Node]:
        return self.nodes.iter_roots()

    def iter_information_nodes(self) -> Iterator[Tuple[Node, Node]]:
        return self.nodes.iter_information_nodes()

    def get_segments(self) -> list:
        """Return all segments as (child, parent) coordinate tuple pairs for drawing."""
        return [
            (tuple(float(c) for c in a), tuple(float(c) for c in b))
            for a, b in self.iter_segments()
        ]
