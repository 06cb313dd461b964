"""
Attractor class - represents growth hormone sources that guide node development.

An attractor pulls the nearest node inside its attract distance. Once a node
comes inside its connect distance, the attractor hands its information to that
node and then applies its connect action: it is either removed from the pool
or disabled for a number of iterations.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
import numpy as np

from .vector import PointLike, SqDist, as_point


@dataclass(frozen=True)
class ConnectAction:
    """What an attractor does once a node reaches it.

    ``disable_iterations`` is None for KillAttractor.
    """
    disable_iterations: Optional[int] = None

    def __post_init__(self):
        if self.disable_iterations is not None and self.disable_iterations < 1:
            raise ValueError(
                f"DisableFor needs at least one iteration, got {self.disable_iterations}"
            )

    @classmethod
    def kill(cls) -> 'ConnectAction':
        return cls()

    @classmethod
    def disable_for(cls, iterations: int) -> 'ConnectAction':
        return cls(disable_iterations=iterations)

    @property
    def kills(self) -> bool:
        return self.disable_iterations is None

    def __repr__(self) -> str:
        if self.kills:
            return "KillAttractor"
        return f"DisableFor({self.disable_iterations})"


@dataclass(eq=False)
class Attractor:
    position: np.ndarray
    attract_dist: SqDist
    connect_dist: SqDist
    strength: float = 1.0
    information: Any = None
    connect_action: ConnectAction = field(default_factory=ConnectAction.kill)
    active_from_iteration: int = 0

    def __post_init__(self):
        self.position = as_point(self.position)
        if self.connect_dist > self.attract_dist:
            raise ValueError(
                f"Connect distance {self.connect_dist} exceeds attract distance {self.attract_dist}"
            )

    @classmethod
    def create(
        cls,
        position: PointLike,
        attract_distance: float,
        connect_distance: float,
        **kwargs
    ) -> 'Attractor':
        """Build an attractor from linear radii."""
        return cls(
            position=as_point(position),
            attract_dist=SqDist.from_dist(attract_distance),
            connect_dist=SqDist.from_dist(connect_distance),
            **kwargs
        )

    def is_active(self, iteration: int) -> bool:
        return self.active_from_iteration <= iteration

    def __repr__(self) -> str:
        return (f"Attractor({self.position}, {self.connect_action}, "
                f"active_from={self.active_from_iteration})")
