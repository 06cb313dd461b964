"""
Configuration for the space colonization growth engine.
"""

from dataclasses import dataclass, field
from typing import Optional

from .attractor import ConnectAction
from .vector import SqDist


@dataclass
class SCAConfig:
    attract_distance: float = 0.25    # Radius within which an attractor pulls a node
    connect_distance: float = 0.1     # Radius within which an attractor is reached
    move_distance: float = 0.05       # Length of every new segment
    default_strength: float = 1.0

    max_length: int = 100             # Max segments from root to a growing node
    max_branches: int = 10            # Max children per node
    enforce_growth_limits: bool = True

    # Only scan the most recently created nodes (None = whole arena)
    use_last_nodes: Optional[int] = None

    default_connect_action: ConnectAction = field(default_factory=ConnectAction.kill)
    stagnation_limit: int = 100       # grow() stops after this many steps without new nodes

    def __post_init__(self):
        if self.attract_distance < 0 or self.connect_distance < 0:
            raise ValueError("Attract and connect distances must be non-negative")
        if self.connect_distance > self.attract_distance:
            raise ValueError(
                f"connect_distance ({self.connect_distance}) must not exceed "
                f"attract_distance ({self.attract_distance})"
            )
        if self.move_distance <= 0:
            raise ValueError(f"move_distance must be positive, got {self.move_distance}")
        if self.use_last_nodes is not None and self.use_last_nodes < 1:
            raise ValueError(f"use_last_nodes must be at least 1, got {self.use_last_nodes}")

    @property
    def attract_dist(self) -> SqDist:
        return SqDist.from_dist(self.attract_distance)

    @property
    def connect_dist(self) -> SqDist:
        return SqDist.from_dist(self.connect_distance)

    @classmethod
    def from_pipeline(cls, pipeline_config) -> 'SCAConfig':
        """Create SCA Config from PipelineConfig."""
        return cls(
            attract_distance=pipeline_config.influence_radius,
            connect_distance=pipeline_config.kill_distance,
            move_distance=pipeline_config.move_distance,
            max_length=pipeline_config.max_length,
            max_branches=pipeline_config.max_branches,
            enforce_growth_limits=pipeline_config.enforce_growth_limits,
            use_last_nodes=pipeline_config.use_last_nodes,
            stagnation_limit=pipeline_config.stagnation_limit,
        )
