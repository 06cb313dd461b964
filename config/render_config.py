"""
Configuration for rendering module.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class RenderConfig:
    output_width: int = 800
    output_height: int = 800
    background_color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)

    # World rectangle mapped onto the surface (x_min, y_min, x_max, y_max)
    world_bounds: Tuple[float, float, float, float] = (-1.0, -1.0, 1.0, 1.0)

    segment_color: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0)
    segment_width: float = 1.0

    attractor_color: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    attractor_radius: float = 1.0
    show_attractors: bool = True

    root_color: Tuple[float, float, float, float] = (0.0, 0.6, 0.0, 1.0)
    root_radius: float = 3.0

    antialiasing: bool = True

    @classmethod
    def from_pipeline(cls, pipeline_config) -> 'RenderConfig':
        return cls(
            output_width=pipeline_config.render_size,
            output_height=pipeline_config.render_size,
        )
