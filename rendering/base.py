"""
Base renderer class defining the interface for all renderers.
"""

import cairo
import numpy as np
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from config.render_config import RenderConfig


class Renderer(ABC):
    def __init__(self, config: RenderConfig):
        self.config = config

    def _prepare_context(self, surface: cairo.Surface) -> cairo.Context:
        ctx = cairo.Context(surface)

        if self.config.antialiasing:
            ctx.set_antialias(cairo.ANTIALIAS_BEST)

        r, g, b, a = self.config.background_color
        ctx.set_source_rgba(r, g, b, a)
        ctx.paint()

        return ctx

    def _create_surface(self) -> Tuple[cairo.ImageSurface, cairo.Context]:
        surface = cairo.ImageSurface(
            cairo.FORMAT_ARGB32,
            self.config.output_width,
            self.config.output_height
        )
        return surface, self._prepare_context(surface)

    def _surface_to_numpy(self, surface: cairo.ImageSurface) -> np.ndarray:
        surface.flush()
        arr = np.ndarray(
            shape=(self.config.output_height, surface.get_stride() // 4, 4),
            dtype=np.uint8,
            buffer=surface.get_data()
        )[:, :self.config.output_width]
        # Cairo stores BGRA on little-endian machines
        return arr[:, :, [2, 1, 0, 3]].copy()

    def _to_surface(self, point: Sequence[float]) -> Tuple[float, float]:
        """Map a world point (only x and y are used) onto surface pixels, y up."""
        x_min, y_min, x_max, y_max = self.config.world_bounds
        sx = (point[0] - x_min) / (x_max - x_min) * self.config.output_width
        sy = (y_max - point[1]) / (y_max - y_min) * self.config.output_height
        return sx, sy

    @abstractmethod
    def render_frame(self, *args, **kwargs) -> np.ndarray:
        pass

    @abstractmethod
    def render_animation(self, *args, **kwargs):
        pass
