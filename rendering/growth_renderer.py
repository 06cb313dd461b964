"""
Growth renderer using Cairo.

Renders exported growth snapshots as raster frames (PNG/GIF) or as EPS line
art. 3D snapshots are drawn projected onto the xy plane.
"""

import math
from pathlib import Path
from typing import Any, Dict, List

import cairo
import imageio
import numpy as np
from tqdm import tqdm

from config.render_config import RenderConfig
from .base import Renderer


class GrowthRenderer(Renderer):
    def __init__(self, config: RenderConfig = None):
        super().__init__(config or RenderConfig())

    def _draw_segments(self, ctx: cairo.Context, nodes: List[Dict]):
        r, g, b, a = self.config.segment_color
        ctx.set_source_rgba(r, g, b, a)
        ctx.set_line_width(self.config.segment_width)
        ctx.set_line_cap(cairo.LINE_CAP_ROUND)

        for node in nodes:
            if node['parent'] is None:
                continue
            ctx.move_to(*self._to_surface(node['position']))
            ctx.line_to(*self._to_surface(nodes[node['parent']]['position']))
        ctx.stroke()

    def _draw_points(self, ctx: cairo.Context, positions: List, color, radius: float):
        r, g, b, a = color
        ctx.set_source_rgba(r, g, b, a)
        for position in positions:
            x, y = self._to_surface(position)
            ctx.new_sub_path()
            ctx.arc(x, y, radius, 0, 2 * math.pi)
        ctx.fill()

    def _draw(self, ctx: cairo.Context, data: Dict[str, Any]):
        nodes = data['nodes']

        if self.config.show_attractors:
            self._draw_points(
                ctx,
                [a['position'] for a in data['attractors']],
                self.config.attractor_color,
                self.config.attractor_radius
            )

        self._draw_segments(ctx, nodes)

        self._draw_points(
            ctx,
            [n['position'] for n in nodes if n['parent'] is None],
            self.config.root_color,
            self.config.root_radius
        )

    def render_frame(self, data: Dict[str, Any]) -> np.ndarray:
        surface, ctx = self._create_surface()
        self._draw(ctx, data)
        return self._surface_to_numpy(surface)

    def save_png(self, data: Dict[str, Any], output_path: str):
        frame = self.render_frame(data)
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        imageio.imwrite(output_path, frame)

    def save_eps(self, data: Dict[str, Any], output_path: str):
        """Write the snapshot as Encapsulated PostScript line art."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        surface = cairo.PSSurface(output_path, self.config.output_width, self.config.output_height)
        surface.set_eps(True)
        ctx = self._prepare_context(surface)
        self._draw(ctx, data)
        surface.finish()

    def render_animation(self, snapshots: List[Dict[str, Any]], output_path: str, fps: int = 20):
        """Render a list of snapshots as an animated GIF or video."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        frames = [self.render_frame(data) for data in tqdm(snapshots, desc="Rendering growth frames")]

        if str(output_path).endswith('.gif'):
            imageio.mimsave(output_path, frames, duration=1000 / fps, loop=0)
        else:
            imageio.mimsave(output_path, frames, fps=fps)
        print(f"  Saved animation: {output_path}")
