"""
Visualization utilities for Space Colonization Algorithm.
"""

from pathlib import Path
from typing import Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.collections import LineCollection
from mpl_toolkits.mplot3d.art3d import Line3DCollection

from .engine import SpaceColonization


def _segments(engine: SpaceColonization) -> list:
    return [[child, parent] for child, parent in engine.iter_segments()]


def _attractor_array(engine: SpaceColonization) -> np.ndarray:
    points = list(engine.iter_attractor_positions())
    if not points:
        return np.empty((0, engine.dim or 2))
    return np.array(points)


def _root_array(engine: SpaceColonization) -> np.ndarray:
    points = [root.position for root in engine.iter_roots()]
    if not points:
        return np.empty((0, engine.dim or 2))
    return np.array(points)


def _new_axes(dim: int, figsize: Tuple[int, int]):
    fig = plt.figure(figsize=figsize)
    if dim == 3:
        ax = fig.add_subplot(projection='3d')
        ax.set_xlim(-1, 1)
        ax.set_ylim(-1, 1)
        ax.set_zlim(-1, 1)
    else:
        ax = fig.add_subplot()
        ax.set_xlim(-1, 1)
        ax.set_ylim(-1, 1)
        ax.set_aspect('equal')
    ax.axis('off')
    return fig, ax


def _scatter(ax, points: np.ndarray, **kwargs):
    if points.shape[1] == 3:
        return ax.scatter(points[:, 0], points[:, 1], points[:, 2], **kwargs)
    return ax.scatter(points[:, 0], points[:, 1], **kwargs)


def visualize_growth(
    engine: SpaceColonization,
    show_attractors: bool = True,
    show_roots: bool = True,
    segment_color: str = 'firebrick',
    segment_width: float = 1.0,
    attractor_color: str = 'gray',
    attractor_size: float = 1.0,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    show: bool = True
):
    """Visualize the current state of the engine."""
    dim = engine.dim or 2
    fig, ax = _new_axes(dim, figsize)

    segments = _segments(engine)
    if segments:
        if dim == 3:
            ax.add_collection3d(Line3DCollection(segments, colors=segment_color, linewidths=segment_width))
        else:
            ax.add_collection(LineCollection(segments, colors=segment_color, linewidths=segment_width))

    if show_attractors:
        attractors = _attractor_array(engine)
        if len(attractors) > 0:
            _scatter(ax, attractors, c=attractor_color, s=attractor_size, alpha=0.5)

    if show_roots:
        roots = _root_array(engine)
        if len(roots) > 0:
            _scatter(ax, roots, c='forestgreen', s=20)

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        print(f"Saved visualization to {save_path}")

    if show:
        plt.show()
    return fig, ax


def animate_growth(
    engine: SpaceColonization,
    iterations: int,
    interval: int = 50,
    show_attractors: bool = True,
    segment_color: str = 'firebrick',
    segment_width: float = 1.0,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    frame_skip: int = 1,
    show: bool = True
) -> FuncAnimation:
    """
    Step the engine and animate its growth. 2D only.

    frame_skip: Only record every Nth iteration. Higher = faster, fewer frames.
    """
    if engine.dim == 3:
        raise ValueError("animate_growth only supports 2D runs")

    fig, ax = _new_axes(2, figsize)
    segment_collection = LineCollection([], colors=segment_color, linewidths=segment_width)
    ax.add_collection(segment_collection)
    if show_attractors:
        attractor_scatter = ax.scatter([], [], c='gray', s=1, alpha=0.3)
    title = ax.set_title('Iteration: 0')

    frames_data = []

    def collect_frame():
        frames_data.append({
            'segments': _segments(engine),
            'attractors': _attractor_array(engine),
            'iteration': engine.iteration
        })

    collect_frame()
    for _ in range(iterations):
        engine.step()
        if engine.iteration % frame_skip == 0:
            collect_frame()
    collect_frame()

    print(f"Collected {len(frames_data)} frames for animation")

    def update(frame_idx):
        data = frames_data[frame_idx]
        segment_collection.set_segments(data['segments'])
        if show_attractors:
            attractor_scatter.set_offsets(data['attractors'].reshape(-1, 2))
        title.set_text(f"Iteration: {data['iteration']}")
        return [segment_collection]

    anim = FuncAnimation(
        fig, update,
        frames=len(frames_data),
        interval=interval,
        blit=False,
        repeat=True
    )

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        print(f"Saving animation ({len(frames_data)} frames)...")
        anim.save(save_path, writer='pillow', fps=20)
        print(f"Saved animation to {save_path}")

    if show:
        plt.show()
    return anim


def plot_length_statistics(engine: SpaceColonization, save_path: Optional[str] = None, show: bool = True):
    """Histogram of node lengths and children per node."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    lengths = [node.length for node in engine.nodes]
    max_length = max(lengths) if lengths else 0
    axes[0].bar(range(max_length + 1), np.bincount(np.array(lengths, dtype=int), minlength=max_length + 1),
                color='firebrick', edgecolor='black')
    axes[0].set_xlabel('Length from Root')
    axes[0].set_ylabel('Node Count')
    axes[0].set_title('Nodes per Length')

    branches = [node.branches for node in engine.nodes]
    max_branches = max(branches) if branches else 0
    axes[1].bar(range(max_branches + 1), np.bincount(np.array(branches, dtype=int), minlength=max_branches + 1),
                color='forestgreen', edgecolor='black')
    axes[1].set_xlabel('Children')
    axes[1].set_ylabel('Node Count')
    axes[1].set_title('Branching Distribution')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved statistics to {save_path}")

    if show:
        plt.show()
    return fig, axes
