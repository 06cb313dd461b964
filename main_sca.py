"""
Main entry point for the space colonization growth simulation.

Configuration is loaded from config/pipeline.json (defaults when missing);
command line flags override individual settings.

Modes:
    simulate - grow from random roots towards random attractors, save a preview
    graph    - grow from tagged source roots towards target clusters, write a DOT graph
    eps      - grow in 2D and write EPS line art snapshots
"""

import argparse
from typing import Optional

import numpy as np

from config import PipelineConfig, RenderConfig, load_config
from rendering import GrowthRenderer, export_growth_data, snapshot
from sca import SCAConfig, SpaceColonization
from sca.graph import extract_connections, seed_graph, to_dot
from sca.profiling import profile_block, profiler
from sca.sampling import find_bottom_center, load_mask, random_points, sample_mask_points


# flag -> PipelineConfig field
OVERRIDES = {
    'num_points': 'num_attractors',
    'num_roots': 'num_roots',
    'radius': 'influence_radius',
    'kill_distance': 'kill_distance',
    'move_distance': 'move_distance',
    'max_length': 'max_length',
    'max_branches': 'max_branches',
    'max_iter': 'max_iterations',
    'save_every': 'save_every',
    'use_last_nodes': 'use_last_nodes',
    'target_nodes': 'target_nodes',
    'attractors_per_target_node': 'attractors_per_target_node',
    'target_attractor_radius': 'target_attractor_radius',
    'mask_image': 'mask_image',
    'seed': 'random_seed',
}


def seed_random(engine: SpaceColonization, pipeline: PipelineConfig, rng: np.random.Generator):
    if pipeline.mask_image is not None:
        if pipeline.use_3d:
            raise ValueError("Mask seeding only supports 2D runs")
        mask = load_mask(pipeline.mask_image)
        # First root grows up from the bottom of the silhouette
        roots = [find_bottom_center(mask)]
        if pipeline.num_roots > 1:
            roots += sample_mask_points(mask, pipeline.num_roots - 1, rng)
        points = sample_mask_points(
            mask, pipeline.num_attractors, rng,
            method=pipeline.attractor_placement,
            image_path=pipeline.mask_image
        )
    else:
        roots = random_points(rng, pipeline.num_roots, pipeline.dim)
        points = random_points(rng, pipeline.num_attractors, pipeline.dim)

    for root in roots:
        engine.insert_root(root)
    for point in points:
        engine.insert_default_attractor(point)


def make_snapshot_callback(pipeline: PipelineConfig, renderer: GrowthRenderer, suffix: str,
                           frames: Optional[list] = None):
    def on_step(engine: SpaceColonization, new_nodes: int):
        if pipeline.save_every is None or engine.iteration % pipeline.save_every != 0:
            return
        data = snapshot(engine)
        path = str(pipeline.snapshot_path(engine.iteration, suffix))
        if suffix == 'eps':
            renderer.save_eps(data, path)
        else:
            renderer.save_png(data, path)
        if frames is not None:
            frames.append(data)
    return on_step


def run_simulate(pipeline: PipelineConfig, engine: SpaceColonization, rng: np.random.Generator, show: bool):
    with profile_block('seeding'):
        seed_random(engine, pipeline, rng)
    renderer = GrowthRenderer(RenderConfig.from_pipeline(pipeline))

    frames = []
    on_step = make_snapshot_callback(pipeline, renderer, 'png', frames)
    on_step(engine, 0)  # initial state, before the first step
    engine.grow(pipeline.max_iterations, callback=on_step)

    export_growth_data(engine, str(pipeline.data_path))
    print(f"Exported growth data to: {pipeline.data_path}")

    if len(frames) > 1 and not pipeline.use_3d:
        renderer.render_animation(frames, str(pipeline.animation_path))

    from sca.visualization import plot_length_statistics, visualize_growth
    visualize_growth(engine, save_path=str(pipeline.image_path), show=show)
    plot_length_statistics(engine, save_path=str(pipeline.stats_path), show=show)


def run_graph(pipeline: PipelineConfig, engine: SpaceColonization, rng: np.random.Generator):
    if pipeline.target_nodes <= 0:
        raise ValueError("Graph mode needs --target-nodes > 0")

    sources = seed_graph(
        engine, rng,
        num_sources=pipeline.num_roots,
        num_targets=pipeline.target_nodes,
        attractors_per_target=pipeline.attractors_per_target_node,
        target_radius=pipeline.target_attractor_radius,
        num_attractors=pipeline.num_attractors,
        dim=pipeline.dim
    )
    engine.grow(pipeline.max_iterations)

    connections = extract_connections(engine, sources)
    for c in connections:
        print(f"  source {c.source} -> target {c.target} (length {c.length})")

    with open(pipeline.graph_path, 'w') as f:
        f.write(to_dot(connections, name=pipeline.run_name))
    print(f"Saved {len(connections)} connections to {pipeline.graph_path}")

    export_growth_data(engine, str(pipeline.data_path))


def run_eps(pipeline: PipelineConfig, engine: SpaceColonization, rng: np.random.Generator):
    if pipeline.use_3d:
        raise ValueError("EPS mode only supports 2D runs")

    seed_random(engine, pipeline, rng)
    renderer = GrowthRenderer(RenderConfig.from_pipeline(pipeline))

    on_step = make_snapshot_callback(pipeline, renderer, 'eps')
    on_step(engine, 0)  # initial state, before the first step
    engine.grow(pipeline.max_iterations, callback=on_step)

    renderer.save_eps(snapshot(engine), str(pipeline.eps_path))
    print(f"Saved EPS to {pipeline.eps_path}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Space colonization growth simulation.")
    parser.add_argument('--mode', type=str, choices=['simulate', 'graph', 'eps'], default='simulate',
                        help='simulate, graph or eps (default: simulate)')
    parser.add_argument('--config', type=str, default='config/pipeline.json',
                        help='Pipeline config JSON (default: config/pipeline.json)')
    parser.add_argument('--num-points', type=int, help='Number of attraction points')
    parser.add_argument('--num-roots', type=int, help='Number of root nodes')
    parser.add_argument('--radius', type=float, help='Influence radius')
    parser.add_argument('--kill-distance', type=float, help='Kill distance')
    parser.add_argument('--move-distance', type=float, help='Move distance')
    parser.add_argument('--max-length', type=int, help='Maximal allowed length from root to leaf')
    parser.add_argument('--max-branches', type=int, help='Maximal allowed number of branches per node')
    parser.add_argument('--max-iter', type=int, help='Maximum iterations (default: until done)')
    parser.add_argument('--save-every', type=int, help='Save a snapshot every n iterations')
    parser.add_argument('--use-last-nodes', type=int, help='Only search the n most recent nodes')
    parser.add_argument('--use-3d', action='store_true', help='Use 3d mode')
    parser.add_argument('--no-growth-limits', action='store_true',
                        help='Do not stop nodes at max length / max branches')
    parser.add_argument('--target-nodes', type=int, help='Number of target nodes (graph mode)')
    parser.add_argument('--attractors-per-target-node', type=int,
                        help='Number of attractors per target node (graph mode)')
    parser.add_argument('--target-attractor-radius', type=float,
                        help='Radius of target attractors (graph mode)')
    parser.add_argument('--mask-image', type=str, help='Seed attractors inside this image silhouette')
    parser.add_argument('--seed', type=int, help='Random seed')
    parser.add_argument('--show', action='store_true', help='Open the preview window')
    return parser.parse_args(argv)


def build_pipeline(args: argparse.Namespace) -> PipelineConfig:
    pipeline = load_config(args.config)
    for flag, field_name in OVERRIDES.items():
        value = getattr(args, flag)
        if value is not None:
            setattr(pipeline, field_name, value)
    if args.use_3d:
        pipeline.use_3d = True
    if args.no_growth_limits:
        pipeline.enforce_growth_limits = False
    if pipeline.run_name == 'growth':
        pipeline.run_name = args.mode
    return pipeline


def main(argv=None):
    args = parse_args(argv)
    pipeline = build_pipeline(args)
    pipeline.create_output_dirs()

    if pipeline.profile:
        profiler.enable()

    print(f"Mode: {args.mode}")
    print(f"  {pipeline}")
    print()

    rng = np.random.default_rng(pipeline.random_seed)
    engine = SpaceColonization(SCAConfig.from_pipeline(pipeline))

    if args.mode == 'simulate':
        run_simulate(pipeline, engine, rng, show=args.show)
    elif args.mode == 'graph':
        run_graph(pipeline, engine, rng)
    elif args.mode == 'eps':
        run_eps(pipeline, engine, rng)


if __name__ == '__main__':
    main()
