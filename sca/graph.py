"""
Source/target graph extraction.

Roots are tagged as sources and clusters of attractors around random target
points are tagged as targets. Target attractors disable themselves instead of
dying when reached, so several branches can arrive at the same target. After
growth, every node that received a target payload tells us that its root's
source reaches that target, and at which length.

Source tags live in a map from root index to ``Source``: a target reaching a
source root replaces the root's own payload.
"""

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Tuple
import numpy as np

from .attractor import Attractor, ConnectAction
from .engine import SpaceColonization
from .sampling import random_around, random_point


class Source(NamedTuple):
    id: int


class Target(NamedTuple):
    id: int


@dataclass(frozen=True)
class Connection:
    source: int
    target: int
    length: int
    position: Tuple[float, ...]


def seed_graph(
    engine: SpaceColonization,
    rng: np.random.Generator,
    num_sources: int,
    num_targets: int,
    attractors_per_target: int,
    target_radius: float,
    num_attractors: int,
    dim: int = 2,
    disable_iterations: int = 100_000
) -> Dict[int, Source]:
    """
    Insert tagged source roots, target attractor clusters and plain attractors.
    Returns the source tag of every root, keyed by node index.
    """
    config = engine.config

    sources: Dict[int, Source] = {}
    for src in range(num_sources):
        index = engine.insert_root_with_information(random_point(rng, dim), Source(src))
        sources[index] = Source(src)

    for dst in range(num_targets):
        target_pt = random_point(rng, dim)
        for _ in range(attractors_per_target):
            engine.insert_attractor(Attractor(
                position=random_around(rng, target_pt, target_radius),
                attract_dist=config.attract_dist,
                connect_dist=config.connect_dist,
                strength=config.default_strength,
                information=Target(dst),
                connect_action=ConnectAction.disable_for(disable_iterations),
            ))

    for _ in range(num_attractors):
        engine.insert_default_attractor(random_point(rng, dim))

    return sources


def extract_connections(engine: SpaceColonization, sources: Dict[int, Source]) -> List[Connection]:
    """Shortest known connection for every (source, target) pair, sorted.

    ``sources`` maps root node indices to their source tag, as returned by
    ``seed_graph``. Roots missing from it are ignored.
    """
    best: Dict[Tuple[int, int], Connection] = {}

    for node, root in engine.iter_information_nodes():
        info = node.assigned_information
        origin = sources.get(root.index)
        if not isinstance(info, Target) or origin is None:
            continue

        key = (origin.id, info.id)
        if key not in best or node.length < best[key].length:
            best[key] = Connection(
                source=origin.id,
                target=info.id,
                length=node.length,
                position=tuple(float(c) for c in node.position)
            )

    return [best[key] for key in sorted(best)]


def to_dot(connections: List[Connection], name: str = 'growth') -> str:
    lines = [f'digraph "{name}" {{']
    for c in connections:
        lines.append(f'    s{c.source} -> t{c.target} [label="{c.length}"];')
    lines.append('}')
    return '\n'.join(lines) + '\n'
