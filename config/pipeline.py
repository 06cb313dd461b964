"""
Run configuration for the growth simulation scripts.

All output paths are derived from ``run_name``.
"""

from dataclasses import asdict, dataclass, fields
from typing import Optional
from pathlib import Path
import json


@dataclass
class PipelineConfig:
    run_name: str = 'growth'

    # ==================== OUTPUT SETTINGS ====================
    output_base: str = 'outputs'

    # ==================== SEEDING ====================
    num_attractors: int = 1000
    num_roots: int = 1
    use_3d: bool = False
    mask_image: Optional[str] = None        # Seed attractors from an image silhouette (2D)
    attractor_placement: str = 'random'     # 'random' or 'edge' (mask seeding only)

    # ==================== GROWTH ====================
    influence_radius: float = 0.25
    kill_distance: float = 0.1
    move_distance: float = 0.05
    max_length: int = 100
    max_branches: int = 10
    enforce_growth_limits: bool = True
    use_last_nodes: Optional[int] = None
    max_iterations: Optional[int] = None
    stagnation_limit: int = 100

    # ==================== GRAPH MODE ====================
    target_nodes: int = 0
    attractors_per_target_node: int = 4
    target_attractor_radius: float = 0.1

    # ==================== OUTPUT ====================
    save_every: Optional[int] = None        # Snapshot every N iterations
    render_size: int = 800

    # ==================== MISC ====================
    random_seed: Optional[int] = None
    profile: bool = False

    @property
    def dim(self) -> int:
        return 3 if self.use_3d else 2

    # ==================== DERIVED PATHS ====================
    @property
    def output_dir(self) -> Path:
        return Path(self.output_base) / self.run_name

    @property
    def data_path(self) -> Path:
        return self.output_dir / f'{self.run_name}_data.json'

    @property
    def image_path(self) -> Path:
        return self.output_dir / f'{self.run_name}.png'

    @property
    def eps_path(self) -> Path:
        return self.output_dir / f'{self.run_name}.eps'

    @property
    def stats_path(self) -> Path:
        return self.output_dir / f'{self.run_name}_stats.png'

    @property
    def animation_path(self) -> Path:
        return self.output_dir / f'{self.run_name}.gif'

    @property
    def graph_path(self) -> Path:
        return self.output_dir / f'{self.run_name}.dot'

    def snapshot_path(self, iteration: int, suffix: str = 'png') -> Path:
        return self.output_dir / f'out_{iteration:05d}.{suffix}'

    def create_output_dirs(self):
        self.output_dir.mkdir(parents=True, exist_ok=True)


def load_config(path: str = 'config/pipeline.json') -> PipelineConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return PipelineConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    known = {f.name for f in fields(PipelineConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {sorted(unknown)}")

    return PipelineConfig(**data)


def save_config(config: PipelineConfig, path: str = 'config/pipeline.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(asdict(config), f, indent=2)

    print(f"Saved config to {config_path}")
