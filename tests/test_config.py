"""
Tests for engine and pipeline configuration.
"""

import json

import pytest

from config import PipelineConfig, RenderConfig, load_config, save_config
from sca import ConnectAction, SCAConfig


class TestSCAConfig:
    def test_defaults_are_valid(self):
        config = SCAConfig()
        assert config.connect_dist <= config.attract_dist
        assert config.default_strength == 1.0
        assert config.default_connect_action.kills
        assert config.use_last_nodes is None

    def test_squared_distances(self):
        config = SCAConfig(attract_distance=0.5, connect_distance=0.2)
        assert config.attract_dist.value == pytest.approx(0.25)
        assert config.connect_dist.value == pytest.approx(0.04)

    @pytest.mark.parametrize("kwargs", [
        dict(attract_distance=0.1, connect_distance=0.2),
        dict(attract_distance=-1.0, connect_distance=-2.0),
        dict(move_distance=0.0),
        dict(use_last_nodes=0),
    ])
    def test_invalid_configs_rejected(self, kwargs):
        with pytest.raises(ValueError):
            SCAConfig(**kwargs)

    def test_custom_connect_action(self):
        config = SCAConfig(default_connect_action=ConnectAction.disable_for(5))
        assert config.default_connect_action.disable_iterations == 5

    def test_from_pipeline(self):
        pipeline = PipelineConfig(influence_radius=0.4, kill_distance=0.2, move_distance=0.03,
                                  max_length=7, max_branches=2, use_last_nodes=50,
                                  enforce_growth_limits=False)
        config = SCAConfig.from_pipeline(pipeline)
        assert config.attract_distance == 0.4
        assert config.connect_distance == 0.2
        assert config.move_distance == 0.03
        assert config.max_length == 7
        assert config.max_branches == 2
        assert config.use_last_nodes == 50
        assert config.enforce_growth_limits is False


class TestPipelineConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / 'missing.json'))
        assert config == PipelineConfig()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / 'pipeline.json'
        original = PipelineConfig(run_name='roots', num_attractors=42, use_3d=True, save_every=5)
        save_config(original, str(path))

        assert load_config(str(path)) == original

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / 'pipeline.json'
        path.write_text(json.dumps({'num_roots': 4}))
        config = load_config(str(path))
        assert config.num_roots == 4
        assert config.num_attractors == PipelineConfig().num_attractors

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / 'pipeline.json'
        path.write_text(json.dumps({'num_rootz': 4}))
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_derived_paths(self):
        config = PipelineConfig(run_name='veins', output_base='out')
        assert config.dim == 2
        assert str(config.data_path).replace('\\', '/') == 'out/veins/veins_data.json'
        assert config.snapshot_path(7, 'eps').name == 'out_00007.eps'

    def test_render_config_from_pipeline(self):
        render = RenderConfig.from_pipeline(PipelineConfig(render_size=320))
        assert render.output_width == render.output_height == 320
