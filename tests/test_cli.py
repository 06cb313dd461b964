"""
End-to-end tests for the command line scripts.
"""

import json

import numpy as np

import pytest

pytest.importorskip("cairo")
pytest.importorskip("imageio")

import main_sca
import render
from config import PipelineConfig
from sca import SCAConfig, SpaceColonization


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


SMALL_RUN = ['--num-points', '60', '--num-roots', '2', '--max-iter', '15', '--seed', '7']


class TestBuildPipeline:
    def test_flags_override_config(self, workdir):
        args = main_sca.parse_args(['--mode', 'eps', '--radius', '0.3', '--kill-distance', '0.05',
                                    '--max-iter', '9', '--use-3d', '--no-growth-limits'])
        pipeline = main_sca.build_pipeline(args)
        assert pipeline.influence_radius == 0.3
        assert pipeline.kill_distance == 0.05
        assert pipeline.max_iterations == 9
        assert pipeline.use_3d is True
        assert pipeline.enforce_growth_limits is False
        assert pipeline.run_name == 'eps'

    def test_config_file_is_read(self, workdir):
        (workdir / 'run.json').write_text(json.dumps({'run_name': 'veins', 'num_roots': 3}))
        pipeline = main_sca.build_pipeline(main_sca.parse_args(['--config', 'run.json']))
        assert pipeline.run_name == 'veins'
        assert pipeline.num_roots == 3


class TestModes:
    def test_eps_mode_writes_snapshots(self, workdir):
        main_sca.main(['--mode', 'eps', '--save-every', '5'] + SMALL_RUN)
        out = workdir / 'outputs' / 'eps'
        assert (out / 'eps.eps').exists()
        assert (out / 'out_00000.eps').exists()
        assert (out / 'out_00005.eps').exists()

    def test_graph_mode_writes_dot(self, workdir):
        main_sca.main(['--mode', 'graph', '--target-nodes', '3'] + SMALL_RUN)
        dot = (workdir / 'outputs' / 'graph' / 'graph.dot').read_text()
        assert dot.startswith('digraph "graph" {')
        assert (workdir / 'outputs' / 'graph' / 'graph_data.json').exists()

    def test_graph_mode_needs_targets(self, workdir):
        with pytest.raises(ValueError):
            main_sca.main(['--mode', 'graph'] + SMALL_RUN)

    def test_render_script(self, workdir):
        main_sca.main(['--mode', 'graph', '--target-nodes', '2'] + SMALL_RUN)
        data = workdir / 'outputs' / 'graph' / 'graph_data.json'

        render.main([str(data), '--size', '100'])

        assert data.with_suffix('.png').exists()
        assert data.with_suffix('.eps').exists()


class TestSeeding:
    def test_random_seeding(self):
        pipeline = PipelineConfig(num_roots=3, num_attractors=20, use_3d=True)
        engine = SpaceColonization(SCAConfig.from_pipeline(pipeline))
        main_sca.seed_random(engine, pipeline, np.random.default_rng(0))
        assert len(engine.nodes) == 3
        assert len(engine.attractors) == 20
        assert engine.dim == 3

    def test_mask_seeding_roots_at_bottom(self, workdir):
        Image = pytest.importorskip("PIL.Image")
        alpha = np.zeros((40, 40), dtype=np.uint8)
        alpha[5:35, 10:30] = 255
        rgba = np.dstack([np.zeros((40, 40, 3), dtype=np.uint8), alpha])
        Image.fromarray(rgba).save(workdir / 'leaf.png')

        pipeline = PipelineConfig(num_roots=2, num_attractors=25, mask_image='leaf.png')
        engine = SpaceColonization(SCAConfig.from_pipeline(pipeline))
        main_sca.seed_random(engine, pipeline, np.random.default_rng(0))

        roots = [root.position for root in engine.iter_roots()]
        assert len(roots) == 2
        assert roots[0][1] == pytest.approx(-0.725)
        assert roots[0][0] == pytest.approx(0.0, abs=1e-9)
        for point in engine.iter_attractor_positions():
            assert -0.5 <= point[0] <= 0.5
            assert -0.75 <= point[1] <= 0.75

    def test_mask_seeding_rejects_3d(self, workdir):
        pipeline = PipelineConfig(mask_image='leaf.png', use_3d=True)
        engine = SpaceColonization(SCAConfig.from_pipeline(pipeline))
        with pytest.raises(ValueError):
            main_sca.seed_random(engine, pipeline, np.random.default_rng(0))
