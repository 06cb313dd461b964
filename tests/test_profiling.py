"""
Tests for growth phase timing.
"""

from sca import SCAConfig, SpaceColonization
from sca.profiling import profile_block, profiler


class TestProfiler:
    def setup_method(self):
        profiler.reset()

    def teardown_method(self):
        profiler.disable()
        profiler.reset()

    def test_disabled_by_default_records_nothing(self):
        engine = SpaceColonization(SCAConfig())
        engine.insert_root((0.0, 0.0))
        engine.insert_default_attractor((0.2, 0.0))
        engine.step()
        assert not profiler.timings

    def test_records_engine_phases(self):
        profiler.enable()
        engine = SpaceColonization(SCAConfig())
        engine.insert_root((0.0, 0.0))
        engine.insert_default_attractor((0.2, 0.0))
        engine.step()
        engine.step()

        assert profiler.timings['SpaceColonization._scan_attractors'].calls == 2
        assert profiler.timings['SpaceColonization._materialize_growth'].calls == 2

    def test_profile_block(self):
        profiler.enable()
        with profile_block('seeding'):
            pass
        assert profiler.timings['seeding'].calls == 1

    def test_summary_sorted_by_total(self):
        profiler.enable()
        profiler.record('fast', 0.001)
        profiler.record('slow', 0.5)
        profiler.record('slow', 0.25)

        phases = [phase for phase, _ in profiler.summary()]
        assert phases == ['slow', 'fast']
        slow = profiler.timings['slow']
        assert slow.calls == 2
        assert slow.slowest == 0.5
        assert slow.mean == 0.375

    def test_print_stats(self, capsys):
        profiler.enable()
        profiler.record('seeding', 0.002)
        profiler.print_stats()
        assert 'seeding' in capsys.readouterr().out
