"""
Timing of the engine's growth phases.

Disabled by default; call ``profiler.enable()`` (the CLI does so when the
pipeline config sets ``profile``) and a summary table is printed at exit.
"""

import atexit
import time
from collections import defaultdict
from dataclasses import dataclass
from functools import wraps
from typing import Dict, List, Tuple


@dataclass
class PhaseTiming:
    calls: int = 0
    total: float = 0.0
    slowest: float = 0.0

    def add(self, elapsed: float):
        self.calls += 1
        self.total += elapsed
        self.slowest = max(self.slowest, elapsed)

    @property
    def mean(self) -> float:
        return self.total / self.calls if self.calls else 0.0


class Profiler:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.timings = defaultdict(PhaseTiming)
            cls._instance.enabled = False
            cls._instance._atexit_hooked = False
        return cls._instance

    def enable(self):
        self.enabled = True
        if not self._atexit_hooked:
            atexit.register(self.print_stats)
            self._atexit_hooked = True

    def disable(self):
        self.enabled = False

    def record(self, phase: str, elapsed: float):
        if self.enabled:
            self.timings[phase].add(elapsed)

    def summary(self) -> List[Tuple[str, PhaseTiming]]:
        """Phases sorted by total time, slowest first."""
        return sorted(self.timings.items(), key=lambda item: item[1].total, reverse=True)

    def print_stats(self):
        rows = self.summary()
        if not rows:
            return

        width = 78
        print()
        print("=" * width)
        print(f"{'Phase':<40} {'Calls':>8} {'Total(s)':>9} {'Mean(ms)':>9} {'Max(ms)':>9}")
        print("-" * width)
        for phase, t in rows:
            print(f"{phase:<40} {t.calls:>8} {t.total:>9.3f} {t.mean * 1e3:>9.3f} {t.slowest * 1e3:>9.3f}")
        print("=" * width)

    def reset(self):
        self.timings.clear()


profiler = Profiler()


def profile(func):
    """Time every call of ``func`` under its qualified name while profiling is on."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not profiler.enabled:
            return func(*args, **kwargs)
        t0 = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            profiler.record(func.__qualname__, time.perf_counter() - t0)
    return wrapper


class profile_block:
    """Context manager form of ``profile`` for ad hoc phases."""

    def __init__(self, phase: str):
        self.phase = phase
        self._t0 = 0.0

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, *exc):
        profiler.record(self.phase, time.perf_counter() - self._t0)
