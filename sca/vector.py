"""
Vector helpers for the growth engine.

Positions and directions are plain numpy float arrays of dimension 2 or 3.
"""

from dataclasses import dataclass
from typing import Sequence, Union
import numpy as np


SUPPORTED_DIMENSIONS = (2, 3)

PointLike = Union[Sequence[float], np.ndarray]


def as_point(coords: PointLike) -> np.ndarray:
    point = np.array(coords, dtype=np.float64).reshape(-1)
    if point.shape[0] not in SUPPORTED_DIMENSIONS:
        raise ValueError(f"Expected a 2D or 3D coordinate, got {point.shape[0]} components")
    return point


def zeros(dim: int) -> np.ndarray:
    return np.zeros(dim, dtype=np.float64)


def magnitude_squared(v: np.ndarray) -> float:
    return float(np.dot(v, v))


def distance_squared(a: np.ndarray, b: np.ndarray) -> float:
    return magnitude_squared(a - b)


def normalize(v: np.ndarray) -> np.ndarray:
    mag = np.sqrt(magnitude_squared(v))
    if mag == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / mag


def is_zero(v: np.ndarray) -> bool:
    return not np.any(v)


@dataclass(frozen=True, order=True)
class SqDist:
    """A squared distance. Build from a radius with ``SqDist.from_dist``."""
    value: float

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"Squared distance must be non-negative, got {self.value}")

    @classmethod
    def from_dist(cls, dist: float) -> 'SqDist':
        return cls(float(dist) * float(dist))

    @property
    def dist(self) -> float:
        return float(np.sqrt(self.value))

    def __repr__(self) -> str:
        return f"SqDist({self.value:.6g})"
