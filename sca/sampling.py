"""
Point generation for seeding roots and attractors.

Provides two kinds of seeding:
- uniform: random points in the [-1, 1] cube (2D or 3D)
- mask: points sampled from an image silhouette, either uniformly inside the
  mask or along colour edges found with a Sobel operator
"""

from typing import List, Literal, Optional, Tuple
import numpy as np
from PIL import Image
from scipy import ndimage


MaskPlacement = Literal['random', 'edge']


def random_point(rng: np.random.Generator, dim: int) -> np.ndarray:
    """Uniform random point in [-1, 1]^dim."""
    return rng.uniform(-1.0, 1.0, size=dim)


def random_around(rng: np.random.Generator, center: np.ndarray, dist: float) -> np.ndarray:
    """Random point in the axis-aligned box of half-size ``dist`` around ``center``."""
    center = np.asarray(center, dtype=np.float64)
    return center + rng.uniform(-1.0, 1.0, size=center.shape[0]) * dist


def random_points(rng: np.random.Generator, count: int, dim: int) -> List[np.ndarray]:
    return list(rng.uniform(-1.0, 1.0, size=(count, dim)))


def load_mask(image_path: str) -> np.ndarray:
    """Load an image as a binary mask. Returns True where foreground exists."""
    img = Image.open(image_path).convert('RGBA')
    return np.array(img)[:, :, 3] > 0


def detect_edges(image_path: str, threshold: float = 0.1) -> Tuple[np.ndarray, np.ndarray]:
    """
    Detect edges based on grayscale gradients using the Sobel operator.

    Returns (edges, normalized edge magnitude).
    """
    gray = np.array(Image.open(image_path).convert('L'), dtype=np.float32) / 255.0

    sobel_x = ndimage.sobel(gray, axis=1)
    sobel_y = ndimage.sobel(gray, axis=0)
    magnitude = np.hypot(sobel_x, sobel_y)
    if magnitude.max() > 0:
        magnitude = magnitude / magnitude.max()

    return magnitude > threshold, magnitude


def pixels_to_points(xs: np.ndarray, ys: np.ndarray, width: int, height: int) -> np.ndarray:
    """Map pixel coordinates to [-1, 1] with y pointing up."""
    scale = max(width, height) / 2.0
    px = (xs.astype(np.float64) + 0.5 - width / 2.0) / scale
    py = (height / 2.0 - ys.astype(np.float64) - 0.5) / scale
    return np.column_stack([px, py])


def sample_mask_points(
    mask: np.ndarray,
    count: int,
    rng: np.random.Generator,
    method: MaskPlacement = 'random',
    image_path: Optional[str] = None,
    edge_threshold: float = 0.1
) -> List[np.ndarray]:
    """
    Sample 2D points from the mask.

    Args:
        mask: Binary mask where True indicates valid positions
        count: Number of points to sample
        method: 'random' for uniform sampling, 'edge' for edge-based
        image_path: Path to image (required for edge method)
        edge_threshold: Minimum gradient magnitude for edge detection (0-1)
    """
    candidates = mask
    if method == 'edge':
        if image_path is None:
            raise ValueError("image_path is required for edge placement method")
        edges, _ = detect_edges(image_path, edge_threshold)
        if np.any(edges & mask):
            candidates = edges & mask
        else:
            print("Warning: No edges detected, falling back to random sampling")

    ys, xs = np.nonzero(candidates)
    if len(xs) < count:
        print(f"Warning: Only {len(xs)} valid positions available")
        count = len(xs)

    chosen = rng.choice(len(xs), size=count, replace=False)
    height, width = mask.shape
    return list(pixels_to_points(xs[chosen], ys[chosen], width, height))


def find_bottom_center(mask: np.ndarray) -> np.ndarray:
    """Bottom-center point of the mask, in [-1, 1] coordinates."""
    ys, xs = np.nonzero(mask)
    max_y = ys.max()
    center_x = np.array([xs[ys == max_y].mean()])
    height, width = mask.shape
    return pixels_to_points(center_x, np.array([max_y]), width, height)[0]
