"""
Random sampling inside a triangle.

The sampler owns an explicit ``numpy.random.Generator`` so every run is
replayable from its seed and no ambient global RNG state is involved.
"""

from typing import Optional, Tuple

import numpy as np

from sierpinski.geometry import Point, Triangle


class Sampler:
    """
    Stateful random source for interior points and vertex choices.

    Usage:
        sampler = Sampler(seed=42)
        p = sampler.random_interior_point(triangle)
        v = sampler.random_vertex(triangle)
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        """
        Args:
            seed: Seed for ``numpy.random.default_rng``; None draws from OS entropy
            rng: Pre-built generator, takes precedence over ``seed``
        """
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def reseed(self, seed: Optional[int]) -> None:
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def random_barycentric(self) -> Tuple[float, float]:
        """
        Draw (u, v) with u, v >= 0 and u + v <= 1.

        The second draw is taken from [0, 1 - r1] rather than [0, 1] so the
        pair never leaves the simplex and no rejection step is needed.
        The resulting points are not area-uniform: half of them land in the
        corner sub-triangle at b.
        """
        r1 = float(self.rng.uniform(0.0, 1.0))
        r2 = float(self.rng.uniform(0.0, 1.0 - r1))
        return r1, r2

    def random_interior_point(self, triangle: Triangle) -> Point:
        u, v = self.random_barycentric()
        # P = A + u * (B - A) + v * (C - A)
        return triangle.a + (triangle.b - triangle.a) * u + (triangle.c - triangle.a) * v

    def random_vertex_index(self) -> int:
        return int(self.rng.integers(0, 3))

    def random_vertex(self, triangle: Triangle) -> Point:
        return triangle.vertices[self.random_vertex_index()]

    def random_vertex_indices(self, n: int) -> np.ndarray:
        """Draw ``n`` independent vertex indices in {0, 1, 2} for the batch path."""
        if n < 0:
            raise ValueError(f"Number of draws must be non-negative, got {n}")
        return self.rng.integers(0, 3, size=n, dtype=np.int32)
