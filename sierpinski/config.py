"""
Render configuration.

One configuration covers both the square canvas (``RenderConfig.square``)
and independently sized width/height canvases. The triangle is either an
equilateral one anchored at the origin or three explicit points.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from sierpinski.canvas import BLACK, WHITE, Color
from sierpinski.geometry import Triangle

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 4_000_000


@dataclass
class RenderConfig:
    """
    Everything needed to set up one chaos-game run.

    Args:
        width: Canvas width in pixels
        height: Canvas height in pixels
        iterations: Number of plotted points (0 is a legal no-op)
        seed: RNG seed; None seeds from OS entropy
        side_length: Equilateral side; defaults to min(width, height)
        points: Three explicit vertices, mutually exclusive with ``side_length``
        foreground: Colour of plotted pixels
        background: Colour of untouched pixels
    """
    width: int
    height: int
    iterations: int = DEFAULT_ITERATIONS
    seed: Optional[int] = None
    side_length: Optional[float] = None
    points: Optional[Sequence[Tuple[float, float]]] = None
    foreground: Color = WHITE
    background: Color = BLACK

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {self.width}x{self.height}")
        if self.iterations < 0:
            raise ValueError(f"Iteration count must be non-negative, got {self.iterations}")
        if self.side_length is not None and self.points is not None:
            raise ValueError("Give either side_length or points, not both")
        if self.points is not None and len(self.points) != 3:
            raise ValueError(f"Expected exactly 3 points, got {len(self.points)}")

    @classmethod
    def square(cls, size: int, **kwargs) -> "RenderConfig":
        return cls(width=size, height=size, **kwargs)

    def build_triangle(self) -> Triangle:
        """
        Resolve the triangle-sizing policy.

        Raises:
            DegenerateGeometryError: for a non-positive side or collinear points
        """
        if self.points is not None:
            return Triangle.from_points(*self.points)
        side = self.side_length if self.side_length is not None else min(self.width, self.height)
        return Triangle.equilateral(side)

    def fits_canvas(self, triangle: Optional[Triangle] = None) -> bool:
        """Whether the triangle's bounding box lies inside [0, width] x [0, height]."""
        triangle = triangle or self.build_triangle()
        return triangle.fits_within(self.width, self.height)
