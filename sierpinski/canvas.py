"""
RGB pixel buffer the engine plots into.
"""

from typing import Sequence, Tuple

import numpy as np

from sierpinski.errors import OutOfBoundsError

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)


class Canvas:
    """
    A ``(height, width, 3)`` uint8 image; pixel (x, y) lives at ``pixels[y, x]``.

    Every write sets a pixel to a colour, so repeated or reordered writes of
    the same colour give the same image.
    """

    def __init__(self, width: int, height: int, background: Color = BLACK):
        if int(width) != width or int(height) != height or width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive integers, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.background = tuple(background)
        self.pixels = np.empty((self.height, self.width, 3), dtype=np.uint8)
        self.pixels[...] = np.asarray(self.background, dtype=np.uint8)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: Color = WHITE) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        self.pixels[y, x] = color

    def put_pixels(self, xs: Sequence[int], ys: Sequence[int], color: Color = WHITE) -> int:
        """
        Vectorised write of many pixels.

        Args:
            xs: Column indices
            ys: Row indices, same length as ``xs``

        Returns:
            Number of writes rejected for falling outside the canvas
        """
        xs = np.asarray(xs, dtype=np.int64)
        ys = np.asarray(ys, dtype=np.int64)
        inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        self.pixels[ys[inside], xs[inside]] = color
        return int(inside.size - np.count_nonzero(inside))

    def get_pixel(self, x: int, y: int) -> Color:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return tuple(int(c) for c in self.pixels[y, x])

    def mask(self, color: Color = WHITE) -> np.ndarray:
        """Boolean ``(height, width)`` mask of pixels equal to ``color``."""
        return np.all(self.pixels == np.asarray(color, dtype=np.uint8), axis=-1)

    def count_foreground(self, color: Color = WHITE) -> int:
        return int(np.count_nonzero(self.mask(color)))

    def is_blank(self) -> bool:
        return bool(np.all(self.mask(self.background)))

    def copy(self) -> "Canvas":
        other = Canvas(self.width, self.height, self.background)
        other.pixels[...] = self.pixels
        return other
