"""
Exceptions raised by the chaos-game renderer.
"""


class ChaosGameError(Exception):
    """Base class for all renderer errors."""


class DegenerateGeometryError(ChaosGameError, ValueError):
    """Raised when a triangle has zero area (non-positive side or collinear points)."""


class OutOfBoundsError(ChaosGameError, IndexError):
    """
    Raised by the canvas write boundary for a pixel outside the canvas.

    The engine treats this as recoverable: the offending write is skipped
    and the run continues.
    """

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Pixel ({x}, {y}) is outside the {width}x{height} canvas"
        )
