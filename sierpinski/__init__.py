"""
Sierpinski Chaos Game
=====================

Renders the Sierpinski triangle into a pixel canvas with the randomized
chaos game: repeatedly jump halfway toward a random triangle vertex and
plot where you land.

Runs are replayable from an explicit RNG seed. A jit-compiled JAX kernel
renders large point counts in one batch.
"""

from sierpinski.canvas import Canvas
from sierpinski.config import RenderConfig
from sierpinski.core import ChaosGame, PlotEvent
from sierpinski.errors import ChaosGameError, DegenerateGeometryError, OutOfBoundsError
from sierpinski.geometry import Point, Triangle
from sierpinski.sampler import Sampler

__all__ = [
    'Canvas',
    'ChaosGame',
    'ChaosGameError',
    'DegenerateGeometryError',
    'OutOfBoundsError',
    'PlotEvent',
    'Point',
    'RenderConfig',
    'Sampler',
    'Triangle',
]
__version__ = '1.0.0'
