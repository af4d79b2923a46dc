"""
Chaos-game engine.

The sequential engine is the reference implementation: one transition per
call, each plotted through the canvas write boundary, with progress exposed
as a side channel. The batch path computes the whole trajectory with a
jit-compiled scan and writes the pixels in one vectorised call.
"""

import logging
import math
from typing import Callable, Iterator, NamedTuple, Optional, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from sierpinski.canvas import BLACK, WHITE, Canvas, Color
from sierpinski.config import RenderConfig
from sierpinski.errors import OutOfBoundsError
from sierpinski.geometry import Point, Triangle
from sierpinski.sampler import Sampler

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


# ============================================================================
# Static JIT-compiled functions
# These compile once per trajectory length.
# ============================================================================

@jax.jit
def _chaos_trajectory(vertices: jnp.ndarray, start: jnp.ndarray,
                      choices: jnp.ndarray) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Run the midpoint recursion for a fixed sequence of vertex choices.

    Args:
        vertices: Triangle vertices (3, 2)
        start: Initial interior point (2,)
        choices: Vertex indices (n,)

    Returns:
        points: Visited points (n, 2), the start point excluded
        pixels: Floor of each point as int32 (n, 2), columns (x, y)
    """
    def body(point, idx):
        nxt = (point + vertices[idx]) * 0.5
        return nxt, nxt

    _, points = jax.lax.scan(body, start, choices)
    pixels = jnp.floor(points).astype(jnp.int32)
    return points, pixels


# ============================================================================
# Engine
# ============================================================================

class PlotEvent(NamedTuple):
    """One completed transition."""
    index: int  # 1-based
    total: int
    point: Point
    pixel: Tuple[int, int]
    plotted: bool


def to_pixel(point: Point) -> Tuple[int, int]:
    """Truncate a point to its pixel (floor, never nearest)."""
    return math.floor(point.x), math.floor(point.y)


class ChaosGame:
    """
    Sierpinski chaos game over a triangle and a pixel canvas.

    The current point starts at a random interior point (never plotted).
    Each transition moves it halfway toward a uniformly random vertex and
    plots the new position.

    Usage:
        game = ChaosGame(Triangle.equilateral(512), width=512, height=512,
                         iterations=1_000_000, seed=0)
        canvas = game.run()
    """

    def __init__(self, triangle: Triangle, width: int, height: int, iterations: int,
                 sampler: Optional[Sampler] = None, seed: Optional[int] = None,
                 foreground: Color = WHITE, background: Color = BLACK):
        """
        Args:
            triangle: Non-degenerate triangle, ideally inside the canvas
            width: Canvas width in pixels
            height: Canvas height in pixels
            iterations: Number of transitions to run
            sampler: RNG owner; built from ``seed`` when omitted
            seed: Seed used when no sampler is given
            foreground: Colour written for each plotted point
            background: Initial canvas colour
        """
        if iterations < 0:
            raise ValueError(f"Iteration count must be non-negative, got {iterations}")

        self.triangle = triangle
        self.iterations = int(iterations)
        self.sampler = sampler if sampler is not None else Sampler(seed=seed)
        self.foreground = tuple(foreground)
        self.canvas = Canvas(width, height, background)

        self.completed = 0
        self.skipped = 0
        self.current_point = self.sampler.random_interior_point(triangle)

        if not triangle.fits_within(width, height):
            logger.warning(
                "Triangle bounding box %s exceeds the %dx%d canvas; "
                "out-of-range points will be skipped", triangle.bounding_box(), width, height)
        logger.info("Chaos game ready: %dx%d canvas, %d iterations, seed=%s",
                    width, height, self.iterations, self.sampler.seed)

    @classmethod
    def from_config(cls, config: RenderConfig, sampler: Optional[Sampler] = None) -> "ChaosGame":
        return cls(
            config.build_triangle(), config.width, config.height, config.iterations,
            sampler=sampler, seed=config.seed,
            foreground=config.foreground, background=config.background,
        )

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    @property
    def remaining(self) -> int:
        return self.iterations - self.completed

    @property
    def done(self) -> bool:
        return self.completed >= self.iterations

    def step(self) -> PlotEvent:
        """Run a single transition and plot its point."""
        if self.done:
            raise RuntimeError(f"All {self.iterations} iterations have already run")

        vertex = self.sampler.random_vertex(self.triangle)
        nxt = (self.current_point + vertex) * 0.5
        x, y = to_pixel(nxt)
        try:
            self.canvas.put_pixel(x, y, self.foreground)
            plotted = True
        except OutOfBoundsError as e:
            logger.debug("Skipping write: %s", e)
            self.skipped += 1
            plotted = False

        self.current_point = nxt
        self.completed += 1
        return PlotEvent(self.completed, self.iterations, nxt, (x, y), plotted)

    def iter_plots(self) -> Iterator[PlotEvent]:
        """
        Yield one event per remaining transition, in order.

        Abandoning the generator stops the run; the canvas keeps every pixel
        plotted so far.
        """
        while not self.done:
            yield self.step()

    def run(self, progress: Optional[ProgressCallback] = None, verbose: bool = False) -> Canvas:
        """
        Run all remaining transitions.

        Args:
            progress: Called as ``progress(completed, total)`` after each transition
            verbose: Print a summary when finished

        Returns:
            The populated canvas
        """
        for event in self.iter_plots():
            if progress is not None:
                progress(event.index, event.total)

        self._report(verbose)
        return self.canvas

    def warmup(self, verbose: bool = True) -> None:
        """
        Trigger JIT compilation of the batch kernel for this run's length.

        Uses a throwaway start point and choices so the RNG is not consumed.
        """
        if verbose:
            print(f"Warming up batch kernel (n={self.remaining})...")
        vertices = jnp.asarray([v.to_array() for v in self.triangle.vertices], dtype=jnp.float32)
        start = jnp.asarray(self.current_point.to_array(), dtype=jnp.float32)
        choices = jnp.zeros((self.remaining,), dtype=jnp.int32)
        _, pixels = _chaos_trajectory(vertices, start, choices)
        pixels.block_until_ready()
        if verbose:
            print("✓ Batch kernel compiled.")

    def render_batch(self, verbose: bool = False) -> Canvas:
        """
        Run all remaining transitions with the jit-compiled kernel.

        Same invariants as :meth:`run`, but vertex choices are drawn up front
        and arithmetic is float32, so the pixel sequence differs from the
        sequential path for the same seed.
        """
        n = self.remaining
        if n == 0:
            self._report(verbose)
            return self.canvas

        choices = self.sampler.random_vertex_indices(n)
        vertices = jnp.asarray([v.to_array() for v in self.triangle.vertices], dtype=jnp.float32)
        start = jnp.asarray(self.current_point.to_array(), dtype=jnp.float32)

        points, pixels = _chaos_trajectory(vertices, start, jnp.asarray(choices))
        pixels.block_until_ready()

        pixels = np.asarray(pixels)
        self.skipped += self.canvas.put_pixels(pixels[:, 0], pixels[:, 1], self.foreground)
        last = np.asarray(points[-1], dtype=np.float64)
        self.current_point = Point(float(last[0]), float(last[1]))
        self.completed += n

        self._report(verbose)
        return self.canvas

    def _report(self, verbose: bool) -> None:
        if self.skipped:
            logger.warning("%d of %d writes fell outside the canvas and were skipped",
                           self.skipped, self.completed)
        if verbose:
            print(f"Plotted {self.completed - self.skipped} of {self.iterations} points "
                  f"({self.skipped} skipped).")
