#!/usr/bin/env python3
"""
Render a Sierpinski triangle and check its characteristic structure.

The inverted central sub-triangle (vertices at the edge midpoints) must stay
empty, and so must the central sub-triangles of the three corner copies.
"""

import numpy as np

from sierpinski import ChaosGame, RenderConfig, Triangle
from sierpinski.canvas import WHITE
from sierpinski.utils import visualize_canvas


def central_gap(triangle: Triangle) -> Triangle:
    """Triangle spanned by the edge midpoints."""
    a, b, c = triangle.vertices
    return Triangle((a + b) / 2, (b + c) / 2, (c + a) / 2)


def count_in_gap(canvas, gap: Triangle, depth: float = 0.1) -> int:
    ys, xs = np.nonzero(canvas.mask(WHITE))
    return sum(min(gap.barycentric((x + 0.5, y + 0.5))) > depth for x, y in zip(xs, ys))


def verify(size: int = 512, iterations: int = 200_000, visualize: bool = True):
    print("=" * 70)
    print("CORRECTNESS CHECK: Sierpinski Triangle")
    print("=" * 70)
    print(f"Canvas: {size}x{size}, iterations: {iterations}")
    print()

    config = RenderConfig.square(size, iterations=iterations, seed=0)
    game = ChaosGame.from_config(config)
    canvas = game.run(verbose=True)
    triangle = game.triangle

    filled = canvas.count_foreground()
    print(f"  - Plotted pixels: {filled}")
    print(f"  - Skipped writes: {game.skipped}")

    # Corner copies of the outer triangle, each scaled by 1/2 toward a vertex
    gaps = [central_gap(triangle)]
    for v in triangle.vertices:
        corner = Triangle(*((p + v) / 2 for p in triangle.vertices))
        gaps.append(central_gap(corner))

    for level, gap in enumerate(gaps):
        hits = count_in_gap(canvas, gap)
        status = "✓ PASS" if hits == 0 else "✗ FAIL"
        print(f"  {status}: gap {level} contains {hits} pixels (area {gap.area():.1f})")

    coverage = filled / triangle.area()
    print(f"  - Coverage of triangle area: {coverage:.3f}")

    if visualize:
        visualize_canvas(canvas, title="Sierpinski Triangle")

    return canvas


if __name__ == "__main__":
    verify()

    print("\n" + "=" * 70)
    print("CHECK COMPLETED")
    print("=" * 70)
