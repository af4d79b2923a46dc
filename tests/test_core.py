#!/usr/bin/env python3
"""
Tests for the chaos-game engine.

Tests:
1. Convex-hull containment - every visited point stays in the triangle
2. Determinism - same seed, same pixel sequence
3. Zero iterations - canvas untouched
4. Pixel mapping - floor, out-of-range writes skipped
5. Progress and early stop - observation does not change output
6. Sierpinski structure - the central sub-triangle stays empty
7. Batch kernel - same invariants through the jit-compiled path
"""

import itertools
import logging
import math
import sys

import numpy as np
import pytest

from sierpinski.canvas import WHITE
from sierpinski.config import RenderConfig
from sierpinski.core import ChaosGame, to_pixel
from sierpinski.errors import DegenerateGeometryError
from sierpinski.geometry import Point, Triangle
from sierpinski.sampler import Sampler

SIDE = 100
# Inverted sub-triangle with vertices at the edge midpoints of the side-100 frame
CENTRAL = Triangle.from_tuples((50, 0), (75, SIDE * math.sqrt(3) / 4), (25, SIDE * math.sqrt(3) / 4))


def _game(iterations, seed=0, side=SIDE, width=SIDE, height=SIDE):
    return ChaosGame(Triangle.equilateral(side), width, height, iterations, seed=seed)


def _deep_in_central_gap(canvas, depth=0.1):
    """Count plotted pixels whose centre is well inside the central sub-triangle."""
    ys, xs = np.nonzero(canvas.mask(WHITE))
    return sum(min(CENTRAL.barycentric(Point(x + 0.5, y + 0.5))) > depth for x, y in zip(xs, ys))


@pytest.mark.parametrize("seed", range(5))
def test_points_stay_in_convex_hull(seed):
    game = _game(2000, seed=seed)
    assert game.triangle.contains(game.current_point)

    for event in game.iter_plots():
        assert game.triangle.contains(event.point), f"iteration {event.index}: {event.point}"


def test_determinism():
    """Same seed, triangle and count give the same pixels."""
    print("=" * 70)
    print("TEST: Determinism")
    print("=" * 70)

    first = [e.pixel for e in _game(3000, seed=42).iter_plots()]
    second = [e.pixel for e in _game(3000, seed=42).iter_plots()]
    other = [e.pixel for e in _game(3000, seed=43).iter_plots()]

    assert first == second
    assert first != other
    assert np.array_equal(_game(3000, seed=42).run().pixels, _game(3000, seed=42).run().pixels)
    print("✓ Pixel sequences are deterministic")


def test_zero_iterations_is_noop():
    game = _game(0)
    assert game.done
    assert list(game.iter_plots()) == []
    assert game.run().is_blank()
    assert game.render_batch().is_blank()


def test_negative_iterations_rejected():
    with pytest.raises(ValueError):
        _game(-1)


def test_step_after_terminal_state_raises():
    game = _game(3)
    for _ in range(3):
        game.step()
    assert game.done
    with pytest.raises(RuntimeError):
        game.step()


def test_pixels_are_truncated():
    game = _game(1000, seed=8)
    for event in game.iter_plots():
        assert event.pixel == (math.floor(event.point.x), math.floor(event.point.y))
        assert game.canvas.get_pixel(*event.pixel) == WHITE

    assert to_pixel(Point(3.99, 0.5)) == (3, 0)
    assert to_pixel(Point(-0.5, 2.0)) == (-1, 2)


def test_each_transition_moves_halfway_to_a_vertex():
    game = _game(200, seed=4)
    previous = game.current_point
    for event in game.iter_plots():
        doubled = event.point * 2 - previous
        assert any(abs(doubled.x - v.x) < 1e-9 and abs(doubled.y - v.y) < 1e-9
                   for v in game.triangle.vertices)
        previous = event.point


def test_out_of_bounds_writes_are_skipped(caplog):
    """A triangle larger than the canvas loses pixels but the run completes."""
    with caplog.at_level(logging.WARNING, logger="sierpinski"):
        game = _game(1000, seed=3, side=100, width=50, height=50)
        canvas = game.run()

    assert game.completed == 1000
    assert game.skipped > 0
    assert canvas.count_foreground() > 0
    assert "skipped" in caplog.text
    assert "exceeds the 50x50 canvas" in caplog.text


def test_progress_callback_reports_every_iteration():
    calls = []
    game = _game(250, seed=6)
    canvas = game.run(progress=lambda done, total: calls.append((done, total)))

    assert calls == [(i, 250) for i in range(1, 251)]
    assert np.array_equal(canvas.pixels, _game(250, seed=6).run().pixels)


def test_early_stop_leaves_partial_canvas_and_can_resume():
    game = _game(500, seed=12)
    head = list(itertools.islice(game.iter_plots(), 100))

    assert [e.index for e in head] == list(range(1, 101))
    assert game.completed == 100 and game.remaining == 400
    assert 0 < game.canvas.count_foreground() <= 100

    game.run()
    assert game.done
    assert np.array_equal(game.canvas.pixels, _game(500, seed=12).run().pixels)


def test_side_100_scenario():
    """Side-100 frame: pixels stay in the bounding box, the central gap stays empty."""
    print("=" * 70)
    print("TEST: Sierpinski Structure (side 100)")
    print("=" * 70)

    game = _game(5000, seed=1234)
    events = list(game.iter_plots())
    canvas = game.canvas

    ys, xs = np.nonzero(canvas.mask(WHITE))
    assert xs.min() >= 0 and xs.max() < 100
    assert ys.min() >= 0 and ys.max() <= 87
    assert game.skipped == 0

    # Every plotted point lies in one of the three corner sub-triangles
    inside_gap = [e for e in events if min(CENTRAL.barycentric(e.point)) > 1e-9]
    assert inside_gap == []
    assert _deep_in_central_gap(canvas) == 0
    print(f"✓ {canvas.count_foreground()} pixels plotted, none in the central gap")


def test_from_config_square_triangle_in_wide_canvas():
    config = RenderConfig(width=200, height=100, iterations=2000, seed=5)
    game = ChaosGame.from_config(config)
    canvas = game.run()

    assert game.triangle == Triangle.equilateral(100)
    ys, xs = np.nonzero(canvas.mask(WHITE))
    assert xs.max() < 100
    assert canvas.pixels[:, 100:].sum() == 0


def test_from_config_collinear_points_fails():
    config = RenderConfig(width=10, height=10, iterations=10, points=[(0, 0), (1, 1), (2, 2)])
    with pytest.raises(DegenerateGeometryError):
        ChaosGame.from_config(config)


def test_shared_sampler_is_consumed():
    sampler = Sampler(seed=21)
    game = ChaosGame(Triangle.equilateral(64), 64, 64, 10, sampler=sampler)
    game.run()
    assert game.sampler is sampler


def test_custom_colors():
    game = ChaosGame(Triangle.equilateral(32), 32, 32, 500, seed=2,
                     foreground=(255, 0, 0), background=(0, 0, 40))
    canvas = game.run()
    assert canvas.count_foreground((255, 0, 0)) > 0
    assert canvas.count_foreground((255, 0, 0)) + canvas.count_foreground((0, 0, 40)) == 32 * 32


def test_batch_render_invariants():
    print("=" * 70)
    print("TEST: Batch Kernel")
    print("=" * 70)

    game = _game(5000, seed=77)
    game.warmup(verbose=False)
    canvas = game.render_batch()

    assert game.done and game.completed == 5000
    assert game.triangle.contains(game.current_point, tol=1e-5)

    ys, xs = np.nonzero(canvas.mask(WHITE))
    assert xs.size > 0
    assert xs.min() >= 0 and xs.max() < 100
    assert ys.min() >= 0 and ys.max() <= 87
    assert _deep_in_central_gap(canvas) == 0

    again = _game(5000, seed=77).render_batch()
    assert np.array_equal(canvas.pixels, again.pixels)
    print("✓ Batch kernel respects bounds, gap and determinism")


def test_batch_after_partial_sequential_run():
    game = _game(1000, seed=9)
    list(itertools.islice(game.iter_plots(), 400))
    game.render_batch()
    assert game.completed == 1000
    assert game.remaining == 0


def run_all_tests():
    """Run the non-fixture tests without pytest."""
    print("\n" + "=" * 70)
    print("CHAOS GAME ENGINE - TEST SUITE")
    print("=" * 70)

    tests = [
        test_determinism,
        test_zero_iterations_is_noop,
        test_pixels_are_truncated,
        test_progress_callback_reports_every_iteration,
        test_early_stop_leaves_partial_canvas_and_can_resume,
        test_side_100_scenario,
        test_batch_render_invariants,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"✗ {test.__name__} FAILED: {e}")
            failed += 1

    print(f"TEST RESULTS: {len(tests) - failed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    sys.exit(0 if run_all_tests() else 1)
