#!/usr/bin/env python3
"""
Benchmark script comparing the sequential engine with the batch kernel.

This script measures:
1. Sequential engine throughput
2. Batch kernel first call (with JIT compilation)
3. Batch kernel subsequent calls (cached compilation)
"""

import time

import jax
import numpy as np

from sierpinski import ChaosGame, RenderConfig


def benchmark_engine(size: int = 512, iterations: int = 200_000, n_runs: int = 5):
    """
    Benchmark both rendering paths.

    Args:
        size: Square canvas size
        iterations: Points plotted per run
        n_runs: Number of repeated batch renders
    """
    print("=" * 70)
    print(f"PERFORMANCE BENCHMARK (size={size}, iterations={iterations})")
    print("=" * 70)
    print(f"JAX backend: {jax.default_backend().upper()}")
    print()

    config = RenderConfig.square(size, iterations=iterations, seed=0)

    # ========================================================================
    # Test 1: Sequential engine
    # ========================================================================
    print("Test 1: Sequential engine")
    print("-" * 70)

    start = time.perf_counter()
    ChaosGame.from_config(config).run()
    time_sequential = time.perf_counter() - start

    print(f"Sequential time: {time_sequential:.4f} seconds "
          f"({iterations / time_sequential:,.0f} points/s)")
    print()

    # ========================================================================
    # Test 2: Batch kernel, first call (includes JIT compilation)
    # ========================================================================
    print("Test 2: Batch kernel first call (with JIT compilation)")
    print("-" * 70)

    start = time.perf_counter()
    ChaosGame.from_config(config).render_batch()
    time_first_call = time.perf_counter() - start

    print(f"First call time: {time_first_call:.4f} seconds")
    print()

    # ========================================================================
    # Test 3: Batch kernel, cached
    # ========================================================================
    print("Test 3: Batch kernel subsequent calls (cached)")
    print("-" * 70)

    times = []
    for i in range(n_runs):
        game = ChaosGame.from_config(config)
        start = time.perf_counter()
        game.render_batch()
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        print(f"  Run {i+1}: {elapsed:.4f} seconds")

    avg_time = np.mean(times)
    std_time = np.std(times)
    print(f"\nAverage: {avg_time:.4f} ± {std_time:.4f} seconds")
    print()

    # ========================================================================
    # Summary
    # ========================================================================
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Sequential engine:           {time_sequential:.4f} s")
    print(f"Batch first call (compile):  {time_first_call:.4f} s")
    print(f"Batch cached:                {avg_time:.4f} s  ({time_sequential / avg_time:.1f}x vs sequential)")
    print()

    return {
        'sequential': time_sequential,
        'batch_first_call': time_first_call,
        'batch_cached_avg': avg_time,
        'speedup': time_sequential / avg_time,
    }


def compare_iteration_counts():
    """Compare batch kernel cost across point counts."""
    print("\n" + "=" * 70)
    print("ITERATION SCALING TEST")
    print("=" * 70)

    counts = [10_000, 100_000, 1_000_000]
    results = []

    for n in counts:
        print(f"\nTesting n={n}...")
        config = RenderConfig.square(512, iterations=n, seed=1)

        # Warmup
        ChaosGame.from_config(config).warmup(verbose=False)

        times = []
        for _ in range(3):
            game = ChaosGame.from_config(config)
            start = time.perf_counter()
            game.render_batch()
            times.append(time.perf_counter() - start)

        avg_time = np.mean(times)
        results.append((n, avg_time))
        print(f"  Average time: {avg_time:.4f} s")

    print("\n" + "-" * 70)
    print("Iterations | Time (s) | Relative to n=10000")
    print("-" * 70)
    base_time = results[0][1]
    for n, t in results:
        print(f"{n:10d} | {t:8.4f} | {t / base_time:6.2f}x")


if __name__ == "__main__":
    benchmark_engine()
    compare_iteration_counts()

    print("\n" + "=" * 70)
    print("BENCHMARKING COMPLETED")
    print("=" * 70)
