"""Benchmark utilities and fixtures for performance testing."""

import pytest
import time
import tracemalloc
import gc
from dataclasses import dataclass, field
from typing import Callable, Optional, List
import numpy as np


@dataclass
class BenchmarkResult:
    """Results from a benchmark run."""
    name: str
    time_ms: float
    memory_peak_mb: float
    memory_current_mb: float
    iterations: int
    time_std_ms: float = 0.0
    all_times_ms: List[float] = field(default_factory=list)

    def __str__(self):
        return (
            f"{self.name}: "
            f"time={self.time_ms:.2f}ms (std={self.time_std_ms:.2f}ms), "
            f"memory_peak={self.memory_peak_mb:.2f}MB"
        )


class BenchmarkRunner:
    """Runner for timing and memory benchmarks."""

    def __init__(self, warmup: int = 2, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def run(self, func: Callable, name: Optional[str] = None) -> BenchmarkResult:
        """Run benchmark with timing and memory measurement.

        Args:
            func: Function to benchmark (should take no arguments)
            name: Optional name for the benchmark

        Returns:
            BenchmarkResult with timing and memory data
        """
        name = name or getattr(func, '__name__', 'benchmark')

        gc.collect()
        for _ in range(self.warmup):
            func()

        # Memory measurement (single run)
        gc.collect()
        tracemalloc.start()
        func()
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        times = []
        for _ in range(self.iterations):
            gc.collect()
            start = time.perf_counter()
            func()
            times.append((time.perf_counter() - start) * 1000)

        return BenchmarkResult(
            name=name,
            time_ms=float(np.median(times)),
            time_std_ms=float(np.std(times)),
            memory_peak_mb=peak / (1024 * 1024),
            memory_current_mb=current / (1024 * 1024),
            iterations=self.iterations,
            all_times_ms=times
        )


@pytest.fixture
def benchmark():
    """Fixture providing a BenchmarkRunner instance."""
    return BenchmarkRunner(warmup=2, iterations=10)


@pytest.fixture
def quick_benchmark():
    """Faster benchmark runner for CI/development."""
    return BenchmarkRunner(warmup=1, iterations=5)


@pytest.fixture
def benchmark_4k_sky():
    """4096x4096 float sky frame with sparse bright sources."""
    rng = np.random.default_rng(42)
    img = rng.normal(1000.0, 20.0, size=(4096, 4096))
    ys = rng.integers(0, 4096, size=2000)
    xs = rng.integers(0, 4096, size=2000)
    img[ys, xs] += rng.uniform(5000, 60000, size=2000)
    return img
