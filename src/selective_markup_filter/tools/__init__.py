"""Developer tools for selective markup filtering."""

from .benchmarks import (
    BenchmarkResult,
    BenchmarkSuite,
    FilterBenchmark,
    generate_document,
)

__all__ = [
    "BenchmarkResult",
    "BenchmarkSuite",
    "FilterBenchmark",
    "generate_document",
]
