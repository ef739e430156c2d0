#!/usr/bin/env python3
"""
Performance benchmarking demonstration for the selective markup filter.

Compares selective extraction with building the full tree in lxml on
generated documents of growing size.
"""

import sys
import json
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from selective_markup_filter.tools import FilterBenchmark
from selective_markup_filter.tools.benchmarks import LXML_FULL_TREE, SELECTIVE_FILTER


def main():
    """Run the benchmark and print a summary."""
    print("📊 SELECTIVE EXTRACTION BENCHMARK")
    print("=" * 40)

    benchmark = FilterBenchmark(
        tag_names=("title",),
        sizes=(100, 1000, 10000),
        runs=3,
        correlation_id="demo-benchmark",
    )
    suite = benchmark.run_benchmark()

    for parser_name in (SELECTIVE_FILTER, LXML_FULL_TREE):
        time_stats = suite.get_statistics(parser_name, "processing_time_ms")
        memory_stats = suite.get_statistics(parser_name, "memory_used_mb")
        print(f"\n{parser_name}")
        print(f"  mean time:   {time_stats.get('mean', 0.0):.2f} ms")
        print(f"  mean memory: {memory_stats.get('mean', 0.0):.2f} MB")

    print("\n📋 Full report:")
    print(json.dumps(suite.generate_report(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
