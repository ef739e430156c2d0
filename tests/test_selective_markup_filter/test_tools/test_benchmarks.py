"""Tests for the benchmarking tools."""

import json

import pytest

from selective_markup_filter.api import extract_xml
from selective_markup_filter.tools import (
    BenchmarkResult,
    BenchmarkSuite,
    FilterBenchmark,
    generate_document,
)
from selective_markup_filter.tools.benchmarks import LXML_FULL_TREE, SELECTIVE_FILTER


def result(parser_name: str, time_ms: float, success: bool = True) -> BenchmarkResult:
    return BenchmarkResult(
        parser_name=parser_name,
        test_case="case",
        processing_time_ms=time_ms,
        memory_used_mb=1.0,
        characters_processed=1000,
        matches_found=1,
        success=success,
    )


class TestBenchmarkResult:
    """Test single results."""

    def test_characters_per_second(self) -> None:
        """Test throughput calculation."""
        assert result("x", 500.0).characters_per_second == 2000.0
        assert result("x", 0.0).characters_per_second == 0.0


class TestBenchmarkSuite:
    """Test result aggregation."""

    def test_statistics_skip_failures(self) -> None:
        """Test that failed runs are excluded from statistics."""
        suite = BenchmarkSuite()
        for time_ms in (10.0, 20.0, 30.0):
            suite.add_result(result("a", time_ms))
        suite.add_result(result("a", 1000.0, success=False))

        stats = suite.get_statistics("a", "processing_time_ms")

        assert stats["mean"] == 20.0
        assert stats["median"] == 20.0
        assert stats["count"] == 3
        assert suite.get_statistics("missing", "processing_time_ms") == {}

    def test_report(self) -> None:
        """Test the JSON-ready report."""
        suite = BenchmarkSuite()
        suite.add_result(result("b", 5.0))
        suite.add_result(result("a", 5.0, success=False))

        report = suite.generate_report()

        assert report["parsers"] == ["a", "b"]
        assert report["summary"]["a"]["successful_runs"] == 0
        assert report["summary"]["b"]["time_ms"]["stdev"] == 0.0
        json.dumps(report)


class TestFilterBenchmark:
    """Test benchmark runs."""

    def test_generated_document(self) -> None:
        """Test that the generated feed has one title per article."""
        titles = extract_xml(generate_document(5), "title")

        assert [t.text_content for t in titles] == [f"Article {i}" for i in range(5)]

    def test_run_benchmark(self) -> None:
        """Test that both parsers find the same matches."""
        suite = FilterBenchmark(tag_names=("title", "p"), sizes=(3,), runs=1).run_benchmark()

        selective = suite.get_results_by_parser(SELECTIVE_FILTER)
        full_tree = suite.get_results_by_parser(LXML_FULL_TREE)
        assert len(selective) == len(full_tree) == 1
        assert selective[0].success and full_tree[0].success
        assert selective[0].matches_found == full_tree[0].matches_found == 9

    def test_invalid_runs(self) -> None:
        """Test run count validation."""
        with pytest.raises(ValueError, match="runs must be >= 1"):
            FilterBenchmark(runs=0)
