"""Performance benchmarking for selective extraction.

Compares selective extraction against materializing the full tree with lxml,
measuring wall time and resident memory growth of the current process.
"""

import gc
import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import psutil
from lxml import etree

from selective_markup_filter.api import extract_xml
from selective_markup_filter.shared import ExtractionConfig, FilterError, get_logger

SELECTIVE_FILTER = "selective_filter"
LXML_FULL_TREE = "lxml_full_tree"
BYTES_PER_MB = 1024 * 1024


@dataclass
class BenchmarkResult:
    """Result of a single benchmark run."""

    parser_name: str
    test_case: str
    processing_time_ms: float
    memory_used_mb: float
    characters_processed: int
    matches_found: int
    success: bool
    error_message: Optional[str] = None

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms


@dataclass
class BenchmarkSuite:
    """Collection of benchmark results with statistical analysis."""

    results: List[BenchmarkResult] = field(default_factory=list)
    suite_name: str = "Selective Extraction Benchmark"
    timestamp: float = field(default_factory=time.time)

    def add_result(self, result: BenchmarkResult) -> None:
        self.results.append(result)

    def get_results_by_parser(self, parser_name: str) -> List[BenchmarkResult]:
        return [r for r in self.results if r.parser_name == parser_name]

    def get_statistics(self, parser_name: str, metric: str) -> Dict[str, float]:
        """Min, max, mean, median and stdev of one metric for one parser."""
        values = [
            getattr(r, metric) for r in self.get_results_by_parser(parser_name)
            if r.success
        ]
        if not values:
            return {}
        return {
            "min": min(values),
            "max": max(values),
            "mean": statistics.mean(values),
            "median": statistics.median(values),
            "stdev": statistics.stdev(values) if len(values) > 1 else 0.0,
            "count": len(values),
        }

    def generate_report(self) -> Dict[str, Any]:
        """Generate a JSON-ready report with per-parser summaries."""
        parsers = sorted({r.parser_name for r in self.results})
        report: Dict[str, Any] = {
            "suite_name": self.suite_name,
            "timestamp": self.timestamp,
            "total_results": len(self.results),
            "parsers": parsers,
            "summary": {},
        }
        for parser in parsers:
            parser_results = self.get_results_by_parser(parser)
            successful = [r for r in parser_results if r.success]
            report["summary"][parser] = {
                "total_runs": len(parser_results),
                "successful_runs": len(successful),
                "time_ms": self.get_statistics(parser, "processing_time_ms"),
                "memory_mb": self.get_statistics(parser, "memory_used_mb"),
                "characters_per_second": self.get_statistics(
                    parser, "characters_per_second"
                ),
            }
        return report


def generate_document(sections: int) -> str:
    """Generate a document with ``sections`` articles full of uninteresting markup."""
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', "<feed>"]
    for i in range(sections):
        parts.append(
            f'<article id="{i}">'
            f"<meta><created>2025-01-01</created><tags><tag>a</tag><tag>b</tag></tags></meta>"
            f"<title>Article {i}</title>"
            f"<body><p>First paragraph of article {i} with <b>bold</b> text.</p>"
            f'<div class="aside"><span>Aside {i}</span></div>'
            f"<p>Second paragraph of article {i}.</p></body>"
            f"</article>"
        )
    parts.append("</feed>")
    return "\n".join(parts)


class FilterBenchmark:
    """Benchmark selective extraction against full-tree parsing."""

    def __init__(
        self,
        tag_names: Sequence[str] = ("title",),
        sizes: Sequence[int] = (100, 1000),
        runs: int = 3,
        config: Optional[ExtractionConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize benchmark.

        Args:
            tag_names: Tag names extracted in every run
            sizes: Number of generated articles per test case
            runs: Runs per test case and parser
            config: Extraction configuration for the selective filter
            correlation_id: Optional correlation ID for tracking
        """
        if runs < 1:
            raise ValueError("runs must be >= 1")
        self.tag_names = tuple(tag_names)
        self.sizes = tuple(sizes)
        self.runs = runs
        self.config = config or ExtractionConfig()
        self.logger = get_logger(__name__, correlation_id, "benchmark")
        self.process = psutil.Process()

    def _memory_mb(self) -> float:
        return self.process.memory_info().rss / BYTES_PER_MB

    def _measure(self, parser_name: str, test_case: str, document: str) -> BenchmarkResult:
        gc.collect()
        memory_before = self._memory_mb()
        start_time = time.perf_counter()
        matches_found = 0
        error_message = None
        try:
            if parser_name == SELECTIVE_FILTER:
                matches_found = len(extract_xml(document, self.tag_names, self.config))
            else:
                root = etree.fromstring(document.encode("utf-8"))
                matches_found = sum(1 for _ in root.iter(*self.tag_names))
        except (FilterError, etree.XMLSyntaxError) as e:
            error_message = str(e)

        processing_time = (time.perf_counter() - start_time) * 1000
        memory_used = max(0.0, self._memory_mb() - memory_before)
        return BenchmarkResult(
            parser_name=parser_name,
            test_case=test_case,
            processing_time_ms=processing_time,
            memory_used_mb=memory_used,
            characters_processed=len(document),
            matches_found=matches_found,
            success=error_message is None,
            error_message=error_message,
        )

    def run_benchmark(self) -> BenchmarkSuite:
        """Run every size with both parsers and collect the results."""
        suite = BenchmarkSuite()
        for size in self.sizes:
            document = generate_document(size)
            test_case = f"articles_{size}"
            for _ in range(self.runs):
                for parser_name in (SELECTIVE_FILTER, LXML_FULL_TREE):
                    suite.add_result(self._measure(parser_name, test_case, document))
            self.logger.info(
                "Benchmark case completed",
                extra={"test_case": test_case, "characters": len(document)},
            )
        return suite
