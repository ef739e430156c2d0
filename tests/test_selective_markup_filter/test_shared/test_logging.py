"""Tests for correlation-aware logging."""

import logging

from selective_markup_filter.api import extract_xml
from selective_markup_filter.shared import ExtractionConfig, configure_logging, get_logger


class TestCorrelationLogger:
    """Test structured log records."""

    def test_extra_fields(self, caplog) -> None:
        """Test that records carry component and correlation ID."""
        logger = get_logger("selective_markup_filter.test", "req-1", "unit")

        with caplog.at_level(logging.INFO, logger="selective_markup_filter"):
            logger.info("hello", extra={"count": 2})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-1"
        assert record.count == 2

    def test_component_defaults_to_module_name(self) -> None:
        """Test the default component name."""
        assert get_logger("selective_markup_filter.tree.builder").component == "builder"

    def test_extraction_logs_summary(self, caplog) -> None:
        """Test that a completed extraction logs its summary."""
        config = ExtractionConfig(correlation_id="job-7")

        with caplog.at_level(logging.INFO, logger="selective_markup_filter"):
            extract_xml("<p>1</p><p>2</p>", "p", config)

        summaries = [r for r in caplog.records if r.getMessage() == "Extraction completed"]
        assert len(summaries) == 1
        assert summaries[0].match_count == 2
        assert summaries[0].correlation_id == "job-7"


class TestBuilderDebugRecords:
    """Test that match records are only built when debug logging is on."""

    def test_debug_records(self, caplog) -> None:
        """Test located and built records at debug level."""
        with caplog.at_level(logging.DEBUG, logger="selective_markup_filter"):
            extract_xml("<p>1</p>", "p")

        messages = [r.getMessage() for r in caplog.records]
        assert "Match located" in messages
        built = [r for r in caplog.records if r.getMessage() == "Match built"]
        assert built[0].child_count == 1

    def test_no_debug_records_at_info(self, caplog) -> None:
        """Test that match records are skipped above debug level."""
        logger = get_logger("selective_markup_filter.tree.builder")

        with caplog.at_level(logging.INFO, logger="selective_markup_filter"):
            extract_xml("<p>1</p>", "p")
            assert logger.is_enabled_for(logging.INFO)
            assert not logger.is_enabled_for(logging.DEBUG)

        assert "Match located" not in [r.getMessage() for r in caplog.records]


class TestConfigureLogging:
    """Test the command line logging setup."""

    def test_verbosity_levels(self) -> None:
        """Test the level chosen for each verbosity."""
        package_logger = logging.getLogger("selective_markup_filter")
        original_handlers = package_logger.handlers[:]
        original_level = package_logger.level
        try:
            configure_logging(0)
            assert package_logger.level == logging.WARNING
            configure_logging(1)
            assert package_logger.level == logging.INFO
            configure_logging(3)
            assert package_logger.level == logging.DEBUG
            assert len(package_logger.handlers) == 1
        finally:
            package_logger.handlers[:] = original_handlers
            package_logger.setLevel(original_level)
