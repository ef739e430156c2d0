"""Shared utilities for selective markup filtering.

This module provides configuration objects, the exception hierarchy, source
positions and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ExtractionConfig,
    FilterConfig,
    TokenizerConfig,
)
from .errors import (
    DepthLimitExceededError,
    FilterError,
    MarkupSyntaxError,
    MismatchedClosingTagError,
    StreamExhausted,
    UnclosedTagsError,
    UnexpectedClosingTagError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .positions import TokenPosition

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ExtractionConfig",
    "FilterConfig",
    "TokenizerConfig",
    "DepthLimitExceededError",
    "FilterError",
    "MarkupSyntaxError",
    "MismatchedClosingTagError",
    "StreamExhausted",
    "UnclosedTagsError",
    "UnexpectedClosingTagError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "TokenPosition",
]
