"""Configuration classes for selective markup filtering.

This module provides configuration objects for the tokenizers and the
selective tree builder, with validation, JSON round-tripping and presets.
"""

import codecs
import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_CHUNK_SIZE = 8192
DEFAULT_MAX_DEPTH = 512
UNTRUSTED_MAX_DEPTH = 64


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class TokenizerConfig:
    """Configuration for the streaming tokenizers."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    default_encoding: str = "utf-8"
    void_elements_self_close: bool = True  # HTML only

    def __post_init__(self) -> None:
        """Validate tokenizer configuration."""
        if self.chunk_size <= 0:
            raise ConfigValidationError("chunk_size must be > 0", "chunk_size")
        if not self.default_encoding:
            raise ConfigValidationError(
                "default_encoding cannot be empty", "default_encoding"
            )
        try:
            codecs.lookup(self.default_encoding)
        except LookupError as e:
            raise ConfigValidationError(
                f"Unknown default_encoding: {self.default_encoding}",
                "default_encoding",
                suggestions=["Use a Python codec name such as utf-8 or cp1252"],
            ) from e


@dataclass(frozen=True)
class FilterConfig:
    """Configuration for the selective tree builder.

    Attributes:
        max_depth: Maximum nesting of open tags (matched scopes plus unmatched
            tags) inside one match before ``DepthLimitExceededError`` is raised
        descend_into_unmatched: When True, tags outside the tag set are
            transparent: their text and any matched tags inside them are kept
            in the nearest matched scope. When False, everything inside an
            unmatched tag is discarded and only balance-checked.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    descend_into_unmatched: bool = True

    def __post_init__(self) -> None:
        """Validate filter configuration."""
        if self.max_depth < 1:
            raise ConfigValidationError(
                "max_depth must be >= 1", "max_depth",
                suggestions=[f"Use the default of {DEFAULT_MAX_DEPTH}"],
            )


_SECTIONS = {
    "tokenizer": TokenizerConfig,
    "filter": FilterConfig,
}


@dataclass(frozen=True)
class ExtractionConfig:
    """Complete configuration for one extraction job.

    Immutable, so one instance can be shared between jobs.
    """

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate section types."""
        for name, section_class in _SECTIONS.items():
            if not isinstance(getattr(self, name), section_class):
                raise ConfigValidationError(
                    f"{name} must be a {section_class.__name__} instance", name
                )

    def override(self, **kwargs: Any) -> "ExtractionConfig":
        """Create a new configuration with specific overrides.

        Nested fields use a double underscore:

            >>> config = ExtractionConfig().override(
            ...     filter__max_depth=32,
            ...     tokenizer__chunk_size=1024,
            ... )
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                section, field_name = key.split("__", 1)
                if section not in _SECTIONS:
                    raise ConfigValidationError(
                        f"Unknown configuration section: {section}", section
                    )
                nested_overrides.setdefault(section, {})[field_name] = value
            else:
                top_level[key] = value

        for section, values in nested_overrides.items():
            try:
                top_level[section] = replace(getattr(self, section), **values)
            except TypeError as e:
                raise ConfigValidationError(str(e), section) from e

        try:
            return replace(self, **top_level)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for config_field in fields(self):
            value = getattr(self, config_field.name)
            if config_field.name in _SECTIONS:
                value = {f.name: getattr(value, f.name) for f in fields(value)}
            result[config_field.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionConfig":
        """Create configuration from dictionary.

        Unknown keys raise ``ConfigValidationError`` so typos in configuration
        files do not pass silently.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                sorted(unknown)[0],
            )

        values: Dict[str, Any] = {}
        for key, value in data.items():
            section_class = _SECTIONS.get(key)
            if section_class is not None:
                if not isinstance(value, dict):
                    raise ConfigValidationError(f"{key} must be an object", key)
                try:
                    value = section_class(**value)
                except TypeError as e:
                    raise ConfigValidationError(str(e), key) from e
            values[key] = value
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ExtractionConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ExtractionConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigValidationError(
                f"Could not read configuration file {config_path}: {e}"
            ) from e
        return cls.from_json(text)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ExtractionConfig":
        """Transparent unmatched tags, generous depth limit."""
        return cls()

    @classmethod
    def strict_scope(cls) -> "ExtractionConfig":
        """Only keep content reachable without entering an unmatched tag."""
        return cls(filter=FilterConfig(descend_into_unmatched=False))

    @classmethod
    def untrusted_input(cls) -> "ExtractionConfig":
        """Tight depth limit and small read chunks for adversarial documents."""
        return cls(
            tokenizer=TokenizerConfig(chunk_size=4096),
            filter=FilterConfig(max_depth=UNTRUSTED_MAX_DEPTH),
        )
