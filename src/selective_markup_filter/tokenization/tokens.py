"""Token model shared by all tokenizers.

A tokenizer is any iterator of ``Token``. End of stream is the iterator
protocol's ``StopIteration``; tokenizing failures raise ``MarkupSyntaxError``.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional

from selective_markup_filter.shared.positions import TokenPosition

_START = TokenPosition(1, 1, 0)


class TokenType(Enum):
    """Markup token kinds."""

    START_TAG = auto()               # <name attr="v">
    SELF_CLOSING_TAG = auto()        # <name attr="v"/>
    END_TAG = auto()                 # </name>
    TEXT = auto()                    # Character data, references decoded
    COMMENT = auto()                 # <!-- ... -->
    DIRECTIVE = auto()               # <!DOCTYPE ...> and other <!...>
    PROCESSING_INSTRUCTION = auto()  # <?target data?>


TAG_TYPES = frozenset({TokenType.START_TAG, TokenType.SELF_CLOSING_TAG})


@dataclass
class Token:
    """A single markup token.

    ``value`` holds the tag name for tag tokens and the payload for every
    other kind.
    """

    type: TokenType
    value: str
    attributes: Dict[str, str] = field(default_factory=dict)
    position: TokenPosition = _START

    @property
    def is_start(self) -> bool:
        """True for tokens that open an element (self-closing included)."""
        return self.type in TAG_TYPES

    @classmethod
    def start(cls, name: str, attributes: Optional[Dict[str, str]] = None,
              position: TokenPosition = _START) -> "Token":
        return cls(TokenType.START_TAG, name, dict(attributes or {}), position)

    @classmethod
    def self_closing(cls, name: str, attributes: Optional[Dict[str, str]] = None,
                     position: TokenPosition = _START) -> "Token":
        return cls(TokenType.SELF_CLOSING_TAG, name, dict(attributes or {}), position)

    @classmethod
    def end(cls, name: str, position: TokenPosition = _START) -> "Token":
        return cls(TokenType.END_TAG, name, position=position)

    @classmethod
    def text(cls, data: str, position: TokenPosition = _START) -> "Token":
        return cls(TokenType.TEXT, data, position=position)
