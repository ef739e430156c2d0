"""Tokenization layer for selective markup filtering.

Key Components:
    Token: A single markup token with kind, name or payload, and position
    TokenType: Closed enumeration of token kinds
    XMLTokenizer: Streaming raw XML tokenizer
    HTMLTokenizer: Streaming HTML tokenizer over ``html.parser``
    open_cursor: Factory choosing a tokenizer by markup flavour
"""

from typing import Optional

from selective_markup_filter.character import InputType
from selective_markup_filter.shared import TokenizerConfig

from .base import StreamingTokenizer
from .html_tokenizer import VOID_ELEMENTS, HTMLTokenizer
from .tokens import Token, TokenType
from .xml_tokenizer import XMLTokenizer

MARKUP_FLAVOURS = {
    "xml": XMLTokenizer,
    "html": HTMLTokenizer,
}


def open_cursor(
    source: InputType,
    markup: str = "xml",
    config: Optional[TokenizerConfig] = None,
    correlation_id: Optional[str] = None
) -> StreamingTokenizer:
    """Create a token cursor for ``source``.

    Args:
        source: Markup as string, bytes, path or file-like object
        markup: ``"xml"`` or ``"html"``
        config: Tokenizer configuration
        correlation_id: Optional correlation ID for log records

    Raises:
        ValueError: Unknown markup flavour
    """
    try:
        tokenizer_class = MARKUP_FLAVOURS[markup.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown markup flavour {markup!r}, expected one of {sorted(MARKUP_FLAVOURS)}"
        ) from None
    return tokenizer_class(source, config, correlation_id)


__all__ = [
    "HTMLTokenizer",
    "MARKUP_FLAVOURS",
    "StreamingTokenizer",
    "Token",
    "TokenType",
    "VOID_ELEMENTS",
    "XMLTokenizer",
    "open_cursor",
]
