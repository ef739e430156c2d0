"""Selective Markup Filter.

Extracts only the elements you name from large or streaming XML and HTML
documents, while checking that every tag inside a match is properly nested.

Progressive API Disclosure:
- Level 1: Whole-document functions - extract(), extract_xml(), extract_html()
- Level 2: Cursor functions - next_match(), iter_matches() over a tokenizer
- Level 3: Configured builder - SelectiveTreeBuilder with FilterConfig
"""

__version__ = "0.1.0"
__author__ = "Selective Markup Filter Team"

from .api import extract, extract_html, extract_xml, iter_matches, next_match
from .shared import (
    ExtractionConfig,
    FilterConfig,
    FilterError,
    MarkupSyntaxError,
    MismatchedClosingTagError,
    StreamExhausted,
    TokenizerConfig,
    UnclosedTagsError,
    UnexpectedClosingTagError,
)
from .tokenization import HTMLTokenizer, Token, TokenType, XMLTokenizer, open_cursor
from .tree import Element, SelectiveTreeBuilder, TextNode, render

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: whole-document extraction
    "extract",
    "extract_html",
    "extract_xml",

    # Level 2: cursor-driven extraction
    "next_match",
    "iter_matches",
    "open_cursor",
    "XMLTokenizer",
    "HTMLTokenizer",
    "Token",
    "TokenType",

    # Level 3: configured builder
    "SelectiveTreeBuilder",
    "ExtractionConfig",
    "FilterConfig",
    "TokenizerConfig",

    # Result objects
    "Element",
    "TextNode",
    "render",

    # Errors
    "FilterError",
    "MarkupSyntaxError",
    "MismatchedClosingTagError",
    "StreamExhausted",
    "UnclosedTagsError",
    "UnexpectedClosingTagError",
]
