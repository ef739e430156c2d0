"""Public extraction API."""

from .extract import (
    extract,
    extract_html,
    extract_xml,
    iter_matches,
    next_match,
)

__all__ = [
    "extract",
    "extract_html",
    "extract_xml",
    "iter_matches",
    "next_match",
]
