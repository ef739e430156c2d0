"""Extraction API with progressive disclosure.

Level 1: ``extract``, ``extract_xml`` and ``extract_html`` read every match of a
whole document. Level 2: ``next_match`` and ``iter_matches`` pull matches one at
a time from a token cursor the caller owns. Level 3: ``SelectiveTreeBuilder``
with an explicit ``FilterConfig``.
"""

from typing import Iterable, Iterator, List, Optional

from selective_markup_filter.character import InputType
from selective_markup_filter.shared import ExtractionConfig, get_logger
from selective_markup_filter.tokenization import Token, open_cursor
from selective_markup_filter.tree import Element, SelectiveTreeBuilder, TagNames, as_tag_set


def next_match(
    cursor: Iterator[Token],
    tag_names: TagNames,
    config: Optional[ExtractionConfig] = None
) -> Element:
    """Return the next element named in ``tag_names`` with its filtered subtree.

    Call repeatedly on the same cursor to walk through the document. Once the
    stream is exhausted ``StreamExhausted`` is raised. After any other error the
    cursor must be discarded.

    Examples:
        >>> from selective_markup_filter.tokenization import XMLTokenizer
        >>> cursor = XMLTokenizer("<p> Foo <b>bar</b></p><p>Ding</p>")
        >>> str(next_match(cursor, {"p"}))
        '<p>Foobar</p>'
        >>> str(next_match(cursor, {"p"}))
        '<p>Ding</p>'
    """
    config = config or ExtractionConfig()
    return SelectiveTreeBuilder(config.filter, config.correlation_id).next_match(
        cursor, tag_names
    )


def iter_matches(
    cursor: Iterable[Token],
    tag_names: TagNames,
    config: Optional[ExtractionConfig] = None,
    limit: Optional[int] = None
) -> Iterator[Element]:
    """Yield every remaining match of the cursor, up to ``limit``."""
    config = config or ExtractionConfig()
    builder = SelectiveTreeBuilder(config.filter, config.correlation_id)
    return builder.iter_matches(cursor, tag_names, limit)


def extract(
    source: InputType,
    tag_names: TagNames,
    markup: str = "xml",
    config: Optional[ExtractionConfig] = None,
    limit: Optional[int] = None
) -> List[Element]:
    """Extract all matches from a document.

    Args:
        source: Markup as string, bytes, path or file-like object
        tag_names: Names of the elements to keep
        markup: ``"xml"`` or ``"html"``; HTML tag names are matched lowercased
        config: Extraction configuration
        limit: Stop after this many matches

    Returns:
        Matched elements in document order

    Raises:
        FilterError: Malformed markup or unbalanced tags inside a match
    """
    config = config or ExtractionConfig()
    logger = get_logger(__name__, config.correlation_id, "extract")
    names = as_tag_set(tag_names)
    if markup.lower() == "html":
        names = frozenset(name.lower() for name in names)

    with open_cursor(source, markup, config.tokenizer, config.correlation_id) as cursor:
        matches = list(iter_matches(cursor, names, config, limit))
    logger.info(
        "Extraction completed",
        extra={
            "markup": markup,
            "tag_names": sorted(names),
            "match_count": len(matches),
            "tokens_read": cursor.tokens_emitted,
        },
    )
    return matches


def extract_xml(
    source: InputType,
    tag_names: TagNames,
    config: Optional[ExtractionConfig] = None,
    limit: Optional[int] = None
) -> List[Element]:
    """Extract all matches from an XML document."""
    return extract(source, tag_names, "xml", config, limit)


def extract_html(
    source: InputType,
    tag_names: TagNames,
    config: Optional[ExtractionConfig] = None,
    limit: Optional[int] = None
) -> List[Element]:
    """Extract all matches from an HTML document."""
    return extract(source, tag_names, "html", config, limit)
