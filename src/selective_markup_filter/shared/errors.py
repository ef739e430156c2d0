"""Exception hierarchy for selective markup filtering.

All errors raised while locating or building a match derive from
``FilterError``. Every one of them is fatal to the current ``next_match`` call;
the cursor position is undefined afterwards.
"""

from typing import Optional, Sequence, Tuple

from .positions import TokenPosition


def _at(position: Optional[TokenPosition]) -> str:
    if position is None:
        return ""
    return f" at line {position.line}, column {position.column}"


class FilterError(Exception):
    """Base exception for all filtering and tokenizing failures."""


class StreamExhausted(FilterError):
    """The token stream ended before another match was found."""

    def __init__(self, message: str = "no more matches") -> None:
        super().__init__(message)


class UnclosedTagsError(FilterError):
    """The token stream ended while tags of a matched scope were still open."""

    def __init__(self, open_tags: Sequence[str]) -> None:
        self.open_tags: Tuple[str, ...] = tuple(open_tags)
        super().__init__(f"unclosed tags: {list(self.open_tags)}")


class MismatchedClosingTagError(FilterError):
    """An end tag did not close the most recently opened tag."""

    def __init__(
        self,
        expected: str,
        actual: str,
        position: Optional[TokenPosition] = None
    ) -> None:
        self.expected = expected
        self.actual = actual
        self.position = position
        super().__init__(
            f"expecting closing tag {expected!r}, got {actual!r}{_at(position)}"
        )


class UnexpectedClosingTagError(FilterError):
    """An end tag arrived while no tag was open in the current scope."""

    def __init__(self, tag: str, position: Optional[TokenPosition] = None) -> None:
        self.tag = tag
        self.position = position
        super().__init__(f"unexpected closing tag {tag!r}{_at(position)}")


class DepthLimitExceededError(FilterError):
    """Nesting inside a matched scope went deeper than the configured limit."""

    def __init__(self, limit: int, position: Optional[TokenPosition] = None) -> None:
        self.limit = limit
        self.position = position
        super().__init__(f"nesting depth exceeds limit of {limit}{_at(position)}")


class MarkupSyntaxError(FilterError):
    """Raised by a tokenizer when its input cannot be tokenized."""

    def __init__(self, message: str, position: Optional[TokenPosition] = None) -> None:
        self.reason = message
        self.position = position
        super().__init__(f"{message}{_at(position)}")
