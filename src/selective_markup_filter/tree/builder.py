"""Selective tree building over a token cursor.

The builder locates the next start tag whose name is in the tag set, then
consumes tokens until that tag closes. Inside the match, tags in the tag set
become nested ``Element`` nodes, non-empty text becomes trimmed ``TextNode``
leaves, and every other tag is only pushed on and popped off an open-tag stack
so that its balance is still checked. Tokens before a match are skipped
without any checking.

Nested matches are handled with an explicit stack of scopes instead of call
recursion, and total nesting is bounded by ``FilterConfig.max_depth``.
"""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, Iterator, List, Optional, Union

from selective_markup_filter.shared import (
    DepthLimitExceededError,
    FilterConfig,
    MismatchedClosingTagError,
    StreamExhausted,
    UnclosedTagsError,
    UnexpectedClosingTagError,
    get_logger,
)
from selective_markup_filter.tokenization import Token, TokenType

from .nodes import Element, Node, TextNode

TagNames = Union[str, Iterable[str]]


def as_tag_set(tag_names: TagNames) -> AbstractSet[str]:
    """Normalize tag names to a frozenset; a lone string is one name."""
    if isinstance(tag_names, str):
        return frozenset((tag_names,))
    return frozenset(tag_names)


@dataclass
class _Scope:
    """One open matched tag: its open-tag stack and the children so far."""

    token: Token
    open_tags: List[str]
    children: List[Node] = field(default_factory=list)

    @classmethod
    def open(cls, token: Token) -> "_Scope":
        return cls(token, [token.value])

    def to_element(self) -> Element:
        return Element(
            self.token.value,
            self.children,
            dict(self.token.attributes),
            position=self.token.position,
        )


def _pop_tag(open_tags: List[str], token: Token) -> None:
    """Remove the expected tag name from the stack, for balanced closing tags."""
    if not open_tags:
        raise UnexpectedClosingTagError(token.value, token.position)
    expected = open_tags[-1]
    if expected != token.value:
        raise MismatchedClosingTagError(expected, token.value, token.position)
    open_tags.pop()


class SelectiveTreeBuilder:
    """Extract successive matched subtrees from one token cursor.

    A cursor is any iterator of ``Token``; the builder only ever calls
    ``next()`` on it, so each call continues where the previous one stopped.
    """

    def __init__(
        self,
        config: Optional[FilterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Filter configuration (depth limit, unmatched-tag policy)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or FilterConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "selective_tree_builder")
        self.matches_found = 0

    def locate(self, cursor: Iterator[Token], tag_names: TagNames) -> Token:
        """Skip tokens until a start or self-closing tag in ``tag_names``.

        Raises:
            StreamExhausted: The cursor ended first
        """
        names = as_tag_set(tag_names)
        while True:
            try:
                token = next(cursor)
            except StopIteration:
                raise StreamExhausted() from None
            if token.is_start and token.value in names:
                return token

    def build_children(
        self, cursor: Iterator[Token], tag_names: TagNames, open_tag: str
    ) -> List[Node]:
        """Consume tokens until ``open_tag`` closes and return its filtered children.

        Must be called right after the start tag of ``open_tag`` was consumed.
        """
        return self._build(cursor, as_tag_set(tag_names), Token.start(open_tag)).children

    def next_match(self, cursor: Iterator[Token], tag_names: TagNames) -> Element:
        """Return the next matched subtree of the stream.

        Raises:
            StreamExhausted: No further tag of ``tag_names`` in the stream
            UnclosedTagsError: The stream ended inside the match
            MismatchedClosingTagError: An end tag closed the wrong tag
            UnexpectedClosingTagError: An end tag closed nothing
            DepthLimitExceededError: The match nests deeper than allowed
        """
        names = as_tag_set(tag_names)
        try:
            token = self.locate(cursor, names)
        except StreamExhausted:
            self.logger.debug(
                "No more matches", extra={"matches_found": self.matches_found}
            )
            raise

        debug = self.logger.is_enabled_for(logging.DEBUG)
        if debug:
            self.logger.debug(
                "Match located",
                extra={"tag": token.value, "position": token.position.to_dict()},
            )
        if token.type is TokenType.SELF_CLOSING_TAG:
            element = Element(
                token.value,
                attributes=dict(token.attributes),
                self_closing=True,
                position=token.position,
            )
        else:
            element = self._build(cursor, names, token)

        self.matches_found += 1
        if debug:
            self.logger.debug(
                "Match built",
                extra={"tag": element.name, "child_count": len(element.children)},
            )
        return element

    def iter_matches(
        self,
        cursor: Iterable[Token],
        tag_names: TagNames,
        limit: Optional[int] = None
    ) -> Iterator[Element]:
        """Yield successive matches until the stream is exhausted or ``limit`` is hit."""
        tokens = iter(cursor)
        names = as_tag_set(tag_names)
        count = 0
        while limit is None or count < limit:
            try:
                element = self.next_match(tokens, names)
            except StreamExhausted:
                return
            count += 1
            yield element

    def _build(
        self, cursor: Iterator[Token], names: AbstractSet[str], root: Token
    ) -> Element:
        max_depth = self.config.max_depth
        descend = self.config.descend_into_unmatched
        scopes = [_Scope.open(root)]
        depth = 1

        while True:
            try:
                token = next(cursor)
            except StopIteration:
                raise UnclosedTagsError(
                    [tag for scope in scopes for tag in scope.open_tags]
                ) from None

            scope = scopes[-1]
            # Only the scope's own tag open: not inside an unmatched tag
            keep = descend or len(scope.open_tags) == 1
            kind = token.type

            if kind is TokenType.START_TAG:
                depth += 1
                if depth > max_depth:
                    raise DepthLimitExceededError(max_depth, token.position)
                if keep and token.value in names:
                    scopes.append(_Scope.open(token))
                else:
                    scope.open_tags.append(token.value)

            elif kind is TokenType.SELF_CLOSING_TAG:
                if keep and token.value in names:
                    scope.children.append(Element(
                        token.value,
                        attributes=dict(token.attributes),
                        self_closing=True,
                        position=token.position,
                    ))

            elif kind is TokenType.END_TAG:
                _pop_tag(scope.open_tags, token)
                depth -= 1
                if not scope.open_tags:
                    scopes.pop()
                    element = scope.to_element()
                    if not scopes:
                        return element
                    scopes[-1].children.append(element)

            elif kind is TokenType.TEXT:
                if keep:
                    content = token.value.strip()
                    if content:
                        scope.children.append(TextNode(content))

            # Comments, directives and processing instructions carry no structure
