"""Streaming HTML tokenizer built on the standard library's ``HTMLParser``.

``HTMLParser`` is push based: its callbacks are collected into a queue that
the cursor drains, feeding the parser one chunk at a time. Text delivered in
several callbacks (it can be split at chunk boundaries) is merged into one
``TEXT`` token. Tag names are lowercased by the parser.
"""

import re
from collections import deque
from html.parser import HTMLParser
from typing import Deque, Dict, List, Optional, Tuple

from selective_markup_filter.shared import TokenPosition

from .base import StreamingTokenizer
from .tokens import Token, TokenType

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

_NEWLINE = re.compile("\n")


class _EventCollector(HTMLParser):
    """Translate ``HTMLParser`` callbacks into tokens for its owner."""

    def __init__(self, owner: "HTMLTokenizer") -> None:
        super().__init__(convert_charrefs=True)
        self.owner = owner

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.owner._emit_tag(TokenType.START_TAG, tag, attrs)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.owner._emit_tag(TokenType.SELF_CLOSING_TAG, tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        self.owner._emit_tag(TokenType.END_TAG, tag, [])

    def handle_data(self, data: str) -> None:
        self.owner._add_text(data)

    def handle_comment(self, data: str) -> None:
        self.owner._emit(TokenType.COMMENT, data)

    def handle_decl(self, decl: str) -> None:
        self.owner._emit(TokenType.DIRECTIVE, decl)

    def unknown_decl(self, data: str) -> None:
        self.owner._emit(TokenType.DIRECTIVE, data)

    def handle_pi(self, data: str) -> None:
        self.owner._emit(TokenType.PROCESSING_INSTRUCTION, data.rstrip("?"))


class HTMLTokenizer(StreamingTokenizer):
    """Streaming HTML tokenizer.

    With ``void_elements_self_close`` enabled (the default), void elements
    written without the trailing slash (``<br>``) are emitted as
    ``SELF_CLOSING_TAG`` and their stray end tags (``</br>``) are dropped,
    since neither opens a scope.

    Examples:
        >>> [t.type.name for t in HTMLTokenizer('<P>a<br>b</P>')]
        ['START_TAG', 'TEXT', 'SELF_CLOSING_TAG', 'TEXT', 'END_TAG']
    """

    component = "html_tokenizer"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._parser = _EventCollector(self)
        self._queue: Deque[Token] = deque()
        self._text_parts: List[str] = []
        self._text_position: Optional[TokenPosition] = None
        self._closed = False

        # Offsets of line starts not yet reached by the parser
        self._line_starts: Deque[int] = deque()
        self._line = 1
        self._line_start = 0
        self._fed = 0

    def _next_token(self) -> Optional[Token]:
        while not self._queue:
            if self._closed:
                return None
            chunk = self._read_chunk()
            if chunk is None:
                self._parser.close()
                self._flush_text()
                self._closed = True
            else:
                self._feed(chunk)
        return self._queue.popleft()

    def _feed(self, chunk: str) -> None:
        for match in _NEWLINE.finditer(chunk):
            self._line_starts.append(self._fed + match.end())
        self._fed += len(chunk)
        self._parser.feed(chunk)

    def _current_position(self) -> TokenPosition:
        line, column = self._parser.getpos()
        while self._line < line and self._line_starts:
            self._line_start = self._line_starts.popleft()
            self._line += 1
        return TokenPosition(line, column + 1, self._line_start + column)

    # Callbacks from the collector

    def _emit(self, token_type: TokenType, value: str,
              attributes: Optional[Dict[str, str]] = None) -> None:
        self._flush_text()
        self._queue.append(
            Token(token_type, value, attributes or {}, self._current_position())
        )

    def _emit_tag(self, token_type: TokenType, tag: str,
                  attrs: List[Tuple[str, Optional[str]]]) -> None:
        if self.config.void_elements_self_close and tag in VOID_ELEMENTS:
            if token_type is TokenType.END_TAG:
                self._flush_text()
                return
            token_type = TokenType.SELF_CLOSING_TAG

        attributes: Dict[str, str] = {}
        for name, value in attrs:
            # First occurrence wins, as in browsers
            attributes.setdefault(name, value if value is not None else "")
        self._emit(token_type, tag, attributes)

    def _add_text(self, data: str) -> None:
        if not self._text_parts:
            self._text_position = self._current_position()
        self._text_parts.append(data)

    def _flush_text(self) -> None:
        if not self._text_parts:
            return
        position = self._text_position or self._current_position()
        self._queue.append(Token.text("".join(self._text_parts), position))
        self._text_parts.clear()
        self._text_position = None
