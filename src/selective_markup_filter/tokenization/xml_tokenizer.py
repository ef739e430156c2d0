"""Streaming raw XML tokenizer.

Produces one token per tag, text run, comment, CDATA section, directive or
processing instruction. Like a raw-token decoder it does not check that tags
nest, and it accepts several top-level elements: balance checking belongs to
the selective tree builder. Malformed constructs fail fast with
``MarkupSyntaxError``; nothing is repaired.

Line breaks in text and CDATA are normalized to line feeds; attribute
values are not whitespace-normalized.
"""

import re
from typing import Dict, Optional, Tuple

from selective_markup_filter.shared import MarkupSyntaxError, TokenPosition

from .base import StreamingTokenizer
from .tokens import Token, TokenType

COMMENT_OPEN = "<!--"
CDATA_OPEN = "<![CDATA["
PI_OPEN = "<?"
END_TAG_OPEN = "</"
DIRECTIVE_OPEN = "<!"
MARKUP_LOOKAHEAD = len(CDATA_OPEN)

PREDEFINED_ENTITIES = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
}

NAME_PATTERN = re.compile(r"(?:[^\W\d]|[_:])[\w.:-]*")
ATTRIBUTE_PATTERN = re.compile(
    r"""\s+((?:[^\W\d]|[_:])[\w.:-]*)\s*=\s*(?:"([^"<]*)"|'([^'<]*)')"""
)
REFERENCE_PATTERN = re.compile(r"&(?:(#[0-9]+|#x[0-9a-fA-F]+|(?:[^\W\d]|_)[\w.-]*);)?")


class XMLTokenizer(StreamingTokenizer):
    """Streaming XML tokenizer.

    Examples:
        >>> [t.type.name for t in XMLTokenizer('<a x="1">hi</a>')]
        ['START_TAG', 'TEXT', 'END_TAG']
    """

    component = "xml_tokenizer"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._buffer = ""
        self._pos = 0
        self._eof = False
        self._position = TokenPosition(1, 1, 0)

    # Buffer management

    def _fill(self) -> bool:
        """Append the next chunk, dropping consumed text. False at end of input."""
        if self._eof:
            return False
        chunk = self._read_chunk()
        if chunk is None:
            self._eof = True
            return False
        self._buffer = self._buffer[self._pos:] + chunk
        self._pos = 0
        return True

    def _available(self) -> int:
        return len(self._buffer) - self._pos

    def _peek(self, size: int) -> str:
        while self._available() < size and self._fill():
            pass
        return self._buffer[self._pos:self._pos + size]

    def _find(self, needle: str, offset: int) -> int:
        """Index of ``needle`` relative to the read position, or -1 at end of input."""
        search_from = offset
        while True:
            index = self._buffer.find(needle, self._pos + search_from)
            if index >= 0:
                return index - self._pos
            search_from = max(offset, self._available() - len(needle) + 1)
            if not self._fill():
                return -1

    def _find_tag_end(self, offset: int) -> int:
        """Index of the ``>`` closing a tag, skipping quoted attribute values."""
        search_from = offset
        while True:
            index = self._find(">", search_from)
            if index < 0:
                return -1
            segment = self._buffer[self._pos + offset:self._pos + index]
            if not _inside_quotes(segment):
                return index
            search_from = index + 1

    def _find_directive_end(self) -> int:
        """Index of the ``>`` closing ``<!...>``.

        Quotes, ``[...]`` subsets and comments inside the directive are skipped.
        """
        depth = 0
        quote: Optional[str] = None
        index = len(DIRECTIVE_OPEN)
        while True:
            while index >= self._available():
                if not self._fill():
                    return -1
            char = self._buffer[self._pos + index]
            if quote:
                if char == quote:
                    quote = None
            elif char == "<" and self._peek(index + len(COMMENT_OPEN)).endswith(COMMENT_OPEN):
                comment_end = self._find("-->", index + len(COMMENT_OPEN))
                if comment_end < 0:
                    return -1
                index = comment_end + 3
                continue
            elif char in "\"'":
                quote = char
            elif char == "[":
                depth += 1
            elif char == "]":
                depth -= 1
            elif char == ">" and depth <= 0:
                return index
            index += 1

    def _consume(self, size: int) -> Tuple[str, TokenPosition]:
        start = self._position
        text = self._buffer[self._pos:self._pos + size]
        self._pos += size
        self._position = start.advance(text)
        return text, start

    # Token readers

    def _next_token(self) -> Optional[Token]:
        if self._available() == 0 and not self._fill():
            return None
        if self._buffer[self._pos] == "<":
            return self._read_markup()
        return self._read_text()

    def _read_text(self) -> Token:
        end = self._find("<", 1)
        if end < 0:
            end = self._available()
        raw, start = self._consume(end)
        return Token.text(decode_references(normalize_newlines(raw), start), start)

    def _read_markup(self) -> Token:
        head = self._peek(MARKUP_LOOKAHEAD)
        if head.startswith(COMMENT_OPEN):
            raw, start = self._read_delimited("-->", len(COMMENT_OPEN), "comment")
            body = raw[len(COMMENT_OPEN):-3]
            if "--" in body or body.endswith("-"):
                raise MarkupSyntaxError("'--' not allowed inside comment", start)
            return Token(TokenType.COMMENT, body, position=start)
        if head.startswith(CDATA_OPEN):
            raw, start = self._read_delimited("]]>", len(CDATA_OPEN), "CDATA section")
            return Token.text(normalize_newlines(raw[len(CDATA_OPEN):-3]), start)
        if head.startswith(PI_OPEN):
            raw, start = self._read_delimited("?>", len(PI_OPEN), "processing instruction")
            target = raw[2:-2]
            if not NAME_PATTERN.match(target):
                raise MarkupSyntaxError("processing instruction without target", start)
            return Token(TokenType.PROCESSING_INSTRUCTION, target, position=start)
        if head.startswith(DIRECTIVE_OPEN):
            end = self._find_directive_end()
            if end < 0:
                raise MarkupSyntaxError("unterminated directive", self._position)
            raw, start = self._consume(end + 1)
            return Token(TokenType.DIRECTIVE, raw[2:-1], position=start)
        if head.startswith(END_TAG_OPEN):
            return self._read_end_tag()
        return self._read_start_tag()

    def _read_delimited(self, terminator: str, offset: int, what: str) -> Tuple[str, TokenPosition]:
        end = self._find(terminator, offset)
        if end < 0:
            raise MarkupSyntaxError(f"unterminated {what}", self._position)
        return self._consume(end + len(terminator))

    def _read_end_tag(self) -> Token:
        end = self._find(">", len(END_TAG_OPEN))
        if end < 0:
            raise MarkupSyntaxError("unterminated end tag", self._position)
        raw, start = self._consume(end + 1)
        name = raw[2:-1].rstrip()
        if not NAME_PATTERN.fullmatch(name):
            raise MarkupSyntaxError(f"invalid end tag name {name!r}", start)
        return Token.end(name, start)

    def _read_start_tag(self) -> Token:
        end = self._find_tag_end(1)
        if end < 0:
            raise MarkupSyntaxError("unterminated tag", self._position)
        raw, start = self._consume(end + 1)
        inner = raw[1:-1]
        token_type = TokenType.START_TAG
        if inner.endswith("/"):
            token_type = TokenType.SELF_CLOSING_TAG
            inner = inner[:-1]

        match = NAME_PATTERN.match(inner)
        if not match:
            raise MarkupSyntaxError("expected element name after '<'", start)
        name = match.group(0)
        attributes = parse_attributes(inner[match.end():], name, start)
        return Token(token_type, name, attributes, start)


def normalize_newlines(text: str) -> str:
    """Translate CRLF and lone CR line breaks to LF."""
    if "\r" not in text:
        return text
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _inside_quotes(segment: str) -> bool:
    quote: Optional[str] = None
    for char in segment:
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
    return quote is not None


def parse_attributes(text: str, tag: str, position: TokenPosition) -> Dict[str, str]:
    """Parse the attribute part of a start tag.

    Raises:
        MarkupSyntaxError: Unquoted values, stray characters or duplicate names
    """
    attributes: Dict[str, str] = {}
    index = 0
    while True:
        match = ATTRIBUTE_PATTERN.match(text, index)
        if not match:
            break
        name = match.group(1)
        if name in attributes:
            raise MarkupSyntaxError(f"duplicate attribute {name!r} in <{tag}>", position)
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes[name] = decode_references(value, position)
        index = match.end()

    if text[index:].strip():
        raise MarkupSyntaxError(f"malformed attributes in <{tag}>", position)
    return attributes


def decode_references(text: str, position: TokenPosition) -> str:
    """Replace predefined entity and numeric character references.

    Raises:
        MarkupSyntaxError: Bare ``&``, unknown entity or invalid code point
    """
    if "&" not in text:
        return text

    def replace(match: "re.Match[str]") -> str:
        reference = match.group(1)
        if reference is None:
            raise MarkupSyntaxError("unescaped '&' in character data", position)
        if reference.startswith("#"):
            try:
                if reference.startswith("#x"):
                    return chr(int(reference[2:], 16))
                return chr(int(reference[1:]))
            except (ValueError, OverflowError) as e:
                raise MarkupSyntaxError(
                    f"invalid character reference &{reference};", position
                ) from e
        try:
            return PREDEFINED_ENTITIES[reference]
        except KeyError:
            raise MarkupSyntaxError(f"unknown entity &{reference};", position) from None

    return REFERENCE_PATTERN.sub(replace, text)
