"""Tests for the streaming HTML tokenizer."""

from typing import List, Tuple

import pytest

from selective_markup_filter.shared import TokenizerConfig
from selective_markup_filter.tokenization import HTMLTokenizer, TokenType, open_cursor


def kinds(source: str, **config) -> List[Tuple[str, str]]:
    tokenizer = HTMLTokenizer(source, TokenizerConfig(**config))
    return [(token.type.name, token.value) for token in tokenizer]


class TestHTMLTokenKinds:
    """Test recognition of HTML constructs."""

    def test_names_lowercased(self) -> None:
        """Test that tag names are lowercased."""
        assert kinds("<DIV>x</Div>") == [
            ("START_TAG", "div"),
            ("TEXT", "x"),
            ("END_TAG", "div"),
        ]

    def test_explicit_self_closing(self) -> None:
        """Test that a trailing slash produces a self-closing tag."""
        assert kinds('<a name="foo"/>') == [("SELF_CLOSING_TAG", "a")]

    def test_comment_doctype_and_pi(self) -> None:
        """Test comments, declarations and processing instructions."""
        assert kinds("<!DOCTYPE html><!-- c --><?php echo 1?>") == [
            ("DIRECTIVE", "DOCTYPE html"),
            ("COMMENT", " c "),
            ("PROCESSING_INSTRUCTION", "php echo 1"),
        ]

    def test_character_references_decoded(self) -> None:
        """Test that named and numeric references are decoded in text."""
        assert kinds("<p>Fish &amp; Chips&nbsp;&#33;</p>")[1] == (
            "TEXT", "Fish & Chips\xa0!"
        )

    def test_script_content_is_text(self) -> None:
        """Test that markup-like script content stays text."""
        assert kinds("<script>if (a<b) go()</script>")[1] == ("TEXT", "if (a<b) go()")

    def test_lenient_on_stray_end_tags(self) -> None:
        """Test that unbalanced markup is passed through for the builder to judge."""
        assert kinds("</q><p>") == [("END_TAG", "q"), ("START_TAG", "p")]


class TestVoidElements:
    """Test handling of void elements."""

    def test_void_start_tag_is_self_closing(self) -> None:
        """Test that '<br>' becomes a self-closing tag."""
        assert kinds("<p>a<br>b</p>") == [
            ("START_TAG", "p"),
            ("TEXT", "a"),
            ("SELF_CLOSING_TAG", "br"),
            ("TEXT", "b"),
            ("END_TAG", "p"),
        ]

    def test_void_end_tag_dropped(self) -> None:
        """Test that a stray '</br>' produces no token."""
        assert kinds("<img src=x></img>") == [("SELF_CLOSING_TAG", "img")]

    def test_void_handling_disabled(self) -> None:
        """Test raw tokens when void element handling is off."""
        assert kinds("<br></br>", void_elements_self_close=False) == [
            ("START_TAG", "br"),
            ("END_TAG", "br"),
        ]


class TestHTMLAttributes:
    """Test attribute normalization."""

    def test_valueless_and_unquoted_attributes(self) -> None:
        """Test that bare attributes get an empty value."""
        token = next(HTMLTokenizer("<input disabled value=5>"))

        assert token.type is TokenType.SELF_CLOSING_TAG
        assert token.attributes == {"disabled": "", "value": "5"}

    def test_first_duplicate_wins(self) -> None:
        """Test that the first of duplicate attributes is kept."""
        token = next(HTMLTokenizer('<a href="1" HREF="2">'))

        assert token.attributes == {"href": "1"}


class TestHTMLStreaming:
    """Test chunked feeding and positions."""

    SOURCE = (
        "<!DOCTYPE html>\n<html><body class='main'><p>Some <b>bold</b> text"
        " &amp; more</p><!-- done --></body></html>\n"
    )

    @pytest.mark.parametrize("chunk_size", [1, 5, 16])
    def test_text_coalesced_across_chunks(self, chunk_size) -> None:
        """Test that chunk boundaries never split text or tags."""
        assert kinds(self.SOURCE, chunk_size=chunk_size) == kinds(self.SOURCE)

    def test_positions(self) -> None:
        """Test line, column and offset of tokens."""
        tokens = list(HTMLTokenizer("<p>\n  <b>x</b></p>"))

        b_start = tokens[2]
        assert b_start.value == "b"
        assert (b_start.position.line, b_start.position.column) == (2, 3)
        assert b_start.position.offset == 6

    def test_positions_with_small_chunks(self) -> None:
        """Test that positions do not depend on chunking."""
        source = "<p>\n\n<i>a</i>\n</p>"
        expected = [t.position for t in HTMLTokenizer(source)]

        chunked = [
            t.position for t in HTMLTokenizer(source, TokenizerConfig(chunk_size=2))
        ]

        assert chunked == expected

    def test_trailing_text_flushed(self) -> None:
        """Test that text at the end of input is emitted."""
        assert kinds("<p>tail") == [("START_TAG", "p"), ("TEXT", "tail")]

    def test_open_cursor_html(self) -> None:
        """Test the tokenizer factory for HTML."""
        assert isinstance(open_cursor("<p>", "html"), HTMLTokenizer)
