"""Tests for the markup-filter command-line interface."""

import json
import logging

import pytest

from selective_markup_filter.cli.main import (
    EXIT_FILTER_ERROR,
    EXIT_OK,
    EXIT_USAGE_ERROR,
    build_config,
    create_argument_parser,
    main,
)

DOCUMENT = """<?xml version="1.0"?>
<feed>
  <entry><title>First</title><div><a href="/1"/>one</div></entry>
  <entry><title>Second</title></entry>
</feed>
"""


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo the handler installed by main()."""
    package_logger = logging.getLogger("selective_markup_filter")
    handlers = package_logger.handlers[:]
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "feed.xml"
    path.write_text(DOCUMENT, encoding="utf-8")
    return path


class TestArgumentParsing:
    """Test argument parsing and configuration building."""

    def test_tags_split(self) -> None:
        """Test comma-separated tag names."""
        args = create_argument_parser().parse_args(["doc.xml", "--tags", "p, a,,sup"])

        assert args.tags == ["p", "a", "sup"]
        assert args.markup == "xml"
        assert args.format == "text"

    def test_tags_required(self, capsys) -> None:
        """Test that --tags is mandatory."""
        with pytest.raises(SystemExit) as exc_info:
            create_argument_parser().parse_args(["doc.xml"])

        assert exc_info.value.code == 2

    def test_empty_tags_rejected(self, capsys) -> None:
        """Test that a tag list without names is a usage error."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["doc.xml", "--tags", " , "])

        assert "at least one tag name is required" in capsys.readouterr().err

    def test_overrides_applied(self, tmp_path) -> None:
        """Test that command-line options override the configuration file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"filter": {"max_depth": 5}, "tokenizer": {"chunk_size": 64}}),
            encoding="utf-8",
        )
        args = create_argument_parser().parse_args([
            "doc.xml", "-t", "p", "-c", str(config_path), "--max-depth", "9", "--strict-scope",
        ])

        config = build_config(args)

        assert config.filter.max_depth == 9
        assert config.filter.descend_into_unmatched is False
        assert config.tokenizer.chunk_size == 64


class TestMain:
    """Test end-to-end command runs."""

    def test_text_output(self, document, capsys) -> None:
        """Test one rendered match per line."""
        assert main([str(document), "--tags", "entry,title,a"]) == EXIT_OK

        assert capsys.readouterr().out.splitlines() == [
            "<entry><title>First</title><a></a>one</entry>",
            "<entry><title>Second</title></entry>",
        ]

    def test_strict_scope_and_marker(self, document, capsys) -> None:
        """Test strict scoping with the self-closing marker."""
        code = main([
            str(document), "-t", "entry,title,a", "--strict-scope", "--self-closing-marker",
        ])

        assert code == EXIT_OK
        assert capsys.readouterr().out.splitlines()[0] == "<entry><title>First</title></entry>"

    def test_limit(self, document, capsys) -> None:
        """Test the per-file match limit."""
        assert main([str(document), "-t", "title", "-n", "1"]) == EXIT_OK

        assert capsys.readouterr().out.splitlines() == ["<title>First</title>"]

    def test_json_output(self, document, capsys) -> None:
        """Test JSON output with one result per file."""
        assert main([str(document), "-t", "title", "--format", "json"]) == EXIT_OK

        results = json.loads(capsys.readouterr().out)
        assert len(results) == 1
        assert results[0]["success"] is True
        assert results[0]["match_count"] == 2
        assert [m["children"][0]["content"] for m in results[0]["matches"]] == [
            "First", "Second",
        ]

    def test_html_names_case_insensitive(self, tmp_path, capsys) -> None:
        """Test that HTML tag names match regardless of case."""
        path = tmp_path / "page.html"
        path.write_text("<HTML><P>Hello<BR>world</P></HTML>", encoding="utf-8")

        assert main([str(path), "-t", "P,br", "-m", "html", "--self-closing-marker"]) == EXIT_OK

        assert capsys.readouterr().out.strip() == "<p>Hello<br/>world</p>"

    def test_unbalanced_document(self, tmp_path, capsys) -> None:
        """Test the exit code and message for a mismatched closing tag."""
        path = tmp_path / "bad.xml"
        path.write_text("<p><span>Foo</i></p>", encoding="utf-8")

        assert main([str(path), "-t", "p"]) == EXIT_FILTER_ERROR

        assert "expecting closing tag 'span', got 'i'" in capsys.readouterr().err

    def test_missing_file_does_not_stop_others(self, document, tmp_path, capsys) -> None:
        """Test that one failing file is reported and the rest processed."""
        missing = tmp_path / "missing.xml"

        code = main([str(missing), str(document), "-t", "title", "-f", "json"])

        captured = capsys.readouterr()
        results = json.loads(captured.out)
        assert code == EXIT_FILTER_ERROR
        assert results[0]["success"] is False
        assert results[0]["error_type"] == "FileNotFoundError"
        assert results[1]["match_count"] == 2
        assert f"Error: {missing}" in captured.err

    def test_negative_limit(self, document, capsys) -> None:
        """Test validation of --limit."""
        assert main([str(document), "-t", "p", "-n", "-1"]) == EXIT_USAGE_ERROR

        assert "--limit must be >= 0" in capsys.readouterr().err

    @pytest.mark.parametrize("content, message", [
        ('{"filter": {"max_depth": 0}}', "max_depth must be >= 1"),
        ('{"tokenizer": {"default_encoding": "bogus"}}', "Unknown default_encoding: bogus"),
    ])
    def test_invalid_configuration(self, document, tmp_path, capsys, content, message) -> None:
        """Test that a bad configuration file is a usage error with suggestions."""
        config_path = tmp_path / "config.json"
        config_path.write_text(content, encoding="utf-8")

        assert main([str(document), "-t", "p", "-c", str(config_path)]) == EXIT_USAGE_ERROR

        err = capsys.readouterr().err
        assert "invalid configuration" in err
        assert message in err
        assert "Suggestion:" in err
