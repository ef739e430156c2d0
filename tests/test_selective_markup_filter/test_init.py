"""Tests for the public package interface."""

import selective_markup_filter


class TestPublicAPI:
    """Test the progressive disclosure exports."""

    def test_version(self) -> None:
        """Test version metadata."""
        assert selective_markup_filter.__version__ == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        """Test that every name in __all__ exists."""
        for name in selective_markup_filter.__all__:
            assert hasattr(selective_markup_filter, name), name

    def test_level_one_round_trip(self) -> None:
        """Test the simplest entry point."""
        matches = selective_markup_filter.extract("<r><p>x</p></r>", "p")

        assert [str(m) for m in matches] == ["<p>x</p>"]
