"""Unit tests for materialized path helpers."""

import pytest

from narravo.domain.value.path import (
    child_path,
    descendant_prefix,
    format_segment,
    is_valid_path,
    parent_path,
    path_depth,
)


class TestFormatSegment:
    """Tests for format_segment."""

    def test_pads_to_four_digits(self):
        assert format_segment(1) == "0001"
        assert format_segment(42) == "0042"
        assert format_segment(9999) == "9999"

    @pytest.mark.parametrize("sequence", [0, -1, 10000])
    def test_out_of_range_sequence_raises(self, sequence):
        with pytest.raises(ValueError):
            format_segment(sequence)


class TestPathStructure:
    """Tests for building and splitting paths."""

    def test_child_of_nothing_is_top_level(self):
        assert child_path(None, 3) == "0003"

    def test_child_appends_segment(self):
        assert child_path("0001.0002", 7) == "0001.0002.0007"

    def test_parent_and_depth(self):
        """Parent path drops the last segment; depth counts separators."""
        path = "0001.0002.0003"

        assert parent_path(path) == "0001.0002"
        assert parent_path("0001") is None
        assert path_depth(path) == 2
        assert path_depth("0001") == 0

    def test_descendant_prefix_excludes_lookalike_siblings(self):
        """Only true descendants share the prefix."""
        prefix = descendant_prefix("0001")

        assert "0001.0001".startswith(prefix)
        assert not "0001".startswith(prefix)
        assert not "0002.0001".startswith(prefix)

    def test_lexicographic_order_matches_creation_order(self):
        paths = [child_path(None, n) for n in (1, 2, 10, 100, 1000)]

        assert sorted(paths) == paths

    @pytest.mark.parametrize(
        ("path", "valid"),
        [
            ("0001", True),
            ("0001.9999", True),
            ("1", False),
            ("0001.", False),
            ("0001..0002", False),
            ("00a1", False),
            ("", False),
        ],
    )
    def test_is_valid_path(self, path, valid):
        assert is_valid_path(path) is valid
