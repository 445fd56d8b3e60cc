"""Tests for size calculator utilities."""

import pytest
from json_tree_archiver.utils.size_calculator import SizeCalculator
from json_tree_archiver.tree_builder import build_tree


class TestSizeCalculator:
    """Test cases for SizeCalculator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.calculator = SizeCalculator()

    def test_content_size_is_utf8(self):
        assert self.calculator.content_size("abc") == 3
        assert self.calculator.content_size("ü") == 2
        assert self.calculator.content_size("") == 0

    def test_tree_content_size(self):
        tree = build_tree({"a": 1, "b": "xy", "c": [True]})

        # "1" + "\"xy\"" + "true"
        assert self.calculator.tree_content_size(tree) == 1 + 4 + 4

    def test_empty_tree_size(self):
        assert self.calculator.tree_content_size(build_tree({})) == 0

    def test_size_breakdown(self):
        tree = build_tree({"a": 12345, "b": [1, 22]})
        breakdown = self.calculator.size_breakdown(tree)

        assert breakdown["total_size"] == 8
        assert breakdown["total_size_formatted"] == "8 Bytes"
        assert breakdown["by_extension"] == {"json": 5, "txt": 3}
        assert breakdown["largest_file"] == "a.json"
        assert breakdown["largest_file_size"] == 5

    def test_size_breakdown_empty(self):
        breakdown = self.calculator.size_breakdown(build_tree([]))

        assert breakdown["total_size"] == 0
        assert breakdown["largest_file"] is None

    @pytest.mark.parametrize("size,expected", [
        (0, "0 Bytes"),
        (-5, "0 Bytes"),
        (500, "500 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (1073741824, "1 GB"),
        (5 * 1073741824 * 1024, "5120 GB"),
    ])
    def test_format_file_size(self, size, expected):
        """Test file size formatting."""
        assert SizeCalculator.format_file_size(size) == expected
