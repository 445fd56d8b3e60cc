"""Size calculation utilities for tree contents and archives."""

import logging
from typing import Any, Dict, Optional
from ..models import TreeNode
from ..tree_ops import file_map


class SizeCalculator:
    """
    Utility class for measuring tree contents in UTF-8 bytes and
    formatting sizes for display.
    """

    UNITS = ["Bytes", "KB", "MB", "GB"]

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the size calculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def content_size(self, content: str) -> int:
        """Size of a file's content in UTF-8 bytes."""
        return len(content.encode('utf-8'))

    def tree_content_size(self, tree: TreeNode) -> int:
        """
        Total uncompressed size of all file contents in a tree.

        Args:
            tree: Tree to measure

        Returns:
            Size in bytes
        """
        return sum(self.content_size(content) for content in file_map(tree).values())

    def size_breakdown(self, tree: TreeNode) -> Dict[str, Any]:
        """
        Per-extension byte totals of a tree's files.

        Args:
            tree: Tree to measure

        Returns:
            Dictionary with totals, per-extension sizes and the largest file
        """
        by_extension: Dict[str, int] = {}
        largest_path = None
        largest_size = 0
        total = 0

        for path, content in file_map(tree).items():
            size = self.content_size(content)
            total += size
            name = path.rsplit("/", 1)[-1]
            extension = name.rsplit(".", 1)[-1].lower() if "." in name else ""
            by_extension[extension] = by_extension.get(extension, 0) + size
            if largest_path is None or size > largest_size:
                largest_path, largest_size = path, size

        return {
            "total_size": total,
            "total_size_formatted": self.format_file_size(total),
            "by_extension": by_extension,
            "largest_file": largest_path,
            "largest_file_size": largest_size,
        }

    @classmethod
    def format_file_size(cls, size_bytes: int) -> str:
        """
        Format a byte count for humans, e.g. ``1.5 KB``.

        Args:
            size_bytes: Size in bytes

        Returns:
            Formatted size with at most two decimals
        """
        if size_bytes <= 0:
            return "0 Bytes"

        exponent = 0
        scaled = float(size_bytes)
        while scaled >= 1024 and exponent < len(cls.UNITS) - 1:
            scaled /= 1024
            exponent += 1

        value = round(scaled, 2)
        if value == int(value):
            value = int(value)
        return f"{value} {cls.UNITS[exponent]}"
