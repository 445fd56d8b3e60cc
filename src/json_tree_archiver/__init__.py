"""
JSON Tree Archiver - Turn JSON documents into file trees and ZIP archives.

Objects and arrays become folders, scalar values become files, and the
resulting tree can be inspected, sorted and packaged for download.
"""

__version__ = "1.0.0"

from .converter import JSONTreeConverter, ConversionSession
from .models import FileNode, DirectoryNode, TreeNode
from .naming import DefaultNamingPolicy, PlainTextNamingPolicy, sanitize_filename
from .tree_builder import TreeBuilder, build_tree
from .tree_ops import (
    count_directories,
    count_files,
    directory_paths,
    file_map,
    file_paths,
    find_by_path,
    flatten,
    is_valid_tree,
    sort_tree,
    tree_depth,
    tree_from_paths,
    tree_stats,
)
from .types import (
    ArchiveEncodingError,
    ArchiveResult,
    ConversionOptions,
    ConversionResult,
    InvalidInputError,
    TreeStats,
)

__all__ = [
    "JSONTreeConverter",
    "ConversionSession",
    "FileNode",
    "DirectoryNode",
    "TreeNode",
    "DefaultNamingPolicy",
    "PlainTextNamingPolicy",
    "sanitize_filename",
    "TreeBuilder",
    "build_tree",
    "count_directories",
    "count_files",
    "directory_paths",
    "file_map",
    "file_paths",
    "find_by_path",
    "flatten",
    "is_valid_tree",
    "sort_tree",
    "tree_depth",
    "tree_from_paths",
    "tree_stats",
    "ArchiveEncodingError",
    "ArchiveResult",
    "ConversionOptions",
    "ConversionResult",
    "InvalidInputError",
    "TreeStats",
]
