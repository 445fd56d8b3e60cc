"""Data models for the JSON Tree Archiver."""

from typing import Union
from .file_node import FileNode
from .directory_node import DirectoryNode, join_path

TreeNode = Union[FileNode, DirectoryNode]

__all__ = ["FileNode", "DirectoryNode", "TreeNode", "join_path"]
