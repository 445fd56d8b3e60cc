"""Transformation of parsed JSON values into a file tree."""

import logging
from typing import Any, Iterator, List, Optional, Tuple, Union
from .types import NamingPolicyInterface, TreeBuilderInterface
from .models import DirectoryNode, FileNode, join_path
from .naming import (
    DefaultNamingPolicy,
    ROOT_FILE_STEM,
    SiblingNames,
    is_container,
    item_name,
    sanitize_filename,
)


class TreeBuilder(TreeBuilderInterface):
    """
    Builds a file tree from a parsed JSON value.

    Objects and arrays become directories, scalars become files. Object
    keys are sanitized into path segments, array elements are named
    ``item_0``, ``item_1``, ... in order. File names and contents of
    scalars are decided by the naming policy.

    The walk uses an explicit work stack, so nesting depth is not limited
    by the interpreter's recursion limit.
    """

    def __init__(self, naming_policy: Optional[NamingPolicyInterface] = None,
                 base_path: str = "",
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the tree builder.

        Args:
            naming_policy: Policy for scalar file names (default: DefaultNamingPolicy)
            base_path: Slash-delimited path prefix for every node
            logger: Optional logger instance
        """
        self.naming_policy = naming_policy or DefaultNamingPolicy()
        self.base_path = "/".join(
            sanitize_filename(segment) for segment in base_path.split("/") if segment
        )
        self.logger = logger or logging.getLogger(__name__)

    def build(self, value: Any) -> Union[DirectoryNode, FileNode]:
        """
        Build a tree from a parsed JSON value.

        Base path segments become real directories above the converted
        content, so every node path is relative to the returned root.

        Args:
            value: Parsed JSON value

        Returns:
            DirectoryNode for objects and arrays, FileNode for a scalar root
            without base directories
        """
        if not is_container(value):
            return self._build_root_file(value)

        root = DirectoryNode(name="", path="")
        container = self._base_directories(root, self.base_path.split("/") if self.base_path else [])

        stack: List[Tuple[Any, DirectoryNode]] = [(value, container)]
        file_count = 0
        directory_count = 0

        while stack:
            current_value, directory = stack.pop()
            names = SiblingNames(self.logger)

            for raw_name, child_value, is_item in self._iter_children(current_value):
                if is_container(child_value):
                    name = names.claim(raw_name)
                    child_dir = DirectoryNode(name=name, path=join_path(directory.path, name))
                    directory.children.append(child_dir)
                    stack.append((child_value, child_dir))
                    directory_count += 1
                else:
                    if is_item:
                        filename, content = self.naming_policy.item_file(raw_name, child_value)
                    else:
                        filename, content = self.naming_policy.keyed_file(raw_name, child_value)
                    name = names.claim(filename, has_extension=True)
                    directory.children.append(
                        FileNode(name=name, path=join_path(directory.path, name), content=content)
                    )
                    file_count += 1

        self.logger.debug(f"Built tree with {file_count} files and {directory_count} directories")
        return root

    def _build_root_file(self, value: Any) -> Union[DirectoryNode, FileNode]:
        """
        Build the single file emitted for a scalar root.

        Without a base path the file is ``data.<ext>``. With one, the last
        segment names the file and the others become its directories.
        """
        if self.base_path:
            *parents, stem = self.base_path.split("/")
        else:
            parents, stem = [], ROOT_FILE_STEM

        filename, content = self.naming_policy.keyed_file(stem, value)
        self.logger.debug(f"Scalar root stored as single file '{filename}'")

        if not parents:
            return FileNode(name=filename, path=filename, content=content)

        root = DirectoryNode(name="", path="")
        directory = self._base_directories(root, parents)
        directory.children.append(
            FileNode(name=filename, path=join_path(directory.path, filename), content=content)
        )
        return root

    def _base_directories(self, root: DirectoryNode, segments: List[str]) -> DirectoryNode:
        """Create the chain of base path directories and return the innermost one."""
        directory = root
        for segment in segments:
            child = DirectoryNode(name=segment, path=join_path(directory.path, segment))
            directory.children.append(child)
            directory = child
        return directory

    def _iter_children(self, value: Any) -> Iterator[Tuple[str, Any, bool]]:
        """Yield (name, value, is_array_item) for each child of a container."""
        if isinstance(value, list):
            for index, item in enumerate(value):
                yield item_name(index), item, True
        else:
            for key, child in value.items():
                yield sanitize_filename(str(key)), child, False


def build_tree(value: Any, base_path: str = "",
               naming_policy: Optional[NamingPolicyInterface] = None) -> Union[DirectoryNode, FileNode]:
    """Build a file tree from a parsed JSON value with a fresh TreeBuilder."""
    return TreeBuilder(naming_policy=naming_policy, base_path=base_path).build(value)
