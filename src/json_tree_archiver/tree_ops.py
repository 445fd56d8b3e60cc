"""
Query and transform operations over file trees.

Every function takes a tree and returns a new value; none of them mutate
their argument. A tree is normally a root DirectoryNode whose children
are the top-level entries. A FileNode root (built from a scalar JSON
value) behaves as a tree holding that single file.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
from .types import FlatEntry, NodeKind, TreeStats
from .models import DirectoryNode, FileNode, TreeNode


def _top_level(tree: TreeNode) -> List[TreeNode]:
    """Entries directly below the root of ``tree``."""
    if isinstance(tree, DirectoryNode):
        return tree.children
    if isinstance(tree, FileNode):
        return [tree]
    raise TypeError(f"Expected FileNode or DirectoryNode, got {type(tree).__name__}")


def flatten(tree: TreeNode) -> List[FlatEntry]:
    """
    List every node depth-first, each directory before its descendants.

    Directory entries carry their child count, file entries their content.
    The root container itself is not listed.
    """
    result: List[FlatEntry] = []
    stack: List[TreeNode] = list(reversed(_top_level(tree)))

    while stack:
        node = stack.pop()
        if isinstance(node, DirectoryNode):
            result.append(FlatEntry(
                name=node.name,
                path=node.path,
                type=NodeKind.DIRECTORY,
                child_count=len(node.children)
            ))
            stack.extend(reversed(node.children))
        else:
            result.append(FlatEntry(
                name=node.name,
                path=node.path,
                type=NodeKind.FILE,
                content=node.content
            ))
    return result


def file_paths(tree: TreeNode) -> List[str]:
    """Paths of all files, depth-first."""
    return [entry.path for entry in flatten(tree) if entry.type == NodeKind.FILE]


def directory_paths(tree: TreeNode) -> List[str]:
    """Paths of all directories, depth-first, each before its descendants."""
    return [entry.path for entry in flatten(tree) if entry.type == NodeKind.DIRECTORY]


def file_map(tree: TreeNode) -> Dict[str, str]:
    """Ordered mapping of file path to content, one entry per archive member."""
    return {entry.path: entry.content for entry in flatten(tree) if entry.type == NodeKind.FILE}


def find_by_path(tree: TreeNode, path: str) -> Optional[TreeNode]:
    """
    Look up a node by its slash-delimited path relative to the root.

    Empty segments are ignored. Returns None for an empty path or when
    any segment is missing.
    """
    if not path:
        return None

    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return None

    candidates = _top_level(tree)
    node: Optional[TreeNode] = None
    for segment in segments:
        node = next((child for child in candidates if child.name == segment), None)
        if node is None:
            return None
        candidates = node.children if isinstance(node, DirectoryNode) else []
    return node


def _walk(tree: TreeNode) -> Iterator[Tuple[TreeNode, int]]:
    """Yield every node below the root with its level (top-level entries are level 1)."""
    stack: List[Tuple[TreeNode, int]] = [(node, 1) for node in reversed(_top_level(tree))]
    while stack:
        node, level = stack.pop()
        yield node, level
        if isinstance(node, DirectoryNode):
            stack.extend((child, level + 1) for child in reversed(node.children))


def tree_depth(tree: TreeNode) -> int:
    """Number of directory levels below the root (0 when there are no directories)."""
    return max((level for node, level in _walk(tree) if isinstance(node, DirectoryNode)), default=0)


def count_files(tree: TreeNode) -> int:
    """Total number of files in the tree."""
    return sum(1 for node, _ in _walk(tree) if isinstance(node, FileNode))


def count_directories(tree: TreeNode) -> int:
    """Total number of directories below the root."""
    return sum(1 for node, _ in _walk(tree) if isinstance(node, DirectoryNode))


def tree_stats(tree: TreeNode) -> TreeStats:
    """Compute file, directory, depth and node totals in a single walk."""
    files = 0
    directories = 0
    depth = 0
    for node, level in _walk(tree):
        if isinstance(node, DirectoryNode):
            directories += 1
            depth = max(depth, level)
        else:
            files += 1
    return TreeStats(
        files=files,
        directories=directories,
        depth=depth,
        total_nodes=files + directories
    )


def sort_tree(tree: TreeNode) -> TreeNode:
    """
    Return a sorted copy of the tree.

    At every level directories come first, then files, each group in
    ascending order by name.
    """
    if isinstance(tree, FileNode):
        return tree.clone()

    root = DirectoryNode(name=tree.name, path=tree.path)
    stack: List[Tuple[DirectoryNode, DirectoryNode]] = [(tree, root)]

    while stack:
        source, target = stack.pop()
        directories = sorted(
            (child for child in source.children if isinstance(child, DirectoryNode)),
            key=lambda child: child.name
        )
        files = sorted(
            (child for child in source.children if isinstance(child, FileNode)),
            key=lambda child: child.name
        )
        for child in directories:
            copy = DirectoryNode(name=child.name, path=child.path)
            target.children.append(copy)
            stack.append((child, copy))
        target.children.extend(child.clone() for child in files)

    return root


def is_valid_tree(value: Any) -> bool:
    """
    Check if ``value`` is a well-formed tree.

    The nested mapping form is valid when it is a dictionary whose values
    are either valid nested dictionaries (directories) or any other value
    (files). Lists and primitives are rejected at the top level. A
    DirectoryNode is valid when all its descendants are nodes with unique
    sibling names.
    """
    if isinstance(value, DirectoryNode):
        return _is_valid_node(value)

    # Any non-mapping leaf is file content, so only the root type can fail
    return isinstance(value, Mapping)


def _is_valid_node(root: DirectoryNode) -> bool:
    stack = [root]
    while stack:
        node = stack.pop()
        names = set()
        for child in node.children:
            if child.name in names:
                return False
            names.add(child.name)
            if isinstance(child, DirectoryNode):
                stack.append(child)
            elif not isinstance(child, FileNode):
                return False
    return True


def tree_from_paths(paths: Iterable[Any], default_content: str = "") -> DirectoryNode:
    """
    Build a tree from slash-delimited file paths.

    Intermediate directories are created as needed and the last segment of
    each path becomes a file holding ``default_content``. Later paths win:
    a file addressed as a directory becomes a directory and vice versa.
    Entries that are not non-empty strings are skipped.
    """
    mapping: Dict[str, Any] = {}

    for path in paths:
        if not isinstance(path, str) or not path:
            continue

        parts = [part for part in path.split("/") if part]
        current = mapping
        for index, part in enumerate(parts):
            if index == len(parts) - 1:
                current[part] = default_content
            else:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

    return DirectoryNode.from_mapping(mapping)


def tree_from_file_map(files: Mapping[str, str]) -> DirectoryNode:
    """Build a tree from a path to content mapping, the inverse of file_map."""
    mapping: Dict[str, Any] = {}

    for path, content in files.items():
        parts = [part for part in path.split("/") if part]
        current = mapping
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        if parts:
            current[parts[-1]] = content

    return DirectoryNode.from_mapping(mapping)


def to_mapping(tree: TreeNode) -> Dict[str, Union[str, Dict[str, Any]]]:
    """Nested mapping form of a tree."""
    if isinstance(tree, FileNode):
        return {tree.name: tree.content}
    return tree.to_mapping()
