"""
Text rendering of file trees for previews.

Expansion state belongs to the caller: pass the set of directory paths
that should be shown open, or None to open everything.
"""

from typing import AbstractSet, List, Optional, Tuple
from .models import DirectoryNode, FileNode, TreeNode


def render_tree(tree: TreeNode, expanded: Optional[AbstractSet[str]] = None,
                show_sizes: bool = False) -> List[str]:
    """
    Render a tree as lines using box-drawing connectors.

    Args:
        tree: Tree to render
        expanded: Directory paths to open; None opens all directories
        show_sizes: Append the byte size of each file

    Returns:
        Rendered lines, the root label first
    """
    if isinstance(tree, FileNode):
        return [_file_label(tree, show_sizes)]

    lines = [f"{tree.name or '.'}/"]
    stack: List[Tuple[TreeNode, str, bool]] = _child_entries(tree, "")

    while stack:
        node, prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "

        if isinstance(node, DirectoryNode):
            is_open = expanded is None or node.path in expanded
            marker = "" if is_open or node.is_empty() else " (+)"
            lines.append(f"{prefix}{connector}{node.name}/{marker}")
            if is_open:
                new_prefix = prefix + ("    " if is_last else "│   ")
                stack.extend(_child_entries(node, new_prefix))
        else:
            lines.append(f"{prefix}{connector}{_file_label(node, show_sizes)}")

    return lines


def _child_entries(directory: DirectoryNode, prefix: str) -> List[Tuple[TreeNode, str, bool]]:
    """Children as (node, prefix, is_last) in reverse order, ready to push on a stack."""
    total = len(directory.children)
    return [
        (node, prefix, i == total - 1)
        for i, node in reversed(list(enumerate(directory.children)))
    ]


def _file_label(node: FileNode, show_sizes: bool) -> str:
    if not show_sizes:
        return node.name
    return f"{node.name} ({len(node.content.encode('utf-8'))} B)"
