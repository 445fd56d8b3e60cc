"""Directory node model implementation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from ..types import NodeKind
from .file_node import FileNode


def join_path(parent_path: str, name: str) -> str:
    """Join a parent path and a child name without a leading slash."""
    return f"{parent_path}/{name}" if parent_path else name


@dataclass
class DirectoryNode:
    """
    Internal node of the file tree.

    Represents a JSON object or array. Children keep their insertion
    order and their names are unique among siblings.
    """

    name: str
    path: str
    children: List[Union[FileNode, 'DirectoryNode']] = field(default_factory=list)
    kind: NodeKind = field(default=NodeKind.DIRECTORY, init=False)

    def __post_init__(self):
        """Validate node after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate directory node integrity."""
        if "/" in self.name:
            raise ValueError("name cannot contain '/'")

        if self.path.startswith("/"):
            raise ValueError("path cannot start with '/'")

        names = [child.name for child in self.children]
        if len(names) != len(set(names)):
            duplicates = sorted({name for name in names if names.count(name) > 1})
            raise ValueError(f"duplicate child names: {duplicates}")

    def get_child(self, name: str) -> Optional[Union[FileNode, 'DirectoryNode']]:
        """Return the child with the given name, or None."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def child_names(self) -> List[str]:
        """Names of the direct children, in order."""
        return [child.name for child in self.children]

    def is_empty(self) -> bool:
        """Check if directory has no children."""
        return not self.children

    def to_dict(self) -> Dict[str, Any]:
        """Convert node and its subtree to dictionary for JSON serialization."""
        result = self._shallow_dict()
        stack: List[Tuple['DirectoryNode', Dict[str, Any]]] = [(self, result)]

        while stack:
            node, data = stack.pop()
            for child in node.children:
                if isinstance(child, DirectoryNode):
                    child_data = child._shallow_dict()
                    stack.append((child, child_data))
                else:
                    child_data = child.to_dict()
                data["children"].append(child_data)
        return result

    def _shallow_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "path": self.path,
            "children": [],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DirectoryNode':
        """Create DirectoryNode from dictionary produced by to_dict."""
        root = cls(name=data["name"], path=data["path"])
        stack: List[Tuple[Dict[str, Any], DirectoryNode]] = [(data, root)]

        while stack:
            node_data, node = stack.pop()
            for child in node_data.get("children", []):
                if child.get("kind") == NodeKind.DIRECTORY.value:
                    child_node = cls(name=child["name"], path=child["path"])
                    stack.append((child, child_node))
                    node.children.append(child_node)
                elif child.get("kind") == NodeKind.FILE.value:
                    node.children.append(FileNode.from_dict(child))
                else:
                    raise ValueError(f"Unknown node kind: {child.get('kind')!r}")
            node._validate()
        return root

    def to_mapping(self) -> Dict[str, Any]:
        """
        Convert subtree to the nested mapping form.

        Directories become nested dictionaries keyed by child name and
        files become their content strings.
        """
        result: Dict[str, Any] = {}
        stack: List[Tuple[DirectoryNode, Dict[str, Any]]] = [(self, result)]

        while stack:
            node, mapping = stack.pop()
            for child in node.children:
                if isinstance(child, DirectoryNode):
                    mapping[child.name] = {}
                    stack.append((child, mapping[child.name]))
                else:
                    mapping[child.name] = child.content
        return result

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], name: str = "",
                     path: str = "") -> 'DirectoryNode':
        """
        Create a DirectoryNode from the nested mapping form.

        Args:
            mapping: Nested dictionary, dictionaries are directories and
                any other value is file content
            name: Name of the created directory
            path: Path of the created directory

        Returns:
            DirectoryNode instance
        """
        root = cls(name=name, path=path)
        stack: List[Tuple[Mapping[str, Any], DirectoryNode]] = [(mapping, root)]

        while stack:
            current, node = stack.pop()
            for child_name, value in current.items():
                child_path = join_path(node.path, child_name)
                if isinstance(value, Mapping):
                    child_node = cls(name=child_name, path=child_path)
                    stack.append((value, child_node))
                    node.children.append(child_node)
                else:
                    content = value if isinstance(value, str) else str(value)
                    node.children.append(FileNode(name=child_name, path=child_path, content=content))
        return root

    def clone(self) -> 'DirectoryNode':
        """Create a deep copy of this subtree."""
        root = DirectoryNode(name=self.name, path=self.path)
        stack: List[Tuple[DirectoryNode, DirectoryNode]] = [(self, root)]

        while stack:
            source, target = stack.pop()
            for child in source.children:
                if isinstance(child, DirectoryNode):
                    copy = DirectoryNode(name=child.name, path=child.path)
                    stack.append((child, copy))
                    target.children.append(copy)
                else:
                    target.children.append(child.clone())
        return root
