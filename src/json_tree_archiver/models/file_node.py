"""File node model implementation."""

from dataclasses import dataclass, field
from typing import Any, Dict
from ..types import NodeKind


@dataclass
class FileNode:
    """
    Leaf of the file tree.

    Holds the rendered content of one scalar JSON value together with
    its name and its slash-joined path from the tree root.
    """

    name: str
    path: str
    content: str
    kind: NodeKind = field(default=NodeKind.FILE, init=False)

    def __post_init__(self):
        """Validate node after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate file node integrity."""
        if not self.name:
            raise ValueError("name cannot be empty")

        if "/" in self.name:
            raise ValueError("name cannot contain '/'")

        if self.path.startswith("/"):
            raise ValueError("path cannot start with '/'")

        if not isinstance(self.content, str):
            raise ValueError("content must be a string")

    @property
    def extension(self) -> str:
        """File extension without the dot, lower-cased."""
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[-1].lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "path": self.path,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FileNode':
        """Create FileNode from dictionary."""
        return cls(
            name=data["name"],
            path=data["path"],
            content=data.get("content", ""),
        )

    def clone(self) -> 'FileNode':
        """Create a copy of this node."""
        return FileNode(name=self.name, path=self.path, content=self.content)
