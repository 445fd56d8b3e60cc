"""Core type definitions for the JSON Tree Archiver."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class NodeKind(Enum):
    """Discriminator for tree nodes."""
    FILE = "file"
    DIRECTORY = "directory"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    DEPTH = "depth"
    ARCHIVE = "archive"
    FILESYSTEM = "filesystem"


@dataclass
class ConversionOptions:
    """Settings for a JSON to tree to archive conversion."""
    base_path: str = ""
    text_threshold: int = 100
    indent: int = 2
    plain_text: bool = False
    max_depth: int = 500
    compression_level: int = 6
    archive_name: str = "converted-files.zip"


@dataclass
class TreeStats:
    """Aggregate statistics of a tree."""
    files: int
    directories: int
    depth: int
    total_nodes: int

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary for JSON serialization."""
        return {
            "files": self.files,
            "directories": self.directories,
            "depth": self.depth,
            "totalNodes": self.total_nodes,
        }


@dataclass
class FlatEntry:
    """One node of a flattened tree listing."""
    name: str
    path: str
    type: NodeKind
    content: Optional[str] = None
    child_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary, omitting fields that do not apply."""
        result: Dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "type": self.type.value,
        }
        if self.type == NodeKind.FILE:
            result["content"] = self.content
        else:
            result["childCount"] = self.child_count
        return result


@dataclass
class ConversionResult:
    """Result of converting JSON text into a tree."""
    success: bool
    tree: Optional[Any] = None
    stats: Optional[TreeStats] = None
    warnings: List[str] = field(default_factory=list)
    errors: Optional[List[str]] = None


@dataclass
class ArchiveResult:
    """Result of packaging a tree into an archive."""
    success: bool
    data: bytes = b""
    file_count: int = 0
    total_size: int = 0
    output_path: Optional[str] = None
    errors: Optional[List[str]] = None


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


class ProcessingError(Exception):
    """Custom exception for processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class InvalidInputError(ProcessingError):
    """Raised when raw input cannot be turned into a JSON value."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.SYNTAX,
                 context: Optional[Any] = None):
        super().__init__(message, error_type, context)


class ArchiveEncodingError(ProcessingError):
    """Raised when the archive collaborator fails to encode the file set."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.ARCHIVE, context)


# Abstract base classes for interfaces

class NamingPolicyInterface(ABC):
    """Abstract interface for choosing file names and contents of scalar values."""

    @abstractmethod
    def keyed_file(self, stem: str, value: Any) -> Tuple[str, str]:
        """Return (filename, content) for a scalar stored under an object key."""
        pass

    @abstractmethod
    def item_file(self, stem: str, value: Any) -> Tuple[str, str]:
        """Return (filename, content) for a scalar stored at an array index."""
        pass


class TreeBuilderInterface(ABC):
    """Abstract interface for the JSON to tree transformation."""

    @abstractmethod
    def build(self, value: Any) -> Any:
        """Build a tree from a parsed JSON value."""
        pass


class ArchiveWriterInterface(ABC):
    """Abstract interface for the archive collaborator."""

    @abstractmethod
    def build_archive(self, files: Mapping[str, str]) -> bytes:
        """Encode a path to content mapping into archive bytes."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle processing errors."""
        pass
