"""File naming rules for turning JSON keys and values into tree entries."""

import json
import logging
import re
from typing import Any, Optional, Set, Tuple
from .types import NamingPolicyInterface

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RUNS = re.compile(r'\s+')
_UNDERSCORE_RUNS = re.compile(r'_{2,}')

# Names that cannot be used as a path segment even after sanitizing
_RESERVED_SEGMENTS = {"", ".", ".."}

ROOT_FILE_STEM = "data"
ITEM_PREFIX = "item_"


def sanitize_filename(name: str) -> str:
    """
    Make a raw JSON key safe to use as a file-system path segment.

    Characters ``< > : " / \\ | ? *`` become ``_``, whitespace runs become
    a single ``_``, runs of underscores are collapsed and the result is
    trimmed. Names that would still be unusable become ``_``.

    Args:
        name: Raw key

    Returns:
        Sanitized path segment
    """
    cleaned = _UNSAFE_CHARS.sub("_", name)
    cleaned = _WHITESPACE_RUNS.sub("_", cleaned)
    cleaned = _UNDERSCORE_RUNS.sub("_", cleaned)
    cleaned = cleaned.strip()

    if cleaned in _RESERVED_SEGMENTS:
        return "_"
    return cleaned


def item_name(index: int) -> str:
    """Name used for the array element at ``index``."""
    return f"{ITEM_PREFIX}{index}"


def file_extension(filename: str) -> str:
    """Return the lower-cased extension of ``filename`` (the whole name if it has no dot)."""
    return filename.split(".")[-1].lower()


def split_extension(filename: str) -> Tuple[str, str]:
    """Split ``filename`` into stem and extension (with its dot)."""
    stem, dot, ext = filename.rpartition(".")
    if not dot or not stem:
        return filename, ""
    return stem, f".{ext}"


def render_plain_text(value: Any) -> str:
    """Render a scalar the way a plain string conversion would show it."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value)


def is_container(value: Any) -> bool:
    """Check if a JSON value maps to a directory."""
    return isinstance(value, (dict, list))


class DefaultNamingPolicy(NamingPolicyInterface):
    """
    Default naming policy.

    Keyed scalars are pretty-printed JSON in ``.json`` files unless they
    are long strings, which are stored as-is in ``.txt`` files. Array
    scalars are always ``.txt`` files holding their plain-text rendering.
    """

    def __init__(self, text_threshold: int = 100, indent: int = 2):
        """
        Initialize the naming policy.

        Args:
            text_threshold: Strings longer than this are stored as text
            indent: Indentation for pretty-printed JSON content
        """
        self.text_threshold = text_threshold
        self.indent = indent

    def keyed_file(self, stem: str, value: Any) -> Tuple[str, str]:
        if isinstance(value, str) and len(value) > self.text_threshold:
            return f"{stem}.txt", value
        return f"{stem}.json", json.dumps(value, indent=self.indent, ensure_ascii=False)

    def item_file(self, stem: str, value: Any) -> Tuple[str, str]:
        return f"{stem}.txt", render_plain_text(value)


class PlainTextNamingPolicy(NamingPolicyInterface):
    """Stores every scalar as a ``.txt`` file with its plain-text rendering."""

    def keyed_file(self, stem: str, value: Any) -> Tuple[str, str]:
        return f"{stem}.txt", render_plain_text(value)

    def item_file(self, stem: str, value: Any) -> Tuple[str, str]:
        return f"{stem}.txt", render_plain_text(value)


class SiblingNames:
    """
    Tracks the names used inside one directory and resolves collisions.

    A colliding name gets ``_1``, ``_2``, ... appended to its stem.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._used: Set[str] = set()

    def claim(self, name: str, has_extension: bool = False) -> str:
        """
        Reserve a unique name based on ``name``.

        Args:
            name: Preferred name
            has_extension: Whether the suffix goes before the extension

        Returns:
            The name actually reserved
        """
        if name not in self._used:
            self._used.add(name)
            return name

        stem, ext = split_extension(name) if has_extension else (name, "")
        counter = 1
        candidate = f"{stem}_{counter}{ext}"
        while candidate in self._used:
            counter += 1
            candidate = f"{stem}_{counter}{ext}"

        self.logger.debug(f"Name collision on '{name}', using '{candidate}'")
        self._used.add(candidate)
        return candidate

    def __contains__(self, name: str) -> bool:
        return name in self._used

    def __len__(self) -> int:
        return len(self._used)
