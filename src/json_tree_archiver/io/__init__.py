"""Archive I/O for the JSON Tree Archiver."""

from .archive_writer import ArchiveWriter

__all__ = ["ArchiveWriter"]
