"""ZIP archive writer for converted file trees."""

import io
import logging
import os
import zipfile
import zlib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from ..types import ArchiveEncodingError, ArchiveWriterInterface, ErrorType, ProcessingError


class ArchiveWriter(ArchiveWriterInterface):
    """
    Packages a file map into a ZIP archive.

    One archive entry is written per file; directories are implied by
    the entry paths and get no entry of their own.
    """

    def __init__(self, compression_level: int = 6,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the archive writer.

        Args:
            compression_level: Deflate level from 0 (store) to 9 (smallest)
            logger: Optional logger instance
        """
        self.compression_level = compression_level
        self.logger = logger or logging.getLogger(__name__)

    def build_archive(self, files: Mapping[str, str]) -> bytes:
        """
        Encode files into ZIP bytes.

        Args:
            files: Ordered mapping of archive path to file content

        Returns:
            The ZIP archive as bytes

        Raises:
            ArchiveEncodingError: If encoding fails
        """
        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED,
                                 compresslevel=self.compression_level) as archive:
                for path, content in files.items():
                    archive.writestr(path, content.encode("utf-8"))
        except (ValueError, TypeError, OSError, zlib.error) as e:
            raise ArchiveEncodingError(
                f"Failed to create ZIP archive: {str(e)}",
                context={"file_count": len(files)}
            )

        data = buffer.getvalue()
        self.logger.info(f"Encoded {len(files)} files into a {len(data)} byte archive")
        return data

    def write_archive(self, files: Mapping[str, str], output_path: str) -> Dict[str, Any]:
        """
        Encode files and write the archive to disk.

        Args:
            files: Ordered mapping of archive path to file content
            output_path: Destination file path

        Returns:
            Dictionary with write operation results

        Raises:
            ArchiveEncodingError: If encoding fails
            ProcessingError: If the archive cannot be written
        """
        data = self.build_archive(files)
        path = self.save(data, output_path)

        self.logger.info(f"Wrote archive with {len(files)} files to {path}")
        return {
            "success": True,
            "path": path,
            "size": len(data),
            "file_count": len(files)
        }

    def save(self, data: bytes, output_path: str) -> str:
        """
        Write archive bytes to disk, creating parent directories.

        Args:
            data: Encoded archive
            output_path: Destination file path

        Returns:
            Absolute path of the written file

        Raises:
            ProcessingError: If the archive cannot be written
        """
        target = Path(output_path)
        self._ensure_directory_exists(target.parent)
        try:
            target.write_bytes(data)
        except OSError as e:
            raise ProcessingError(
                f"Failed to write archive {output_path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"output_path": output_path}
            )
        return str(target.absolute())

    def read_archive(self, data: bytes) -> Dict[str, str]:
        """
        Decode ZIP bytes back into a path to content mapping.

        Args:
            data: ZIP archive bytes

        Returns:
            Ordered mapping of entry path to UTF-8 content

        Raises:
            ArchiveEncodingError: If the bytes are not a readable archive
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                return {
                    info.filename: archive.read(info).decode("utf-8")
                    for info in archive.infolist()
                    if not info.is_dir()
                }
        except (zipfile.BadZipFile, UnicodeDecodeError) as e:
            raise ArchiveEncodingError(f"Failed to read ZIP archive: {str(e)}")

    def _ensure_directory_exists(self, directory_path: Path) -> None:
        """
        Ensure that a directory exists, creating it if necessary.

        Args:
            directory_path: Path to directory

        Raises:
            ProcessingError: If directory creation fails
        """
        try:
            directory_path.mkdir(parents=True, exist_ok=True)

            if not os.access(directory_path, os.W_OK):
                raise ProcessingError(
                    f"Directory {directory_path} is not writable",
                    ErrorType.FILESYSTEM,
                    context={"output_path": str(directory_path)}
                )

        except OSError as e:
            raise ProcessingError(
                f"Failed to create directory {directory_path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"output_path": str(directory_path)}
            )
