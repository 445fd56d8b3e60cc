"""Tests for the ZIP archive writer."""

import io
import zipfile
import pytest
from json_tree_archiver.io.archive_writer import ArchiveWriter
from json_tree_archiver.tree_builder import build_tree
from json_tree_archiver.tree_ops import file_map
from json_tree_archiver.types import ArchiveEncodingError, ErrorType, ProcessingError


class TestArchiveWriter:
    """Test cases for ArchiveWriter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.writer = ArchiveWriter()

    def test_one_entry_per_file(self, sample_mixed_json):
        """Test the archive holds exactly the tree's files."""
        files = file_map(build_tree(sample_mixed_json))
        data = self.writer.build_archive(files)

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            names = archive.namelist()
            assert names == list(files)
            assert archive.read("config/settings/timeout.json") == b"30"
            assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())

    def test_no_directory_entries(self):
        data = self.writer.build_archive(file_map(build_tree({"a": {"b": {}}, "c": 1})))

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.namelist() == ["c.json"]

    def test_empty_archive(self):
        data = self.writer.build_archive({})

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.namelist() == []

    def test_utf8_content(self):
        data = self.writer.build_archive({"city.json": '"Zürich"'})
        assert self.writer.read_archive(data) == {"city.json": '"Zürich"'}

    def test_read_archive_preserves_order(self):
        files = {"b.txt": "1", "a/x.txt": "2", "a.txt": "3"}
        assert list(self.writer.read_archive(self.writer.build_archive(files)).items()) == list(files.items())

    def test_read_archive_rejects_garbage(self):
        with pytest.raises(ArchiveEncodingError, match="Failed to read ZIP archive"):
            self.writer.read_archive(b"not a zip")

    def test_invalid_compression_level(self):
        writer = ArchiveWriter(compression_level=42)

        with pytest.raises(ArchiveEncodingError) as exc_info:
            writer.build_archive({"a.txt": "content"})

        assert exc_info.value.error_type == ErrorType.ARCHIVE
        assert exc_info.value.context == {"file_count": 1}

    def test_store_level(self):
        data = ArchiveWriter(compression_level=0).build_archive({"a.txt": "x" * 1000})
        assert self.writer.read_archive(data) == {"a.txt": "x" * 1000}

    def test_write_archive(self, temp_dir):
        output = temp_dir / "nested" / "out.zip"
        result = self.writer.write_archive({"a.txt": "hello"}, str(output))

        assert result["success"]
        assert result["file_count"] == 1
        assert result["path"] == str(output.absolute())
        assert output.exists()
        assert output.stat().st_size == result["size"]

    def test_save_into_file_path_fails(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("x")

        with pytest.raises(ProcessingError) as exc_info:
            self.writer.save(b"data", str(blocker / "out.zip"))

        assert exc_info.value.error_type == ErrorType.FILESYSTEM
