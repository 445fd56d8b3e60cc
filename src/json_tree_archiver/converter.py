"""Main JSON Tree Archiver implementation."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional
from .types import (
    ArchiveResult,
    ConversionOptions,
    ConversionResult,
    InvalidInputError,
    NamingPolicyInterface,
    ProcessingError,
)
from .models import TreeNode
from .parser import JSONParser
from .naming import DefaultNamingPolicy, PlainTextNamingPolicy
from .tree_builder import TreeBuilder
from .tree_ops import file_map, tree_stats
from .io.archive_writer import ArchiveWriter
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler
from .utils.size_calculator import SizeCalculator


class JSONTreeConverter:
    """
    Converts JSON text into a file tree and packages trees into ZIP archives.

    Parsing and tree building are synchronous. Archive encoding is the
    single asynchronous step and runs in a worker thread.
    """

    def __init__(self, options: Optional[ConversionOptions] = None,
                 naming_policy: Optional[NamingPolicyInterface] = None,
                 logger: Optional[logging.Logger] = None,
                 max_workers: Optional[int] = None):
        """
        Initialize the converter.

        Args:
            options: Conversion settings (defaults to ConversionOptions())
            naming_policy: Policy for scalar file names; derived from options when omitted
            logger: Optional logger instance
            max_workers: Maximum number of archive worker threads (None = auto-detect)
        """
        self.options = options or ConversionOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.executor = ThreadPoolExecutor(max_workers=max_workers)

        if naming_policy is None:
            if self.options.plain_text:
                naming_policy = PlainTextNamingPolicy()
            else:
                naming_policy = DefaultNamingPolicy(
                    text_threshold=self.options.text_threshold,
                    indent=self.options.indent
                )

        self.error_handler = ErrorHandler(self.logger)
        self.parser = JSONParser(self.options.max_depth, self.logger)
        self.builder = TreeBuilder(naming_policy, self.options.base_path, self.logger)
        self.archive_writer = ArchiveWriter(self.options.compression_level, self.logger)
        self.profiler = PerformanceProfiler(self.logger)
        self.size_calculator = SizeCalculator(self.logger)

    def parse(self, json_string: str) -> Any:
        """
        Parse JSON text.

        Raises:
            InvalidInputError: If the text is not valid JSON
        """
        return self.parser.parse(json_string)

    def build_tree(self, value: Any) -> TreeNode:
        """Build a tree from an already parsed JSON value."""
        return self.builder.build(value)

    def convert(self, json_string: str) -> ConversionResult:
        """
        Convert JSON text into a file tree.

        The text is parsed once; the parsed value feeds the depth check
        and the tree builder.

        Args:
            json_string: Input JSON text

        Returns:
            ConversionResult with the tree and its stats, or the errors
        """
        input_size = len(json_string.encode('utf-8')) if isinstance(json_string, str) else 0

        with self.profiler.profile_operation("convert_json", input_size) as profiler:
            try:
                data, warnings = self.parser.parse_with_warnings(json_string)
            except InvalidInputError as e:
                self.error_handler.handle_processing_error(e)
                return ConversionResult(success=False, errors=[str(e)])

            for warning in warnings:
                self.logger.warning(warning)

            tree = self.builder.build(data)
            stats = tree_stats(tree)
            profiler.record_output(
                output_size=self.size_calculator.tree_content_size(tree),
                files_created=stats.files
            )

        self.logger.info(f"Converted {input_size/1024:.1f}KB of JSON into {stats.files} files "
                         f"and {stats.directories} directories (depth {stats.depth})")

        return ConversionResult(
            success=True,
            tree=tree,
            stats=stats,
            warnings=warnings
        )

    async def create_archive(self, tree: TreeNode,
                             output_path: Optional[str] = None) -> ArchiveResult:
        """
        Package a tree's files into a ZIP archive.

        Args:
            tree: Tree to package
            output_path: Optional file path to also write the archive to

        Returns:
            ArchiveResult with the archive bytes, or the errors
        """
        files = file_map(tree)

        level_validation = self.error_handler.validate_compression_level(
            self.options.compression_level
        )
        if not level_validation.is_valid:
            return ArchiveResult(
                success=False,
                file_count=len(files),
                output_path=output_path,
                errors=[error.message for error in level_validation.errors]
            )

        loop = asyncio.get_running_loop()

        try:
            data = await loop.run_in_executor(
                self.executor, self.archive_writer.build_archive, files
            )
            if output_path:
                await loop.run_in_executor(
                    self.executor, self.archive_writer.save, data, output_path
                )
        except ProcessingError as e:
            response = self.error_handler.handle_processing_error(e)
            self.logger.info(f"Suggested action: {response.suggested_action}")
            return ArchiveResult(
                success=False,
                file_count=len(files),
                output_path=output_path,
                errors=[str(e)]
            )

        return ArchiveResult(
            success=True,
            data=data,
            file_count=len(files),
            total_size=len(data),
            output_path=output_path
        )

    async def convert_to_archive(self, json_string: str,
                                 output_path: Optional[str] = None) -> ArchiveResult:
        """
        Convert JSON text and package the resulting tree in one step.

        Args:
            json_string: Input JSON text
            output_path: Optional file path to write the archive to

        Returns:
            ArchiveResult for the whole operation
        """
        conversion = self.convert(json_string)
        if not conversion.success:
            return ArchiveResult(success=False, output_path=output_path, errors=conversion.errors)
        return await self.create_archive(conversion.tree, output_path)

    @staticmethod
    def tree_summary(tree: TreeNode) -> Dict[str, Any]:
        """Stats of a tree plus the formatted size of its contents, for previews."""
        summary: Dict[str, Any] = tree_stats(tree).to_dict()
        summary["size"] = SizeCalculator.format_file_size(SizeCalculator().tree_content_size(tree))
        return summary

    def close(self) -> None:
        """Shut down the archive worker threads."""
        self.executor.shutdown(wait=True)


class ConversionSession:
    """
    Holds the tree of the current conversion.

    A successful load replaces the tree. A failed load keeps the previous
    tree unless ``clear_on_error`` is set.
    """

    def __init__(self, converter: Optional[JSONTreeConverter] = None,
                 clear_on_error: bool = False):
        self.converter = converter or JSONTreeConverter()
        self.clear_on_error = clear_on_error
        self.tree: Optional[TreeNode] = None
        self.last_result: Optional[ConversionResult] = None

    def load(self, json_string: str) -> ConversionResult:
        """Convert new input and make it the current tree on success."""
        result = self.converter.convert(json_string)
        self.last_result = result
        if result.success:
            self.tree = result.tree
        elif self.clear_on_error:
            self.tree = None
        return result

    def clear(self) -> None:
        """Discard the current tree."""
        self.tree = None
        self.last_result = None

    @property
    def has_tree(self) -> bool:
        return self.tree is not None

    async def create_archive(self, output_path: Optional[str] = None) -> ArchiveResult:
        """Package the current tree."""
        if self.tree is None:
            return ArchiveResult(success=False, output_path=output_path,
                                 errors=["No tree loaded"])
        return await self.converter.create_archive(self.tree, output_path)
