"""Command-line interface for the JSON Tree Archiver."""

import asyncio
import json
import logging
import sys
import click
from pathlib import Path
from . import __version__
from .converter import JSONTreeConverter
from .error_handler import ErrorHandler
from .models import TreeNode
from .render import render_tree
from .tree_ops import sort_tree
from .types import ConversionOptions, InvalidInputError
from .utils.size_calculator import SizeCalculator


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _read_input(input_file: Path) -> str:
    if str(input_file) == "-":
        raw = click.get_binary_stream("stdin").read()
    else:
        raw = input_file.read_bytes()

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInputError(f"Input is not valid UTF-8 text: {e}")


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Tree Archiver - Turn JSON into a folder tree and a ZIP archive."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(allow_dash=True, path_type=Path))
@click.option('--output', '-o', default='converted-files.zip', help='Output archive path (default: converted-files.zip)')
@click.option('--base-path', '-b', default='', help='Folder that wraps every entry in the archive')
@click.option('--plain-text', is_flag=True, help='Store every value as a .txt file')
@click.option('--compression-level', '-c', default=6, type=int, help='Deflate level 0-9 (default: 6)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def convert(input_file: Path, output: str, base_path: str, plain_text: bool,
            compression_level: int, verbose: bool):
    """Convert a JSON file into a ZIP archive of files and folders."""
    _configure_logging(verbose)

    name_validation = ErrorHandler().validate_archive_name(Path(output).name)
    if not name_validation.is_valid:
        click.echo("❌ Invalid archive name:")
        for error in name_validation.errors:
            click.echo(f"   • {error.message}")
        sys.exit(1)

    try:
        json_content = _read_input(input_file)
    except (OSError, InvalidInputError) as e:
        click.echo(f"❌ Error: {e}")
        sys.exit(1)

    options = ConversionOptions(
        base_path=base_path,
        plain_text=plain_text,
        compression_level=compression_level,
        archive_name=Path(output).name
    )
    converter = JSONTreeConverter(options)
    try:
        result = asyncio.run(converter.convert_to_archive(json_content, output))
    finally:
        converter.close()

    if result.success:
        click.echo(f"✅ Wrote {result.file_count} files to {result.output_path}")
        click.echo(f"📊 Archive size: {SizeCalculator.format_file_size(result.total_size)}")
    else:
        click.echo("❌ Conversion failed:")
        for error in result.errors or []:
            click.echo(f"   • {error}")
        sys.exit(1)


@main.command()
@click.argument('input_file', type=click.Path(allow_dash=True, path_type=Path))
@click.option('--sort', 'sort_entries', is_flag=True, help='Show folders first, then files, alphabetically')
@click.option('--sizes', is_flag=True, help='Show the size of each file')
@click.option('--expand', '-e', multiple=True, help='Only open these folder paths (repeatable)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def preview(input_file: Path, sort_entries: bool, sizes: bool, expand: tuple, verbose: bool):
    """Print the file tree a JSON file would produce."""
    _configure_logging(verbose)
    tree = _convert_or_exit(input_file)

    if sort_entries:
        tree = sort_tree(tree)

    for line in render_tree(tree, expanded=set(expand) if expand else None, show_sizes=sizes):
        click.echo(line)

    stats = JSONTreeConverter.tree_summary(tree)
    click.echo("")
    click.echo(f"📊 {stats['files']} files, {stats['directories']} folders, depth {stats['depth']}, "
               f"{stats['size']}")


@main.command()
@click.argument('input_file', type=click.Path(allow_dash=True, path_type=Path))
@click.option('--json', 'as_json', is_flag=True, help='Print stats as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def stats(input_file: Path, as_json: bool, verbose: bool):
    """Print statistics of the file tree a JSON file would produce."""
    _configure_logging(verbose)
    tree = _convert_or_exit(input_file)

    summary = JSONTreeConverter.tree_summary(tree)
    if as_json:
        click.echo(json.dumps(summary, indent=2))
    else:
        for key, value in summary.items():
            click.echo(f"{key}: {value}")


def _convert_or_exit(input_file: Path) -> TreeNode:
    try:
        json_content = _read_input(input_file)
    except (OSError, InvalidInputError) as e:
        click.echo(f"❌ Error: {e}")
        sys.exit(1)

    converter = JSONTreeConverter()
    try:
        result = converter.convert(json_content)
    finally:
        converter.close()

    if not result.success:
        click.echo("❌ Conversion failed:")
        for error in result.errors or []:
            click.echo(f"   • {error}")
        sys.exit(1)
    return result.tree


if __name__ == '__main__':
    main()
