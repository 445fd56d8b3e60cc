"""Tests for tree operations."""

import pytest
from json_tree_archiver.tree_builder import build_tree
from json_tree_archiver.models import DirectoryNode, FileNode
from json_tree_archiver.types import NodeKind
from json_tree_archiver.tree_ops import (
    count_directories,
    count_files,
    directory_paths,
    file_map,
    file_paths,
    find_by_path,
    flatten,
    is_valid_tree,
    sort_tree,
    to_mapping,
    tree_depth,
    tree_from_file_map,
    tree_from_paths,
    tree_stats,
)


class TestFlatten:
    """Test cases for flatten and the path listings."""

    def test_directories_precede_descendants(self, sample_tree):
        entries = flatten(sample_tree)
        paths = [entry.path for entry in entries]

        assert paths[:3] == ["metadata", "metadata/version.json", "metadata/created.json"]
        for entry in entries:
            if "/" in entry.path:
                parent = entry.path.rsplit("/", 1)[0]
                assert paths.index(parent) < paths.index(entry.path)

    def test_entry_details(self, sample_tree):
        entries = {entry.path: entry for entry in flatten(sample_tree)}

        values = entries["data/item_0/values"]
        assert values.type == NodeKind.DIRECTORY
        assert values.child_count == 3
        assert values.content is None

        version = entries["metadata/version.json"]
        assert version.type == NodeKind.FILE
        assert version.content == '"1.0"'
        assert version.to_dict()["type"] == "file"

    def test_root_not_listed(self, sample_tree):
        assert "" not in [entry.path for entry in flatten(sample_tree)]

    def test_file_and_directory_paths(self, sample_tree):
        files = file_paths(sample_tree)
        directories = directory_paths(sample_tree)

        assert len(files) == count_files(sample_tree)
        assert len(directories) == count_directories(sample_tree)
        assert "empty" in directories
        assert "config/settings/retries.json" in files
        assert not set(files) & set(directories)

    def test_file_map_order(self):
        tree = build_tree({"b": 1, "a": [True]})

        assert list(file_map(tree).items()) == [("b.json", "1"), ("a/item_0.txt", "true")]

    def test_flatten_rejects_non_nodes(self):
        with pytest.raises(TypeError):
            flatten({"a": "b"})


class TestFindByPath:
    """Test cases for find_by_path."""

    def test_find_file_and_directory(self, sample_tree):
        settings = find_by_path(sample_tree, "config/settings")
        assert isinstance(settings, DirectoryNode)

        timeout = find_by_path(sample_tree, "config/settings/timeout.json")
        assert isinstance(timeout, FileNode)
        assert timeout.content == "30"

    def test_extra_slashes_ignored(self, sample_tree):
        node = find_by_path(sample_tree, "/config//enabled.json/")
        assert node.content == "true"

    @pytest.mark.parametrize("path", [
        "",
        "/",
        "missing",
        "config/missing.json",
        "config/enabled.json/deeper",
    ])
    def test_missing_paths(self, sample_tree, path):
        assert find_by_path(sample_tree, path) is None

    def test_file_root(self):
        tree = build_tree("hello")

        assert find_by_path(tree, "data.json") is tree
        assert find_by_path(tree, "other.json") is None


class TestCounts:
    """Test cases for depth, counts and stats."""

    def test_stats(self, sample_tree):
        stats = tree_stats(sample_tree)

        assert stats.files == 13
        assert stats.directories == 9
        assert stats.depth == 3
        assert stats.total_nodes == 22
        assert stats.to_dict() == {
            "files": 13,
            "directories": 9,
            "depth": 3,
            "totalNodes": 22,
        }

    def test_flat_tree(self):
        tree = build_tree({"a": 1, "b": 2})

        assert tree_depth(tree) == 0
        assert count_directories(tree) == 0
        assert count_files(tree) == 2

    def test_empty_directories_count_for_depth(self):
        tree = build_tree({"a": {"b": {}}})

        assert tree_depth(tree) == 2
        assert count_files(tree) == 0

    def test_file_root(self):
        stats = tree_stats(build_tree(1))

        assert (stats.files, stats.directories, stats.depth) == (1, 0, 0)


class TestSortTree:
    """Test cases for sort_tree."""

    def test_directories_first_then_names(self):
        tree = build_tree({"b": 1, "z": {"y": 1, "c": {}}, "a": 2, "m": []})
        sorted_tree = sort_tree(tree)

        assert sorted_tree.child_names() == ["m", "z", "a.json", "b.json"]
        assert sorted_tree.get_child("z").child_names() == ["c", "y.json"]

    def test_original_untouched(self):
        tree = build_tree({"b": 1, "a": 2})
        sorted_tree = sort_tree(tree)

        assert tree.child_names() == ["b.json", "a.json"]
        assert sorted_tree is not tree
        assert sorted_tree.get_child("a.json") is not tree.get_child("a.json")

    def test_sorting_keeps_content(self, sample_tree):
        assert file_map(sort_tree(sample_tree)).keys() == file_map(sample_tree).keys()
        assert tree_stats(sort_tree(sample_tree)) == tree_stats(sample_tree)

    def test_idempotent(self, sample_tree):
        once = sort_tree(sample_tree)
        assert sort_tree(once) == once

    def test_file_root(self):
        tree = build_tree("x")
        assert sort_tree(tree) == tree


class TestIsValidTree:
    """Test cases for is_valid_tree."""

    @pytest.mark.parametrize("value,expected", [
        ({}, True),
        ({"a.txt": "x"}, True),
        ({"a": {"b": {"c.txt": "x"}}, "d": "y"}, True),
        ({"a": [1, 2]}, True),
        ([], False),
        ("tree", False),
        (None, False),
        (42, False),
    ])
    def test_mapping_form(self, value, expected):
        assert is_valid_tree(value) is expected

    def test_built_tree_is_valid(self, sample_tree):
        assert is_valid_tree(sample_tree)

    def test_duplicate_names_invalid(self):
        tree = build_tree({"a": 1})
        tree.children.append(FileNode(name="a.json", path="a.json", content="2"))

        assert not is_valid_tree(tree)

    def test_nested_duplicate_names_invalid(self):
        tree = build_tree({"d": {"a": 1}})
        inner = tree.get_child("d")
        inner.children.append(DirectoryNode(name="a.json", path="d/a.json"))

        assert not is_valid_tree(tree)


class TestTreeFromPaths:
    """Test cases for tree_from_paths and tree_from_file_map."""

    def test_builds_intermediate_directories(self):
        tree = tree_from_paths(["a/b.txt", "a/c/d.txt", "e.txt"])

        assert to_mapping(tree) == {"a": {"b.txt": "", "c": {"d.txt": ""}}, "e.txt": ""}
        assert find_by_path(tree, "a/c/d.txt").path == "a/c/d.txt"

    def test_default_content(self):
        tree = tree_from_paths(["x.txt"], default_content="hi")
        assert find_by_path(tree, "x.txt").content == "hi"

    def test_skips_invalid_entries(self):
        tree = tree_from_paths(["", None, 5, "ok.txt", "///"])
        assert to_mapping(tree) == {"ok.txt": ""}

    def test_later_paths_win(self):
        assert to_mapping(tree_from_paths(["a", "a/b"])) == {"a": {"b": ""}}
        assert to_mapping(tree_from_paths(["a/b", "a"])) == {"a": ""}

    def test_file_paths_round_trip(self, sample_mixed_json):
        tree = build_tree({"a:b": 1, "a/b": 2, **sample_mixed_json})
        paths = file_paths(tree)

        assert len(paths) == len(set(paths))
        assert set(file_paths(tree_from_paths(paths))) == set(paths)

    def test_file_map_round_trip(self, sample_dict_json):
        tree = build_tree(sample_dict_json)
        rebuilt = tree_from_file_map(file_map(tree))

        assert to_mapping(rebuilt) == to_mapping(tree)
        assert file_paths(rebuilt) == file_paths(tree)


class TestToMapping:
    """Test cases for to_mapping."""

    def test_directory_tree(self):
        tree = build_tree({"a": {"b": 1}, "c": "x"})
        assert to_mapping(tree) == {"a": {"b.json": "1"}, "c.json": '"x"'}

    def test_file_root(self):
        assert to_mapping(build_tree(True)) == {"data.json": "true"}
