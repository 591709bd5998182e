"""Tests for the filesystem content source."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from blogctl.infrastructure.filesystem import (
    file_node,
    find_source_files,
    read_text_file,
    source_file_nodes,
    write_text_file,
)


class TestFindSourceFiles:
    def test_finds_nested_files_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "two.md").write_text("x")
        (tmp_path / "a.txt").write_text("x")
        found = find_source_files(tmp_path)
        assert [p.relative_to(tmp_path).as_posix() for p in found] == ["a.txt", "b/two.md"]

    def test_skips_hidden_and_tool_dirs(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "HEAD").write_text("x")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "x.js").write_text("x")
        (tmp_path / ".DS_Store").write_text("x")
        (tmp_path / "keep.md").write_text("x")
        assert find_source_files(tmp_path) == [tmp_path / "keep.md"]

    def test_ignore_patterns(self, tmp_path: Path) -> None:
        (tmp_path / "drafts").mkdir()
        (tmp_path / "drafts" / "wip.md").write_text("x")
        (tmp_path / "post.md").write_text("x")
        (tmp_path / "notes.tmp").write_text("x")
        found = find_source_files(tmp_path, ignore=["drafts/*", "*.tmp"])
        assert found == [tmp_path / "post.md"]

    def test_missing_dir_is_empty(self, tmp_path: Path) -> None:
        assert find_source_files(tmp_path / "nope") == []


class TestFileNode:
    def test_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "posts" / "hello.md"
        path.parent.mkdir()
        path.write_bytes(b"x" * 1337)
        node = file_node(path, tmp_path, "src")
        assert node.relative_path == "posts/hello.md"
        assert node.name == "hello"
        assert node.extension == "md"
        assert node.size == 1337
        assert node.pretty_size == "1.34 kB"
        assert node.source_instance_name == "src"
        assert isinstance(node.birth_time, datetime)
        assert node.birth_time.tzinfo is not None

    def test_no_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "LICENSE"
        path.write_text("x")
        assert file_node(path, tmp_path, "src").extension == ""

    def test_ids_are_stable(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_text("x")
        assert file_node(path, tmp_path, "src").id == file_node(path, tmp_path, "src").id

    def test_source_file_nodes_order(self, site_root: Path) -> None:
        nodes = source_file_nodes(site_root / "src", "src")
        assert [n.relative_path for n in nodes] == [
            "posts/first-post.md",
            "posts/second-post.md",
            "profile.jpg",
        ]


class TestReadWrite:
    def test_write_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "index.html"
        write_text_file(target, "<p>é</p>")
        assert read_text_file(target) == "<p>é</p>"

    def test_read_drops_byte_order_mark(self, tmp_path: Path) -> None:
        post = tmp_path / "windows.md"
        post.write_bytes("---\ntitle: Saved on Windows\n---\n".encode("utf-8-sig"))
        assert read_text_file(post).startswith("---\n")
