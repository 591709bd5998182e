"""Filesystem content source.

INVARIANT: Files are truth. Every record the templates see is derived
from the source directory on each build; nothing is cached across runs.

Pure parsing utilities live in :mod:`blogctl.domain.content`. This module
handles file discovery, stat collection, and reads.
"""

from __future__ import annotations

import fnmatch
import os
from datetime import UTC, datetime
from pathlib import Path

from blogctl.domain.content import node_id
from blogctl.domain.formatting import pretty_bytes
from blogctl.domain.records import FileNode

# Directories to skip when discovering source files.
_SKIP_DIRS = frozenset({".git", ".blogctl", "__pycache__", "node_modules"})


def _birth_time(stat: os.stat_result) -> float:
    """Creation time where the platform records one, else inode change time."""
    return getattr(stat, "st_birthtime", None) or stat.st_ctime


def _is_ignored(rel: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(rel, pattern) for pattern in patterns)


def find_source_files(source_dir: Path, *, ignore: list[str] | None = None) -> list[Path]:
    """Discover every file under *source_dir*.

    Skips dot-files, the directories in ``_SKIP_DIRS``, and any path whose
    POSIX relative form matches one of the *ignore* glob patterns.
    """
    if not source_dir.is_dir():
        return []

    patterns = ignore or []
    results: list[Path] = []
    for path in source_dir.rglob("*"):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(source_dir).parts
        if any(part in _SKIP_DIRS or part.startswith(".") for part in rel_parts):
            continue
        if _is_ignored("/".join(rel_parts), patterns):
            continue
        results.append(path)

    return sorted(results)


def file_node(path: Path, source_dir: Path, source_instance_name: str) -> FileNode:
    """Build a :class:`FileNode` from a file on disk."""
    stat = path.stat()
    relative_path = path.relative_to(source_dir).as_posix()
    return FileNode(
        id=node_id(source_instance_name, relative_path),
        source_instance_name=source_instance_name,
        relative_path=relative_path,
        absolute_path=str(path.resolve()),
        name=path.stem,
        extension=path.suffix.lstrip("."),
        size=stat.st_size,
        pretty_size=pretty_bytes(stat.st_size),
        birth_time=datetime.fromtimestamp(_birth_time(stat), tz=UTC),
        modified_time=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
    )


def source_file_nodes(
    source_dir: Path,
    source_instance_name: str,
    *,
    ignore: list[str] | None = None,
) -> list[FileNode]:
    """Return a :class:`FileNode` for every discovered source file, by relative path."""
    return [
        file_node(path, source_dir, source_instance_name)
        for path in find_source_files(source_dir, ignore=ignore)
    ]


def read_text_file(path: Path) -> str:
    """Read UTF-8 text, dropping a byte-order mark left by some editors."""
    return path.read_text(encoding="utf-8-sig")


def write_text_file(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
