"""Filesystem capability consumed by the path-set engine.

The engine never touches ``os`` directly. It asks a ``FileSystem`` whether a
path is a directory, what its immediate children are, and where a symlink
leads. Calls go through a ``ProjectTree`` that binds the capability to a
project root and translates relative ``/``-separated set entries into
absolute paths.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Protocol

from .relations import absolute_path, join_relative

logger = logging.getLogger("pathbundle.fs")


@dataclass(frozen=True)
class DirectoryChild:
    """One immediate directory child."""

    name: str
    path: Path
    is_dir: bool


class FileSystem(Protocol):
    def is_dir(self, path: Path) -> bool: ...

    def list_children(self, directory: Path) -> tuple[list[DirectoryChild], Exception | None]: ...

    def resolve(self, path: Path) -> Path: ...


def list_directory_children(
    directory: Path,
    show_hidden: bool = True,
) -> tuple[list[DirectoryChild], Exception | None]:
    """List immediate children of ``directory`` in sorted order.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned, in which case ``children`` is empty.
    Symlinks are classified by their target, matching ``Path.is_dir``.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                children.append(DirectoryChild(name=name, path=Path(child.path), is_dir=is_dir))
    except (PermissionError, OSError) as exc:
        return [], exc

    children.sort(key=lambda item: (not item.is_dir, item.name.lower()))
    return children, None


class LocalFileSystem:
    """``FileSystem`` backed by the host filesystem (read-only)."""

    def __init__(self, show_hidden: bool = True) -> None:
        self.show_hidden = show_hidden

    def is_dir(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError as exc:
            logger.debug("Cannot stat %s: %s", path, exc)
            return False

    def list_children(self, directory: Path) -> tuple[list[DirectoryChild], Exception | None]:
        return list_directory_children(directory, show_hidden=self.show_hidden)

    def resolve(self, path: Path) -> Path:
        try:
            return path.resolve()
        except (OSError, RuntimeError):
            return path


@dataclass
class MemoryFileSystem:
    """In-memory directory tree implementing ``FileSystem``.

    ``directories`` maps each directory to the names of its children;
    ``files`` holds every file path. Directories listed in ``unreadable``
    fail to list with ``PermissionError``.
    """

    root: Path
    directories: dict[Path, set[str]] = field(default_factory=dict)
    files: set[Path] = field(default_factory=set)
    unreadable: set[Path] = field(default_factory=set)

    @classmethod
    def from_paths(cls, root: Path, paths: Iterable[str]) -> "MemoryFileSystem":
        """Build a tree from relative paths; a trailing ``/`` marks an empty directory."""
        fs = cls(root=root)
        fs.directories[root] = set()
        for raw_path in paths:
            is_directory = raw_path.endswith("/")
            parts = PurePosixPath(raw_path.rstrip("/")).parts
            current = root
            for index, part in enumerate(parts):
                fs.directories.setdefault(current, set()).add(part)
                current = current / part
                last = index == len(parts) - 1
                if last and not is_directory:
                    fs.files.add(current)
                else:
                    fs.directories.setdefault(current, set())
        return fs

    def is_dir(self, path: Path) -> bool:
        return path in self.directories

    def list_children(self, directory: Path) -> tuple[list[DirectoryChild], Exception | None]:
        if directory in self.unreadable:
            return [], PermissionError(f"Permission denied: {directory}")
        names = self.directories.get(directory)
        if names is None:
            return [], FileNotFoundError(f"No such directory: {directory}")
        children = [
            DirectoryChild(name=name, path=directory / name, is_dir=(directory / name) in self.directories)
            for name in names
        ]
        children.sort(key=lambda item: (not item.is_dir, item.name.lower()))
        return children, None

    def resolve(self, path: Path) -> Path:
        return path

    def remove(self, relative: str) -> None:
        """Delete a file or directory subtree from the fake tree."""
        target = self.root.joinpath(*relative.split("/"))
        self.files = {path for path in self.files if path != target and not path.is_relative_to(target)}
        self.directories = {
            path: names
            for path, names in self.directories.items()
            if path != target and not path.is_relative_to(target)
        }
        parent_names = self.directories.get(target.parent)
        if parent_names is not None:
            parent_names.discard(target.name)


@dataclass(frozen=True)
class ProjectTree:
    """A ``FileSystem`` viewed through relative paths under ``root``."""

    root: Path
    fs: FileSystem

    def is_dir(self, relative: str) -> bool:
        return self.fs.is_dir(absolute_path(self.root, relative))

    def children(self, relative: str) -> tuple[list[tuple[str, bool]], Exception | None]:
        """Return ``([(child_relative_path, is_dir), ...], scan_error)``."""
        listed, scan_error = self.fs.list_children(absolute_path(self.root, relative))
        return [(join_relative(relative, child.name), child.is_dir) for child in listed], scan_error

    def real_path(self, relative: str) -> Path:
        """Return the symlink-resolved location of ``relative``."""
        return self.fs.resolve(absolute_path(self.root, relative))


def local_project_tree(root: Path, show_hidden: bool = True) -> ProjectTree:
    """Return a ``ProjectTree`` reading the host filesystem under ``root``."""
    return ProjectTree(root=root.resolve(), fs=LocalFileSystem(show_hidden=show_hidden))


__all__ = [
    "DirectoryChild",
    "FileSystem",
    "list_directory_children",
    "LocalFileSystem",
    "MemoryFileSystem",
    "ProjectTree",
    "local_project_tree",
]
