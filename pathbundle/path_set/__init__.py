"""Path-set compression engine for bundles of project paths.

A canonical path set is an ordered list of distinct ``/``-separated paths,
relative to a project root, where no entry lies under another. A directory
entry stands for everything currently beneath it on disk.

This package contains:
- path relation helpers (``is_under`` and separator normalization)
- the injected filesystem capability and its local/in-memory implementations
- the normalizer that restores the canonical form
- directory expansion and the fully-present check
- the add/remove mutators and read-only queries
"""

from __future__ import annotations

from .relations import absolute_path, is_under, join_relative, normalize_separators, relative_to_root
from .fs import (
    DirectoryChild,
    FileSystem,
    LocalFileSystem,
    MemoryFileSystem,
    ProjectTree,
    list_directory_children,
    local_project_tree,
)
from .normalize import dedupe_paths, normalize_paths
from .expand import ExpandedEntry, ExpandedListing, expand_directory, files_on_disk, is_fully_present
from .mutate import (
    RemovalPlan,
    add_paths,
    carry_forward,
    classify_removal,
    recompress,
    remove_paths,
    surviving_entries,
)
from .query import is_covered, resolve_files

__all__ = [
    "absolute_path",
    "is_under",
    "join_relative",
    "normalize_separators",
    "relative_to_root",
    "DirectoryChild",
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "ProjectTree",
    "list_directory_children",
    "local_project_tree",
    "dedupe_paths",
    "normalize_paths",
    "ExpandedEntry",
    "ExpandedListing",
    "expand_directory",
    "files_on_disk",
    "is_fully_present",
    "RemovalPlan",
    "add_paths",
    "carry_forward",
    "classify_removal",
    "recompress",
    "remove_paths",
    "surviving_entries",
    "is_covered",
    "resolve_files",
]
