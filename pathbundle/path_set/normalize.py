"""Collapse a bag of paths into a canonical, non-overlapping path set."""

from __future__ import annotations

from collections.abc import Iterable

from .fs import ProjectTree
from .relations import is_under, normalize_separators


def dedupe_paths(paths: Iterable[str]) -> list[str]:
    """Return separator-normalized ``paths`` without duplicates, first occurrence wins."""
    return list(dict.fromkeys(normalize_separators(path) for path in paths))


def normalize_paths(paths: Iterable[str], tree: ProjectTree) -> list[str]:
    """Return the minimal covering set for ``paths``.

    Entries under a directory that is itself in the list are dropped. Only
    the listed paths are classified; ancestors outside the list are never
    consulted.
    """
    unique = dedupe_paths(paths)
    directories = [path for path in unique if tree.is_dir(path)]
    return [path for path in unique if not any(is_under(path, directory) for directory in directories)]


__all__ = ["dedupe_paths", "normalize_paths"]
