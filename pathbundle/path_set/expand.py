"""Directory expansion and the fully-present check used for re-compression.

Expansion walks a directory with an explicit work stack, so tree depth is
bounded only by memory. A directory that cannot be listed contributes no
children; the failure is logged and the walk continues. Symlinked
directories are followed unless they lead back to one of their own
ancestors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .fs import ProjectTree

logger = logging.getLogger("pathbundle.expand")


@dataclass(frozen=True)
class ExpandedEntry:
    """One descendant of an expanded directory."""

    path: str
    is_dir: bool


@dataclass(frozen=True)
class ExpandedListing:
    """Recursive enumeration of everything currently under ``directory``."""

    directory: str
    entries: tuple[ExpandedEntry, ...] = ()

    @property
    def files(self) -> tuple[str, ...]:
        """File paths in listing order."""
        return tuple(entry.path for entry in self.entries if not entry.is_dir)

    @property
    def directories(self) -> tuple[str, ...]:
        """Subdirectory paths in listing order."""
        return tuple(entry.path for entry in self.entries if entry.is_dir)


def expand_directory(directory: str, tree: ProjectTree) -> ExpandedListing:
    """Enumerate every descendant file and subdirectory of ``directory``.

    Children of each listed directory appear together, ordered as the
    filesystem capability returns them; subdirectories are then visited
    depth-first.
    """
    entries: list[ExpandedEntry] = []
    pending: list[tuple[str, frozenset[Path]]] = [(directory, frozenset())]
    while pending:
        current, ancestors = pending.pop()
        real_path = tree.real_path(current)
        if real_path in ancestors:
            logger.debug("Not following symlink cycle at %s", current)
            continue
        ancestors = ancestors | {real_path}
        children, scan_error = tree.children(current)
        if scan_error is not None:
            logger.warning("Error while exploring directory %s: %s", current, scan_error)
            continue
        subdirectories: list[str] = []
        for child_path, child_is_dir in children:
            entries.append(ExpandedEntry(path=child_path, is_dir=child_is_dir))
            if child_is_dir:
                subdirectories.append(child_path)
        pending.extend((subdirectory, ancestors) for subdirectory in reversed(subdirectories))
    return ExpandedListing(directory=directory, entries=tuple(entries))


def files_on_disk(directory: str, tree: ProjectTree) -> tuple[str, ...]:
    """Return every file currently under ``directory``, recursively."""
    return expand_directory(directory, tree).files


def is_fully_present(directory: str, candidate_files: Iterable[str], tree: ProjectTree) -> bool:
    """Return whether every file on disk under ``directory`` is in ``candidate_files``.

    An empty directory is trivially fully present.
    """
    candidates = candidate_files if isinstance(candidate_files, (set, frozenset)) else set(candidate_files)
    return all(path in candidates for path in files_on_disk(directory, tree))


__all__ = [
    "ExpandedEntry",
    "ExpandedListing",
    "expand_directory",
    "files_on_disk",
    "is_fully_present",
]
