"""Add and remove operations over canonical path sets.

Both operations are pure: they take the current canonical set and return a
new one. Removal only expands directory entries that contain a removal
target, so untouched directory entries stay compressed.

Removal runs in four phases, each a separate function returning a new
collection:

1. ``classify_removal`` splits targets into directories and files and finds
   the directory entries that must be ejected.
2. ``carry_forward`` keeps every entry the removal does not touch.
3. ``surviving_entries`` expands an ejected directory and drops removed paths.
4. ``recompress`` folds intact subdirectories back into single entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .expand import ExpandedListing, expand_directory, is_fully_present
from .fs import ProjectTree
from .normalize import dedupe_paths, normalize_paths
from .relations import is_under

logger = logging.getLogger("pathbundle.mutate")


@dataclass(frozen=True)
class RemovalPlan:
    """Classified removal targets plus the directory entries they affect."""

    targets: frozenset[str]
    directory_targets: tuple[str, ...]
    file_targets: tuple[str, ...]
    affected_directories: tuple[str, ...]

    def removes(self, path: str) -> bool:
        """Return whether ``path`` is a target or lies under a directory target."""
        if path in self.targets:
            return True
        return any(is_under(path, directory) for directory in self.directory_targets)


def add_paths(current: Sequence[str], new_paths: Iterable[str], tree: ProjectTree) -> list[str]:
    """Return the canonical set covering ``current`` plus ``new_paths``."""
    return normalize_paths([*current, *new_paths], tree)


def classify_removal(current: Sequence[str], to_remove: Iterable[str], tree: ProjectTree) -> RemovalPlan:
    """Split targets into directories and files and find the directory entries they touch."""
    targets = dedupe_paths(to_remove)
    directory_targets: list[str] = []
    file_targets: list[str] = []
    for target in targets:
        if tree.is_dir(target):
            directory_targets.append(target)
        else:
            file_targets.append(target)

    affected: list[str] = []
    for entry in current:
        if not any(is_under(target, entry) for target in targets):
            continue
        if tree.is_dir(entry):
            affected.append(entry)

    return RemovalPlan(
        targets=frozenset(targets),
        directory_targets=tuple(directory_targets),
        file_targets=tuple(file_targets),
        affected_directories=tuple(affected),
    )


def carry_forward(current: Sequence[str], plan: RemovalPlan) -> tuple[str, ...]:
    """Return entries that are neither removed nor ejected."""
    affected = set(plan.affected_directories)
    return tuple(entry for entry in current if entry not in affected and not plan.removes(entry))


def surviving_entries(listing: ExpandedListing, plan: RemovalPlan) -> ExpandedListing:
    """Return ``listing`` without removed paths and anything under removed directories."""
    return ExpandedListing(
        directory=listing.directory,
        entries=tuple(entry for entry in listing.entries if not plan.removes(entry.path)),
    )


def recompress(surviving: ExpandedListing, plan: RemovalPlan, tree: ProjectTree) -> tuple[str, ...]:
    """Flatten ``surviving`` into set entries, collapsing intact subdirectories.

    A surviving subdirectory collapses when no removal target lies under it
    and every file on disk beneath it is still among the surviving files.
    Subdirectories that do not collapse contribute their surviving files
    individually.
    """
    surviving_files = set(surviving.files)
    compressible: list[str] = []
    for directory in surviving.directories:
        if any(is_under(directory, outer) for outer in compressible):
            continue
        if any(is_under(target, directory) for target in plan.targets):
            continue
        if is_fully_present(directory, surviving_files, tree):
            compressible.append(directory)

    result: list[str] = []
    for entry in surviving.entries:
        if any(is_under(entry.path, directory) for directory in compressible):
            continue
        if entry.is_dir:
            if entry.path in compressible:
                result.append(entry.path)
            continue
        result.append(entry.path)
    return tuple(result)


def remove_paths(current: Sequence[str], to_remove: Iterable[str], tree: ProjectTree) -> list[str]:
    """Return the canonical set for ``current`` with ``to_remove`` taken out.

    Targets that are not covered by ``current`` are ignored.
    """
    entries = dedupe_paths(current)
    plan = classify_removal(entries, to_remove, tree)
    kept = carry_forward(entries, plan)

    expanded: list[str] = []
    for directory in plan.affected_directories:
        listing = expand_directory(directory, tree)
        survivors = surviving_entries(listing, plan)
        recompressed = recompress(survivors, plan, tree)
        logger.debug(
            "Ejected %s: %d descendants, %d surviving entries after recompression",
            directory,
            len(listing.entries),
            len(recompressed),
        )
        expanded.extend(recompressed)

    return normalize_paths([*kept, *expanded], tree)


__all__ = [
    "RemovalPlan",
    "add_paths",
    "classify_removal",
    "carry_forward",
    "surviving_entries",
    "recompress",
    "remove_paths",
]
