"""Read-only queries over canonical path sets."""

from __future__ import annotations

from collections.abc import Sequence

from .expand import files_on_disk
from .fs import ProjectTree
from .relations import is_under, normalize_separators


def is_covered(canonical: Sequence[str], path: str) -> bool:
    """Return whether ``path`` is an entry of ``canonical`` or lies under one."""
    target = normalize_separators(path)
    return any(entry == target or is_under(target, entry) for entry in canonical)


def resolve_files(canonical: Sequence[str], tree: ProjectTree) -> list[str]:
    """Return every file ``canonical`` currently stands for, without duplicates."""
    resolved: dict[str, None] = {}
    for entry in canonical:
        if tree.is_dir(entry):
            resolved.update(dict.fromkeys(files_on_disk(entry, tree)))
        else:
            resolved[entry] = None
    return list(resolved)


__all__ = ["is_covered", "resolve_files"]
