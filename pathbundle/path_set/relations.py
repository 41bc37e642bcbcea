"""Relative-path helpers for canonical path sets.

Paths are ``/``-separated and relative to a project root. ``""`` denotes the
root itself.
"""

from __future__ import annotations

import posixpath
from pathlib import Path


def normalize_separators(raw_path: str) -> str:
    """Return ``raw_path`` with ``/`` separators and redundant parts collapsed.

    Backslashes become ``/``, ``.`` segments and repeated or trailing
    separators are dropped. ``"."`` and ``""`` both map to ``""``.
    """
    text = str(raw_path).strip().replace("\\", "/")
    if not text:
        return ""
    normalized = posixpath.normpath(text)
    if normalized == ".":
        return ""
    # normpath keeps a leading "//" on POSIX
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def is_under(child: str, parent: str) -> bool:
    """Return whether ``child`` is a strict descendant of ``parent``.

    Comparison is per path component, so ``foobar`` is not under ``foo``.
    """
    if child == parent:
        return False
    if parent == "":
        return bool(child) and not child.startswith(("/", "../")) and child != ".."
    return child.startswith(parent.rstrip("/") + "/")


def join_relative(parent: str, name: str) -> str:
    """Join a child ``name`` onto a relative ``parent`` path."""
    if not parent:
        return name
    return f"{parent}/{name}"


def absolute_path(root: Path, relative: str) -> Path:
    """Resolve a relative set entry against ``root`` without touching disk."""
    if not relative:
        return root
    if relative.startswith("/"):
        return Path(relative)
    return root.joinpath(*relative.split("/"))


def relative_to_root(root: Path, raw_path: str | Path) -> str:
    """Express ``raw_path`` relative to ``root`` when it is absolute and inside it.

    Relative input and absolute paths outside ``root`` are only
    separator-normalized.
    """
    candidate = Path(raw_path)
    if candidate.is_absolute():
        try:
            return normalize_separators(candidate.relative_to(root).as_posix())
        except ValueError:
            return normalize_separators(str(raw_path))
    return normalize_separators(str(raw_path))


__all__ = [
    "normalize_separators",
    "is_under",
    "join_relative",
    "absolute_path",
    "relative_to_root",
]
