"""Public package surface for pathbundle.

Exports the add/remove operations over canonical path sets and ``main`` for
programmatic CLI invocation.
"""

from __future__ import annotations

from .path_set import ProjectTree, add_paths, local_project_tree, normalize_paths, remove_paths


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["ProjectTree", "add_paths", "local_project_tree", "main", "normalize_paths", "remove_paths"]
