"""Command-line front door for pathbundle.

Reads a canonical path set (one path per line), applies one operation
against a project root, and prints the resulting set to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import LOG_LEVELS, load_log_level, load_show_hidden, save_log_level, save_show_hidden
from .path_set import (
    ProjectTree,
    add_paths,
    is_covered,
    local_project_tree,
    normalize_paths,
    relative_to_root,
    remove_paths,
    resolve_files,
)


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr at the verbose or persisted level."""
    level = logging.DEBUG if verbose else getattr(logging, load_log_level(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def read_path_list(source: str | None) -> list[str]:
    """Read one path per line from ``source`` (``-`` is stdin, ``None`` is empty).

    Blank lines are skipped.
    """
    if source is None:
        return []
    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            raise SystemExit(f"Cannot read path list {source}: {exc}") from exc
    return [line.strip() for line in text.splitlines() if line.strip()]


_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _parse_bool(value: str) -> bool:
    """Parse a yes/no style command-line value."""
    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise SystemExit(f"Expected true or false, got {value!r}")


def set_preference(key: str, value: str) -> None:
    """Persist one user preference from its command-line spelling."""
    if key == "log_level":
        if value.strip().upper() not in LOG_LEVELS:
            raise SystemExit(f"Unknown log level {value!r}; expected one of {', '.join(LOG_LEVELS)}")
        save_log_level(value)
        return
    if key == "show_hidden":
        save_show_hidden(_parse_bool(value))
        return
    raise SystemExit(f"Unknown config key: {key}")


def _write_paths(paths: list[str]) -> None:
    sys.stdout.write("".join(f"{path}\n" for path in paths))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathbundle",
        description="Maintain a compressed bundle of project paths.",
    )
    parser.add_argument("--root", default=None, help="Project root. Defaults to current directory.")
    parser.add_argument(
        "--current",
        metavar="FILE",
        default=None,
        help="Current bundle, one path per line ('-' for stdin). Defaults to empty.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("normalize", help="Print the canonical form of the current bundle.")
    add_parser = commands.add_parser("add", help="Add paths to the bundle.")
    add_parser.add_argument("paths", nargs="+")
    remove_parser = commands.add_parser("remove", help="Remove paths from the bundle.")
    remove_parser.add_argument("paths", nargs="+")
    commands.add_parser("files", help="Print every file the bundle stands for.")
    contains_parser = commands.add_parser("contains", help="Exit 0 when PATH is covered by the bundle.")
    contains_parser.add_argument("path")
    config_parser = commands.add_parser("config", help="Save a user preference.")
    config_parser.add_argument("key", choices=("log_level", "show_hidden"))
    config_parser.add_argument("value")
    return parser


def run_command(args: argparse.Namespace, tree: ProjectTree) -> list[str] | bool:
    """Apply the parsed command to the bundle read from ``args.current``."""
    current = [relative_to_root(tree.root, path) for path in read_path_list(args.current)]
    if args.command == "normalize":
        return normalize_paths(current, tree)
    if args.command == "add":
        return add_paths(current, [relative_to_root(tree.root, path) for path in args.paths], tree)
    if args.command == "remove":
        return remove_paths(current, [relative_to_root(tree.root, path) for path in args.paths], tree)
    if args.command == "files":
        return resolve_files(normalize_paths(current, tree), tree)
    if args.command == "contains":
        return is_covered(current, relative_to_root(tree.root, args.path))
    raise SystemExit(f"Unknown command: {args.command}")


def main(default_root: Path | None = None) -> None:
    """Parse CLI arguments and run one bundle operation.

    ``default_root`` is primarily for tests; when omitted the current working
    directory is the project root.
    """
    args = _build_parser().parse_args()
    _configure_logging(args.verbose)

    if args.command == "config":
        set_preference(args.key, args.value)
        return

    if default_root is None:
        default_root = Path.cwd()
    root = Path(args.root or default_root)
    if not root.is_dir():
        raise SystemExit(f"Root directory not found: {root}")

    # mutations must see hidden entries or ejecting a directory would drop them
    show_hidden = load_show_hidden() if args.command == "files" else True
    tree = local_project_tree(root, show_hidden=show_hidden)
    result = run_command(args, tree)
    if isinstance(result, bool):
        raise SystemExit(0 if result else 1)
    _write_paths(result)


if __name__ == "__main__":
    main()
