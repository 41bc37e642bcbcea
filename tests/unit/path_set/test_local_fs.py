"""Tests for the host-filesystem capability and end-to-end mutation on disk."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from pathbundle.path_set import (
    LocalFileSystem,
    add_paths,
    expand_directory,
    is_covered,
    list_directory_children,
    local_project_tree,
    remove_paths,
)


def _write(root: Path, relative: str) -> None:
    target = root / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"{relative}\n", encoding="utf-8")


def _symlink_dir(test: unittest.TestCase, target: Path, link: Path) -> None:
    try:
        os.symlink(target, link, target_is_directory=True)
    except (OSError, NotImplementedError):
        test.skipTest("directory symlinks are not available")


class ListDirectoryChildrenTests(unittest.TestCase):
    def test_children_are_sorted_directories_first(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _write(root, "b.txt")
            _write(root, "A.txt")
            (root / "zdir").mkdir()

            children, scan_error = list_directory_children(root)

            self.assertIsNone(scan_error)
            self.assertEqual([child.name for child in children], ["zdir", "A.txt", "b.txt"])
            self.assertTrue(children[0].is_dir)
            self.assertFalse(children[1].is_dir)

    def test_hidden_entries_can_be_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _write(root, ".env")
            _write(root, "visible.txt")

            shown, _ = list_directory_children(root, show_hidden=True)
            hidden, _ = list_directory_children(root, show_hidden=False)

            self.assertEqual({child.name for child in shown}, {".env", "visible.txt"})
            self.assertEqual({child.name for child in hidden}, {"visible.txt"})

    def test_missing_directory_reports_scan_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            children, scan_error = list_directory_children(Path(tmp) / "missing")

            self.assertEqual(children, [])
            self.assertIsInstance(scan_error, OSError)

    def test_is_dir_is_false_for_files_and_missing_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _write(root, "file.txt")
            fs = LocalFileSystem()

            self.assertTrue(fs.is_dir(root))
            self.assertFalse(fs.is_dir(root / "file.txt"))
            self.assertFalse(fs.is_dir(root / "missing"))


class LocalMutationTests(unittest.TestCase):
    def test_removing_nested_file_ejects_directory_on_disk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for relative in ("foo/bar/a.txt", "foo/bar/b.txt", "foo/bar/baz/c.txt"):
                _write(root, relative)
            tree = local_project_tree(root)

            result = remove_paths(["foo/bar"], ["foo/bar/baz/c.txt"], tree)

            self.assertEqual(result, ["foo/bar/a.txt", "foo/bar/b.txt"])

    def test_adding_parent_directory_absorbs_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _write(root, "src/a.py")
            _write(root, "src/b.py")
            tree = local_project_tree(root)

            self.assertEqual(add_paths(["src/a.py", "src/b.py"], ["src"], tree), ["src"])

    def test_removing_file_through_symlinked_directory_ejects_the_link(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for relative in ("foo/a.txt", "other/x.txt", "other/y.txt"):
                _write(root, relative)
            _symlink_dir(self, root / "other", root / "foo" / "link")
            tree = local_project_tree(root)

            result = remove_paths(["foo"], ["foo/link/x.txt"], tree)

            self.assertEqual(result, ["foo/a.txt", "foo/link/y.txt"])
            self.assertFalse(is_covered(result, "foo/link/x.txt"))

    def test_symlink_cycle_is_listed_but_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _write(root, "foo/a.txt")
            _symlink_dir(self, root / "foo", root / "foo" / "loop")
            tree = local_project_tree(root)

            listing = expand_directory("foo", tree)

            self.assertEqual(listing.directories, ("foo/loop",))
            self.assertEqual(listing.files, ("foo/a.txt",))


if __name__ == "__main__":
    unittest.main()
