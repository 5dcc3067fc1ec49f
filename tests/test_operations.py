"""
Unit tests for the copier and pruner walks and their helpers.
"""
import io
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from foldersync.core.filesystem import LocalFileSystem
from foldersync.errors import SyncIOError
from foldersync.operations import WalkContext, copy_tree, prune_extras
from foldersync.utils.file_utils import extension_of
from foldersync.utils.logging import action
from foldersync.utils.ignore_patterns import is_ignored, normalize_ignore_exts


class TestExtensions(unittest.TestCase):

    def test_extension_of(self):
        self.assertEqual(extension_of("a.txt"), "txt")
        self.assertEqual(extension_of("archive.tar.gz"), "gz")
        self.assertEqual(extension_of("Makefile"), "")
        self.assertEqual(extension_of(".bashrc"), "")
        self.assertEqual(extension_of("trailing."), "")

    def test_normalize_ignore_exts(self):
        self.assertEqual(normalize_ignore_exts(None), frozenset())
        self.assertEqual(normalize_ignore_exts([]), frozenset())
        self.assertEqual(normalize_ignore_exts(["log", ".tmp", "log"]), frozenset({"log", "tmp"}))

    def test_is_ignored(self):
        exts = normalize_ignore_exts(["log"])
        self.assertTrue(is_ignored("debug.log", exts))
        self.assertFalse(is_ignored("debug.log.txt", exts))
        self.assertFalse(is_ignored("log", exts))
        self.assertFalse(is_ignored("debug.LOG", exts))

    def test_action_tags(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            action("COPY", "a → b")
            action("DEL-DIR", "stale", dry_run=True)
        lines = buf.getvalue().splitlines()
        self.assertTrue(lines[0].endswith("  [COPY ✓] a → b"))
        self.assertTrue(lines[1].endswith("  [DEL-DIR-DRY] stale"))


class WalkTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        base = Path(self.tmpdir.name)
        self.src = base / "src"
        self.dst = base / "dst"
        self.src.mkdir()
        self.fs = LocalFileSystem()

    def tearDown(self):
        self.tmpdir.cleanup()

    def ctx(self, ignore=(), **kw):
        return WalkContext(fs=self.fs, ignore_exts=normalize_ignore_exts(ignore), **kw)


class TestCopyTree(WalkTestCase):

    def test_copies_and_counts(self):
        (self.src / "a.txt").write_text("a")
        (self.src / "sub").mkdir()
        (self.src / "sub" / "b.txt").write_text("b")
        ctx = self.ctx()
        self.assertEqual(copy_tree(ctx, self.src, self.dst), 3)
        self.assertEqual(ctx.copied, 3)
        self.assertEqual((self.dst / "sub" / "b.txt").read_text(), "b")

    def test_descriptor_skipped_at_every_level(self):
        (self.src / ".sync").write_text("{}")
        (self.src / "sub").mkdir()
        (self.src / "sub" / ".sync").write_text("{}")
        copy_tree(self.ctx(), self.src, self.dst)
        self.assertFalse((self.dst / ".sync").exists())
        self.assertFalse((self.dst / "sub" / ".sync").exists())

    def test_vanished_source_raises_io_error(self):
        with self.assertRaises(SyncIOError) as cm:
            copy_tree(self.ctx(), self.src / "gone", self.dst)
        self.assertEqual(cm.exception.operation, "list")
        self.assertIn("gone", str(cm.exception))


class TestPruneExtras(WalkTestCase):

    def test_missing_destination_prunes_nothing(self):
        self.assertEqual(prune_extras(self.ctx(), self.src, self.dst), 0)

    def test_recurses_into_kept_directories(self):
        (self.src / "keep").mkdir()
        (self.src / "keep" / "a.txt").write_text("a")
        (self.dst / "keep").mkdir(parents=True)
        (self.dst / "keep" / "a.txt").write_text("a")
        (self.dst / "keep" / "extra.txt").write_text("x")
        (self.dst / "keep" / "extra.log").write_text("x")
        ctx = self.ctx(ignore=["log"])
        self.assertEqual(prune_extras(ctx, self.src, self.dst), 1)
        self.assertEqual(ctx.deleted, 1)
        self.assertEqual(sorted(p.name for p in (self.dst / "keep").iterdir()),
                         ["a.txt", "extra.log"])

    def test_file_shadowed_by_source_directory_is_left_to_copier(self):
        (self.src / "item").mkdir()
        self.dst.mkdir()
        (self.dst / "item").write_text("file")
        self.assertEqual(prune_extras(self.ctx(), self.src, self.dst), 0)
        self.assertTrue((self.dst / "item").is_file())

    @unittest.skipIf(sys.platform == "win32", "symlinks need privileges on Windows")
    def test_extra_link_to_directory_is_unlinked(self):
        other = self.src.parent / "other"
        other.mkdir()
        (other / "keep.txt").write_text("k")
        self.dst.mkdir()
        (self.dst / "link").symlink_to(other, target_is_directory=True)
        self.assertEqual(prune_extras(self.ctx(), self.src, self.dst), 1)
        self.assertFalse((self.dst / "link").is_symlink())
        self.assertEqual((other / "keep.txt").read_text(), "k")


class TestLocalFileSystem(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name)
        self.fs = LocalFileSystem()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_list_dir_is_sorted_and_typed(self):
        (self.root / "b.txt").write_text("b")
        (self.root / "a").mkdir()
        (self.root / "c.txt").write_text("c")
        self.assertEqual(self.fs.list_dir(self.root),
                         [("a", True), ("b.txt", False), ("c.txt", False)])

    @unittest.skipIf(sys.platform == "win32", "symlinks need privileges on Windows")
    def test_list_dir_can_report_links_as_files(self):
        (self.root / "real").mkdir()
        (self.root / "link").symlink_to(self.root / "real", target_is_directory=True)
        self.assertEqual(self.fs.list_dir(self.root),
                         [("link", True), ("real", True)])
        self.assertEqual(self.fs.list_dir(self.root, follow_symlinks=False),
                         [("link", False), ("real", True)])

    @unittest.skipIf(sys.platform == "win32", "symlinks need privileges on Windows")
    def test_remove_tree_unlinks_a_link_without_touching_its_target(self):
        (self.root / "real").mkdir()
        (self.root / "real" / "keep.txt").write_text("k")
        link = self.root / "link"
        link.symlink_to(self.root / "real", target_is_directory=True)
        self.fs.remove_tree(link)
        self.assertFalse(link.is_symlink())
        self.assertTrue((self.root / "real" / "keep.txt").is_file())

    def test_same_content(self):
        a = self.root / "a"
        b = self.root / "b"
        a.write_bytes(b"x" * 70000)
        b.write_bytes(b"x" * 70000)
        self.assertTrue(self.fs.same_content(a, b))
        b.write_bytes(b"x" * 69999 + b"y")
        self.assertFalse(self.fs.same_content(a, b))
        b.write_bytes(b"x")
        self.assertFalse(self.fs.same_content(a, b))

    def test_errors_carry_path(self):
        present = self.root / "present.txt"
        present.write_text("p")
        missing = self.root / "missing.txt"
        with self.assertRaises(SyncIOError) as cm:
            self.fs.same_content(present, missing)
        self.assertEqual(cm.exception.path, missing)
        self.assertEqual(cm.exception.operation, "compare")
        self.assertIsInstance(cm.exception.__cause__, FileNotFoundError)


if __name__ == "__main__":
    unittest.main()
