import unittest
import os
import shutil
import tempfile
from pathlib import Path

from mdclip.config import CopyConfig
from mdclip.core.directory_walker import DirectoryWalker
from mdclip.core.host import LocalHost
from mdclip.core.models import Entry, EntryKind

from fakes import FakeHost, PNG_BYTES


class TestDirectoryWalkerInMemory(unittest.TestCase):
    def walk(self, host, recursive, config=None, root=None):
        walker = DirectoryWalker(host, config or CopyConfig())
        return walker, walker.walk(root or host.root, recursive)

    def test_flat_walk_scenario(self):
        host = FakeHost({"a.txt": "hello", "b.png": PNG_BYTES, "c": {}})
        _, entries = self.walk(host, recursive=False)
        self.assertEqual(entries, [
            Entry.directory(host.root, is_empty=False),
            Entry.text(host.path("a.txt"), "hello"),
            Entry.binary(host.path("b.png")),
            Entry.directory(host.path("c"), is_empty=True),
        ])

    def test_binary_by_content_for_unknown_extension(self):
        host = FakeHost({"blob.unknownext": PNG_BYTES})
        _, entries = self.walk(host, recursive=False)
        self.assertTrue(entries[1].is_binary)
        self.assertIsNone(entries[1].content)

    def test_recursive_walk_is_depth_first_in_listing_order(self):
        host = FakeHost({
            "src": {"main.py": "print(1)\n", "lib": {"util.py": "x = 1\n"}},
            "z.txt": "z",
        })
        _, entries = self.walk(host, recursive=True)
        self.assertEqual([e.path for e in entries], [
            host.root,
            host.path("src"),
            host.path("src", "main.py"),
            host.path("src", "lib"),
            host.path("src", "lib", "util.py"),
            host.path("z.txt"),
        ])

    def test_non_recursive_does_not_descend(self):
        host = FakeHost({"src": {"main.py": "print(1)\n"}, "top.md": "# hi"})
        _, entries = self.walk(host, recursive=False)
        self.assertEqual([e.path for e in entries], [host.root, host.path("src"), host.path("top.md")])
        self.assertEqual(entries[1].kind, EntryKind.DIRECTORY)
        self.assertFalse(entries[1].is_empty)

    def test_empty_root(self):
        host = FakeHost({})
        _, entries = self.walk(host, recursive=True)
        self.assertEqual(entries, [Entry.directory(host.root, is_empty=True)])

    def test_excluded_directories_are_skipped(self):
        tree = {
            ".git": {"HEAD": "ref: refs/heads/main"},
            "node_modules": {"pkg": {"index.js": "x"}},
            "out": {},
            "src": {"node_modules": {"y.js": "y"}, "a.js": "a"},
        }
        for recursive in (False, True):
            with self.subTest(recursive=recursive):
                host = FakeHost(tree)
                _, entries = self.walk(host, recursive=recursive)
                for e in entries:
                    parts = e.path.split(os.sep)
                    self.assertNotIn(".git", parts)
                    self.assertNotIn("node_modules", parts)
                    self.assertNotIn("out", parts)
                self.assertIn(host.path("src"), [e.path for e in entries])

    def test_custom_excluded_directories(self):
        host = FakeHost({"vendor": {"x.go": "package x"}, "out": {"keep.txt": "k"}})
        cfg = CopyConfig.from_mapping({"excludeDirectories": ["vendor"]})
        _, entries = self.walk(host, recursive=True, config=cfg)
        paths = [e.path for e in entries]
        self.assertNotIn(host.path("vendor"), paths)
        self.assertIn(host.path("out", "keep.txt"), paths)

    def test_unreadable_text_file_is_skipped(self):
        host = FakeHost({"secret.txt": "s", "ok.txt": "ok"})
        host.unreadable.add(host.path("secret.txt"))
        _, entries = self.walk(host, recursive=False)
        self.assertEqual([e.path for e in entries], [host.root, host.path("ok.txt")])

    def test_unreadable_unknown_file_is_binary(self):
        host = FakeHost({"data.unknownext": "hello"})
        host.unreadable.add(host.path("data.unknownext"))
        _, entries = self.walk(host, recursive=False)
        self.assertEqual(entries[1], Entry.binary(host.path("data.unknownext")))

    def test_root_listing_failure(self):
        host = FakeHost({"a.txt": "a"})
        host.unlistable.add(host.root)
        walker, entries = self.walk(host, recursive=True)
        self.assertEqual(entries, [])
        self.assertIn("Permission denied", walker.last_error)

    def test_missing_root(self):
        host = FakeHost({})
        walker, entries = self.walk(host, recursive=False, root=host.path("nope"))
        self.assertEqual(entries, [])
        self.assertIsNotNone(walker.last_error)

    def test_unlistable_subdirectory(self):
        host = FakeHost({"locked": {"x.txt": "x"}, "a.txt": "a"})
        host.unlistable.add(host.path("locked"))

        _, entries = self.walk(host, recursive=True)
        self.assertEqual([e.path for e in entries], [host.root, host.path("a.txt")])

        _, entries = self.walk(host, recursive=False)
        self.assertIn(Entry.directory(host.path("locked"), is_empty=False), entries)

    def test_special_entries_are_skipped(self):
        host = FakeHost({"sock": "", "a.txt": "a"})
        host.other.add(host.path("sock"))
        _, entries = self.walk(host, recursive=False)
        self.assertEqual([e.path for e in entries], [host.root, host.path("a.txt")])


class TestDirectoryWalkerOnDisk(unittest.TestCase):
    def setUp(self):
        self.base = Path(tempfile.mkdtemp(prefix="mdclip_walk_"))
        (self.base / "src").mkdir()
        (self.base / "src" / "keep.py").write_text("print('ok')\n", encoding="utf-8")
        (self.base / "src" / "skip.log").write_text("log\n", encoding="utf-8")
        (self.base / "top.log").write_text("log\n", encoding="utf-8")
        (self.base / "README.md").write_text("# readme\n", encoding="utf-8")
        (self.base / ".gitignore").write_text("*.log\n", encoding="utf-8")
        self.host = LocalHost([str(self.base)])

    def tearDown(self):
        if self.base.exists():
            shutil.rmtree(self.base)

    def rel_paths(self, entries):
        return {os.path.relpath(e.path, self.base).replace("\\", "/") for e in entries}

    def test_gitignore_omits_matching_files(self):
        for recursive in (False, True):
            with self.subTest(recursive=recursive):
                entries = DirectoryWalker(self.host, CopyConfig()).walk(str(self.base), recursive)
                rels = self.rel_paths(entries)
                self.assertNotIn("top.log", rels)
                self.assertNotIn("src/skip.log", rels)
                self.assertIn("README.md", rels)
                self.assertIn(".gitignore", rels)
        self.assertIn("src/keep.py", rels)

    def test_gitignore_can_be_disabled(self):
        cfg = CopyConfig(use_gitignore=False)
        entries = DirectoryWalker(self.host, cfg).walk(str(self.base), True)
        rels = self.rel_paths(entries)
        self.assertIn("top.log", rels)
        self.assertIn("src/skip.log", rels)

    def test_local_listing_is_sorted_case_insensitively(self):
        (self.base / "b.txt").write_text("b", encoding="utf-8")
        (self.base / "A.txt").write_text("a", encoding="utf-8")
        entries = DirectoryWalker(self.host, CopyConfig()).walk(str(self.base), False)
        names = [os.path.basename(e.path) for e in entries[1:]]
        self.assertEqual(names, sorted(names, key=str.lower))


if __name__ == "__main__":
    unittest.main()
