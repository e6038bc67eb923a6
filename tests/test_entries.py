"""
Tests for the directory tree entries.
"""
import unittest

from modtree.core import (
    Directory,
    EntryKind,
    File,
    PackageDescriptor,
    StructuralError,
)


class TestEntries(unittest.TestCase):
    """Test cases for creating entries."""

    def test_file_init(self):
        """Test that a new file has a name and no parent."""
        file = File("filename")
        self.assertEqual(file.name, "filename")
        self.assertIsNone(file.parent)
        self.assertEqual(file.kind, EntryKind.FILE)

    def test_package_descriptor(self):
        """Test the package descriptor defaults."""
        package = PackageDescriptor()
        self.assertIsInstance(package, File)
        self.assertEqual(package.name, "package.json")
        self.assertEqual(package.main, "index.js")
        self.assertEqual(package.kind, EntryKind.PACKAGE_DESCRIPTOR)
        self.assertEqual(PackageDescriptor("main.js").main, "main.js")

    def test_directory_init(self):
        """Test that a new directory is empty."""
        directory = Directory("dirname")
        self.assertEqual(directory.name, "dirname")
        self.assertEqual(dict(directory.entries), {})
        self.assertEqual(directory.kind, EntryKind.DIRECTORY)

    def test_capability_queries(self):
        """Test as_directory and as_file for each variant."""
        directory = Directory("dir")
        file = File("file.js")
        package = PackageDescriptor()
        self.assertIs(directory.as_directory(), directory)
        self.assertIsNone(directory.as_file())
        self.assertIs(file.as_file(), file)
        self.assertIsNone(file.as_directory())
        self.assertIs(package.as_file(), package)

    def test_identity_equality(self):
        """Test that same-named entries are still different entries."""
        self.assertNotEqual(File("index.js"), File("index.js"))
        file = File("index.js")
        self.assertEqual(file, file)
        self.assertIn(file, {file})


class TestDirectory(unittest.TestCase):
    """Test cases for adding and removing directory entries."""

    def test_add_file(self):
        """Test adding a file returns the directory and links the parent."""
        directory = Directory("dir")
        file = File("filename")
        self.assertIs(directory.add(file), directory)
        self.assertIs(file.parent, directory)
        self.assertIn("filename", directory.entries)

    def test_add_directory(self):
        """Test adding a directory to a directory."""
        parent = Directory("parent")
        child = Directory("child")
        parent.add(child)
        self.assertIs(child.parent, parent)
        self.assertTrue(parent.has_directory("child"))

    def test_add_multiple(self):
        """Test adding several entries in one call."""
        directory = Directory("dir")
        directory.add(*[File(name) for name in ("f1", "f2", "f3")])
        self.assertEqual(len(directory.children()), 3)

    def test_nested_levels(self):
        """Test building several levels with chained add calls."""
        parent = Directory("parent")
        child = Directory("child")
        file = File("file")
        parent.add(child.add(file))
        self.assertIs(parent.get("child"), child)
        self.assertIs(child.get("file"), file)
        self.assertEqual(file.path, "parent/child/file")
        self.assertIs(file.root(), parent)

    def test_has_predicates(self):
        """Test has_directory, has_file and has_package_descriptor."""
        directory = Directory("dir")
        self.assertFalse(directory.has_directory("child"))
        self.assertFalse(directory.has_file("index"))
        self.assertFalse(directory.has_package_descriptor())

        directory.add(Directory("child"), File("index.js"), PackageDescriptor())
        self.assertTrue(directory.has_directory("child"))
        self.assertTrue(directory.has_file("index"))
        self.assertTrue(directory.has_package_descriptor())

    def test_has_predicates_check_kind(self):
        """Test that predicates do not confuse files and directories."""
        directory = Directory("dir")
        directory.add(Directory("target.js"), File("lib"), File("package.json"))
        self.assertFalse(directory.has_file("target"))
        self.assertFalse(directory.has_directory("lib"))
        self.assertFalse(directory.has_package_descriptor())

    def test_remove(self):
        """Test removing entries clears the parent and has no side effects."""
        parent = Directory("parent")
        child_dir = Directory("childDir")
        child_file = File("childFile.js")
        parent.add(child_dir, child_file)

        self.assertTrue(parent.remove(child_file.name))
        self.assertFalse(parent.has_file("childFile"))
        self.assertIsNone(child_file.parent)
        self.assertTrue(parent.has_directory("childDir"))

        self.assertTrue(parent.remove(child_dir.name))
        self.assertFalse(parent.has_directory("childDir"))
        self.assertIsNone(child_dir.parent)

    def test_remove_missing_is_noop(self):
        """Test removing an absent name twice does not raise."""
        directory = Directory("dir")
        directory.add(File("a.js"))
        self.assertTrue(directory.remove("a.js"))
        self.assertFalse(directory.remove("a.js"))
        self.assertFalse(directory.remove("never-there"))

    def test_readd_detaches_from_previous_parent(self):
        """Test that moving an entry removes it from its old directory."""
        old = Directory("old")
        new = Directory("new")
        file = File("moved.js")
        old.add(file)
        new.add(file)
        self.assertIs(file.parent, new)
        self.assertNotIn("moved.js", old)
        self.assertIn("moved.js", new)

    def test_overwrite_clears_old_parent(self):
        """Test that replacing a same-named child detaches the old one."""
        directory = Directory("dir")
        first = File("index.js")
        second = File("index.js")
        directory.add(first, second)
        self.assertIs(directory.get("index.js"), second)
        self.assertIsNone(first.parent)
        self.assertIs(second.parent, directory)

    def test_add_cycle_rejected(self):
        """Test that a directory cannot be added to itself or a descendant."""
        root = Directory("root")
        child = Directory("child")
        root.add(child)
        with self.assertRaises(StructuralError):
            root.add(root)
        with self.assertRaises(StructuralError):
            child.add(root)
        self.assertIsNone(root.parent)

    def test_add_batch_is_all_or_nothing(self):
        """Test that a rejected entry leaves the whole batch unattached."""
        root = Directory("root")
        child = Directory("child")
        root.add(child)
        other = Directory("other")
        first = File("first.js")
        moved = File("moved.js")
        other.add(moved)

        with self.assertRaises(StructuralError):
            child.add(first, moved, root)
        self.assertIsNone(first.parent)
        self.assertIs(moved.parent, other)
        self.assertEqual(child.children(), [])

        with self.assertRaises(TypeError):
            child.add(first, "second.js")
        self.assertIsNone(first.parent)
        self.assertNotIn("first.js", child)

    def test_add_non_entry_rejected(self):
        """Test that only entries can be added."""
        with self.assertRaises(TypeError):
            Directory("dir").add("file.js")

    def test_walk(self):
        """Test depth-first walking of a subtree."""
        root = Directory("root")
        src = Directory("src")
        main = File("main.js")
        readme = File("README.md")
        root.add(src.add(main), readme)
        self.assertEqual(list(root.walk()), [root, src, main, readme])

    def test_find(self):
        """Test path lookups relative to a directory."""
        root = Directory("root")
        src = Directory("src")
        lib = Directory("lib")
        main = File("main.js")
        root.add(src.add(lib.add(main)))
        self.assertIs(root.find("src/lib/main.js"), main)
        self.assertIs(root.find("./src/lib"), lib)
        self.assertIs(lib.find("../.."), root)
        self.assertIs(root.find(""), root)
        self.assertIsNone(root.find("src/missing.js"))
        self.assertIsNone(root.find("src/lib/main.js/extra"))
        self.assertIsNone(root.find(".."))


class TestFileLeaf(unittest.TestCase):
    """Test cases for leaf behaviour."""

    def test_file_add_raises(self):
        """Test that files cannot hold children."""
        with self.assertRaises(StructuralError):
            File("file.js").add(File("other.js"))

    def test_file_remove_raises(self):
        """Test that files cannot remove children."""
        with self.assertRaises(StructuralError):
            File("file.js").remove("other.js")


if __name__ == "__main__":
    unittest.main()
