"""Zip reader tests against archives written into a temp directory."""

from __future__ import annotations

import tempfile
import unittest
import zipfile
from pathlib import Path

from zipview import archive
from zipview.errors import ArchiveNotFound, ArchiveReadError, EntryNotFound


class ArchiveReaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.zip_path = self.root / "sample.zip"
        with zipfile.ZipFile(self.zip_path, "w") as zf:
            zf.writestr("docs/", "")
            zf.writestr(zipfile.ZipInfo("docs/readme.txt", date_time=(2024, 5, 6, 7, 8, 10)), "hello zip")
            zf.writestr("data.json", '{"a": [1, 2]}', compress_type=zipfile.ZIP_DEFLATED)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_list_entry_names_keeps_directory_order(self) -> None:
        self.assertEqual(archive.list_entry_names(self.zip_path), ["docs/", "docs/readme.txt", "data.json"])

    def test_metadata_fields(self) -> None:
        metas = {meta.name: meta for meta in archive.read_entry_metadata(self.zip_path)}
        self.assertTrue(metas["docs/"].is_directory)
        readme = metas["docs/readme.txt"]
        self.assertFalse(readme.is_directory)
        self.assertEqual(readme.method, "store")
        self.assertEqual(readme.uncompressed_size, len("hello zip"))
        self.assertEqual(readme.crc32, f"{zipfile.crc32(b'hello zip') & 0xFFFFFFFF:08x}")
        self.assertEqual(readme.last_modified, "2024-05-06T07:08:10")
        self.assertEqual(metas["data.json"].method, "deflate")
        self.assertEqual(len(readme.crc32), 8)

    def test_to_dict_exposes_all_fields(self) -> None:
        meta = archive.read_entry_metadata(self.zip_path)[1]
        self.assertEqual(
            set(meta.to_dict()),
            {"name", "compressed_size", "uncompressed_size", "method", "crc32", "is_directory", "last_modified"},
        )

    def test_read_entry_text(self) -> None:
        self.assertEqual(archive.read_entry_text(self.zip_path, "docs/readme.txt"), "hello zip")
        with self.assertRaises(EntryNotFound):
            archive.read_entry_text(self.zip_path, "missing.txt")

    def test_missing_and_corrupt_archives(self) -> None:
        with self.assertRaises(ArchiveNotFound):
            archive.list_entry_names(self.root / "nope.zip")
        bogus = self.root / "bogus.zip"
        bogus.write_bytes(b"not a zip at all")
        with self.assertRaises(ArchiveReadError):
            archive.read_entry_metadata(bogus)

    def test_extract_entry_and_directory(self) -> None:
        dest = archive.extract_entry(self.zip_path, "docs/readme.txt", self.root / "out" / "readme.txt")
        self.assertEqual(dest.read_text(encoding="utf-8"), "hello zip")
        made = archive.extract_entry(self.zip_path, "docs/", self.root / "out" / "docs")
        self.assertTrue(made.is_dir())

    def test_extract_to_temp_and_cleanup(self) -> None:
        scratch, file_path = archive.extract_to_temp(self.zip_path, "data.json", "zipview-test")
        try:
            self.assertEqual(file_path.name, "data.json")
            self.assertEqual(file_path.parent, scratch)
            self.assertTrue(scratch.name.startswith("zipview-test-"))
        finally:
            archive.cleanup_temp(scratch)
        self.assertFalse(scratch.exists())
        archive.cleanup_temp(scratch)

    def test_extract_to_temp_removes_scratch_on_failure(self) -> None:
        with self.assertRaises(EntryNotFound):
            archive.extract_to_temp(self.zip_path, "missing.json", "zipview-test")


if __name__ == "__main__":
    unittest.main()
