"""Result sorting and rendering."""

from __future__ import annotations

import csv
import io
import json
import tempfile
import unittest
from pathlib import Path

import gsearch
from gsearch.core.data_structures import SearchResult
from gsearch.utils.file_utils import format_size
from gsearch.utils.i18n import translator
from gsearch.utils.output import CSV_HEADER, print_results, sort_results
from tests.fsdb_writer import SAMPLE_MTIME, names, write_database


class OutputTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmpdir = tempfile.TemporaryDirectory()
        cls.db = gsearch.load(write_database(Path(cls._tmpdir.name) / "fsearch.db"))

    @classmethod
    def tearDownClass(cls) -> None:
        cls._tmpdir.cleanup()

    def setUp(self) -> None:
        self._old_lang = translator.current_lang
        translator.set_language("en")

    def tearDown(self) -> None:
        translator.set_language(self._old_lang)

    def everything(self) -> SearchResult:
        return SearchResult(files=list(self.db.files), folders=list(self.db.folders))

    def render(self, result: SearchResult, output_format: str) -> str:
        out = io.StringIO()
        print_results(result, output_format, out)
        return out.getvalue()

    def test_sort_by_name(self) -> None:
        result = sort_results(self.everything(), "name")
        self.assertEqual(names(result.files),
                         ["document.pdf", "file.zip", "readme.txt", "test.go", "test.txt"])
        self.assertEqual(names(result.folders), ["", "Documents", "Downloads", "home", "user"])

    def test_sort_by_size_descends_to_name_for_folders(self) -> None:
        result = sort_results(SearchResult(files=list(reversed(self.db.files)),
                                           folders=list(reversed(self.db.folders))), "size")
        self.assertEqual([f.size for f in result.files], [1024, 2048, 4096, 8192, 16384])
        self.assertEqual(names(result.folders), ["", "Documents", "Downloads", "home", "user"])

    def test_sort_by_path_and_mtime(self) -> None:
        by_path = sort_results(self.everything(), "path")
        self.assertEqual([f.full_path() for f in by_path.folders],
                         ["/", "/Documents", "/Downloads", "/home", "/home/user"])
        by_mtime = sort_results(SearchResult(files=list(reversed(self.db.files)), folders=[]), "mtime")
        self.assertEqual(names(by_mtime.files), names(self.db.files))

    def test_sort_does_not_modify_input(self) -> None:
        result = self.everything()
        sort_results(result, "name")
        self.assertEqual(names(result.files), names(self.db.files))

    def test_invalid_sort_field(self) -> None:
        with self.assertRaises(ValueError):
            sort_results(self.everything(), "colour")

    def test_text(self) -> None:
        text = self.render(self.db.search("test"), "text")
        self.assertIn("Found 2 result(s):", text)
        self.assertIn("/home/user/test.txt (1.0 KB)", text)
        self.assertIn("/Documents/test.go (8.0 KB)", text)

    def test_text_lists_folders_first(self) -> None:
        lines = self.render(self.db.search_by_path("/home/*"), "text").splitlines()
        self.assertEqual(lines[2], "[D] /home/user")
        self.assertTrue(lines[3].startswith("[F] /home/user/test.txt"))

    def test_json(self) -> None:
        rows = json.loads(self.render(self.db.search_by_path("/home/*"), "json"))
        self.assertEqual([r["type"] for r in rows], ["folder", "file", "file"])
        self.assertEqual(rows[1]["name"], "test.txt")
        self.assertEqual(rows[1]["path"], "/home/user/test.txt")
        self.assertEqual(rows[1]["size"], 1024)
        self.assertEqual(rows[1]["mtime_unix"], SAMPLE_MTIME + 1)
        self.assertTrue(rows[1]["mtime"])

    def test_csv(self) -> None:
        rows = list(csv.reader(io.StringIO(self.render(self.db.search("do"), "csv"))))
        self.assertEqual(rows[0], CSV_HEADER)
        self.assertEqual([r[0] for r in rows[1:]], ["Documents", "Downloads", "document.pdf"])
        self.assertEqual(rows[1][3], "")
        self.assertEqual(rows[3][1:4], ["/Documents/document.pdf", "file", "4096"])

    def test_empty_results(self) -> None:
        empty = SearchResult(files=[], folders=[])
        self.assertEqual(self.render(empty, "text").strip(), "No results found.")
        self.assertEqual(self.render(empty, "json").strip(), "[]")
        self.assertEqual(self.render(empty, "csv").strip(), ",".join(CSV_HEADER))

    def test_invalid_format(self) -> None:
        with self.assertRaises(ValueError):
            self.render(self.everything(), "xml")


class FormatSizeTests(unittest.TestCase):
    def test_units(self) -> None:
        self.assertEqual(format_size(512), "512 B")
        self.assertEqual(format_size(2048), "2.0 KB")
        self.assertEqual(format_size(5 * 1024 ** 2), "5.0 MB")


if __name__ == "__main__":
    unittest.main()
