"""Tests for HTML table \u2192 TSV conversion and extension dispatch."""

from __future__ import annotations

import pytest

from quota_transformer.errors import AdapterError, NoTableFoundError, UnsupportedFormatError
from quota_transformer.html_extractor import html_file_to_tsv, html_table_to_tsv
from quota_transformer.loaders import SUPPORTED_SUFFIXES, load_input_text, read_text_file

HTML = """
<html><body>
<h1>Quota requests</h1>
<table>
  <thead><tr><th>ID</th><th>Subscription ID</th><th>Region</th></tr></thead>
  <tbody>
    <tr><td>Q1</td><td>Sub1</td><td><b>East</b>
        US</td></tr>
    <tr><td>Q2</td><td>Sub2</td><td>West US (WUS)</td></tr>
  </tbody>
</table>
<table><tr><td>second</td></tr></table>
</body></html>
"""


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


class TestHtmlTableToTsv:
    def test_first_table(self):
        assert html_table_to_tsv(HTML).split("\n") == [
            "ID\tSubscription ID\tRegion",
            "Q1\tSub1\tEast US",
            "Q2\tSub2\tWest US (WUS)",
        ]

    def test_no_table(self):
        with pytest.raises(NoTableFoundError, match="No table found in the HTML file."):
            html_table_to_tsv("<p>no data</p>")

    def test_file(self, tmp_path):
        path = tmp_path / "export.html"
        path.write_text(HTML, encoding="utf-8")
        assert html_file_to_tsv(path).startswith("ID\t")

    def test_file_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.html"
        path.write_bytes("<table><tr><td>Regi\u00e3o</td></tr></table>".encode("latin-1"))
        with pytest.raises(AdapterError, match="not UTF-8"):
            html_file_to_tsv(path)


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


class TestLoadInputText:
    def test_csv_verbatim(self, tmp_path):
        path = tmp_path / "export.csv"
        path.write_text("ID,Subscription ID,Region\nQ1,Sub1,East US\n", encoding="utf-8")
        assert load_input_text(path) == "ID,Subscription ID,Region\nQ1,Sub1,East US\n"

    def test_bom_dropped(self, tmp_path):
        path = tmp_path / "export.tsv"
        path.write_bytes("\ufeffID\tRegion\n".encode("utf-8"))
        assert read_text_file(path) == "ID\tRegion\n"

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "export.txt"
        path.write_bytes(b"ID\t\xff\xfe\n")
        with pytest.raises(AdapterError):
            load_input_text(path)

    def test_html_dispatch(self, tmp_path):
        path = tmp_path / "export.HTM"
        path.write_text(HTML, encoding="utf-8")
        assert load_input_text(path).split("\n")[1] == "Q1\tSub1\tEast US"

    @pytest.mark.parametrize("name", ["export.pdf", "export.doc", "export"])
    def test_unsupported(self, tmp_path, name):
        path = tmp_path / name
        path.write_text("x", encoding="utf-8")
        with pytest.raises(UnsupportedFormatError):
            load_input_text(path)

    def test_supported_suffixes(self):
        assert {".csv", ".xlsx", ".xls", ".docx", ".html"} <= SUPPORTED_SUFFIXES
