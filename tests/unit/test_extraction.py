"""Unit tests for text extraction."""
from pathlib import Path

import pytest

from docrag import extraction
from docrag.chunking import normalize_text
from docrag.extraction import extract_text


def test_plain_text_is_read_verbatim(tmp_path: Path) -> None:
    f = tmp_path / "notes.md"
    body = "# Título\n\nSome  *markdown*\twith ünïcode.\n"
    f.write_text(body, encoding="utf-8")
    assert extract_text(f) == body


def test_html_text_in_document_order_without_scripts(tmp_path: Path) -> None:
    f = tmp_path / "page.HTM"
    f.write_text(
        "<html><head><title>Guide</title><style>.x { color: red }</style>"
        "<script>var secret = 1;</script></head>"
        "<body><h1>Hello</h1><p>World <b>bold</b> text</p><ul><li>one</li><li>two</li></ul>"
        "<noscript>enable js</noscript></body></html>",
        encoding="utf-8",
    )
    assert normalize_text(extract_text(f)) == "Guide Hello World bold text one two"


def test_pdf_pages_are_joined_in_order(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    class FakePage:
        def __init__(self, text):
            self._text = text

        def extract_text(self):
            return self._text

    class FakeReader:
        def __init__(self, path):
            self.pages = [FakePage("page one"), FakePage(None), FakePage("page three")]

    monkeypatch.setattr(extraction, "PdfReader", FakeReader)
    f = tmp_path / "doc.pdf"
    f.write_bytes(b"%PDF-1.4")
    assert extract_text(f) == "page one\n\npage three"


def test_malformed_pdf_yields_empty_string(tmp_path: Path) -> None:
    f = tmp_path / "broken.pdf"
    f.write_bytes(b"this is not a pdf")
    assert extract_text(f) == ""


def test_undecodable_text_yields_empty_string(tmp_path: Path) -> None:
    f = tmp_path / "latin1.txt"
    f.write_bytes(b"caf\xe9 \xff\xfe")
    assert extract_text(f) == ""


def test_missing_file_yields_empty_string(tmp_path: Path) -> None:
    assert extract_text(tmp_path / "gone.txt") == ""


def test_html_inline_markup_does_not_split_words(tmp_path: Path) -> None:
    f = tmp_path / "inline.html"
    f.write_text(
        "<p>Water is H<sub>2</sub>O and <a href='#'>API</a>s use <b>re</b>try.</p>"
        "<p>Call <code>foo</code>() next.</p><div>last<br>line</div>",
        encoding="utf-8",
    )
    assert normalize_text(extract_text(f)) == (
        "Water is H2O and APIs use retry. Call foo() next. last line"
    )
