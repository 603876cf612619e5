"""Plain-text extraction for the supported document formats.

Provides:
- extract_pdf: page texts via pypdf, in page order
- extract_html: visible text via BeautifulSoup, in document order
- extract_plain: UTF-8 file contents as-is (.txt, .md)
- extract_text: dispatch by extension; never raises, returns "" on failure
"""
import logging
from pathlib import Path
from typing import Callable, Dict

from bs4 import BeautifulSoup
from pypdf import PdfReader

logger = logging.getLogger(__name__)

# Elements that break the text flow; inline markup (a, b, sub, code, ...) does not
BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "figcaption", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
    "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table", "td", "th",
    "title", "tr", "ul",
]


def extract_pdf(path: Path) -> str:
    """Concatenate the extracted text of every page, in page order."""
    reader = PdfReader(str(path))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def extract_html(path: Path) -> str:
    """Return the text content of an HTML document with tags stripped.

    Script, style and noscript bodies are dropped; all other text nodes are
    kept in document order. Text nodes are joined without a separator so
    inline markup never splits a word; block elements end with a newline.
    """
    html = path.read_text(encoding="utf-8")
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    for tag in soup.find_all(BLOCK_TAGS):
        tag.append("\n")
    return soup.get_text("")


def extract_plain(path: Path) -> str:
    return path.read_text(encoding="utf-8")


EXTRACTORS: Dict[str, Callable[[Path], str]] = {
    ".pdf": extract_pdf,
    ".html": extract_html,
    ".htm": extract_html,
}


def extract_text(path: Path) -> str:
    """Extract text from a file, choosing the extractor by extension.

    Extraction problems are confined to the file: I/O errors, undecodable
    bytes and malformed PDF/HTML are logged and yield an empty string so the
    caller simply skips the file.

    Args:
        path: File to read.

    Returns:
        str: Extracted text, or "" if extraction failed.
    """
    extractor = EXTRACTORS.get(path.suffix.lower(), extract_plain)
    try:
        return extractor(path)
    except Exception as e:
        logger.warning("Text extraction failed for %s: %s", path, e)
        return ""
