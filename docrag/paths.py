"""Input path resolution and supported-file discovery.

Provides:
- resolve_path: normalize a user-supplied path string and check it exists
- is_supported: extension allow-list check
- discover_files: list supported files under a directory, or validate a single file
"""
import logging
import os
from pathlib import Path
from typing import List

from docrag.errors import IngestionIOError, InvalidInputError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".pdf", ".txt", ".md", ".html", ".htm"})
_QUOTES = ("\"", "'")


def _strip_quotes(raw: str) -> str:
    s = raw.strip()
    # Only a matching pair is removed; a lone quote stays part of the path
    if len(s) >= 2 and s[0] in _QUOTES and s[-1] == s[0]:
        return s[1:-1].strip()
    return s


def resolve_path(raw: str) -> Path:
    """Turn a raw path string into an existing filesystem path.

    Surrounding whitespace and one matching pair of outer quotes (as produced by
    "copy as path" in most file managers) are removed.

    Args:
        raw: Path as typed or pasted by the caller.

    Returns:
        Path: The resolved path.

    Raises:
        InvalidInputError: If the path is blank or does not exist.
    """
    if raw is None or not raw.strip():
        raise InvalidInputError("path is required")
    cleaned = _strip_quotes(raw)
    if not cleaned:
        raise InvalidInputError("path is required")
    path = Path(cleaned)
    if not path.exists():
        raise InvalidInputError(f"invalid path: {cleaned}")
    return path


def is_supported(path: Path) -> bool:
    """Return True if the file extension is one we can extract text from."""
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def _raise_walk_error(err: OSError) -> None:
    raise err


def discover_files(path: Path) -> List[Path]:
    """List the files to ingest for a resolved input path.

    A directory is walked recursively and unsupported files are skipped. A
    single file must itself be supported.

    Args:
        path: Existing file or directory.

    Returns:
        List[Path]: Supported files in deterministic (sorted walk) order; empty
            when a directory holds nothing supported.

    Raises:
        InvalidInputError: If a single file with an unsupported extension is given.
        IngestionIOError: If the directory cannot be walked.
    """
    if path.is_dir():
        files: List[Path] = []
        try:
            for dirpath, dirnames, filenames in os.walk(path, onerror=_raise_walk_error):
                dirnames.sort()
                for name in sorted(filenames):
                    candidate = Path(dirpath) / name
                    if candidate.is_file() and is_supported(candidate):
                        files.append(candidate)
        except OSError as e:
            raise IngestionIOError(f"failed to read documents: {e}") from e
        logger.debug("Discovered %d supported files under %s", len(files), path)
        return files

    if path.is_file() and is_supported(path):
        return [path]
    raise InvalidInputError(f"unsupported file type: {path}")
