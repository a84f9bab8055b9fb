"""
Document discovery and text extraction.

These are the collaborators that feed the index builder: a DocumentSource
enumerates indexable files in a directory and a TextExtractor turns one of
them into raw text plus a detected content type.
"""

import logging
import mimetypes
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from .errors import ExtractionError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".txt", ".docx", ".doc", ".pdf")

mimetypes.add_type("application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx")
mimetypes.add_type("application/msword", ".doc")


class FiletypeFilter:
    """Accepts files whose extension is in a configured list."""

    def __init__(self, extensions: Optional[Iterable[str]] = None):
        self.extensions = tuple(ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS))

    def __call__(self, path: Path) -> bool:
        return path.name.lower().endswith(self.extensions)


class DocumentSource:
    """Enumerates readable files of a directory that pass a predicate."""

    def list(self, directory, predicate: Optional[Callable[[Path], bool]] = None) -> List[Path]:
        """
        List indexable files in a directory, non-recursively.

        Directories, hidden files and unreadable files are skipped.

        Args:
            directory: Directory to enumerate.
            predicate: Optional filter; defaults to FiletypeFilter().

        Returns:
            Sorted list of file paths.
        """
        if predicate is None:
            predicate = FiletypeFilter()

        directory = Path(directory)
        if not directory.is_dir():
            logger.warning(f"Corpus directory {directory} does not exist")
            return []

        files = []
        for path in sorted(directory.iterdir()):
            if not path.is_file() or path.name.startswith("."):
                continue
            if not os.access(path, os.R_OK):
                logger.debug(f"Skipping unreadable file {path}")
                continue
            if predicate(path):
                files.append(path)
        return files


class TextExtractor:
    """Extracts raw text from plain-text and PDF files."""

    def detect(self, path: Path) -> str:
        """
        Detect the content type of a file from its name.

        Args:
            path: File path.

        Returns:
            MIME type string, ``application/octet-stream`` when unknown.
        """
        content_type, _ = mimetypes.guess_type(path.name)
        return content_type or "application/octet-stream"

    def extract(self, path) -> Tuple[str, str]:
        """
        Extract text from a file.

        Args:
            path: File to read.

        Returns:
            Tuple of (text, content_type).

        Raises:
            ExtractionError: If the file is unreadable or its type unsupported.
        """
        path = Path(path)
        content_type = self.detect(path)
        logger.debug(f"Extracting {path} as {content_type}")

        if content_type.startswith("text/"):
            return self._read_text(path), content_type
        if content_type == "application/pdf":
            return self._read_pdf(path), content_type
        raise ExtractionError(path, f"unsupported content type {content_type}")

    def _read_text(self, path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise ExtractionError(path, str(e)) from e

    def _read_pdf(self, path: Path) -> str:
        try:
            reader = PdfReader(str(path))
            return "\n".join(page.extract_text() or "" for page in reader.pages)
        except (OSError, ValueError, PyPdfError) as e:
            raise ExtractionError(path, str(e)) from e
