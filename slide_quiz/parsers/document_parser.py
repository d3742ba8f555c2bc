"""Extract plain text from uploaded PDF, PowerPoint and Word documents.

Dispatch is by MIME type, as reported by the upload:

  application/pdf                       PyMuPDF, one block per page
  ...presentationml.presentation (pptx) python-pptx, every shape with text
  application/vnd.ms-powerpoint  (ppt)  python-pptx, else raw UTF-8 decode
  ...wordprocessingml.document   (docx) python-docx, paragraphs and tables
  application/msword             (doc)  python-docx, else ExtractionError

Legacy binary .ppt/.doc files are mostly unreadable by the OOXML libraries;
the .ppt fallback keeps whatever text survives a lossy decode.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

import fitz
from docx import Document
from pptx import Presentation

from slide_quiz.errors import ExtractionError, UnsupportedFileTypeError

_log = logging.getLogger("slide_quiz.extract")

PDF = "application/pdf"
PPT = "application/vnd.ms-powerpoint"
PPTX = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
DOC = "application/msword"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MIME_BY_EXTENSION = {
    ".pdf": PDF,
    ".ppt": PPT,
    ".pptx": PPTX,
    ".doc": DOC,
    ".docx": DOCX,
}


def clean_text(text: str | None) -> str:
    """Collapse blank lines, tabs and whitespace runs; trim the ends."""
    if not text:
        return ""
    text = re.sub(r"\n\s*\n", "\n", text)
    text = text.replace("\t", " ")
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def guess_mime_type(path: Path) -> str | None:
    return MIME_BY_EXTENSION.get(path.suffix.lower())


def _extract_pdf(path: Path) -> str:
    with fitz.open(str(path)) as doc:
        return "\n".join(page.get_text("text") for page in doc)


def _extract_pptx(path: Path) -> str:
    prs = Presentation(str(path))
    texts: list[str] = []
    for slide in prs.slides:
        for shape in slide.shapes:
            if shape.has_text_frame and shape.text_frame.text.strip():
                texts.append(shape.text_frame.text)
    return "\n".join(texts)


def _extract_docx(path: Path) -> str:
    document = Document(str(path))
    texts = [p.text for p in document.paragraphs if p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                if cell.text.strip():
                    texts.append(cell.text)
    return "\n".join(texts)


def _extract_ppt(path: Path) -> str:
    try:
        return _extract_pptx(path)
    except Exception as e:
        _log.info("PPT not readable as OOXML (%s), falling back to raw decode", e)
        return path.read_bytes().decode("utf-8", errors="ignore")


def extract_text(path: Path, mime_type: str) -> str:
    """Return cleaned text of the document at *path*.

    Raises :class:`UnsupportedFileTypeError` for unknown MIME types and
    :class:`ExtractionError` when the document cannot be read.
    """
    if mime_type == PDF:
        extractor, label = _extract_pdf, "PDF"
    elif mime_type == PPTX:
        extractor, label = _extract_pptx, "PowerPoint presentation"
    elif mime_type == PPT:
        extractor, label = _extract_ppt, "PowerPoint presentation"
    elif mime_type in (DOCX, DOC):
        extractor, label = _extract_docx, "Word document"
    else:
        raise UnsupportedFileTypeError(f"Unsupported file type: {mime_type}")

    try:
        raw = extractor(path)
    except Exception as e:
        _log.warning("%s extraction failed for %s: %s", label, path.name, e)
        raise ExtractionError(f"Failed to extract text from {label}") from e

    text = clean_text(raw)
    _log.info("Extracted %d characters from %s", len(text), path.name)
    return text
