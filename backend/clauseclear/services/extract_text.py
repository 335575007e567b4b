"""
Extract text from PDF and Word (.docx) contracts.
The declared MIME type picks the parser; anything else is rejected before parsing.
"""
import io
import re
from typing import Optional

import pdfplumber
import structlog
from docx import Document

from clauseclear.errors import ExtractionError, UnsupportedFileTypeError

logger = structlog.get_logger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
SUPPORTED_TYPES = (PDF_MIME, DOCX_MIME)


def _clean(text: str) -> str:
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _normalize_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def is_supported(content_type: Optional[str]) -> bool:
    return _normalize_type(content_type) in SUPPORTED_TYPES


def _extract_pdf(data: bytes) -> str:
    parts = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            t = page.extract_text() or ""
            if t.strip():
                parts.append(t)
    return _clean("\n\n".join(parts))


def _extract_docx(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    lines = [p.text for p in doc.paragraphs if p.text and p.text.strip()]
    # Contracts often keep payment schedules and signature blocks in tables
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text and c.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return _clean("\n".join(lines))


def extract_text(content_type: Optional[str], data: bytes) -> str:
    """Return the plain text of an uploaded contract.

    Raises UnsupportedFileTypeError for anything other than PDF or DOCX, and
    ExtractionError when the parser fails or finds no text.
    """
    kind = _normalize_type(content_type)
    if kind not in SUPPORTED_TYPES:
        raise UnsupportedFileTypeError(content_type)

    try:
        text = _extract_pdf(data) if kind == PDF_MIME else _extract_docx(data)
    except Exception as e:
        logger.warning("extraction_failed", content_type=kind, error=str(e))
        raise ExtractionError(str(e) or e.__class__.__name__) from e

    if not text:
        raise ExtractionError("No readable text found in the document.")

    logger.info("text_extracted", content_type=kind, characters=len(text))
    return text
