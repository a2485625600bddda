"""
文字抽取

支援：
    - PDF  (application/pdf)           → pdfminer.six
    - DOCX (application/vnd.openxml…)  → python-docx
    - TXT  (text/plain)                → 直接以 UTF-8 解碼
"""

import io
import logging

from docx import Document as DocxDocument
from pdfminer.high_level import extract_text as extract_pdf_text

from .exceptions import EmptyBufferError, UnsupportedMimeError

logger = logging.getLogger(__name__)

MIME_PDF = 'application/pdf'
MIME_DOCX = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
MIME_TEXT = 'text/plain'

SUPPORTED_MIME_TYPES = (MIME_PDF, MIME_DOCX, MIME_TEXT)


def _extract_pdf(data: bytes) -> str:
    return extract_pdf_text(io.BytesIO(data)) or ''


def _extract_docx(data: bytes) -> str:
    document = DocxDocument(io.BytesIO(data))
    return '\n'.join(paragraph.text for paragraph in document.paragraphs)


def _extract_text(data: bytes) -> str:
    return data.decode('utf-8', errors='replace')


_EXTRACTORS = {
    MIME_PDF: _extract_pdf,
    MIME_DOCX: _extract_docx,
    MIME_TEXT: _extract_text,
}


def extract_text(data: bytes, mime_type: str) -> str:
    """
    依 MIME type 從檔案內容抽出純文字

    Raises:
        EmptyBufferError: 檔案內容為空
        UnsupportedMimeError: 不支援的 MIME type
    """
    if not data:
        raise EmptyBufferError()

    mime = (mime_type or '').lower().split(';')[0].strip()
    extractor = _EXTRACTORS.get(mime)
    if extractor is None:
        raise UnsupportedMimeError(mime_type)

    text = extractor(data)
    logger.debug(f"[Originality] Extracted {len(text)} chars from {mime}")
    return text
