import io
import logging
import os
import zipfile
from typing import List, Union

import docx
from docx.opc.exceptions import PackageNotFoundError
import fitz  # PyMuPDF
from pdfminer.high_level import extract_text as pdfminer_extract_text

from normalizer import normalize_text

PDF_TEXT_MIN_LENGTH = 80  # Heuristic threshold to trigger fallbacks
SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")

logger = logging.getLogger(__name__)

Source = Union[str, bytes]


def extract_text_from_file(file_path: str) -> str:
    """Extract text from PDF, DOCX, or TXT files; returns "" when nothing is readable."""
    if not os.path.exists(file_path):
        logger.warning("Resume file not found: %s", file_path)
        return ""
    return _extract(file_path, file_path)


def extract_text_from_bytes(data: bytes, file_name: str) -> str:
    """Same as extract_text_from_file for an in-memory upload."""
    if not data:
        logger.warning("Empty upload: %s", file_name)
        return ""
    return _extract(data, file_name)


def _extract(source: Source, file_name: str) -> str:
    ext = os.path.splitext(file_name)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        logger.warning("Unsupported file type for %s", file_name)
        return ""

    try:
        if ext == ".pdf":
            text = _extract_pdf_text(source, file_name)
        elif ext == ".docx":
            text = _extract_docx_text(source)
        else:
            text = _extract_txt_text(source)
    except (OSError, ValueError, zipfile.BadZipFile, PackageNotFoundError) as exc:
        logger.warning("Text extraction failed for %s: %s", file_name, exc)
        return ""

    normalized = normalize_text(text)
    if not normalized:
        logger.warning("No text could be extracted from %s", file_name)
    return normalized


def _open_pdf(source: Source):
    if isinstance(source, bytes):
        return fitz.open(stream=source, filetype="pdf")
    return fitz.open(source)


def _extract_pdf_text(source: Source, file_name: str) -> str:
    """Attempt PyMuPDF page text, then PyMuPDF blocks, then pdfminer."""
    text = ""

    try:
        with _open_pdf(source) as doc:
            text_chunks = [page.get_text("text", sort=True) for page in doc]
        text = "\n".join(text_chunks)
    except (RuntimeError, ValueError) as exc:
        logger.debug("PyMuPDF text extraction failed for %s: %s", file_name, exc)

    if len(text.strip()) < PDF_TEXT_MIN_LENGTH:
        try:
            with _open_pdf(source) as doc:
                block_chunks: List[str] = []
                for page in doc:
                    for block in page.get_text("blocks"):
                        block_text = block[4]
                        if block_text:
                            block_chunks.append(block_text.strip())
            alt_text = "\n".join(block_chunks)
            if len(alt_text.strip()) > len(text.strip()):
                text = alt_text
        except (RuntimeError, ValueError) as exc:
            logger.debug("PyMuPDF block extraction failed for %s: %s", file_name, exc)

    if len(text.strip()) < PDF_TEXT_MIN_LENGTH:
        pdf_input = io.BytesIO(source) if isinstance(source, bytes) else source
        try:
            text = pdfminer_extract_text(pdf_input) or text
        except Exception as exc:  # pdfminer raises a wide range of parser errors
            logger.debug("pdfminer extraction failed for %s: %s", file_name, exc)

    if len(text.strip()) < PDF_TEXT_MIN_LENGTH:
        logger.warning(
            "PDF text extraction produced < %s characters for %s",
            PDF_TEXT_MIN_LENGTH,
            file_name,
        )
    return text


def _extract_docx_text(source: Source) -> str:
    document = docx.Document(io.BytesIO(source) if isinstance(source, bytes) else source)
    return "\n".join(para.text for para in document.paragraphs)


def _extract_txt_text(source: Source) -> str:
    if isinstance(source, bytes):
        return source.decode("utf-8", errors="replace")
    with open(source, "r", encoding="utf-8", errors="replace") as f:
        return f.read()
