from dataclasses import dataclass
from io import BytesIO
from typing import Optional
import logging
import os

import docx
from pypdf import PdfReader

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "docx")


@dataclass
class ExtractionResult:
    """Extracted resume text. ok is False when the text could not be read."""
    text: str
    ok: bool
    error: Optional[str] = None


def file_extension(filename: Optional[str]) -> str:
    if not filename:
        return ""
    return os.path.splitext(filename)[1].lstrip(".").lower()


def extract_text_from_pdf(pdf_content: bytes) -> str:
    """
    Extract text from a PDF page by page, one newline after each page.
    """
    try:
        reader = PdfReader(BytesIO(pdf_content))
        text = ""
        for page in reader.pages:
            text += (page.extract_text() or "") + "\n"
        return text
    except Exception as e:
        raise ValueError(f"Error extracting text from PDF: {str(e)}")


def extract_text_from_docx(docx_content: bytes) -> str:
    """Raw paragraph text of a DOCX document."""
    try:
        document = docx.Document(BytesIO(docx_content))
        return "\n".join(paragraph.text for paragraph in document.paragraphs)
    except Exception as e:
        raise ValueError(f"Error extracting text from DOCX: {str(e)}")


def extract_resume_text(data: bytes, extension: str) -> ExtractionResult:
    """
    Extract plain text from resume bytes.

    Never raises: unsupported types, empty input and unreadable files give an
    empty text with ok=False so uploads can continue without a preview.
    """
    extension = (extension or "").lstrip(".").lower()

    if extension not in SUPPORTED_EXTENSIONS:
        logger.warning("Skipping text extraction for unsupported extension %r", extension)
        return ExtractionResult(text="", ok=False, error=f"Unsupported file type: {extension or 'unknown'}")

    if not data:
        logger.warning("Skipping text extraction for empty %s file", extension)
        return ExtractionResult(text="", ok=False, error="File is empty")

    try:
        if extension == "pdf":
            text = extract_text_from_pdf(data)
        else:
            text = extract_text_from_docx(data)
    except ValueError as e:
        logger.warning("Resume text extraction failed: %s", e)
        return ExtractionResult(text="", ok=False, error=str(e))

    return ExtractionResult(text=text, ok=True)
