import io
import logging
import re
import unicodedata

import fitz  # PyMuPDF
from docx import Document as DocxDocument

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DOC_CONTENT_TYPE = "application/msword"
DOCX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


def extract_text_from_pdf(content: bytes) -> str:
    try:
        doc = fitz.open(stream=content, filetype="pdf")
        try:
            return "\n".join(page.get_text("text") for page in doc)
        finally:
            doc.close()
    except Exception as e:
        raise ValueError(f"Error processing PDF with PyMuPDF: {str(e)}") from e


def extract_text_from_docx(content: bytes) -> str:
    try:
        doc = DocxDocument(io.BytesIO(content))
    except Exception as e:
        raise ValueError(f"Error processing DOCX: {str(e)}") from e
    lines = [paragraph.text for paragraph in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            cells = []
            for cell in row.cells:
                # merged cells repeat the same text across the span
                if cell.text and (not cells or cells[-1] != cell.text):
                    cells.append(cell.text)
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


def decode_raw_text(content: bytes) -> str:
    """Reads the bytes as UTF-8 text the way a browser FileReader would."""
    return content.decode("utf-8", errors="replace")


def clean_text(text: str) -> str:
    if not text:
        return ""
    text = unicodedata.normalize("NFKC", text)
    text = text.replace("\ufffd", "").replace("\x00", "")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n+", "\n", text).strip()
    return text


def extract_resume_text(content: bytes, content_type: str) -> str:
    """
    Best-effort text for a PDF, DOC or DOCX upload.

    Structured parsing is tried first; a document the parser cannot open (or
    one that yields no text) falls back to the raw decoded bytes.
    """
    text = ""
    try:
        if content_type == PDF_CONTENT_TYPE:
            text = extract_text_from_pdf(content)
        elif content_type == DOCX_CONTENT_TYPE:
            text = extract_text_from_docx(content)
    except ValueError as e:
        logger.warning("Structured text extraction failed, reading raw text: %s", e)

    if not text.strip():
        text = decode_raw_text(content)
    return clean_text(text)
