from resume_analyzer.parsers.text_extractor import (
    extract_resume_text,
    PDF_CONTENT_TYPE,
    DOC_CONTENT_TYPE,
    DOCX_CONTENT_TYPE,
)

__all__ = [
    "extract_resume_text",
    "PDF_CONTENT_TYPE",
    "DOC_CONTENT_TYPE",
    "DOCX_CONTENT_TYPE",
]
