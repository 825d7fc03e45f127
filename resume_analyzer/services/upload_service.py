"""
Upload flow: validate, store the file, record it, read its text, analyze.

Each stage fails with its own message and nothing is rolled back: a failure
after the storage upload leaves the object (and possibly the pending row) in
place.
"""

import asyncio
import logging
from typing import Optional, Tuple

from resume_analyzer.errors import UploadFailure, UploadRejected
from resume_analyzer.models import (
    AnalysisStatus,
    AuthenticatedUser,
    ResumeAnalysis,
    ResumeRecord,
)
from resume_analyzer.parsers import (
    DOC_CONTENT_TYPE,
    DOCX_CONTENT_TYPE,
    PDF_CONTENT_TYPE,
    extract_resume_text,
)
from resume_analyzer.repositories.resume_repository import ResumeRepository
from resume_analyzer.repositories.storage_repository import (
    StorageRepository,
    build_object_path,
)
from resume_analyzer.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = (PDF_CONTENT_TYPE, DOC_CONTENT_TYPE, DOCX_CONTENT_TYPE)
MAX_UPLOAD_BYTES = 10485760

INVALID_TYPE_MESSAGE = "Please upload a PDF or Word document"
TOO_LARGE_MESSAGE = "File size must be less than 10MB"
STORAGE_FAILED_MESSAGE = "Failed to upload resume"
RECORD_FAILED_MESSAGE = "Failed to save resume record"
READ_FAILED_MESSAGE = "Failed to read resume text"


def validate_upload(
    content_type: Optional[str], size: int, max_bytes: int = MAX_UPLOAD_BYTES
) -> None:
    """Rejects files outside the type allow-list or above ``max_bytes`` (inclusive)."""
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise UploadRejected(INVALID_TYPE_MESSAGE)
    if size > max_bytes:
        raise UploadRejected(TOO_LARGE_MESSAGE)


class UploadService:
    def __init__(
        self,
        storage: StorageRepository,
        resumes: ResumeRepository,
        analysis_service: AnalysisService,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ):
        self.storage = storage
        self.resumes = resumes
        self.analysis_service = analysis_service
        self.max_bytes = max_bytes

    async def upload_and_analyze(
        self,
        user: AuthenticatedUser,
        file_name: str,
        content_type: Optional[str],
        content: bytes,
    ) -> Tuple[ResumeRecord, ResumeAnalysis]:
        validate_upload(content_type, len(content), self.max_bytes)

        path = build_object_path(user.id, file_name)
        try:
            self.storage.upload(path, content, content_type)
        except Exception as e:
            logger.exception("Storage upload failed for %s", path)
            raise UploadFailure(STORAGE_FAILED_MESSAGE) from e

        try:
            resume = self.resumes.create_pending(
                user_id=user.id,
                file_name=file_name,
                file_path=path,
                file_size=len(content),
            )
        except Exception as e:
            logger.exception("Resume insert failed for %s", path)
            raise UploadFailure(RECORD_FAILED_MESSAGE) from e

        logger.info("Resume %s uploaded to %s, starting analysis", resume.id, path)

        try:
            resume_text = await asyncio.to_thread(extract_resume_text, content, content_type)
        except Exception as e:
            logger.exception("Text extraction failed for resume %s", resume.id)
            raise UploadFailure(READ_FAILED_MESSAGE) from e
        if not resume_text:
            raise UploadFailure(READ_FAILED_MESSAGE)

        analysis = await self.analysis_service.analyze(user, resume.id, resume_text)
        return resume.model_copy(update={"analysis_status": AnalysisStatus.COMPLETED}), analysis
