from fastapi import APIRouter, Depends, File, UploadFile
import logging

from resume_analyzer.dependencies import get_current_user, get_upload_service
from resume_analyzer.errors import ResumeAnalyzerError
from resume_analyzer.models import AuthenticatedUser, UploadResponse
from resume_analyzer.services.upload_service import UploadService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/resumes", response_model=UploadResponse, status_code=201)
async def upload_resume_endpoint(
    file: UploadFile = File(...),
    user: AuthenticatedUser = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service),
):
    """
    Upload a PDF or Word resume (max 10MB), store it and run the analysis.
    """
    try:
        content = await file.read()
        resume, analysis = await service.upload_and_analyze(
            user,
            file_name=file.filename or "resume",
            content_type=file.content_type,
            content=content,
        )
        return UploadResponse(success=True, resume=resume, analysis=analysis.to_payload())
    except ResumeAnalyzerError as e:
        raise e
    except Exception as e:
        logger.exception("Error processing upload %s", file.filename)
        raise ResumeAnalyzerError(str(e) or None) from e
