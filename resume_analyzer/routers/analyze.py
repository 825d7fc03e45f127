from fastapi import APIRouter, Depends
import logging

from resume_analyzer.dependencies import get_analysis_service, get_current_user
from resume_analyzer.errors import ResumeAnalyzerError
from resume_analyzer.models import (
    AnalyzeResumeRequest,
    AnalyzeResumeResponse,
    AuthenticatedUser,
)
from resume_analyzer.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze-resume", response_model=AnalyzeResumeResponse)
async def analyze_resume_endpoint(
    request_data: AnalyzeResumeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Analyze resume text with the AI gateway and store the structured result.
    Not idempotent: every call stores a new analysis row.
    """
    try:
        analysis = await service.analyze(
            user, request_data.resume_id, request_data.resume_text
        )
        return AnalyzeResumeResponse(success=True, analysis=analysis.to_payload())
    except ResumeAnalyzerError as e:
        raise e
    except Exception as e:
        logger.exception("Error in analyze-resume")
        raise ResumeAnalyzerError(str(e) or None) from e
