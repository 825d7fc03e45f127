from fastapi import APIRouter, Depends
from typing import List
import logging

from resume_analyzer.dependencies import get_analysis_repository, get_current_user
from resume_analyzer.errors import NotFound, ResumeAnalyzerError
from resume_analyzer.models import (
    AnalysisHistoryEntry,
    AuthenticatedUser,
    RecommendationsResponse,
)
from resume_analyzer.repositories.analysis_repository import AnalysisRepository
from resume_analyzer.services.history_service import (
    build_history,
    rank_recommendations,
    to_history_entry,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/analyses",
    response_model=List[AnalysisHistoryEntry],
    response_model_exclude_none=True,
)
async def list_analyses(
    user: AuthenticatedUser = Depends(get_current_user),
    analyses: AnalysisRepository = Depends(get_analysis_repository),
):
    """
    All analyses of the current user, newest first, with the resume file name.
    """
    try:
        return build_history(analyses.list_for_user(user.id))
    except ResumeAnalyzerError as e:
        raise e
    except Exception as e:
        logger.exception("Error fetching analyses for user %s", user.id)
        raise ResumeAnalyzerError(
            f"An error occurred while retrieving analyses: {str(e)}"
        ) from e


@router.get(
    "/analyses/{analysis_id}/recommendations",
    response_model=RecommendationsResponse,
    response_model_exclude_none=True,
)
async def get_recommendations(
    analysis_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    analyses: AnalysisRepository = Depends(get_analysis_repository),
):
    try:
        row = analyses.get_for_user(analysis_id, user.id)
        if row is None:
            raise NotFound("Analysis not found")
        entry = to_history_entry(row)
        return RecommendationsResponse(
            analysis_id=entry.id,
            recommendations=rank_recommendations(entry.job_recommendations),
        )
    except ResumeAnalyzerError as e:
        raise e
    except Exception as e:
        logger.exception("Error fetching recommendations for analysis %s", analysis_id)
        raise ResumeAnalyzerError(
            f"An error occurred while retrieving recommendations: {str(e)}"
        ) from e
