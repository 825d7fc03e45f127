"""
Analyze Function: resume text in, stored structured analysis out.

Flow per request:
1. Ask the AI gateway for an analysis of the resume text
2. Pull the JSON object out of the completion and normalize it
3. Insert one ``resume_analysis`` row
4. Mark the resume completed, only after the insert succeeded
"""

import logging

from resume_analyzer.errors import PersistenceFailure
from resume_analyzer.models import AuthenticatedUser, ResumeAnalysis
from resume_analyzer.repositories.analysis_repository import AnalysisRepository
from resume_analyzer.repositories.resume_repository import ResumeRepository
from resume_analyzer.services.ai_gateway import AIGatewayClient
from resume_analyzer.services.analysis_parser import parse_analysis

logger = logging.getLogger(__name__)


class AnalysisService:
    def __init__(
        self,
        gateway: AIGatewayClient,
        resumes: ResumeRepository,
        analyses: AnalysisRepository,
    ):
        self.gateway = gateway
        self.resumes = resumes
        self.analyses = analyses

    async def analyze(
        self, user: AuthenticatedUser, resume_id: str, resume_text: str
    ) -> ResumeAnalysis:
        logger.info("Analyzing resume %s for user: %s", resume_id, user.id)

        analysis_text = await self.gateway.analyze_resume(resume_text)
        logger.debug("Raw AI response: %s", analysis_text)

        analysis = parse_analysis(analysis_text)

        try:
            self.analyses.insert(
                resume_id=resume_id,
                user_id=user.id,
                analysis_text=analysis_text,
                analysis=analysis,
            )
        except Exception as e:
            logger.exception("Database error while storing analysis for resume %s", resume_id)
            raise PersistenceFailure(str(e) or None) from e

        try:
            self.resumes.mark_completed(resume_id)
        except Exception:
            # analysis row stays; resume remains pending
            logger.exception("Failed to mark resume %s completed", resume_id)

        logger.info("Analysis completed successfully for resume %s", resume_id)
        return analysis
