from typing import Any, Dict, List, Optional

from supabase import Client

from resume_analyzer.models import ResumeAnalysis

ANALYSIS_TABLE = "resume_analysis"
# Embeds the owning resume's name and upload date in every row.
HISTORY_COLUMNS = "*, resumes (file_name, upload_date)"


class AnalysisRepository:
    """Rows of the ``resume_analysis`` table, written once and never updated."""

    def __init__(self, client: Client):
        self.client = client

    def insert(
        self,
        resume_id: str,
        user_id: str,
        analysis_text: str,
        analysis: ResumeAnalysis,
    ) -> Dict[str, Any]:
        payload = analysis.to_payload()
        row = {
            "resume_id": resume_id,
            "user_id": user_id,
            "analysis_text": analysis_text,
            "skills": payload["skills"],
            "experience_years": payload["experience_years"],
            "education": payload["education"],
            "job_recommendations": payload["job_recommendations"],
            "strengths": payload["strengths"],
            "improvements": payload["improvements"],
        }
        result = self.client.table(ANALYSIS_TABLE).insert(row).execute()
        return result.data[0] if result.data else row

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        result = (
            self.client.table(ANALYSIS_TABLE)
            .select(HISTORY_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data or []

    def get_for_user(self, analysis_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        result = (
            self.client.table(ANALYSIS_TABLE)
            .select(HISTORY_COLUMNS)
            .eq("id", analysis_id)
            .eq("user_id", user_id)
            .execute()
        )
        return result.data[0] if result.data else None
