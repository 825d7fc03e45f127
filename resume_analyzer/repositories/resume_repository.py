from typing import Optional

from supabase import Client

from resume_analyzer.models import AnalysisStatus, ResumeRecord

RESUMES_TABLE = "resumes"


class ResumeRepository:
    """Rows of the ``resumes`` table: one per uploaded file."""

    def __init__(self, client: Client):
        self.client = client

    def create_pending(
        self, user_id: str, file_name: str, file_path: str, file_size: int
    ) -> ResumeRecord:
        result = (
            self.client.table(RESUMES_TABLE)
            .insert(
                {
                    "user_id": user_id,
                    "file_name": file_name,
                    "file_path": file_path,
                    "file_size": file_size,
                    "analysis_status": AnalysisStatus.PENDING.value,
                }
            )
            .execute()
        )
        if not result.data:
            raise RuntimeError("Resume insert returned no row")
        return ResumeRecord.model_validate(result.data[0])

    def get(self, resume_id: str) -> Optional[ResumeRecord]:
        result = (
            self.client.table(RESUMES_TABLE).select("*").eq("id", resume_id).execute()
        )
        if not result.data:
            return None
        return ResumeRecord.model_validate(result.data[0])

    def mark_completed(self, resume_id: str) -> None:
        (
            self.client.table(RESUMES_TABLE)
            .update({"analysis_status": AnalysisStatus.COMPLETED.value})
            .eq("id", resume_id)
            .execute()
        )
