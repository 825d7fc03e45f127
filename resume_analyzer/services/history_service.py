from typing import Any, Dict, List

from resume_analyzer.models import AnalysisHistoryEntry, JobRecommendation


def to_history_entry(row: Dict[str, Any]) -> AnalysisHistoryEntry:
    """Flattens an analysis row and its embedded ``resumes`` join."""
    resume = row.get("resumes") or {}
    # a to-one embed may come back as a single-element list
    if isinstance(resume, list):
        resume = resume[0] if resume else {}
    data = {key: value for key, value in row.items() if key != "resumes"}
    data["file_name"] = resume.get("file_name")
    data["upload_date"] = resume.get("upload_date")
    return AnalysisHistoryEntry.model_validate(data)


def build_history(rows: List[Dict[str, Any]]) -> List[AnalysisHistoryEntry]:
    entries = [to_history_entry(row) for row in rows]
    # newest first, even if the store returned them unordered
    entries.sort(key=lambda entry: entry.created_at or "", reverse=True)
    return entries


def rank_recommendations(
    recommendations: List[JobRecommendation],
) -> List[JobRecommendation]:
    """Scored recommendations by descending match, unscored ones after in original order."""
    scored = [r for r in recommendations if r.match_score is not None]
    unscored = [r for r in recommendations if r.match_score is None]
    scored.sort(key=lambda r: r.match_score, reverse=True)
    return scored + unscored
