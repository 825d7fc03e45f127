from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class GrowthPotential(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _string_list(value: Any) -> List[str]:
    items = []
    for item in _as_list(value):
        if item is None:
            continue
        text = item if isinstance(item, str) else str(item)
        if text.strip():
            items.append(text.strip())
    return items


# --- AI analysis payload ---
class Education(BaseModel):
    degree: str = ""
    institution: str = ""
    year: str = ""

    @field_validator("degree", "institution", "year", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class JobRecommendation(BaseModel):
    title: str = ""
    company_type: str = ""
    requirements: str = ""
    salary_range: str = ""
    match_score: Optional[int] = None
    growth_potential: Optional[GrowthPotential] = None
    why_good_fit: Optional[str] = None

    @field_validator("title", "company_type", "requirements", "salary_range", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return str(value)

    @field_validator("match_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        score = _coerce_int(str(value).rstrip("%") if isinstance(value, str) else value)
        if score is None:
            return None
        return max(0, min(100, score))

    @field_validator("growth_potential", mode="before")
    @classmethod
    def _match_growth(cls, value: Any) -> Optional[GrowthPotential]:
        if value is None:
            return None
        for level in GrowthPotential:
            if str(value).strip().lower() == level.value.lower():
                return level
        return None

    @field_validator("why_good_fit", mode="before")
    @classmethod
    def _blank_fit(cls, value: Any) -> Optional[str]:
        if value is None or not str(value).strip():
            return None
        return str(value)


class ResumeAnalysis(BaseModel):
    """Normalized analysis returned by the model.

    Missing collections become empty lists and a missing or unusable
    ``experience_years`` becomes 0, so a partial reply never fails.
    """

    skills: List[str] = Field(default_factory=list)
    experience_years: int = 0
    education: List[Education] = Field(default_factory=list)
    job_recommendations: List[JobRecommendation] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _unique_skills(cls, value: Any) -> List[str]:
        seen = set()
        skills = []
        for skill in _string_list(value):
            if skill not in seen:
                seen.add(skill)
                skills.append(skill)
        return skills

    @field_validator("strengths", "improvements", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> List[str]:
        return _string_list(value)

    @field_validator("experience_years", mode="before")
    @classmethod
    def _years(cls, value: Any) -> int:
        years = _coerce_int(value) if value is not None else None
        if years is None or years < 0:
            return 0
        return years

    @field_validator("education", "job_recommendations", mode="before")
    @classmethod
    def _objects(cls, value: Any) -> list:
        return [item for item in _as_list(value) if isinstance(item, (dict, BaseModel))]

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict without unset optional recommendation fields."""
        return self.model_dump(mode="json", exclude_none=True)


# --- Request / response envelopes ---
class AnalyzeResumeRequest(BaseModel):
    resume_text: str = Field(alias="resumeText", min_length=1)
    resume_id: str = Field(alias="resumeId", min_length=1)

    class Config:
        populate_by_name = True


class AnalyzeResumeResponse(BaseModel):
    success: bool = True
    analysis: Dict[str, Any]


class AuthenticatedUser(BaseModel):
    id: str
    email: Optional[str] = None


# --- Stored rows ---
class ResumeRecord(BaseModel):
    id: str
    user_id: str
    file_name: str
    file_path: str
    file_size: int
    analysis_status: AnalysisStatus = AnalysisStatus.PENDING
    upload_date: Optional[str] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _ids(cls, value: Any) -> str:
        return str(value)


class UploadResponse(BaseModel):
    success: bool = True
    resume: ResumeRecord
    analysis: Dict[str, Any]


class AnalysisHistoryEntry(BaseModel):
    id: str
    resume_id: str
    skills: List[str] = Field(default_factory=list)
    experience_years: int = 0
    education: List[Education] = Field(default_factory=list)
    job_recommendations: List[JobRecommendation] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None
    file_name: Optional[str] = None
    upload_date: Optional[str] = None

    @field_validator("id", "resume_id", mode="before")
    @classmethod
    def _ids(cls, value: Any) -> str:
        return str(value)

    @field_validator("skills", "strengths", "improvements", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> List[str]:
        return _string_list(value)

    @field_validator("experience_years", mode="before")
    @classmethod
    def _years(cls, value: Any) -> int:
        years = _coerce_int(value) if value is not None else None
        return years if years and years > 0 else 0

    @field_validator("education", "job_recommendations", mode="before")
    @classmethod
    def _objects(cls, value: Any) -> list:
        return [item for item in _as_list(value) if isinstance(item, (dict, BaseModel))]


class RecommendationsResponse(BaseModel):
    analysis_id: str
    recommendations: List[JobRecommendation]
