"""
Pytest configuration.
In-memory stand-ins for the Supabase tables and bucket, plus a mocked AI gateway.
"""

import copy
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from resume_analyzer.models import AnalysisStatus, AuthenticatedUser, ResumeRecord
from resume_analyzer.services.ai_gateway import AIGatewayClient
from resume_analyzer.services.analysis_service import AnalysisService
from resume_analyzer.services.upload_service import UploadService


GATEWAY_URL = "https://gateway.test/v1/chat/completions"

EXAMPLE_ANALYSIS = {
    "skills": ["React", "Node.js", "TypeScript"],
    "experience_years": 5,
    "education": [
        {
            "degree": "Bachelor's in Computer Science",
            "institution": "University Name",
            "year": "2020",
        }
    ],
    "job_recommendations": [
        {
            "title": "Senior Software Engineer",
            "company_type": "Tech Companies",
            "requirements": "5+ years experience, React, Node.js, System Design",
            "salary_range": "$120k-$160k",
            "match_score": 92,
            "growth_potential": "High",
            "why_good_fit": "Your strong background in full-stack development and 5 years of experience align perfectly with this role.",
        }
    ],
    "strengths": ["Strong technical skills", "Proven track record"],
    "improvements": ["Add leadership experience", "Obtain cloud certifications"],
}


def completion_body(content: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ==================== Fake repositories ====================

class FakeResumeRepository:
    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.completed_calls: List[str] = []
        self.fail_insert = False

    def add(self, user_id: str, file_name: str = "resume.pdf") -> ResumeRecord:
        return self.create_pending(user_id, file_name, f"{user_id}/1_{file_name}", 1024)

    def create_pending(self, user_id, file_name, file_path, file_size) -> ResumeRecord:
        if self.fail_insert:
            raise RuntimeError("insert into resumes failed")
        row = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "file_name": file_name,
            "file_path": file_path,
            "file_size": file_size,
            "analysis_status": AnalysisStatus.PENDING.value,
            "upload_date": datetime.now(timezone.utc).isoformat(),
        }
        self.rows[row["id"]] = row
        return ResumeRecord.model_validate(row)

    def get(self, resume_id: str) -> Optional[ResumeRecord]:
        row = self.rows.get(resume_id)
        return ResumeRecord.model_validate(row) if row else None

    def mark_completed(self, resume_id: str) -> None:
        self.completed_calls.append(resume_id)
        if resume_id in self.rows:
            self.rows[resume_id]["analysis_status"] = AnalysisStatus.COMPLETED.value


class FakeAnalysisRepository:
    def __init__(self, resumes: FakeResumeRepository = None):
        self.rows: List[Dict[str, Any]] = []
        self.resumes = resumes
        self.fail_insert = False

    def insert(self, resume_id, user_id, analysis_text, analysis) -> Dict[str, Any]:
        if self.fail_insert:
            raise RuntimeError("duplicate key value violates unique constraint")
        payload = analysis.to_payload()
        row = {
            "id": str(uuid.uuid4()),
            "resume_id": resume_id,
            "user_id": user_id,
            "analysis_text": analysis_text,
            "created_at": datetime.now(timezone.utc).isoformat(),
            **payload,
        }
        self.rows.append(row)
        return row

    def _joined(self, row: Dict[str, Any]) -> Dict[str, Any]:
        joined = copy.deepcopy(row)
        resume = self.resumes.rows.get(row["resume_id"]) if self.resumes else None
        joined["resumes"] = (
            {"file_name": resume["file_name"], "upload_date": resume["upload_date"]}
            if resume
            else None
        )
        return joined

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        rows = [self._joined(r) for r in self.rows if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    def get_for_user(self, analysis_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        for row in self.rows:
            if row["id"] == analysis_id and row["user_id"] == user_id:
                return self._joined(row)
        return None


class FakeStorageRepository:
    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.fail_upload = False

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        if self.fail_upload:
            raise RuntimeError("storage unavailable")
        self.objects[path] = content
        return path


class RecordingGateway:
    """Collects the requests sent through an ``httpx.MockTransport``."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def sent_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def client(self) -> AIGatewayClient:
        return AIGatewayClient(
            api_key="test-key",
            url=GATEWAY_URL,
            model="google/gemini-2.5-flash",
            transport=httpx.MockTransport(self),
        )


def reply_with(content: str, status_code: int = 200) -> RecordingGateway:
    return RecordingGateway(
        lambda request: httpx.Response(status_code, json=completion_body(content))
    )


def reply_status(status_code: int, text: str = "upstream error") -> RecordingGateway:
    return RecordingGateway(lambda request: httpx.Response(status_code, text=text))


# ==================== Fixtures ====================

@pytest.fixture
def user() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-123", email="jane@example.com")


@pytest.fixture
def resume_repository() -> FakeResumeRepository:
    return FakeResumeRepository()


@pytest.fixture
def analysis_repository(resume_repository) -> FakeAnalysisRepository:
    return FakeAnalysisRepository(resume_repository)


@pytest.fixture
def storage_repository() -> FakeStorageRepository:
    return FakeStorageRepository()


@pytest.fixture
def example_gateway() -> RecordingGateway:
    return reply_with(json.dumps(EXAMPLE_ANALYSIS))


def make_analysis_service(gateway, resume_repository, analysis_repository) -> AnalysisService:
    return AnalysisService(
        gateway=gateway.client(),
        resumes=resume_repository,
        analyses=analysis_repository,
    )


def make_upload_service(
    gateway, storage_repository, resume_repository, analysis_repository
) -> UploadService:
    return UploadService(
        storage=storage_repository,
        resumes=resume_repository,
        analysis_service=make_analysis_service(
            gateway, resume_repository, analysis_repository
        ),
    )


@pytest.fixture
def api(user, resume_repository, analysis_repository, storage_repository):
    """
    Builds a TestClient whose dependencies point at the fakes.
    Call with the gateway to use; ``authenticated=False`` keeps real bearer auth
    against a fake Supabase auth client.
    """
    from resume_analyzer import dependencies
    from resume_analyzer.main import app

    def build(gateway: RecordingGateway, authenticated: bool = True, auth_client=None):
        analysis_service = make_analysis_service(
            gateway, resume_repository, analysis_repository
        )
        overrides = {
            dependencies.get_resume_repository: lambda: resume_repository,
            dependencies.get_analysis_repository: lambda: analysis_repository,
            dependencies.get_storage_repository: lambda: storage_repository,
            dependencies.get_ai_gateway: gateway.client,
            dependencies.get_analysis_service: lambda: analysis_service,
            dependencies.get_upload_service: lambda: UploadService(
                storage=storage_repository,
                resumes=resume_repository,
                analysis_service=analysis_service,
            ),
        }
        if authenticated:
            overrides[dependencies.get_current_user] = lambda: user
        if auth_client is not None:
            overrides[dependencies.get_supabase_client] = lambda: auth_client
        app.dependency_overrides = overrides
        return TestClient(app)

    yield build
    app.dependency_overrides = {}
