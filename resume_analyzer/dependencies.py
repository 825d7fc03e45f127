import logging
from typing import Optional

from fastapi import Depends, Header
from supabase import create_client, Client

from .config import settings
from .errors import ConfigurationError, Unauthorized
from .models import AuthenticatedUser
from .repositories import AnalysisRepository, ResumeRepository, StorageRepository
from .services.ai_gateway import AIGatewayClient
from .services.analysis_service import AnalysisService
from .services.upload_service import UploadService

logger = logging.getLogger(__name__)

_supabase_client: Client = None


def get_supabase_client() -> Client:
    global _supabase_client
    if _supabase_client is None:
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ConfigurationError(
                "SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY not configured"
            )
        try:
            _supabase_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        except Exception as e:
            raise ConfigurationError(
                f"Failed to initialize Supabase client: {str(e)}"
            ) from e
    return _supabase_client


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if not authorization:
        raise Unauthorized("No authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized()
    return token.strip()


def get_current_user(
    token: str = Depends(get_bearer_token),
    supabase: Client = Depends(get_supabase_client),
) -> AuthenticatedUser:
    """Resolves the bearer token to a Supabase auth user."""
    try:
        response = supabase.auth.get_user(token)
    except Exception as e:
        logger.warning("Token rejected by auth: %s", e)
        raise Unauthorized() from e
    user = getattr(response, "user", None)
    if user is None:
        raise Unauthorized()
    return AuthenticatedUser(id=str(user.id), email=getattr(user, "email", None))


def get_resume_repository(
    supabase: Client = Depends(get_supabase_client),
) -> ResumeRepository:
    return ResumeRepository(supabase)


def get_analysis_repository(
    supabase: Client = Depends(get_supabase_client),
) -> AnalysisRepository:
    return AnalysisRepository(supabase)


def get_storage_repository(
    supabase: Client = Depends(get_supabase_client),
) -> StorageRepository:
    return StorageRepository(supabase, settings.resume_bucket)


def get_ai_gateway() -> AIGatewayClient:
    return AIGatewayClient.from_settings(settings)


def get_analysis_service(
    gateway: AIGatewayClient = Depends(get_ai_gateway),
    resumes: ResumeRepository = Depends(get_resume_repository),
    analyses: AnalysisRepository = Depends(get_analysis_repository),
) -> AnalysisService:
    return AnalysisService(gateway=gateway, resumes=resumes, analyses=analyses)


def get_upload_service(
    storage: StorageRepository = Depends(get_storage_repository),
    resumes: ResumeRepository = Depends(get_resume_repository),
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> UploadService:
    return UploadService(
        storage=storage,
        resumes=resumes,
        analysis_service=analysis_service,
        max_bytes=settings.max_upload_bytes,
    )
