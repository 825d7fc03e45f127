from typing import Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # AI gateway (OpenAI-compatible chat completions)
    lovable_api_key: Optional[str] = None
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_model: str = "google/gemini-2.5-flash"
    # None leaves the request unbounded
    ai_request_timeout: Optional[float] = None

    resume_bucket: str = "resumes"
    max_upload_bytes: int = 10485760

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
