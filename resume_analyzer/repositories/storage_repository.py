from datetime import datetime, timezone
from typing import Optional

from supabase import Client


def build_object_path(user_id: str, file_name: str, now: Optional[datetime] = None) -> str:
    """``{user_id}/{epoch_ms}_{file_name}``"""
    now = now or datetime.now(timezone.utc)
    epoch_ms = int(now.timestamp() * 1000)
    return f"{user_id}/{epoch_ms}_{file_name}"


class StorageRepository:
    def __init__(self, client: Client, bucket: str):
        self.client = client
        self.bucket = bucket

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=content,
            file_options={"content-type": content_type},
        )
        return path
