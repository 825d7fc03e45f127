"""
Data access over the managed backend (Supabase tables and storage).
Each repository takes a client so tests can swap in fakes.
"""

from .resume_repository import ResumeRepository
from .analysis_repository import AnalysisRepository
from .storage_repository import StorageRepository

__all__ = [
    "ResumeRepository",
    "AnalysisRepository",
    "StorageRepository",
]
