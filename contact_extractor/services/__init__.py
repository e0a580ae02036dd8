"""
Services for extraction, preferences and session state
"""

from contact_extractor.services.llm_service import (
    ExtractionClient,
    ExtractionError,
    GeminiExtractionClient,
)
from contact_extractor.services.preference_service import (
    FilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
)
from contact_extractor.services.session_controller import SessionController, SessionRegistry

__all__ = [
    "ExtractionClient",
    "ExtractionError",
    "GeminiExtractionClient",
    "FilePreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "SessionController",
    "SessionRegistry",
]
