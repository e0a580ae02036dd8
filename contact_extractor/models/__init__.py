"""
Data models for contact extraction
"""

from contact_extractor.models.contact import Contact, DetailFormat, ExtractionResult, Theme

__all__ = [
    "Contact",
    "DetailFormat",
    "ExtractionResult",
    "Theme",
]
