"""
API module for the browser UI and JSON endpoints
"""

from contact_extractor.api.server import create_app

__all__ = [
    "create_app",
]
