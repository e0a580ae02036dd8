"""
Utility modules for formatting and clipboard access
"""

from contact_extractor.utils.clipboard_writer import ClipboardWriter, CopyAcknowledgement
from contact_extractor.utils.contact_formatter import (
    labeled_detail_format,
    recipient_format,
    simple_detail_format,
    table_rows,
)

__all__ = [
    "ClipboardWriter",
    "CopyAcknowledgement",
    "labeled_detail_format",
    "recipient_format",
    "simple_detail_format",
    "table_rows",
]
