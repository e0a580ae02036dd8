"""
Clipboard Writer - Copy plain text and optional HTML to the system clipboard

Rich copies (plain + HTML in one payload) are tried first when a rich backend
is available; any failure falls back to a plain-text copy. Clipboard problems
are logged and never raised to the caller.
"""

import logging
import sys
import time
from typing import Callable, Optional, Protocol

import pyperclip

logger = logging.getLogger(__name__)

COPIED_LABEL = "Copied!"

_CF_HTML_HEADER = (
    "Version:0.9\r\n"
    "StartHTML:{start_html:010d}\r\n"
    "EndHTML:{end_html:010d}\r\n"
    "StartFragment:{start_fragment:010d}\r\n"
    "EndFragment:{end_fragment:010d}\r\n"
)
_FRAGMENT_START = "<html><body><!--StartFragment-->"
_FRAGMENT_END = "<!--EndFragment--></body></html>"


class RichClipboardBackend(Protocol):
    """Writes plain text and HTML to the clipboard as a single payload"""

    def write(self, plain: str, html: str) -> None:
        ...


def build_cf_html(fragment: str) -> bytes:
    """
    Wrap an HTML fragment in the Windows "HTML Format" envelope

    Offsets in the header are byte positions in the UTF-8 payload.

    Args:
        fragment: HTML markup to place between the fragment markers

    Returns:
        Encoded clipboard payload
    """
    placeholder = _CF_HTML_HEADER.format(
        start_html=0, end_html=0, start_fragment=0, end_fragment=0
    )
    header_len = len(placeholder.encode("utf-8"))
    prefix = _FRAGMENT_START.encode("utf-8")
    body = fragment.encode("utf-8")
    suffix = _FRAGMENT_END.encode("utf-8")

    start_fragment = header_len + len(prefix)
    end_fragment = start_fragment + len(body)
    header = _CF_HTML_HEADER.format(
        start_html=header_len,
        end_html=end_fragment + len(suffix),
        start_fragment=start_fragment,
        end_fragment=end_fragment,
    )
    return header.encode("utf-8") + prefix + body + suffix


class Win32HtmlClipboard:
    """Rich clipboard backend for Windows (CF_UNICODETEXT + HTML Format)"""

    def write(self, plain: str, html: str) -> None:
        import win32clipboard
        import win32con

        html_format = win32clipboard.RegisterClipboardFormat("HTML Format")
        win32clipboard.OpenClipboard()
        try:
            win32clipboard.EmptyClipboard()
            win32clipboard.SetClipboardData(win32con.CF_UNICODETEXT, plain)
            win32clipboard.SetClipboardData(html_format, build_cf_html(html))
        finally:
            win32clipboard.CloseClipboard()


def default_rich_backend() -> Optional[RichClipboardBackend]:
    """Rich backend for the current platform, or None when plain text only"""
    if sys.platform == "win32":
        return Win32HtmlClipboard()
    return None


class ClipboardWriter:
    """
    Copy text to the system clipboard with a rich-first, plain-fallback policy

    Examples:
        writer = ClipboardWriter()
        ok = writer.copy("Jane Doe jane@x.com", "<p><strong>Jane Doe</strong> jane@x.com</p>")
    """

    def __init__(
        self,
        plain_backend: Callable[[str], None] = pyperclip.copy,
        rich_backend: Optional[RichClipboardBackend] = None,
    ):
        self.plain_backend = plain_backend
        self.rich_backend = rich_backend

    def copy(self, plain: str, html: Optional[str] = None) -> bool:
        """
        Copy text, pairing it with HTML when possible

        Args:
            plain: Plain-text representation (always written)
            html: Optional HTML representation for rich-text targets

        Returns:
            True if something reached the clipboard
        """
        if html and self.rich_backend is not None:
            try:
                self.rich_backend.write(plain, html)
                logger.debug(f"Copied {len(plain)} characters with HTML")
                return True
            except Exception as e:
                logger.warning(f"Rich copy failed, falling back to plain text: {e}")

        try:
            self.plain_backend(plain)
            logger.debug(f"Copied {len(plain)} characters as plain text")
            return True
        except Exception as e:
            logger.error(f"Fallback copy failed: {e}")
            return False


class CopyAcknowledgement:
    """
    Transient "Copied!" state shown by a copy button

    The label stays for a fixed window after each successful copy; a new
    copy restarts the window.
    """

    def __init__(self, duration: float = 2.0, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self._clock = clock
        self._copied_at: Optional[float] = None

    def acknowledge(self) -> None:
        self._copied_at = self._clock()

    def remaining(self) -> float:
        """Seconds left in the current window (0 when idle)"""
        if self._copied_at is None:
            return 0.0
        left = self.duration - (self._clock() - self._copied_at)
        return left if left > 0 else 0.0

    @property
    def is_active(self) -> bool:
        return self.remaining() > 0

    def label(self, idle_label: str) -> str:
        return COPIED_LABEL if self.is_active else idle_label
