"""
Shared fixtures and fakes for the test suite
"""

from typing import List, Optional

import pytest

from contact_extractor.models.contact import Contact, ExtractionResult
from contact_extractor.services.preference_service import MemoryPreferenceStore
from contact_extractor.utils.clipboard_writer import ClipboardWriter


JANE = Contact(name="Jane Doe", email="jane@x.com", title="", phone="")


class FakeExtractionClient:
    """Returns a fixed result (or raises) and records every call"""

    def __init__(self, result: Optional[ExtractionResult] = None, error: Optional[Exception] = None):
        self.result = result if result is not None else ExtractionResult(contacts=[JANE])
        self.error = error
        self.calls: List[str] = []

    async def extract(self, text: str) -> ExtractionResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


class RecordingRichBackend:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.writes = []

    def write(self, plain: str, html: str) -> None:
        if self.fail:
            raise RuntimeError("rich clipboard unavailable")
        self.writes.append((plain, html))


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_client():
    return FakeExtractionClient()


@pytest.fixture
def preferences():
    return MemoryPreferenceStore()


@pytest.fixture
def plain_writes():
    return []


@pytest.fixture
def clipboard(plain_writes):
    return ClipboardWriter(plain_backend=plain_writes.append)


@pytest.fixture
def clock():
    return FakeClock()
