"""
Tests for theme preference storage
"""

import pytest

from contact_extractor.models.contact import Theme
from contact_extractor.services.preference_service import (
    FilePreferenceStore,
    MemoryPreferenceStore,
    parse_system_theme,
    resolve_theme,
)


class TestFilePreferenceStore:

    def test_missing_file_has_no_preference(self, tmp_path):
        assert FilePreferenceStore(tmp_path / "prefs.json").load() is None

    def test_save_then_reload(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        FilePreferenceStore(path).save(Theme.DARK)

        # A fresh store simulates a page reload / restart
        assert FilePreferenceStore(path).load() is Theme.DARK

    def test_last_write_wins(self, tmp_path):
        store = FilePreferenceStore(tmp_path / "prefs.json")
        store.save(Theme.DARK)
        store.save(Theme.LIGHT)
        assert store.load() is Theme.LIGHT

    @pytest.mark.parametrize("content", ["not json", '{"theme": "purple"}', "{}", "[]"])
    def test_corrupt_file_is_ignored(self, tmp_path, content):
        path = tmp_path / "prefs.json"
        path.write_text(content, encoding="utf-8")
        assert FilePreferenceStore(path).load() is None


def test_memory_store_round_trip():
    store = MemoryPreferenceStore()
    assert store.load() is None
    store.save(Theme.DARK)
    assert store.load() is Theme.DARK


@pytest.mark.parametrize(
    "header,expected",
    [('"dark"', Theme.DARK), ("light", Theme.LIGHT), (None, None), ('"no-preference"', None)],
)
def test_parse_system_theme(header, expected):
    assert parse_system_theme(header) == expected


def test_resolve_theme_order():
    assert resolve_theme(Theme.DARK, Theme.LIGHT) is Theme.DARK
    assert resolve_theme(None, Theme.DARK) is Theme.DARK
    assert resolve_theme(None, None) is Theme.LIGHT
