"""
Tests for the clipboard writer and copy acknowledgement
"""

from contact_extractor.utils.clipboard_writer import (
    COPIED_LABEL,
    ClipboardWriter,
    CopyAcknowledgement,
    build_cf_html,
)
from conftest import FakeClock, RecordingRichBackend


class TestClipboardWriter:

    def test_rich_copy_writes_both_representations(self):
        plain_writes = []
        rich = RecordingRichBackend()
        writer = ClipboardWriter(plain_backend=plain_writes.append, rich_backend=rich)

        assert writer.copy("Jane Doe", "<strong>Jane Doe</strong>") is True
        assert rich.writes == [("Jane Doe", "<strong>Jane Doe</strong>")]
        assert plain_writes == []

    def test_falls_back_to_plain_when_rich_write_raises(self):
        plain_writes = []
        writer = ClipboardWriter(
            plain_backend=plain_writes.append,
            rich_backend=RecordingRichBackend(fail=True),
        )

        assert writer.copy("Jane Doe", "<strong>Jane Doe</strong>") is True
        assert plain_writes == ["Jane Doe"]

    def test_plain_only_without_rich_backend(self):
        plain_writes = []
        writer = ClipboardWriter(plain_backend=plain_writes.append)

        assert writer.copy("Jane Doe", "<strong>Jane Doe</strong>") is True
        assert plain_writes == ["Jane Doe"]

    def test_no_markup_skips_rich_backend(self):
        plain_writes = []
        rich = RecordingRichBackend()
        writer = ClipboardWriter(plain_backend=plain_writes.append, rich_backend=rich)

        writer.copy("Jane Doe <jane@x.com>; ")
        assert rich.writes == []
        assert plain_writes == ["Jane Doe <jane@x.com>; "]

    def test_failure_is_logged_not_raised(self, caplog):
        def broken(_text):
            raise RuntimeError("no clipboard")

        writer = ClipboardWriter(plain_backend=broken, rich_backend=RecordingRichBackend(fail=True))

        assert writer.copy("x", "<b>x</b>") is False
        assert "Fallback copy failed" in caplog.text


def test_cf_html_offsets_point_at_fragment():
    payload = build_cf_html("<p>Zoë</p>")
    header = payload.split(b"<html>")[0].decode("utf-8")
    fields = dict(line.split(":", 1) for line in header.strip().splitlines())

    start, end = int(fields["StartFragment"]), int(fields["EndFragment"])
    assert payload[start:end].decode("utf-8") == "<p>Zoë</p>"
    assert int(fields["EndHTML"]) == len(payload)
    assert payload[int(fields["StartHTML"]):].startswith(b"<html>")


class TestCopyAcknowledgement:

    def test_idle_label_before_any_copy(self):
        ack = CopyAcknowledgement(2.0, FakeClock())
        assert ack.label("Copy Details") == "Copy Details"
        assert not ack.is_active

    def test_label_reverts_after_window(self):
        clock = FakeClock()
        ack = CopyAcknowledgement(2.0, clock)

        ack.acknowledge()
        assert ack.label("Copy Details") == COPIED_LABEL
        clock.advance(1.9)
        assert ack.label("Copy Details") == COPIED_LABEL
        clock.advance(0.2)
        assert ack.label("Copy Details") == "Copy Details"

    def test_new_copy_restarts_window(self):
        clock = FakeClock()
        ack = CopyAcknowledgement(2.0, clock)

        ack.acknowledge()
        clock.advance(1.5)
        ack.acknowledge()
        clock.advance(1.5)
        assert ack.is_active
        assert ack.remaining() == 0.5
