from __future__ import annotations

import logging
from datetime import datetime

from smartqueue.domain.enums import NotificationKind
from smartqueue.services.notifications import (
    CompositeSink,
    LoggingNotificationSink,
    NotificationCenter,
)

NOW = datetime(2026, 1, 1, 12, 0)


def test_center_lists_newest_first_and_tracks_reads() -> None:
    center = NotificationCenter(clock=lambda: NOW)
    center.emit("first", NotificationKind.INFO)
    center.emit("second", NotificationKind.WARNING)

    items = center.list()
    assert [n.message for n in items] == ["second", "first"]
    assert items[0].created_at == NOW
    assert center.unread_count() == 2

    assert center.mark_read(items[1].id) is True
    assert center.mark_read("missing") is False
    assert center.unread_count() == 1

    center.clear()
    assert center.list() == []


def test_center_keeps_bounded_history() -> None:
    center = NotificationCenter(max_items=2)
    for i in range(5):
        center.emit(f"n{i}", NotificationKind.INFO)

    assert [n.message for n in center.list()] == ["n4", "n3"]


def test_logging_sink_maps_warning_level(caplog) -> None:
    sink = LoggingNotificationSink()

    with caplog.at_level(logging.INFO, logger="smartqueue.notifications"):
        sink.emit("careful", NotificationKind.WARNING)
        sink.emit("done", NotificationKind.SUCCESS)

    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (logging.WARNING, "[warning] careful") in levels
    assert (logging.INFO, "[success] done") in levels


def test_composite_sink_isolates_failing_sinks() -> None:
    class Broken:
        def emit(self, message, kind) -> None:
            raise RuntimeError("boom")

    center = NotificationCenter()
    CompositeSink(Broken(), center).emit("still delivered", NotificationKind.INFO)

    assert [n.message for n in center.list()] == ["still delivered"]
