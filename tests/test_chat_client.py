"""Tests for the TUI's SSE parser."""

from __future__ import annotations

from chat import iter_sse


def test_parses_events():
    lines = [
        "event: session",
        'data: {"sessionId": "abc"}',
        "",
        "event: message",
        'data: {"text": "Hi"}',
        "",
        "event: done",
        "data: {}",
        "",
    ]
    assert list(iter_sse(iter(lines))) == [
        ("session", {"sessionId": "abc"}),
        ("message", {"text": "Hi"}),
        ("done", {}),
    ]


def test_trailing_event_without_blank_line():
    assert list(iter_sse(iter(["event: done", "data: {}"]))) == [("done", {})]


def test_keepalive_lines_ignored():
    lines = [None, ": ping", "", "event: result", 'data: {"text": "x"}', ""]
    assert list(iter_sse(iter(lines))) == [("result", {"text": "x"})]
