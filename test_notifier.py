#!/usr/bin/env python3
"""
Tests for the host notification sinks.
"""

import pytest

from PSO_CORE import CONFIG
from PSO_CORE.Notify.Notifier import CallbackNotifier, LogNotifier, RecordingNotifier, greet


def test_greet_sends_greeting():
    notifier = RecordingNotifier()
    greet(notifier)
    assert notifier.records == [("info", CONFIG.GREETING)]
    assert CONFIG.GREETING == "Hello, pso!"


def test_greet_defaults_to_logger(capsys):
    greet()
    assert "Hello, pso!" in capsys.readouterr().out


def test_callback_notifier_forwards_message_and_level():
    received = []
    notifier = CallbackNotifier(lambda message, level: received.append((message, level)))
    notifier.notify("tick done")
    notifier.notify("overflow", "warning")
    assert received == [("tick done", "info"), ("overflow", "warning")]


def test_callback_must_be_callable():
    with pytest.raises(TypeError):
        CallbackNotifier("alert")


def test_recording_notifier_filters_by_level():
    notifier = RecordingNotifier()
    notifier.notify("a")
    notifier.notify("b", "warning")
    assert notifier.messages() == ["a", "b"]
    assert notifier.messages("warning") == ["b"]


def test_log_notifier_writes_warnings(capsys):
    LogNotifier().notify("something odd", "warning")
    out = capsys.readouterr().out
    assert "something odd" in out
    assert "[Notifier" in out
