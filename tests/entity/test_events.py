"""Tests for relstore.events: EventDispatcher."""

import pytest

from relstore import EventDispatcher


def test_listeners_called_in_registration_order():
    calls = []
    dispatcher = EventDispatcher()
    dispatcher.register("insert.before", lambda event, subject: calls.append(("a", event, subject)))
    dispatcher.register("insert.before", lambda event, subject: calls.append(("b", event, subject)))
    dispatcher.register("insert.after", lambda event, subject: calls.append(("c", event, subject)))
    subject = {"name": "x"}
    assert dispatcher.fire("insert.before", subject) is subject
    assert calls == [("a", "insert.before", subject), ("b", "insert.before", subject)]


def test_fire_without_listeners():
    assert EventDispatcher().fire("delete.after", 1) == 1


def test_listener_errors_propagate():
    def fail(event, subject):
        raise ValueError(event)

    dispatcher = EventDispatcher().register("update.before", fail)
    with pytest.raises(ValueError, match="update.before"):
        dispatcher.fire("update.before", {})
