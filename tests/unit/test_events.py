import logging

import pytest

from jobboard.core.events import EventDispatcher, JobPosted
from jobboard.db.seed import demo_jobs


def test_handlers_run_in_subscription_order() -> None:
    dispatcher = EventDispatcher()
    calls: list[str] = []
    dispatcher.subscribe(JobPosted, lambda event: calls.append("first"))
    dispatcher.subscribe(JobPosted, lambda event: calls.append("second"))

    delivered = dispatcher.publish(JobPosted(job=demo_jobs()[0]))

    assert calls == ["first", "second"]
    assert delivered == 2


def test_failing_handler_propagates_and_stops_fan_out(caplog) -> None:
    dispatcher = EventDispatcher()
    calls: list[str] = []

    def broken(event) -> None:
        raise RuntimeError("boom")

    dispatcher.subscribe(JobPosted, broken)
    dispatcher.subscribe(JobPosted, lambda event: calls.append("after"))

    with caplog.at_level(logging.ERROR, logger="jobboard.core.events"):
        with pytest.raises(RuntimeError):
            dispatcher.publish(JobPosted(job=demo_jobs()[0]))

    assert calls == []
    assert "Event handler failed" in caplog.text


def test_publish_without_subscribers() -> None:
    assert EventDispatcher().publish(JobPosted(job=demo_jobs()[0])) == 0
