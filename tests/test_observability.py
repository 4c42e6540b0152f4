import logging

import pytest
from prometheus_client import REGISTRY

from phonoscribe.utils import logging_config
from phonoscribe.utils.logging_config import LOG_LEVEL_ENV, configure_logging
from phonoscribe.utils.observability import (
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)


def test_structured_logger_renders_bound_and_event_context(caplog):
    caplog.set_level(logging.INFO, logger="phonoscribe.tests")
    logger = get_logger("phonoscribe.tests").bind(component="tokenizer")

    logger.info("Tokenized text", context={"tokens": 3})

    assert caplog.records[-1].message == (
        'Tokenized text | {"component": "tokenizer", "tokens": 3}'
    )


def test_logger_without_context_leaves_message_untouched(caplog):
    caplog.set_level(logging.INFO, logger="phonoscribe.tests")

    get_logger("phonoscribe.tests").info("plain")

    assert caplog.records[-1].message == "plain"


def test_counter_registration_is_idempotent():
    first = create_counter("phonoscribe_test_events_total", "Test events", ("kind",))
    second = create_counter("phonoscribe_test_events_total", "Test events", ("kind",))
    before = REGISTRY.get_sample_value("phonoscribe_test_events_total", {"kind": "a"}) or 0.0

    first.labels(kind="a").inc()
    second.labels(kind="a").inc()

    assert REGISTRY.get_sample_value("phonoscribe_test_events_total", {"kind": "a"}) == before + 2


def test_histogram_timer_observes_once():
    histogram = create_histogram("phonoscribe_test_seconds", "Test latency")
    before = REGISTRY.get_sample_value("phonoscribe_test_seconds_count") or 0.0

    with histogram.time():
        pass

    assert REGISTRY.get_sample_value("phonoscribe_test_seconds_count") == before + 1


def test_spans_work_without_sdk():
    with pytest.raises(RuntimeError):
        with start_span("phonoscribe.test", {"attempt": 1, "skipped": None}) as span:
            record_exception(span, RuntimeError("boom"))
            raise RuntimeError("boom")


@pytest.fixture
def fresh_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    package_logger = logging.getLogger("phonoscribe")
    original_level = package_logger.level
    yield calls
    package_logger.setLevel(original_level)


def test_configure_logging_uses_explicit_level(fresh_logging):
    configure_logging("debug")

    assert fresh_logging[0]["level"] == logging.DEBUG
    assert logging.getLogger("phonoscribe").level == logging.DEBUG


def test_configure_logging_reads_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")

    configure_logging()

    assert fresh_logging[0]["level"] == logging.ERROR


def test_configure_logging_runs_once_unless_forced(fresh_logging):
    configure_logging("info")
    configure_logging("debug")

    assert len(fresh_logging) == 1

    configure_logging("warning", force=True)

    assert len(fresh_logging) == 2
    assert fresh_logging[1]["force"] is True


def test_unknown_level_falls_back_to_warning(fresh_logging):
    configure_logging("chatty")

    assert fresh_logging[0]["level"] == logging.WARNING
