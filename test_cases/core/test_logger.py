import pytest

from catlog.core.log_exceptions import InvalidLevelError
from catlog.core.log_level import Level


def test_get_logger_takes_a_category(logger) -> None:
    assert logger.category == "tests"
    assert logger.level is Level.TRACE
    for method in ("trace", "debug", "info", "warn", "error", "fatal"):
        assert callable(getattr(logger, method))


def test_category_is_read_only(logger) -> None:
    with pytest.raises(AttributeError):
        logger.category = "other"


def test_emits_log_events(logger, seen) -> None:
    returned = logger.trace("Trace event")
    assert len(seen) == 1
    assert seen[0] is returned
    assert str(seen[0].level) == "TRACE"
    assert seen[0].message == "Trace event"
    assert seen[0].start_time is not None


@pytest.mark.parametrize(
    "threshold,below",
    [
        ("DEBUG", Level.TRACE),
        ("INFO", Level.DEBUG),
        ("WARN", Level.INFO),
        ("ERROR", Level.WARN),
        ("FATAL", Level.ERROR),
    ],
)
def test_calls_below_threshold_are_dropped_before_dispatch(manager, logger, seen, threshold, below) -> None:
    delivered = []
    manager.add_appender(delivered.append)
    logger.set_level(threshold)

    assert logger.log(below, "This should not generate a log message") is None
    assert seen == []
    assert delivered == []


def test_set_level_rejects_unknown_names(logger) -> None:
    with pytest.raises(InvalidLevelError):
        logger.set_level("CHATTY")
    assert logger.level is Level.TRACE


def test_is_level_enabled(logger) -> None:
    logger.set_level("WARN")
    assert logger.is_level_enabled("ERROR")
    assert logger.is_level_enabled(Level.WARN)
    assert not logger.is_level_enabled("INFO")


def test_non_string_messages_are_rendered_as_text(logger, seen) -> None:
    logger.info(42)
    assert seen[0].message == "42"


def test_failing_listener_does_not_stop_others_or_dispatch(manager, logger, seen, reports) -> None:
    delivered = []
    manager.add_appender(delivered.append)

    def broken(event):
        raise RuntimeError("listener broke")

    after = []
    logger.add_listener(broken)
    logger.add_listener(after.append)

    event = logger.info("still delivered")

    assert seen == [event]
    assert after == [event]
    assert delivered == [event]
    assert len(reports) == 1
    assert "listener broke" in reports[0]
    assert manager.registry.recent_failures()[0].category == "tests"


def test_remove_listener(logger, seen) -> None:
    logger.remove_listener(seen.append)
    logger.info("nobody listening")
    assert seen == []
