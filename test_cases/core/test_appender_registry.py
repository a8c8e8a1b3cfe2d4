import pytest

from catlog.core.appender_registry import AppenderRegistry, CallableSink, flatten_categories
from catlog.core.log_event import LogEvent
from catlog.core.log_level import Level


def _event(category: str, message: str = "m") -> LogEvent:
    return LogEvent(category=category, level=Level.DEBUG, message=message)


class Recorder:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


def test_appender_without_category_receives_every_event(manager, logger, seen) -> None:
    received = []
    manager.add_appender(received.append)

    logger.debug("This is a test")
    assert received == seen

    manager.get_logger("pants").debug("another category")
    assert received[-1].message == "another category"


def test_global_and_category_appenders_together(manager) -> None:
    everything, cheese_only = [], []
    manager.add_appender(everything.append)
    manager.add_appender(cheese_only.append, "cheese")

    cheese = manager.get_logger("cheese")
    event = cheese.debug("This is a test")
    assert everything == [event]
    assert cheese_only == [event]

    manager.get_logger("pants").debug("this should not be propagated to cheese_only")
    assert cheese_only == [event]
    assert everything[-1].message == "this should not be propagated to cheese_only"


def test_category_appender_only_sees_its_category(manager, logger, seen) -> None:
    received = []
    manager.add_appender(received.append, "tests")

    logger.debug("this is a test")
    assert received == seen

    manager.get_logger("some other category").debug("Cheese")
    assert len(received) == 1


def test_multiple_categories_variadic(manager, logger) -> None:
    received = []
    manager.add_appender(received.append, "tests", "biscuits")

    logger.debug("this is a test")
    manager.get_logger("biscuits").debug("mmm... garibaldis")
    manager.get_logger("something else").debug("pants")

    assert [e.message for e in received] == ["this is a test", "mmm... garibaldis"]


def test_multiple_categories_as_list(manager, logger) -> None:
    received = []
    manager.add_appender(received.append, ["tests", "pants"])

    logger.debug("this is a test")
    manager.get_logger("pants").debug("big pants")
    manager.get_logger("something else").debug("pants")

    assert [e.message for e in received] == ["this is a test", "big pants"]


def test_list_and_variadic_forms_are_equivalent() -> None:
    a, b = Recorder(), Recorder()
    as_list, variadic = AppenderRegistry(), AppenderRegistry()
    as_list.add_appender(a, ["X", "Y"])
    variadic.add_appender(b, "X", "Y")

    for category in ("X", "Y", "Z"):
        as_list.dispatch(_event(category))
        variadic.dispatch(_event(category))

    assert [e.category for e in a.events] == [e.category for e in b.events] == ["X", "Y"]


def test_categories_match_exactly() -> None:
    registry = AppenderRegistry()
    sink = Recorder()
    registry.add_appender(sink, "app")

    for category in ("app.db", "ap", "APP", "app"):
        registry.dispatch(_event(category))

    assert [e.category for e in sink.events] == ["app"]


def test_global_sinks_run_before_category_sinks_in_registration_order() -> None:
    registry = AppenderRegistry()
    order = []
    registry.add_appender(lambda e: order.append("cat-1"), "c")
    registry.add_appender(lambda e: order.append("global-1"))
    registry.add_appender(lambda e: order.append("cat-2"), "c")
    registry.add_appender(lambda e: order.append("global-2"))

    registry.dispatch(_event("c"))
    assert order == ["global-1", "global-2", "cat-1", "cat-2"]


def test_sink_registered_twice_is_invoked_twice() -> None:
    registry = AppenderRegistry()
    sink = Recorder()
    registry.add_appender(sink)
    registry.add_appender(sink, "c")

    event = _event("c")
    registry.dispatch(event)
    assert sink.events == [event, event]
    assert registry.all_sinks() == [sink]


def test_clear_appenders_leaves_no_trace() -> None:
    registry = AppenderRegistry()
    sink = Recorder()
    registry.add_appender(sink)
    registry.add_appender(sink, "c")

    registry.clear_appenders()
    registry.clear_appenders()
    registry.add_appender(sink)

    event = _event("c")
    registry.dispatch(event)
    assert sink.events == [event]


def test_failing_sink_does_not_block_others(reports) -> None:
    registry = AppenderRegistry(fallback=reports.append)
    before, after = Recorder(), Recorder()

    def broken(event):
        raise OSError("disk on fire")

    registry.add_appender(before)
    registry.add_appender(broken)
    registry.add_appender(after)

    event = _event("c")
    registry.dispatch(event)

    assert before.events == [event]
    assert after.events == [event]
    assert len(reports) == 1
    assert "disk on fire" in reports[0]
    failure = registry.recent_failures()[0]
    assert isinstance(failure.exception, OSError)
    assert failure.category == "c"


def test_plain_callables_are_wrapped() -> None:
    registry = AppenderRegistry()
    sink = registry.add_appender(print)
    assert isinstance(sink, CallableSink)


def test_rejects_non_sinks_and_bad_categories() -> None:
    registry = AppenderRegistry()
    with pytest.raises(TypeError):
        registry.add_appender(42)
    with pytest.raises(TypeError):
        registry.add_appender(Recorder(), "ok", 7)


def test_flatten_categories() -> None:
    assert flatten_categories(()) == []
    assert flatten_categories((["a", "b"], "c")) == ["a", "b", "c"]
