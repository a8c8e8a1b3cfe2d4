import io
import queue

from catlog.core.layouts import basic_layout, message_pass_through_layout
from catlog.sinks.console_sink import ConsoleSink
from catlog.sinks.queue_sink import QueueSink


def test_console_sink_writes_immediately(logger) -> None:
    stream = io.StringIO()
    sink = ConsoleSink(message_pass_through_layout, stream=stream)

    sink.handle(logger.info("first"))
    assert stream.getvalue() == "first\n"

    sink.handle(logger.info("second"))
    assert stream.getvalue() == "first\nsecond\n"


def test_console_sink_defaults_to_stdout(logger, capsys) -> None:
    sink = ConsoleSink(basic_layout)
    event = logger.warn("to stdout")
    sink.handle(event)

    assert capsys.readouterr().out == basic_layout(event) + "\n"


def test_console_sink_default_layout_is_coloured(logger) -> None:
    stream = io.StringIO()
    ConsoleSink(stream=stream).handle(logger.info("hi"))
    assert stream.getvalue().startswith("\x1b[32m")


def test_queue_sink_forwards_events(manager, logger) -> None:
    q = queue.Queue()
    manager.add_appender(QueueSink(q), "tests")

    event = logger.info("for the viewer")
    assert q.get_nowait() is event


def test_full_queue_is_reported_not_raised(manager, logger, reports) -> None:
    q = queue.Queue(maxsize=1)
    manager.add_appender(QueueSink(q))

    logger.info("fits")
    logger.info("overflows")

    assert q.qsize() == 1
    assert len(reports) == 1
    assert manager.registry.recent_failures()[0].target == "QueueSink()"
