import sys
from typing import Optional, TextIO

from catlog.core.layouts import Layout, coloured_layout
from catlog.core.log_event import LogEvent


class ConsoleSink:
    """
    Writes each rendered event straight to a text stream.

    The stream defaults to whatever sys.stdout is at write time.
    """

    def __init__(self, layout: Optional[Layout] = None, stream: Optional[TextIO] = None):
        self.layout = layout or coloured_layout
        self._stream = stream

    def handle(self, event: LogEvent) -> None:
        stream = self._stream or sys.stdout
        stream.write(self.layout(event) + "\n")
        stream.flush()

    def __repr__(self) -> str:
        return "ConsoleSink()"
