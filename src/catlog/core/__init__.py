"""Levels, events, layouts, loggers and the appender registry."""
