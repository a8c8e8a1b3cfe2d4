"""Appender implementations."""
