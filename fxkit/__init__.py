"""Lifecycle events, console and logging-module event loggers, and testing helpers."""

__version__ = "0.1.0"

__all__ = ["events", "console", "stdlog", "testkit"]