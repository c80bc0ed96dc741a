"""An event logger that writes structured records through the logging module."""

from __future__ import annotations

import logging
from typing import Any

from fxkit.events import (
    BeforeRun,
    Decorated,
    Event,
    Invoked,
    Invoking,
    Logger,
    LoggerInitialized,
    OnStartExecuted,
    OnStartExecuting,
    OnStopExecuted,
    OnStopExecuting,
    Provided,
    Replaced,
    RolledBack,
    RollingBack,
    Run,
    Started,
    Stopped,
    Stopping,
    Supplied,
    format_duration,
    signal_name,
)

Fields = dict[str, Any]


def _module(name: str) -> Fields:
    return {"module": name} if name else {}


def _private(flag: bool) -> Fields:
    return {"private": True} if flag else {}


def _error(err: BaseException | None) -> Fields:
    return {"error": str(err)}


def _traces(stack_trace: list[str], module_trace: list[str]) -> Fields:
    return {"stacktrace": list(stack_trace), "moduletrace": list(module_trace)}


class StdlibLogger(Logger):
    """Logs events to a :class:`logging.Logger`.

    Each record carries its structured data in a ``fields`` attribute.
    Regular events are logged at INFO and failures at ERROR unless changed.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger
        self._log_level = logging.INFO
        self._error_level: int | None = None

    def use_log_level(self, level: int) -> None:
        """Set the level of non-error records."""
        self._log_level = level

    def use_error_level(self, level: int) -> None:
        """Set the level of error records."""
        self._error_level = level

    def _emit(self, level: int, message: str, fields: Fields) -> None:
        self.logger.log(level, message, extra={"fields": fields})

    def _event(self, message: str, **groups: Any) -> None:
        self._emit(self._log_level, message, self._merge(groups))

    def _fail(self, message: str, **groups: Any) -> None:
        level = logging.ERROR if self._error_level is None else self._error_level
        self._emit(level, message, self._merge(groups))

    @staticmethod
    def _merge(groups: dict[str, Any]) -> Fields:
        merged: Fields = {}
        for value in groups.values():
            merged.update(value)
        return merged

    def log_event(self, event: Event) -> None:
        match event:
            case OnStartExecuting() | OnStopExecuting():
                hook = "OnStart" if isinstance(event, OnStartExecuting) else "OnStop"
                self._event(
                    f"{hook} hook executing",
                    a={"callee": event.function_name, "caller": event.caller_name},
                )
            case OnStartExecuted() | OnStopExecuted():
                hook = "OnStart" if isinstance(event, OnStartExecuted) else "OnStop"
                names = {"callee": event.function_name, "caller": event.caller_name}
                if event.err is not None:
                    self._fail(f"{hook} hook failed", a=names, b=_error(event.err))
                else:
                    self._event(
                        f"{hook} hook executed",
                        a=names,
                        b={"runtime": format_duration(event.runtime)},
                    )
            case Supplied():
                if event.err is not None:
                    self._fail(
                        "error encountered while applying options",
                        a={"type": event.type_name},
                        b=_traces(event.stack_trace, event.module_trace),
                        c=_module(event.module_name),
                        d=_error(event.err),
                    )
                else:
                    self._event(
                        "supplied",
                        a={"type": event.type_name},
                        b=_traces(event.stack_trace, event.module_trace),
                        c=_module(event.module_name),
                    )
            case Provided():
                for rtype in event.output_type_names:
                    self._event(
                        "provided",
                        a={"constructor": event.constructor_name},
                        b=_traces(event.stack_trace, event.module_trace),
                        c=_module(event.module_name),
                        d={"type": rtype},
                        e=_private(event.private),
                    )
                if event.err is not None:
                    self._fail(
                        "error encountered while applying options",
                        a=_module(event.module_name),
                        b=_traces(event.stack_trace, event.module_trace),
                        c=_error(event.err),
                    )
            case Replaced():
                for rtype in event.output_type_names:
                    self._event(
                        "replaced",
                        a=_traces(event.stack_trace, event.module_trace),
                        b=_module(event.module_name),
                        c={"type": rtype},
                    )
                if event.err is not None:
                    self._fail(
                        "error encountered while replacing",
                        a=_traces(event.stack_trace, event.module_trace),
                        b=_module(event.module_name),
                        c=_error(event.err),
                    )
            case Decorated():
                for rtype in event.output_type_names:
                    self._event(
                        "decorated",
                        a={"decorator": event.decorator_name},
                        b=_traces(event.stack_trace, event.module_trace),
                        c=_module(event.module_name),
                        d={"type": rtype},
                    )
                if event.err is not None:
                    self._fail(
                        "error encountered while applying options",
                        a=_traces(event.stack_trace, event.module_trace),
                        b=_module(event.module_name),
                        c=_error(event.err),
                    )
            case BeforeRun():
                self._event(
                    "before run",
                    a={"name": event.name, "kind": event.kind},
                    b=_module(event.module_name),
                )
            case Run():
                names = {"name": event.name, "kind": event.kind}
                if event.err is not None:
                    self._fail(
                        "error returned",
                        a=names,
                        b=_module(event.module_name),
                        c=_error(event.err),
                    )
                else:
                    self._event(
                        "run",
                        a=names,
                        b={"runtime": format_duration(event.runtime)},
                        c=_module(event.module_name),
                    )
            case Invoking():
                self._event(
                    "invoking",
                    a={"function": event.function_name},
                    b=_module(event.module_name),
                )
            case Invoked():
                if event.err is not None:
                    self._fail(
                        "invoke failed",
                        a=_error(event.err),
                        b={"stack": event.trace, "function": event.function_name},
                        c=_module(event.module_name),
                    )
            case Stopping():
                self._event(
                    "received signal", a={"signal": signal_name(event.signal).upper()}
                )
            case Stopped():
                if event.err is not None:
                    self._fail("stop failed", a=_error(event.err))
            case RollingBack():
                self._fail("start failed, rolling back", a=_error(event.start_err))
            case RolledBack():
                if event.err is not None:
                    self._fail("rollback failed", a=_error(event.err))
            case Started():
                if event.err is not None:
                    self._fail("start failed", a=_error(event.err))
                else:
                    self._event("started")
            case LoggerInitialized():
                if event.err is not None:
                    self._fail(
                        "custom logger initialization failed", a=_error(event.err)
                    )
                else:
                    self._event(
                        "initialized custom fxevent.Logger",
                        a={"function": event.constructor_name},
                    )