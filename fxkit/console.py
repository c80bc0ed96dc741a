"""A logger that writes readable event lines to a text stream."""

from __future__ import annotations

import json
import sys
from typing import Callable, Iterator, TextIO

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

_OPTIONS_FAILED = "Error after options were applied"


def _from_module(module_name: str) -> str:
    if not module_name:
        return ""
    return f" from module {json.dumps(module_name, ensure_ascii=False)}"


def _failure(err: BaseException | None, prefix: str) -> Iterator[str]:
    if err is not None:
        yield f"{prefix}: {err}"


def _per_output_type(
    event: Provided | Replaced | Decorated,
    describe: Callable[[str], str],
    failure: str,
) -> Iterator[str]:
    suffix = _from_module(event.module_name)
    for rtype in event.output_type_names:
        yield describe(rtype) + suffix
    yield from _failure(event.err, failure)


def _lines(event: Event) -> Iterator[str]:
    match event:
        case OnStartExecuting() | OnStopExecuting() | OnStartExecuted() | OnStopExecuted():
            method = (
                "OnStart" if isinstance(event, (OnStartExecuting, OnStartExecuted)) else "OnStop"
            )
            head = f"HOOK {method}\t\t{event.function_name}"
            if isinstance(event, (OnStartExecuting, OnStopExecuting)):
                yield f"{head} executing (caller: {event.caller_name})"
                return
            runtime = format_duration(event.runtime)
            head = f"{head} called by {event.caller_name}"
            if event.err is not None:
                yield f"{head} failed in {runtime}: {event.err}"
            else:
                yield f"{head} ran successfully in {runtime}"
        case Supplied():
            if event.err is not None:
                yield f"ERROR\tFailed to supply {event.type_name}: {event.err}"
            else:
                yield f"SUPPLY\t{event.type_name}{_from_module(event.module_name)}"
        case Provided():
            private = " (PRIVATE)" if event.private else ""
            yield from _per_output_type(
                event,
                lambda rtype: f"PROVIDE{private}\t{rtype} <= {event.constructor_name}",
                _OPTIONS_FAILED,
            )
        case Replaced():
            yield from _per_output_type(
                event, lambda rtype: f"REPLACE\t{rtype}", "ERROR\tFailed to replace"
            )
        case Decorated():
            yield from _per_output_type(
                event,
                lambda rtype: f"DECORATE\t{rtype} <= {event.decorator_name}",
                _OPTIONS_FAILED,
            )
        case BeforeRun():
            yield f"BEFORE RUN\t{event.kind}: {event.name}{_from_module(event.module_name)}"
        case Run():
            yield (
                f"RUN\t{event.kind}: {event.name} in "
                f"{format_duration(event.runtime)}{_from_module(event.module_name)}"
            )
            yield from _failure(event.err, "Error returned")
        case Invoking():
            yield f"INVOKE\t\t{event.function_name}{_from_module(event.module_name)}"
        case Invoked():
            if event.err is not None:
                yield (
                    f"ERROR\t\tfx.Invoke({event.function_name}) called from:\n"
                    f"{event.trace}Failed: {event.err}"
                )
        case Stopping():
            yield signal_name(event.signal).upper()
        case Stopped():
            yield from _failure(event.err, "ERROR\t\tFailed to stop cleanly")
        case RollingBack():
            yield f"ERROR\t\tStart failed, rolling back: {event.start_err}"
        case RolledBack():
            yield from _failure(event.err, "ERROR\t\tCouldn't roll back cleanly")
        case Started():
            if event.err is not None:
                yield f"ERROR\t\tFailed to start: {event.err}"
            else:
                yield "RUNNING"
        case LoggerInitialized():
            if event.err is not None:
                yield f"ERROR\t\tFailed to initialize custom logger: {event.err}"
            else:
                yield f"LOGGER\tInitialized custom logger from {event.constructor_name}"


class ConsoleLogger(Logger):
    """Writes human-readable event messages; meant for development."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stderr

    def log_event(self, event: Event) -> None:
        for line in _lines(event):
            self.stream.write(f"[Fx] {line}\n")