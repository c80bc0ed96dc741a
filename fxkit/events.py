"""Events emitted by the application container, and the logger interface."""

from __future__ import annotations

import abc
import signal as _signal
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Union

SignalLike = Union[_signal.Signals, int, str]

_NANOS_PER_SECOND = 1_000_000_000

_SIGNAL_DESCRIPTIONS = {
    name: text
    for name, text in (
        ("SIGINT", "interrupt"),
        ("SIGTERM", "terminated"),
        ("SIGHUP", "hangup"),
        ("SIGQUIT", "quit"),
        ("SIGKILL", "killed"),
        ("SIGABRT", "aborted"),
        ("SIGUSR1", "user defined signal 1"),
        ("SIGUSR2", "user defined signal 2"),
        ("SIGPIPE", "broken pipe"),
        ("SIGALRM", "alarm clock"),
    )
    if hasattr(_signal, name)
}


class Event:
    """Base class of every event the container emits."""

    __slots__ = ()


@dataclass
class _Hook(Event):
    """Names a lifecycle hook and the function that scheduled it."""

    function_name: str = ""
    caller_name: str = ""


@dataclass
class _HookResult(_Hook):
    """A hook that has run: how long it took and whether it failed."""

    runtime: int = 0  # nanoseconds
    err: BaseException | None = None


@dataclass
class _Failable(Event):
    """An event that carries an error when something went wrong."""

    err: BaseException | None = None


@dataclass
class _Placed(_Failable):
    """An event tied to where, and in which module, an option was given."""

    stack_trace: list[str] = field(default_factory=list)
    module_trace: list[str] = field(default_factory=list)
    module_name: str = ""


@dataclass
class OnStartExecuting(_Hook):
    """Emitted before an OnStart hook is executed."""


@dataclass
class OnStartExecuted(_HookResult):
    """Emitted after an OnStart hook has been executed."""

    method: str = ""


@dataclass
class OnStopExecuting(_Hook):
    """Emitted before an OnStop hook is executed."""


@dataclass
class OnStopExecuted(_HookResult):
    """Emitted after an OnStop hook has been executed."""


@dataclass
class Supplied(_Placed):
    """Emitted after a value is supplied to the container."""

    type_name: str = ""


@dataclass
class Provided(_Placed):
    """Emitted when a constructor is provided to the container."""

    constructor_name: str = ""
    output_type_names: list[str] = field(default_factory=list)
    private: bool = False


@dataclass
class Replaced(_Placed):
    """Emitted when a value replaces a type in the container."""

    output_type_names: list[str] = field(default_factory=list)


@dataclass
class Decorated(_Placed):
    """Emitted when a decorator is executed."""

    decorator_name: str = ""
    output_type_names: list[str] = field(default_factory=list)


@dataclass
class BeforeRun(Event):
    """Emitted before a constructor, decorator, or supply/replace stub runs."""

    name: str = ""
    kind: str = ""
    module_name: str = ""


@dataclass
class Run(_Failable):
    """Emitted after a constructor, decorator, or supply/replace stub ran."""

    name: str = ""
    kind: str = ""
    module_name: str = ""
    runtime: int = 0  # nanoseconds


@dataclass
class Invoking(Event):
    """Emitted before an invoked function is called."""

    function_name: str = ""
    module_name: str = ""


@dataclass
class Invoked(_Failable):
    """Emitted after an invoked function was called, successfully or not."""

    function_name: str = ""
    module_name: str = ""
    trace: str = ""


@dataclass
class Started(_Failable):
    """Emitted when the application started, or failed to."""


@dataclass
class Stopping(Event):
    """Emitted when the application receives a signal to shut down."""

    signal: SignalLike = _signal.SIGINT


@dataclass
class Stopped(_Failable):
    """Emitted when the application finished shutting down."""


@dataclass
class RollingBack(Event):
    """Emitted when startup failed and the application is rolled back."""

    start_err: BaseException | None = None


@dataclass
class RolledBack(_Failable):
    """Emitted after a rollback, whether it succeeded or not."""


@dataclass
class LoggerInitialized(_Failable):
    """Emitted when a custom logger is built, or fails to build."""

    constructor_name: str = ""


class Logger(abc.ABC):
    """Receives events emitted by the container."""

    @abc.abstractmethod
    def log_event(self, event: Event) -> None:
        """Handle one emitted event."""


class NopLogger(Logger):
    """A logger that ignores every event."""

    def log_event(self, event: Event) -> None:
        return None

    def __str__(self) -> str:
        return "NopLogger"

    __repr__ = __str__


def _with_fraction(value: int, precision: int) -> str:
    whole, rest = divmod(value, 10**precision)
    digits = str(rest).rjust(precision, "0").rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(nanoseconds: int | timedelta) -> str:
    """Render a duration the way runtimes are shown in log output, e.g. ``3ms``."""
    if isinstance(nanoseconds, timedelta):
        nanoseconds = (
            (nanoseconds.days * 86_400 + nanoseconds.seconds) * _NANOS_PER_SECOND
            + nanoseconds.microseconds * 1_000
        )
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    u = abs(nanoseconds)
    for limit, precision, unit in ((1_000, 0, "ns"), (1_000_000, 3, "µs"), (_NANOS_PER_SECOND, 6, "ms")):
        if u < limit:
            return f"{sign}{_with_fraction(u, precision)}{unit}"

    seconds, rest = divmod(u, _NANOS_PER_SECOND)
    seconds_text = _with_fraction(rest + (seconds % 60) * _NANOS_PER_SECOND, 9) + "s"
    hours, minutes = divmod(seconds // 60, 60)
    prefix = f"{hours}h{minutes}m" if hours else (f"{minutes}m" if minutes else "")
    return f"{sign}{prefix}{seconds_text}"


def signal_name(sig: SignalLike) -> str:
    """Describe a signal in lower case, e.g. ``interrupt`` for SIGINT."""
    if isinstance(sig, str):
        return sig
    try:
        sig = _signal.Signals(sig)
    except ValueError:
        return f"signal {int(sig)}"
    description = _SIGNAL_DESCRIPTIONS.get(sig.name)
    if description is not None:
        return description
    text = _signal.strsignal(sig)
    return text.lower() if text else f"signal {int(sig)}"