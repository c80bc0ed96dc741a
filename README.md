# fxkit

fxkit defines events for the life of an application built around start and stop hooks. It also has loggers that render those events and small helpers for writing tests.

## Installation

```
pip install fxkit
```

## Events

`fxkit.events` defines one dataclass for each event. Every event class is a subclass of `Event`, and every field has a default.

- Hook events: `OnStartExecuting`, `OnStartExecuted`, `OnStopExecuting`, `OnStopExecuted`.
- Container events: `Supplied`, `Provided`, `Replaced`, `Decorated`, `BeforeRun`, `Run`, `Invoking`, `Invoked`.
- Application events: `Started`, `Stopping`, `Stopped`, `RollingBack`, `RolledBack`, `LoggerInitialized`.

Failures are carried in an `err` field. `RollingBack` is the exception and uses `start_err` instead. Runtimes are given in nanoseconds.

`Logger` is the abstract base class for loggers. It has one method, `log_event(event)`. `NopLogger` is a logger that ignores every event.

Helpers:

- `format_duration(nanoseconds)` renders a duration in compact form. For example, `3_000_000` becomes `3ms` and `1_500_000_000` becomes `1.5s`. It also accepts a `datetime.timedelta`.
- `signal_name(sig)` describes a signal in lower case. For example, `signal.SIGINT` becomes `interrupt`. It accepts a `signal.Signals` value, an int or a string.

## Console logger

`fxkit.console.ConsoleLogger(stream=None)` writes one readable line per message, prefixed with `[Fx]`. When no stream is given, it writes to standard error.

```python
import sys
from fxkit.console import ConsoleLogger
from fxkit.events import OnStartExecuting

logger = ConsoleLogger(sys.stderr)
logger.log_event(OnStartExecuting(function_name="hook.on_start", caller_name="main"))
# [Fx] HOOK OnStart		hook.on_start executing (caller: main)
```

## Logging-module logger

`fxkit.stdlog.StdlibLogger(logger)` sends each event to a `logging.Logger`. The structured data is attached to the record as a `fields` dict. It holds keys such as `callee`, `runtime`, `module` and `error`.

By default, ordinary events are logged at `INFO` and failures at `ERROR`. Both levels can be changed:

```python
import logging
from fxkit.stdlog import StdlibLogger

logger = StdlibLogger(logging.getLogger("app"))
logger.use_log_level(logging.DEBUG)
logger.use_error_level(logging.WARNING)
```

## Testing helpers

`fxkit.testkit` provides:

- `TB`: the abstract test reporter, with the methods `log`, `error` and `fail_now`. Messages are %-formatted with any extra arguments.
- `PanicT(stream=None)`: a reporter that writes each message as a line to the stream, or to standard error when none is given. Its `fail_now` raises `TestFailure`, an `AssertionError`. The exception carries the last error message, or `test lifecycle failed` if no error was reported.
- `TestPrinter` and `new_test_printer(tb)`: a printer whose `printf` forwards messages to the reporter's `log`.

```python
import io
from fxkit.testkit import PanicT, TestFailure

reporter = PanicT(io.StringIO())
reporter.error("hello: %s", "world")
try:
    reporter.fail_now()
except TestFailure as exc:
    print(exc)  # hello: world
```

## What it does not do

fxkit has no dependency-injection container. It does not run applications, and it does not run lifecycle hooks. It includes no test lifecycle or test application that runs hooks for you.

Your own code creates the events and passes them to a logger's `log_event`.

The package has no command-line interface.