import signal
from datetime import timedelta

import pytest

from fxkit.events import (
    BeforeRun,
    Decorated,
    Event,
    Invoked,
    Invoking,
    Logger,
    LoggerInitialized,
    NopLogger,
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


def test_every_event_builds_with_defaults():
    events = [
        OnStartExecuting(),
        OnStartExecuted(),
        OnStopExecuting(),
        OnStopExecuted(),
        Supplied(),
        Provided(),
        Replaced(),
        Decorated(),
        BeforeRun(),
        Run(),
        Invoking(),
        Invoked(),
        Stopping(),
        Stopped(),
        RollingBack(),
        RolledBack(),
        Started(),
        LoggerInitialized(),
    ]
    names = [type(event).__name__ for event in events]
    assert names == [
        "OnStartExecuting",
        "OnStartExecuted",
        "OnStopExecuting",
        "OnStopExecuted",
        "Supplied",
        "Provided",
        "Replaced",
        "Decorated",
        "BeforeRun",
        "Run",
        "Invoking",
        "Invoked",
        "Stopping",
        "Stopped",
        "RollingBack",
        "RolledBack",
        "Started",
        "LoggerInitialized",
    ]
    assert all(isinstance(event, Event) for event in events)
    assert Provided() == Provided()
    assert Started() == Started()


def test_defaults_are_empty():
    provided = Provided()
    assert provided.output_type_names == []
    assert provided.private is False
    assert provided.err is None
    assert Run().runtime == 0
    assert Invoked().trace == ""


def test_list_defaults_are_not_shared():
    first = Supplied()
    first.stack_trace.append("main.main")
    assert Supplied().stack_trace == []


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0s"),
        (10, "10ns"),
        (1_500, "1.5µs"),
        (3_000_000, "3ms"),
        (50_000_000, "50ms"),
        (1_000_000_000, "1s"),
        (5_000_000_000, "5s"),
        (123_500_000_000, "2m3.5s"),
        (3_600_000_000_000, "1h0m0s"),
        (-3_000_000, "-3ms"),
        (timedelta(milliseconds=3), "3ms"),
    ],
)
def test_format_duration(value, expected):
    assert format_duration(value) == expected


def test_signal_name():
    assert signal_name(signal.SIGINT) == "interrupt"
    assert signal_name(signal.SIGTERM) == "terminated"
    assert signal_name("custom") == "custom"


def test_nop_logger():
    logger = NopLogger()
    assert logger.log_event(Started()) is None
    assert str(logger) == "NopLogger"


def test_logger_is_abstract():
    with pytest.raises(TypeError):
        Logger()