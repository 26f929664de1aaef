from datetime import datetime, timedelta, timezone

import pytest

from goweb.logger import (
    BLUE,
    CYAN,
    GREEN,
    MAGENTA,
    RED,
    RESET,
    WHITE,
    YELLOW,
    ConsoleColorMode,
    LogFormatterParams,
    console_color_mode,
    default_log_formatter,
    disable_console_color,
    force_console_color,
    format_duration,
    reset_console_color,
)


@pytest.fixture(autouse=True)
def _auto_color():
    reset_console_color()
    yield
    reset_console_color()


def _params(latency, is_term):
    return LogFormatterParams(
        time_stamp=datetime.fromtimestamp(1544173902, tz=timezone.utc),
        status_code=200,
        latency=latency,
        client_ip="20.20.20.20",
        method="GET",
        path="/",
        error_message="",
        is_term=is_term,
    )


def test_default_log_formatter_plain():
    assert (
        default_log_formatter(_params(timedelta(seconds=5), False))
        == '[GIN] 2018/12/07 - 09:11:42 | 200 |            5s |     20.20.20.20 | GET      "/"\n'
    )
    assert (
        default_log_formatter(_params(timedelta(milliseconds=9876543210), False))
        == '[GIN] 2018/12/07 - 09:11:42 | 200 |    2743h29m3s |     20.20.20.20 | GET      "/"\n'
    )


def test_default_log_formatter_terminal():
    assert (
        default_log_formatter(_params(timedelta(seconds=5), True))
        == '[GIN] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|            5s |     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'
    )
    assert (
        default_log_formatter(_params(timedelta(milliseconds=9876543210), True))
        == '[GIN] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|    2743h29m3s |     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'
    )


def test_formatter_does_not_change_params():
    param = _params(timedelta(milliseconds=9876543210), False)
    default_log_formatter(param)
    assert param.latency == timedelta(milliseconds=9876543210)


def test_formatter_appends_error_message():
    param = _params(timedelta(seconds=5), False)
    param.error_message = "boom"
    assert default_log_formatter(param).endswith('"/"\nboom')


def test_format_duration():
    assert format_duration(timedelta(seconds=5)) == "5s"
    assert format_duration(timedelta(seconds=9876543)) == "2743h29m3s"
    assert format_duration(timedelta(0)) == "0s"


@pytest.mark.parametrize(
    "method, color",
    [
        ("GET", BLUE),
        ("POST", CYAN),
        ("PUT", YELLOW),
        ("DELETE", RED),
        ("PATCH", GREEN),
        ("HEAD", MAGENTA),
        ("OPTIONS", WHITE),
        ("TRACE", RESET),
    ],
)
def test_color_for_method(method, color):
    assert LogFormatterParams(method=method).method_color() == color


@pytest.mark.parametrize(
    "code, color",
    [(200, GREEN), (301, WHITE), (404, YELLOW), (2, RED)],
)
def test_color_for_status(code, color):
    assert LogFormatterParams(status_code=code).status_code_color() == color


def test_reset_color():
    assert LogFormatterParams().reset_color() == bytes([27, 91, 48, 109]).decode()


def test_is_output_color_with_terminal():
    p = LogFormatterParams(is_term=True)
    assert p.is_output_color() is True
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False


def test_is_output_color_without_terminal():
    p = LogFormatterParams(is_term=False)
    assert p.is_output_color() is False
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False


def test_disable_console_color():
    assert console_color_mode() is ConsoleColorMode.AUTO
    disable_console_color()
    assert console_color_mode() is ConsoleColorMode.DISABLE


def test_force_console_color():
    assert console_color_mode() is ConsoleColorMode.AUTO
    force_console_color()
    assert console_color_mode() is ConsoleColorMode.FORCE