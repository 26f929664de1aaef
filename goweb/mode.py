"""Framework run mode: debug, release or test."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "ENV_MODE",
    "DEBUG_MODE",
    "RELEASE_MODE",
    "TEST_MODE",
    "VERSION",
    "ModeCode",
    "set_mode",
    "mode",
    "mode_code",
    "is_debugging",
]

ENV_MODE = "GIN_MODE"

DEBUG_MODE = "debug"
RELEASE_MODE = "release"
TEST_MODE = "test"

VERSION = "v1.7.3"


class ModeCode(IntEnum):
    DEBUG = 0
    RELEASE = 1
    TEST = 2


_CODES = {
    DEBUG_MODE: ModeCode.DEBUG,
    RELEASE_MODE: ModeCode.RELEASE,
    TEST_MODE: ModeCode.TEST,
}


@dataclass
class _ModeState:
    code: ModeCode = ModeCode.DEBUG
    name: str = DEBUG_MODE


_state = _ModeState()


def set_mode(value: str) -> None:
    """Set the mode by name; the empty string means debug."""
    if not value:
        value = DEBUG_MODE
    try:
        code = _CODES[value]
    except KeyError:
        raise ValueError(
            f"gin mode unknown: {value} (available mode: debug release test)"
        ) from None
    _state.code = code
    _state.name = value


def mode() -> str:
    """Return the current mode name."""
    return _state.name


def mode_code() -> ModeCode:
    """Return the current mode as a code."""
    return _state.code


def is_debugging() -> bool:
    """Tell whether the framework runs in debug mode."""
    return _state.code is ModeCode.DEBUG


set_mode(os.environ.get(ENV_MODE, ""))