"""The application service: version and the layout of its folders."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from typing import Any

from goweb.execution import get_exec_directory

__all__ = ["GoWebApp", "GoWebAppProvider", "new_app"]


def _join(*parts: str) -> str:
    return os.path.normpath(os.path.join(*parts))


class GoWebApp:
    """The application: knows its base folder and the folders below it.

    Without an explicit base folder the ``-base_folder`` command-line option is
    read from ``argv`` (``sys.argv[1:]`` when None), and failing that the
    current directory is used.
    """

    def __init__(
        self,
        container: Any = None,
        base_folder: str = "",
        argv: Sequence[str] | None = None,
    ) -> None:
        self.container = container
        self._base_folder = base_folder
        self._argv = argv

    def version(self) -> str:
        """Return the application version."""
        return "0.0.1"

    def base_folder(self) -> str:
        """Return the base folder of the application."""
        if self._base_folder:
            return self._base_folder
        parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
        parser.add_argument(
            "-base_folder",
            "--base_folder",
            dest="base_folder",
            default="",
            help="base folder, defaults to the current directory",
        )
        argv = sys.argv[1:] if self._argv is None else list(self._argv)
        options, _ = parser.parse_known_args(argv)
        if options.base_folder:
            return options.base_folder
        return get_exec_directory()

    def config_folder(self) -> str:
        return _join(self.base_folder(), "config")

    def log_folder(self) -> str:
        return _join(self.storage_folder(), "log")

    def _gttp_folder(self) -> str:
        return _join(self.base_folder(), "gttp")

    def console_folder(self) -> str:
        return _join(self.base_folder(), "console")

    def storage_folder(self) -> str:
        return _join(self.base_folder(), "storage")

    def provider_folder(self) -> str:
        """Folder of the application's own service providers."""
        return _join(self.base_folder(), "provider")

    def middleware_folder(self) -> str:
        """Folder of the application's own middleware."""
        return _join(self._gttp_folder(), "middleware")

    def command_folder(self) -> str:
        """Folder of the application's own commands."""
        return _join(self.console_folder(), "command")

    def runtime_folder(self) -> str:
        """Folder for run-time state."""
        return _join(self.storage_folder(), "runtime")

    def test_folder(self) -> str:
        return _join(self.base_folder(), "test")


def new_app(*args: Any) -> GoWebApp:
    """Build an application from a container and a base folder."""
    if len(args) != 2:
        raise ValueError("param error")
    container, base_folder = args
    if not isinstance(base_folder, str):
        raise TypeError("base folder must be a string")
    return GoWebApp(container=container, base_folder=base_folder)


class GoWebAppProvider:
    """Provides the application service for a given base folder."""

    def __init__(self, base_folder: str = "") -> None:
        self.base_folder = base_folder

    def params(self, container: Any) -> list[Any]:
        """Return the container and the base folder."""
        return [container, self.base_folder]

    def new_app(self, *args: Any) -> GoWebApp:
        """Build an application from a container and a base folder."""
        return new_app(*args)