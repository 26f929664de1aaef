"""Path cleaning, response writing and rendering, access-log formatting, run modes and application folder helpers for web applications."""

__version__ = "0.0.1"