"""Shared utilities package for twitch-auth"""

from .debug_console import DebugCapturingConsole, setup_console_logger, setup_logging

__all__ = [
    "DebugCapturingConsole",
    "setup_console_logger",
    "setup_logging",
]
