"""Logging setup and a Rich console that mirrors its output to the debug log"""

import io
import logging
import os
from typing import Optional
from rich.console import Console as RichConsole


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugCapturingConsole(RichConsole):
    """
    Rich Console that also writes a plain-text copy of everything it prints
    to a debug logger.
    """

    def __init__(self, debug_logger: Optional[logging.Logger] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        if self.debug_logger and self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = self._render_plain(*objects, **kwargs)
            if plain_text.strip():
                self.debug_logger.debug(f"[CONSOLE] {plain_text}")

    def _render_plain(self, *objects, **kwargs) -> str:
        buffer = io.StringIO()
        RichConsole(
            file=buffer,
            force_terminal=False,
            no_color=True,
            width=self.width,
        ).print(*objects, **kwargs)
        return buffer.getvalue().rstrip()


def setup_logging(debug: bool = False, log_level: str = "info", log_file: str = "twitch_auth_debug.log") -> RichConsole:
    """
    Configure the root logger and create the console for the CLI.

    Args:
        debug: Log at DEBUG level and append to ``log_file``
        log_level: Level used when not in debug mode
        log_file: Debug log path

    Returns:
        DebugCapturingConsole in debug mode, regular Console otherwise
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if not debug:
        level = getattr(logging, str(log_level).upper(), logging.INFO)
        root_logger.setLevel(level)
        console_handler.setLevel(level)
        return RichConsole()

    root_logger.setLevel(logging.DEBUG)
    console_handler.setLevel(logging.DEBUG)

    log_path = os.path.abspath(log_file)
    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logging.getLogger(__name__).info(f"Debug logging enabled - appending to {log_path}")
    return DebugCapturingConsole(debug_logger=setup_console_logger(log_path))


def setup_console_logger(log_file: str) -> logging.Logger:
    """
    Set up the file-only logger that receives copies of console output.

    Args:
        log_file: Path to debug log file

    Returns:
        Logger that does not propagate to the root handlers
    """
    logger = logging.getLogger("console")
    logger.setLevel(logging.DEBUG)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
    logger.addHandler(file_handler)

    # Already on screen; keep it out of the terminal log handler
    logger.propagate = False

    return logger
