from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from devsetup.env import get_logging_env

# Console used by RichHandler and CLI rendering (stdout)
UI_CONSOLE = Console(
    file=sys.stdout,
    soft_wrap=True,
    highlight=False,
)


class ConsoleGateFilter(logging.Filter):
    """
    Drop console output when quiet mode is enabled.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not get_logging_env().quiet


def build_console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        console=UI_CONSOLE,
        level=level,
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    # RichHandler renders the level column; the formatter must not repeat it.
    handler.setFormatter(logging.Formatter("%(message)s"))

    handler.addFilter(ConsoleGateFilter())
    return handler
