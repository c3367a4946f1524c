"""Loguru setup for the private-fork command line."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

CONSOLE_FORMAT = '<level>{level: <7}</level> <dim>{extra[component]}</dim> {message}'
FILE_FORMAT = (
    '{time:YYYY-MM-DD HH:mm:ss.SSS} {level: <7} {extra[component]} '
    '{name}:{function}:{line} {message}'
)


def setup_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """Route diagnostics to stderr and, optionally, a file.

    User-facing progress goes through the rich consoles, so the stderr
    sink stays terse. Every handler is replaced on each call.

    Args:
        level: Minimum level for every sink
        log_file: Append records to this file as well
        log_format: Replaces the stderr format
    """
    handlers: List[Dict[str, Any]] = [
        {
            'sink': sys.stderr,
            'level': level,
            'format': log_format or CONSOLE_FORMAT,
            'diagnose': level == 'DEBUG',
        }
    ]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            {
                'sink': log_file,
                'level': level,
                'format': FILE_FORMAT,
                'colorize': False,
                'encoding': 'utf-8',
            }
        )

    logger.configure(handlers=handlers, extra={'component': 'private-fork'})
    logger.debug(f'log level {level}' + (f', writing to {log_file}' if log_file else ''))
