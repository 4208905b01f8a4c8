# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging

import pythonjsonlogger.json
from rich.logging import RichHandler


def setup_logging(mode: str = "cli", console_log_level: int = logging.WARNING) -> None:
    """
    Route log records to the console as Rich ("cli") or JSON ("json") output.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    if mode == "cli":
        console_handler: RichHandler | logging.StreamHandler = RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)
    logging.getLogger("cliparser").debug("Logging initialized in '%s' mode.", mode)
