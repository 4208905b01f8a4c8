# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for cliparser."""
import logging

logger: logging.Logger = logging.getLogger("cliparser")
