"""Logging utilities for consistent status messages."""

import logging
import sys
from typing import Optional


class StatusLogger:
    """Status logger shared by the display engine and the CLI tools.

    Messages carry a short prefix ([OK], [WARNING], [ERROR]) so that engine
    events (loads, rescales, ignored settings) are easy to scan in a console.
    """

    def __init__(self, name: str = "fits_view", verbose: bool = True):
        """Initialize the status logger.

        Args:
            name: Logger name for Python logging integration
            verbose: If False, suppresses info messages
        """
        self.verbose = verbose
        self._logger = logging.getLogger(name)

        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.DEBUG)

    def success(self, message: str, indent: int = 0) -> None:
        """Log a success message with [OK] prefix."""
        self._logger.info(f"{' ' * indent}[OK] {message}")

    def error(self, message: str, indent: int = 0) -> None:
        """Log an error message with [ERROR] prefix."""
        self._logger.error(f"{' ' * indent}[ERROR] {message}")

    def warning(self, message: str, indent: int = 0) -> None:
        """Log a warning message with [WARNING] prefix."""
        self._logger.warning(f"{' ' * indent}[WARNING] {message}")

    def info(self, message: str, indent: int = 0) -> None:
        """Log an info message (respects verbose setting)."""
        if self.verbose:
            self._logger.info(f"{' ' * indent}{message}")

    def progress(self, current: int, total: int, message: str = "",
                 indent: int = 0) -> None:
        """Log a progress message such as ``[2/5] frame.fits``.

        Args:
            current: Current item number (1-indexed)
            total: Total number of items
            message: Optional message to append
            indent: Number of spaces to indent
        """
        progress_str = f"[{current}/{total}]"
        if message:
            progress_str = f"{progress_str} {message}"
        self._logger.info(f"{' ' * indent}{progress_str}")

    def set_verbose(self, verbose: bool) -> None:
        """Set verbose mode."""
        self.verbose = verbose


_default_logger: Optional[StatusLogger] = None


def get_logger(verbose: Optional[bool] = None) -> StatusLogger:
    """Get the default status logger instance.

    Args:
        verbose: If given, updates the verbosity of the shared logger

    Returns:
        StatusLogger instance
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = StatusLogger(verbose=True if verbose is None else verbose)
    elif verbose is not None:
        _default_logger.set_verbose(verbose)
    return _default_logger
