"""CLI utility functions for sobuild.

This module provides common utilities used across CLI commands including:
- Logging setup
- Error handling and formatting
"""

import logging
import sys
from typing import NoReturn

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for CLI use.

    Args:
        verbose: Log debug output (child command lines included)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


class ErrorFormatter:
    """Formats and displays command outcomes."""

    # ANSI color codes
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    PROG = "sobuild"

    @staticmethod
    def format_fatal(command: str, detail: str) -> str:
        """Format the one-line diagnostic for a fatal error.

        Args:
            command: Active command name (empty if none was dispatched)
            detail: Failure detail

        Returns:
            e.g. 'sobuild build: stat(src/x.c): Permission denied'
        """
        if command:
            return f"{ErrorFormatter.PROG} {command}: {detail}"
        return f"{ErrorFormatter.PROG}: {detail}"

    @staticmethod
    def fatal(command: str, detail: str) -> NoReturn:
        """Print the fatal diagnostic and exit with status 1."""
        print(ErrorFormatter.format_fatal(command, detail))
        sys.exit(1)

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message.

        Args:
            message: Warning message
        """
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_keyboard_interrupt() -> NoReturn:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Build interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(command: str, error: Exception, verbose: bool = False) -> NoReturn:
        """Handle unexpected errors with standard formatting.

        Args:
            command: Active command name
            error: The exception to handle
            verbose: Whether to print traceback
        """
        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        ErrorFormatter.fatal(command, f"{type(error).__name__}: {error}")
