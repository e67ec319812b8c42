"""
Command-line interface for sobuild.

This module provides the `sobuild` CLI tool for building applications into
shared libraries.
"""

import argparse
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from sobuild import __version__
from sobuild.build import BuildCleaner, BuildContext, BuildCoordinator, BuildError
from sobuild.cli_utils import ErrorFormatter, setup_logging


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    app: Optional[str] = None
    timeout: Optional[float] = None
    verbose: bool = False


@dataclass
class CleanArgs:
    """Arguments for the clean command."""

    app: Optional[str] = None
    verbose: bool = False


def build_command(args: BuildArgs) -> None:
    """Build an application into <app>.so.

    Examples:
        sobuild build                 # Build the application in the current directory
        sobuild build myapp           # Build ./myapp into myapp/myapp.so
        sobuild build --timeout 300   # Give up on any compile running over 5 minutes
    """
    try:
        coordinator = BuildCoordinator(timeout=args.timeout)
        result = coordinator.build(args.app)

        if not result.success:
            ErrorFormatter.fatal("build", result.message)

        if args.verbose:
            print(f"Build time: {result.build_time:.2f}s")
        sys.exit(0)

    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error("build", e, args.verbose)


def clean_command(args: CleanArgs) -> None:
    """Remove the object cache and the linked library.

    Examples:
        sobuild clean                 # Clean the application in the current directory
        sobuild clean myapp           # Clean ./myapp
    """
    try:
        ctx = BuildContext.resolve(args.app)
        BuildCleaner(ctx.layout).clean()
        sys.exit(0)

    except BuildError as e:
        ErrorFormatter.fatal("clean", str(e))
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error("clean", e, args.verbose)


def main(argv: Optional[List[str]] = None) -> None:
    """sobuild - incremental application builds."""
    parser = argparse.ArgumentParser(
        prog="sobuild",
        description="sobuild - build C/C++ applications and their assets into a shared library",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"sobuild {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build an application",
    )
    build_parser.add_argument(
        "app",
        nargs="?",
        default=None,
        help="Application directory (default: current directory)",
    )
    build_parser.add_argument(
        "-t",
        "--timeout",
        default=None,
        type=float,
        help="Per-process timeout in seconds for the compiler and linker (default: none)",
    )
    build_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    # Clean command
    clean_parser = subparsers.add_parser(
        "clean",
        help="Clean up the build files",
    )
    clean_parser.add_argument(
        "app",
        nargs="?",
        default=None,
        help="Application directory (default: current directory)",
    )
    clean_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    parsed_args = parser.parse_args(argv)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(parsed_args.verbose)
    os.umask(0o022)

    if parsed_args.command == "build":
        build_command(
            BuildArgs(
                app=parsed_args.app,
                timeout=parsed_args.timeout,
                verbose=parsed_args.verbose,
            )
        )
    elif parsed_args.command == "clean":
        clean_command(CleanArgs(app=parsed_args.app, verbose=parsed_args.verbose))


if __name__ == "__main__":
    main()
