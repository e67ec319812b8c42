"""Exception hierarchy for the sobuild pipeline.

Every exception here is fatal: the build stops at the first one and the CLI
reports it as a single line naming the active command.
"""

from typing import List, Optional


class BuildError(Exception):
    """Base exception for all fatal build failures."""
    pass


class ValidationError(BuildError):
    """Raised when the application layout is incomplete or malformed."""
    pass


class FilesystemError(BuildError):
    """Raised when a stat/open/create/remove operation fails unexpectedly."""
    pass


class ResourceError(BuildError):
    """Raised when an asset cannot be mapped for reading."""
    pass


class SubprocessError(BuildError):
    """Raised when a compiler or linker child process does not exit cleanly."""

    def __init__(
        self,
        message: str,
        argv: Optional[List[str]] = None,
        returncode: Optional[int] = None
    ):
        super().__init__(message)
        self.argv = list(argv or [])
        self.returncode = returncode

    @property
    def signal(self) -> Optional[int]:
        """Signal number that terminated the child, if any."""
        if self.returncode is not None and self.returncode < 0:
            return -self.returncode
        return None


class SubprocessTimeout(SubprocessError):
    """Raised when a child process exceeds its allotted run time."""

    def __init__(self, message: str, argv: Optional[List[str]] = None, timeout: Optional[float] = None):
        super().__init__(message, argv=argv)
        self.timeout = timeout
