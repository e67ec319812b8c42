"""
Object staleness tracking.

A unit is rebuilt when its object is missing or when the object's
modification time is not exactly the source's. After each successful compile
the object's timestamp is forced to the source's, so an untouched tree is a
fixed point: the next build sees equal timestamps and compiles nothing.

Equality rather than "source newer than object" keeps repeated builds stable
under clock skew and checkout reordering. A source whose timestamp is rolled
back to exactly the previously stamped value is not noticed.
"""

import errno
import logging
import os
from pathlib import Path

from .errors import FilesystemError
from .source_registry import FileStat

logger = logging.getLogger(__name__)


class StalenessOracle:
    """Decides whether a source/object pair needs to be rebuilt."""

    @staticmethod
    def requires_build(source_stat: FileStat, object_path: Path) -> bool:
        """
        Check if an object must be (re)built from its source.

        Args:
            source_stat: Snapshot of the source file
            object_path: Expected object file location

        Returns:
            True if the object is missing or its mtime differs from the source's

        Raises:
            FilesystemError: If the object cannot be stat'ed for any reason
                other than not existing
        """
        try:
            object_stat = os.stat(object_path)
        except OSError as e:
            if e.errno == errno.ENOENT:
                return True
            raise FilesystemError(f"stat({object_path}): {e.strerror or e}") from e

        return source_stat.mtime != int(object_stat.st_mtime)

    @staticmethod
    def stamp(object_path: Path, source_stat: FileStat) -> bool:
        """
        Force an object's timestamps to the source's modification time.

        A failure here is only reported; the unstamped object is simply seen
        as stale on the next build.

        Args:
            object_path: Object file produced by the compiler
            source_stat: Snapshot of the source it was compiled from

        Returns:
            True if the timestamps were updated
        """
        try:
            os.utime(object_path, (source_stat.mtime, source_stat.mtime))
        except OSError as e:
            logger.warning(f"utime({object_path}): {e.strerror or e}")
            return False
        return True
