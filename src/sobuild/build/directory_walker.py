"""
Recursive file discovery.

The walker visits every regular file below a root, depth-first, following
directories as it meets them. Entries that cannot be stat'ed and entries that
are neither files nor directories (sockets, devices, fifos) are reported and
skipped without stopping the walk. Only failing to open the root itself is
fatal.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Callable

from .errors import FilesystemError

logger = logging.getLogger(__name__)

# visit(path, entry_name)
Visitor = Callable[[Path, str], None]


class DirectoryWalker:
    """Depth-first walker invoking a visitor for each regular file."""

    @staticmethod
    def walk(root: Path, visit: Visitor) -> None:
        """
        Walk root recursively.

        Args:
            root: Directory to walk
            visit: Callback receiving the file path and its entry name

        Raises:
            FilesystemError: If the root directory cannot be opened
        """
        root = Path(root)
        try:
            entries = os.scandir(root)
        except OSError as e:
            raise FilesystemError(f"opendir({root}): {e.strerror or e}") from e

        with entries:
            for entry in entries:
                # scandir never yields '.' or '..'
                path = root / entry.name
                try:
                    st = os.stat(path)
                except OSError as e:
                    logger.warning(f"stat({path}): {e.strerror or e}")
                    continue

                if stat.S_ISDIR(st.st_mode):
                    DirectoryWalker.walk(path, visit)
                elif stat.S_ISREG(st.st_mode):
                    visit(path, entry.name)
                else:
                    logger.warning(f"ignoring {path}")
