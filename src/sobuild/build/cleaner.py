"""Removal of build products (object cache and shared library)."""

import errno
import logging
import os
from pathlib import Path

from .directory_walker import DirectoryWalker
from .layout import AppLayout

logger = logging.getLogger(__name__)


class BuildCleaner:
    """Deletes the object cache and the linked artifact of an application.

    Nothing here is fatal: files that cannot be removed are reported and left
    in place, and missing files are ignored.
    """

    def __init__(self, layout: AppLayout):
        self.layout = layout

    def clean(self) -> None:
        """Remove every object cache file, the cache directory and the artifact."""
        objs_dir = self.layout.objs_dir
        if objs_dir.is_dir():
            DirectoryWalker.walk(objs_dir, self._remove_file)
            try:
                objs_dir.rmdir()
            except OSError as e:
                if e.errno != errno.ENOENT:
                    logger.warning(f"couldn't rmdir {objs_dir}: {e.strerror or e}")

        artifact = self.layout.artifact_path
        try:
            os.unlink(artifact)
        except OSError as e:
            if e.errno != errno.ENOENT:
                logger.warning(f"couldn't unlink {artifact}: {e.strerror or e}")

    @staticmethod
    def _remove_file(path: Path, _entry_name: str) -> None:
        try:
            os.unlink(path)
        except OSError as e:
            logger.warning(f"couldn't unlink {path}: {e.strerror or e}")
