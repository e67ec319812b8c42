"""Tests for modification-time staleness checks."""

import errno
import os
from unittest.mock import patch

import pytest

from sobuild.build.errors import FilesystemError
from sobuild.build.source_registry import FileStat
from sobuild.build.staleness import StalenessOracle


class TestStalenessOracle:
    """Test suite for StalenessOracle."""

    @pytest.fixture
    def source(self, tmp_path):
        src = tmp_path / "main.c"
        src.write_text("int main(void) { return 0; }")
        os.utime(src, (1_600_000_000, 1_600_000_000))
        return src

    def test_missing_object_requires_build(self, source, tmp_path):
        """Test that a missing object always requires a build."""
        stat = FileStat.of(source)
        assert StalenessOracle.requires_build(stat, tmp_path / "main.c.o") is True

    def test_equal_mtime_is_fresh(self, source, tmp_path):
        """Test that an object with the source's mtime is up to date."""
        obj = tmp_path / "main.c.o"
        obj.write_bytes(b"\x7fELF")
        os.utime(obj, (1_600_000_000, 1_600_000_000))

        assert StalenessOracle.requires_build(FileStat.of(source), obj) is False

    @pytest.mark.parametrize("offset", [-100, -1, 1, 100])
    def test_any_mtime_difference_requires_build(self, source, tmp_path, offset):
        """Test that an older or newer object is stale (exact inequality)."""
        obj = tmp_path / "main.c.o"
        obj.write_bytes(b"")
        os.utime(obj, (1_600_000_000 + offset, 1_600_000_000 + offset))

        assert StalenessOracle.requires_build(FileStat.of(source), obj) is True

    def test_other_stat_failure_is_fatal(self, source, tmp_path):
        """Test that a stat error other than not-found raises."""
        stat = FileStat.of(source)
        error = OSError(errno.EACCES, "Permission denied")

        with patch("sobuild.build.staleness.os.stat", side_effect=error):
            with pytest.raises(FilesystemError, match="Permission denied"):
                StalenessOracle.requires_build(stat, tmp_path / "main.c.o")

    def test_stamp_makes_object_fresh(self, source, tmp_path):
        """Test that stamping forces equality so the next check passes."""
        obj = tmp_path / "main.c.o"
        obj.write_bytes(b"")
        stat = FileStat.of(source)
        assert StalenessOracle.requires_build(stat, obj) is True

        assert StalenessOracle.stamp(obj, stat) is True

        assert int(os.stat(obj).st_mtime) == stat.mtime
        assert StalenessOracle.requires_build(stat, obj) is False

    def test_stamp_failure_is_not_fatal(self, source, tmp_path):
        """Test that stamping a missing object only reports the failure."""
        assert StalenessOracle.stamp(tmp_path / "gone.o", FileStat.of(source)) is False
