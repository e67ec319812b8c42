"""Tests for build product cleanup."""

from sobuild.build.cleaner import BuildCleaner
from sobuild.build.layout import AppLayout


class TestBuildCleaner:
    """Test cases for BuildCleaner."""

    def test_removes_objects_and_artifact(self, tmp_path):
        layout = AppLayout(tmp_path, "app")
        layout.objs_dir.mkdir()
        (layout.objs_dir / "main.c.o").write_bytes(b"o")
        (layout.objs_dir / "logo_png.c").write_text("/* gen */")
        layout.artifact_path.write_bytes(b"so")
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "main.c").write_text("int x;")

        BuildCleaner(layout).clean()

        assert not layout.objs_dir.exists()
        assert not layout.artifact_path.exists()
        assert (tmp_path / "src" / "main.c").exists()

    def test_nothing_to_clean(self, tmp_path):
        """Test that cleaning an unbuilt tree is a no-op."""
        BuildCleaner(AppLayout(tmp_path, "app")).clean()
        assert list(tmp_path.iterdir()) == []
