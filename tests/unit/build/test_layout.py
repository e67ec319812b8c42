"""Tests for application layout paths."""

from pathlib import Path

from sobuild.build.layout import AppLayout


class TestAppLayout:
    """Test cases for AppLayout."""

    def test_directories(self):
        layout = AppLayout(Path("/srv/shop"), "shop")

        assert layout.src_dir == Path("/srv/shop/src")
        assert layout.includes_dir == Path("/srv/shop/src/includes")
        assert layout.assets_dir == Path("/srv/shop/assets")
        assert layout.objs_dir == Path("/srv/shop/.objs")
        assert layout.cert_dir == Path("/srv/shop/cert")

    def test_files(self):
        layout = AppLayout(Path("/srv/shop"), "shop")

        assert layout.conf_file == Path("/srv/shop/conf/shop.conf")
        assert layout.assets_header == Path("/srv/shop/src/assets.h")
        assert layout.artifact_path == Path("/srv/shop/shop.so")

    def test_object_path_is_deterministic(self):
        """Test that object paths depend only on root and unit name."""
        a = AppLayout(Path("/srv/shop"), "shop")
        b = AppLayout(Path("/srv/shop"), "shop")

        assert a.object_path("main.c") == b.object_path("main.c") == Path("/srv/shop/.objs/main.c.o")
        assert a.object_path("logo_png") == Path("/srv/shop/.objs/logo_png.o")
        assert a.generated_source_path("logo_png") == Path("/srv/shop/.objs/logo_png.c")

    def test_relative_root(self):
        layout = AppLayout(Path("shop"), "shop")
        assert layout.artifact_path == Path("shop/shop.so")
