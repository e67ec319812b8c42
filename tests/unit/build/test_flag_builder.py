"""Tests for compiler and linker argument vectors."""

from pathlib import Path

import pytest

from sobuild.build.flag_builder import C_FLAGS, COMMON_FLAGS, CXX_FLAGS, FlagBuilder
from sobuild.build.layout import AppLayout
from sobuild.build.source_registry import FileStat, LanguageVariant, SourceRegistry
from sobuild.config.build_env import BuildEnvironment


class TestFlagBuilder:
    """Test suite for FlagBuilder."""

    @pytest.fixture
    def layout(self):
        return AppLayout(Path("/apps/web"), "web")

    @pytest.fixture
    def stat(self):
        return FileStat(size=1, mtime=1)

    def _builder(self, layout, system="Linux", **env):
        return FlagBuilder(layout, BuildEnvironment(**env), prefix="/usr/local", system=system)

    def _unit(self, registry, layout, stat, name, variant=LanguageVariant.C):
        return registry.add(
            name, layout.src_dir / name, layout.object_path(name), stat, True, variant
        )

    def test_compile_c_command(self, layout, stat):
        """Test the full argument vector for a C unit."""
        unit = self._unit(SourceRegistry(), layout, stat, "main.c")

        cmd = self._builder(layout).compile_command(unit)

        assert cmd == (
            ["gcc", "-I/apps/web/src", "-I/apps/web/src/includes", "-I/usr/local/include"]
            + COMMON_FLAGS
            + C_FLAGS
            + ["-c", "/apps/web/src/main.c", "-o", "/apps/web/.objs/main.c.o"]
        )

    def test_compile_cpp_command(self, layout, stat):
        """Test that C++ units get the alternate diagnostic set."""
        unit = self._unit(SourceRegistry(), layout, stat, "srv.cpp", LanguageVariant.CPP)

        cmd = self._builder(layout).compile_command(unit)

        for flag in CXX_FLAGS:
            assert flag in cmd
        for flag in C_FLAGS:
            assert flag not in cmd
        assert not any(arg.startswith("-std=") for arg in cmd)

    def test_cxx_standard_override(self, layout, stat):
        registry = SourceRegistry()
        cpp = self._unit(registry, layout, stat, "srv.cpp", LanguageVariant.CPP)
        c = self._unit(registry, layout, stat, "main.c")
        builder = self._builder(layout, cxx_standard="c++17")

        assert "-std=c++17" in builder.compile_command(cpp)
        assert "-std=c++17" not in builder.compile_command(c)

    def test_user_cflags_unbounded(self, layout, stat):
        """Test that every user flag is kept, in order, before the warnings."""
        flags = [f"-DFLAG{i}" for i in range(25)]
        unit = self._unit(SourceRegistry(), layout, stat, "main.c")

        cmd = self._builder(layout, cflags=flags).compile_command(unit)

        start = cmd.index("-DFLAG0")
        assert cmd[start:start + 25] == flags
        assert start < cmd.index("-Wall")

    def test_compiler_override(self, layout, stat):
        unit = self._unit(SourceRegistry(), layout, stat, "main.c")
        assert self._builder(layout, compiler="clang").compile_command(unit)[0] == "clang"

    def test_darwin_includes(self, layout, stat):
        unit = self._unit(SourceRegistry(), layout, stat, "main.c")
        cmd = self._builder(layout, system="Darwin").compile_command(unit)

        assert "-I/opt/local/include" in cmd
        assert "-I/usr/local/opt/openssl/include" in cmd

    def test_link_c_only(self, layout, stat):
        """Test the link vector for a C-only registry."""
        registry = SourceRegistry()
        self._unit(registry, layout, stat, "a.c")
        self._unit(registry, layout, stat, "b.c")

        cmd = self._builder(layout).link_command(registry)

        assert cmd == [
            "gcc",
            "-shared",
            "/apps/web/.objs/a.c.o",
            "/apps/web/.objs/b.c.o",
            "-o",
            "/apps/web/web.so",
        ]

    def test_link_with_cpp_adds_runtime(self, layout, stat):
        registry = SourceRegistry()
        self._unit(registry, layout, stat, "a.c")
        self._unit(registry, layout, stat, "b.cpp", LanguageVariant.CPP)

        assert "-lstdc++" in self._builder(layout).link_command(registry)
        assert "-lc++" in self._builder(layout, cxx_library="c++").link_command(registry)

    def test_link_ldflags_after_objects(self, layout, stat):
        registry = SourceRegistry()
        self._unit(registry, layout, stat, "a.c")
        ldflags = [f"-lextra{i}" for i in range(12)]

        cmd = self._builder(layout, ldflags=ldflags).link_command(registry)

        assert cmd[-2 - len(ldflags):-2] == ldflags
        assert cmd[-2:] == ["-o", "/apps/web/web.so"]

    def test_link_darwin(self, layout, stat):
        registry = SourceRegistry()
        self._unit(registry, layout, stat, "a.c")

        cmd = self._builder(layout, system="Darwin").link_command(registry)

        assert cmd[1:5] == ["-dynamiclib", "-undefined", "suppress", "-flat_namespace"]
        assert "-shared" not in cmd
