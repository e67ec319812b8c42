"""Compiler and linker argument vectors.

This module assembles the command lines handed to the external compiler.

Design:
    - One compile command per unit, flags depending on the unit's language
    - One link command over every registered object, in registry order
    - User overrides (CFLAGS, LDFLAGS) are appended in full, never truncated
"""

import platform
from pathlib import Path
from typing import List, Optional

from ..config.build_env import BuildEnvironment
from .layout import AppLayout
from .source_registry import LanguageVariant, SourceRegistry, SourceUnit

DEFAULT_PREFIX = "/usr/local"

# Diagnostics shared by both languages
COMMON_FLAGS = [
    "-Wall",
    "-Wmissing-declarations",
    "-Wshadow",
    "-Wpointer-arith",
    "-Wcast-qual",
    "-Wsign-compare",
    "-fPIC",
    "-g",
]

C_FLAGS = [
    "-Wstrict-prototypes",
    "-Wmissing-prototypes",
]

CXX_FLAGS = [
    "-Woverloaded-virtual",
    "-Wold-style-cast",
    "-Wnon-virtual-dtor",
]

# Homebrew / ports openssl headers
DARWIN_INCLUDES = [
    "/opt/local/include",
    "/usr/local/opt/openssl/include",
]


class FlagBuilder:
    """Builds compile and link argument vectors for one application."""

    def __init__(
        self,
        layout: AppLayout,
        env: BuildEnvironment,
        prefix: str = DEFAULT_PREFIX,
        system: Optional[str] = None
    ):
        """Initialize flag builder.

        Args:
            layout: Application layout
            env: Compiler and flag overrides
            prefix: Install prefix whose include/ directory is searched
            system: Host system name (defaults to platform.system())
        """
        self.layout = layout
        self.env = env
        self.prefix = prefix
        self.system = system if system is not None else platform.system()

    @property
    def is_darwin(self) -> bool:
        return self.system == "Darwin"

    def include_flags(self) -> List[str]:
        """Fixed include search paths."""
        includes = [
            str(self.layout.src_dir),
            str(self.layout.includes_dir),
            str(Path(self.prefix) / "include"),
        ]
        if self.is_darwin:
            includes.extend(DARWIN_INCLUDES)
        return [f"-I{inc}" for inc in includes]

    def variant_flags(self, variant: LanguageVariant) -> List[str]:
        """Diagnostic flags specific to a source language."""
        if variant is LanguageVariant.CPP:
            flags = list(CXX_FLAGS)
            if self.env.cxx_standard:
                flags.append(f"-std={self.env.cxx_standard}")
            return flags
        return list(C_FLAGS)

    def compile_command(self, unit: SourceUnit) -> List[str]:
        """Build the compiler invocation for one unit.

        Args:
            unit: Unit to compile

        Returns:
            Argument vector, compiler first
        """
        cmd = [self.env.compiler]
        cmd.extend(self.include_flags())
        cmd.extend(self.env.cflags)
        cmd.extend(COMMON_FLAGS)
        cmd.extend(self.variant_flags(unit.variant))
        cmd.extend(["-c", str(unit.source_path)])
        cmd.extend(["-o", str(unit.object_path)])
        return cmd

    def link_command(self, registry: SourceRegistry) -> List[str]:
        """Build the linker invocation producing the shared library.

        Args:
            registry: Every unit of the build, in link order

        Returns:
            Argument vector, compiler first
        """
        cmd = [self.env.compiler]
        if self.is_darwin:
            cmd.extend(["-dynamiclib", "-undefined", "suppress", "-flat_namespace"])
        else:
            cmd.append("-shared")

        cmd.extend(str(path) for path in registry.object_paths())

        if registry.has_variant(LanguageVariant.CPP):
            cmd.append(f"-l{self.env.cxx_library}")

        cmd.extend(self.env.ldflags)
        cmd.extend(["-o", str(self.layout.artifact_path)])
        return cmd
