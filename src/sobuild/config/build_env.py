"""
Build environment overrides.

The compiler and its flags are taken from the process environment, the same
variables a Makefile would honor:

    CC        compiler and linker executable (default: gcc)
    CFLAGS    extra compile flags, whitespace separated
    LDFLAGS   extra link flags, whitespace separated
    CXXSTD    -std= value applied to C++ units
    CXXLIB    runtime library linked when any C++ unit is present (default: stdc++)
"""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

DEFAULT_COMPILER = "gcc"
DEFAULT_CXX_LIBRARY = "stdc++"


def split_flags(value: Optional[str]) -> List[str]:
    """Split a flag override on whitespace.

    Args:
        value: Raw environment value (None or empty yields no flags)

    Returns:
        List of flags in order, without any count limit
    """
    if not value:
        return []
    return value.split()


@dataclass
class BuildEnvironment:
    """Compiler selection and user flag overrides for one build."""

    compiler: str = DEFAULT_COMPILER
    cflags: List[str] = field(default_factory=list)
    ldflags: List[str] = field(default_factory=list)
    cxx_standard: Optional[str] = None
    cxx_library: str = DEFAULT_CXX_LIBRARY

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "BuildEnvironment":
        """Read overrides from an environment mapping.

        Args:
            environ: Mapping to read (defaults to os.environ)

        Returns:
            BuildEnvironment populated from the mapping
        """
        if environ is None:
            environ = os.environ

        return cls(
            compiler=environ.get("CC") or DEFAULT_COMPILER,
            cflags=split_flags(environ.get("CFLAGS")),
            ldflags=split_flags(environ.get("LDFLAGS")),
            cxx_standard=environ.get("CXXSTD") or None,
            cxx_library=environ.get("CXXLIB") or DEFAULT_CXX_LIBRARY,
        )
