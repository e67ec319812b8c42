"""Filesystem layout of an application tree.

Layout:
    <root>/
    ├── src/                    # C and C++ sources (recursive)
    │   ├── includes/           # Extra include directory
    │   └── assets.h            # Generated during a build, removed afterwards
    ├── assets/                 # Static files embedded into the artifact
    ├── conf/<app>.conf         # Required application config
    ├── cert/                   # TLS key and certificate
    ├── .objs/                  # Object cache (objects + generated asset sources)
    └── <app>.so                # Link output

Every derived path is a pure function of the root and the application name,
so an object path never depends on anything but the unit name.
"""

from pathlib import Path


class AppLayout:
    """Resolves every path the build reads or writes for one application."""

    OBJECT_CACHE = ".objs"
    ASSETS_HEADER = "assets.h"

    def __init__(self, root: Path, app_name: str):
        """Initialize layout.

        Args:
            root: Application root directory
            app_name: Application name (base name of the artifact and config)
        """
        self.root = Path(root)
        self.app_name = app_name

    @property
    def src_dir(self) -> Path:
        """Directory holding application sources."""
        return self.root / "src"

    @property
    def includes_dir(self) -> Path:
        """Secondary include directory below src."""
        return self.src_dir / "includes"

    @property
    def assets_dir(self) -> Path:
        """Directory holding static assets."""
        return self.root / "assets"

    @property
    def conf_file(self) -> Path:
        """Application configuration file."""
        return self.root / "conf" / f"{self.app_name}.conf"

    @property
    def objs_dir(self) -> Path:
        """Object cache directory."""
        return self.root / self.OBJECT_CACHE

    @property
    def cert_dir(self) -> Path:
        """Certificate directory."""
        return self.root / "cert"

    @property
    def assets_header(self) -> Path:
        """Transient header declaring the embedded asset symbols."""
        return self.src_dir / self.ASSETS_HEADER

    @property
    def artifact_path(self) -> Path:
        """Shared library produced by the link step."""
        return self.root / f"{self.app_name}.so"

    def object_path(self, unit_name: str) -> Path:
        """Get the object file path for a build unit.

        Args:
            unit_name: Unit identity (e.g. 'main.c' or 'logo_png')

        Returns:
            Path inside the object cache
        """
        return self.objs_dir / f"{unit_name}.o"

    def generated_source_path(self, unit_name: str) -> Path:
        """Get the generated C source path for an asset unit."""
        return self.objs_dir / f"{unit_name}.c"

    def __repr__(self) -> str:
        return f"AppLayout(root={str(self.root)!r}, app_name={self.app_name!r})"
