"""
Build orchestration for sobuild applications.

This module coordinates one build from the application tree to the shared
library:
- Layout validation (src/ and conf/<app>.conf)
- Asset embedding (assets/ -> generated C units + assets.h)
- Source discovery and staleness checks (src/**/*.c, src/**/*.cpp)
- Compilation of stale units, one child process at a time
- Certificate bootstrap for a fresh tree
- Linking into <root>/<app>.so when anything was recompiled

The first fatal error stops the build; nothing already written is rolled
back. An object left unstamped by an aborted compile is simply seen as stale
next time.
"""

import errno
import logging
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from ..config.build_env import BuildEnvironment
from .asset_compiler import AssetCompiler
from .certificates import CertificateGenerator
from .compilation_executor import ProcessOrchestrator
from .directory_walker import DirectoryWalker
from .errors import BuildError, FilesystemError, ValidationError
from .flag_builder import DEFAULT_PREFIX, FlagBuilder
from .layout import AppLayout
from .source_registry import FileStat, LanguageVariant, SourceRegistry
from .staleness import StalenessOracle

logger = logging.getLogger(__name__)

# certificate_generator(app_name, root)
CertificateHook = Callable[[str, Path], None]


class BuildState(Enum):
    """Phases of a build."""

    VALIDATING = "validating"
    DISCOVERING_ASSETS = "discovering-assets"
    DISCOVERING_SOURCES = "discovering-sources"
    COMPILING = "compiling"
    LINKING = "linking"
    DONE = "done"
    REPORTED = "reported"
    FAILED = "failed"


@dataclass
class BuildContext:
    """Everything one build invocation reads and mutates."""

    root: Path
    app_name: str
    env: BuildEnvironment
    layout: AppLayout
    registry: SourceRegistry = field(default_factory=SourceRegistry)
    header: Optional[List[str]] = None
    state: BuildState = BuildState.VALIDATING
    relink_required: bool = False
    compiled: List[str] = field(default_factory=list)

    @classmethod
    def resolve(
        cls,
        app_name: Optional[str] = None,
        env: Optional[BuildEnvironment] = None,
        cwd: Optional[Path] = None
    ) -> "BuildContext":
        """Derive root and application name.

        Without an application argument the current directory is the root and
        its base name is the application name. With one, the argument is the
        root and its base name is the application name.
        """
        if app_name:
            root = Path(app_name)
            name = root.resolve().name
        else:
            root = Path(cwd) if cwd is not None else Path.cwd()
            name = root.resolve().name

        return cls(
            root=root,
            app_name=name,
            env=env if env is not None else BuildEnvironment.from_environ(),
            layout=AppLayout(root, name),
        )


@dataclass
class BuildResult:
    """Result of a build invocation."""

    success: bool
    state: BuildState
    artifact_path: Optional[Path]
    compiled: List[str]
    relinked: bool
    build_time: float
    message: str
    error: Optional[BuildError] = None


class BuildCoordinator:
    """
    Drives a build through validation, discovery, compilation and linking.

    Example usage:
        coordinator = BuildCoordinator()
        result = coordinator.build("myapp")
        if result.success and result.relinked:
            print(f"Library: {result.artifact_path}")
    """

    def __init__(
        self,
        env: Optional[BuildEnvironment] = None,
        certificate_generator: Optional[CertificateHook] = None,
        prefix: str = DEFAULT_PREFIX,
        timeout: Optional[float] = None,
        show_progress: bool = True
    ):
        """
        Initialize build coordinator.

        Args:
            env: Compiler overrides (defaults to the process environment)
            certificate_generator: Called once when cert/ had to be created
                (defaults to CertificateGenerator over the build's process runner)
            prefix: Install prefix searched for headers
            timeout: Per-child timeout in seconds (None waits forever)
            show_progress: Print progress lines
        """
        self.env = env
        self.certificate_generator = certificate_generator
        self.prefix = prefix
        self.timeout = timeout
        self.show_progress = show_progress

    def build(self, app_name: Optional[str] = None, cwd: Optional[Path] = None) -> BuildResult:
        """
        Build an application.

        Args:
            app_name: Application directory (None builds the current directory)
            cwd: Directory used when app_name is None (defaults to os.getcwd())

        Returns:
            BuildResult; on failure success is False and error holds the cause
        """
        start_time = time.time()
        ctx = BuildContext.resolve(app_name, env=self.env, cwd=cwd)

        try:
            self.run(ctx)
        except BuildError as e:
            ctx.state = BuildState.FAILED
            logger.debug(f"build failed in {ctx.layout}: {e}")
            return BuildResult(
                success=False,
                state=ctx.state,
                artifact_path=None,
                compiled=list(ctx.compiled),
                relinked=False,
                build_time=time.time() - start_time,
                message=str(e),
                error=e,
            )

        relinked = ctx.relink_required
        ctx.state = BuildState.REPORTED
        return BuildResult(
            success=True,
            state=ctx.state,
            artifact_path=ctx.layout.artifact_path if relinked else None,
            compiled=list(ctx.compiled),
            relinked=relinked,
            build_time=time.time() - start_time,
            message=f"{ctx.app_name} built successfully!" if relinked else "nothing to be done",
        )

    def run(self, ctx: BuildContext) -> None:
        """
        Execute every build phase against a context.

        Raises:
            BuildError: On the first fatal condition
        """
        layout = ctx.layout
        processes = ProcessOrchestrator(
            FlagBuilder(layout, ctx.env, prefix=self.prefix),
            timeout=self.timeout,
        )

        # Phase 1: Validate layout
        ctx.state = BuildState.VALIDATING
        self._validate(ctx)
        self._ensure_dir(layout.objs_dir, 0o755)
        self._remove_if_exists(layout.assets_header)

        # Phase 2: Embed assets
        ctx.state = BuildState.DISCOVERING_ASSETS
        if layout.assets_dir.is_dir():
            ctx.header = []
            assets = AssetCompiler(layout, ctx.registry, ctx.header, self.show_progress)
            DirectoryWalker.walk(layout.assets_dir, assets)
            self._write_header(layout.assets_header, ctx.header)

        # Phase 3: Register sources
        ctx.state = BuildState.DISCOVERING_SOURCES
        DirectoryWalker.walk(layout.src_dir, lambda path, name: self._register_source(ctx, path, name))

        # Phase 4: Compile stale units
        ctx.state = BuildState.COMPILING
        for unit in ctx.registry.build_required():
            if self.show_progress:
                print(f"compiling {unit.name}")
            processes.compile(unit)
            StalenessOracle.stamp(unit.object_path, unit.stat)
            ctx.compiled.append(unit.name)
            ctx.relink_required = True

        self._remove_if_exists(layout.assets_header)

        # Phase 5: Certificates for a fresh tree
        if not layout.cert_dir.is_dir():
            self._ensure_dir(layout.cert_dir, 0o700)
            generator = self.certificate_generator or CertificateGenerator(
                processes, show_progress=self.show_progress
            )
            generator(ctx.app_name, ctx.root)

        # Phase 6: Link
        if ctx.relink_required:
            ctx.state = BuildState.LINKING
            processes.link(ctx.registry)
            if self.show_progress:
                print(f"{ctx.app_name} built successfully!")
        else:
            ctx.state = BuildState.DONE
            if self.show_progress:
                print("nothing to be done")

    @staticmethod
    def _validate(ctx: BuildContext) -> None:
        layout = ctx.layout
        if not layout.src_dir.is_dir() or not layout.conf_file.is_file():
            raise ValidationError(f"{ctx.app_name} doesn't appear to be an sobuild app")

    @staticmethod
    def _register_source(ctx: BuildContext, path: Path, entry_name: str) -> None:
        variant = LanguageVariant.from_path(Path(entry_name))
        if variant is None:
            return

        try:
            stat = FileStat.of(path)
        except OSError as e:
            raise FilesystemError(f"stat({path}): {e.strerror or e}") from e

        object_path = ctx.layout.object_path(entry_name)
        ctx.registry.add(
            entry_name,
            path,
            object_path,
            stat,
            StalenessOracle.requires_build(stat, object_path),
            variant,
        )

    @staticmethod
    def _ensure_dir(path: Path, mode: int) -> None:
        if path.is_dir():
            return
        try:
            os.mkdir(path, mode)
        except OSError as e:
            raise FilesystemError(f"mkdir({path}): {e.strerror or e}") from e

    @staticmethod
    def _remove_if_exists(path: Path) -> None:
        try:
            os.unlink(path)
        except OSError as e:
            if e.errno != errno.ENOENT:
                raise FilesystemError(f"unlink({path}): {e.strerror or e}") from e

    @staticmethod
    def _write_header(path: Path, declarations: List[str]) -> None:
        try:
            path.write_text(
                AssetCompiler.header_text(declarations), encoding="utf-8", errors="surrogateescape"
            )
        except OSError as e:
            raise FilesystemError(f"open({path}): {e.strerror or e}") from e
