"""
Build system components for sobuild.

This module provides the build pipeline implementation including:
- Directory traversal and source discovery
- Staleness tracking by modification time
- Asset embedding (static files -> generated C units)
- Compilation and linking via external processes
- Build orchestration
"""

from .asset_compiler import AssetCompiler, decode_asset_array, sanitize_asset_name
from .certificates import CertificateGenerator
from .cleaner import BuildCleaner
from .compilation_executor import ProcessOrchestrator, ProcessStatus
from .directory_walker import DirectoryWalker
from .errors import (
    BuildError,
    FilesystemError,
    ResourceError,
    SubprocessError,
    SubprocessTimeout,
    ValidationError,
)
from .flag_builder import FlagBuilder
from .layout import AppLayout
from .orchestrator import BuildContext, BuildCoordinator, BuildResult, BuildState
from .source_registry import AssetUnit, FileStat, LanguageVariant, SourceRegistry, SourceUnit
from .staleness import StalenessOracle

__all__ = [
    'AppLayout',
    'AssetCompiler',
    'AssetUnit',
    'BuildCleaner',
    'BuildContext',
    'BuildCoordinator',
    'BuildError',
    'BuildResult',
    'BuildState',
    'CertificateGenerator',
    'DirectoryWalker',
    'FileStat',
    'FilesystemError',
    'FlagBuilder',
    'LanguageVariant',
    'ProcessOrchestrator',
    'ProcessStatus',
    'ResourceError',
    'SourceRegistry',
    'SourceUnit',
    'StalenessOracle',
    'SubprocessError',
    'SubprocessTimeout',
    'ValidationError',
    'decode_asset_array',
    'sanitize_asset_name',
]
