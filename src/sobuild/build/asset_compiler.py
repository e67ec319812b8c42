"""
Static asset embedding.

Each file under assets/ becomes a generated C source in the object cache that
defines three symbols, named after the sanitized file name:

    u_int8_t  asset_<stem>_<ext>[]      file bytes followed by one 0x00
    u_int32_t asset_len_<stem>_<ext>    exact byte count (excludes the 0x00)
    time_t    asset_mtime_<stem>_<ext>  modification time of the asset

Matching extern declarations are collected into the shared header buffer so
application sources can include assets.h. The trailing NUL lets an asset be
used as a C string without copying.
"""

import logging
import mmap
import re
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import FilesystemError, ResourceError, ValidationError
from .layout import AppLayout
from .source_registry import AssetUnit, FileStat, LanguageVariant, SourceRegistry
from .staleness import StalenessOracle

logger = logging.getLogger(__name__)

_SANITIZE_RE = re.compile(r"[.\s-]", re.ASCII)
_HEX_BYTE_RE = re.compile(r"0x([0-9a-fA-F]{2})")

# Bytes rendered per write while emitting the data array
_CHUNK_SIZE = 64 * 1024


def sanitize_asset_name(file_name: str) -> Tuple[str, str]:
    """Split an asset file name into a symbol stem and extension.

    Every '.', ASCII whitespace character and '-' becomes '_'. The extension is
    whatever followed the final '.'.

    Args:
        file_name: Base name of the asset (e.g. 'my file-v1.2.png')

    Returns:
        Tuple of (stem, extension), e.g. ('my_file_v1_2', 'png')

    Raises:
        ValidationError: If the name has no '.'
    """
    index = file_name.rfind(".")
    if index == -1:
        raise ValidationError(f"couldn't find ext in {file_name}")

    sanitized = _SANITIZE_RE.sub("_", file_name)
    return sanitized[:index], sanitized[index + 1:]


def asset_declarations(stem: str, extension: str) -> Tuple[str, str, str]:
    """Header declarations for one asset's symbols."""
    return (
        f"extern u_int8_t asset_{stem}_{extension}[];",
        f"extern u_int32_t asset_len_{stem}_{extension};",
        f"extern time_t asset_mtime_{stem}_{extension};",
    )


def decode_asset_array(source_text: str) -> bytes:
    """Recover the bytes of the data array from a generated asset source.

    The result includes the trailing 0x00, so slicing it to the emitted
    length reproduces the original file.
    """
    start = source_text.index("{")
    end = source_text.index("}", start)
    return bytes(int(h, 16) for h in _HEX_BYTE_RE.findall(source_text[start:end]))


class AssetCompiler:
    """Turns asset files into generated C units.

    Declarations for every asset, fresh or regenerated, are appended to
    ``header`` in discovery order, and every produced unit is registered.
    """

    def __init__(
        self,
        layout: AppLayout,
        registry: SourceRegistry,
        header: List[str],
        show_progress: bool = True
    ):
        """
        Initialize asset compiler.

        Args:
            layout: Application layout (object cache location)
            registry: Registry receiving generated units
            header: Shared buffer of declaration lines for assets.h
            show_progress: Print a line for each regenerated asset
        """
        self.layout = layout
        self.registry = registry
        self.header = header
        self.show_progress = show_progress

    def __call__(self, asset_path: Path, entry_name: str) -> None:
        """Visitor entry point for DirectoryWalker."""
        self.compile(asset_path, entry_name)

    def compile(self, asset_path: Path, entry_name: str) -> Optional[AssetUnit]:
        """
        Generate (or reuse) the C unit for one asset.

        Args:
            asset_path: Path to the asset file
            entry_name: Base name of the asset

        Returns:
            The registered AssetUnit, or None for an empty asset

        Raises:
            ValidationError: If the asset name has no extension
            FilesystemError: If the asset or generated source cannot be accessed
            ResourceError: If the asset cannot be mapped
        """
        stem, extension = sanitize_asset_name(entry_name)
        name = f"{stem}_{extension}"

        try:
            stat = FileStat.of(asset_path)
        except OSError as e:
            raise FilesystemError(f"stat: {asset_path} {e.strerror or e}") from e

        if stat.size == 0:
            logger.warning(f"skipping empty asset {name}")
            return None

        source_path = self.layout.generated_source_path(name)
        object_path = self.layout.object_path(name)
        declarations = asset_declarations(stem, extension)

        build_required = StalenessOracle.requires_build(stat, object_path)
        if build_required:
            if self.show_progress:
                print(f"building asset {entry_name}")
            self._generate(asset_path, source_path, stem, extension, stat)

        self.header.extend(declarations)

        unit = AssetUnit(
            name=name,
            source_path=source_path,
            object_path=object_path,
            stat=stat,
            build_required=build_required,
            variant=LanguageVariant.C,
            stem=stem,
            extension=extension,
            length=stat.size,
            asset_mtime=stat.mtime,
            declarations=declarations,
        )
        return self.registry.add_unit(unit)

    def _generate(
        self,
        asset_path: Path,
        source_path: Path,
        stem: str,
        extension: str,
        stat: FileStat
    ) -> None:
        """Write the generated C source for an asset.

        The asset is mapped read-only and the mapping is released before
        returning.
        """
        try:
            asset_file = open(asset_path, "rb")
        except OSError as e:
            raise FilesystemError(f"open({asset_path}): {e.strerror or e}") from e

        with asset_file:
            try:
                data = mmap.mmap(asset_file.fileno(), 0, access=mmap.ACCESS_READ)
            except (OSError, ValueError) as e:
                raise ResourceError(f"mmap: {asset_path} {e}") from e

            with data:
                try:
                    with open(source_path, "w", encoding="utf-8", errors="surrogateescape") as out:
                        self._write_source(out, data, stem, extension, stat)
                except OSError as e:
                    raise FilesystemError(f"write({source_path}): {e.strerror or e}") from e

    @staticmethod
    def _write_source(out, data: mmap.mmap, stem: str, extension: str, stat: FileStat) -> None:
        out.write("/* Auto generated */\n")
        out.write("#include <sys/param.h>\n\n")
        out.write(f"u_int8_t asset_{stem}_{extension}[] = {{\n")

        for offset in range(0, len(data), _CHUNK_SIZE):
            chunk = data[offset:offset + _CHUNK_SIZE]
            out.write("".join(f"0x{byte:02x}," for byte in chunk))

        # Trailing NUL, not counted in the length
        out.write("0x00")
        out.write("};\n\n")
        out.write(f"u_int32_t asset_len_{stem}_{extension} = {len(data)};\n")
        out.write(f"time_t asset_mtime_{stem}_{extension} = {stat.mtime};\n")

    @staticmethod
    def header_text(declarations: List[str]) -> str:
        """Render assets.h with include guards around the declarations."""
        lines = ["#ifndef __H_SOBUILD_ASSETS_H", "#define __H_SOBUILD_ASSETS_H"]
        lines.extend(declarations)
        return "\n".join(lines) + "\n\n#endif\n"
