"""
Build unit records and the ordered registry that owns them.

Units are created once during discovery and never change afterwards. The
registry keeps them in discovery order, which is also compile order and the
order objects are handed to the linker.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple


class LanguageVariant(Enum):
    """Source language of a build unit."""

    C = "c"
    CPP = "cpp"

    @classmethod
    def from_path(cls, path: Path) -> Optional["LanguageVariant"]:
        """Classify a file by extension; None if it is not a source file."""
        suffix = Path(path).suffix
        if suffix == ".c":
            return cls.C
        if suffix == ".cpp":
            return cls.CPP
        return None


@dataclass(frozen=True)
class FileStat:
    """Size and whole-second modification time of a file."""

    size: int
    mtime: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "FileStat":
        return cls(size=st.st_size, mtime=int(st.st_mtime))

    @classmethod
    def of(cls, path: Path) -> "FileStat":
        """Snapshot a path (raises OSError like os.stat)."""
        return cls.from_stat(os.stat(path))


@dataclass(frozen=True)
class SourceUnit:
    """One source file tracked for compilation."""

    name: str
    source_path: Path
    object_path: Path
    stat: FileStat
    build_required: bool
    variant: LanguageVariant = LanguageVariant.C

    @property
    def is_cpp(self) -> bool:
        return self.variant is LanguageVariant.CPP


@dataclass(frozen=True)
class AssetUnit(SourceUnit):
    """Generated C source embedding one static asset.

    The inherited stat is the asset's, so the generated object is stamped
    with the asset's modification time.
    """

    stem: str = ""
    extension: str = ""
    length: int = 0
    asset_mtime: int = 0
    declarations: Tuple[str, ...] = ()

    @property
    def data_symbol(self) -> str:
        return f"asset_{self.stem}_{self.extension}"

    @property
    def length_symbol(self) -> str:
        return f"asset_len_{self.stem}_{self.extension}"

    @property
    def mtime_symbol(self) -> str:
        return f"asset_mtime_{self.stem}_{self.extension}"


class SourceRegistry:
    """Ordered, append-only collection of build units.

    Same-named units from different subdirectories are not detected; they
    map to the same object path and the last compile wins.
    """

    def __init__(self):
        self._units: List[SourceUnit] = []

    def add(
        self,
        name: str,
        source_path: Path,
        object_path: Path,
        stat: FileStat,
        build_required: bool,
        variant: LanguageVariant = LanguageVariant.C
    ) -> SourceUnit:
        """
        Create and append a unit.

        Args:
            name: Unit identity (sanitized base name)
            source_path: Source file to compile
            object_path: Object file to produce
            stat: Snapshot of the source
            build_required: Whether the unit must be compiled
            variant: Source language

        Returns:
            The registered unit
        """
        unit = SourceUnit(
            name=name,
            source_path=Path(source_path),
            object_path=Path(object_path),
            stat=stat,
            build_required=build_required,
            variant=variant,
        )
        self._units.append(unit)
        return unit

    def add_unit(self, unit: SourceUnit) -> SourceUnit:
        """Append an already constructed unit (e.g. an AssetUnit)."""
        self._units.append(unit)
        return unit

    @property
    def count(self) -> int:
        return len(self._units)

    @property
    def units(self) -> List[SourceUnit]:
        """Snapshot of registered units in discovery order."""
        return list(self._units)

    def build_required(self) -> List[SourceUnit]:
        """Units whose object must be (re)compiled, in registry order."""
        return [unit for unit in self._units if unit.build_required]

    def has_variant(self, variant: LanguageVariant) -> bool:
        return any(unit.variant is variant for unit in self._units)

    def object_paths(self) -> List[Path]:
        return [unit.object_path for unit in self._units]

    def __iter__(self) -> Iterator[SourceUnit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)
