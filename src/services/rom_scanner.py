"""
ROM catalog builder for retroterm.
Walks the ROMs directory, classifies files by extension and peeks inside
archives without extracting them.
"""

import os
import re
import zipfile
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import rarfile

from constants import MAX_SCAN_DEPTH, UNKNOWN_SYSTEM
from utils.logging import log_error


# Extension -> system name
SYSTEM_NAMES: Dict[str, str] = {
    # NES
    ".nes": "NES", ".fds": "NES", ".unf": "NES", ".unif": "NES",
    # SNES
    ".sfc": "SNES", ".smc": "SNES",
    # Game Boy
    ".gb": "Game Boy", ".gbc": "Game Boy Color", ".gba": "Game Boy Advance",
    # Genesis
    ".md": "Genesis", ".gen": "Genesis", ".smd": "Genesis", ".bin": "Genesis",
    # Master System / Game Gear
    ".sms": "Master System", ".gg": "Game Gear", ".sg": "SG-1000",
    # Atari consoles
    ".a26": "Atari 2600", ".a52": "Atari 5200", ".a78": "Atari 7800",
    # Atari computers
    ".xex": "Atari 800", ".atr": "Atari 800", ".atx": "Atari 800",
    ".bas": "Atari 800", ".car": "Atari 800", ".xfd": "Atari 800",
    # Lynx
    ".lnx": "Lynx", ".o": "Lynx",
    # PC Engine
    ".pce": "PC Engine", ".cue": "PC Engine", ".ccd": "PC Engine", ".chd": "PC Engine",
    # Neo Geo Pocket
    ".ngp": "Neo Geo Pocket", ".ngc": "Neo Geo Pocket Color",
    # WonderSwan
    ".ws": "WonderSwan", ".wsc": "WonderSwan Color",
    ".col": "ColecoVision",
    ".vec": "Vectrex",
    # ZX Spectrum
    ".tzx": "ZX Spectrum", ".z80": "ZX Spectrum", ".sna": "ZX Spectrum",
    # MSX
    ".mx1": "MSX", ".mx2": "MSX", ".rom": "MSX", ".dsk": "MSX", ".cas": "MSX",
    # PlayStation
    ".iso": "PlayStation", ".pbp": "PlayStation", ".m3u": "PlayStation",
}

ROM_EXTENSIONS = frozenset(SYSTEM_NAMES)

ARCHIVE_EXTENSIONS = frozenset({".zip", ".rar"})

# Member names like "1" or "A" say nothing about the game
_PLACEHOLDER_NAME = re.compile(r"^\d+$")
_MIN_NAME_LENGTH = 3


@dataclass(frozen=True)
class RomEntry:
    """A single playable ROM, either a plain file or an archive member."""

    name: str
    path: str
    extension: str
    system: str
    archive_member: Optional[str] = None


def classify(extension: str) -> str:
    """Resolve the system for a file extension (case-insensitive)."""
    return SYSTEM_NAMES.get(extension.lower(), UNKNOWN_SYSTEM)


def sort_key(entry: RomEntry) -> Tuple[str, str, str, str]:
    """Case-insensitive name order, with ties broken deterministically."""
    return (entry.name.lower(), entry.name, entry.path, entry.archive_member or "")


def is_placeholder_name(name: str) -> bool:
    """Check if an archive member name is too generic to display."""
    return bool(_PLACEHOLDER_NAME.match(name)) or len(name) < _MIN_NAME_LENGTH


def iter_archive_members(archive_path: str) -> Iterator[Tuple[str, int]]:
    """
    Lazily list the files inside a ZIP or RAR archive.

    Nothing is extracted; only the archive directory is read.

    Args:
        archive_path: Path to the archive

    Yields:
        (member_name, uncompressed_size) pairs
    """
    extension = os.path.splitext(archive_path)[1].lower()

    if extension == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zf:
            for info in zf.infolist():
                if not info.is_dir():
                    yield info.filename, info.file_size
    elif extension == ".rar":
        with rarfile.RarFile(archive_path, "r") as rf:
            for info in rf.infolist():
                if not info.is_dir():
                    yield info.filename, info.file_size


class RomScanner:
    """
    Builds the flat list of ROMs found under a root directory.

    Unreadable directories, files and archives contribute nothing instead
    of aborting the scan.
    """

    def __init__(self, roms_dir: str, max_depth: int = MAX_SCAN_DEPTH):
        self.roms_dir = roms_dir
        self.max_depth = max_depth

    def scan(self) -> List[RomEntry]:
        """
        Scan the ROMs directory.

        Returns:
            All entries, sorted by case-insensitive name
        """
        roms: List[RomEntry] = []
        self._scan_dir(self.roms_dir, roms, 0)
        return sorted(roms, key=sort_key)

    def _scan_dir(self, directory: str, roms: List[RomEntry], depth: int) -> None:
        if depth > self.max_depth:
            return

        try:
            names = os.listdir(directory)
        except OSError:
            return

        for name in names:
            if name.startswith("."):
                continue

            full_path = os.path.join(directory, name)
            try:
                if os.path.isdir(full_path):
                    self._scan_dir(full_path, roms, depth + 1)
                elif os.path.isfile(full_path):
                    roms.extend(self._scan_file(full_path))
            except OSError:
                # Skip inaccessible files
                continue

    def _scan_file(self, file_path: str) -> List[RomEntry]:
        base, extension = os.path.splitext(os.path.basename(file_path))
        extension = extension.lower()

        if extension in ARCHIVE_EXTENSIONS:
            return self._scan_archive(file_path)

        if extension in ROM_EXTENSIONS:
            return [
                RomEntry(
                    name=base,
                    path=file_path,
                    extension=extension,
                    system=classify(extension),
                )
            ]

        return []

    def _scan_archive(self, archive_path: str) -> List[RomEntry]:
        archive_name = os.path.splitext(os.path.basename(archive_path))[0]
        roms: List[RomEntry] = []

        try:
            for member, _size in iter_archive_members(archive_path):
                if member.startswith("__MACOSX"):
                    continue

                member_base = member.replace("\\", "/").rsplit("/", 1)[-1]
                if member_base.startswith("."):
                    continue

                rom_name, extension = os.path.splitext(member_base)
                extension = extension.lower()
                if extension not in ROM_EXTENSIONS:
                    continue

                # Multi-disc dumps are often named 1.bin, 2.bin, ...
                if is_placeholder_name(rom_name):
                    rom_name = archive_name

                roms.append(
                    RomEntry(
                        name=rom_name,
                        path=archive_path,
                        extension=extension,
                        system=classify(extension),
                        archive_member=member,
                    )
                )
        except (OSError, zipfile.BadZipFile, rarfile.Error) as e:
            log_error(f"Skipping unreadable archive {archive_path}", type(e).__name__, str(e))
            return []

        return roms

    @staticmethod
    def get_system_groups(roms: List[RomEntry]) -> Dict[str, List[RomEntry]]:
        """
        Partition entries by system, keeping their relative order.

        Args:
            roms: Entries to group

        Returns:
            Mapping of system name to entries
        """
        groups: Dict[str, List[RomEntry]] = {}
        for rom in roms:
            groups.setdefault(rom.system, []).append(rom)
        return groups


@dataclass
class Catalog:
    """All discovered ROMs, flat and grouped by system."""

    entries: List[RomEntry] = field(default_factory=list)
    groups: Dict[str, List[RomEntry]] = field(default_factory=dict)
    systems: List[str] = field(default_factory=list)

    @classmethod
    def from_entries(cls, entries: List[RomEntry]) -> "Catalog":
        flat = sorted(entries, key=sort_key)
        groups = RomScanner.get_system_groups(flat)
        for system in groups:
            groups[system].sort(key=sort_key)
        return cls(entries=flat, groups=groups, systems=sorted(groups))

    @property
    def system_count(self) -> int:
        return len(self.systems)

    def is_empty(self) -> bool:
        return not self.entries

    def roms_for(self, system: str) -> List[RomEntry]:
        return self.groups.get(system, [])

    def find_by_path(self, path: str) -> Optional[RomEntry]:
        """Get the first entry stored at a filesystem path."""
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None


def scan_catalog(roms_dir: str) -> Catalog:
    """
    Scan a ROMs directory into a grouped and sorted catalog.

    A missing or unreadable directory yields an empty catalog.
    """
    return Catalog.from_entries(RomScanner(roms_dir).scan())
