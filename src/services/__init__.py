"""
Services for retroterm.
"""

from .rom_scanner import RomEntry, RomScanner, Catalog, scan_catalog
from .launcher import LaunchResult, build_command, build_launch_args, run_emulator

__all__ = [
    "RomEntry",
    "RomScanner",
    "Catalog",
    "scan_catalog",
    "LaunchResult",
    "build_command",
    "build_launch_args",
    "run_emulator",
]
