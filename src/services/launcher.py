"""
Emulator launch service for retroterm.
Builds the emulator command line from preferences and runs it as a child
process that inherits the terminal.
"""

import shlex
import subprocess
import traceback
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from utils.logging import log_error

# Slider position used when the preference is missing or invalid
CONTRAST_DEFAULT = 5


@dataclass
class LaunchResult:
    """Outcome of running the emulator."""

    started: bool
    exit_code: Optional[int] = None
    error: str = ""


def contrast_value(slider: Any) -> float:
    """
    Convert the 1-10 contrast slider to the emulator's contrast factor.

    1 -> 0.50, 4 -> 1.00 (unchanged), 5 -> 1.17, 10 -> 2.00
    """
    if not isinstance(slider, (int, float)) or isinstance(slider, bool) or not slider:
        slider = CONTRAST_DEFAULT
    return 0.5 + (slider - 1) * (1.5 / 9)


def build_launch_args(rom_path: str, settings: Dict[str, Any]) -> List[str]:
    """
    Build the emulator arguments for a ROM.

    Args:
        rom_path: Path to the ROM (or the archive holding it)
        settings: Launcher preferences

    Returns:
        Argument list, ROM path first
    """
    args = [rom_path]
    args += ["--symbols", str(settings.get("symbols", "ascii+block"))]
    args += ["--colors", str(settings.get("colors", "256"))]
    if settings.get("fgOnly"):
        args.append("--fg-only")
    if settings.get("dither"):
        args.append("--dither")

    contrast = f"{contrast_value(settings.get('contrast')):.2f}"
    if contrast != "1.00":
        args += ["--contrast", contrast]

    return args


def build_command(rom_path: str, settings: Dict[str, Any]) -> List[str]:
    """
    Full command line: the configured emulator plus launch arguments.

    Raises:
        ValueError: If the emulator command cannot be parsed or is blank
    """
    emulator = shlex.split(str(settings.get("emulatorCommand") or "retroemu"))
    if not emulator:
        raise ValueError("emulator command is blank")
    return emulator + build_launch_args(rom_path, settings)


def run_emulator(command: List[str]) -> LaunchResult:
    """
    Run the emulator and wait for it to exit.

    Standard I/O is inherited so the emulator can draw to the terminal.
    Any exit code hands control back to the launcher.

    Args:
        command: Full command line

    Returns:
        LaunchResult describing whether the process started and how it ended
    """
    try:
        completed = subprocess.run(command)
    except OSError as e:
        log_error(
            f"Failed to start emulator: {' '.join(command)}",
            type(e).__name__,
            traceback.format_exc(),
        )
        return LaunchResult(started=False, error=str(e))

    return LaunchResult(started=True, exit_code=completed.returncode)
