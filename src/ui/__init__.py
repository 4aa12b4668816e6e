"""
Terminal UI for retroterm.
"""

from .settings_dialog import SettingsDialog, DialogResult
from .screen import TerminalScreen

__all__ = [
    "SettingsDialog",
    "DialogResult",
    "TerminalScreen",
]
