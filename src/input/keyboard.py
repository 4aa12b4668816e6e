"""
Keyboard input handling for retroterm.
Maps curses keys onto the same commands the gamepad produces.

Keys arrive from ``get_wch``: printable characters as ``str``, special
keys as ``int``. The terminal already repeats held keys, so keyboard
commands skip the hold/repeat state machine.
"""

import curses
from typing import Dict, Optional, Union

from .navigation import Command

Key = Union[int, str]

KEY_ESCAPE = 27
KEY_TAB = 9
KEY_NEWLINE = 10
KEY_RETURN = 13

# Control characters get_wch reports as str
_CONTROL_CHARS = {"\n", "\r", "\t", "\x1b", "\x7f", "\b"}

_BACKSPACE_CODES = (curses.KEY_BACKSPACE, 127, 8)

BROWSING_KEYS: Dict[Key, Command] = {
    curses.KEY_UP: Command.UP,
    curses.KEY_DOWN: Command.DOWN,
    curses.KEY_LEFT: Command.LEFT,
    curses.KEY_RIGHT: Command.RIGHT,
    curses.KEY_PPAGE: Command.PAGE_UP,
    curses.KEY_NPAGE: Command.PAGE_DOWN,
    curses.KEY_ENTER: Command.CONFIRM,
    KEY_NEWLINE: Command.CONFIRM,
    KEY_RETURN: Command.CONFIRM,
    KEY_ESCAPE: Command.BACK,
    "a": Command.BACK,
    "r": Command.TOGGLE,
    "s": Command.MENU,
    "q": Command.QUIT,
    curses.KEY_F5: Command.REFRESH,
}

DIALOG_KEYS: Dict[Key, Command] = {
    curses.KEY_UP: Command.UP,
    curses.KEY_DOWN: Command.DOWN,
    KEY_TAB: Command.DOWN,
    curses.KEY_LEFT: Command.LEFT,
    curses.KEY_RIGHT: Command.RIGHT,
    " ": Command.TOGGLE,
    curses.KEY_ENTER: Command.CONFIRM,
    KEY_NEWLINE: Command.CONFIRM,
    KEY_RETURN: Command.CONFIRM,
    KEY_ESCAPE: Command.BACK,
}


def normalize_key(key: Key) -> Key:
    """Report control characters by code so they match special keys."""
    if isinstance(key, str) and key in _CONTROL_CHARS:
        return ord(key)
    return key


class KeyboardHandler:
    """Translates raw curses keys into commands."""

    def command_for_key(self, key: Key, dialog_open: bool = False) -> Optional[Command]:
        """
        Get the command for a key press.

        Args:
            key: Key from ``get_wch``
            dialog_open: Whether the settings dialog has input

        Returns:
            Command or None if the key is not bound
        """
        keymap = DIALOG_KEYS if dialog_open else BROWSING_KEYS
        return keymap.get(normalize_key(key))

    @staticmethod
    def is_backspace(key: Key) -> bool:
        return normalize_key(key) in _BACKSPACE_CODES

    @staticmethod
    def printable_char(key: Key) -> Optional[str]:
        """The typed character, if the key produced a printable one."""
        if isinstance(key, str) and len(key) == 1 and key.isprintable():
            return key
        return None
