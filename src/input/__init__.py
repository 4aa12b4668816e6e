"""
Input handling for retroterm.
Handles gamepad polling, keyboard mapping and command normalization.
"""

from .navigation import Command, InputSnapshot, InputNormalizer
from .controller import ControllerHandler
from .keyboard import KeyboardHandler

__all__ = [
    "Command",
    "InputSnapshot",
    "InputNormalizer",
    "ControllerHandler",
    "KeyboardHandler",
]
