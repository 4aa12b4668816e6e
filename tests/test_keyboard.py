"""Tests for keyboard key -> command mapping."""

import curses
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from input.keyboard import KeyboardHandler
from input.navigation import Command


def test_browsing_keys():
    keyboard = KeyboardHandler()

    assert keyboard.command_for_key(curses.KEY_UP) == Command.UP
    assert keyboard.command_for_key(curses.KEY_NPAGE) == Command.PAGE_DOWN
    assert keyboard.command_for_key("\n") == Command.CONFIRM
    assert keyboard.command_for_key(13) == Command.CONFIRM
    assert keyboard.command_for_key("\x1b") == Command.BACK
    assert keyboard.command_for_key("r") == Command.TOGGLE
    assert keyboard.command_for_key("s") == Command.MENU
    assert keyboard.command_for_key("q") == Command.QUIT
    assert keyboard.command_for_key(curses.KEY_F5) == Command.REFRESH


def test_unbound_keys():
    keyboard = KeyboardHandler()

    assert keyboard.command_for_key("z") is None
    assert keyboard.command_for_key(curses.KEY_HOME) is None


def test_dialog_keys():
    keyboard = KeyboardHandler()

    assert keyboard.command_for_key("\t", dialog_open=True) == Command.DOWN
    assert keyboard.command_for_key(" ", dialog_open=True) == Command.TOGGLE
    assert keyboard.command_for_key(curses.KEY_LEFT, dialog_open=True) == Command.LEFT
    assert keyboard.command_for_key("\n", dialog_open=True) == Command.CONFIRM
    assert keyboard.command_for_key("\x1b", dialog_open=True) == Command.BACK
    # Browsing shortcuts are not active in the dialog
    assert keyboard.command_for_key("q", dialog_open=True) is None
    assert keyboard.command_for_key("s", dialog_open=True) is None


def test_backspace_variants():
    assert KeyboardHandler.is_backspace(curses.KEY_BACKSPACE)
    assert KeyboardHandler.is_backspace("\x7f")
    assert KeyboardHandler.is_backspace("\b")
    assert not KeyboardHandler.is_backspace("h")


def test_printable_char():
    assert KeyboardHandler.printable_char("x") == "x"
    assert KeyboardHandler.printable_char("/") == "/"
    assert KeyboardHandler.printable_char("é") == "é"
    assert KeyboardHandler.printable_char("\n") is None
    assert KeyboardHandler.printable_char(curses.KEY_UP) is None
