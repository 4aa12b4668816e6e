"""Tests for the modal settings dialog."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from config.settings import Preferences
from input.navigation import Command
from ui.settings_dialog import (
    ChoiceField,
    DialogResult,
    SettingsDialog,
    SliderField,
    ToggleField,
)


@pytest.fixture
def prefs(tmp_path):
    preferences = Preferences(str(tmp_path / "config.json"))
    preferences.update({"romsDir": "/roms"})
    return preferences


def _focus(dialog, key):
    while dialog.focused_field.key != key:
        dialog.focus_next()


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------

def test_choice_field_wraps():
    field = ChoiceField("colors", "Colors", ["a", "b", "c"], {}, "c")

    field.adjust(1)
    assert field.value == "a"

    field.adjust(-1)
    assert field.value == "c"


def test_choice_field_unknown_value_starts_at_first_option():
    field = ChoiceField("colors", "Colors", ["a", "b"], {}, "bogus")

    field.adjust(1)

    assert field.value == "a"


def test_toggle_field_display():
    field = ToggleField("dither", "Dither", False)
    assert field.display() == "[ ]"

    field.toggle()
    assert field.value is True
    assert field.display() == "[X]"


def test_slider_field_clamps():
    field = SliderField("contrast", "Contrast", 9, 1, 10)

    field.adjust(1)
    field.adjust(1)
    assert field.value == 10

    for _ in range(20):
        field.adjust(-1)
    assert field.value == 1
    assert field.display().endswith(" 1")


# ---------------------------------------------------------------------------
# Dialog
# ---------------------------------------------------------------------------

def test_dialog_loads_current_preferences(prefs):
    dialog = SettingsDialog(prefs)

    assert dialog.is_open
    assert dialog.values() == {
        "romsDir": "/roms",
        "symbols": "ascii+block",
        "colors": "256",
        "fgOnly": True,
        "dither": False,
        "contrast": 5,
    }


def test_dialog_opens_on_directory_field(prefs):
    dialog = SettingsDialog(prefs)

    assert dialog.focused_field.key == "romsDir"
    assert dialog.captures_text


def test_focus_wraps(prefs):
    dialog = SettingsDialog(prefs)

    dialog.handle_command(Command.UP)
    assert dialog.focused_field.key == "contrast"
    assert not dialog.captures_text

    dialog.handle_command(Command.DOWN)
    assert dialog.focused_field.key == "romsDir"


def test_symbols_cycle(prefs):
    dialog = SettingsDialog(prefs)
    _focus(dialog, "symbols")

    dialog.handle_command(Command.RIGHT)
    assert dialog.field("symbols").value == "solid"

    dialog.handle_command(Command.LEFT)
    dialog.handle_command(Command.LEFT)
    assert dialog.field("symbols").value == "ascii"


def test_toggle_flips_checkbox(prefs):
    dialog = SettingsDialog(prefs)
    _focus(dialog, "dither")

    dialog.handle_command(Command.TOGGLE)

    assert dialog.field("dither").value is True


def test_slider_ignores_toggle(prefs):
    dialog = SettingsDialog(prefs)
    _focus(dialog, "contrast")

    dialog.handle_command(Command.TOGGLE)
    assert dialog.field("contrast").value == 5

    dialog.handle_command(Command.RIGHT)
    assert dialog.field("contrast").value == 6


def test_typing_edits_directory(prefs):
    dialog = SettingsDialog(prefs)

    dialog.delete_char()
    dialog.delete_char()
    dialog.delete_char()
    dialog.delete_char()
    dialog.type_text("/mnt/games")

    assert dialog.field("romsDir").value == "/mnt/games"


def test_typing_ignored_off_text_field(prefs):
    dialog = SettingsDialog(prefs)
    dialog.focus_next()

    dialog.type_text("x")
    dialog.delete_char()

    assert dialog.field("romsDir").value == "/roms"


def test_confirm_saves_all_fields(prefs):
    dialog = SettingsDialog(prefs)
    dialog.type_text("/extra")
    _focus(dialog, "colors")
    dialog.handle_command(Command.RIGHT)
    _focus(dialog, "fgOnly")
    dialog.handle_command(Command.TOGGLE)

    assert dialog.handle_command(Command.CONFIRM) == DialogResult.SAVED
    assert not dialog.is_open

    reloaded = Preferences(prefs.config_file)
    assert reloaded.get("romsDir") == "/roms/extra"
    assert reloaded.get("colors") == "16"
    assert reloaded.get("fgOnly") is False


def test_blank_directory_keeps_previous(prefs):
    dialog = SettingsDialog(prefs)
    for _ in range(len("/roms")):
        dialog.delete_char()
    dialog.type_text("   ")

    values = dialog.commit()

    assert "romsDir" not in values
    assert prefs.get("romsDir") == "/roms"


def test_back_cancels_without_saving(prefs):
    dialog = SettingsDialog(prefs)
    _focus(dialog, "dither")
    dialog.handle_command(Command.TOGGLE)

    assert dialog.handle_command(Command.BACK) == DialogResult.CANCELLED
    assert prefs.get("dither") is False


def test_closed_dialog_ignores_commands(prefs):
    dialog = SettingsDialog(prefs)
    dialog.handle_command(Command.BACK)

    assert dialog.handle_command(Command.CONFIRM) == DialogResult.CANCELLED
    assert prefs.get("symbols") == "ascii+block"
