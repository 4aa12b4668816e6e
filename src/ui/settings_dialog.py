"""
Settings dialog for retroterm.

While open the dialog owns every command: up/down move focus between
fields, left/right adjust the focused field, toggle flips it, confirm
saves and back cancels. The ROMs directory field captures typed text
while it has focus.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from input.navigation import Command

SYMBOL_OPTIONS = [
    "block", "half", "ascii", "ascii+block", "solid",
    "stipple", "quad", "sextant", "octant", "braille",
]
SYMBOL_LABELS = {
    "block": "Block ▀▄█",
    "half": "Half ▀▄",
    "ascii": "ASCII @#%",
    "ascii+block": "ASCII+Block",
    "solid": "Solid (BG)",
    "stipple": "Stipple ░▒▓",
    "quad": "Quad 2x2",
    "sextant": "Sextant 2x3",
    "octant": "Octant 2x4",
    "braille": "Braille ⠿⡿",
}

COLOR_OPTIONS = ["true", "256", "16", "2"]
COLOR_LABELS = {
    "true": "True Color",
    "256": "256 Colors",
    "16": "16 Colors",
    "2": "B&W",
}

CONTRAST_RANGE = (1, 10)


class DialogResult(Enum):
    OPEN = "open"
    SAVED = "saved"
    CANCELLED = "cancelled"


@dataclass
class TextField:
    key: str
    label: str
    value: str = ""

    def adjust(self, delta: int) -> None:
        pass

    def toggle(self) -> None:
        pass

    def insert(self, text: str) -> None:
        self.value += text

    def backspace(self) -> None:
        self.value = self.value[:-1]

    def display(self) -> str:
        return self.value


@dataclass
class ChoiceField:
    key: str
    label: str
    options: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    value: str = ""

    def adjust(self, delta: int) -> None:
        """Cycle through the options, wrapping at both ends."""
        if not self.options:
            return
        index = self.options.index(self.value) if self.value in self.options else -1
        self.value = self.options[(index + delta) % len(self.options)]

    def toggle(self) -> None:
        self.adjust(1)

    def display(self) -> str:
        return self.labels.get(self.value, self.value)


@dataclass
class ToggleField:
    key: str
    label: str
    value: bool = False

    def adjust(self, delta: int) -> None:
        self.toggle()

    def toggle(self) -> None:
        self.value = not self.value

    def display(self) -> str:
        return f"[{'X' if self.value else ' '}]"


@dataclass
class SliderField:
    key: str
    label: str
    value: int = 5
    minimum: int = 1
    maximum: int = 10

    def adjust(self, delta: int) -> None:
        step = 1 if delta > 0 else -1 if delta < 0 else 0
        self.value = max(self.minimum, min(self.maximum, self.value + step))

    def toggle(self) -> None:
        pass

    def display(self) -> str:
        filled = "█" * (self.value - self.minimum + 1)
        empty = "░" * (self.maximum - self.value)
        return f"{filled}{empty} {self.value}"


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


class SettingsDialog:
    """
    Modal settings form.

    Field values are copied from the preferences when the dialog opens and
    only written back by ``commit``. Focus is local to this instance.
    """

    def __init__(self, preferences: Any):
        self.preferences = preferences
        minimum, maximum = CONTRAST_RANGE
        contrast = _as_int(preferences.get("contrast"), 5)

        self.fields: List[Any] = [
            TextField("romsDir", "ROMs Directory", str(preferences.get("romsDir") or "")),
            ChoiceField("symbols", "Symbols", SYMBOL_OPTIONS, SYMBOL_LABELS,
                        str(preferences.get("symbols"))),
            ChoiceField("colors", "Colors", COLOR_OPTIONS, COLOR_LABELS,
                        str(preferences.get("colors"))),
            ToggleField("fgOnly", "FG Only", bool(preferences.get("fgOnly"))),
            ToggleField("dither", "Dither", bool(preferences.get("dither"))),
            SliderField("contrast", "Contrast", max(minimum, min(maximum, contrast)),
                        minimum, maximum),
        ]
        self.focus_index = 0
        self.result = DialogResult.OPEN

    @property
    def is_open(self) -> bool:
        return self.result == DialogResult.OPEN

    @property
    def focused_field(self) -> Any:
        return self.fields[self.focus_index]

    @property
    def captures_text(self) -> bool:
        """True while typed characters belong to the focused text field."""
        return self.is_open and isinstance(self.focused_field, TextField)

    def field(self, key: str) -> Optional[Any]:
        for candidate in self.fields:
            if candidate.key == key:
                return candidate
        return None

    def focus_next(self) -> None:
        self.focus_index = (self.focus_index + 1) % len(self.fields)

    def focus_prev(self) -> None:
        self.focus_index = (self.focus_index - 1) % len(self.fields)

    def adjust(self, delta: int) -> None:
        self.focused_field.adjust(delta)

    def toggle(self) -> None:
        self.focused_field.toggle()

    def type_text(self, text: str) -> None:
        if self.captures_text:
            self.focused_field.insert(text)

    def delete_char(self) -> None:
        if self.captures_text:
            self.focused_field.backspace()

    def values(self) -> Dict[str, Any]:
        return {f.key: f.value for f in self.fields}

    def commit(self) -> Dict[str, Any]:
        """
        Write every field to the preferences and close.

        A blank directory keeps the previously configured one.

        Returns:
            The values that were written
        """
        values = self.values()
        roms_dir = values["romsDir"].strip()
        if roms_dir:
            values["romsDir"] = roms_dir
        else:
            del values["romsDir"]

        self.preferences.update(values)
        self.result = DialogResult.SAVED
        return values

    def cancel(self) -> None:
        """Close without touching the preferences."""
        self.result = DialogResult.CANCELLED

    def handle_command(self, command: Command) -> DialogResult:
        """
        Route a normalized command to the form.

        Args:
            command: Command from the gamepad or keyboard

        Returns:
            Dialog state after handling the command
        """
        if not self.is_open:
            return self.result

        if command == Command.BACK:
            self.cancel()
        elif command in (Command.CONFIRM, Command.START):
            self.commit()
        elif command == Command.UP:
            self.focus_prev()
        elif command == Command.DOWN:
            self.focus_next()
        elif command == Command.LEFT:
            self.adjust(-1)
        elif command == Command.RIGHT:
            self.adjust(1)
        elif command == Command.TOGGLE:
            self.toggle()

        return self.result
