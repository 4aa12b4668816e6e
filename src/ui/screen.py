"""
Terminal screen for retroterm.
Draws the launcher with curses: header, ROM list, info panel, controller
panel, status bar and the settings dialog on top when open.
"""

import curses
from enum import Enum
from typing import Any, List, Optional

from constants import (
    APP_NAME,
    HEADER_HEIGHT,
    STATUS_HEIGHT,
    CONTROLLER_PANEL_HEIGHT,
    ART_WIDTH,
)
from state import AppState, ViewMode
from ui.settings_dialog import SettingsDialog, TextField
from ui.system_art import render_art

HELP_TEXT = " A/Enter Play  ←→ System  ↑↓ Browse  LB/RB Page  X/r Recent  Y/s Settings  q Quit"
DIALOG_HELP = "↑↓ field  ←→ adjust  Space toggle  Enter save  Esc cancel"


class Colors(Enum):
    TITLE = 1
    SYSTEM = 2
    SELECTED = 3
    DIM = 4
    WARNING = 5
    FOCUS = 6
    RECENT = 7


def _add(win: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    """addstr that clips to the window and ignores the bottom-right cell."""
    height, width = win.getmaxyx()
    if y < 0 or y >= height or x >= width:
        return
    try:
        win.addstr(y, x, text[: max(0, width - x)], attr)
    except curses.error:
        pass


class TerminalScreen:
    """Owns the curses session for the launcher."""

    def __init__(self):
        self.stdscr: Optional[Any] = None

    @property
    def active(self) -> bool:
        return self.stdscr is not None

    def start(self) -> None:
        self.stdscr = curses.initscr()
        curses.noecho()
        curses.cbreak()
        self.stdscr.keypad(True)
        self.stdscr.nodelay(True)
        # Keys typed while the emulator ran were meant for the emulator
        curses.flushinp()
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self._init_colors()

    def stop(self) -> None:
        """Hand the terminal back, e.g. before the emulator runs."""
        if self.stdscr is None:
            return
        self.stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        self.stdscr = None

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(Colors.TITLE.value, curses.COLOR_CYAN, -1)
        curses.init_pair(Colors.SYSTEM.value, curses.COLOR_YELLOW, -1)
        curses.init_pair(Colors.SELECTED.value, curses.COLOR_WHITE, curses.COLOR_BLUE)
        curses.init_pair(Colors.DIM.value, curses.COLOR_WHITE, -1)
        curses.init_pair(Colors.WARNING.value, curses.COLOR_YELLOW, -1)
        curses.init_pair(Colors.FOCUS.value, curses.COLOR_GREEN, -1)
        curses.init_pair(Colors.RECENT.value, curses.COLOR_MAGENTA, -1)

    def _color(self, color: Colors) -> int:
        return curses.color_pair(color.value) if curses.has_colors() else 0

    def read_keys(self) -> List[Any]:
        """Drain pending key presses without blocking."""
        keys = []
        if self.stdscr is None:
            return keys
        while True:
            try:
                key = self.stdscr.get_wch()
            except curses.error:
                break
            if key == curses.KEY_RESIZE:
                curses.update_lines_cols()
                continue
            keys.append(key)
        return keys

    # ---- Rendering ---- #

    def render(self, state: AppState, settings: dict, roms_dir: str) -> None:
        if self.stdscr is None:
            return

        scr = self.stdscr
        scr.erase()
        height, width = scr.getmaxyx()
        list_width = width // 2
        body_top = HEADER_HEIGHT
        body_bottom = height - STATUS_HEIGHT

        self._draw_header(state, width)
        self._draw_list(state, roms_dir, body_top, body_bottom, list_width)
        self._draw_info(state, body_top, body_bottom - CONTROLLER_PANEL_HEIGHT, list_width, width)
        self._draw_controllers(state, settings, body_bottom - CONTROLLER_PANEL_HEIGHT, list_width, width)
        self._draw_status(state, height, width)

        if state.dialog_open:
            self._draw_dialog(state.mode.dialog, height, width)

        scr.refresh()

    def _draw_box(self, top: int, left: int, bottom: int, right: int, attr: int = 0) -> None:
        scr = self.stdscr
        if bottom - top < 1 or right - left < 1:
            return
        _add(scr, top, left, "┌" + "─" * (right - left - 1) + "┐", attr)
        for y in range(top + 1, bottom):
            _add(scr, y, left, "│", attr)
            _add(scr, y, right, "│", attr)
        _add(scr, bottom, left, "└" + "─" * (right - left - 1) + "┘", attr)

    def _draw_header(self, state: AppState, width: int) -> None:
        selection = state.selection
        scr = self.stdscr

        if selection.view == ViewMode.RECENT:
            _add(scr, 1, ART_WIDTH + 4, "Recent Games", self._color(Colors.RECENT) | curses.A_BOLD)
            _add(scr, 2, ART_WIDTH + 4, f"{len(selection.active_list)} games")
            return

        system = selection.current_system
        if system is None:
            _add(scr, 1, ART_WIDTH + 4, APP_NAME.upper(), self._color(Colors.TITLE) | curses.A_BOLD)
            return

        for row, line in enumerate(render_art(system).splitlines()):
            _add(scr, 1 + row, 1, line)

        _add(scr, 1, ART_WIDTH + 4, system, self._color(Colors.SYSTEM) | curses.A_BOLD)
        _add(
            scr,
            2,
            ART_WIDTH + 4,
            f"{len(selection.active_list)} games  "
            f"[{selection.system_index + 1}/{selection.system_count}]",
        )

    def _draw_list(self, state: AppState, roms_dir: str, top: int, bottom: int, width: int) -> None:
        scr = self.stdscr
        self._draw_box(top, 0, bottom - 1, width - 1, self._color(Colors.TITLE))
        inner_top = top + 1
        rows = max(1, bottom - top - 2)
        selection = state.selection

        if selection.catalog.is_empty() and selection.view == ViewMode.SYSTEM:
            title = "ROMs directory not found" if state.roms_dir_missing else "No ROMs found"
            lines = [title, "", roms_dir, "", "Press s to configure"]
            for row, line in enumerate(lines):
                attr = self._color(Colors.WARNING) if row == 0 else 0
                _add(scr, inner_top + row, 2, line, attr)
            return

        if not selection.active_list:
            _add(scr, inner_top, 2, "No recent games", self._color(Colors.DIM))
            return

        # Keep the highlight inside the visible window
        start = max(0, min(selection.highlight - rows // 2, len(selection.active_list) - rows))
        visible = selection.active_list[start:start + rows]
        for row, entry in enumerate(visible):
            index = start + row
            label = entry.name
            if selection.view == ViewMode.RECENT:
                label = f"[{entry.system}] {entry.name}"
            attr = self._color(Colors.SELECTED) | curses.A_BOLD if index == selection.highlight else 0
            _add(scr, inner_top + row, 1, f" {label}".ljust(width - 2), attr)

    def _draw_info(self, state: AppState, top: int, bottom: int, left: int, width: int) -> None:
        scr = self.stdscr
        self._draw_box(top, left, bottom - 1, width - 1, self._color(Colors.FOCUS))
        entry = state.selection.current_entry()
        x = left + 2

        if entry is None:
            _add(scr, top + 1, x, "Select a game", self._color(Colors.DIM))
            return

        lines = [
            (entry.name, curses.A_BOLD),
            ("", 0),
            (f"System: {entry.system}", 0),
            (f"File: {entry.extension}", 0),
        ]
        if entry.archive_member:
            lines.append((f"In archive: {entry.archive_member}", 0))
        lines += [("", 0), (entry.path, self._color(Colors.DIM))]

        for row, (text, attr) in enumerate(lines):
            if top + 1 + row >= bottom - 1:
                break
            _add(scr, top + 1 + row, x, text, attr)

    def _draw_controllers(self, state: AppState, settings: dict, top: int, left: int, width: int) -> None:
        scr = self.stdscr
        self._draw_box(top, left, top + CONTROLLER_PANEL_HEIGHT - 1, width - 1)
        fg_mode = "fg" if settings.get("fgOnly") else "fg+bg"
        mode_line = (
            f"Mode: {settings.get('symbols')} {settings.get('colors')} {fg_mode}"
            f"{' dither' if settings.get('dither') else ''}"
        )

        if not state.controller_names:
            lines = ["No controllers", "Keyboard: arrows + Enter", mode_line]
        else:
            lines = []
            for i, name in enumerate(state.controller_names[:2]):
                if len(name) > 24:
                    name = name[:24] + "..."
                lines.append(f"P{i + 1}: {name}")
            if len(state.controller_names) > 2:
                lines.append(f"+{len(state.controller_names) - 2} more")
            lines.append(mode_line)

        for row, line in enumerate(lines):
            _add(scr, top + 1 + row, left + 2, line)

    def _draw_status(self, state: AppState, height: int, width: int) -> None:
        top = height - STATUS_HEIGHT
        self._draw_box(top, 0, height - 1, width - 1)
        if state.status_message:
            _add(self.stdscr, top + 1, 1, f" {state.status_message}", self._color(Colors.WARNING))
        else:
            _add(self.stdscr, top + 1, 1, HELP_TEXT)

    def _draw_dialog(self, dialog: SettingsDialog, height: int, width: int) -> None:
        scr = self.stdscr
        box_width = max(40, int(width * 0.7))
        box_height = len(dialog.fields) * 2 + 5
        top = max(0, (height - box_height) // 2)
        left = max(0, (width - box_width) // 2)
        right = min(width - 1, left + box_width)

        for y in range(top, top + box_height):
            _add(scr, y, left, " " * (right - left + 1))
        self._draw_box(top, left, top + box_height - 1, right, self._color(Colors.WARNING))
        _add(scr, top, left + 2, " Settings ", curses.A_BOLD)

        for index, field in enumerate(dialog.fields):
            y = top + 2 + index * 2
            focused = index == dialog.focus_index
            attr = self._color(Colors.FOCUS) | curses.A_BOLD if focused else 0
            marker = ">" if focused else " "
            value = field.display()
            if isinstance(field, TextField) and focused:
                value += "_"
            _add(scr, y, left + 2, f"{marker} {field.label}:", attr)
            _add(scr, y, left + 22, value, attr)

        _add(scr, top + box_height - 2, left + 2, DIALOG_HELP, self._color(Colors.DIM))
