"""
retroterm application - Main orchestrator.

This module provides the main application class that coordinates
all components: preferences, catalog, input and the terminal UI.

Each tick polls the keyboard and gamepad, turns the input into commands,
dispatches them according to the current mode and redraws the screen.
"""

import os
import time
import traceback
from typing import Any, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from constants import CONFIG_FILE, FPS, RESUME_DELAY_MS
from state import AppState, DialogMode, ViewMode
from config.settings import Preferences
from services.rom_scanner import RomEntry, scan_catalog
from services.launcher import build_command, run_emulator
from input.navigation import Command, InputNormalizer
from input.controller import ControllerHandler
from input.keyboard import KeyboardHandler
from ui.settings_dialog import DialogResult, SettingsDialog
from ui.screen import TerminalScreen
from utils.logging import log_error, init_log_file


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


class RetrotermApp:
    """
    Main application class for retroterm.

    Orchestrates all components and runs the polling loop.
    """

    def __init__(self, config_file: str = CONFIG_FILE):
        """Initialize the application."""
        self.preferences = Preferences(config_file)
        self.state = AppState()

        # Initialize handlers
        self.screen = TerminalScreen()
        self.controller = ControllerHandler()
        self.keyboard = KeyboardHandler()
        self.normalizer = InputNormalizer()
        self.clock: Optional[pygame.time.Clock] = None
        self.launch_count = 0

    # ---- Lifecycle ---- #

    def start(self) -> None:
        """Bring up input devices and the terminal UI."""
        self.controller.start()
        self.normalizer.arm_release_gate()
        self.screen.start()

    def stop(self) -> None:
        """Tear down the terminal UI and release input devices."""
        self.screen.stop()
        self.controller.stop()

    def load_roms(self) -> None:
        """Rescan the ROMs directory and reset the selection."""
        roms_dir = os.path.expanduser(str(self.preferences.get("romsDir")))
        self.state.roms_dir_missing = not os.path.isdir(roms_dir)
        self.state.selection.reset(scan_catalog(roms_dir))

    def run(self) -> None:
        """Run the main application loop."""
        self.start()
        self.load_roms()
        self.clock = pygame.time.Clock()
        try:
            while self.state.running:
                self.tick(_now_ms())
                self.clock.tick(FPS)
        finally:
            self.stop()

    def tick(self, now: int) -> None:
        """
        Poll, normalize, dispatch and render once.

        At most one game is launched per tick. Keys and commands still
        queued when a game starts belong to the session before it and are
        dropped.
        """
        launches = self.launch_count

        for key in self.screen.read_keys():
            self.handle_key(key)
            if not self.state.running:
                return
            if self.launch_count != launches:
                break

        self.controller.refresh_devices()
        self.state.controller_names = self.controller.connected_names()

        snapshot = self.controller.poll()
        if self.launch_count == launches:
            for command in self.normalizer.update(snapshot, now):
                self.dispatch(command)
                if not self.state.running or self.launch_count != launches:
                    break
        else:
            # Feed the re-armed gate so it can see buttons released
            self.normalizer.update(snapshot, now)

        self.screen.render(
            self.state,
            self.preferences.to_dict(),
            str(self.preferences.get("romsDir")),
        )

    # ---- Input routing ---- #

    def handle_key(self, key: Any) -> None:
        """Handle a raw key from the terminal."""
        mode = self.state.mode
        if isinstance(mode, DialogMode) and mode.dialog.captures_text:
            self._handle_text_key(mode.dialog, key)
            return

        command = self.keyboard.command_for_key(key, dialog_open=self.state.dialog_open)
        if command is not None:
            self.dispatch(command)

    def _handle_text_key(self, dialog: SettingsDialog, key: Any) -> None:
        """The focused text field gets every key except focus/save/cancel."""
        if self.keyboard.is_backspace(key):
            dialog.delete_char()
            return

        char = self.keyboard.printable_char(key)
        if char is not None:
            dialog.type_text(char)
            return

        command = self.keyboard.command_for_key(key, dialog_open=True)
        if command in (Command.UP, Command.DOWN, Command.CONFIRM, Command.BACK):
            self.dispatch(command)

    def dispatch(self, command: Command) -> None:
        """Route a command according to the current mode."""
        mode = self.state.mode
        if isinstance(mode, DialogMode):
            self._dispatch_dialog(mode.dialog, command)
        else:
            self._dispatch_browsing(command)

    def _dispatch_dialog(self, dialog: SettingsDialog, command: Command) -> None:
        result = dialog.handle_command(command)
        if result == DialogResult.SAVED:
            self.state.close_dialog()
            self.load_roms()
        elif result == DialogResult.CANCELLED:
            self.state.close_dialog()

    def _dispatch_browsing(self, command: Command) -> None:
        selection = self.state.selection
        self.state.status_message = ""

        if command == Command.UP:
            selection.move_highlight(-1)
        elif command == Command.DOWN:
            selection.move_highlight(1)
        elif command == Command.LEFT:
            selection.prev_system()
        elif command == Command.RIGHT:
            selection.next_system()
        elif command == Command.PAGE_UP:
            selection.page_up()
        elif command == Command.PAGE_DOWN:
            selection.page_down()
        elif command in (Command.CONFIRM, Command.START):
            entry = selection.current_entry()
            if entry is not None:
                self.launch_game(entry)
        elif command == Command.TOGGLE:
            if selection.view == ViewMode.RECENT:
                selection.show_system_view()
            else:
                self.show_recent()
        elif command == Command.BACK:
            if selection.view == ViewMode.RECENT:
                selection.show_system_view()
        elif command == Command.MENU:
            self.state.open_dialog(SettingsDialog(self.preferences))
        elif command == Command.REFRESH:
            self.load_roms()
        elif command == Command.QUIT:
            self.state.running = False

    def show_recent(self) -> None:
        self.state.selection.show_recent_view(
            self.preferences.recent_games(),
            self.state.selection.catalog.find_by_path,
        )

    # ---- Launching ---- #

    def launch_game(self, entry: RomEntry) -> None:
        """
        Hand the terminal to the emulator and come back when it exits.

        The launch cannot be cancelled; the launcher simply waits.
        A bad emulator command is reported without leaving the launcher.
        """
        try:
            command = build_command(entry.path, self.preferences.to_dict())
        except ValueError as e:
            log_error(
                f"Invalid emulator command: {self.preferences.get('emulatorCommand')!r}",
                type(e).__name__,
                traceback.format_exc(),
            )
            self.state.status_message = f"Failed to launch {entry.name}: invalid emulator command ({e})"
            return

        self.launch_count += 1
        self.preferences.add_recent_game(entry.path)

        self.stop()
        result = run_emulator(command)

        # Let the emulator release audio/video before reclaiming devices
        time.sleep(RESUME_DELAY_MS / 1000)
        self.start()

        if not result.started:
            self.state.status_message = f"Failed to launch {entry.name}: {result.error}"
        if self.state.selection.view == ViewMode.RECENT:
            self.show_recent()


def main():
    """Entry point for the application."""
    init_log_file()
    try:
        app = RetrotermApp()
        app.run()
    except Exception as e:
        log_error(f"Application error: {e}", type(e).__name__, traceback.format_exc())
        raise


if __name__ == "__main__":
    main()
