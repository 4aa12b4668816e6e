"""
Application state management for retroterm.
Holds the browsing selection and the input mode (browsing or dialog).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from constants import PAGE_SIZE
from services.rom_scanner import Catalog, RomEntry


class ViewMode(Enum):
    SYSTEM = "by-system"
    RECENT = "recent"


class SelectionContext:
    """
    Current browsing view, active system and highlighted entry.

    System switching wraps around; moving the highlight is clamped to the
    active list. ``current_entry()`` is None only when the list is empty.
    """

    def __init__(self, catalog: Optional[Catalog] = None):
        self.reset(catalog or Catalog())

    def reset(self, catalog: Catalog) -> None:
        """Start over with a freshly scanned catalog."""
        self.catalog = catalog
        self.view = ViewMode.SYSTEM
        self.system_index = 0
        self.highlight = 0
        self.active_list: List[RomEntry] = []
        self.show_system_view(0)

    @property
    def system_count(self) -> int:
        return self.catalog.system_count

    @property
    def current_system(self) -> Optional[str]:
        if self.view != ViewMode.SYSTEM or self.system_count == 0:
            return None
        return self.catalog.systems[self.system_index]

    def show_system_view(self, index: Optional[int] = None) -> None:
        """
        Switch to the by-system view.

        Args:
            index: System to show, wrapped modulo the system count.
                Defaults to the current system.
        """
        self.view = ViewMode.SYSTEM
        self.highlight = 0
        self.active_list = []

        if self.system_count == 0:
            return

        if index is None:
            index = self.system_index
        self.system_index = index % self.system_count
        self.active_list = list(self.catalog.roms_for(self.catalog.systems[self.system_index]))

    def show_recent_view(
        self,
        recent_paths: Iterable[str],
        resolver: Callable[[str], Optional[RomEntry]],
    ) -> None:
        """
        Switch to the recent-games view.

        Paths the resolver no longer knows are dropped; the rest keep
        their order.
        """
        self.view = ViewMode.RECENT
        self.highlight = 0
        resolved = (resolver(path) for path in recent_paths)
        self.active_list = [entry for entry in resolved if entry is not None]

    def move_highlight(self, delta: int) -> None:
        """Move the highlight, clamped to the active list."""
        if not self.active_list:
            self.highlight = 0
            return
        self.highlight = max(0, min(len(self.active_list) - 1, self.highlight + delta))

    def page_up(self) -> None:
        self.move_highlight(-PAGE_SIZE)

    def page_down(self) -> None:
        self.move_highlight(PAGE_SIZE)

    def next_system(self) -> None:
        if self.view != ViewMode.SYSTEM or self.system_count == 0:
            return
        self.show_system_view(self.system_index + 1)

    def prev_system(self) -> None:
        if self.view != ViewMode.SYSTEM or self.system_count == 0:
            return
        self.show_system_view(self.system_index - 1)

    def current_entry(self) -> Optional[RomEntry]:
        if not self.active_list:
            return None
        return self.active_list[self.highlight]


@dataclass
class BrowsingMode:
    """Normal navigation: commands go to the selection context."""


@dataclass
class DialogMode:
    """A settings dialog owns all input until it closes."""

    dialog: Any


@dataclass
class AppState:
    """
    Centralized application state for retroterm.
    """

    selection: SelectionContext = field(default_factory=SelectionContext)
    mode: Any = field(default_factory=BrowsingMode)
    status_message: str = ""
    roms_dir_missing: bool = False
    controller_names: List[str] = field(default_factory=list)
    running: bool = True

    @property
    def dialog_open(self) -> bool:
        return isinstance(self.mode, DialogMode)

    def open_dialog(self, dialog: Any) -> None:
        self.mode = DialogMode(dialog)

    def close_dialog(self) -> None:
        self.mode = BrowsingMode()
