"""Tests for SelectionContext: system wrap, highlight clamping and views."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from services.rom_scanner import Catalog, RomEntry
from state import AppState, BrowsingMode, DialogMode, SelectionContext, ViewMode


def _entry(name, system, ext=".bin"):
    return RomEntry(name, f"/roms/{system}/{name}{ext}", ext, system)


def _catalog(counts):
    """Catalog with ``counts[system]`` ROMs per system."""
    entries = []
    for system, count in counts.items():
        for i in range(count):
            entries.append(_entry(f"{system} game {i:02d}", system))
    return Catalog.from_entries(entries)


# ---------------------------------------------------------------------------
# System switching
# ---------------------------------------------------------------------------

def test_starts_on_first_system():
    ctx = SelectionContext(_catalog({"NES": 3, "SNES": 2, "Game Boy": 1}))

    assert ctx.view == ViewMode.SYSTEM
    assert ctx.current_system == "Game Boy"
    assert ctx.highlight == 0
    assert ctx.current_entry().system == "Game Boy"


def test_next_system_wraps_around():
    ctx = SelectionContext(_catalog({"A": 1, "B": 1, "C": 1}))

    seen = []
    for _ in range(4):
        seen.append(ctx.current_system)
        ctx.next_system()

    assert seen == ["A", "B", "C", "A"]


def test_prev_system_wraps_around():
    ctx = SelectionContext(_catalog({"A": 1, "B": 1, "C": 1}))

    ctx.prev_system()

    assert ctx.current_system == "C"


def test_next_then_prev_returns_to_start():
    ctx = SelectionContext(_catalog({"A": 2, "B": 5, "C": 1, "D": 4}))
    for start in range(4):
        ctx.show_system_view(start)
        ctx.next_system()
        ctx.prev_system()
        assert ctx.system_index == start


def test_full_cycle_returns_to_start():
    ctx = SelectionContext(_catalog({"A": 1, "B": 1, "C": 1}))
    ctx.show_system_view(1)

    for _ in range(ctx.system_count):
        ctx.next_system()

    assert ctx.system_index == 1


def test_switching_system_resets_highlight():
    ctx = SelectionContext(_catalog({"A": 5, "B": 5}))
    ctx.move_highlight(3)

    ctx.next_system()

    assert ctx.highlight == 0
    assert ctx.current_entry().system == "B"


def test_show_system_view_wraps_index():
    ctx = SelectionContext(_catalog({"A": 1, "B": 1}))

    ctx.show_system_view(5)

    assert ctx.current_system == "B"


# ---------------------------------------------------------------------------
# Highlight
# ---------------------------------------------------------------------------

def test_highlight_is_clamped():
    ctx = SelectionContext(_catalog({"A": 4}))

    ctx.move_highlight(-1)
    assert ctx.highlight == 0

    ctx.move_highlight(100)
    assert ctx.highlight == 3

    ctx.move_highlight(1)
    assert ctx.highlight == 3
    assert ctx.current_entry() is ctx.active_list[3]


def test_paging_moves_by_page_size():
    ctx = SelectionContext(_catalog({"A": 25}))

    ctx.page_down()
    assert ctx.highlight == 10

    ctx.page_down()
    ctx.page_down()
    assert ctx.highlight == 24

    ctx.page_up()
    assert ctx.highlight == 14


# ---------------------------------------------------------------------------
# Empty catalog
# ---------------------------------------------------------------------------

def test_empty_catalog_is_safe():
    ctx = SelectionContext(Catalog())

    assert ctx.system_count == 0
    assert ctx.current_system is None
    assert ctx.current_entry() is None

    ctx.next_system()
    ctx.prev_system()
    ctx.move_highlight(1)
    ctx.page_down()

    assert ctx.highlight == 0
    assert ctx.current_entry() is None


def test_default_context_is_empty():
    assert SelectionContext().current_entry() is None


# ---------------------------------------------------------------------------
# Recent view
# ---------------------------------------------------------------------------

def test_recent_view_resolves_and_drops_unknown_paths():
    catalog = _catalog({"NES": 2, "SNES": 2})
    known = catalog.roms_for("SNES")[1]
    other = catalog.roms_for("NES")[0]
    ctx = SelectionContext(catalog)

    ctx.show_recent_view(
        [known.path, "/gone/Missing.nes", other.path],
        catalog.find_by_path,
    )

    assert ctx.view == ViewMode.RECENT
    assert ctx.current_system is None
    assert ctx.active_list == [known, other]
    assert ctx.current_entry() == known


def test_system_switching_ignored_in_recent_view():
    catalog = _catalog({"A": 1, "B": 1})
    ctx = SelectionContext(catalog)
    ctx.show_recent_view([catalog.entries[0].path], catalog.find_by_path)

    ctx.next_system()

    assert ctx.view == ViewMode.RECENT
    assert len(ctx.active_list) == 1


def test_returning_from_recent_keeps_system():
    ctx = SelectionContext(_catalog({"A": 1, "B": 3}))
    ctx.next_system()
    ctx.show_recent_view([], lambda path: None)

    assert ctx.current_entry() is None

    ctx.show_system_view()

    assert ctx.current_system == "B"
    assert len(ctx.active_list) == 3


def test_reset_returns_to_first_system():
    ctx = SelectionContext(_catalog({"A": 1, "B": 1}))
    ctx.next_system()

    ctx.reset(_catalog({"X": 2, "Y": 1}))

    assert ctx.view == ViewMode.SYSTEM
    assert ctx.current_system == "X"


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

def test_app_state_dialog_mode():
    state = AppState()
    assert isinstance(state.mode, BrowsingMode)
    assert not state.dialog_open

    marker = object()
    state.open_dialog(marker)
    assert isinstance(state.mode, DialogMode)
    assert state.mode.dialog is marker
    assert state.dialog_open

    state.close_dialog()
    assert not state.dialog_open
