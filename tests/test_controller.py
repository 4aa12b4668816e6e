"""Tests for reading joystick state into standard-layout snapshots."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from input.controller import ControllerHandler
from input.navigation import (
    BUTTON_A,
    BUTTON_B,
    BUTTON_COUNT,
    BUTTON_DPAD_DOWN,
    BUTTON_DPAD_LEFT,
    BUTTON_DPAD_RIGHT,
    BUTTON_DPAD_UP,
    BUTTON_START,
    InputSnapshot,
)


class FakeJoystick:
    """Stands in for pygame.joystick.Joystick."""

    def __init__(self, buttons=(), hat=(0, 0), axes=(0.0, 0.0), num_buttons=11):
        self.pressed = set(buttons)
        self.hat = hat
        self.axes = list(axes)
        self.num_buttons = num_buttons

    def get_numbuttons(self):
        return self.num_buttons

    def get_button(self, index):
        return 1 if index in self.pressed else 0

    def get_numhats(self):
        return 1

    def get_hat(self, index):
        return self.hat

    def get_numaxes(self):
        return len(self.axes)

    def get_axis(self, index):
        return self.axes[index]


def _pressed(snapshot):
    return {i for i, value in enumerate(snapshot.buttons) if value}


def test_no_joystick_gives_empty_snapshot():
    handler = ControllerHandler()

    assert handler.poll() == InputSnapshot.empty()
    assert handler.connected_names() == []


def test_raw_buttons_map_to_standard_layout():
    handler = ControllerHandler()

    snapshot = handler.read_snapshot(FakeJoystick(buttons=[0, 1, 7]))

    assert len(snapshot.buttons) == BUTTON_COUNT
    assert _pressed(snapshot) == {BUTTON_A, BUTTON_B, BUTTON_START}


def test_hat_maps_to_dpad():
    handler = ControllerHandler()

    assert _pressed(handler.read_snapshot(FakeJoystick(hat=(0, 1)))) == {BUTTON_DPAD_UP}
    assert _pressed(handler.read_snapshot(FakeJoystick(hat=(0, -1)))) == {BUTTON_DPAD_DOWN}


def test_diagonal_hat_sets_both_directions():
    handler = ControllerHandler()

    snapshot = handler.read_snapshot(FakeJoystick(hat=(-1, -1)))

    assert _pressed(snapshot) == {BUTTON_DPAD_LEFT, BUTTON_DPAD_DOWN}


def test_axes_are_passed_through():
    handler = ControllerHandler()

    snapshot = handler.read_snapshot(FakeJoystick(axes=(0.25, -0.75, 1.0, 1.0)))

    assert snapshot.axes == (0.25, -0.75)


def test_custom_button_mapping():
    handler = ControllerHandler({"right": 12, "select": 10})

    snapshot = handler.read_snapshot(FakeJoystick(buttons=[10, 12], num_buttons=16))

    assert _pressed(snapshot) == {BUTTON_A, BUTTON_DPAD_RIGHT}
    assert handler.get_mapping()["right"] == 12


def test_out_of_range_buttons_are_ignored():
    handler = ControllerHandler({"start": 20})

    snapshot = handler.read_snapshot(FakeJoystick(buttons=[20]))

    assert not snapshot.is_pressed(BUTTON_START)
