"""
Controller input handling for retroterm.
Reads the first connected joystick through pygame and reports it as a
snapshot in the standard gamepad layout.
"""

import os

import pygame
from typing import Dict, Any, Optional, List

from .navigation import (
    InputSnapshot,
    BUTTON_A,
    BUTTON_B,
    BUTTON_X,
    BUTTON_Y,
    BUTTON_LEFT_SHOULDER,
    BUTTON_RIGHT_SHOULDER,
    BUTTON_BACK,
    BUTTON_START,
    BUTTON_DPAD_UP,
    BUTTON_DPAD_DOWN,
    BUTTON_DPAD_LEFT,
    BUTTON_DPAD_RIGHT,
    BUTTON_COUNT,
)

# Action name -> standard layout slot
STANDARD_SLOTS: Dict[str, int] = {
    'select': BUTTON_A,
    'back': BUTTON_B,
    'toggle': BUTTON_X,
    'menu': BUTTON_Y,
    'left_shoulder': BUTTON_LEFT_SHOULDER,
    'right_shoulder': BUTTON_RIGHT_SHOULDER,
    'view': BUTTON_BACK,
    'start': BUTTON_START,
    'up': BUTTON_DPAD_UP,
    'down': BUTTON_DPAD_DOWN,
    'left': BUTTON_DPAD_LEFT,
    'right': BUTTON_DPAD_RIGHT,
}

# Raw button numbers of an XInput-style pad as SDL reports them.
# D-pad directions default to hat 0.
DEFAULT_MAPPING: Dict[str, Any] = {
    'select': 0,
    'back': 1,
    'toggle': 2,
    'menu': 3,
    'left_shoulder': 4,
    'right_shoulder': 5,
    'view': 6,
    'start': 7,
    'up': ("hat", 0, 1),
    'down': ("hat", 0, -1),
    'left': ("hat", -1, 0),
    'right': ("hat", 1, 0),
}


class ControllerHandler:
    """
    Handles joystick discovery and snapshot reading.

    Supports both button-based D-pads and hat-based D-pads through the
    button mapping. A missing joystick is not an error: it simply reports
    an empty snapshot every tick.
    """

    def __init__(self, mapping: Optional[Dict[str, Any]] = None):
        """
        Initialize controller handler.

        Args:
            mapping: Optional button mapping overriding the defaults
        """
        self._mapping: Dict[str, Any] = dict(DEFAULT_MAPPING)
        if mapping:
            self._mapping.update(mapping)
        self._joystick: Optional[pygame.joystick.JoystickType] = None
        self._initialized = False

    def start(self) -> None:
        """Initialize pygame's joystick subsystem and open the first pad."""
        # Event pumping needs a display, even a dummy one
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        try:
            pygame.display.init()
            pygame.joystick.init()
            self._initialized = True
            self.refresh_devices()
        except pygame.error:
            self._initialized = False
            self._joystick = None

    def stop(self) -> None:
        """Release the joystick so a child process can claim it."""
        self._joystick = None
        if self._initialized:
            pygame.joystick.quit()
            pygame.display.quit()
        self._initialized = False

    def refresh_devices(self) -> None:
        """Pick up controllers that were plugged in or removed."""
        if not self._initialized:
            return
        if pygame.joystick.get_count() > 0:
            if self._joystick is None or not self._joystick.get_init():
                self._joystick = pygame.joystick.Joystick(0)
                self._joystick.init()
        else:
            self._joystick = None

    def get_mapping(self) -> Dict[str, Any]:
        """Get the current button mapping."""
        return self._mapping.copy()

    def connected_names(self) -> List[str]:
        """Names of all connected controllers."""
        if not self._initialized:
            return []
        try:
            return [
                pygame.joystick.Joystick(i).get_name()
                for i in range(pygame.joystick.get_count())
            ]
        except pygame.error:
            return []

    def poll(self) -> InputSnapshot:
        """
        Read the current state of the active joystick.

        Returns:
            Snapshot in standard layout, empty if no joystick is usable
        """
        if self._joystick is None:
            return InputSnapshot.empty()

        try:
            pygame.event.pump()
            return self.read_snapshot(self._joystick)
        except pygame.error:
            self._joystick = None
            return InputSnapshot.empty()

    def read_snapshot(self, joystick: Any) -> InputSnapshot:
        """
        Convert a joystick's state into a standard-layout snapshot.

        Args:
            joystick: Anything with pygame's Joystick query methods

        Returns:
            InputSnapshot with BUTTON_COUNT buttons
        """
        buttons = [False] * BUTTON_COUNT
        num_buttons = joystick.get_numbuttons()
        num_hats = joystick.get_numhats()

        for action, slot in STANDARD_SLOTS.items():
            button_info = self._mapping.get(action)

            if isinstance(button_info, int):
                if button_info < num_buttons and joystick.get_button(button_info):
                    buttons[slot] = True

            elif (
                isinstance(button_info, (tuple, list))
                and len(button_info) >= 3
                and button_info[0] == "hat"
            ):
                if num_hats > 0 and _hat_matches(joystick.get_hat(0), button_info[1], button_info[2]):
                    buttons[slot] = True

        axes = tuple(
            float(joystick.get_axis(i)) for i in range(min(joystick.get_numaxes(), 2))
        )
        return InputSnapshot(buttons=tuple(buttons), axes=axes)


def _hat_matches(hat: tuple, expected_x: int, expected_y: int) -> bool:
    """A diagonal hat position activates both of its directions."""
    hat_x, hat_y = hat
    if expected_x and hat_x != expected_x:
        return False
    if expected_y and hat_y != expected_y:
        return False
    return bool(expected_x or expected_y)
