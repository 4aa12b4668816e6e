"""
Input normalization for retroterm.
Turns polled gamepad snapshots into discrete navigation commands with
press-edge detection and auto-repeat for held directions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from constants import (
    AXIS_DEADZONE,
    REPEAT_INITIAL_DELAY_MS,
    REPEAT_INTERVAL_MS,
)


class Command(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    CONFIRM = "confirm"
    BACK = "back"
    TOGGLE = "toggle"
    MENU = "menu"
    START = "start"
    QUIT = "quit"
    REFRESH = "refresh"


# Standard gamepad layout
BUTTON_A = 0
BUTTON_B = 1
BUTTON_X = 2
BUTTON_Y = 3
BUTTON_LEFT_SHOULDER = 4
BUTTON_RIGHT_SHOULDER = 5
BUTTON_BACK = 8
BUTTON_START = 9
BUTTON_DPAD_UP = 12
BUTTON_DPAD_DOWN = 13
BUTTON_DPAD_LEFT = 14
BUTTON_DPAD_RIGHT = 15
BUTTON_COUNT = 16

AXIS_LEFT_X = 0
AXIS_LEFT_Y = 1


@dataclass(frozen=True)
class InputSnapshot:
    """Button and axis state of one device, read once per poll tick."""

    buttons: Tuple[bool, ...] = ()
    axes: Tuple[float, ...] = ()

    @classmethod
    def empty(cls) -> "InputSnapshot":
        """Snapshot used when no device is connected."""
        return cls()

    def is_pressed(self, button: int) -> bool:
        return button < len(self.buttons) and bool(self.buttons[button])

    def axis(self, index: int) -> float:
        return self.axes[index] if index < len(self.axes) else 0.0


class HoldPhase(Enum):
    IDLE = "idle"
    JUST_ACTIVATED = "just_activated"
    REPEATING = "repeating"


@dataclass
class HoldState:
    phase: HoldPhase = HoldPhase.IDLE
    next_repeat: int = 0


# Slots with auto-repeat, in the order their commands are emitted
REPEAT_SLOTS: Tuple[Tuple[str, Command], ...] = (
    ("up", Command.UP),
    ("down", Command.DOWN),
    ("left", Command.LEFT),
    ("right", Command.RIGHT),
    ("left_shoulder", Command.PAGE_UP),
    ("right_shoulder", Command.PAGE_DOWN),
)

# Buttons that fire once per press
EDGE_BUTTONS: Tuple[Tuple[int, Command], ...] = (
    (BUTTON_A, Command.CONFIRM),
    (BUTTON_B, Command.BACK),
    (BUTTON_X, Command.TOGGLE),
    (BUTTON_Y, Command.MENU),
    (BUTTON_START, Command.START),
)


def slot_activation(snapshot: InputSnapshot, deadzone: float = AXIS_DEADZONE) -> Dict[str, bool]:
    """
    Resolve which repeat slots are active in a snapshot.

    The D-pad and the left stick are OR'd into one signal per direction.
    """
    x = snapshot.axis(AXIS_LEFT_X)
    y = snapshot.axis(AXIS_LEFT_Y)
    return {
        "up": snapshot.is_pressed(BUTTON_DPAD_UP) or y < -deadzone,
        "down": snapshot.is_pressed(BUTTON_DPAD_DOWN) or y > deadzone,
        "left": snapshot.is_pressed(BUTTON_DPAD_LEFT) or x < -deadzone,
        "right": snapshot.is_pressed(BUTTON_DPAD_RIGHT) or x > deadzone,
        "left_shoulder": snapshot.is_pressed(BUTTON_LEFT_SHOULDER),
        "right_shoulder": snapshot.is_pressed(BUTTON_RIGHT_SHOULDER),
    }


@dataclass
class InputNormalizer:
    """
    Converts level-triggered device state into commands.

    Each tick is evaluated from the previous state, the current snapshot
    and the current time only. Directions and shoulders fire on activation,
    again after the initial delay, then every repeat interval while held.
    Face buttons fire once per press.

    While the release gate is armed nothing is emitted until every button
    has been seen released, so a button still held from before (e.g. the
    one that launched a game) cannot fire again on resume.
    """

    initial_delay: int = REPEAT_INITIAL_DELAY_MS
    repeat_interval: int = REPEAT_INTERVAL_MS
    deadzone: float = AXIS_DEADZONE
    awaiting_release: bool = True
    _holds: Dict[str, HoldState] = field(default_factory=dict)
    _previous: Dict[int, bool] = field(default_factory=dict)

    def __post_init__(self):
        self.reset()

    def reset(self) -> None:
        """Forget all held buttons and timers."""
        self._holds = {slot: HoldState() for slot, _ in REPEAT_SLOTS}
        self._previous = {button: False for button, _ in EDGE_BUTTONS}

    def arm_release_gate(self) -> None:
        """Suppress input until every button has been released."""
        self.awaiting_release = True
        self.reset()

    def hold_phase(self, slot: str) -> HoldPhase:
        return self._holds[slot].phase

    def update(self, snapshot: InputSnapshot, now: int) -> List[Command]:
        """
        Evaluate one poll tick.

        Args:
            snapshot: Current device state
            now: Current time in milliseconds

        Returns:
            Commands produced by this tick, in a stable order
        """
        active = slot_activation(snapshot, self.deadzone)
        pressed = {button: snapshot.is_pressed(button) for button, _ in EDGE_BUTTONS}

        if self.awaiting_release:
            if not any(snapshot.buttons) and not any(active.values()):
                self.awaiting_release = False
            return []

        commands: List[Command] = []

        for slot, command in REPEAT_SLOTS:
            if self._step_hold(self._holds[slot], active[slot], now):
                commands.append(command)

        for button, command in EDGE_BUTTONS:
            if pressed[button] and not self._previous[button]:
                commands.append(command)
        self._previous = pressed

        return commands

    def _step_hold(self, hold: HoldState, is_active: bool, now: int) -> bool:
        if not is_active:
            hold.phase = HoldPhase.IDLE
            return False

        if hold.phase == HoldPhase.IDLE:
            hold.phase = HoldPhase.JUST_ACTIVATED
            hold.next_repeat = now + self.initial_delay
            return True

        if now < hold.next_repeat:
            return False

        hold.phase = HoldPhase.REPEATING
        hold.next_repeat += self.repeat_interval
        # Never burst to catch up after a stalled tick
        if hold.next_repeat <= now:
            hold.next_repeat = now + self.repeat_interval
        return True
