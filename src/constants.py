"""
Global constants for retroterm.
Contains path configuration, input timing and scanning limits.
"""

import os

# **************************************************************** #
#                       Build Info                                     #
# **************************************************************** #
APP_VERSION = "dev"
APP_NAME = "retroterm"

# **************************************************************** #
#                       Environment Detection                        #
# **************************************************************** #
DEV_MODE = os.getenv("DEV_MODE", "false").lower() == "true"

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))

# **************************************************************** #
#                       Path Configuration                           #
# **************************************************************** #
if DEV_MODE:
    CONFIG_DIR = os.path.join(SCRIPT_DIR, "..", "workdir")
else:
    CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", APP_NAME)

CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")
LOG_FILE = os.path.join(CONFIG_DIR, "error.log")
ASSETS_DIR = os.path.join(SCRIPT_DIR, "..", "assets", "systems")

# **************************************************************** #
#                       Input Timing                                 #
# **************************************************************** #
FPS = 60  # polling rate, ~16ms per tick
REPEAT_INITIAL_DELAY_MS = 300  # hold time before auto-repeat starts
REPEAT_INTERVAL_MS = 80  # ms between repeats once repeating
AXIS_DEADZONE = 0.5
RESUME_DELAY_MS = 500  # wait for the emulator to release audio/video

# **************************************************************** #
#                       Browsing                                     #
# **************************************************************** #
MAX_SCAN_DEPTH = 3  # directory levels below the ROMs root
PAGE_SIZE = 10  # rows moved by the shoulder buttons
UNKNOWN_SYSTEM = "Unknown"

# **************************************************************** #
#                       Display                                      #
# **************************************************************** #
ART_WIDTH = 36
ART_HEIGHT = 3
HEADER_HEIGHT = 5
STATUS_HEIGHT = 3
CONTROLLER_PANEL_HEIGHT = 6
