"""
Configuration management for retroterm.
"""

from .settings import (
    load_settings,
    save_settings,
    get_default_settings,
    Preferences,
)

__all__ = [
    'load_settings',
    'save_settings',
    'get_default_settings',
    'Preferences',
]
