"""
Input package - Host keyboard to keypad translation.
"""

from .keypad import Keypad, KEY_MAP, map_key, forward_key_event

__all__ = ["Keypad", "KEY_MAP", "map_key", "forward_key_event"]
