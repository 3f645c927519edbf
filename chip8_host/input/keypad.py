"""
Keypad mapping.

Maps the host keyboard onto the 16-key hex keypad:

    1 2 3 4        1 2 3 A
    Q W E R   ->   4 5 6 B
    A S D F        7 8 9 C
    Z X C V        D 0 E F

Arrow keys double as 2/4/6/8.
"""

import logging
from enum import IntEnum
from typing import Dict, Optional

import pygame

from ..vm.handle import VMHandle

logger = logging.getLogger(__name__)


class Keypad(IntEnum):
    """Hex keypad keys."""
    KEY_0 = 0x0
    KEY_1 = 0x1
    KEY_2 = 0x2
    KEY_3 = 0x3
    KEY_4 = 0x4
    KEY_5 = 0x5
    KEY_6 = 0x6
    KEY_7 = 0x7
    KEY_8 = 0x8
    KEY_9 = 0x9
    KEY_A = 0xA
    KEY_B = 0xB
    KEY_C = 0xC
    KEY_D = 0xD
    KEY_E = 0xE
    KEY_F = 0xF


KEY_MAP: Dict[int, Keypad] = {
    pygame.K_1: Keypad.KEY_1,
    pygame.K_2: Keypad.KEY_2,
    pygame.K_3: Keypad.KEY_3,
    pygame.K_4: Keypad.KEY_A,
    pygame.K_q: Keypad.KEY_4,
    pygame.K_w: Keypad.KEY_5,
    pygame.K_e: Keypad.KEY_6,
    pygame.K_r: Keypad.KEY_B,
    pygame.K_a: Keypad.KEY_7,
    pygame.K_s: Keypad.KEY_8,
    pygame.K_d: Keypad.KEY_9,
    pygame.K_f: Keypad.KEY_C,
    pygame.K_z: Keypad.KEY_D,
    pygame.K_x: Keypad.KEY_0,
    pygame.K_c: Keypad.KEY_E,
    pygame.K_v: Keypad.KEY_F,

    # Alternative mappings
    pygame.K_UP: Keypad.KEY_2,
    pygame.K_LEFT: Keypad.KEY_4,
    pygame.K_RIGHT: Keypad.KEY_6,
    pygame.K_DOWN: Keypad.KEY_8,
}


def map_key(key: int) -> Optional[Keypad]:
    """Keypad key for a pygame key code, or None."""
    return KEY_MAP.get(key)


def forward_key_event(event: pygame.event.Event, vm: VMHandle) -> bool:
    """
    Forward a KEYDOWN/KEYUP event to the engine's keypad.

    Args:
        event: pygame event
        vm: Engine receiving the key

    Returns:
        True if the event was a mapped keypad key
    """
    if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
        return False

    keypad = map_key(event.key)
    if keypad is None:
        return False

    if event.type == pygame.KEYDOWN:
        logger.debug(f"Send: key {event.key} -> {keypad.name}")
        vm.press_key(int(keypad))
    else:
        vm.release_key(int(keypad))
    return True
