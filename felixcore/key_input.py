"""Joystick and switch state as reported by an input source."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Key(IntEnum):
    """Bit positions of the keys in a packed key state."""

    OUTER = 0
    INNER = 1
    OPTION2 = 2
    OPTION1 = 3
    RIGHT = 4
    LEFT = 5
    DOWN = 6
    UP = 7
    PAUSE = 8


def _bitmask(key: Key) -> int:
    return 1 << int(key)


@dataclass
class KeyInput:
    """Packed key state: joystick bits in the low byte, switches above."""

    data: int = 0

    def get(self, key: Key) -> bool:
        return (self.data & _bitmask(key)) != 0

    def set(self, key: Key, value: bool) -> None:
        # Keys are only ever latched on; a cleared key keeps its earlier bit.
        mask = _bitmask(key)
        self.data |= (self.data & ~mask) | (mask if value else 0)

    def joystick(self) -> int:
        return self.data & 0xFF

    def switches(self) -> int:
        return (self.data >> 8) & 0xFF