"""Merges sprite pixels into byte-wide video memory operations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar

from .sprite_templates import SpriteTraits, SpriteType, sprite_traits

STATEFUN_SIZE = 1 << 6


@dataclass(frozen=True)
class MemOp:
    """One video memory operation on the byte at ``addr``."""

    value: int = 0
    op: int = 0
    addr: int = 0

    LEFT: ClassVar[int] = 0b01000
    RIGHT: ClassVar[int] = 0b10000
    WRITE: ClassVar[int] = 0b00001
    MODIFY: ClassVar[int] = 0b00010
    XOR: ClassVar[int] = 0b00100

    def mask(self) -> int:
        """Bits of the existing byte that the operation keeps."""
        sides = self.op & (self.LEFT | self.RIGHT)
        if sides == self.RIGHT:
            return 0xF0
        if sides == self.LEFT:
            return 0x0F
        if sides == self.LEFT | self.RIGHT:
            return 0x00
        return 0xFF

    def kind(self) -> int:
        """The WRITE, MODIFY and XOR bits of the operation."""
        return self.op & (self.WRITE | self.MODIFY | self.XOR)

    def __bool__(self) -> bool:
        return self.kind() != 0

    def __or__(self, other: MemOp) -> MemOp:
        return MemOp(self.value | other.value, self.op | other.op, self.addr | other.addr)


def _state_op(traits: SpriteTraits, index: int) -> MemOp:
    pixel = (index & 0b111100) >> 2
    edge = (index & 0b000010) != 0
    even = (index & 0b000001) != 0
    value = pixel if even else pixel << 4

    if traits.eor:
        return MemOp(value, MemOp.XOR)
    if not traits.opaque(pixel):
        return MemOp()
    side = MemOp.RIGHT if even else MemOp.LEFT
    if edge:
        return MemOp(value, MemOp.MODIFY | side)
    return MemOp(value, (MemOp.WRITE if traits.background else MemOp.MODIFY) | side)


class VidOperator:
    """Collects the two nibbles of each video byte of a sprite line."""

    def __init__(self, sprite_type: int) -> None:
        self.sprite_type = SpriteType(sprite_type)
        traits = sprite_traits(self.sprite_type)
        self._states = tuple(_state_op(traits, index) for index in range(STATEFUN_SIZE))
        self._off = 0
        self._op = MemOp()
        self._vid_adr = 0
        self._edge = 0

    def flush(self) -> MemOp:
        """Return the pending operation, addressed."""
        self._op = replace(self._op, addr=(self._vid_adr + self._off) & 0xFFFF)
        return self._op

    def new_line(self, vidadr: int) -> None:
        self._vid_adr = vidadr & 0xFFFF
        self._op = MemOp()
        self._edge = 2

    def process(self, hpos: int, pixel: int) -> MemOp:
        """Add a pixel; return the finished operation of the previous byte, if any."""
        off = hpos >> 1
        index = ((pixel & 0xF) << 2) | (hpos & 1)
        if self._edge:
            self._off = off
            self._op = self._states[index | self._edge]
            self._edge = 0
            return MemOp()
        if self._off == off:
            self._op = self._op | self._states[index]
            return MemOp()
        result = MemOp(self._op.value, self._op.op, (self._vid_adr + self._off) & 0xFFFF)
        self._off = off
        self._op = self._states[index]
        return result