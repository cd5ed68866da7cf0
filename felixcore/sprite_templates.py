"""Per-sprite-type rules for drawing and collision."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class SpriteType(IntEnum):
    BACKGROUND = 0b000
    BACK_SHADOW = 0b000
    BACKNONCOLL = 0b001
    BSHADOW = 0b010
    BOUNDARY = 0b011
    NORMAL = 0b100
    NONCOLL = 0b101
    XOR = 0b110
    XOR_SHADOW = 0b110
    SHADOW = 0b111


@dataclass(frozen=True)
class SpriteTraits:
    """How one sprite type treats its pixels.

    ``eor``: pixels are exclusive-or'ed into the video buffer.
    ``background``: always opaque, so the buffer is written without reading.
    ``coll_dep``: the collision buffer is read and the depository updated.
    """

    eor: bool
    background: bool
    coll_dep: bool
    transparent: frozenset[int] = frozenset()
    non_colliding: frozenset[int] = frozenset()
    can_collide: bool = True

    def opaque(self, pixel: int) -> bool:
        if self.eor:
            raise ValueError("XOR sprites have no opacity: every pixel is combined")
        return pixel not in self.transparent

    def colliding(self, pixel: int) -> bool:
        return self.can_collide and pixel not in self.non_colliding


_TRAITS = {
    SpriteType.BACKGROUND: SpriteTraits(
        eor=False, background=True, coll_dep=False, non_colliding=frozenset({0xE})
    ),
    SpriteType.BACKNONCOLL: SpriteTraits(
        eor=False, background=True, coll_dep=False, can_collide=False
    ),
    SpriteType.BSHADOW: SpriteTraits(
        eor=False, background=False, coll_dep=True,
        transparent=frozenset({0x0, 0xF}), non_colliding=frozenset({0x0, 0xE}),
    ),
    SpriteType.BOUNDARY: SpriteTraits(
        eor=False, background=False, coll_dep=True,
        transparent=frozenset({0x0, 0xF}), non_colliding=frozenset({0x0}),
    ),
    SpriteType.NORMAL: SpriteTraits(
        eor=False, background=False, coll_dep=True,
        transparent=frozenset({0x0}), non_colliding=frozenset({0x0}),
    ),
    SpriteType.NONCOLL: SpriteTraits(
        eor=False, background=False, coll_dep=False,
        transparent=frozenset({0x0}), can_collide=False,
    ),
    SpriteType.XOR: SpriteTraits(
        eor=True, background=False, coll_dep=True, non_colliding=frozenset({0x0, 0xE})
    ),
    SpriteType.SHADOW: SpriteTraits(
        eor=False, background=False, coll_dep=True,
        transparent=frozenset({0x0}), non_colliding=frozenset({0x0, 0xE}),
    ),
}


def sprite_traits(sprite_type: int) -> SpriteTraits:
    """Return the drawing rules of ``sprite_type``."""
    return _TRAITS[SpriteType(sprite_type)]