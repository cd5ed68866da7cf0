"""Properties of a loaded cartridge image: rotation, EEPROM, names and banks."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import ClassVar


class Rotation(IntEnum):
    NORMAL = 0
    LEFT = 1
    RIGHT = 2

    @classmethod
    def _missing_(cls, value: object) -> Rotation | None:
        # Header bytes outside the known set are kept as they are.
        if isinstance(value, int):
            member = int.__new__(cls, value)
            member._name_ = f"UNKNOWN_{value}"
            member._value_ = value
            return member
        return None


@dataclass
class EEPROMSpec:
    """EEPROM description packed in one header byte."""

    bits: int = 0

    TYPE_COUNT: ClassVar[int] = 6
    NAMES: ClassVar[tuple[str, ...]] = ("NONE", "93C46", "93C56", "93C66", "93C76", "93C86")

    @property
    def sd(self) -> bool:
        return (self.bits & 0x40) != 0

    @property
    def type(self) -> int:
        return self.bits & 7

    @property
    def is_16bit(self) -> bool:
        return (self.bits & 0x80) == 0

    def set_type(self, ee_type: int) -> None:
        self.bits = (self.bits & ~7 & 0xFF) | (ee_type & 7)

    def set_sd(self, sd: bool) -> None:
        self.bits = (self.bits & ~0x40 & 0xFF) | (0x40 if sd else 0)

    def set_16bit(self, is_16bit: bool) -> None:
        self.bits = (self.bits & ~0x80 & 0xFF) | (0 if is_16bit else 0x80)


@dataclass(frozen=True)
class BankProps:
    page_size: int = 0
    number_of_pages: int = 0


def _empty_banks() -> tuple[BankProps, ...]:
    return (BankProps(), BankProps(), BankProps(), BankProps())


class ImageProperties:
    """What is known about an image file beyond its bytes."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self.cartridge_name = ""
        self.manufacturer_name = ""
        self.rotation = Rotation.NORMAL
        self.eeprom = EEPROMSpec()
        self.bank_props: tuple[BankProps, ...] = _empty_banks()
        self.aud_in_used = False

    def set_rotation(self, rotation: int) -> None:
        self.rotation = Rotation(rotation & 0xFF)

    def set_eeprom(self, bits: int) -> None:
        self.eeprom = EEPROMSpec(bits & 0xFF)

    def __repr__(self) -> str:
        return (
            f"ImageProperties(path={str(self.path)!r}, cartridge_name={self.cartridge_name!r}, "
            f"rotation={self.rotation!r}, eeprom={self.eeprom!r})"
        )


_ = field  # dataclasses.field kept available for subclass defaults