"""Cartridge images in LNX (with header) and raw encrypted LYX form."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from .encryption import BLOCK_SIZE, DecryptionError, decrypt
from .image_properties import BankProps, ImageProperties

_LNX = struct.Struct("<4sHHH32s16sBBB3s")
_LYX_SIZES = frozenset({64 * 1024, 128 * 1024, 256 * 1024, 512 * 1024})


def _c_string(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


@dataclass(frozen=True)
class LnxHeader:
    """The 64-byte header of an LNX image."""

    magic: bytes
    page_size_bank0: int
    page_size_bank1: int
    version: int
    cartname: bytes
    manufname: bytes
    rotation: int
    aud_bits: int
    eeprom_bits: int
    spare: bytes

    SIZE = _LNX.size

    @classmethod
    def from_bytes(cls, data: bytes) -> LnxHeader:
        return cls(*_LNX.unpack_from(bytes(data[: cls.SIZE])))

    @property
    def cartridge_name(self) -> str:
        return _c_string(self.cartname)

    @property
    def manufacturer_name(self) -> str:
        return _c_string(self.manufname)


@dataclass(frozen=True)
class CartImageBank:
    """Bytes of one cartridge bank and its nominal size."""

    data: bytes = b""
    size: int | None = None

    @property
    def nominal_size(self) -> int:
        return len(self.data) if self.size is None else self.size

    @property
    def page_size(self) -> int:
        return self.nominal_size // 256

    @property
    def number_of_pages(self) -> int:
        page_size = self.page_size
        return math.ceil(len(self.data) / page_size) if page_size else 0


class ImageCart:
    """A cartridge image split into its four banks."""

    def __init__(self, data: bytes, header: LnxHeader | None = None) -> None:
        self.data = bytes(data)
        self.header = header
        self.bank0 = CartImageBank()
        self.bank0a = CartImageBank()
        self.bank1 = CartImageBank()
        self.bank1a = CartImageBank()
        if header is None:
            self.bank0 = CartImageBank(self.data)
        else:
            self._split_lnx(header)

    def _split_lnx(self, header: LnxHeader) -> None:
        image = self.data[LnxHeader.SIZE :]
        size0 = header.page_size_bank0 * 256
        size1 = header.page_size_bank1 * 256
        remaining = len(image)

        bank0_size = min(remaining, size0)
        remaining -= bank0_size
        bank1_size = min(remaining, size1)
        remaining -= bank1_size
        bank0a_size = min(remaining, size0)
        remaining -= bank0a_size
        bank1a_size = min(remaining, size1)

        bank1_off = bank0_size
        bank0a_off = bank1_off + bank1_size
        bank1a_off = bank0a_off + bank0a_size

        if bank0_size:
            self.bank0 = CartImageBank(image[:bank0_size], size0)
            self.bank0a = CartImageBank(image[bank0a_off : bank0a_off + bank0a_size], size0)
        if bank1_size:
            self.bank1 = CartImageBank(image[bank1_off : bank1_off + bank1_size], size1)
            self.bank1a = CartImageBank(image[bank1a_off : bank1a_off + bank1a_size], size1)

    @classmethod
    def from_bytes(cls, data: bytes) -> ImageCart | None:
        """Recognise an LNX or LYX image; None if it is neither."""
        return cls._from_lnx(data) or cls._from_lyx(data)

    @classmethod
    def _from_lnx(cls, data: bytes) -> ImageCart | None:
        if len(data) < LnxHeader.SIZE:
            return None
        header = LnxHeader.from_bytes(data)
        if header.magic != b"LYNX" or header.version != 1:
            return None
        return cls(data, header)

    @classmethod
    def _from_lyx(cls, data: bytes) -> ImageCart | None:
        if not data:
            return None
        # The loader's first byte holds the two's complement of its block count.
        blockcount = 0x100 - data[0]
        if blockcount > 5:
            return None
        try:
            plain = decrypt(blockcount, data[1 : 1 + BLOCK_SIZE * blockcount])
        except DecryptionError:
            return None
        if not plain:
            return None
        if len(data) not in _LYX_SIZES:
            return None
        return cls(data)

    @property
    def banks(self) -> tuple[CartImageBank, CartImageBank, CartImageBank, CartImageBank]:
        return self.bank0, self.bank0a, self.bank1, self.bank1a

    def populate(self, image_properties: ImageProperties) -> None:
        """Fill ``image_properties`` from the header and bank layout."""
        header = self.header
        if header is not None:
            image_properties.set_rotation(header.rotation)
            image_properties.set_eeprom(header.eeprom_bits)
            image_properties.cartridge_name = header.cartridge_name
            image_properties.manufacturer_name = header.manufacturer_name
            image_properties.aud_in_used = header.aud_bits != 0
        image_properties.bank_props = tuple(
            BankProps(bank.page_size, bank.number_of_pages) for bank in self.banks
        )