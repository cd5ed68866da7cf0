"""The 512-byte boot ROM image."""

from __future__ import annotations

import os

from .utility import read_file

ROM_SIZE = 512
_RESET_VECTOR_OFFSET = 0x1FC


class ImageROM:
    """Boot ROM content."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> ImageROM | None:
        """Load a ROM; None if the size or reset vector is wrong."""
        data = read_file(path)
        if len(data) != ROM_SIZE:
            return None
        reset_vector = int.from_bytes(data[_RESET_VECTOR_OFFSET : _RESET_VECTOR_OFFSET + 2], "little")
        if reset_vector < 0xFE00:
            return None
        return cls(data)

    def load(self, memory: bytearray) -> None:
        """Copy the ROM into ``memory``, which must be exactly ROM-sized."""
        if len(memory) != len(self.data):
            raise ValueError(f"ROM memory must be {len(self.data)} bytes, got {len(memory)}")
        memory[:] = self.data