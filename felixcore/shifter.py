"""A 64-bit most-significant-first bit queue used to unpack sprite data."""

from __future__ import annotations

WIDTH = 64
_MASK64 = (1 << WIDTH) - 1


class Shifter:
    """Bytes go in at the bottom of the queue and bits come out at the top."""

    def __init__(self) -> None:
        self._bits = 0
        self._size = 0

    @property
    def size(self) -> int:
        """Number of bits currently held."""
        return self._size

    def pull(self, bits: int) -> int:
        """Take ``bits`` bits from the top.

        When fewer bits are held, nothing is taken and the (negative)
        shortfall ``size - bits`` is returned instead.
        """
        if self._size < bits:
            return self._size - bits
        result = self._bits >> (WIDTH - bits)
        self._bits = (self._bits << bits) & _MASK64
        self._size -= bits
        return result

    def push(self, value: int) -> None:
        """Append one byte below the bits already held."""
        if self._size + 8 > WIDTH:
            raise OverflowError("shifter holds no room for another byte")
        offset = WIDTH - self._size - 8
        self._bits |= (value & 0xFF) << offset
        self._size += 8

    def push_int(self, value: int, size: int) -> bool:
        """Append the ``size`` bytes of ``value``, least significant first.

        Returns False, pushing nothing, when they do not fit.
        """
        if self._size + 8 * size > WIDTH:
            return False
        for index in range(size):
            self.push((value >> (8 * index)) & 0xFF)
        return True