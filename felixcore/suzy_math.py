"""The multiply/divide unit of the sprite chip."""

from __future__ import annotations

from .trace_helper import TraceHelper

_BASE = 0x50
_OFF_ABCD = 0x52 - _BASE
_OFF_AB = 0x54 - _BASE
_OFF_CD = 0x52 - _BASE
_OFF_NP = 0x56 - _BASE
_OFF_EFGH = 0x60 - _BASE
_OFF_JKLM = 0x6C - _BASE

_MASK32 = 0xFFFFFFFF


def _convert_signed(value: int) -> tuple[int, int]:
    """Return the magnitude and sign the hardware sees.

    The hardware treats 0x8000 as positive and 0 as negative.
    """
    if ((value - 1) & 0x8000) == 0x8000:
        return ((value ^ 0xFFFF) + 1) & 0xFFFF, -1
    return value, 1


class SuzyMath:
    """Register file and arithmetic of the math unit (registers $FC50-$FC6F)."""

    def __init__(self, trace_helper: TraceHelper | None = None) -> None:
        self._area = bytearray(b"\xff" * 32)
        self._trace = trace_helper if trace_helper is not None else TraceHelper()
        self._finish_tick = 0
        self._sign_ab = 0
        self._sign_cd = 0
        self.unsafe_access = False
        self.sign_math = False
        self.accumulate = False
        self.warning = False
        self.carry = False

    @staticmethod
    def _index(offset: int, even: bool = False) -> int:
        if not _BASE <= offset < 0x70 or (even and offset & 1):
            raise ValueError(f"invalid math register offset 0x{offset:x}")
        return offset - _BASE

    def _touch(self, tick: int) -> None:
        if tick < self._finish_tick:
            self.unsafe_access = True

    def poke(self, tick: int, offset: int, value: int) -> bool:
        index = self._index(offset)
        self._touch(tick)
        self._area[index] = value & 0xFF
        return True

    def wpoke(self, tick: int, offset: int, value: int) -> None:
        """Write a little-endian 16-bit value at an even register offset."""
        index = self._index(offset, even=True)
        self._touch(tick)
        self._set(index, 2, value)

    def peek(self, tick: int, offset: int) -> int:
        index = self._index(offset)
        self._touch(tick)
        return self._area[index]

    def _get(self, index: int, size: int) -> int:
        return int.from_bytes(self._area[index : index + size], "little")

    def _set(self, index: int, size: int, value: int) -> None:
        self._area[index : index + size] = (value & ((1 << (8 * size)) - 1)).to_bytes(size, "little")

    def mul(self, tick: int) -> None:
        """Multiply AB by CD into EFGH, accumulating into JKLM if enabled."""
        self._finish_tick = tick + (54 if self.sign_math or self.accumulate else 44)
        self.warning = False

        ab = self._get(_OFF_AB, 2)
        cd = self._get(_OFF_CD, 2)
        result = (ab * cd) & _MASK32
        if self.sign_math and self._sign_ab + self._sign_cd == 0:
            result = ((result ^ _MASK32) + 1) & _MASK32
        self._set(_OFF_EFGH, 4, result)

        if self.accumulate:
            jklm = self._get(_OFF_JKLM, 4)
            acc = (jklm + result) & _MASK32
            self.carry = (acc & 0x80000000) != (jklm & 0x80000000)
            self.warning = self.carry
            self._set(_OFF_JKLM, 4, acc)
            self._trace.comment(
                "math: {} {:04x}*{:04x}={:08x}, acc = {:08x}",
                "s" if self.sign_math else "u", ab, cd, result, acc,
            )
            if self.carry:
                self._trace.comment("carry")
        else:
            self._trace.comment("math: {:04x}*{:04x}={:08x}", ab, cd, result)

    def div(self, tick: int) -> None:
        """Divide EFGH by NP into quotient ABCD and remainder JKLM."""
        np_value = self._get(_OFF_NP, 2)
        leading_zeros = 16 - np_value.bit_length()
        self._finish_tick = tick + 176 + 14 * leading_zeros
        self.warning = False

        efgh = self._get(_OFF_EFGH, 4)
        if np_value:
            quotient, remainder = divmod(efgh, np_value)
            self._set(_OFF_ABCD, 4, quotient)
            self._set(_OFF_JKLM, 4, remainder)
            if remainder:
                self._trace.comment(
                    "math: {0:08x}/{1:04x}={2:04x} + {3:08x}/{1:04x}",
                    efgh, np_value, quotient, remainder,
                )
            else:
                self._trace.comment("math: {:08x}/{:04x}={:04x}", efgh, np_value, quotient)
        else:
            self._set(_OFF_ABCD, 4, _MASK32)
            self._set(_OFF_JKLM, 4, 0)
            self.warning = True
            self.carry = True

    def sign_ab(self) -> None:
        if self.sign_math:
            value, self._sign_ab = _convert_signed(self._get(_OFF_AB, 2))
            self._set(_OFF_AB, 2, value)

    def sign_cd(self) -> None:
        if self.sign_math:
            value, self._sign_cd = _convert_signed(self._get(_OFF_CD, 2))
            self._set(_OFF_CD, 2, value)

    def working(self, tick: int) -> bool:
        return tick < self._finish_tick