"""Decoding of one line of sprite data into pen indices."""

from __future__ import annotations

from typing import Iterator

from .shifter import Shifter


class SpriteLineParser:
    """Yields pen indices from literal or run-length packed sprite data."""

    def __init__(self, shifter: Shifter, literal: bool, bpp: int, total_bits: int) -> None:
        self._shifter = shifter
        self._literal = literal
        self._bpp = bpp
        self._total_bits = total_bits
        self._pen = 0
        self._rle_count = -1
        self._rle_literal = 0

    @property
    def total_bits(self) -> int:
        """Bits of the line not yet consumed."""
        return self._total_bits

    def pen_index(self) -> int | None:
        """Return the next pen index, or None at the end of the line."""
        if self._literal:
            return self._literal_pen()
        return self._rle_pen()

    def __iter__(self) -> Iterator[int]:
        while (pen := self.pen_index()) is not None:
            yield pen

    def _read_pen(self) -> None:
        self._pen = self._shifter.pull(self._bpp)
        self._total_bits -= self._bpp

    def _literal_pen(self) -> int | None:
        if self._total_bits > self._bpp:
            self._read_pen()
            return self._pen
        return None

    def _rle_pen(self) -> int | None:
        if self._rle_count < 0:
            if self._total_bits <= 5:
                return None
            self._rle_literal = self._shifter.pull(1)
            self._rle_count = self._shifter.pull(4)
            self._total_bits -= 5
            if not self._rle_literal:
                if self._rle_count <= 0:
                    return None
                if self._total_bits <= self._bpp:
                    return None
                self._read_pen()

        if self._rle_literal:
            if self._total_bits <= self._bpp:
                return None
            self._read_pen()

        self._rle_count -= 1
        return self._pen