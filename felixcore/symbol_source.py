"""Symbol table read from an assembler label file."""

from __future__ import annotations

import os


def parse_line(line: str) -> tuple[str, int] | None:
    """Parse ``bank address name`` (hexadecimal numbers); None unless bank 0."""
    parts = line.split(maxsplit=3)
    if len(parts) < 3:
        return None
    try:
        bank = int(parts[0], 16)
        address = int(parts[1], 16)
    except ValueError:
        return None
    if bank != 0:
        return None
    return parts[2], address & 0xFFFF


class SymbolSource:
    """Names and addresses of the bank-0 labels in a label file."""

    def __init__(self, lab_path: str | os.PathLike[str]) -> None:
        self.symbols: list[tuple[str, int]] = []
        try:
            with open(lab_path, encoding="latin-1") as lab:
                # The first two lines are a header.
                next(lab, None)
                next(lab, None)
                for raw in lab:
                    line = raw.rstrip("\n")
                    if not line:
                        break
                    symbol = parse_line(line)
                    if symbol is not None:
                        self.symbols.append(symbol)
        except FileNotFoundError:
            pass

    def symbol(self, name: str) -> int | None:
        """Return the address of ``name``, matched in upper case."""
        upper = name.upper()
        return next((value for sym, value in self.symbols if sym == upper), None)