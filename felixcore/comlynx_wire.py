"""The shared serial line that every connected unit can pull."""

from __future__ import annotations


class ComLynxWire:
    """Open-collector wire: idle (logic 1) while no client pulls it."""

    def __init__(self) -> None:
        self._value = 0
        self._clients = 0
        self._coarse_value = 0
        self._parbit = 0

    def pull_up(self) -> None:
        self._value += 1

    def pull_down(self) -> None:
        self._value -= 1

    def wire(self) -> int:
        """Return the raw pull balance."""
        return self._value

    def value(self) -> int:
        """Return the logic level: 1 when nothing pulls the line."""
        return 1 if self._value == 0 else 0

    def connect(self) -> int:
        """Register a client and return its index."""
        index = self._clients
        self._clients += 1
        return index

    def set_coarse(self, value: int, parbit: int) -> None:
        self._coarse_value = value
        self._parbit = parbit

    def get_coarse(self) -> tuple[int, int]:
        """Return the coarse byte and its parity bit."""
        return self._coarse_value, self._parbit