"""Memory access traps that scripts hang on RAM, ROM and chip registers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any


class TrapType(IntEnum):
    RAM_READ = 0
    RAM_WRITE = 1
    RAM_EXECUTE = 2
    ROM_READ = 3
    ROM_WRITE = 4
    ROM_EXECUTE = 5
    MIKEY_READ = 6
    MIKEY_WRITE = 7
    SUZY_READ = 8
    SUZY_WRITE = 9
    MAPCTL_READ = 10
    MAPCTL_WRITE = 11


class MemoryAccessTrap(ABC):
    """Called on a trapped access; returns the value to use instead."""

    @abstractmethod
    def trap(self, core: Any, address: int, org_value: int) -> int:
        raise NotImplementedError


class CompositeTrap(MemoryAccessTrap):
    """Runs two traps in turn, the second seeing the first one's result."""

    def __init__(self, first: MemoryAccessTrap, second: MemoryAccessTrap) -> None:
        self.first = first
        self.second = second

    def trap(self, core: Any, address: int, org_value: int) -> int:
        value = self.first.trap(core, address, org_value)
        return self.second.trap(core, address, value)


ROM_BASE = 0xFE00
MAPCTL_ADDRESS = 0xFFF9

_SLOT_MASKS = {
    TrapType.RAM_READ: 0xFFFF,
    TrapType.RAM_WRITE: 0xFFFF,
    TrapType.RAM_EXECUTE: 0xFFFF,
    TrapType.ROM_READ: 0x1FF,
    TrapType.ROM_WRITE: 0x1FF,
    TrapType.ROM_EXECUTE: 0x1FF,
    TrapType.MIKEY_READ: 0xFF,
    TrapType.MIKEY_WRITE: 0xFF,
    TrapType.SUZY_READ: 0xFF,
    TrapType.SUZY_WRITE: 0xFF,
    TrapType.MAPCTL_READ: 0,
    TrapType.MAPCTL_WRITE: 0,
}


class ScriptDebugger:
    """Holds the traps of each access kind, keyed by address slot."""

    def __init__(self) -> None:
        self._traps: dict[TrapType, dict[int, MemoryAccessTrap]] = {t: {} for t in TrapType}

    def add_trap(self, trap_type: TrapType, address: int, trap: MemoryAccessTrap) -> None:
        """Attach ``trap``; a slot already trapped chains the new trap after the old."""
        trap_type = TrapType(trap_type)
        slot = address & _SLOT_MASKS[trap_type]
        slots = self._traps[trap_type]
        existing = slots.get(slot)
        slots[slot] = trap if existing is None else CompositeTrap(existing, trap)

    def _run(
        self, trap_type: TrapType, slot: int, core: Any, address: int, org_value: int
    ) -> int:
        trap = self._traps[trap_type].get(slot)
        if trap is None:
            return org_value
        return trap.trap(core, address, org_value)

    def read_ram(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.RAM_READ, address, core, address, org_value)

    def write_ram(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.RAM_WRITE, address, core, address, org_value)

    def execute_ram(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.RAM_EXECUTE, address, core, address, org_value)

    def read_rom(self, core: Any, address: int, org_value: int) -> int:
        """``address`` is the offset into the ROM; traps see the CPU address."""
        return self._run(TrapType.ROM_READ, address, core, address + ROM_BASE, org_value)

    def write_rom(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.ROM_WRITE, address, core, address + ROM_BASE, org_value)

    def execute_rom(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.ROM_EXECUTE, address, core, address + ROM_BASE, org_value)

    def read_mikey(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.MIKEY_READ, address & 0xFF, core, address, org_value)

    def write_mikey(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.MIKEY_WRITE, address & 0xFF, core, address, org_value)

    def read_suzy(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.SUZY_READ, address & 0xFF, core, address, org_value)

    def write_suzy(self, core: Any, address: int, org_value: int) -> int:
        return self._run(TrapType.SUZY_WRITE, address & 0xFF, core, address, org_value)

    def read_mapctl(self, core: Any, org_value: int) -> int:
        return self._run(TrapType.MAPCTL_READ, 0, core, MAPCTL_ADDRESS, org_value)

    def write_mapctl(self, core: Any, org_value: int) -> int:
        return self._run(TrapType.MAPCTL_WRITE, 0, core, MAPCTL_ADDRESS, org_value)


class ScriptDebuggerEscapes:
    """Traps recorded ahead of time and installed into a debugger later."""

    def __init__(self) -> None:
        self._escapes: list[tuple[TrapType, int, MemoryAccessTrap]] = []

    def add_trap(self, trap_type: TrapType, address: int, trap: MemoryAccessTrap) -> None:
        self._escapes.append((TrapType(trap_type), address, trap))

    def populate(self, script_debugger: ScriptDebugger) -> None:
        for trap_type, address, trap in self._escapes:
            script_debugger.add_trap(trap_type, address, trap)