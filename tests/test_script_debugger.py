import pytest

from felixcore.script_debugger import (
    CompositeTrap,
    MemoryAccessTrap,
    ScriptDebugger,
    ScriptDebuggerEscapes,
    TrapType,
)


class SetTrap(MemoryAccessTrap):
    def __init__(self, value):
        self.value = value

    def trap(self, core, address, org_value):
        return self.value


class RecordTrap(MemoryAccessTrap):
    def __init__(self):
        self.calls = []

    def trap(self, core, address, org_value):
        self.calls.append((core, address, org_value))
        return org_value


CORE = object()


def test_untrapped_access_returns_original():
    debugger = ScriptDebugger()
    assert debugger.read_ram(CORE, 0x1234, 0x42) == 0x42
    assert debugger.read_mapctl(CORE, 0x42) == 0x42


def test_ram_read_trap_replaces_value():
    debugger = ScriptDebugger()
    debugger.add_trap(TrapType.RAM_READ, 0x1234, SetTrap(0x99))
    assert debugger.read_ram(CORE, 0x1234, 0x42) == 0x99
    assert debugger.write_ram(CORE, 0x1234, 0x42) == 0x42
    assert debugger.read_ram(CORE, 0x1235, 0x42) == 0x42


def test_second_trap_chains_after_first():
    debugger = ScriptDebugger()
    record = RecordTrap()
    debugger.add_trap(TrapType.RAM_WRITE, 0x200, SetTrap(7))
    debugger.add_trap(TrapType.RAM_WRITE, 0x200, record)
    assert debugger.write_ram(CORE, 0x200, 1) == 7
    assert record.calls == [(CORE, 0x200, 7)]


def test_composite_trap_order():
    record = RecordTrap()
    composite = CompositeTrap(SetTrap(3), record)
    assert composite.trap(CORE, 0x10, 1) == 3
    assert record.calls == [(CORE, 0x10, 3)]


def test_rom_trap_sees_cpu_address():
    debugger = ScriptDebugger()
    record = RecordTrap()
    debugger.add_trap(TrapType.ROM_READ, 0xFE10, record)
    assert debugger.read_rom(CORE, 0x10, 5) == 5
    assert record.calls == [(CORE, 0xFE10, 5)]


def test_mikey_trap_slot_ignores_page():
    debugger = ScriptDebugger()
    record = RecordTrap()
    debugger.add_trap(TrapType.MIKEY_WRITE, 0xFD20, record)
    debugger.write_mikey(CORE, 0xFD20, 1)
    assert record.calls == [(CORE, 0xFD20, 1)]
    assert debugger.read_mikey(CORE, 0xFD20, 1) == 1
    assert len(record.calls) == 1


def test_suzy_and_mapctl_traps():
    debugger = ScriptDebugger()
    record = RecordTrap()
    debugger.add_trap(TrapType.SUZY_READ, 0xFC92, SetTrap(0x11))
    debugger.add_trap(TrapType.MAPCTL_WRITE, 0, record)
    assert debugger.read_suzy(CORE, 0xFC92, 0) == 0x11
    debugger.write_mapctl(CORE, 6)
    assert record.calls == [(CORE, 0xFFF9, 6)]


def test_execute_traps_are_separate():
    debugger = ScriptDebugger()
    debugger.add_trap(TrapType.RAM_EXECUTE, 0x400, SetTrap(0xEA))
    debugger.add_trap(TrapType.ROM_EXECUTE, 0xFE00, SetTrap(0x60))
    assert debugger.execute_ram(CORE, 0x400, 0) == 0xEA
    assert debugger.execute_rom(CORE, 0, 0) == 0x60
    assert debugger.read_ram(CORE, 0x400, 0) == 0


def test_escapes_populate_debugger():
    escapes = ScriptDebuggerEscapes()
    escapes.add_trap(TrapType.RAM_READ, 0x80, SetTrap(0x55))
    escapes.add_trap(TrapType.SUZY_WRITE, 0xFC00, SetTrap(0x66))
    debugger = ScriptDebugger()
    escapes.populate(debugger)
    assert debugger.read_ram(CORE, 0x80, 0) == 0x55
    assert debugger.write_suzy(CORE, 0xFC00, 0) == 0x66


def test_unknown_trap_type_is_rejected():
    debugger = ScriptDebugger()
    with pytest.raises(ValueError):
        debugger.add_trap(99, 0, SetTrap(0))


def test_trap_base_is_abstract():
    with pytest.raises(TypeError):
        MemoryAccessTrap()