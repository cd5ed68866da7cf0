"""Serial 93Cxx EEPROM attached to the cartridge port."""

from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Generator

from .image_properties import ImageProperties
from .trace_helper import TraceHelper

# Opcode width (command plus address) and address mask of each chip in 8-bit mode.
_CHIPS = {
    1: (9, 0x7F),    # 93C46
    2: (11, 0xFF),   # 93C56
    3: (11, 0x1FF),  # 93C66
    4: (13, 0x3FF),  # 93C76
    5: (13, 0x7FF),  # 93C86
}

_Process = Generator[None, int, "bool | None"]


class EEPROM:
    """Bit-serial EEPROM clocked by the emulated cartridge lines.

    The content is backed by an image file; it is written back by
    :meth:`save` or on leaving a ``with`` block when it has changed.
    """

    WRITE_TICKS = 10 * 16
    ERAL_TICKS = 15 * 16
    WRAL_TICKS = 30 * 16

    def __init__(
        self,
        image_path: str | os.PathLike[str],
        ee_type: int,
        is_16bit: bool,
        trace_helper: TraceHelper | None = None,
    ) -> None:
        if ee_type not in _CHIPS:
            raise ValueError(f"unsupported EEPROM type {ee_type}")
        self.image_path = Path(image_path)
        self._trace = trace_helper if trace_helper is not None else TraceHelper()

        opcode_bits, address_mask = _CHIPS[ee_type]
        self.data = bytearray(b"\xff" * (address_mask + 1))
        if is_16bit:
            opcode_bits -= 1
            address_mask >>= 1
            self.data_bits = 16
        else:
            self.data_bits = 8
        self._opcode_bits = opcode_bits
        self._address_mask = address_mask
        self.write_enable = False
        self.changed = True

        self._current_tick = 0
        self._busy_until = 0
        self._cs = False
        self._input = False
        self._output: bool | None = None
        self._coroutine: _Process | None = None

        if self.image_path.exists():
            content = self.image_path.read_bytes()[: len(self.data)]
            self.data[: len(content)] = content
            self.changed = False

    @classmethod
    def create(
        cls, image_properties: ImageProperties, trace_helper: TraceHelper | None = None
    ) -> EEPROM | None:
        """Build the EEPROM an image declares, backed by ``<image>.e2p``; None if it has none."""
        spec = image_properties.eeprom
        if not 0 < spec.type < 6:
            return None
        path = image_properties.path
        path = path.with_name(path.name + ".e2p")
        return cls(path, spec.type, spec.is_16bit, trace_helper)

    def save(self) -> None:
        """Write the content to the image file if it has changed."""
        if self.changed:
            self.image_path.write_bytes(bytes(self.data))
            self.changed = False

    def __enter__(self) -> EEPROM:
        return self

    def __exit__(self, *args: object) -> None:
        with contextlib.suppress(OSError):
            self.save()

    def tick(self, tick: int, cs: bool, audin: bool) -> None:
        """Clock the chip with the chip-select and data-in line levels."""
        if self._cs:
            if cs:
                if self._busy_until < tick:
                    self._current_tick = tick
                    self._input = audin
                    self._resume()
            else:
                if self._coroutine is not None:
                    self._trace.comment("EEPROM: /CS.")
                    self._coroutine.close()
                    self._coroutine = None
                self._cs = False
        elif cs and audin:
            if self._busy_until < tick:
                self._trace.comment("EEPROM: begin.")
                self._coroutine = self._process()
                next(self._coroutine)
                self._output = None
            self._cs = True

    def output(self, tick: int) -> bool | None:
        """Return the data-out level, False while programming, None when floating."""
        if self._busy_until < tick:
            return self._output
        self._trace.comment("EEPROM: programming.")
        return False

    def _resume(self) -> None:
        if self._coroutine is None:
            return
        try:
            self._coroutine.send(1 if self._input else 0)
        except StopIteration:
            self._coroutine = None

    def _process(self) -> _Process:
        result = yield from self._commands()
        self._trace.comment("EEPROM: end.")
        self._output = result
        return result

    def _emit(self, bit: int) -> Generator[None, int, None]:
        self._output = bool(bit)
        yield

    def _receive(self, count: int, trace: bool) -> Generator[None, int, int]:
        data = 0
        for i in range(count):
            bit = yield
            data = (data << 1) | bit
            if trace:
                self._trace.comment("EEPROM: fetch data bit {}={}.", count - i - 1, bit)
        return data

    def _commands(self) -> _Process:
        opcode = 0
        for i in range(self._opcode_bits):
            bit = yield
            opcode = (opcode << 1) | bit
            self._trace.comment("EEPROM: fetch opcode bit {}={}.", self._opcode_bits - i - 1, bit)

        cmd = opcode >> (self._opcode_bits - 2)
        address = opcode & self._address_mask
        data_bits = self.data_bits

        if cmd == 0b00:
            sub = address >> (self._opcode_bits - 4)
            if sub == 0b00:
                self._ewds()
            elif sub == 0b01:
                data = yield from self._receive(data_bits, False)
                self._wral(data)
                return True
            elif sub == 0b10:
                self._eral()
            else:
                self._ewen()
        elif cmd == 0b01:
            data = yield from self._receive(data_bits, True)
            self._write(address, data)
            return True
        elif cmd == 0b10:
            yield from self._emit(0)
            data = self._read(address)
            for i in range(data_bits):
                bit = (data >> (data_bits - i - 1)) & 1
                self._trace.comment("EEPROM: emit data bit {}={}.", data_bits - i - 1, bit)
                yield from self._emit(bit)
        else:
            self._erase(address)
            return True
        return None

    def _read(self, address: int) -> int:
        if self.data_bits == 16:
            value = 0xFFFF
            address <<= 1
            if address < len(self.data):
                value = self.data[address] | (self.data[address + 1] << 8)
            self._trace.comment("EEPROM: EXECUTE READ16 ${:x} from ${:x}.", value, address)
            return value
        value = 0xFF
        if address < len(self.data):
            value = self.data[address]
        self._trace.comment("EEPROM: EXECUTE READ8 ${:x} from ${:x}.", value, address)
        return value

    def _ewen(self) -> None:
        self._trace.comment("EEPROM: EXECUTE EWEN.")
        self.write_enable = True

    def _ewds(self) -> None:
        self._trace.comment("EEPROM: EXECUTE EWDS.")
        self.write_enable = False

    def _erase(self, address: int) -> None:
        self._write(address, 0xFFFF, erase=True)

    def _write(self, address: int, data: int, erase: bool = False) -> None:
        sixteen = self.data_bits == 16
        if sixteen:
            address <<= 1
        kind = ("ERASE" if erase else "WRITE") + ("16" if sixteen else "8")
        if not self.write_enable:
            if erase:
                self._trace.comment("EEPROM: DISABLED {} ${:x}.", kind, address)
            else:
                self._trace.comment("EEPROM: DISABLED {} ${:x} to ${:x}.", kind, data, address)
            return

        if sixteen:
            if address < len(self.data):
                for offset, byte in ((0, data & 0xFF), (1, (data >> 8) & 0xFF)):
                    if self.data[address + offset] != byte:
                        self.changed = True
                        self.data[address + offset] = byte
        elif address < len(self.data):
            self.data[address] = data & 0xFF
        if erase:
            self._trace.comment("EEPROM: EXECUTE {} ${:x}", kind, address)
        else:
            self._trace.comment("EEPROM: EXECUTE {} ${:x} to ${:x}.", kind, data, address)
        self._start_program(self.WRITE_TICKS)

    def _eral(self) -> None:
        if not self.write_enable:
            self._trace.comment("EEPROM: DISABLED ERAL.")
            return
        self._trace.comment("EEPROM: EXECUTE ERAL.")
        self.data[:] = b"\xff" * len(self.data)
        self.changed = True
        self._start_program(self.ERAL_TICKS)

    def _wral(self, data: int) -> None:
        width = str(self.data_bits)
        if not self.write_enable:
            self._trace.comment("EEPROM: DISABLED WRAL{} ${:x}.", width, data)
            return
        if self.data_bits == 16:
            self.data[:] = (data & 0xFFFF).to_bytes(2, "little") * (len(self.data) // 2)
        else:
            self.data[:] = bytes([data & 0xFF]) * len(self.data)
        self._trace.comment("EEPROM: EXECUTE WRAL{} ${:x}.", width, data)
        self.changed = True
        self._start_program(self.WRAL_TICKS)

    def _start_program(self, duration: int) -> None:
        # Every programming operation is timed as a single write.
        self._busy_until = self._current_tick + self.WRITE_TICKS
        self._output = True