"""The GameDrive SD-card cartridge: a byte-wide command interface over host files."""

from __future__ import annotations

import os
import time
from enum import IntEnum
from pathlib import Path
from typing import Generator

from .image_properties import ImageProperties
from .log import LogLevel, log_message

BLOCK_SIZE = 2048
BLOCK_COUNT = 256
MEMORY_BANK_SIZE = BLOCK_SIZE * BLOCK_COUNT

BYTE_READ_LATENCY = 120
BLOCK_READ_LATENCY = 159 * 5 * 16
PROGRAM_BYTE_LATENCY = 34

_Process = Generator[None, None, None]


class CommandByte(IntEnum):
    OPEN_DIR = 0
    READ_DIR = 1
    OPEN_FILE = 2
    GET_SIZE = 3
    SEEK = 4
    READ = 5
    WRITE = 6
    CLOSE = 7
    PROGRAM_FILE = 8
    CLEAR_BLOCKS = 9
    LOW_POWER_MODE = 10


class FResult(IntEnum):
    OK = 0
    DISK_ERR = 1
    NOT_READY = 2
    NO_FILE = 3
    NOT_OPENED = 4
    NOT_ENABLED = 5
    NO_FILESYSTEM = 6


def _debug(*args: object) -> None:
    log_message(LogLevel.DEBUG, *args)


class GameDrive:
    """Serves files next to the cartridge image through a byte command protocol.

    The console writes bytes with :meth:`put` and reads answers with
    :meth:`get` once :meth:`has_output` reports them ready.
    """

    def __init__(self, image_path: str | os.PathLike[str]) -> None:
        self.base_path = Path(image_path).parent
        self.memory_bank = bytearray(MEMORY_BANK_SIZE)
        self._programmed_bank: bytes | None = None
        self._value = 0
        self._ready = False
        self._last_tick = 0
        self._read_tick: int | None = None
        self._base_time = time.monotonic()
        self._last_time_point = 0.0
        self._coroutine = self._process()
        next(self._coroutine)

    @classmethod
    def create(cls, image_properties: ImageProperties) -> GameDrive | None:
        """Build a drive if the image declares an SD card; None otherwise."""
        if image_properties.eeprom.sd:
            return cls(image_properties.path)
        return None

    def has_output(self, tick: int) -> bool:
        return self._read_tick is not None and self._read_tick < tick

    def put(self, tick: int, value: int) -> None:
        """Hand one byte to the drive; ignored unless it is waiting for input."""
        if self._ready:
            self._last_tick = tick
            self._ready = False
            self._value = value & 0xFF
            next(self._coroutine)

    def get(self, tick: int) -> int:
        """Take the current output byte and let the drive continue."""
        self._last_tick = tick
        self._read_tick = None
        result = self._value
        next(self._coroutine)
        return result

    def get_bank(self, tick: int) -> bytes | None:
        """Return the content last programmed into flash, or None."""
        return self._programmed_bank

    def _get_byte(self) -> Generator[None, None, int]:
        self._read_tick = None
        self._ready = True
        yield
        return self._value

    def _put_byte(self, value: int, latency: int = 0) -> _Process:
        self._last_tick += latency
        self._read_tick = self._last_tick
        self._value = int(value) & 0xFF
        yield

    def _put_result(self, result: FResult, latency: int = 0) -> _Process:
        yield from self._put_byte(result, latency)

    def _time_point(self, label: str) -> None:
        point = time.monotonic() - self._base_time
        _debug(label, point - self._last_time_point)
        self._last_time_point = point

    def _process(self) -> _Process:
        data = bytearray()
        offset = 0

        def read_byte() -> int:
            nonlocal offset
            if offset < len(data):
                value = data[offset]
                offset += 1
                return value
            return 0

        while True:
            raw = yield from self._get_byte()
            try:
                cmd = CommandByte(raw)
            except ValueError:
                _debug("GD Unknown command ", raw)
                yield from self._put_result(FResult.NOT_ENABLED)
                continue

            if cmd is CommandByte.OPEN_FILE:
                data = bytearray()
                offset = 0
                name = bytearray()
                while True:
                    b = yield from self._get_byte()
                    if b == 0:
                        break
                    if b == ord("/") and not name:
                        continue
                    name.append(b)
                path = self.base_path / name.decode("latin-1")
                if path.is_file():
                    _debug("GD Open file ", path)
                    try:
                        data = bytearray(path.read_bytes())
                        status = FResult.OK
                    except OSError:
                        status = FResult.NOT_OPENED
                    yield from self._put_result(status)
                else:
                    _debug("GD File ", path, " open error")
                    yield from self._put_result(FResult.NO_FILE)

            elif cmd is CommandByte.GET_SIZE:
                size = len(data) & 0xFFFFFFFF
                _debug("GD File size ", size)
                for byte in size.to_bytes(4, "little"):
                    yield from self._put_byte(byte)

            elif cmd is CommandByte.SEEK:
                new_offset = 0
                for shift in (0, 8, 16, 24):
                    b = yield from self._get_byte()
                    new_offset |= b << shift
                if not data:
                    _debug("GD File seek not opened")
                    yield from self._put_result(FResult.NOT_OPENED)
                else:
                    if new_offset > len(data):
                        _debug("GD File resized from ", len(data), " to ", new_offset)
                        data.extend(bytes(new_offset - len(data)))
                    _debug("GD File seek ", new_offset)
                    offset = new_offset
                    yield from self._put_result(FResult.OK)

            elif cmd is CommandByte.READ:
                lo = yield from self._get_byte()
                hi = yield from self._get_byte()
                size = lo | (hi << 8)
                _debug("GD Read ", size, " at ", offset)
                for _ in range(size):
                    yield from self._put_byte(read_byte(), BYTE_READ_LATENCY)
                yield from self._put_result(FResult.NOT_OPENED if not data else FResult.OK)

            elif cmd is CommandByte.CLOSE:
                if not data:
                    _debug("GD Close not opened")
                    yield from self._put_result(FResult.NOT_OPENED)
                else:
                    data = bytearray()
                    offset = 0
                    _debug("GD Close")
                    yield from self._put_result(FResult.OK)

            elif cmd is CommandByte.PROGRAM_FILE:
                start_block = yield from self._get_byte()
                yield from self._get_byte()  # unused high byte of start block
                block_size = 256 * (yield from self._get_byte())
                count_lo = yield from self._get_byte()
                count_hi = yield from self._get_byte()
                block_count = count_lo | (count_hi << 8)
                if not data:
                    _debug("GD Program not opened")
                    yield from self._put_result(FResult.NOT_OPENED)
                    continue
                block_count = max(block_count, 256)
                _debug(
                    "GD Program ", block_count * block_size, " from ", offset,
                    " to start:", start_block, ", blockSize:", block_size,
                    ", blockCount:", block_count,
                )
                for i in range(block_count):
                    base = BLOCK_SIZE * (start_block + i)
                    for j in range(block_size):
                        value = read_byte()
                        if base + j < MEMORY_BANK_SIZE:
                            self.memory_bank[base + j] = value
                self._programmed_bank = bytes(self.memory_bank)
                self._time_point("start program: ")
                yield from self._put_result(
                    FResult.OK, block_count * block_size * PROGRAM_BYTE_LATENCY
                )
                self._time_point("end program: ")

            elif cmd is CommandByte.CLEAR_BLOCKS:
                start_block = yield from self._get_byte()
                yield from self._get_byte()  # unused high byte of start block
                block_count = yield from self._get_byte()
                yield from self._get_byte()  # unused high byte of block count
                for i in range(block_count):
                    begin = min(BLOCK_SIZE * (start_block + i), MEMORY_BANK_SIZE)
                    end = min(begin + BLOCK_SIZE, MEMORY_BANK_SIZE)
                    self.memory_bank[begin:end] = bytes(end - begin)
                _debug("GD Clear start:", start_block, ", blockCount:", block_count)
                yield from self._put_result(FResult.OK)

            else:
                _debug("GD ", cmd.name, " NYI")
                yield from self._put_result(FResult.NOT_ENABLED)