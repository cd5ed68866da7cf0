import pytest

from felixcore.game_drive import (
    BLOCK_SIZE,
    BYTE_READ_LATENCY,
    PROGRAM_BYTE_LATENCY,
    CommandByte,
    FResult,
    GameDrive,
)
from felixcore.image_properties import ImageProperties

CONTENT = bytes((i * 7 + 3) & 0xFF for i in range(1000))


@pytest.fixture
def drive(tmp_path):
    (tmp_path / "data.bin").write_bytes(CONTENT)
    return GameDrive(tmp_path / "game.lnx")


def send(gd, tick, *values):
    for value in values:
        gd.put(tick, value)


def open_file(gd, tick, name=b"data.bin"):
    send(gd, tick, CommandByte.OPEN_FILE, *name, 0)
    return gd.get(tick + 1)


def test_open_existing_file_returns_ok(drive):
    assert not drive.has_output(0)
    send(drive, 10, CommandByte.OPEN_FILE, *b"data.bin", 0)
    assert not drive.has_output(10)
    assert drive.has_output(11)
    assert drive.get(11) == FResult.OK
    assert not drive.has_output(100)


def test_open_leading_slash_is_ignored(drive):
    assert open_file(drive, 5, b"/data.bin") == FResult.OK


def test_open_missing_file(drive):
    assert open_file(drive, 5, b"missing.bin") == FResult.NO_FILE


def test_get_size_little_endian(drive):
    open_file(drive, 1)
    send(drive, 10, CommandByte.GET_SIZE)
    size_bytes = bytes(drive.get(20 + i) for i in range(4))
    assert int.from_bytes(size_bytes, "little") == len(CONTENT)


def test_seek_then_read(drive):
    open_file(drive, 1)
    send(drive, 10, CommandByte.SEEK, *(100).to_bytes(4, "little"))
    assert drive.get(11) == FResult.OK
    send(drive, 20, CommandByte.READ, 3, 0)
    data = bytes(drive.get(1000 + i * 200) for i in range(3))
    assert data == CONTENT[100:103]


def test_seek_past_end_grows_file(drive):
    open_file(drive, 1)
    send(drive, 10, CommandByte.SEEK, *(2000).to_bytes(4, "little"))
    assert drive.get(11) == FResult.OK
    send(drive, 20, CommandByte.GET_SIZE)
    size = int.from_bytes(bytes(drive.get(30 + i) for i in range(4)), "little")
    assert size == 2000


def test_seek_without_open(drive):
    send(drive, 10, CommandByte.SEEK, 0, 0, 0, 0)
    assert drive.get(11) == FResult.NOT_OPENED


def test_read_without_open_yields_zeros(drive):
    send(drive, 10, CommandByte.READ, 2, 0)
    assert [drive.get(1000), drive.get(2000)] == [0, 0]
    assert drive.get(3000) == FResult.NOT_OPENED


def test_close(drive):
    send(drive, 10, CommandByte.CLOSE)
    assert drive.get(11) == FResult.NOT_OPENED
    open_file(drive, 20)
    send(drive, 30, CommandByte.CLOSE)
    assert drive.get(31) == FResult.OK
    send(drive, 40, CommandByte.CLOSE)
    assert drive.get(41) == FResult.NOT_OPENED


@pytest.mark.parametrize(
    "command",
    [CommandByte.OPEN_DIR, CommandByte.READ_DIR, CommandByte.WRITE, CommandByte.LOW_POWER_MODE, 0x42],
)
def test_unsupported_commands(drive, command):
    send(drive, 10, command)
    assert drive.get(11) == FResult.NOT_ENABLED


def test_put_ignored_while_output_pending(drive):
    send(drive, 10, CommandByte.CLOSE)
    drive.put(11, CommandByte.OPEN_DIR)
    assert drive.get(12) == FResult.NOT_OPENED


def test_program_file(drive):
    assert drive.get_bank(0) is None
    open_file(drive, 1)
    send(drive, 10, CommandByte.PROGRAM_FILE, 0, 0, 1, 1, 0)
    block_count = 256
    latency = block_count * 256 * PROGRAM_BYTE_LATENCY
    assert not drive.has_output(10 + latency)
    assert drive.has_output(11 + latency)
    assert drive.get(11 + latency) == FResult.OK
    bank = drive.get_bank(0)
    assert len(bank) == BLOCK_SIZE * 256
    assert bank[:256] == CONTENT[:256]
    assert bank[BLOCK_SIZE : BLOCK_SIZE + 256] == CONTENT[256:512]
    assert bank[256:BLOCK_SIZE] == bytes(BLOCK_SIZE - 256)


def test_program_without_open(drive):
    send(drive, 10, CommandByte.PROGRAM_FILE, 0, 0, 1, 1, 0)
    assert drive.get(11) == FResult.NOT_OPENED
    assert drive.get_bank(0) is None


def test_clear_blocks(drive):
    drive.memory_bank[:] = b"\xaa" * len(drive.memory_bank)
    send(drive, 10, CommandByte.CLEAR_BLOCKS, 1, 0, 2, 0)
    assert drive.get(11) == FResult.OK
    assert drive.memory_bank[:BLOCK_SIZE] == b"\xaa" * BLOCK_SIZE
    assert drive.memory_bank[BLOCK_SIZE : 3 * BLOCK_SIZE] == bytes(2 * BLOCK_SIZE)
    assert drive.memory_bank[3 * BLOCK_SIZE] == 0xAA


def test_create_depends_on_sd_flag(tmp_path):
    props = ImageProperties(tmp_path / "game.lnx")
    assert GameDrive.create(props) is None
    props.eeprom.set_sd(True)
    gd = GameDrive.create(props)
    assert isinstance(gd, GameDrive)
    assert gd.base_path == tmp_path