import pytest

from felixcore.eeprom import EEPROM
from felixcore.image_properties import ImageProperties
from felixcore.trace_helper import TraceHelper


class Bus:
    def __init__(self, ee):
        self.ee = ee
        self.clock = 0

    def select(self):
        self.clock += 1
        self.ee.tick(self.clock, True, True)

    def send(self, bits):
        for ch in bits:
            self.clock += 1
            self.ee.tick(self.clock, True, ch == "1")

    def deselect(self):
        self.clock += 1
        self.ee.tick(self.clock, False, False)

    def wait(self):
        self.clock += EEPROM.WRITE_TICKS + 1

    def output(self):
        return self.ee.output(self.clock)

    def command(self, bits):
        self.select()
        self.send(bits)
        self.deselect()
        self.wait()

    def read(self, address_bits, nbits):
        self.select()
        self.send("10" + address_bits)
        dummy = self.output()
        value = 0
        for _ in range(nbits):
            self.send("0")
            value = (value << 1) | int(self.output())
        self.deselect()
        return dummy, value


def make(tmp_path, ee_type=1, is_16bit=False, trace=None):
    return EEPROM(tmp_path / "cart.e2p", ee_type, is_16bit, trace)


def test_fresh_content_reads_erased(tmp_path):
    bus = Bus(make(tmp_path))
    dummy, value = bus.read(f"{3:07b}", 8)
    assert dummy is False
    assert value == 0xFF


def test_write_8bit_after_ewen(tmp_path):
    ee = make(tmp_path)
    bus = Bus(ee)
    bus.command("0011" + "00000")
    assert ee.write_enable
    bus.select()
    bus.send("01" + f"{3:07b}" + "10100101")
    assert bus.output() is False
    bus.wait()
    assert bus.output() is True
    bus.deselect()
    bus.wait()
    assert ee.data[3] == 0xA5
    assert bus.read(f"{3:07b}", 8)[1] == 0xA5


def test_write_disabled_leaves_data(tmp_path):
    ee = make(tmp_path)
    bus = Bus(ee)
    bus.command("01" + f"{3:07b}" + "00000000")
    assert ee.data[3] == 0xFF
    assert set(ee.data) == {0xFF}


def test_ewds_disables_writes(tmp_path):
    ee = make(tmp_path)
    bus = Bus(ee)
    bus.command("0011" + "00000")
    bus.command("0000" + "00000")
    assert ee.write_enable is False
    bus.command("01" + f"{5:07b}" + "00000000")
    assert ee.data[5] == 0xFF


def test_write_16bit_little_endian(tmp_path):
    ee = make(tmp_path, is_16bit=True)
    bus = Bus(ee)
    bus.command("0011" + "0000")
    bus.command("01" + f"{2:06b}" + f"{0x1234:016b}")
    assert ee.data[4] == 0x34
    assert ee.data[5] == 0x12
    assert bus.read(f"{2:06b}", 16)[1] == 0x1234


def test_wral_and_eral(tmp_path):
    ee = make(tmp_path)
    bus = Bus(ee)
    bus.command("0011" + "00000")
    bus.command("0001" + "00000" + "01011010")
    assert set(ee.data) == {0x5A}
    bus.command("0010" + "00000")
    assert set(ee.data) == {0xFF}


def test_wral_16bit_fills_words(tmp_path):
    ee = make(tmp_path, is_16bit=True)
    bus = Bus(ee)
    bus.command("0011" + "0000")
    bus.command("0001" + "0000" + f"{0xBEEF:016b}")
    assert ee.data[:4] == bytes([0xEF, 0xBE, 0xEF, 0xBE])
    assert len(ee.data) == 128


def test_erase_single_cell(tmp_path):
    ee = make(tmp_path)
    bus = Bus(ee)
    bus.command("0011" + "00000")
    bus.command("0001" + "00000" + "00000000")
    bus.command("11" + f"{7:07b}")
    assert ee.data[7] == 0xFF
    assert ee.data[6] == 0x00


def test_deselect_aborts_command(tmp_path):
    ee = make(tmp_path)
    bus = Bus(ee)
    bus.command("0011" + "00000")
    bus.select()
    bus.send("0100")
    bus.deselect()
    assert bus.output() is None
    bus.command("01" + f"{1:07b}" + "00001111")
    assert ee.data[1] == 0x0F


@pytest.mark.parametrize("ee_type", [0, 6])
def test_invalid_type(tmp_path, ee_type):
    with pytest.raises(ValueError):
        make(tmp_path, ee_type)


def test_loads_existing_image(tmp_path):
    content = bytes(range(128))
    (tmp_path / "cart.e2p").write_bytes(content)
    ee = make(tmp_path)
    assert bytes(ee.data) == content
    assert ee.changed is False


def test_loads_short_image_into_start(tmp_path):
    (tmp_path / "cart.e2p").write_bytes(b"\x01\x02")
    ee = make(tmp_path, ee_type=2)
    assert ee.data[:2] == b"\x01\x02"
    assert set(ee.data[2:]) == {0xFF}
    assert len(ee.data) == 256


def test_context_manager_saves_changes(tmp_path):
    with make(tmp_path, is_16bit=True) as ee:
        bus = Bus(ee)
        bus.command("0011" + "0000")
        bus.command("01" + f"{0:06b}" + f"{0xCAFE:016b}")
    saved = (tmp_path / "cart.e2p").read_bytes()
    assert saved[:2] == bytes([0xFE, 0xCA])
    assert saved == bytes(ee.data)


def test_save_clears_changed(tmp_path):
    ee = make(tmp_path)
    ee.save()
    assert ee.changed is False
    assert (tmp_path / "cart.e2p").read_bytes() == bytes(ee.data)


def test_create_from_properties(tmp_path):
    props = ImageProperties(tmp_path / "game.lnx")
    props.set_eeprom(0x01)
    ee = EEPROM.create(props)
    assert ee.image_path.name == "game.lnx.e2p"
    assert ee.data_bits == 16
    props.set_eeprom(0x00)
    assert EEPROM.create(props) is None


def test_trace_comments(tmp_path):
    trace = TraceHelper()
    trace.enable()
    bus = Bus(make(tmp_path, trace=trace))
    bus.select()
    comment = trace.take_trace_comment()
    assert comment == "EEPROM: begin."