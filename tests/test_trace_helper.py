import pytest

from felixcore.trace_helper import COMMENT_CAPACITY, TraceHelper, address_name


@pytest.mark.parametrize(
    "address, name",
    [
        (0xFC00, "TMPADR"),
        (0xFC2F, "PROCADR+1"),
        (0xFC55, "MATHA"),
        (0xFD00, "HCOUNT_BACKUP"),
        (0xFD13, "SERIALRATE_CONTROLB"),
        (0xFD38, "AUDIO2_VOLCNTRL"),
        (0xFDAA, "GREENA"),
        (0xFDBA, "BLUEREDa"),
        (0xFFF9, "MAPCTL"),
        (0xFFFF, "CPU_IRQ+1"),
    ],
)
def test_address_name_known_registers(address, name):
    assert address_name(address) == name


def test_address_name_fallback_formats():
    assert address_name(0x12) == "$12"
    assert address_name(0x1234) == "$1234"


def test_address_label_matches_name_before_and_after_enable():
    helper = TraceHelper()
    before = [helper.address_label(a) for a in (0x00, 0xFC92, 0xABCD)]
    helper.enable()
    after = [helper.address_label(a) for a in (0x00, 0xFC92, 0xABCD)]
    assert before == after == [address_name(a) for a in (0x00, 0xFC92, 0xABCD)]


def test_comment_ignored_when_disabled():
    helper = TraceHelper()
    helper.comment("EEPROM: begin.")
    assert helper.take_trace_comment() is None


def test_comments_joined_and_cleared():
    helper = TraceHelper()
    helper.enable()
    helper.comment("EEPROM: begin.")
    helper.comment("EEPROM: fetch opcode bit {}={}.", 3, 1)
    assert helper.take_trace_comment() == "EEPROM: begin. EEPROM: fetch opcode bit 3=1."
    assert helper.take_trace_comment() is None


def test_comment_hex_format():
    helper = TraceHelper()
    helper.enable()
    helper.comment("${:x}", 255)
    assert helper.take_trace_comment() == "$ff"


def test_disable_stops_collecting():
    helper = TraceHelper()
    helper.enable()
    helper.comment("a")
    helper.disable()
    helper.comment("b")
    assert helper.take_trace_comment() == "a"


def test_comment_capacity_is_bounded():
    helper = TraceHelper()
    helper.enable()
    for _ in range(100):
        helper.comment("x" * 50)
    text = helper.take_trace_comment()
    assert len(text) == COMMENT_CAPACITY