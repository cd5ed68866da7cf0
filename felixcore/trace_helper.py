"""Symbolic names of hardware addresses and a bounded trace-comment buffer."""

from __future__ import annotations

_SUZY_WORD_REGS = (
    "TMPADR", "TILTACUM", "HOFF", "VOFF", "VIDBAS", "COLLBAS", "VIDADR",
    "COLLADR", "SCBNEXT", "SPRDLINE", "HPOSSTRT", "VPOSSTRT", "SPRHSIZ",
    "SPRVSIZ", "STRETCH", "TILT", "SPRDOFF", "SCVPOS", "COLLOFF", "VSIZACUM",
    "HSIZOFF", "VSIZOFF", "SCBADR", "PROCADR",
)

_TIMERS = ("HCOUNT", "TIMER1", "VCOUNT", "TIMER3", "SERIALRATE", "TIMER5", "TIMER6", "TIMER7")
_TIMER_REGS = ("BACKUP", "CONTROLA", "COUNT", "CONTROLB")
# The fourth channel carries the third one's names at these addresses.
_AUDIO_CHANNELS = ("AUDIO0", "AUDIO1", "AUDIO2", "AUDIO2")
_AUDIO_REGS = ("VOLCNTRL", "FEEDBACK", "OUTPUT", "SHIFT", "BACKUP", "CONTROL", "COUNTER", "OTHER")

_SINGLE_NAMES = {
    0xFC52: "MATHD", 0xFC53: "MATHC", 0xFC54: "MATHB", 0xFC55: "MATHA",
    0xFC56: "MATHP", 0xFC57: "MATHN",
    0xFC60: "MATHH", 0xFC61: "MATHG", 0xFC62: "MATHF", 0xFC63: "MATHE",
    0xFC6C: "MATHM", 0xFC6D: "MATHL", 0xFC6E: "MATHK", 0xFC6F: "MATHJ",
    0xFC80: "SPRCTL0", 0xFC81: "SPRCTL1", 0xFC82: "SPRCOLL", 0xFC83: "SPRINIT",
    0xFC88: "SUZYHREV", 0xFC89: "SUZYSREV", 0xFC90: "SUZYBUSEN", 0xFC91: "SPRGO",
    0xFC92: "SPRSYS", 0xFCB0: "JOYSTICK", 0xFCB1: "SWITCHES", 0xFCB2: "RCART0",
    0xFCB3: "RCART1", 0xFCC0: "LEDS", 0xFCC2: "IOSTATUS", 0xFCC3: "IODATA",
    0xFCC4: "HOWIE",
    0xFD40: "ATTENREG0", 0xFD41: "ATTENREG1", 0xFD42: "ATTENREG2", 0xFD43: "ATTENREG3",
    0xFD44: "MPAN", 0xFD50: "STEREO", 0xFD80: "INTRST", 0xFD81: "INTSET",
    0xFD86: "AUDIN", 0xFD87: "SYSCTL1", 0xFD88: "MIKEYHREV", 0xFD89: "MIKEYSREV",
    0xFD8A: "IODIR", 0xFD8B: "IODAT", 0xFD8C: "SERCTL", 0xFD8D: "SERDAT",
    0xFD90: "SDONEACK", 0xFD91: "CPUSLEEP", 0xFD92: "DISPCTL", 0xFD93: "PBKUP",
    0xFD94: "DISPADR", 0xFD95: "DISPADR+1", 0xFD9C: "MTEST0", 0xFD9D: "MTEST1",
    0xFD9E: "MTEST2",
    0xFFF9: "MAPCTL", 0xFFFA: "CPU_NMI", 0xFFFB: "CPU_NMI+1", 0xFFFC: "CPU_RESET",
    0xFFFD: "CPU_RESET+1", 0xFFFE: "CPU_IRQ", 0xFFFF: "CPU_IRQ+1",
}


def _build_names() -> dict[int, str]:
    names: dict[int, str] = {}
    for index, name in enumerate(_SUZY_WORD_REGS):
        names[0xFC00 + 2 * index] = name
        names[0xFC01 + 2 * index] = name + "+1"
    for t, timer in enumerate(_TIMERS):
        for r, reg in enumerate(_TIMER_REGS):
            names[0xFD00 + 4 * t + r] = f"{timer}_{reg}"
    for c, channel in enumerate(_AUDIO_CHANNELS):
        for r, reg in enumerate(_AUDIO_REGS):
            names[0xFD20 + 8 * c + r] = f"{channel}_{reg}"
    for i in range(16):
        names[0xFDA0 + i] = f"GREEN{i:X}"
        names[0xFDB0 + i] = f"BLUERED{i:x}"
    names.update(_SINGLE_NAMES)
    return names


_NAMES = _build_names()

COMMENT_CAPACITY = 1024


def address_name(address: int) -> str:
    """Return the register name of ``address`` or its hexadecimal form."""
    address &= 0xFFFF
    name = _NAMES.get(address)
    if name is not None:
        return name
    if address < 256:
        return f"${address:02x}"
    return f"${address:04x}"


class TraceHelper:
    """Collects trace comments while enabled and labels addresses."""

    def __init__(self) -> None:
        self._labels: tuple[str, ...] = ()
        self._comment = ""
        self.enabled = False

    def address_label(self, address: int) -> str:
        address &= 0xFFFF
        if self._labels:
            return self._labels[address]
        return address_name(address)

    def enable(self) -> None:
        self.enabled = True
        if not self._labels:
            self._labels = tuple(address_name(a) for a in range(0x10000))

    def disable(self) -> None:
        self.enabled = False

    def comment(self, fmt: str, *args: object) -> None:
        """Append a formatted comment, space separated, up to the buffer capacity."""
        if not self.enabled or len(self._comment) >= COMMENT_CAPACITY:
            return
        text = self._comment
        if text:
            text += " "
        formatted = fmt.format(*args)
        text += formatted[: max(0, COMMENT_CAPACITY - len(text))]
        self._comment = text

    def take_trace_comment(self) -> str | None:
        """Return the collected comment and clear it, or None if there is none."""
        if not self._comment:
            return None
        result, self._comment = self._comment, ""
        return result