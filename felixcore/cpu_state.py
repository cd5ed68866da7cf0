"""Register state of the 65C02 core and its opcode table."""

from __future__ import annotations

from enum import IntEnum


class Opcode(IntEnum):
    RZP_ADC = 0x65
    RZP_AND = 0x25
    RZP_BIT = 0x24
    RZP_CMP = 0xC5
    RZP_CPX = 0xE4
    RZP_CPY = 0xC4
    RZP_EOR = 0x45
    RZP_LDA = 0xA5
    RZP_LDX = 0xA6
    RZP_LDY = 0xA4
    RZP_ORA = 0x05
    RZP_SBC = 0xE5

    WZP_STA = 0x85
    WZP_STX = 0x86
    WZP_STY = 0x84
    WZP_STZ = 0x64

    MZP_ASL = 0x06
    MZP_DEC = 0xC6
    MZP_INC = 0xE6
    MZP_LSR = 0x46
    MZP_RMB0 = 0x07
    MZP_RMB1 = 0x17
    MZP_RMB2 = 0x27
    MZP_RMB3 = 0x37
    MZP_RMB4 = 0x47
    MZP_RMB5 = 0x57
    MZP_RMB6 = 0x67
    MZP_RMB7 = 0x77
    MZP_ROL = 0x26
    MZP_ROR = 0x66
    MZP_SMB0 = 0x87
    MZP_SMB1 = 0x97
    MZP_SMB2 = 0xA7
    MZP_SMB3 = 0xB7
    MZP_SMB4 = 0xC7
    MZP_SMB5 = 0xD7
    MZP_SMB6 = 0xE7
    MZP_SMB7 = 0xF7
    MZP_TRB = 0x14
    MZP_TSB = 0x04

    RZX_ADC = 0x75
    RZX_AND = 0x35
    RZX_BIT = 0x34
    RZX_CMP = 0xD5
    RZX_EOR = 0x55
    RZX_LDA = 0xB5
    RZX_LDY = 0xB4
    RZX_ORA = 0x15
    RZX_SBC = 0xF5

    RZY_LDX = 0xB6

    WZX_STA = 0x95
    WZX_STY = 0x94
    WZX_STZ = 0x74

    WZY_STX = 0x96

    MZX_ASL = 0x16
    MZX_DEC = 0xD6
    MZX_INC = 0xF6
    MZX_LSR = 0x56
    MZX_ROL = 0x36
    MZX_ROR = 0x76

    RIN_ADC = 0x72
    RIN_AND = 0x32
    RIN_CMP = 0xD2
    RIN_EOR = 0x52
    RIN_LDA = 0xB2
    RIN_ORA = 0x12
    RIN_SBC = 0xF2

    WIN_STA = 0x92

    RIX_ADC = 0x61
    RIX_AND = 0x21
    RIX_CMP = 0xC1
    RIX_EOR = 0x41
    RIX_LDA = 0xA1
    RIX_ORA = 0x01
    RIX_SBC = 0xE1

    WIX_STA = 0x81

    RIY_ADC = 0x71
    RIY_AND = 0x31
    RIY_CMP = 0xD1
    RIY_EOR = 0x51
    RIY_LDA = 0xB1
    RIY_ORA = 0x11
    RIY_SBC = 0xF1

    WIY_STA = 0x91

    RAB_ADC = 0x6D
    RAB_AND = 0x2D
    RAB_BIT = 0x2C
    RAB_CMP = 0xCD
    RAB_CPX = 0xEC
    RAB_CPY = 0xCC
    RAB_EOR = 0x4D
    RAB_LDA = 0xAD
    RAB_LDX = 0xAE
    RAB_LDY = 0xAC
    RAB_ORA = 0x0D
    RAB_SBC = 0xED

    WAB_STA = 0x8D
    WAB_STX = 0x8E
    WAB_STY = 0x8C
    WAB_STZ = 0x9C

    MAB_ASL = 0x0E
    MAB_DEC = 0xCE
    MAB_INC = 0xEE
    MAB_LSR = 0x4E
    MAB_ROL = 0x2E
    MAB_ROR = 0x6E
    MAB_TRB = 0x1C
    MAB_TSB = 0x0C

    RAX_ADC = 0x7D
    RAX_AND = 0x3D
    RAX_BIT = 0x3C
    RAX_CMP = 0xDD
    RAX_EOR = 0x5D
    RAX_LDA = 0xBD
    RAX_LDY = 0xBC
    RAX_ORA = 0x1D
    RAX_SBC = 0xFD
    RAY_ADC = 0x79
    RAY_AND = 0x39
    RAY_CMP = 0xD9
    RAY_EOR = 0x59
    RAY_LDA = 0xB9
    RAY_LDX = 0xBE
    RAY_ORA = 0x19
    RAY_SBC = 0xF9

    WAX_STA = 0x9D
    WAX_STZ = 0x9E

    WAY_STA = 0x99

    MAX_ASL = 0x1E
    MAX_DEC = 0xDE
    MAX_INC = 0xFE
    MAX_LSR = 0x5E
    MAX_ROL = 0x3E
    MAX_ROR = 0x7E

    JMA_JMP = 0x4C
    JSA_JSR = 0x20
    JMX_JMP = 0x7C
    JMI_JMP = 0x6C

    IMP_ASL = 0x0A
    IMP_CLC = 0x18
    IMP_CLD = 0xD8
    IMP_CLI = 0x58
    IMP_CLV = 0xB8
    IMP_DEC = 0x3A
    IMP_DEX = 0xCA
    IMP_DEY = 0x88
    IMP_INC = 0x1A
    IMP_INX = 0xE8
    IMP_INY = 0xC8
    IMP_LSR = 0x4A
    IMP_NOP = 0xEA
    IMP_ROL = 0x2A
    IMP_ROR = 0x6A
    IMP_SEC = 0x38
    IMP_SED = 0xF8
    IMP_SEI = 0x78
    IMP_TAX = 0xAA
    IMP_TAY = 0xA8
    IMP_TSX = 0xBA
    IMP_TXA = 0x8A
    IMP_TXS = 0x9A
    IMP_TYA = 0x98

    IMM_ADC = 0x69
    IMM_AND = 0x29
    IMM_BIT = 0x89
    IMM_CMP = 0xC9
    IMM_CPX = 0xE0
    IMM_CPY = 0xC0
    IMM_EOR = 0x49
    IMM_LDA = 0xA9
    IMM_LDX = 0xA2
    IMM_LDY = 0xA0
    IMM_ORA = 0x09
    IMM_SBC = 0xE9

    BRL_BCC = 0x90
    BRL_BCS = 0xB0
    BRL_BEQ = 0xF0
    BRL_BMI = 0x30
    BRL_BNE = 0xD0
    BRL_BPL = 0x10
    BRL_BRA = 0x80
    BRL_BVC = 0x50
    BRL_BVS = 0x70

    BZR_BBR0 = 0x0F
    BZR_BBR1 = 0x1F
    BZR_BBR2 = 0x2F
    BZR_BBR3 = 0x3F
    BZR_BBR4 = 0x4F
    BZR_BBR5 = 0x5F
    BZR_BBR6 = 0x6F
    BZR_BBR7 = 0x7F
    BZR_BBS0 = 0x8F
    BZR_BBS1 = 0x9F
    BZR_BBS2 = 0xAF
    BZR_BBS3 = 0xBF
    BZR_BBS4 = 0xCF
    BZR_BBS5 = 0xDF
    BZR_BBS6 = 0xEF
    BZR_BBS7 = 0xFF

    BRK_BRK = 0x00
    RTI_RTI = 0x40
    RTS_RTS = 0x60

    PHR_PHA = 0x48
    PHR_PHP = 0x08
    PHR_PHX = 0xDA
    PHR_PHY = 0x5A

    PLR_PLA = 0x68
    PLR_PLP = 0x28
    PLR_PLX = 0xFA
    PLR_PLY = 0x7A

    UND_1_03 = 0x03
    UND_1_13 = 0x13
    UND_1_23 = 0x23
    UND_1_33 = 0x33
    UND_1_43 = 0x43
    UND_1_53 = 0x53
    UND_1_63 = 0x63
    UND_1_73 = 0x73
    UND_1_83 = 0x83
    UND_1_93 = 0x93
    UND_1_a3 = 0xA3
    UND_1_b3 = 0xB3
    UND_1_c3 = 0xC3
    UND_1_d3 = 0xD3
    UND_1_e3 = 0xE3
    UND_1_f3 = 0xF3

    UND_1_0b = 0x0B
    UND_1_1b = 0x1B
    UND_1_2b = 0x2B
    UND_1_3b = 0x3B
    UND_1_4b = 0x4B
    UND_1_5b = 0x5B
    UND_1_6b = 0x6B
    UND_1_7b = 0x7B
    UND_1_8b = 0x8B
    UND_1_9b = 0x9B
    UND_1_ab = 0xAB
    UND_1_bb = 0xBB
    UND_1_cb = 0xCB
    UND_1_db = 0xDB
    UND_1_eb = 0xEB
    UND_1_fb = 0xFB

    UND_2_02 = 0x02
    UND_2_22 = 0x22
    UND_2_42 = 0x42
    UND_2_62 = 0x62
    UND_2_82 = 0x82
    UND_2_C2 = 0xC2
    UND_2_E2 = 0xE2

    UND_3_44 = 0x44
    UND_4_54 = 0x54
    UND_4_d4 = 0xD4
    UND_4_f4 = 0xF4
    UND_4_dc = 0xDC
    UND_4_fc = 0xFC
    UND_8_5c = 0x5C


class _ByteOf:
    """Low or high byte view of a 16-bit register attribute."""

    def __init__(self, word: str, shift: int) -> None:
        self._word = word
        self._shift = shift

    def __get__(self, obj: object, objtype: type | None = None) -> object:
        if obj is None:
            return self
        return (getattr(obj, self._word) >> self._shift) & 0xFF

    def __set__(self, obj: object, value: int) -> None:
        mask = 0xFF << self._shift
        word = getattr(obj, self._word) & ~mask & 0xFFFF
        setattr(obj, self._word, word | ((value & 0xFF) << self._shift))


class CPUState:
    """Registers and scratch values of the CPU between cycles."""

    I_NONE = 0
    I_IRQ = 1
    I_NMI = 2
    I_RESET = 4

    pcl = _ByteOf("pc", 0)
    pch = _ByteOf("pc", 8)
    sl = _ByteOf("s", 0)
    sh = _ByteOf("s", 8)
    eal = _ByteOf("ea", 0)
    eah = _ByteOf("ea", 8)
    fal = _ByteOf("fa", 0)
    fah = _ByteOf("fa", 8)
    tl = _ByteOf("t", 0)
    th = _ByteOf("t", 8)

    def __init__(self) -> None:
        self.tick = 0
        self.interrupt = self.I_RESET
        self.op = Opcode.BRK_BRK
        self.pc = 0
        self.s = 0x1FF
        self.a = 0
        self.x = 0
        self.y = 0
        self.p = 0
        self.ea = 0
        self.fa = 0
        self.t = 0
        self.m1 = 0
        self.m2 = 0