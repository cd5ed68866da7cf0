# felixcore

Building blocks for an emulator of a handheld console built around a 65C02
CPU and two custom chips. The package is pure Python and has no runtime
dependencies.

## Modules

- `felixcore.input_file`: `InputFile` reads a file and recognises it as a
  cartridge (`FileType.CART`) or a BS93 program (`FileType.BS93`); its
  `image_properties` attribute holds the properties to use afterwards.
- `felixcore.image_cart`: `ImageCart.from_bytes` recognises LNX images (with
  `LnxHeader`) and encrypted LYX dumps and splits them into four
  `CartImageBank`s; `populate` fills an `ImageProperties`.
- `felixcore.image_bs93`: `ImageBS93.from_bytes` and `load` into a memory
  `bytearray`.
- `felixcore.image_rom`: `ImageROM.from_file` checks and loads the 512-byte
  boot ROM.
- `felixcore.encryption`: `decrypt` and `decrypt_block` for the loader blocks;
  failed sanity checks raise `DecryptionError`.
- `felixcore.image_properties`: `ImageProperties`, `Rotation`, `EEPROMSpec`,
  `BankProps`.
- `felixcore.eeprom`: `EEPROM`, a bit-serial 93C46 to 93C86 chip backed by an
  image file; `EEPROM.create` uses `<image>.e2p`, and changes are written by
  `save()` or on leaving a `with` block.
- `felixcore.game_drive`: `GameDrive`, an SD-card cartridge that serves files
  next to the image through a byte command protocol (`CommandByte`,
  `FResult`).
- `felixcore.timer_core`: `TimerCore`, a timer with backup, reload and
  linking; writes return the next `TimerAction` or None.
- `felixcore.suzy_math`: `SuzyMath`, the multiply/divide unit with signed and
  accumulating modes.
- `felixcore.shifter`, `felixcore.sprite_line_parser`,
  `felixcore.sprite_templates`, `felixcore.vid_operator`: the bit queue,
  literal and run-length sprite line decoding, per-sprite-type drawing rules
  (`SpriteType`, `sprite_traits`) and merging of pixels into video memory
  operations (`VidOperator`, `MemOp`).
- `felixcore.script_debugger`: `ScriptDebugger` with `MemoryAccessTrap`s on
  RAM, ROM, chip registers and MAPCTL; traps on the same slot are chained with
  `CompositeTrap`; `ScriptDebuggerEscapes` records traps to install later.
- `felixcore.symbol_source`: `SymbolSource` looks up bank-0 labels of an
  assembler label file, case-insensitively.
- `felixcore.cpu_state`: `CPUState` registers and the `Opcode` table.
- `felixcore.comlynx_wire`: `ComLynxWire`, the shared serial line.
- `felixcore.key_input`: `Key` and `KeyInput`, the packed joystick and switch
  state.
- `felixcore.trace_helper`, `felixcore.log`: address names, trace comments and
  leveled logging.
- `felixcore.utility`: `AudioSample` and `read_file`.

## What it does not do

These are parts, not a running emulator. There is no CPU core that executes
instructions, no emulation of the display, audio or serial chips as a whole,
no sprite engine driving the decoding parts, no screen or sound output, and no
command to start anything.

## Installing

```
pip install .
```

## Examples

```python
from felixcore.input_file import InputFile, FileType

image = InputFile("game.lnx", None)
if image.valid and image.type is FileType.CART:
    print(image.image_properties.cartridge_name)
```

```python
from felixcore.shifter import Shifter

shifter = Shifter()
shifter.push(0b10110000)
print(shifter.pull(3))  # 5
```

```python
from felixcore.suzy_math import SuzyMath

math = SuzyMath()
math.wpoke(0, 0x54, 3)   # AB
math.wpoke(0, 0x52, 4)   # CD
math.mul(0)
print(math.peek(100, 0x60))  # 12, low byte of EFGH
```

## Running the tests

```
pip install .[test]
pytest
```