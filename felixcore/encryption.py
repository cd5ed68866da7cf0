"""Decryption of the RSA-signed loader blocks of encrypted cartridge images."""

from __future__ import annotations

LYNX_PUBLIC_MODULUS = int(
    "35b5a3942806d8a22695d771b23cfd561c4a19b6a3b02600365a306e"
    "3c4d63381bd41c136489364cf2ba2a58f4fee1fdac7e79",
    16,
)
LYNX_PUBLIC_EXPONENT = 3
BLOCK_SIZE = 51
SANITY_BYTE = 0x15


class DecryptionError(ValueError):
    """Raised when decrypted data fails its sanity checks."""


def decrypt_block(encrypted: bytes, accumulator: int) -> tuple[bytes, int, int]:
    """Decrypt one block.

    Returns the plain bytes, the updated running accumulator and the
    block's last (most significant) byte used as a sanity value.
    """
    value = int.from_bytes(bytes(encrypted), "little")
    decrypted = pow(value, LYNX_PUBLIC_EXPONENT, LYNX_PUBLIC_MODULUS)
    length = max(1, (decrypted.bit_length() + 7) // 8)
    raw = decrypted.to_bytes(length, "little")

    plain = bytearray()
    for byte in raw[:-1]:
        accumulator += byte
        plain.append(accumulator & 0xFF)
    return bytes(plain), accumulator, raw[-1]


def decrypt(blockcount: int, encrypted: bytes) -> bytes:
    """Decrypt ``blockcount`` consecutive blocks, checking both sanity values."""
    encrypted = bytes(encrypted)
    result = bytearray()
    accumulator = 0
    for index in range(blockcount):
        block = encrypted[BLOCK_SIZE * index : BLOCK_SIZE * (index + 1)]
        plain, accumulator, check = decrypt_block(block, accumulator)
        if check != SANITY_BYTE:
            raise DecryptionError(
                f"Sanity check #1 value for block {index} is 0x{check:x} != 0x15"
            )
        result += plain
    if accumulator & 0xFF:
        raise DecryptionError(
            f"Sanity check #2 final accumulator value 0x{accumulator & 0xFF:x} != 0x00"
        )
    return bytes(result)