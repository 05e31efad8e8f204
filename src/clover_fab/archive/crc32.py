"""
CRC-32 checksum (IEEE 802.3, as used by ZIP).

Reflected polynomial 0xEDB88320, register preset to 0xFFFFFFFF and
inverted on output. The per-byte table is built at import time with the
same eight shift rounds the bitwise algorithm uses.
"""

from __future__ import annotations

POLYNOMIAL = 0xEDB88320
_MASK = 0xFFFFFFFF


def _shift_rounds(value: int) -> int:
    for _ in range(8):
        value = (value >> 1) ^ POLYNOMIAL if value & 1 else value >> 1
    return value


_TABLE = tuple(_shift_rounds(n) for n in range(256))


def crc32_update(crc: int, data: bytes) -> int:
    """
    Feed bytes into a running (pre-inverted) CRC register.

    Start from 0xFFFFFFFF and invert the final register; :func:`crc32`
    does both.
    """
    table = _TABLE
    for byte in data:
        crc = (crc >> 8) ^ table[(crc ^ byte) & 0xFF]
    return crc


def crc32(data: bytes) -> int:
    """
    CRC-32 of a byte buffer.

    Example:
        >>> hex(crc32(b"123456789"))
        '0xcbf43926'
    """
    return crc32_update(_MASK, data) ^ _MASK
