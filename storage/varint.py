"""Variable-length integer codec.

A varint is 1 to 9 bytes, big-endian. Bytes 1-8 carry 7 bits each and set the
high bit when another byte follows. A 9th byte, when present, carries all 8
bits, which lets 9 bytes hold a full 64-bit value.
"""

from exceptions import TruncatedInput

MAX_VARINT_SIZE = 9
MAX_VARINT_VALUE = (1 << 64) - 1


def _byte_at(buffer: bytes, pos: int, start: int) -> int:
    if pos >= len(buffer):
        raise TruncatedInput("Varint runs past end of buffer", start)
    return buffer[pos]


def decode(buffer: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode the varint starting at ``offset``.

    Returns ``(value, bytes_consumed)``.
    """
    value = 0
    for i in range(MAX_VARINT_SIZE - 1):
        byte = _byte_at(buffer, offset + i, offset)
        value = (value << 7) | (byte & 0x7F)
        if byte & 0x80 == 0:
            return value, i + 1

    # 9th byte carries all 8 bits
    return (value << 8) | _byte_at(buffer, offset + MAX_VARINT_SIZE - 1, offset), MAX_VARINT_SIZE


def encode(value: int) -> bytes:
    """Encode an unsigned 64-bit value in its shortest varint form."""
    if value < 0 or value > MAX_VARINT_VALUE:
        raise ValueError(f"Varint value out of range: {value}")

    # Values above 56 bits need the full-width 9th byte
    if value >= 1 << 56:
        out = bytearray([value & 0xFF])
        value >>= 8
        for _ in range(8):
            out.append((value & 0x7F) | 0x80)
            value >>= 7
        return bytes(reversed(out))

    out = bytearray([value & 0x7F])
    value >>= 7
    while value:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(out))


def size(value: int) -> int:
    """Number of bytes ``encode(value)`` produces."""
    return len(encode(value))
