from typing import Optional, Sequence

from asterix_stream.errors import BufferBoundsError

# All ASTERIX fields use network byte order (big-endian)


def _check_span(data: Sequence[int], offset: int, size: int) -> None:
    if offset < 0 or offset + size > len(data):
        raise BufferBoundsError(offset, size, len(data))


def read_u8(data: Sequence[int], offset: int) -> int:
    _check_span(data, offset, 1)
    return data[offset]


def read_u16(data: Sequence[int], offset: int) -> int:
    _check_span(data, offset, 2)
    return (data[offset] << 8) | data[offset + 1]


def read_u24(data: Sequence[int], offset: int) -> int:
    _check_span(data, offset, 3)
    return (data[offset] << 16) | (data[offset + 1] << 8) | data[offset + 2]


def read_u32(data: Sequence[int], offset: int) -> int:
    _check_span(data, offset, 4)
    return int.from_bytes(bytes(data[offset:offset + 4]), byteorder='big')


def read_i16(data: Sequence[int], offset: int) -> int:
    return twos_complement(read_u16(data, offset), 16)


def read_i32(data: Sequence[int], offset: int) -> int:
    return twos_complement(read_u32(data, offset), 32)


def twos_complement(value: int, bits: int) -> int:
    """Interpret the unsigned N-bit field `value` as a signed integer."""
    sign = 1 << (bits - 1)
    if value & sign:
        return value - (1 << bits)
    return value


def to_hex(data: Sequence[int], offset: int = 0, length: Optional[int] = None) -> str:
    """Lowercase hex of data[offset:offset + length] (to the end when length is None)."""
    if length is None:
        length = len(data) - offset
    if length <= 0:
        return ""
    _check_span(data, offset, length)
    return bytes(data[offset:offset + length]).hex()


def read_fx_chain(data: Sequence[int], offset: int) -> bytes:
    """
    Read octets until one has its FX bit (LSB) cleared.

    Used by FSPEC-style extensible items: every octet with bit 1 set
    announces that another octet follows.
    """
    octets = bytearray()
    position = offset
    while True:
        if position >= len(data):
            raise BufferBoundsError(position, 1, len(data))
        byte = data[position]
        octets.append(byte)
        position += 1
        if not (byte & 0x01):  # FX bit is 0
            break
    return bytes(octets)
