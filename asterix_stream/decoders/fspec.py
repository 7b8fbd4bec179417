from dataclasses import dataclass
from typing import Sequence, Tuple

from asterix_stream.errors import TruncatedFSPEC


@dataclass(frozen=True)
class Fspec:
    """Field Specification of one record."""
    raw: bytes
    end_offset: int  # First byte of the data items
    bits: Tuple[bool, ...]  # Bits 7..1 of every octet, FX excluded

    @property
    def hex(self) -> str:
        return self.raw.hex()

    def frns(self) -> Tuple[int, ...]:
        """Field Reference Numbers (1-based) of the bits that are set."""
        return tuple(index + 1 for index, present in enumerate(self.bits) if present)


def parse_fspec(data: Sequence[int], offset: int) -> Fspec:
    """
    Parse Field Specification starting at `offset`.
    Octets are read until one has FX (bit 1) = 0.
    """
    raw = bytearray()
    position = offset

    while True:
        if position >= len(data):
            raise TruncatedFSPEC(position)
        byte = data[position]
        raw.append(byte)
        position += 1

        # Check FX bit - if 0, this is the last FSPEC byte
        if not (byte & 0x01):
            break

    # Extract field indicators (bits 7-1, bit 0 is FX)
    bits = tuple(
        bool(byte & (1 << bit))
        for byte in raw
        for bit in range(7, 0, -1)
    )
    return Fspec(raw=bytes(raw), end_offset=position, bits=bits)
