import pytest

from asterix_stream.errors import BufferBoundsError
from asterix_stream.utils.byte_primitives import (
    read_fx_chain,
    read_i16,
    read_i32,
    read_u16,
    read_u24,
    read_u32,
    to_hex,
    twos_complement,
)


class TestByteReads:
    def test_unsigned_reads_are_big_endian(self):
        data = b'\x12\x34\x56\x78'
        assert read_u16(data, 0) == 0x1234
        assert read_u16(data, 2) == 0x5678
        assert read_u24(data, 1) == 0x345678
        assert read_u32(data, 0) == 0x12345678

    def test_u32_keeps_high_bit_unsigned(self):
        assert read_u32(b'\xFF\xFF\xFF\xFF', 0) == 0xFFFFFFFF

    @pytest.mark.parametrize(
        "data,expected",
        [
            (b'\x00\x01', 1),
            (b'\x7F\xFF', 32767),
            (b'\x80\x00', -32768),
            (b'\xFF\xFE', -2),
        ]
    )
    def test_read_i16(self, data, expected):
        assert read_i16(data, 0) == expected

    def test_read_i32(self):
        assert read_i32(b'\xFF\xFF\xFF\xFF', 0) == -1
        assert read_i32(b'\x80\x00\x00\x00', 0) == -2 ** 31

    @pytest.mark.parametrize(
        "value,bits,expected",
        [
            (0x7FFFFF, 24, 0x7FFFFF),
            (0x800000, 24, -8388608),
            (0xFF, 8, -1),
            (0x40, 8, 64),
        ]
    )
    def test_twos_complement(self, value, bits, expected):
        assert twos_complement(value, bits) == expected

    @pytest.mark.parametrize("reader,offset", [(read_u16, 3), (read_u24, 2), (read_u32, 1), (read_i16, 4)])
    def test_read_past_end_raises_bounds_error(self, reader, offset):
        with pytest.raises(BufferBoundsError):
            reader(b'\x00\x01\x02\x03', offset)

    def test_bounds_error_is_an_index_error(self):
        with pytest.raises(IndexError):
            read_u16(b'\x00', 0)


class TestHexAndChains:
    def test_to_hex_is_lowercase(self):
        assert to_hex(b'\xDE\xAD\xBE\xEF', 1, 2) == "adbe"

    def test_to_hex_to_end_and_empty(self):
        assert to_hex(b'\x01\x02\x03', 1) == "0203"
        assert to_hex(b'\x01\x02\x03', 3, 0) == ""

    def test_to_hex_out_of_range(self):
        with pytest.raises(BufferBoundsError):
            to_hex(b'\x01\x02', 1, 4)

    def test_fx_chain_stops_on_cleared_fx(self):
        assert read_fx_chain(b'\x81\x03\x02\xFF', 0) == b'\x81\x03\x02'

    def test_fx_chain_single_octet(self):
        assert read_fx_chain(b'\x38\x01', 0) == b'\x38'

    def test_fx_chain_running_off_buffer(self):
        with pytest.raises(BufferBoundsError):
            read_fx_chain(b'\x01\x01', 0)
