from typing import Dict, Sequence

from asterix_stream.decoders.asterix_decoder_base import ItemDecoderSet
from asterix_stream.decoders.item_decoder_table import ItemDecoder, fx_chain_raw_decoder
from asterix_stream.models.item import DecodedItem
from asterix_stream.types.enums import (
    CAT034Item,
    Category,
    DATA_FILTER_LABELS,
    MESSAGE_TYPE_LABELS,
)
from asterix_stream.utils.byte_primitives import read_i16, read_u16, read_u24, twos_complement


class Cat034ItemDecoders(ItemDecoderSet):
    """Radar service messages: north marker, sector crossing, sensor status."""

    category = Category.CAT034

    def _build_decoder_map(self) -> Dict[str, ItemDecoder]:
        decoder_map = {
            CAT034Item.DATA_SOURCE_IDENTIFIER: self._decode_data_source,
            CAT034Item.MESSAGE_TYPE: self._decode_message_type,
            CAT034Item.TIME_OF_DAY: self._decode_time_of_day,
            CAT034Item.SECTOR_NUMBER: self._decode_sector_number,
            CAT034Item.ANTENNA_ROTATION_PERIOD: self._decode_antenna_rotation_period,
            CAT034Item.GENERIC_POLAR_WINDOW: self._decode_generic_polar_window,
            CAT034Item.DATA_FILTER: self._decode_data_filter,
            CAT034Item.POSITION_3D_DATA_SOURCE: self._decode_3d_position,
            CAT034Item.COLLIMATION_ERROR: self._decode_collimation_error,
        }
        for item_id in (
            CAT034Item.SYSTEM_CONFIGURATION_STATUS,
            CAT034Item.SYSTEM_PROCESSING_MODE,
            CAT034Item.MESSAGE_COUNT_VALUES,
        ):
            decoder_map[item_id] = fx_chain_raw_decoder(item_id)
        return decoder_map

    def _decode_data_source(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/010 - Data Source Identifier (2 bytes)"""
        self._require(data, pos, 2, CAT034Item.DATA_SOURCE_IDENTIFIER)
        return DecodedItem(value={"sac": data[pos], "sic": data[pos + 1]}, length=2)

    def _decode_message_type(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/000 - Message Type (1 byte)"""
        self._require(data, pos, 1, CAT034Item.MESSAGE_TYPE)

        message_type = data[pos]
        return DecodedItem(
            value={"type": message_type, "label": MESSAGE_TYPE_LABELS.get(message_type, "Unknown")},
            length=1,
        )

    def _decode_time_of_day(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/030 - Time of Day (3 bytes), 1/128 s since midnight"""
        self._require(data, pos, 3, CAT034Item.TIME_OF_DAY)

        raw = read_u24(data, pos)
        return DecodedItem(value={"raw": raw, "seconds": raw * self.scaling.time_lsb_s}, length=3)

    def _decode_sector_number(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/020 - Sector Number (1 byte), LSB = 360/2^8 degrees"""
        self._require(data, pos, 1, CAT034Item.SECTOR_NUMBER)

        raw = data[pos]
        return DecodedItem(value={"raw": raw, "sector_deg": raw * self.scaling.sector_lsb_deg}, length=1)

    def _decode_antenna_rotation_period(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/041 - Antenna Rotation Period (2 bytes), LSB = 1/128 s"""
        self._require(data, pos, 2, CAT034Item.ANTENNA_ROTATION_PERIOD)

        raw = read_u16(data, pos)
        seconds = raw * self.scaling.time_lsb_s

        # A stopped antenna reports 0: no rotation speed
        rpm = 60.0 / seconds if seconds > 0 else None

        return DecodedItem(value={"raw": raw, "seconds": seconds, "rpm": rpm}, length=2)

    def _decode_generic_polar_window(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/100 - Generic Polar Window (8 bytes)
        RHO start, RHO end (1/256 NM), THETA start, THETA end (360/2^16 degrees).
        """
        self._require(data, pos, 8, CAT034Item.GENERIC_POLAR_WINDOW)

        rho_start = read_u16(data, pos)
        rho_end = read_u16(data, pos + 2)
        theta_start = read_u16(data, pos + 4)
        theta_end = read_u16(data, pos + 6)

        return DecodedItem(
            value={
                "rho_start_nm": rho_start * self.scaling.range_lsb_nm,
                "rho_end_nm": rho_end * self.scaling.range_lsb_nm,
                "theta_start_deg": theta_start * self.scaling.angle_lsb_deg,
                "theta_end_deg": theta_end * self.scaling.angle_lsb_deg,
            },
            length=8,
        )

    def _decode_data_filter(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/110 - Data Filter (1 byte)"""
        self._require(data, pos, 1, CAT034Item.DATA_FILTER)

        raw = data[pos]
        return DecodedItem(
            value={"raw": raw, "label": DATA_FILTER_LABELS.get(raw, "Unknown/Reserved")},
            length=1,
        )

    def _decode_3d_position(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/120 - 3D-Position of Data Source (8 bytes)
        Height: 2 bytes signed, meters (WGS-84).
        Latitude / longitude: 3 bytes signed each, LSB = 180/2^23 degrees.
        """
        self._require(data, pos, 8, CAT034Item.POSITION_3D_DATA_SOURCE)

        height = read_i16(data, pos)
        lat_raw = twos_complement(read_u24(data, pos + 2), 24)
        lon_raw = twos_complement(read_u24(data, pos + 5), 24)

        return DecodedItem(
            value={
                "height_m": height,
                "lat_deg": lat_raw * self.scaling.latlon_lsb_deg,
                "lon_deg": lon_raw * self.scaling.latlon_lsb_deg,
            },
            length=8,
        )

    def _decode_collimation_error(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I034/090 - Collimation Error (2 bytes)"""
        self._require(data, pos, 2, CAT034Item.COLLIMATION_ERROR)

        # Each octet is an 8-bit two's complement value
        range_error = twos_complement(data[pos], 8)
        azimuth_error = twos_complement(data[pos + 1], 8)

        return DecodedItem(
            value={
                "range_error_raw": range_error,
                "azimuth_error_raw": azimuth_error,
                "range_error_nm": range_error * self.scaling.collimation_range_lsb_nm,
                "azimuth_error_deg": azimuth_error * self.scaling.collimation_azimuth_lsb_deg,
            },
            length=2,
        )
