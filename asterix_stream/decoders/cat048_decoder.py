from typing import Dict, Sequence

from asterix_stream.decoders.asterix_decoder_base import ItemDecoderSet
from asterix_stream.decoders.item_decoder_table import ItemDecoder, fx_chain_raw_decoder
from asterix_stream.errors import BufferBoundsError, ItemTruncatedError
from asterix_stream.models.item import DecodedItem
from asterix_stream.types.enums import CAT048Item, Category
from asterix_stream.utils.byte_primitives import (
    read_fx_chain,
    read_i16,
    read_u16,
    read_u24,
    to_hex,
)

# Items without a semantic decoder (compound, repetitive or edition specific
# layouts) are kept as the raw FX-chained octets
RAW_ITEMS = (
    CAT048Item.RADAR_PLOT_CHARACTERISTICS,
    CAT048Item.MODE_S_MB_DATA,
    CAT048Item.TRACK_STATUS,
    CAT048Item.WARNING_ERROR_CONDITIONS,
    CAT048Item.MODE_3A_CONFIDENCE,
    CAT048Item.MODE_C_CODE_CONFIDENCE,
    CAT048Item.HEIGHT_3D_RADAR,
    CAT048Item.RADIAL_DOPPLER_SPEED,
    CAT048Item.COMMUNICATIONS_ACAS,
    CAT048Item.ACAS_RESOLUTION_ADVISORY,
    CAT048Item.MODE_1_CODE,
    CAT048Item.MODE_2_CODE,
    CAT048Item.MODE_1_CONFIDENCE,
    CAT048Item.MODE_2_CONFIDENCE,
    CAT048Item.MODE_3A_CODE_CONFIDENCE,
    CAT048Item.MODE_S_ALTITUDE,
)


class Cat048ItemDecoders(ItemDecoderSet):
    category = Category.CAT048

    def _build_decoder_map(self) -> Dict[str, ItemDecoder]:
        # Map UAP item identifiers to decoding methods
        decoder_map = {
            CAT048Item.DATA_SOURCE_IDENTIFIER: self._decode_data_source,
            CAT048Item.TARGET_REPORT_DESCRIPTOR: self._decode_target_report_descriptor,
            CAT048Item.MEASURED_POSITION_POLAR: self._decode_measured_position_polar,
            CAT048Item.MODE_3A_CODE: self._decode_mode_3a_code,
            CAT048Item.FLIGHT_LEVEL: self._decode_flight_level,
            CAT048Item.TRACK_VELOCITY_POLAR: self._decode_track_velocity_polar,
            CAT048Item.AIRCRAFT_ADDRESS: self._decode_aircraft_address,
            CAT048Item.TRACK_NUMBER: self._decode_track_number,
            CAT048Item.MEASURED_POSITION_CARTESIAN: self._decode_measured_position_cartesian,
            CAT048Item.TRACK_VELOCITY_CARTESIAN: self._decode_track_velocity_cartesian,
            CAT048Item.TIME_OF_DAY: self._decode_time_of_day,
        }
        for item_id in RAW_ITEMS:
            decoder_map[item_id] = fx_chain_raw_decoder(item_id)
        return decoder_map

    def _decode_data_source(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/010 - Data Source Identifier (2 bytes)"""
        self._require(data, pos, 2, CAT048Item.DATA_SOURCE_IDENTIFIER)

        sac = data[pos]  # System Area Code
        sic = data[pos + 1]  # System Identification Code
        return DecodedItem(value={"sac": sac, "sic": sic}, length=2)

    def _decode_target_report_descriptor(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/020 - Target Report Descriptor (Variable length)"""
        # Variable length item - read until FX bit is 0
        try:
            octets = read_fx_chain(data, pos)
        except BufferBoundsError as exc:
            raise ItemTruncatedError(CAT048Item.TARGET_REPORT_DESCRIPTOR) from exc

        # Only the first octet is decoded; extensions stay in "raw"
        first_octet = octets[0]

        return DecodedItem(
            value={
                "raw": octets.hex(),
                "detectionType": (first_octet >> 5) & 0x07,  # bits 8-6
                "simulated": bool((first_octet >> 4) & 0x01),  # bit 5
                "reportedAsBad": bool((first_octet >> 3) & 0x01),  # bit 4
                "testTarget": bool((first_octet >> 2) & 0x01),  # bit 3
                "meaconing": bool((first_octet >> 1) & 0x01),  # bit 2
            },
            length=len(octets),
        )

    def _decode_measured_position_polar(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/040 - Measured Position in Polar Coordinates (4 bytes)"""
        self._require(data, pos, 4, CAT048Item.MEASURED_POSITION_POLAR)

        rho = read_u16(data, pos)
        theta = read_u16(data, pos + 2)

        return DecodedItem(
            value={
                "rho_raw": rho,
                "theta_raw": theta,
                "range_nm": rho * self.scaling.range_lsb_nm,
                "bearing_deg": theta * self.scaling.angle_lsb_deg,
            },
            length=4,
        )

    def _decode_mode_3a_code(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/070 - Mode-3/A Code in Octal Representation (2 bytes)"""
        self._require(data, pos, 2, CAT048Item.MODE_3A_CODE)

        # V, G, L flags are dropped; 13 low bits kept
        code = read_u16(data, pos) & 0x1FFF

        # Bits 12-1: A4 A2 A1 B4 B2 B1 C4 C2 C1 D4 D2 D1
        a = (code >> 9) & 0x07
        b = (code >> 6) & 0x07
        c = (code >> 3) & 0x07
        d = code & 0x07

        return DecodedItem(value={"code_octal": f"{a}{b}{c}{d}", "raw": code}, length=2)

    def _decode_flight_level(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/090 - Flight Level in Binary Representation (2 bytes, signed)"""
        self._require(data, pos, 2, CAT048Item.FLIGHT_LEVEL)

        raw = read_i16(data, pos)
        return DecodedItem(
            value={"raw": raw, "flightLevel": raw * self.scaling.flight_level_lsb},
            length=2,
        )

    def _decode_track_velocity_polar(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/220 - Calculated Track Velocity in Polar Representation (4 bytes)"""
        self._require(data, pos, 4, CAT048Item.TRACK_VELOCITY_POLAR)

        gs_raw = read_u16(data, pos)
        heading_raw = read_u16(data, pos + 2)

        # Ground speed LSB = 2^-14 NM/s
        nm_per_s = gs_raw * self.scaling.speed_lsb_nm_s

        return DecodedItem(
            value={
                "gs_raw": gs_raw,
                "heading_raw": heading_raw,
                "mps": nm_per_s * self.scaling.NM_TO_METERS,
                "kts": nm_per_s * self.scaling.NM_S_TO_KNOTS,
                "heading_deg": heading_raw * self.scaling.angle_lsb_deg,
            },
            length=4,
        )

    def _decode_aircraft_address(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/240 - Aircraft Address (3 bytes), 24-bit ICAO address"""
        self._require(data, pos, 3, CAT048Item.AIRCRAFT_ADDRESS)
        return DecodedItem(value={"icao24": to_hex(data, pos, 3).upper()}, length=3)

    def _decode_track_number(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/161 - Track Number (2 bytes)"""
        self._require(data, pos, 2, CAT048Item.TRACK_NUMBER)
        return DecodedItem(value=read_u16(data, pos), length=2)

    def _decode_measured_position_cartesian(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/042 - Position in Cartesian Coordinates (4 bytes, signed)"""
        self._require(data, pos, 4, CAT048Item.MEASURED_POSITION_CARTESIAN)

        x = read_i16(data, pos)
        y = read_i16(data, pos + 2)
        lsb = self.scaling.cartesian_position_lsb_nm

        return DecodedItem(
            value={"x_raw": x, "y_raw": y, "x_nm": x * lsb, "y_nm": y * lsb},
            length=4,
        )

    def _decode_track_velocity_cartesian(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/200 - Calculated Track Velocity in Cartesian Coordinates (4 bytes, signed)"""
        self._require(data, pos, 4, CAT048Item.TRACK_VELOCITY_CARTESIAN)

        vx = read_i16(data, pos)
        vy = read_i16(data, pos + 2)

        # Edition dependent: 2^-14 NM/s assumed, see ScalingConfig
        vx_nm_s = vx * self.scaling.cartesian_velocity_lsb_nm_s
        vy_nm_s = vy * self.scaling.cartesian_velocity_lsb_nm_s

        return DecodedItem(
            value={
                "vx_raw": vx,
                "vy_raw": vy,
                "vx_mps": vx_nm_s * self.scaling.NM_TO_METERS,
                "vy_mps": vy_nm_s * self.scaling.NM_TO_METERS,
                "vx_kts": vx_nm_s * self.scaling.NM_S_TO_KNOTS,
                "vy_kts": vy_nm_s * self.scaling.NM_S_TO_KNOTS,
            },
            length=4,
        )

    def _decode_time_of_day(self, data: Sequence[int], pos: int) -> DecodedItem:
        """I048/140 - Time of Day (3 bytes)
        Number of 1/128 s elapsed since last midnight.
        """
        self._require(data, pos, 3, CAT048Item.TIME_OF_DAY)

        raw = read_u24(data, pos)
        return DecodedItem(value={"raw": raw, "seconds": raw * self.scaling.time_lsb_s}, length=3)
