from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from asterix_stream.decoders.category_registry import CategoryRegistry
    from asterix_stream.decoders.item_decoder_table import ItemDecoderTable


@dataclass(frozen=True)
class ScalingConfig:
    """
    LSB values applied by the item decoders.

    Defaults follow the commonly deployed CAT048/CAT034 editions. Some of
    them (velocity LSBs in particular) differ between editions, so a feed
    with another edition can override them here instead of patching decoders.
    """
    range_lsb_nm: float = 1.0 / 256.0  # RHO, 1/256 NM
    angle_lsb_deg: float = 360.0 / 65536.0  # THETA / heading, 360/2^16
    speed_lsb_nm_s: float = 1.0 / 16384.0  # I048/220 ground speed, 2^-14 NM/s
    cartesian_velocity_lsb_nm_s: float = 1.0 / 16384.0  # I048/200 Vx/Vy
    cartesian_position_lsb_nm: float = 1.0 / 256.0  # I048/042 X/Y
    time_lsb_s: float = 1.0 / 128.0  # Time of Day, 1/128 s since midnight
    flight_level_lsb: float = 1.0 / 4.0  # I048/090, 1/4 FL
    sector_lsb_deg: float = 360.0 / 256.0  # I034/020
    latlon_lsb_deg: float = 180.0 / (2 ** 23)  # I034/120
    collimation_range_lsb_nm: float = 1.0 / 128.0  # I034/090
    collimation_azimuth_lsb_deg: float = 360.0 / (2 ** 14)  # I034/090

    # Conversion constants
    NM_TO_METERS: float = 1852.0
    NM_S_TO_KNOTS: float = 3600.0


DEFAULT_SCALING = ScalingConfig()


@dataclass
class DecoderConfig:
    """Category registry + item decoder table handed to the record decoder."""
    registry: "CategoryRegistry"
    table: "ItemDecoderTable"
    scaling: ScalingConfig = field(default=DEFAULT_SCALING)

    @classmethod
    def default(cls, scaling: Optional[ScalingConfig] = None) -> "DecoderConfig":
        """Build a fresh, independent configuration with CAT034 and CAT048."""
        # Imported here: the decoder modules import ScalingConfig from this module
        from asterix_stream.decoders.category_registry import default_category_registry
        from asterix_stream.decoders.item_decoder_table import default_decoder_table

        scaling = scaling or DEFAULT_SCALING
        return cls(
            registry=default_category_registry(),
            table=default_decoder_table(scaling),
            scaling=scaling,
        )
