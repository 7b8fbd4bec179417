from enum import Enum, IntEnum


class Category(Enum):
    """ASTERIX Categories with a registered UAP"""
    CAT034 = 34
    CAT048 = 48


class CAT048Item:
    """ASTERIX Category 048 - Monoradar Target Reports (UAP order)"""

    # FSPEC octet 1
    DATA_SOURCE_IDENTIFIER = "I048/010"  # 2 bytes fixed
    TARGET_REPORT_DESCRIPTOR = "I048/020"  # Variable
    MEASURED_POSITION_POLAR = "I048/040"  # 4 bytes fixed
    MODE_3A_CODE = "I048/070"  # 2 bytes fixed
    FLIGHT_LEVEL = "I048/090"  # 2 bytes fixed
    RADAR_PLOT_CHARACTERISTICS = "I048/130"  # Compound, kept raw
    TRACK_VELOCITY_POLAR = "I048/220"  # 4 bytes fixed

    # FSPEC octet 2
    AIRCRAFT_ADDRESS = "I048/240"  # 3 bytes fixed
    MODE_S_MB_DATA = "I048/250"  # Repetitive, kept raw
    TRACK_NUMBER = "I048/161"  # 2 bytes fixed
    MEASURED_POSITION_CARTESIAN = "I048/042"  # 4 bytes fixed
    TRACK_VELOCITY_CARTESIAN = "I048/200"  # 4 bytes fixed
    TRACK_STATUS = "I048/170"  # Variable, kept raw
    WARNING_ERROR_CONDITIONS = "I048/030"  # Variable, kept raw

    # FSPEC octet 3
    MODE_3A_CONFIDENCE = "I048/080"
    MODE_C_CODE_CONFIDENCE = "I048/100"
    HEIGHT_3D_RADAR = "I048/110"
    RADIAL_DOPPLER_SPEED = "I048/120"
    TIME_OF_DAY = "I048/140"  # 3 bytes fixed
    COMMUNICATIONS_ACAS = "I048/230"

    # FSPEC octet 4 (edition dependent extras)
    ACAS_RESOLUTION_ADVISORY = "I048/260"
    MODE_1_CODE = "I048/055"
    MODE_2_CODE = "I048/065"
    MODE_1_CONFIDENCE = "I048/071"
    MODE_2_CONFIDENCE = "I048/072"
    MODE_3A_CODE_CONFIDENCE = "I048/073"
    MODE_S_ALTITUDE = "I048/075"

    UAP = (
        DATA_SOURCE_IDENTIFIER, TARGET_REPORT_DESCRIPTOR, MEASURED_POSITION_POLAR,
        MODE_3A_CODE, FLIGHT_LEVEL, RADAR_PLOT_CHARACTERISTICS, TRACK_VELOCITY_POLAR,
        AIRCRAFT_ADDRESS, MODE_S_MB_DATA, TRACK_NUMBER, MEASURED_POSITION_CARTESIAN,
        TRACK_VELOCITY_CARTESIAN, TRACK_STATUS, WARNING_ERROR_CONDITIONS,
        MODE_3A_CONFIDENCE, MODE_C_CODE_CONFIDENCE, HEIGHT_3D_RADAR,
        RADIAL_DOPPLER_SPEED, TIME_OF_DAY, COMMUNICATIONS_ACAS,
        ACAS_RESOLUTION_ADVISORY, MODE_1_CODE, MODE_2_CODE, MODE_1_CONFIDENCE,
        MODE_2_CONFIDENCE, MODE_3A_CODE_CONFIDENCE, MODE_S_ALTITUDE,
    )


class CAT034Item:
    """ASTERIX Category 034 - Monoradar Service Messages (UAP order)"""

    # FSPEC octet 1
    DATA_SOURCE_IDENTIFIER = "I034/010"  # 2 bytes fixed
    MESSAGE_TYPE = "I034/000"  # 1 byte fixed
    TIME_OF_DAY = "I034/030"  # 3 bytes fixed
    SECTOR_NUMBER = "I034/020"  # 1 byte fixed
    ANTENNA_ROTATION_PERIOD = "I034/041"  # 2 bytes fixed
    SYSTEM_CONFIGURATION_STATUS = "I034/050"  # Compound, kept raw
    SYSTEM_PROCESSING_MODE = "I034/060"  # Compound, kept raw

    # FSPEC octet 2
    MESSAGE_COUNT_VALUES = "I034/070"  # Repetitive, kept raw
    GENERIC_POLAR_WINDOW = "I034/100"  # 8 bytes fixed
    DATA_FILTER = "I034/110"  # 1 byte fixed
    POSITION_3D_DATA_SOURCE = "I034/120"  # 8 bytes fixed
    COLLIMATION_ERROR = "I034/090"  # 2 bytes fixed

    UAP = (
        DATA_SOURCE_IDENTIFIER, MESSAGE_TYPE, TIME_OF_DAY, SECTOR_NUMBER,
        ANTENNA_ROTATION_PERIOD, SYSTEM_CONFIGURATION_STATUS, SYSTEM_PROCESSING_MODE,
        MESSAGE_COUNT_VALUES, GENERIC_POLAR_WINDOW, DATA_FILTER,
        POSITION_3D_DATA_SOURCE, COLLIMATION_ERROR,
    )


class CAT034MessageType(IntEnum):
    """I034/000 - Message Type"""
    NORTH_MARKER = 1
    SECTOR_CROSSING = 2
    GEOGRAPHICAL_FILTERING = 3
    JAMMING_STROBE = 4
    SOLAR_STORM = 5


MESSAGE_TYPE_LABELS = {
    CAT034MessageType.NORTH_MARKER: "North Marker message",
    CAT034MessageType.SECTOR_CROSSING: "Sector crossing message",
    CAT034MessageType.GEOGRAPHICAL_FILTERING: "Geographical filtering message",
    CAT034MessageType.JAMMING_STROBE: "Jamming Strobe message",
    CAT034MessageType.SOLAR_STORM: "Solar Storm message",
}

# I034/110 - Data Filter (TYP)
DATA_FILTER_LABELS = {
    0: "Invalid value",
    1: "Filter for Weather data",
    2: "Filter for Jamming Strobe",
    3: "Filter for PSR data",
    4: "Filter for SSR/Mode S data",
    5: "Filter for SSR/Mode S + PSR data",
    6: "Enhanced Surveillance data",
    7: "Filter for PSR+Enhanced Surveillance data",
    8: "Filter for PSR+Enhanced Surveillance + SSR/Mode S data not in Area of Prime Interest",
    9: "Filter for PSR+Enhanced Surveillance + all SSR/Mode S data",
}
