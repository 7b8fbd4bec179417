import json
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from asterix_stream.models.record import Record
from asterix_stream.types.enums import CAT034Item, CAT048Item, Category


class RecordExporter:
    """
    Export decoded records to a pandas DataFrame (one row per record)
    or to JSON lines (one record object per line).
    """

    ALL_COLUMNS = [
        # Common identification
        'CAT',  # ASTERIX Category
        'OFFSET',  # Record offset in the decoded buffer
        'LEN',  # Declared record length
        'SAC',  # System Area Code
        'SIC',  # System Identification Code
        'Time_sec',  # Time in seconds from midnight

        # CAT048 target reports
        'RHO',  # Slant range (NM)
        'THETA',  # Azimuth angle (degrees)
        'X_NM',  # Cartesian position (NM)
        'Y_NM',
        'Mode3/A',  # Mode 3/A code (octal)
        'FL',  # Flight Level
        'TA',  # Target Address (24-bit ICAO address, hex)
        'TN',  # Track Number
        'GS_kt',  # Ground speed (kt)
        'HDG',  # Heading (deg)
        'TYP',  # Detection type
        'SIM',  # Simulated target

        # CAT034 service messages
        'MSG_TYPE',  # Message type label
        'SECTOR',  # Sector azimuth (deg)
        'RPM',  # Antenna rotation speed

        'DIAG',  # Diagnostics present, comma separated
    ]

    INT_COLUMNS = ['CAT', 'OFFSET', 'LEN', 'SAC', 'SIC', 'TN', 'TYP']
    FLOAT_COLUMNS = ['Time_sec', 'RHO', 'THETA', 'X_NM', 'Y_NM', 'FL', 'GS_kt', 'HDG', 'SECTOR', 'RPM']

    @staticmethod
    def records_to_dataframe(records: Iterable[Record]) -> pd.DataFrame:
        # Build by columns to avoid expensive list-of-dicts
        columns = RecordExporter.ALL_COLUMNS
        data_cols = {col: [] for col in columns}

        for record in records:
            row = {col: None for col in columns}
            row['CAT'] = record.category
            row['OFFSET'] = record.block_offset
            row['LEN'] = record.length

            if record.category == Category.CAT048.value:
                RecordExporter._process_cat048(record, row)
            elif record.category == Category.CAT034.value:
                RecordExporter._process_cat034(record, row)

            if record.diagnostics:
                row['DIAG'] = ','.join(sorted(record.diagnostics))

            for col in columns:
                data_cols[col].append(row[col])

        df = pd.DataFrame(data_cols, columns=columns)
        return RecordExporter._downcast_dtypes(df)

    @staticmethod
    def _process_cat048(record: Record, row: dict) -> None:
        items = record.items

        source = items.get(CAT048Item.DATA_SOURCE_IDENTIFIER)
        if source:
            row['SAC'] = source['sac']
            row['SIC'] = source['sic']

        tod = items.get(CAT048Item.TIME_OF_DAY)
        if tod:
            row['Time_sec'] = tod['seconds']

        polar = items.get(CAT048Item.MEASURED_POSITION_POLAR)
        if polar:
            row['RHO'] = polar['range_nm']
            row['THETA'] = polar['bearing_deg']

        cartesian = items.get(CAT048Item.MEASURED_POSITION_CARTESIAN)
        if cartesian:
            row['X_NM'] = cartesian['x_nm']
            row['Y_NM'] = cartesian['y_nm']

        mode_3a = items.get(CAT048Item.MODE_3A_CODE)
        if mode_3a:
            row['Mode3/A'] = mode_3a['code_octal']

        flight_level = items.get(CAT048Item.FLIGHT_LEVEL)
        if flight_level:
            row['FL'] = flight_level['flightLevel']

        address = items.get(CAT048Item.AIRCRAFT_ADDRESS)
        if address:
            row['TA'] = address['icao24']

        if CAT048Item.TRACK_NUMBER in items:
            row['TN'] = items[CAT048Item.TRACK_NUMBER]

        velocity = items.get(CAT048Item.TRACK_VELOCITY_POLAR)
        if velocity:
            row['GS_kt'] = velocity['kts']
            row['HDG'] = velocity['heading_deg']

        descriptor = items.get(CAT048Item.TARGET_REPORT_DESCRIPTOR)
        if descriptor:
            row['TYP'] = descriptor['detectionType']
            row['SIM'] = descriptor['simulated']

    @staticmethod
    def _process_cat034(record: Record, row: dict) -> None:
        items = record.items

        source = items.get(CAT034Item.DATA_SOURCE_IDENTIFIER)
        if source:
            row['SAC'] = source['sac']
            row['SIC'] = source['sic']

        tod = items.get(CAT034Item.TIME_OF_DAY)
        if tod:
            row['Time_sec'] = tod['seconds']

        message_type = items.get(CAT034Item.MESSAGE_TYPE)
        if message_type:
            row['MSG_TYPE'] = message_type['label']

        sector = items.get(CAT034Item.SECTOR_NUMBER)
        if sector:
            row['SECTOR'] = sector['sector_deg']

        rotation = items.get(CAT034Item.ANTENNA_ROTATION_PERIOD)
        if rotation:
            row['RPM'] = rotation['rpm']

    @staticmethod
    def _downcast_dtypes(df: pd.DataFrame) -> pd.DataFrame:
        if df.empty:
            return df

        for col in RecordExporter.INT_COLUMNS:
            df[col] = pd.to_numeric(df[col], errors='coerce').astype('Int64')

        for col in RecordExporter.FLOAT_COLUMNS:
            df[col] = pd.to_numeric(df[col], errors='coerce').astype('float64')

        return df

    @staticmethod
    def export_to_csv(df: pd.DataFrame, output_path: Union[str, Path], na_rep: str = 'N/A') -> None:
        df.to_csv(output_path, index=False, na_rep=na_rep)

    @staticmethod
    def write_jsonl(records: Iterable[Record], output_path: Union[str, Path]) -> int:
        """Write one JSON object per record; returns the number of records written."""
        count = 0
        with open(output_path, 'w', encoding='utf-8') as handle:
            for record in records:
                handle.write(json.dumps(record.to_dict()) + "\n")
                count += 1
        return count
