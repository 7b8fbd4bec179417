import json

import pandas as pd
import pytest

from asterix_stream.decoders.stream_decoder import decode_stream
from asterix_stream.exporters.record_exporter import RecordExporter

CAT048_RECORD = bytes([
    0x30, 0x00, 0x0F,
    0xA1, 0x20,  # I048/010, I048/040, then I048/161
    0x12, 0x34,
    0x0A, 0x00, 0x40, 0x00,
    0x01, 0x23,
    0xBE, 0xEF,  # Undecoded tail
])
CAT034_RECORD = bytes([
    0x22, 0x00, 0x0B,
    0xF0,  # I034/010, /000, /030, /020
    0x12, 0x34,
    0x02,
    0x07, 0x08, 0x00,
    0x40,
])
UNKNOWN_RECORD = bytes([0x99, 0x00, 0x05, 0x00, 0xAA])


@pytest.fixture
def records():
    return list(decode_stream(CAT048_RECORD + UNKNOWN_RECORD))


class TestRecordsToDataFrame:
    def test_columns(self, records):
        df = RecordExporter.records_to_dataframe(records)

        assert list(df.columns) == RecordExporter.ALL_COLUMNS
        assert len(df) == 2

    def test_cat048_row(self, records):
        df = RecordExporter.records_to_dataframe(records)
        row = df.iloc[0]

        assert row['CAT'] == 48
        assert row['OFFSET'] == 0
        assert row['LEN'] == 15
        assert row['SAC'] == 0x12
        assert row['SIC'] == 0x34
        assert row['RHO'] == pytest.approx(10.0)
        assert row['THETA'] == pytest.approx(90.0)
        assert row['TN'] == 291
        assert row['DIAG'] == 'tail'
        assert pd.isna(row['FL'])

    def test_unknown_category_row(self, records):
        df = RecordExporter.records_to_dataframe(records)
        row = df.iloc[1]

        assert row['CAT'] == 0x99
        assert row['OFFSET'] == len(CAT048_RECORD)
        assert row['DIAG'] == 'unknown_category_payload'
        assert pd.isna(row['SAC'])

    def test_cat034_row(self):
        records = list(decode_stream(CAT034_RECORD))
        df = RecordExporter.records_to_dataframe(records)
        row = df.iloc[0]

        assert row['CAT'] == 34
        assert row['MSG_TYPE'] == 'Sector crossing message'
        assert row['Time_sec'] == pytest.approx(3600.0)
        assert row['SECTOR'] == pytest.approx(90.0)
        assert pd.isna(row['DIAG'])

    def test_dtypes(self, records):
        df = RecordExporter.records_to_dataframe(records)

        assert str(df['SAC'].dtype) == 'Int64'
        assert df['RHO'].dtype == 'float64'

    def test_empty(self):
        df = RecordExporter.records_to_dataframe([])

        assert df.empty
        assert list(df.columns) == RecordExporter.ALL_COLUMNS


class TestFileExport:
    def test_export_to_csv(self, records, tmp_path):
        output = tmp_path / "records.csv"

        RecordExporter.export_to_csv(RecordExporter.records_to_dataframe(records), output)

        df = pd.read_csv(output)
        assert len(df) == 2
        assert list(df.columns) == RecordExporter.ALL_COLUMNS

    def test_write_jsonl(self, records, tmp_path):
        output = tmp_path / "records.jsonl"

        count = RecordExporter.write_jsonl(records, output)

        lines = output.read_text(encoding='utf-8').splitlines()
        assert count == len(lines) == 2
        first = json.loads(lines[0])
        assert first["category"] == 48
        assert first["fspec_hex"] == "a120"
        assert first["items"]["I048/010"] == {"sac": 18, "sic": 52}
        assert first["diagnostics"] == {"tail": "beef"}
