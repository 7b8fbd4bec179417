import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from asterix_stream.decoders.asterix_file_reader import AsterixFileReader
from asterix_stream.errors import StreamDesyncError
from asterix_stream.exporters.record_exporter import RecordExporter


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Decode a raw ASTERIX capture (CAT034 + CAT048)")
    parser.add_argument("input", type=Path, help="Capture file with concatenated ASTERIX records")
    parser.add_argument("--jsonl", type=Path, help="Write one JSON record per line")
    parser.add_argument("--csv", type=Path, help="Write a flattened CSV table")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    # ============================================================
    # LOGGING CONFIGURATION
    # ============================================================
    log_level = getattr(logging, args.log_level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("asterix_stream").setLevel(log_level)

    print(f"\n{'=' * 60}")
    print("ASTERIX Stream Decoder")
    print(f"{'=' * 60}")
    print(f"Input file: {args.input}")
    print(f"{'=' * 60}\n")

    # ============================================================
    # STEP 1: READ & DECODE
    # ============================================================
    reader = AsterixFileReader(str(args.input))
    records = []
    exit_code = 0
    start_time = time.perf_counter()
    try:
        for record in reader.read_records():
            records.append(record)
    except StreamDesyncError as exc:
        # Records decoded before the desync are still exported
        logging.getLogger(__name__).error("Stream decoding stopped: %s", exc)
        exit_code = 1
    elapsed_time = time.perf_counter() - start_time

    decoder = reader.stream_decoder
    print(f"Decoded {len(records):,} records in {elapsed_time:.4f}s")
    if elapsed_time > 0:
        print(f"Throughput: {len(records) / elapsed_time:.2f} records/sec")
    print(f"Records with diagnostics: {decoder.records_with_diagnostics:,}")

    # ============================================================
    # STEP 2: EXPORT
    # ============================================================
    if args.jsonl:
        count = RecordExporter.write_jsonl(records, args.jsonl)
        print(f"Wrote {count:,} records to {args.jsonl}")

    if args.csv:
        df = RecordExporter.records_to_dataframe(records)
        RecordExporter.export_to_csv(df, args.csv)
        print(f"Exported {len(df):,} rows to {args.csv}")

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
