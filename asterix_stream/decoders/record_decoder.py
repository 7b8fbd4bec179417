from typing import Optional, Sequence, Tuple

from asterix_stream.config import DecoderConfig
from asterix_stream.decoders.asterix_decoder_base import AsterixDecoderBase
from asterix_stream.decoders.fspec import Fspec, parse_fspec
from asterix_stream.errors import (
    BufferBoundsError,
    InvalidRecordLength,
    ItemTruncatedError,
    TruncatedHeader,
    TruncatedRecordBody,
)
from asterix_stream.models import record as diag
from asterix_stream.models.record import Record
from asterix_stream.utils.byte_primitives import read_u16, to_hex

HEADER_LENGTH = 3  # CAT (1 byte) + LEN (2 bytes)


class RecordDecoder(AsterixDecoderBase):
    """
    Decodes one ASTERIX record: header, FSPEC, then the data items.

    Any item that cannot be placed with certainty (excess FSPEC bit, no
    decoder, truncated item, item past the declared length) stops the item
    walk for that record only. The declared length always tells where the
    next record starts, so the stream keeps going.
    """

    def __init__(self, config: Optional[DecoderConfig] = None) -> None:
        super().__init__()
        self.config = config or DecoderConfig.default()

    def decode_record(self, data: Sequence[int], offset: int) -> Tuple[Record, int]:
        """Returns (record, offset of the next record)."""
        # ---- ReadHeader ----
        if offset + HEADER_LENGTH > len(data):
            raise TruncatedHeader(offset)

        category = data[offset]
        length = read_u16(data, offset + 1)
        if length < HEADER_LENGTH:
            # The next record would start inside this header
            raise InvalidRecordLength(offset, length)
        end = offset + length
        if end > len(data):
            raise TruncatedRecordBody(offset, length, len(data) - offset)

        # ---- ReadFSPEC ----
        fspec = parse_fspec(data, offset + HEADER_LENGTH)
        self.logger.debug(
            "CAT%03d record at %d: len=%d, fspec=%s, frns=%s",
            category, offset, length, fspec.hex, fspec.frns(),
        )

        record = Record(
            category=category,
            length=length,
            fspec_hex=fspec.hex,
            block_offset=offset,
        )

        uap = self.config.registry.lookup(category)
        if uap is None:
            # ---- UnknownCategory ----
            # Without a UAP no item boundary is knowable: keep the payload raw
            record.diagnostics[diag.UNKNOWN_CATEGORY_PAYLOAD] = self._hex_range(data, fspec.end_offset, end)
            self.logger.warning("Unknown category %d at offset %d, payload kept raw", category, offset)
            return record, end

        # ---- WalkItems ----
        cursor = self._walk_items(data, record, fspec, uap, end)

        # Remaining bytes (e.g. the walk stopped early) are kept as raw tail
        if cursor < end:
            record.diagnostics[diag.TAIL] = self._hex_range(data, cursor, end)
            self.logger.debug("CAT%03d record at %d: %d undecoded byte(s)", category, offset, end - cursor)

        return record, end

    def _walk_items(self, data: Sequence[int], record: Record, fspec: Fspec,
                    uap: Tuple[str, ...], end: int) -> int:
        """Decode items in FSPEC order; returns the cursor where the walk stopped."""
        category = record.category
        cursor = fspec.end_offset

        for index, present in enumerate(fspec.bits):
            if not present:
                continue

            if index >= len(uap):
                # The FSPEC tail cannot be trusted to align with this UAP
                record.diagnostics[diag.EXCESS_FSPEC_BIT] = True
                self.logger.warning(
                    "CAT%03d record at %d: FSPEC bit FRN %d beyond UAP (%d items), walk stopped",
                    category, record.block_offset, index + 1, len(uap),
                )
                break

            item_id = uap[index]
            decoder = self.config.table.lookup(category, item_id)
            if decoder is None:
                # Length of an undecoded item is unknowable
                record.diagnostics[diag.MISSING_DECODER] = {
                    "item": item_id,
                    "note": "No decoder; parsing stopped to avoid misalignment.",
                }
                self.logger.warning("No decoder for %s, walk stopped", item_id)
                break

            try:
                decoded = decoder(data, cursor)
            except (ItemTruncatedError, BufferBoundsError) as exc:
                record.diagnostics[diag.DECODE_ERROR] = {"item": item_id, "message": str(exc)}
                self.logger.warning("Failed to decode %s at offset %d: %s", item_id, cursor, exc)
                break

            if cursor + decoded.length > end:
                # The declared record length is authoritative
                record.diagnostics[diag.OVERFLOW] = {
                    "item": item_id,
                    "note": f"Item overflowed record length ({cursor + decoded.length - end} byte(s) past end)",
                }
                self.logger.warning("Item %s overflowed record ending at %d, walk stopped", item_id, end)
                cursor = end
                break

            record.items[item_id] = decoded.value
            cursor += decoded.length

        return cursor

    @staticmethod
    def _hex_range(data: Sequence[int], start: int, end: int) -> str:
        if start >= end:
            return ""
        return to_hex(data, start, end - start)
