import logging
from typing import Iterator, Optional, Sequence

from asterix_stream.config import DecoderConfig
from asterix_stream.decoders.record_decoder import RecordDecoder
from asterix_stream.models.record import Record

logger = logging.getLogger(__name__)


def decode_stream(data: Sequence[int], config: Optional[DecoderConfig] = None) -> Iterator[Record]:
    """
    Decode records lazily from a buffer of concatenated ASTERIX records.

    Stream desync errors (TruncatedHeader, TruncatedFSPEC, TruncatedRecordBody)
    propagate and end the iteration; records already yielded stay valid.
    """
    decoder = RecordDecoder(config)
    offset = 0
    while offset < len(data):
        record, offset = decoder.decode_record(data, offset)
        yield record


class AsterixStreamDecoder:
    """Stream decoder that keeps counters over the records it has produced."""

    def __init__(self, config: Optional[DecoderConfig] = None) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.config = config or DecoderConfig.default()
        self.records_decoded = 0
        self.records_with_diagnostics = 0

    def decode(self, data: Sequence[int]) -> Iterator[Record]:
        self.logger.debug("Decoding buffer of %d bytes", len(data))
        for record in decode_stream(data, self.config):
            self.records_decoded += 1
            if not record.is_complete:
                self.records_with_diagnostics += 1
            yield record
        self.logger.info(
            "Decoded %d records (%d with diagnostics)",
            self.records_decoded, self.records_with_diagnostics,
        )
